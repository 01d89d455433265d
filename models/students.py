from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # class roster

    id = Column(Integer, primary_key=True, index=True)                                   # student ID (PK)
    student_name = Column(String(100), nullable=False)                                   # student name
    external_id = Column(String(30))                                                     # school registry number (NIS/NISN)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
