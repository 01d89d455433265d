from sqlalchemy import Column, Integer, String
from database.db import Base

class Class(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)      # class ID (PK)
    class_name = Column(String(100), nullable=False)        # e.g. "VII-A"
    term = Column(String(30), nullable=False)               # academic year / semester, e.g. "2024/2025 Ganjil"
    teacher_id = Column(Integer, nullable=False, index=True)  # owning teacher (auth lives outside this service)
