from sqlalchemy import Column, Integer, String, Date, ForeignKey, UniqueConstraint
from database.db import Base

class Attendance(Base):
    __tablename__ = "attendance"  # one event per (student, meeting date)
    __table_args__ = (UniqueConstraint("student_id", "meeting_date", name="uq_attendance_student_date"),)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    meeting_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False)             # Present, Sick, ExcusedAbsence, UnexcusedAbsence
