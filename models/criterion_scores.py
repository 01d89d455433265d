from sqlalchemy import Column, Integer, Float, ForeignKey, UniqueConstraint
from database.db import Base

class CriterionScore(Base):
    __tablename__ = "criterion_scores"  # raw per-student per-criterion scores
    __table_args__ = (UniqueConstraint("student_id", "criterion_id", name="uq_score_student_criterion"),)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    criterion_id = Column(Integer, ForeignKey("criteria.id", ondelete="CASCADE"), nullable=False, index=True)
    score = Column(Float, nullable=False)                   # 0..max_score; a missing row means "not graded"
