from sqlalchemy import Column, Integer, String, Float, ForeignKey
from database.db import Base

class Criterion(Base):
    __tablename__ = "criteria"  # rubric lines (aspects) of an assessment

    id = Column(Integer, primary_key=True, index=True)
    assessment_id = Column(Integer, ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String(200), nullable=False)
    max_score = Column(Float, nullable=False)               # per-criterion ceiling, > 0
    order = Column("sort_order", Integer, nullable=False, default=0)
