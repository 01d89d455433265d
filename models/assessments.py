from sqlalchemy import Column, Integer, String, Date, ForeignKey
from database.db import Base

class Assessment(Base):
    __tablename__ = "assessments"  # one graded event (quiz, project, exam)

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    assessment_name = Column(String(150), nullable=False)
    assessment_date = Column(Date, nullable=False)
    kind = Column(String(20), nullable=False)               # formative | summative

    # ✅ nullable: uncategorized assessments do not count towards the final grade
    weight_category_id = Column(Integer, ForeignKey("weight_categories.id", ondelete="SET NULL"), nullable=True)
