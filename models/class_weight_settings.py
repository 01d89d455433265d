from sqlalchemy import Column, Integer, Float, ForeignKey, UniqueConstraint
from database.db import Base

class ClassWeightSetting(Base):
    __tablename__ = "class_weight_settings"
    __table_args__ = (UniqueConstraint("class_id", "weight_category_id", name="uq_weight_class_category"),)

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    weight_category_id = Column(Integer, ForeignKey("weight_categories.id", ondelete="CASCADE"), nullable=False)
    weight_percent = Column(Float, nullable=False)          # 0..100, sums to 100 per class
