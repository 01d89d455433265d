from sqlalchemy import Column, Integer, String
from database.db import Base

class WeightCategory(Base):
    __tablename__ = "weight_categories"  # global grade components, e.g. "Tugas", "Ujian"

    id = Column(Integer, primary_key=True, index=True)
    category_name = Column(String(100), nullable=False, unique=True)
