# store/data/models/category.py
from sqlalchemy import Column, Integer, Text, DateTime
from sqlalchemy.orm import relationship

from store.data.database import Base, utcnow

class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    title = Column(Text, nullable=False, unique=True)

    created = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    products = relationship("ProductModel", back_populates="category")
