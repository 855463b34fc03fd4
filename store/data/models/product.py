#store/data/models/product.py
from sqlalchemy import Column, Integer, ForeignKey, Text, Numeric, DateTime
from sqlalchemy.orm import relationship

from store.data.database import Base, utcnow


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)

    title = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    about = Column(Text, nullable=True)
    img = Column(Text, nullable=True)

    created = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    category = relationship("CategoryModel", back_populates="products")
