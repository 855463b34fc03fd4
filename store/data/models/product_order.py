from sqlalchemy import Column, Integer, ForeignKey, Numeric, DateTime
from sqlalchemy.orm import relationship

from store.data.database import Base, utcnow


class ProductOrderModel(Base):
    """A cart line. `order_id` stays empty until the cart is checked out."""

    __tablename__ = "product_orders"

    id = Column(Integer, primary_key=True)
    # checked out lines outlive their product, open cart lines are removed with it
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True, index=True)

    quantity = Column(Integer, nullable=False)
    total = Column(Numeric(14, 2), nullable=False)

    created = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    product = relationship("ProductModel")
    order = relationship("OrderModel", back_populates="lines")
