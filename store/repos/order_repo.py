# store/repos/order_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from store.data.models.order import OrderModel
from store.data.models.product_order import ProductOrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel, lines: List[ProductOrderModel]) -> OrderModel:
        # order and its lines are committed together
        self.db.add(order)
        self.db.flush()
        for line in lines:
            line.order_id = order.id
        self.db.commit()
        self.db.refresh(order)
        return order

    def list_orders(self, user_id: int | None = None) -> List[OrderModel]:
        stmt = select(OrderModel).order_by(OrderModel.id)
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        return list(self.db.execute(stmt).scalars().all())

    def get_order_lines(self, order_id: int) -> List[ProductOrderModel]:
        stmt = (
            select(ProductOrderModel)
            .where(ProductOrderModel.order_id == order_id)
            .order_by(ProductOrderModel.id)
            .execution_options(populate_existing=True)
        )
        return list(self.db.execute(stmt).scalars().all())
