# store/repos/cart_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from store.data.models.product_order import ProductOrderModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_lines(self, user_id: int) -> List[ProductOrderModel]:
        #only lines that have not been checked out yet
        stmt = (
            select(ProductOrderModel)
            .where(
                ProductOrderModel.user_id == user_id,
                ProductOrderModel.order_id.is_(None),
            )
            .order_by(ProductOrderModel.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def add_cart_line(self, line: ProductOrderModel) -> ProductOrderModel:
        self.db.add(line)
        self.db.commit()
        self.db.refresh(line)
        return line

    def rollback(self):
        self.db.rollback()
