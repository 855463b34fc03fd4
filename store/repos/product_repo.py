# store/repos/product_repo.py
from typing import Any, Dict, List

from sqlalchemy import select, update, delete, or_
from sqlalchemy.orm import Session

from store.data.database import utcnow
from store.data.models.product import ProductModel
from store.data.models.product_order import ProductOrderModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(
        self,
        category_id: int | None = None,
        search: str | None = None,
        order: str = "desc",
        offset: int = 0,
        limit: int | None = None,
    ) -> List[ProductModel]:
        stmt = select(ProductModel)

        if category_id is not None:
            stmt = stmt.where(ProductModel.category_id == category_id)

        #search is scoped inside the category filter: category AND (title OR about)
        if search:
            stmt = stmt.where(
                or_(
                    ProductModel.title.contains(search, autoescape=True),
                    ProductModel.about.contains(search, autoescape=True),
                )
            )

        if order == "asc":
            stmt = stmt.order_by(ProductModel.created.asc(), ProductModel.id.asc())
        else:
            stmt = stmt.order_by(ProductModel.created.desc(), ProductModel.id.desc())

        stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        return list(self.db.execute(stmt).scalars().all())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id, populate_existing=True)

    def create_product(self, values: Dict[str, Any]) -> ProductModel:
        product = ProductModel(**values)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product_id: int, values: Dict[str, Any]) -> int:
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(**values, updated=utcnow())
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount

    def delete_product(self, product_id: int) -> int:
        # open cart lines go with the product; ordered lines keep their totals
        self.db.execute(
            delete(ProductOrderModel)
            .where(
                ProductOrderModel.product_id == product_id,
                ProductOrderModel.order_id.is_(None),
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(
            delete(ProductModel)
            .where(ProductModel.id == product_id)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount

    def rollback(self):
        self.db.rollback()
