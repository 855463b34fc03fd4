# store/repos/category_repo.py
from typing import Any, Dict, List

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from store.data.database import utcnow
from store.data.models.category import CategoryModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> List[CategoryModel]:
        stmt = select(CategoryModel).order_by(CategoryModel.id)
        return list(self.db.execute(stmt).scalars().all())

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id, populate_existing=True)

    def create_category(self, values: Dict[str, Any]) -> CategoryModel:
        category = CategoryModel(**values)
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def update_category(self, category_id: int, values: Dict[str, Any]) -> int:
        result = self.db.execute(
            update(CategoryModel)
            .where(CategoryModel.id == category_id)
            .values(**values, updated=utcnow())
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount

    def delete_category(self, category_id: int) -> int:
        result = self.db.execute(
            delete(CategoryModel)
            .where(CategoryModel.id == category_id)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount

    def rollback(self):
        self.db.rollback()
