# store/services/category_service.py
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from store.data.models.category import CategoryModel
from store.domain.result import Ok, NotFound, ValidationFailed, Result
from store.domain.schemas import FieldError
from store.domain.validation import validate_category
from store.repos.category_repo import CategoryRepo
from store.utils.sanitize import supplied_values
from store.utils.logging import get_logger

logger = get_logger(__name__)

COLUMNS = {"title": "title"}

DUPLICATE_TITLE = FieldError(field="title", message="Category with this title already exists")


class CategoryService:
    def __init__(self, db: Session):
        self.repo = CategoryRepo(db)

    def list_categories(self) -> List[CategoryModel]:
        return self.repo.list_categories()

    def read_category(self, category_id: int) -> CategoryModel | None:
        return self.repo.get_category(category_id)

    def create_category(self, fields: Dict[str, Any]) -> Result:
        errors = validate_category(fields)
        if errors:
            return ValidationFailed(errors)

        try:
            created = self.repo.create_category(supplied_values(fields, COLUMNS))
        except IntegrityError:
            self.repo.rollback()
            return ValidationFailed([DUPLICATE_TITLE])

        logger.info(f"Created category {created.id}")
        return Ok(created)

    def update_category(self, category_id: int, fields: Dict[str, Any]) -> Result:
        errors = validate_category(fields, patching=True)
        if errors:
            return ValidationFailed(errors)

        try:
            rowcount = self.repo.update_category(category_id, supplied_values(fields, COLUMNS))
        except IntegrityError:
            self.repo.rollback()
            return ValidationFailed([DUPLICATE_TITLE])

        if rowcount == 0:
            return NotFound()

        logger.info(f"Updated category {category_id}")
        return Ok(self.repo.get_category(category_id))

    def delete_category(self, category_id: int) -> bool:
        deleted = self.repo.delete_category(category_id) == 1
        if deleted:
            logger.info(f"Deleted category {category_id}")
        return deleted
