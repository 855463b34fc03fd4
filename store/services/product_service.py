# store/services/product_service.py
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List

from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from store.data.models.product import ProductModel
from store.domain.result import Ok, NotFound, ValidationFailed, Result
from store.domain.schemas import FieldError
from store.domain.validation import validate_product
from store.repos.product_repo import ProductRepo
from store.utils.sanitize import supplied_values
from store.utils.logging import get_logger

logger = get_logger(__name__)

CENTS = Decimal("0.01")

PRICE_OUT_OF_RANGE = FieldError(field="price", message="Price is out of range")

#payload key -> column
CREATE_COLUMNS = {
    "categoryId": "category_id",
    "title": "title",
    "price": "price",
    "about": "about",
    "img": "img",
}
PATCH_COLUMNS = {
    "title": "title",
    "price": "price",
    "about": "about",
    "img": "img",
}


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


class ProductService:
    """
    Products: listing with filters, single read and validated writes.
    Every write returns a Result (Ok / ValidationFailed / NotFound).
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    #query
    def list_products(
        self,
        category_id: int | None = None,
        search: str | None = None,
        order: str = "desc",
        offset: int = 0,
        limit: int | None = None,
    ) -> List[ProductModel]:
        # anything but "desc" sorts ascending; a missing order means newest first
        order = "desc" if (order or "desc").lower() == "desc" else "asc"
        return self.repo.list_products(
            category_id=category_id,
            search=search or None,
            order=order,
            offset=offset,
            limit=limit,
        )

    def read_product(self, product_id: int) -> ProductModel | None:
        return self.repo.get_product(product_id)

    @staticmethod
    def _priced(values: Dict[str, Any]) -> Dict[str, Any]:
        if "price" in values:
            values["price"] = to_money(values["price"])
        return values

    #commands
    def create_product(self, fields: Dict[str, Any]) -> Result:
        errors = validate_product(fields)
        if errors:
            return ValidationFailed(errors)

        try:
            values = self._priced(supplied_values(fields, CREATE_COLUMNS))
            created = self.repo.create_product(values)
        except (InvalidOperation, DataError):
            self.repo.rollback()
            return ValidationFailed([PRICE_OUT_OF_RANGE])
        except IntegrityError:
            # products.category_id is the only constraint a valid payload can break
            self.repo.rollback()
            logger.warning(f"Category {fields.get('categoryId')} does not exist")
            return ValidationFailed([
                FieldError(field="categoryId", message="Category does not exist"),
            ])

        logger.info(f"Created product {created.id}")
        return Ok(created)

    def update_product(self, product_id: int, fields: Dict[str, Any]) -> Result:
        errors = validate_product(fields, patching=True, with_category=False)
        if errors:
            return ValidationFailed(errors)

        try:
            values = self._priced(supplied_values(fields, PATCH_COLUMNS))
            rowcount = self.repo.update_product(product_id, values)
        except (InvalidOperation, DataError):
            self.repo.rollback()
            return ValidationFailed([PRICE_OUT_OF_RANGE])

        if rowcount == 0:
            return NotFound()

        logger.info(f"Updated product {product_id}: {sorted(values)}")
        return Ok(self.repo.get_product(product_id))

    def delete_product(self, product_id: int) -> bool:
        deleted = self.repo.delete_product(product_id) == 1
        if deleted:
            logger.info(f"Deleted product {product_id}")
        return deleted
