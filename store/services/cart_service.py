from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from sqlalchemy.exc import DataError
from sqlalchemy.orm import Session

from store.data.models.product_order import ProductOrderModel
from store.domain.result import Ok, ValidationFailed, Result
from store.domain.schemas import FieldError
from store.domain.validation import validate_cart_line
from store.repos.cart_repo import CartRepo
from store.repos.product_repo import ProductRepo
from store.services.product_service import to_money
from store.utils.logging import get_logger

logger = get_logger(__name__)


def line_total(price, quantity: int) -> Decimal:
    """Cart line total in cents, always computed from the stored product price."""
    return to_money(Decimal(str(price)) * quantity)


class CartService:
    """
    Cart of a single user: the product_orders rows that are not yet attached
    to an order. Prices are read from the products table on every add,
    anything price-like in the request body is ignored.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.product_repo = ProductRepo(db)

    #query
    def get_cart(self, user_id: int) -> Dict[str, Any] | None:
        lines = self.repo.get_cart_lines(user_id)
        if not lines:
            return None

        return {
            "user_id": user_id,
            "items": lines,
            "total": sum((line.total for line in lines), Decimal("0.00")),
        }

    #commands
    def add_to_cart(self, user_id: int, product_id: Any, quantity: Any) -> Result:
        errors = validate_cart_line({"productId": product_id, "quantity": quantity})
        if errors:
            return ValidationFailed(errors)

        product = self.product_repo.get_product(product_id)
        if not product:
            return ValidationFailed([
                FieldError(field="product", message=f"Product {product_id} does not exist"),
            ])

        try:
            line = self.repo.add_cart_line(
                ProductOrderModel(
                    product_id=product.id,
                    user_id=user_id,
                    quantity=quantity,
                    total=line_total(product.price, quantity),
                )
            )
        except (InvalidOperation, DataError):
            self.repo.rollback()
            return ValidationFailed([
                FieldError(field="quantity", message="Line total is out of range"),
            ])

        logger.info(
            f"User {user_id} added {quantity} x product {product.id} to cart, "
            f"total {line.total}"
        )
        return Ok({"cart": line, "item": product})
