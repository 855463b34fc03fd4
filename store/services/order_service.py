# store/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from store.data.models.order import OrderModel
from store.domain.result import Ok, ValidationFailed, Result
from store.domain.schemas import FieldError
from store.domain.validation import validate_checkout
from store.repos.cart_repo import CartRepo
from store.repos.order_repo import OrderRepo
from store.services.notification_service import NotificationService
from store.utils.sanitize import sanitize
from store.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Orders are created from the caller's cart and are read-only afterwards.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.notification_service = NotificationService()

    def _to_dict(self, order: OrderModel) -> Dict[str, Any]:
        lines = self.repo.get_order_lines(order.id)
        return {
            "id": order.id,
            "user_id": order.user_id,
            "name": order.name,
            "address": order.address,
            "total": sum((line.total for line in lines), Decimal("0.00")),
            "items": lines,
            "created": order.created,
            "updated": order.updated,
        }

    def checkout(self, user_id: int, fields: Dict[str, Any]) -> Result:
        """
        Turn the current cart into an order.

        1. validate name and address
        2. the cart must not be empty
        3. create the order and attach the cart lines to it
        4. send the notification (async)
        """
        errors = validate_checkout(fields)
        if errors:
            return ValidationFailed(errors)

        lines = self.cart_repo.get_cart_lines(user_id)
        if not lines:
            return ValidationFailed([FieldError(field="cart", message="Cart is empty")])

        order = OrderModel(
            user_id=user_id,
            name=sanitize(fields["name"].strip()),
            address=sanitize(fields["address"].strip()),
        )
        created = self.repo.create_order(order, lines)

        logger.info(f"Order {created.id} created from {len(lines)} cart lines of user {user_id}")

        self.notification_service.send_order_notification(user_id, created.id)

        return Ok(self._to_dict(created))

    def get_orders(self, user_id: int, is_admin: bool = False) -> List[Dict[str, Any]] | None:
        """Admins see every order, everyone else only their own. None when there are none."""
        orders = self.repo.list_orders(None if is_admin else user_id)
        if not orders:
            return None
        return [self._to_dict(order) for order in orders]
