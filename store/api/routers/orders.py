# store/api/routers/orders.py
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from store.api.deps import require_authentication
from store.api.responses import validation_response
from store.data.database import get_db
from store.data.models.user import UserModel
from store.domain.result import ValidationFailed
from store.domain.schemas import OrderOut
from store.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[OrderOut])
def get_orders(
    user: UserModel = Depends(require_authentication),
    db: Session = Depends(get_db),
):
    """
    Admins get every order, other users only their own.
    """
    orders = OrderService(db).get_orders(user.id, is_admin=user.admin)
    if not orders:
        raise HTTPException(status_code=404, detail="No orders found")
    return orders


@router.post("", response_model=OrderOut, status_code=201)
def checkout(
    payload: Dict[str, Any] = Body(...),
    user: UserModel = Depends(require_authentication),
    db: Session = Depends(get_db),
):
    """
    Creates an order from the caller's cart.
    """
    result = OrderService(db).checkout(user.id, payload)
    if isinstance(result, ValidationFailed):
        return validation_response(result.errors)
    return result.item
