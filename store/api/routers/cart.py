#store/api/routers/cart.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from store.api.deps import require_authentication
from store.api.responses import validation_response
from store.data.database import get_db
from store.data.models.user import UserModel
from store.domain.result import ValidationFailed
from store.domain.schemas import AddToCartOut, CartOut
from store.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("", response_model=AddToCartOut, status_code=201)
def add_to_cart(
    payload: Dict[str, Any] = Body(...),
    user: UserModel = Depends(require_authentication),
    db: Session = Depends(get_db),
):
    # only productId and quantity are read, a client supplied price or total is ignored
    result = CartService(db).add_to_cart(
        user_id=user.id,
        product_id=payload.get("productId"),
        quantity=payload.get("quantity"),
    )
    if isinstance(result, ValidationFailed):
        return validation_response(result.errors)
    return result.item


@router.get("", response_model=CartOut)
def get_cart(
    user: UserModel = Depends(require_authentication),
    db: Session = Depends(get_db),
):
    cart = CartService(db).get_cart(user.id)
    if not cart:
        raise HTTPException(status_code=404, detail="Cart is empty")
    return cart
