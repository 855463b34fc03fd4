# store/domain/schemas.py
from pydantic import BaseModel, ConfigDict
from typing import Dict, List, Optional
from datetime import datetime


class FieldError(BaseModel):
    """One violated rule for one input field."""

    field: str
    message: str


class CategoryOut(BaseModel):
    id: int
    title: str
    created: Optional[datetime] = None
    updated: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    id: int
    category_id: Optional[int] = None
    title: str
    price: float
    about: Optional[str] = None
    img: Optional[str] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Link(BaseModel):
    href: str


class ProductPage(BaseModel):
    """Paged product listing (response)."""

    links: Dict[str, Link]
    items: List[ProductOut]


class CartLineOut(BaseModel):
    id: int
    product_id: Optional[int] = None
    user_id: int
    quantity: int
    total: float
    created: Optional[datetime] = None
    updated: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AddToCartOut(BaseModel):
    """Created cart line together with the product snapshot it was priced from."""

    cart: CartLineOut
    item: ProductOut


class CartOut(BaseModel):
    user_id: int
    items: List[CartLineOut]
    total: float


class OrderOut(BaseModel):
    id: int
    user_id: int
    name: str
    address: str
    total: float
    items: List[CartLineOut]
    created: Optional[datetime] = None
    updated: Optional[datetime] = None


class UserOut(BaseModel):
    """User as exposed over the API; the password digest never leaves the service."""

    id: int
    username: str
    email: Optional[str] = None
    admin: bool
    created: Optional[datetime] = None
    updated: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TokenOut(BaseModel):
    token: str


class RegisterOut(BaseModel):
    token: str
    identity: UserOut
