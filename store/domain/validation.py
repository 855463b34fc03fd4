# store/domain/validation.py
"""
Field rules for incoming payloads.

Every validator takes the raw JSON object sent by the client and returns a
list of FieldError, in field order. An empty list means the payload is
acceptable. Validators never touch the database; rules that need a lookup
(product existence, username uniqueness) live in the services.
"""
import math
import re
from typing import Any, Dict, List

from store.domain.schemas import FieldError
from store.utils import settings

TITLE_MAX = 128
NAME_MAX = 128
ADDRESS_MAX = 255
USERNAME_MIN = 5
USERNAME_MAX = 64
EMAIL_MAX = 128
PASSWORD_MIN = 8
PASSWORD_MAX = 72  # bcrypt ignores everything past 72 bytes

# widths of the INTEGER and NUMERIC columns the values end up in
MAX_ID = 2**31 - 1
PRICE_MAX = 99_999_999.99
QUANTITY_MAX = 1000

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.@-]+$")
_EMAIL_RE = re.compile(r"^[^@\s<>&\"']+@[^@\s<>&\"']+\.[^@\s<>&\"']+$")

WEAK_PASSWORDS = frozenset({
    "password", "password1", "password123", "passw0rd", "p@ssw0rd",
    "12345678", "123456789", "1234567890", "87654321", "11111111",
    "00000000", "qwertyui", "qwerty123", "qwertyuiop", "1q2w3e4r",
    "asdfghjk", "iloveyou", "sunshine", "football", "baseball",
    "princess", "superman", "starwars", "welcome1", "letmein1",
    "trustno1", "admin123", "abc12345", "monkey123", "changeme",
})

Payload = Dict[str, Any]


def is_empty(value: Any) -> bool:
    """None, a missing key and the empty string all count as 'not supplied'."""
    return value is None or value == ""


def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _checked(fields: Payload, name: str, patching: bool) -> bool:
    # patching leaves absent fields untouched, so only supplied ones are checked
    return not patching or not is_empty(fields.get(name))


def _title_errors(fields: Payload, patching: bool) -> List[FieldError]:
    if not _checked(fields, "title", patching):
        return []
    title = fields.get("title")
    if not isinstance(title, str) or not 1 <= len(title) <= TITLE_MAX:
        return [FieldError(
            field="title",
            message=f"Title must be a string of 1 to {TITLE_MAX} characters",
        )]
    return []


def validate_category(fields: Payload, patching: bool = False) -> List[FieldError]:
    return _title_errors(fields, patching)


def validate_product(
    fields: Payload,
    patching: bool = False,
    with_category: bool = True,
) -> List[FieldError]:
    errors = _title_errors(fields, patching)

    if with_category and _checked(fields, "categoryId", patching):
        category_id = fields.get("categoryId")
        if not is_number(category_id) or not 0 <= category_id <= MAX_ID:
            errors.append(FieldError(
                field="categoryId",
                message=f"Category must be a number from 0 to {MAX_ID}",
            ))

    if _checked(fields, "price", patching):
        price = fields.get("price")
        if not is_number(price) or not 0 <= price <= PRICE_MAX:
            errors.append(FieldError(
                field="price",
                message=f"Price must be a number from 0 to {PRICE_MAX:.2f}",
            ))

    if _checked(fields, "about", patching):
        about = fields.get("about")
        if not isinstance(about, str) or len(about) < 1:
            errors.append(FieldError(
                field="about",
                message="About must be a non-empty string",
            ))

    # img is type checked even when patching
    if not isinstance(fields.get("img"), str):
        errors.append(FieldError(field="img", message="Image must be a string"))

    return errors


def validate_cart_line(fields: Payload) -> List[FieldError]:
    errors = []

    product_id = fields.get("productId")
    if not is_integer(product_id) or not 1 <= product_id <= MAX_ID:
        errors.append(FieldError(
            field="productId",
            message=f"Product id must be an integer from 1 to {MAX_ID}",
        ))

    quantity = fields.get("quantity")
    if not is_integer(quantity) or not 0 <= quantity <= QUANTITY_MAX:
        errors.append(FieldError(
            field="quantity",
            message=f"Quantity must be an integer from 0 to {QUANTITY_MAX}",
        ))

    return errors


def validate_checkout(fields: Payload) -> List[FieldError]:
    errors = []
    for name, limit in (("name", NAME_MAX), ("address", ADDRESS_MAX)):
        value = fields.get(name)
        if not isinstance(value, str) or not 1 <= len(value.strip()) <= limit:
            errors.append(FieldError(
                field=name,
                message=f"{name.capitalize()} must be a string of 1 to {limit} characters",
            ))
    return errors


def validate_registration(fields: Payload) -> List[FieldError]:
    """Format and strength rules for a new account. Uniqueness is checked by UserService."""
    errors = []
    username = fields.get("username")
    email = fields.get("email")

    if is_empty(username) and is_empty(email):
        errors.append(FieldError(
            field="username",
            message="Username or email is required",
        ))

    if not is_empty(username):
        if (
            not isinstance(username, str)
            or not USERNAME_MIN <= len(username) <= USERNAME_MAX
            or not _USERNAME_RE.match(username)
        ):
            errors.append(FieldError(
                field="username",
                message=(
                    f"Username must be {USERNAME_MIN} to {USERNAME_MAX} characters "
                    "of letters, digits and _.@-"
                ),
            ))

    if not is_empty(email):
        if (
            not isinstance(email, str)
            or not USERNAME_MIN <= len(email) <= EMAIL_MAX
            or not _EMAIL_RE.match(email)
        ):
            errors.append(FieldError(
                field="email",
                message="Email must be a valid email address",
            ))

    password = fields.get("password")
    if not isinstance(password, str) or len(password) < PASSWORD_MIN:
        errors.append(FieldError(
            field="password",
            message=f"Password must be at least {PASSWORD_MIN} characters",
        ))
    elif len(password.encode("utf-8")) > PASSWORD_MAX:
        errors.append(FieldError(
            field="password",
            message=f"Password must be at most {PASSWORD_MAX} bytes",
        ))
    elif settings.REJECT_WEAK_PASSWORDS and password.lower() in WEAK_PASSWORDS:
        errors.append(FieldError(
            field="password",
            message="Password is too common",
        ))

    return errors


def validate_admin_flag(fields: Payload) -> List[FieldError]:
    if not isinstance(fields.get("admin"), bool):
        return [FieldError(field="admin", message="Admin has to be a boolean")]
    return []
