from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from store.api.deps import require_authentication, require_admin
from store.api.responses import validation_response
from store.data.database import get_db
from store.data.models.user import UserModel
from store.domain.result import ValidationFailed, NotFound
from store.domain.schemas import UserOut, TokenOut, RegisterOut
from store.domain.validation import MAX_ID
from store.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _user_id(raw: str, caller: UserModel) -> int:
    if raw == "me":
        return caller.id
    try:
        value = int(raw)
    except ValueError:
        raise HTTPException(status_code=404, detail="Not found")
    if not -MAX_ID <= value <= MAX_ID:
        raise HTTPException(status_code=404, detail="Not found")
    return value


@router.post("/register", response_model=RegisterOut, status_code=201)
def register(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    result = UserService(db).register(payload)
    if isinstance(result, ValidationFailed):
        return validation_response(result.errors)
    return result.item


@router.post("/login", response_model=TokenOut)
def login(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    login_name = payload.get("username") or payload.get("email")
    token = UserService(db).login(login_name, payload.get("password", ""))
    if not token:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return {"token": token}


@router.get("", response_model=List[UserOut], dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_users()


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: str,
    caller: UserModel = Depends(require_authentication),
    db: Session = Depends(get_db),
):
    user = UserService(db).get_user(_user_id(user_id, caller))
    if not user:
        raise HTTPException(status_code=404, detail="Not found")
    return user


@router.patch("/{user_id}", response_model=UserOut)
def set_admin(
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    caller: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    result = UserService(db).set_admin(_user_id(user_id, caller), payload)
    if isinstance(result, ValidationFailed):
        return validation_response(result.errors)
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail="Not found")
    return result.item
