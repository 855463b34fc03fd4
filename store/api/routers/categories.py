# store/api/routers/categories.py
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.orm import Session

from store.api.deps import require_admin
from store.api.responses import validation_response, item_not_found, parse_id
from store.data.database import get_db
from store.domain.result import ValidationFailed, NotFound
from store.domain.schemas import CategoryOut
from store.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CategoryService(db).list_categories()


@router.get("/{category_id}", response_model=CategoryOut)
def read_category(category_id: str, db: Session = Depends(get_db)):
    category = CategoryService(db).read_category(parse_id(category_id))
    if not category:
        raise item_not_found()
    return category


@router.post(
    "",
    response_model=CategoryOut,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_category(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    result = CategoryService(db).create_category(payload)
    if isinstance(result, ValidationFailed):
        return validation_response(result.errors)
    return result.item


@router.patch(
    "/{category_id}",
    response_model=CategoryOut,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def update_category(
    category_id: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
):
    result = CategoryService(db).update_category(parse_id(category_id), payload)
    if isinstance(result, ValidationFailed):
        return validation_response(result.errors)
    if isinstance(result, NotFound):
        raise item_not_found()
    return result.item


@router.delete("/{category_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_category(category_id: str, db: Session = Depends(get_db)):
    if not CategoryService(db).delete_category(parse_id(category_id)):
        raise item_not_found()
    return Response(status_code=204)
