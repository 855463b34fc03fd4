# store/api/routers/products.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from store.api.deps import require_admin
from store.api.responses import validation_response, item_not_found, parse_id
from store.data.database import get_db
from store.domain.result import ValidationFailed, NotFound
from store.domain.schemas import ProductOut, ProductPage
from store.domain.validation import MAX_ID
from store.services.product_service import ProductService
from store.utils.settings import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT

router = APIRouter(prefix="/products", tags=["products"])


def _link(request: Request, offset: int, limit: int) -> Dict[str, str]:
    return {"href": str(request.url.include_query_params(offset=offset, limit=limit))}


@router.get("", response_model=ProductPage)
def list_products(
    request: Request,
    category: int | None = Query(None, ge=0, le=MAX_ID),
    search: str | None = Query(None),
    order: str = Query("desc"),
    offset: int = Query(0, ge=0, le=MAX_ID),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    db: Session = Depends(get_db),
):
    rows = ProductService(db).list_products(
        category_id=category,
        search=search,
        order=order,
        offset=offset,
        limit=limit,
    )

    links = {"self": _link(request, offset, limit)}
    if offset > 0:
        links["prev"] = _link(request, max(offset - limit, 0), limit)
    #a full page means there may be more
    if len(rows) == limit:
        links["next"] = _link(request, offset + limit, limit)

    return {"links": links, "items": rows}


@router.get("/{product_id}", response_model=ProductOut)
def read_product(product_id: str, db: Session = Depends(get_db)):
    product = ProductService(db).read_product(parse_id(product_id))
    if not product:
        raise item_not_found()
    return product


@router.post(
    "",
    response_model=ProductOut,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_product(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    result = ProductService(db).create_product(payload)
    if isinstance(result, ValidationFailed):
        return validation_response(result.errors)
    return result.item


@router.patch(
    "/{product_id}",
    response_model=ProductOut,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def update_product(
    product_id: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
):
    result = ProductService(db).update_product(parse_id(product_id), payload)
    if isinstance(result, ValidationFailed):
        return validation_response(result.errors)
    if isinstance(result, NotFound):
        raise item_not_found()
    return result.item


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_product(product_id: str, db: Session = Depends(get_db)):
    if not ProductService(db).delete_product(parse_id(product_id)):
        raise item_not_found()
    return Response(status_code=204)
