# store/api/responses.py
from typing import List

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from store.domain.schemas import FieldError
from store.domain.validation import MAX_ID


def validation_response(errors: List[FieldError]) -> JSONResponse:
    return JSONResponse(status_code=400, content=[e.model_dump() for e in errors])


def item_not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Item not found")


def parse_id(raw: str) -> int:
    """Path ids that are not integers, or do not fit an INTEGER column, point at nothing."""
    try:
        value = int(raw)
    except ValueError:
        raise item_not_found()
    if not -MAX_ID <= value <= MAX_ID:
        raise item_not_found()
    return value
