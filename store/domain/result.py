# store/domain/result.py
from dataclasses import dataclass, field
from typing import Any, List, Union

from store.domain.schemas import FieldError


@dataclass
class Ok:
    item: Any


@dataclass
class ValidationFailed:
    errors: List[FieldError] = field(default_factory=list)


@dataclass
class NotFound:
    pass


Result = Union[Ok, ValidationFailed, NotFound]
