"""Result-based construction of Pydantic configuration models."""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from resourceio.errors import InvalidConfig
from resourceio.result import Failure, Result, Success


TModel = TypeVar("TModel", bound=BaseModel)

__all__: list[str] = ["validate_model"]


def validate_model(model_cls: type[TModel], **data: object) -> Result[TModel, InvalidConfig]:
    """
    Construct a Pydantic model and surface validation issues as a Result.

    Pydantic raises on invalid input; the exception is caught here, at the
    boundary, so configuration errors reach callers the same way access
    errors do.
    """
    try:
        return Success(model_cls(**data))
    except ValidationError as exc:
        return Failure(InvalidConfig(error=exc))
