"""
Lunchbox API - Shared Schema Helpers.

Turns pydantic validation failures into the API's ``ValidationError``.
"""

from typing import Any, Iterable, Mapping, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.utils.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """
    Render pydantic/FastAPI error dicts as one readable line.

    Example:
        >>> format_validation_errors([{"loc": ("query", "from"), "msg": "Field required"}])
        'from: Field required'
    """
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def validate_body(model: Type[ModelT], body: Any) -> ModelT:
    """
    Validate a raw JSON body against a schema.

    Raises:
        ValidationError: If the body does not match the schema.
    """
    try:
        return model.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError(format_validation_errors(e.errors()))
