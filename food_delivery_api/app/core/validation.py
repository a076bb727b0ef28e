"""
Payload validation helpers.

Field constraints live on the pydantic schemas.  These helpers turn a
pydantic ``ValidationError`` (or FastAPI's ``RequestValidationError``,
which carries the same error list) into an ``InvalidPayload`` with a
readable message such as ``name: String should have at least 2
characters``.
"""

from typing import Any, Iterable, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import InvalidPayload

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    parts = []
    for error in errors:
        # FastAPI prefixes request errors with "body"; it adds nothing here.
        loc = [str(p) for p in error.get("loc", ()) if p != "body"]
        field = ".".join(loc)
        parts.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return "; ".join(parts)


def parse_payload(schema: Type[ModelT], data: Any) -> ModelT:
    """Validate ``data`` against ``schema``.

    Already-built instances are validated again so that services can be
    called with models constructed via ``model_construct``.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise InvalidPayload(format_errors(exc.errors())) from exc
