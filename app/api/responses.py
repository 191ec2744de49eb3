"""Success envelope helpers."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

_UNSET: Any = object()


def dump(schema: type[BaseModel], value: Any) -> Any:
    """Serialize ORM objects through a response model, camelCase keys."""
    if value is None:
        return None
    if isinstance(value, list):
        return [dump(schema, item) for item in value]
    return schema.model_validate(value).model_dump(mode="json", by_alias=True)


def envelope(data: Any = _UNSET, message: str | None = None, **extra: Any) -> dict[str, Any]:
    """Build ``{"success": true, "message"?, "data"?, ...extra}``.

    Lists also get a ``count`` field.
    """
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if isinstance(data, list):
        body["count"] = len(data)
    if data is not _UNSET:
        body["data"] = data
    body.update(jsonable_encoder(extra))
    return body


__all__ = ["dump", "envelope"]
