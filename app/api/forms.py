"""Multipart form parsing into request models.

Form fields are collected from the request (repeated fields become lists),
uploaded files are skipped, and the result is validated with the given
model. Validation failures surface as ordinary request validation errors.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_form_fields(request: Request) -> dict[str, Any]:
    """Text fields of a multipart or urlencoded body."""
    form = await request.form()
    fields: dict[str, Any] = {}
    for key in form.keys():
        values = [value for value in form.getlist(key) if not isinstance(value, UploadFile)]
        if not values:
            continue
        fields[key] = values[0] if len(values) == 1 else values
    return fields


def form_body(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """Build a dependency that validates the form body against ``model``."""

    async def dependency(request: Request) -> ModelT:
        fields = await read_form_fields(request)
        try:
            return model.model_validate(fields)
        except ValidationError as e:
            raise RequestValidationError(e.errors(include_url=False)) from e

    return dependency


__all__ = ["form_body", "read_form_fields"]
