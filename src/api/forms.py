"""
Request body helpers.

Bodies arrive as JSON, url-encoded forms or multipart forms. These
helpers turn them into a plain mapping and validate it against one
pydantic model, reporting the first violation as a domain
ValidationError.
"""

import json
from typing import Any, TypeVar

import pydantic
from fastapi import Request
from starlette.datastructures import FormData, UploadFile

from src.domain.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


async def read_payload(request: Request) -> dict[str, Any]:
    """Read a JSON object or form body into a dict."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise ValidationError(message="Cuerpo de la solicitud no válido.") from None
        return body if isinstance(body, dict) else {}

    form = await request.form()
    return text_fields(form)


def text_fields(form: FormData) -> dict[str, Any]:
    """Non-file fields of a form."""
    return {key: value for key, value in form.items() if isinstance(value, str)}


def file_field(form: FormData, *names: str) -> UploadFile | None:
    """
    First non-empty file found under any of the given field names.

    Browsers send an empty part when a file input is left blank; that
    counts as no file.
    """
    for name in names:
        value = form.get(name)
        if isinstance(value, UploadFile) and value.filename:
            return value
    return None


def parse_fields(model: type[ModelT], payload: dict[str, Any], message: str | None = None) -> ModelT:
    """
    Validate a payload against a request model.

    Fields are checked in declaration order; the first violation is
    raised as ValidationError naming that field.
    """
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else None
        raise ValidationError(field=field, message=message) from None
