"""Validation error rendering.

Request validation failures are returned as ``422`` with field-level
messages: ``{"message": ..., "errors": {"price": ["..."]}}``.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.requests import Request
from starlette.responses import JSONResponse

_MESSAGES: dict[str, str] = {
    "missing": "The {field} field is required.",
    "string_type": "The {field} field must be a string.",
    "string_too_short": "The {field} field is required.",
    "string_too_long": "The {field} field must not be greater than {max_length} characters.",
    "float_type": "The {field} field must be a number.",
    "float_parsing": "The {field} field must be a number.",
    "finite_number": "The {field} field must be a number.",
    "greater_than_equal": "The {field} field must be at least {ge}.",
    "json_invalid": "The request body must be valid JSON.",
    "model_attributes_type": "The request body must be a JSON object.",
    "dict_type": "The request body must be a JSON object.",
}


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) if parts else "body"


def _render(error: Mapping[str, Any]) -> str:
    field = _field_name(error.get("loc", ()))
    template = _MESSAGES.get(error.get("type", ""))
    if template is None:
        return str(error.get("msg", "The value is invalid."))
    context = {"field": field.replace("_", " ")}
    for key, value in (error.get("ctx") or {}).items():
        # Whole-number bounds render as "0", not "0.0"
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        context[key] = value
    try:
        return template.format(**context)
    except (KeyError, IndexError):
        return str(error.get("msg", "The value is invalid."))


def collect_field_errors(errors: Iterable[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic errors by field name."""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(_field_name(error.get("loc", ())), []).append(_render(error))
    return grouped


def validation_error_response(
    errors: dict[str, list[str]], request_id: str | None = None
) -> JSONResponse:
    """Build the 422 response for field errors."""
    messages = [message for field_messages in errors.values() for message in field_messages]
    summary = messages[0] if messages else "The given data was invalid."
    if len(messages) > 1:
        extra = len(messages) - 1
        summary += f" (and {extra} more error{'s' if extra > 1 else ''})"

    content: dict[str, Any] = {"message": summary, "errors": errors}
    headers = None
    if request_id:
        content["request_id"] = request_id
        headers = {"X-Request-ID": request_id}
    return JSONResponse(status_code=422, content=content, headers=headers)


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = collect_field_errors(exc.errors())
    logger.bind(status_code=422, fields=sorted(errors)).info("request.validation_error")
    return validation_error_response(errors, getattr(request.state, "request_id", None))
