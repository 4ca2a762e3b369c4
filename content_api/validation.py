"""
Request validation gate.

Request shapes are declared as Pydantic models (see content_api.schemas).
Fields are checked in declaration order and only the FIRST failure is
reported to the client, as one human-readable sentence. Cross-field rules
(model validators) run only once every field passed.

FastAPI performs body/query validation itself; the RequestValidationError
handler in content_api.main feeds those errors through first_error_message()
so the route handler never runs on invalid input.
"""

from typing import Any, Iterable, Mapping, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from content_api.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Location prefixes added by FastAPI; not part of the client-facing field name
_REQUEST_SECTIONS = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: Sequence[Any]) -> str | None:
    parts = [str(part) for part in loc]
    if parts and parts[0] in _REQUEST_SECTIONS:
        parts = parts[1:]
    return ".".join(parts) if parts else None


def _format_error(error: Mapping[str, Any]) -> Tuple[str, str | None]:
    err_type = error.get("type", "")
    # FastAPI puts the decode position in loc, which is not a field name
    if err_type == "json_invalid":
        return "Request body is not valid JSON", None

    field = _field_name(error.get("loc", ()))
    ctx = error.get("ctx") or {}
    msg = str(error.get("msg", "Invalid value"))

    if field is None:
        if err_type == "missing":
            return "Request body is required", None
        if err_type in ("model_attributes_type", "dict_type", "model_type"):
            return "Request body must be a JSON object", None
        return msg, None

    label = f'"{field}"'

    if err_type == "missing":
        return f"{label} is required", field
    if err_type == "string_type":
        return f"{label} must be a string", field
    if err_type == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{label} is not allowed to be empty", field
        return f"{label} length must be at least {ctx.get('min_length')} characters long", field
    if err_type == "string_too_long":
        return (
            f"{label} length must be less than or equal to "
            f"{ctx.get('max_length')} characters long"
        ), field
    if err_type in ("uuid_parsing", "uuid_type"):
        return f"{label} must be a valid id", field
    if err_type == "literal_error":
        return f"{label} must be one of {ctx.get('expected')}", field
    if err_type in ("int_parsing", "int_type", "int_from_float"):
        return f"{label} must be a number", field
    if err_type == "greater_than_equal":
        return f"{label} must be greater than or equal to {ctx.get('ge')}", field
    if err_type == "less_than_equal":
        return f"{label} must be less than or equal to {ctx.get('le')}", field
    if err_type == "list_type":
        return f"{label} must be an array", field
    if err_type == "value_error":
        if "email" in msg:
            return f"{label} must be a valid email", field
        return msg.removeprefix("Value error, "), field

    # PydanticCustomError messages are already client-facing
    return msg, field


def first_error_message(errors: Iterable[Mapping[str, Any]]) -> Tuple[str, str | None]:
    """
    Return (message, field) for the first validation error.

    Args:
        errors: Pydantic/FastAPI error dicts, in the order they were produced

    Returns:
        The client-facing message and the offending field name (None when the
        error concerns the whole body or a cross-field rule)
    """
    for error in errors:
        return _format_error(error)
    return "Validation failed", None


def validate(schema: Type[ModelT], payload: Any) -> ModelT:
    """
    Validate an untrusted payload against a request schema.

    Args:
        schema: Pydantic model describing the request shape
        payload: Decoded JSON (usually a dict) from the client

    Returns:
        The validated (and coerced) model instance

    Raises:
        ValidationError: With the first failing field's message
    """
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        message, field = first_error_message(exc.errors())
        raise ValidationError(message, field=field) from None
