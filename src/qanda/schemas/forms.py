"""Turn submitted form data into validated schemas or field-level errors."""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from qanda.exceptions import FormValidationError

FormT = TypeVar("FormT", bound=BaseModel)


def _label(field: str) -> str:
    return field.replace("_", " ")


def _message(field: str, error: dict[str, Any], value: Any) -> str:
    """Human-readable message for one pydantic error."""
    label = _label(field)
    ctx = error.get("ctx") or {}
    kind = error["type"]

    if kind == "missing" or (isinstance(value, str) and not value.strip()):
        return f"The {label} field is required."
    if kind == "string_too_short":
        return f"The {label} must be at least {ctx['min_length']} characters."
    if kind == "string_too_long":
        return f"The {label} may not be greater than {ctx['max_length']} characters."
    if kind == "value_error" and field == "email":
        return f"The {label} must be a valid email address."
    if kind == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error["msg"]


def validate_form(schema: type[FormT], data: Mapping[str, Any]) -> FormT:
    """Validate submitted fields against a schema.

    Raises:
        FormValidationError: With messages per field and the submitted values
            (passwords excluded) so the form can be redisplayed.
    """
    try:
        return schema.model_validate(dict(data))
    except ValidationError as exc:
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "__all__"
            message = _message(field, error, data.get(field))
            errors.setdefault(field, [])
            if message not in errors[field]:
                errors[field].append(message)
        values = {
            key: value for key, value in data.items() if "password" not in key
        }
        raise FormValidationError(errors=errors, values=values) from exc
