from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import InputValidationError
from ..shard.enums import ToolName

ModelT = TypeVar("ModelT", bound=BaseModel)


# Static guidance appended to failure text; not derived from the error cause.
_TROUBLESHOOTING: dict[str, list[str]] = {
    ToolName.GENERATE_IMAGE: [
        "Ensure GEMINI_API_KEY environment variable is set",
        "Check if your prompt complies with content policies",
        "Try again if rate limited",
    ],
    ToolName.EDIT_IMAGE: [
        "Ensure GEMINI_API_KEY environment variable is set",
        "Check that the image data is valid base64 without a data URI prefix",
        "Check if your edit request complies with content policies",
    ],
    ToolName.COMPOSE_IMAGES: [
        "Ensure GEMINI_API_KEY environment variable is set",
        "Provide between 1 and 14 reference images",
        "Check if your prompt and images comply with content policies",
    ],
}


def troubleshooting_tips(tool_name: str) -> list[str]:
    """Return the static troubleshooting hints for an image tool."""
    return list(_TROUBLESHOOTING.get(tool_name, []))


def _format_loc(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) or "input"


def format_validation_error(exc: ValidationError) -> tuple[str, str | None]:
    """Reduce a pydantic ValidationError to its first failing constraint.

    Returns ``(message, field)`` where message reads like
    ``"prompt: String should have at most 10000 characters"``.
    """
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc), None
    first = errors[0]
    field = _format_loc(tuple(first.get("loc", ())))
    msg = first.get("msg", "Invalid value")
    # Custom validators surface as "Value error, <message>"
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, ") :]
    return f"{field}: {msg}", field


def validate_input(model_cls: type[ModelT], raw: Any) -> ModelT:
    """Validate raw tool parameters, raising InputValidationError on failure."""
    if raw is None:
        raw = {}
    try:
        return model_cls.model_validate(raw)
    except ValidationError as e:
        message, field = format_validation_error(e)
        raise InputValidationError(message, field=field) from e


__all__ = [
    "troubleshooting_tips",
    "format_validation_error",
    "validate_input",
]
