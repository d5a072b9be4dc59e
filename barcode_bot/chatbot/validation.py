"""Shared validation for slash-command input.

Slash commands arrive as loosely typed option dictionaries. These helpers make
sure the fields the handlers rely on are present and well-formed.

On validation failure, raise `ValidationError` so the command layer can reply
with a human-readable reason instead of a generic failure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ValidationError(Exception):
    """Exception raised when user-supplied input breaks a precondition.

    Attributes:
        message: human-readable reason, shown to the user as-is.
        field_errors: mapping of field name -> human-readable error message.
    """

    message: str = "Validation failed"
    field_errors: Dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _strip(v: Any) -> str:
    return _as_str(v).strip()


_NON_DIGIT_RE = re.compile(r"[^0-9]")
_INT_RE = re.compile(r"[+-]?[0-9]+")


def digits_only(value: Any) -> str:
    """Drop every character that is not an ASCII digit 0-9."""
    return _NON_DIGIT_RE.sub("", _as_str(value))


def fail(field_name: str, message: str) -> None:
    raise ValidationError(message=message, field_errors={field_name: message})


def add_error(errors: Dict[str, str], field_name: str, message: str) -> None:
    if field_name not in errors:
        errors[field_name] = message


def require_str(payload: Dict[str, Any], field_name: str, errors: Dict[str, str], *, label: Optional[str] = None) -> str:
    value = _strip(payload.get(field_name))
    if not value:
        add_error(errors, field_name, f"{label or field_name} is required")
    return value


def parse_int(
    payload: Dict[str, Any],
    field_name: str,
    errors: Dict[str, str],
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    required: bool = False,
    label: Optional[str] = None,
) -> int:
    name = label or field_name
    raw = payload.get(field_name)
    if raw is None or _strip(raw) == "":
        if required:
            add_error(errors, field_name, f"{name} is required")
        return 0
    if isinstance(raw, bool):
        add_error(errors, field_name, f"{name} must be a whole number")
        return 0
    if isinstance(raw, int):
        val = raw
    elif _INT_RE.fullmatch(_strip(raw)):
        val = int(_strip(raw))
    else:
        add_error(errors, field_name, f"{name} must be a whole number")
        return 0
    if min_value is not None and val < min_value:
        add_error(errors, field_name, f"{name} must be at least {min_value}")
    if max_value is not None and val > max_value:
        add_error(errors, field_name, f"{name} must be at most {max_value}")
    return val


def raise_if_errors(errors: Dict[str, str], message: Optional[str] = None) -> None:
    """Raise with the first collected error as the top-level message."""
    if errors:
        first = next(iter(errors.values()))
        raise ValidationError(message=message or first, field_errors=dict(errors))
