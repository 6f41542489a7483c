"""
Shared types for the validator module.

This module exists to avoid circular imports between core.py and the
individual check modules.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Kind of a field validation error."""
    INVALID = "Invalid value"
    NOT_FOUND = "Not found"
    DUPLICATE = "Duplicate value"
    INTERNAL = "Internal error"


def format_number(value: int | float | Decimal) -> str:
    """Whole numbers without a fraction, others with every significant digit."""
    number = Decimal(str(value))
    if not number.is_finite():
        return str(value)
    if number == number.to_integral_value():
        return str(int(number))
    return format(number.normalize(), "f")


def _render_value(value: Any) -> str:
    if value is None:
        return '"null"'
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float, Decimal)):
        return format_number(value)
    return f'"{value}"'


@dataclass(frozen=True)
class FieldError:
    """
    A single validation failure scoped to a field of the install config.

    Attributes:
        field: Dotted/bracketed path into the install config
        kind: What went wrong
        value: The offending value, if any
        detail: Human readable explanation
        supported: Allowed values, for enum-like fields
    """
    field: str
    kind: ErrorKind
    value: Any = None
    detail: str = ""
    supported: tuple[str, ...] | None = None

    def __str__(self) -> str:
        if self.kind == ErrorKind.INTERNAL:
            if self.detail:
                return f"{self.field}: {self.kind.value}: {self.detail}"
            return f"{self.field}: {self.kind.value}"

        if self.kind == ErrorKind.INVALID and self.supported is not None:
            allowed = ", ".join(f'"{s}"' for s in self.supported)
            return f"{self.field}: Unsupported value: {_render_value(self.value)}: supported values: {allowed}"

        message = f"{self.field}: {self.kind.value}: {_render_value(self.value)}"
        if self.detail:
            message += f": {self.detail}"
        return message


def invalid(field: str, value: Any, detail: str) -> FieldError:
    return FieldError(field=field, kind=ErrorKind.INVALID, value=value, detail=detail)


def not_supported(field: str, value: Any, supported: list[str] | tuple[str, ...]) -> FieldError:
    return FieldError(field=field, kind=ErrorKind.INVALID, value=value, supported=tuple(supported))


def not_found(field: str, value: Any) -> FieldError:
    return FieldError(field=field, kind=ErrorKind.NOT_FOUND, value=value)


def duplicate(field: str, value: Any) -> FieldError:
    return FieldError(field=field, kind=ErrorKind.DUPLICATE, value=value)


def internal_error(field: str, err: Exception | str | None = None) -> FieldError:
    return FieldError(field=field, kind=ErrorKind.INTERNAL, detail=str(err) if err else "")


def aggregate(errors: list[FieldError]) -> str:
    """Render a list of errors as one line, bracketed when there are several."""
    if not errors:
        return ""
    if len(errors) == 1:
        return str(errors[0])
    return "[" + ", ".join(str(e) for e in errors) + "]"
