"""Core types for the formguard validation engine.

- ErrorCode: machine-readable category of a field error
- RuleFailure: the first failing rule for a value
- FieldState: live state of one field
- FormSnapshot: read-only, form-wide view over all field states
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ErrorCode(str, Enum):
    """Category of the error currently shown on a field.

    REQUIRED: value missing where mandatory
    INVALID_EMAIL / PATTERN_MISMATCH: value present but wrongly shaped
    MIN_LENGTH / MAX_LENGTH: value outside configured length bounds
    CUSTOM: application-specific predicate failed
    OVERRIDE: error injected by the caller via set_error()
    """

    REQUIRED = "REQUIRED"
    INVALID_EMAIL = "INVALID_EMAIL"
    MIN_LENGTH = "MIN_LENGTH"
    MAX_LENGTH = "MAX_LENGTH"
    PATTERN_MISMATCH = "PATTERN_MISMATCH"
    CUSTOM = "CUSTOM"
    OVERRIDE = "OVERRIDE"


@dataclass(frozen=True)
class RuleFailure:
    """The failing rule for a value.

    Attributes:
        message: Human-readable message shown beside the field
        code: Which rule kind produced the message
    """

    message: str
    code: ErrorCode


@dataclass(frozen=True)
class FieldState:
    """State of one declared field.

    Attributes:
        value: Current content ("" by default)
        touched: True once the user left/confirmed the field, or after validate_all()
        error: Message currently shown, or None (suppressed while untouched)
        is_valid: Rule outcome for the current value, independent of touched
        error_code: Category of ``error``; None whenever ``error`` is None
    """

    value: str = ""
    touched: bool = False
    error: str | None = None
    is_valid: bool = True
    error_code: ErrorCode | None = None


@dataclass(frozen=True)
class FormSnapshot:
    """Immutable view of a form at one point in time.

    ``is_valid`` and ``is_dirty`` are derived from the field states and never
    stored separately.
    """

    fields: Mapping[str, FieldState]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def is_valid(self) -> bool:
        """True when every field is valid."""
        return all(state.is_valid for state in self.fields.values())

    @property
    def is_dirty(self) -> bool:
        """True when at least one field has been touched."""
        return any(state.touched for state in self.fields.values())

    def values(self) -> dict[str, str]:
        """Plain name -> value mapping."""
        return {name: state.value for name, state in self.fields.items()}
