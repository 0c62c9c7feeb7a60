"""Rule descriptors: which checks apply to a field and what each one says.

A descriptor can be written in Python directly::

    FieldRules(required=MessageRule(), min_length=LengthRule(8, "Too short"))

or parsed from the camelCase dict shape used by form definitions::

    FieldRules.from_dict({"required": True, "minLength": {"value": 8, "message": "Too short"}})
"""

import re
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any

from formguard.errors import RuleDefinitionError
from formguard.registry import CustomRule, CustomRuleRegistry


DEFAULT_REQUIRED_MESSAGE = "This field is required"
DEFAULT_EMAIL_MESSAGE = "Please enter a valid email address"

_KNOWN_KEYS = ("required", "email", "minLength", "maxLength", "pattern", "custom")


@dataclass(frozen=True)
class MessageRule:
    """An enabled rule whose message is either custom or the rule's default."""

    message: str | None = None

    def resolve(self, default: str) -> str:
        return self.message if self.message is not None else default


@dataclass(frozen=True)
class LengthRule:
    value: int
    message: str


@dataclass(frozen=True)
class PatternRule:
    value: re.Pattern[str]
    message: str


@dataclass(frozen=True)
class FieldRules:
    """All checks configured for one field. ``None`` means the rule kind is absent."""

    required: MessageRule | None = None
    email: MessageRule | None = None
    min_length: LengthRule | None = None
    max_length: LengthRule | None = None
    pattern: PatternRule | None = None
    custom: CustomRule | None = None

    @property
    def is_required(self) -> bool:
        return self.required is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "FieldRules":
        """Parse a camelCase rule descriptor.

        ``required`` and ``email`` accept ``True`` (default message) or a
        message string; ``False``, ``None`` and ``""`` leave the rule absent.
        ``minLength``, ``maxLength`` and ``pattern`` take ``{value, message}``.
        ``custom`` is a callable or the name of a registered custom rule.

        Raises:
            RuleDefinitionError: If the descriptor is malformed
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise RuleDefinitionError(
                f"Rule descriptor must be a mapping, got {type(data).__name__}"
            )

        unknown = [key for key in data if key not in _KNOWN_KEYS]
        if unknown:
            raise RuleDefinitionError(
                f"Unknown rule(s) {', '.join(map(str, unknown))}. "
                f"Expected one of: {', '.join(_KNOWN_KEYS)}"
            )

        return cls(
            required=_parse_message_rule("required", data.get("required")),
            email=_parse_message_rule("email", data.get("email")),
            min_length=_parse_length_rule("minLength", data.get("minLength")),
            max_length=_parse_length_rule("maxLength", data.get("maxLength")),
            pattern=_parse_pattern_rule(data.get("pattern")),
            custom=_parse_custom_rule(data.get("custom")),
        )


def parse_rules(rules: Mapping[str, "FieldRules | Mapping[str, Any] | None"]) -> dict[str, FieldRules]:
    """Normalize a name -> descriptor map, preserving declaration order."""
    parsed: dict[str, FieldRules] = {}
    for name, descriptor in rules.items():
        if isinstance(descriptor, FieldRules):
            parsed[name] = descriptor
            continue
        try:
            parsed[name] = FieldRules.from_dict(descriptor)
        except RuleDefinitionError as e:
            raise RuleDefinitionError(f"Field '{name}': {e}") from e
    return parsed


# -----------------------------------------------------------------------------
# Parsing helpers
# -----------------------------------------------------------------------------


def _parse_message_rule(key: str, raw: Any) -> MessageRule | None:
    if raw is None or raw is False or raw == "":
        return None
    if raw is True:
        return MessageRule()
    if isinstance(raw, str):
        return MessageRule(message=raw)
    raise RuleDefinitionError(f"'{key}' must be true or a message string, got {raw!r}")


def _parse_bounded(key: str, raw: Any) -> tuple[Any, str] | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping) or "value" not in raw:
        raise RuleDefinitionError(f"'{key}' must be a mapping with 'value' and 'message'")
    message = raw.get("message")
    if not isinstance(message, str) or not message:
        raise RuleDefinitionError(f"'{key}' requires a non-empty 'message'")
    return raw["value"], message


def _parse_length_rule(key: str, raw: Any) -> LengthRule | None:
    parsed = _parse_bounded(key, raw)
    if parsed is None:
        return None
    value, message = parsed
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise RuleDefinitionError(f"'{key}.value' must be a non-negative integer, got {value!r}")
    return LengthRule(value=value, message=message)


def _parse_pattern_rule(raw: Any) -> PatternRule | None:
    parsed = _parse_bounded("pattern", raw)
    if parsed is None:
        return None
    value, message = parsed
    if isinstance(value, re.Pattern):
        return PatternRule(value=value, message=message)
    if not isinstance(value, str):
        raise RuleDefinitionError(f"'pattern.value' must be a regex or string, got {value!r}")
    try:
        compiled = re.compile(value)
    except re.error as e:
        raise RuleDefinitionError(f"'pattern.value' is not a valid regex: {e}") from e
    return PatternRule(value=compiled, message=message)


def _parse_custom_rule(raw: Any) -> CustomRule | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        try:
            return CustomRuleRegistry.get(raw)
        except ValueError as e:
            raise RuleDefinitionError(str(e)) from e
    if callable(raw):
        return raw
    raise RuleDefinitionError(f"'custom' must be callable or a registered rule name, got {raw!r}")
