"""Custom rule registry for formguard.

Form definitions loaded from YAML cannot carry Python callables, so their
``custom`` entries name a predicate registered here instead.

Example:
    CustomRuleRegistry.register("noSpaces", no_spaces)

    # Later, resolve from a form definition
    rule = CustomRuleRegistry.get("noSpaces")
"""

import re
from typing import Callable

# A custom predicate returns an error message, or None when the value passes
CustomRule = Callable[[str], str | None]


class CustomRuleRegistry:
    """Registry of named custom predicates.

    Predicates must be explicitly registered before a form definition that
    references them is loaded.
    """

    _rules: dict[str, CustomRule] = {}

    @classmethod
    def register(cls, name: str, rule: CustomRule) -> None:
        """Register a custom predicate by name.

        Idempotent - re-registering the same name is a no-op.

        Args:
            name: Identifier used by form definitions (e.g., "noSpaces")
            rule: Callable taking the field value and returning a message or None
        """
        if name in cls._rules:
            return
        cls._rules[name] = rule

    @classmethod
    def get(cls, name: str) -> CustomRule:
        """Get a registered predicate by name.

        Raises:
            ValueError: If no predicate is registered under ``name``
        """
        if name not in cls._rules:
            raise ValueError(
                f"Custom rule '{name}' is not registered. "
                "Available rules: " + (", ".join(cls.list_registered()) or "(none)")
            )
        return cls._rules[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._rules

    @classmethod
    def list_registered(cls) -> list[str]:
        return sorted(cls._rules)

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._rules.clear()


# =============================================================================
# Built-in predicates
# =============================================================================

_DIGIT = re.compile(r"\d")
_LETTER = re.compile(r"[a-zA-Z]")

# Checked in order; the first missing character class is reported
_STRONG_PASSWORD_CLASSES = (
    (re.compile(r"[A-Z]"), "Password must contain an uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain a lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain a number"),
    (re.compile(r"[^A-Za-z0-9]"), "Password must contain a special character"),
)


def no_spaces(value: str) -> str | None:
    if " " in value:
        return "Spaces are not allowed"
    return None


def has_number(value: str) -> str | None:
    if not _DIGIT.search(value):
        return "Must contain at least one number"
    return None


def has_letter(value: str) -> str | None:
    if not _LETTER.search(value):
        return "Must contain at least one letter"
    return None


def strong_password(value: str) -> str | None:
    """Require upper and lower case letters, a digit and a special character."""
    for pattern, message in _STRONG_PASSWORD_CLASSES:
        if not pattern.search(value):
            return message
    return None


def register_builtin_rules() -> None:
    """Register the predicates shipped with formguard. Safe to call repeatedly."""
    CustomRuleRegistry.register("noSpaces", no_spaces)
    CustomRuleRegistry.register("hasNumber", has_number)
    CustomRuleRegistry.register("hasLetter", has_letter)
    CustomRuleRegistry.register("strongPassword", strong_password)
