"""formguard — client-side form validation engine.

Usage:
    from formguard import FormValidator

    form = FormValidator(
        {"name": {"required": True}, "email": {"email": True}},
        initial_values={"name": "Ada"},
    )
    form.set_value("email", "ada@example.com")
    form.set_touched("email")
    if form.validate_all():
        payload = form.get_values()
"""

from formguard.engine import FormValidator
from formguard.errors import FormDefinitionError, FormguardError, RuleDefinitionError
from formguard.evaluation import EMAIL_PATTERN, check, evaluate
from formguard.password import PasswordChecks, password_checks
from formguard.registry import CustomRule, CustomRuleRegistry, register_builtin_rules
from formguard.rules import (
    DEFAULT_EMAIL_MESSAGE,
    DEFAULT_REQUIRED_MESSAGE,
    FieldRules,
    LengthRule,
    MessageRule,
    PatternRule,
    parse_rules,
)
from formguard.types import ErrorCode, FieldState, FormSnapshot, RuleFailure

__all__ = [
    # Engine
    "FormValidator",
    # Types
    "ErrorCode",
    "FieldState",
    "FormSnapshot",
    "RuleFailure",
    # Rules
    "DEFAULT_EMAIL_MESSAGE",
    "DEFAULT_REQUIRED_MESSAGE",
    "FieldRules",
    "LengthRule",
    "MessageRule",
    "PatternRule",
    "parse_rules",
    # Evaluation
    "EMAIL_PATTERN",
    "check",
    "evaluate",
    # Registry
    "CustomRule",
    "CustomRuleRegistry",
    "register_builtin_rules",
    # Password strength
    "PasswordChecks",
    "password_checks",
    # Errors
    "FormDefinitionError",
    "FormguardError",
    "RuleDefinitionError",
]
