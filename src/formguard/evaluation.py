"""Rule evaluation for a single field value.

Rules run in a fixed, short-circuiting order and the first failure wins:

1. required         - empty or whitespace-only value
2. (skip)           - optional field with an empty value passes outright
3. email            - value must look like user@domain.tld
4. minLength/maxLength
5. pattern
6. custom           - called last with the raw value
"""

import re

from formguard.rules import DEFAULT_EMAIL_MESSAGE, DEFAULT_REQUIRED_MESSAGE, FieldRules
from formguard.types import ErrorCode, RuleFailure


# Structure check only, not deliverability
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_empty(value: str) -> bool:
    """Check if a value is considered empty."""
    return value.strip() == ""


def check(rules: FieldRules, value: str) -> RuleFailure | None:
    """Return the first failing rule for ``value``, or None if all pass."""
    if is_empty(value):
        if rules.required is not None:
            return RuleFailure(
                message=rules.required.resolve(DEFAULT_REQUIRED_MESSAGE),
                code=ErrorCode.REQUIRED,
            )
        # Optional and empty: nothing else applies
        return None

    if rules.email is not None and not EMAIL_PATTERN.fullmatch(value):
        return RuleFailure(
            message=rules.email.resolve(DEFAULT_EMAIL_MESSAGE),
            code=ErrorCode.INVALID_EMAIL,
        )

    if rules.min_length is not None and len(value) < rules.min_length.value:
        return RuleFailure(message=rules.min_length.message, code=ErrorCode.MIN_LENGTH)

    if rules.max_length is not None and len(value) > rules.max_length.value:
        return RuleFailure(message=rules.max_length.message, code=ErrorCode.MAX_LENGTH)

    if rules.pattern is not None and not rules.pattern.value.search(value):
        return RuleFailure(message=rules.pattern.message, code=ErrorCode.PATTERN_MISMATCH)

    if rules.custom is not None:
        message = rules.custom(value)
        if message:
            return RuleFailure(message=message, code=ErrorCode.CUSTOM)

    return None


def evaluate(rules: FieldRules, value: str) -> str | None:
    """Return the message of the first failing rule, or None if ``value`` passes."""
    failure = check(rules, value)
    return failure.message if failure else None
