"""Tests for single-value rule evaluation."""

import re

import pytest

from formguard.evaluation import EMAIL_PATTERN, check, evaluate, is_empty
from formguard.rules import (
    DEFAULT_EMAIL_MESSAGE,
    DEFAULT_REQUIRED_MESSAGE,
    FieldRules,
    LengthRule,
    MessageRule,
    PatternRule,
)
from formguard.types import ErrorCode


def no_spaces(value: str) -> str | None:
    return "No spaces" if " " in value else None


# =============================================================================
# Pattern Tests
# =============================================================================


class TestEmailPattern:
    def test_email_valid(self):
        valid_emails = [
            "test@example.com",
            "user.name@domain.co.uk",
            "user+tag@example.org",
            "a@b.c",
        ]
        for email in valid_emails:
            assert EMAIL_PATTERN.fullmatch(email), f"{email} should be valid"

    def test_email_invalid(self):
        invalid_emails = [
            "bad",
            "@example.com",
            "user@",
            "user@example",
            "user name@example.com",
            "user@@example.com",
            "test@example.com\n",
        ]
        for email in invalid_emails:
            assert not EMAIL_PATTERN.fullmatch(email), f"{email!r} should be invalid"


class TestIsEmpty:
    @pytest.mark.parametrize("value", ["", " ", "\t\n  "])
    def test_whitespace_is_empty(self, value):
        assert is_empty(value)

    def test_content_is_not_empty(self):
        assert not is_empty(" a ")


# =============================================================================
# Individual Rules
# =============================================================================


class TestRequired:
    def test_empty_value_fails_with_default_message(self):
        assert evaluate(FieldRules(required=MessageRule()), "") == DEFAULT_REQUIRED_MESSAGE

    def test_whitespace_only_fails(self):
        assert evaluate(FieldRules(required=MessageRule()), "   ") == "This field is required"

    def test_custom_message(self):
        rules = FieldRules(required=MessageRule("Name is needed"))
        assert evaluate(rules, "") == "Name is needed"

    def test_present_value_passes(self):
        assert evaluate(FieldRules(required=MessageRule()), "Alice") is None

    def test_failure_code(self):
        failure = check(FieldRules(required=MessageRule()), "")
        assert failure is not None
        assert failure.code == ErrorCode.REQUIRED


class TestEmptyOptionalField:
    def test_empty_optional_field_skips_all_rules(self):
        rules = FieldRules(
            email=MessageRule(),
            min_length=LengthRule(8, "Too short"),
            pattern=PatternRule(re.compile(r"^\d+$"), "Numbers only"),
            custom=lambda v: "always fails",
        )
        assert evaluate(rules, "") is None
        assert evaluate(rules, "   ") is None

    def test_no_rules_always_pass(self):
        assert evaluate(FieldRules(), "") is None
        assert evaluate(FieldRules(), "anything") is None


class TestEmail:
    def test_default_message(self):
        assert evaluate(FieldRules(email=MessageRule()), "bad") == DEFAULT_EMAIL_MESSAGE

    def test_custom_message(self):
        rules = FieldRules(email=MessageRule("Invalid email format"))
        assert evaluate(rules, "bad") == "Invalid email format"

    def test_valid_email_passes(self):
        assert evaluate(FieldRules(email=MessageRule()), "test@example.com") is None

    def test_failure_code(self):
        assert check(FieldRules(email=MessageRule()), "bad").code == ErrorCode.INVALID_EMAIL


class TestLength:
    def test_min_length(self):
        rules = FieldRules(min_length=LengthRule(8, "Too short"))
        assert evaluate(rules, "abc") == "Too short"
        assert evaluate(rules, "abcdefgh") is None

    def test_max_length(self):
        rules = FieldRules(max_length=LengthRule(5, "Too long"))
        assert evaluate(rules, "abcdef") == "Too long"
        assert evaluate(rules, "abcde") is None

    def test_codes(self):
        assert check(FieldRules(min_length=LengthRule(3, "x")), "a").code == ErrorCode.MIN_LENGTH
        assert check(FieldRules(max_length=LengthRule(1, "x")), "ab").code == ErrorCode.MAX_LENGTH


class TestPattern:
    def test_no_match_fails(self):
        rules = FieldRules(pattern=PatternRule(re.compile(r"^\d+$"), "Numbers only"))
        assert evaluate(rules, "abc") == "Numbers only"

    def test_match_passes(self):
        rules = FieldRules(pattern=PatternRule(re.compile(r"^\d+$"), "Numbers only"))
        assert evaluate(rules, "123") is None

    def test_unanchored_pattern_searches(self):
        rules = FieldRules(pattern=PatternRule(re.compile(r"\d"), "Needs a digit"))
        assert evaluate(rules, "abc1") is None
        assert check(rules, "abc").code == ErrorCode.PATTERN_MISMATCH


class TestCustom:
    def test_returns_error_string(self):
        assert evaluate(FieldRules(custom=no_spaces), "has space") == "No spaces"

    def test_returns_none_for_valid_value(self):
        assert evaluate(FieldRules(custom=no_spaces), "nospaces") is None

    def test_empty_string_result_is_a_pass(self):
        assert evaluate(FieldRules(custom=lambda v: ""), "x") is None

    def test_failure_code(self):
        assert check(FieldRules(custom=no_spaces), "a b").code == ErrorCode.CUSTOM


# =============================================================================
# Ordering
# =============================================================================


class TestRuleOrder:
    """The first failing rule in the fixed order wins."""

    def test_email_before_length(self):
        rules = FieldRules(email=MessageRule(), min_length=LengthRule(20, "Too short"))
        assert evaluate(rules, "bad") == DEFAULT_EMAIL_MESSAGE

    def test_min_length_before_max_length(self):
        # Contradictory bounds: min reported first
        rules = FieldRules(
            min_length=LengthRule(10, "Too short"),
            max_length=LengthRule(2, "Too long"),
        )
        assert evaluate(rules, "abcde") == "Too short"

    def test_length_before_pattern(self):
        rules = FieldRules(
            max_length=LengthRule(3, "Too long"),
            pattern=PatternRule(re.compile(r"^\d+$"), "Numbers only"),
        )
        assert evaluate(rules, "abcdef") == "Too long"

    def test_pattern_before_custom(self):
        calls = []

        def tracking(value):
            calls.append(value)
            return "Custom failure"

        rules = FieldRules(
            pattern=PatternRule(re.compile(r"^\d+$"), "Numbers only"),
            custom=tracking,
        )
        assert evaluate(rules, "abc") == "Numbers only"
        assert calls == []

    def test_custom_runs_last_when_everything_else_passes(self):
        rules = FieldRules(
            required=MessageRule(),
            min_length=LengthRule(3, "Too short"),
            custom=no_spaces,
        )
        assert evaluate(rules, "a b c") == "No spaces"

    def test_required_custom_not_called_for_empty(self):
        calls = []
        rules = FieldRules(required=MessageRule(), custom=lambda v: calls.append(v))
        assert evaluate(rules, "") == DEFAULT_REQUIRED_MESSAGE
        assert calls == []
