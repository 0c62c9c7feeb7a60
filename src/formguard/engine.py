"""Validation engine: live field states for one form.

The engine is created once per active form, receives every user interaction
as a single synchronous call, and exposes the resulting field states for the
caller to render.

Usage:
    form = FormValidator({
        "email": {"required": "Email address is required", "email": True},
        "password": {"required": True, "minLength": {"value": 8, "message": "Too short"}},
    })

    form.set_value("email", "ada@example")   # typing: no error shown yet
    form.set_touched("email")                # blur: error appears
    if form.validate_all():                  # submit attempt
        payload = form.get_values()
"""

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from formguard.evaluation import check
from formguard.rules import FieldRules, parse_rules
from formguard.types import ErrorCode, FieldState, FormSnapshot, RuleFailure

if TYPE_CHECKING:
    from formguard.definitions.loader import FormDefinition

logger = logging.getLogger(__name__)


class FormValidator:
    """Tracks value, touched flag, error and validity for each declared field.

    The set of fields is fixed at construction. Operations addressed to an
    undeclared name are ignored with a warning; no operation raises.
    """

    def __init__(
        self,
        rules: Mapping[str, FieldRules | Mapping[str, Any] | None],
        initial_values: Mapping[str, str] | None = None,
    ):
        """Build one field state per declared name.

        Args:
            rules: Field name -> rule descriptor (FieldRules or camelCase dict)
            initial_values: Optional field name -> starting value

        Raises:
            RuleDefinitionError: If a rule descriptor is malformed
        """
        self._rules = parse_rules(rules)

        initial_values = initial_values or {}
        for name in initial_values:
            if name not in self._rules:
                logger.debug("Ignoring initial value for undeclared field '%s'", name)

        self._initial: dict[str, str] = {
            name: initial_values.get(name) or "" for name in self._rules
        }
        self._fields: dict[str, FieldState] = self._initial_fields()

    @classmethod
    def from_definition(
        cls,
        definition: "FormDefinition",
        initial_values: Mapping[str, str] | None = None,
    ) -> "FormValidator":
        """Create an engine from a loaded form definition.

        Caller-supplied initial values take precedence over the definition's.
        """
        merged = dict(definition.initial_values)
        merged.update(initial_values or {})
        return cls(definition.rules, merged)

    # -------------------------------------------------------------------------
    # Read surface
    # -------------------------------------------------------------------------

    @property
    def field_names(self) -> list[str]:
        return list(self._rules)

    @property
    def fields(self) -> Mapping[str, FieldState]:
        """Read-only copy of every field's current state."""
        return MappingProxyType(dict(self._fields))

    @property
    def is_valid(self) -> bool:
        return all(state.is_valid for state in self._fields.values())

    @property
    def is_dirty(self) -> bool:
        return any(state.touched for state in self._fields.values())

    def snapshot(self) -> FormSnapshot:
        return FormSnapshot(fields=self._fields)

    def get_values(self) -> dict[str, str]:
        """Current values keyed by field name, for building a submission payload."""
        return {name: state.value for name, state in self._fields.items()}

    def validate_field(self, name: str, value: str) -> str | None:
        """Evaluate ``name``'s rules against ``value`` without touching any state."""
        rules = self._rules.get(name)
        if rules is None:
            return None
        failure = check(rules, value)
        return failure.message if failure else None

    # -------------------------------------------------------------------------
    # Field transitions
    # -------------------------------------------------------------------------

    def set_value(self, name: str, value: str) -> None:
        """Store a new value and re-run the field's rules.

        The error is only refreshed once the field has been touched, so the
        user can type without seeing messages. A previous override is replaced.
        """
        state = self._lookup(name, "set_value")
        if state is None:
            return

        failure = check(self._rules[name], value)
        if state.touched:
            self._fields[name] = self._with_failure(replace(state, value=value), failure)
        else:
            self._fields[name] = replace(
                state,
                value=value,
                is_valid=failure is None,
                error=None,
                error_code=None,
            )

    def set_touched(self, name: str) -> None:
        """Mark a field as touched and show its current rule outcome."""
        state = self._lookup(name, "set_touched")
        if state is None:
            return

        failure = check(self._rules[name], state.value)
        self._fields[name] = self._with_failure(replace(state, touched=True), failure)
        logger.debug("Field '%s' touched (valid=%s)", name, failure is None)

    def set_error(self, name: str, message: str | None) -> None:
        """Override a field's error with an externally sourced message.

        Passing None (or "") clears the override and restores the rule outcome
        for the current value. The field is marked touched either way.
        """
        state = self._lookup(name, "set_error")
        if state is None:
            return

        if message:
            self._fields[name] = replace(
                state,
                touched=True,
                error=message,
                error_code=ErrorCode.OVERRIDE,
                is_valid=False,
            )
            logger.debug("Field '%s' error overridden: %s", name, message)
            return

        self._fields[name] = replace(
            state,
            touched=True,
            error=None,
            error_code=None,
            is_valid=check(self._rules[name], state.value) is None,
        )

    # -------------------------------------------------------------------------
    # Bulk operations
    # -------------------------------------------------------------------------

    def validate_all(self) -> bool:
        """Touch and validate every field.

        Returns:
            True if every field passes after the sweep
        """
        for name, state in self._fields.items():
            failure = check(self._rules[name], state.value)
            self._fields[name] = self._with_failure(replace(state, touched=True), failure)

        is_valid = self.is_valid
        logger.debug("validate_all: %d field(s), valid=%s", len(self._fields), is_valid)
        return is_valid

    def reset(self) -> None:
        """Return every field to its construction-time value, untouched and error-free."""
        self._fields = self._initial_fields()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _initial_fields(self) -> dict[str, FieldState]:
        return {
            name: FieldState(
                value=value,
                is_valid=check(self._rules[name], value) is None,
            )
            for name, value in self._initial.items()
        }

    def _lookup(self, name: str, operation: str) -> FieldState | None:
        state = self._fields.get(name)
        if state is None:
            logger.warning("%s: field '%s' is not declared on this form, ignoring", operation, name)
        return state

    @staticmethod
    def _with_failure(state: FieldState, failure: RuleFailure | None) -> FieldState:
        if failure is None:
            return replace(state, error=None, error_code=None, is_valid=True)
        return replace(state, error=failure.message, error_code=failure.code, is_valid=False)
