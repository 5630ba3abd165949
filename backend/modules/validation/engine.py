"""
Composable validation engine.

A RuleSet is an ordered list of field rules. Every rule runs against its
field regardless of what earlier rules reported, and the errors are
concatenated in declaration order. The outcome is valid iff no rule
reported anything.
"""

from dataclasses import dataclass
from typing import Any, Callable

from .errors import ErrorCode
from .models import ValidationOutcome


FieldCheck = Callable[[Any], ValidationOutcome]


@dataclass(frozen=True)
class FieldRule:
    """Binds a field name on the payload to the check that validates it."""

    field: str
    check: FieldCheck

    def run(self, payload: Any) -> ValidationOutcome:
        return self.check(getattr(payload, self.field, None))


def not_blank(code: ErrorCode) -> FieldCheck:
    """Build a check that rejects None or whitespace-only strings with ``code``."""

    def check(value: Any) -> ValidationOutcome:
        if value is None or not str(value).strip():
            return ValidationOutcome.failure(code)
        return ValidationOutcome.success()

    return check


class RuleSet:
    """Ordered, immutable collection of field rules."""

    def __init__(self, *rules: FieldRule):
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[FieldRule, ...]:
        return self._rules

    def validate(self, payload: Any) -> ValidationOutcome:
        errors: list[ErrorCode] = []
        for rule in self._rules:
            errors.extend(rule.run(payload).errors)
        return ValidationOutcome.from_errors(errors)


def optional(check: FieldCheck) -> FieldCheck:
    """Wrap ``check`` so that an absent (None) value passes."""

    def wrapped(value: Any) -> ValidationOutcome:
        if value is None:
            return ValidationOutcome.success()
        return check(value)

    return wrapped
