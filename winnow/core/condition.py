"""Conditions: schema-declared predicates evaluated against a form.

A condition is declared as one of

- a ``bool`` (a fixed property),
- a callable taking the form (a block),
- a ``str`` naming a form attribute or zero-argument method.

Conditions gate field activation (``defined_if`` / ``defined_unless``),
cross-field validations (``when``) and halting entries (``halts``).  The
form is always passed explicitly; nothing is evaluated with an implicit
receiver.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Union

from .exceptions import ConfigurationError

ConditionLike = Union[bool, str, Callable[[Any], Any], "Condition"]


class ConditionKind(str, enum.Enum):
    PROPERTY = "property"
    BLOCK = "block"
    METHOD_NAME = "method_name"


class ConditionOutcome(enum.Enum):
    """What the field loop does with a schema entry."""

    CONTINUE = "continue"
    SKIP_FIELD = "skip_field"
    HALT_REMAINING_FIELDS = "halt_remaining_fields"


@dataclass(frozen=True)
class Condition:
    """Tagged condition variant.

    Attributes:
        kind: Which variant ``value`` holds.
        value: ``bool`` for PROPERTY, a callable for BLOCK, an attribute
            name for METHOD_NAME.
    """

    kind: ConditionKind
    value: Any

    @classmethod
    def coerce(cls, value: ConditionLike) -> Condition:
        if isinstance(value, Condition):
            return value
        if isinstance(value, bool):
            return cls(ConditionKind.PROPERTY, value)
        if isinstance(value, str):
            return cls(ConditionKind.METHOD_NAME, value)
        if callable(value):
            return cls(ConditionKind.BLOCK, value)
        raise ConfigurationError(
            f"Condition must be a bool, an attribute name or a callable, "
            f"got {type(value).__name__}"
        )


def evaluate_condition(condition: ConditionLike, record: Any) -> bool:
    """Evaluate *condition* against *record* and return its truthiness."""
    condition = Condition.coerce(condition)

    if condition.kind is ConditionKind.PROPERTY:
        return condition.value
    if condition.kind is ConditionKind.BLOCK:
        return bool(condition.value(record))

    try:
        attribute = getattr(record, condition.value)
    except AttributeError:
        raise ConfigurationError(
            f"Condition refers to {condition.value!r}, which "
            f"{type(record).__name__} does not define"
        ) from None
    if callable(attribute):
        attribute = attribute()
    return bool(attribute)


def activation_outcome(
    defined_if: ConditionLike | None,
    defined_unless: ConditionLike | None,
    record: Any,
) -> ConditionOutcome:
    """Map a field's activation condition to a loop outcome."""
    if defined_if is not None and not evaluate_condition(defined_if, record):
        return ConditionOutcome.SKIP_FIELD
    if defined_unless is not None and evaluate_condition(defined_unless, record):
        return ConditionOutcome.SKIP_FIELD
    return ConditionOutcome.CONTINUE


@dataclass(frozen=True)
class HaltSpec:
    """Schema entry that stops the field loop when its condition holds.

    Fields declared after a triggered halt are neither read nor required,
    and their keys are discarded from the input.
    """

    condition: Condition

    def outcome(self, record: Any) -> ConditionOutcome:
        if evaluate_condition(self.condition, record):
            return ConditionOutcome.HALT_REMAINING_FIELDS
        return ConditionOutcome.CONTINUE


def halts(condition: ConditionLike) -> HaltSpec:
    """Declare a halting point between fields.

    Example::

        class AddressForm(Form):
            delivery_address = FieldSpec()
            same_address = FieldSpec(values=["yes", "no"])
            stop_if_same = halts(lambda form: form.same_address == "yes")
            billing_address = FieldSpec()
    """
    return HaltSpec(Condition.coerce(condition))
