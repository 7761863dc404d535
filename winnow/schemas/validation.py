"""ValidationSpec: cross-field rules evaluated after all fields are parsed."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..core.condition import Condition, evaluate_condition
from ..core.exceptions import ConfigurationError
from ..core.presence import is_present
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..form.form import Form

logger = get_logger(__name__)


class ValidationSpec(BaseModel):
    """A predicate over the parsed form that produces one named error.

    The predicate always receives the form.  If it accepts a second
    positional parameter it also receives the target field's current value,
    which is what methods decorated with :func:`validates` look like::

        @validates("email", error="taken")
        def email_is_unique(self, email):
            return email not in TAKEN

    The predicate runs only when the precondition (``when``) holds, the
    target field has a present value and the target field has no errors yet.
    A spec with ``field_name=None`` is a form-level check: only ``when``
    gates it and its error carries no field.

    Attributes:
        field_name: Target field, or ``None`` for a form-level check.
        error: Symbolic error key (default ``"invalid"``).
        when: Optional precondition.
        predicate: The rule; a falsy result adds the error.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    field_name: Optional[str] = None
    error: str = "invalid"
    when: Any = None
    predicate: Callable[..., Any]

    @field_validator("when")
    @classmethod
    def _coerce_condition(cls, value: Any) -> Optional[Condition]:
        if value is None:
            return None
        try:
            return Condition.coerce(value)
        except ConfigurationError as exc:
            raise ValueError(exc.message) from None

    @property
    def takes_value(self) -> bool:
        """True if the predicate accepts the target value after the form."""
        try:
            parameters = inspect.signature(self.predicate).parameters.values()
        except (TypeError, ValueError):
            return False
        positional = [
            p for p in parameters
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        ]
        has_varargs = any(p.kind is p.VAR_POSITIONAL for p in parameters)
        return len(positional) >= 2 or has_varargs

    def applies_to(self, form: Form) -> bool:
        if self.when is not None and not evaluate_condition(self.when, form):
            return False
        if self.field_name is None:
            return True
        return (
            is_present(getattr(form, self.field_name))
            and not form.has_errors_on(self.field_name)
        )

    def run(self, form: Form) -> None:
        """Run the predicate against *form*, adding the error on failure."""
        if not self.applies_to(form):
            logger.debug("Skipping %s check on %s", self.error, self.field_name or "form")
            return

        if self.takes_value and self.field_name is not None:
            passed = self.predicate(form, getattr(form, self.field_name))
        else:
            passed = self.predicate(form)

        if not passed:
            if self.field_name is None:
                form.add_check_error(self.error)
            else:
                form.add_error_key(form.fields[self.field_name], self.error)


def validates(
    field_name: Optional[str],
    predicate: Callable[..., Any] | None = None,
    *,
    error: str = "invalid",
    when: Any = None,
) -> Any:
    """Declare a cross-field validation in a form class body.

    Usable as a decorator or called with the predicate directly::

        class SignupForm(Form):
            password = FieldSpec()
            password_confirmation = FieldSpec()

            @validates("password_confirmation", error="does_not_match")
            def confirmation_matches(self, confirmation):
                return confirmation == self.password

            terms = validates(None, lambda form: form.accepted, error="Terms must be accepted")

    The first argument is always the form.  A one-parameter predicate such
    as ``lambda v: ...`` therefore receives the form, not the field value;
    write ``lambda form, value: ...`` to get the value.

    Args:
        field_name: Target field, or ``None`` for a form-level check.
        predicate: The rule, when not used as a decorator.
        error: Symbolic error key resolved through the form's translator.
        when: Precondition (bool, attribute name or callable).
    """

    def decorate(fn: Callable[..., Any]) -> ValidationSpec:
        return ValidationSpec(field_name=field_name, error=error, when=when, predicate=fn)

    if predicate is not None:
        return decorate(predicate)
    return decorate
