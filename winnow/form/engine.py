"""FormEngine: reconciles a form schema against decoded form data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Union

from ..core.condition import ConditionOutcome, HaltSpec
from ..core.config import FRAMEWORK_KEYS, FormConfig
from ..core.exceptions import (
    ConfigurationError,
    DuplicateValueError,
    MissingKeyError,
    UnexpectedKeysError,
)
from ..core.translation import Translator
from ..schemas.field_spec import FieldSpec
from ..schemas.validation import ValidationSpec
from ..utils.logger import get_logger
from .form_data import FormData

if TYPE_CHECKING:
    from .form import Form

logger = get_logger(__name__)

SchemaEntry = Union[FieldSpec, HaltSpec]


@dataclass(frozen=True)
class FormSchema:
    """Ordered schema of a form class.

    Attributes:
        entries: Fields and halting points in declaration order.
        fields: Field name -> named FieldSpec.
        validations: Cross-field validations in declaration order.
    """

    entries: tuple[SchemaEntry, ...] = ()
    fields: Mapping[str, FieldSpec] = field(default_factory=dict)
    validations: tuple[ValidationSpec, ...] = ()

    @classmethod
    def from_class(cls, form_class: type) -> FormSchema:
        """Collect schema entries from *form_class* and its bases.

        A subclass extends its parent's schema; redefining a name replaces
        the parent's entry in place.
        """
        entries: dict[str, SchemaEntry] = {}
        validations: dict[str, ValidationSpec] = {}

        for klass in reversed(form_class.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, FieldSpec):
                    entries[name] = value.model_copy(
                        update={"name": name, "key": value.key or name}
                    )
                elif isinstance(value, HaltSpec):
                    entries[name] = value
                elif isinstance(value, ValidationSpec):
                    validations[name] = value

        fields = {
            name: entry for name, entry in entries.items() if isinstance(entry, FieldSpec)
        }
        schema = cls(
            entries=tuple(entries.values()),
            fields=fields,
            validations=tuple(validations.values()),
        )
        schema._check(form_class.__name__)
        return schema

    def _check(self, form_name: str) -> None:
        seen_keys: dict[str, str] = {}
        for name, spec in self.fields.items():
            if spec.key in seen_keys:
                raise ConfigurationError(
                    f"{form_name}: fields {seen_keys[spec.key]!r} and {name!r} "
                    f"share the form key {spec.key!r}"
                )
            seen_keys[spec.key] = name

        for validation in self.validations:
            if validation.field_name is not None and validation.field_name not in self.fields:
                raise ConfigurationError(
                    f"{form_name}: validation refers to unknown field",
                    field=validation.field_name,
                )


class FormEngine:
    """Runs the parse algorithm for one form class.

    The engine is shared by every instance of the form class and holds no
    per-parse state: each :meth:`parse` works on its own copy of the form
    data and mutates only the form passed in.
    """

    def __init__(self, schema: FormSchema, config: FormConfig | None = None) -> None:
        self.schema = schema
        self.config = config or FormConfig()
        self.translator: Translator = self.config.make_translator()

    def parse(self, form: Form, form_data: Mapping[str, list[Any]]) -> None:
        """Populate *form* from decoded *form_data*.

        Phases:
          1. Reconcile every field in declaration order.
          2. Strip framework-injected keys (when configured).
          3. Reject leftover keys.
          4. Run cross-field validations.

        Raises:
            MissingKeyError: A required key is absent.
            DuplicateValueError: A single-valued field got several values.
            UnexpectedKeysError: Keys remain after all fields were read.
        """
        data: FormData = {key: list(values) for key, values in form_data.items()}
        logger.debug("Parsing %s with keys %s", type(form).__name__, sorted(data))

        self._reconcile_fields(form, data)

        if self.config.strip_framework_keys:
            self._strip_framework_keys(data)

        if data:
            raise UnexpectedKeysError(list(data))

        for validation in self.schema.validations:
            validation.run(form)

    # -- phases ----------------------------------------------------------

    def _reconcile_fields(self, form: Form, data: FormData) -> None:
        entries = self.schema.entries

        for index, entry in enumerate(entries):
            outcome = self._outcome(entry, form)

            if outcome is ConditionOutcome.HALT_REMAINING_FIELDS:
                self._discard_remaining(entries[index + 1:], data)
                return

            if outcome is ConditionOutcome.SKIP_FIELD:
                logger.debug("Field %s is not defined for this form", entry.name)
                continue

            if isinstance(entry, HaltSpec):
                continue

            self._reconcile_field(entry, form, data)

    def _reconcile_field(self, spec: FieldSpec, form: Form, data: FormData) -> None:
        if spec.key not in data:
            if spec.multiple or not spec.key_required or spec.is_file_field:
                return
            raise MissingKeyError(spec.key)

        values = data.pop(spec.key)

        if len(values) > 1 and not spec.multiple:
            raise DuplicateValueError(spec.key)

        spec.validate_all(values, form)

    @staticmethod
    def _outcome(entry: SchemaEntry, form: Form) -> ConditionOutcome:
        if isinstance(entry, HaltSpec):
            return entry.outcome(form)
        return entry.activation(form)

    @staticmethod
    def _discard_remaining(entries: tuple[SchemaEntry, ...], data: FormData) -> None:
        skipped = [entry.key for entry in entries if isinstance(entry, FieldSpec)]
        for key in skipped:
            data.pop(key, None)
        logger.debug("Halted; skipping fields with keys %s", skipped)

    @staticmethod
    def _strip_framework_keys(data: FormData) -> None:
        stripped = [key for key in FRAMEWORK_KEYS if key in data]
        for key in stripped:
            del data[key]
        if stripped:
            logger.debug("Stripped framework keys %s", sorted(stripped))
