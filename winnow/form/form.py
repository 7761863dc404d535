"""Form: declarative base class whose instances are parsed records."""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, Optional

from ..core.config import FormConfig
from ..core.exceptions import ConfigurationError
from ..core.translation import DEFAULT_MESSAGES, Translator
from ..schemas.errors import ErrorEntry
from ..schemas.field_spec import FieldSpec
from .engine import FormEngine, FormSchema
from .form_data import parse_form_data


class Form:
    """Base class for form schemas.

    Subclasses declare fields as :class:`FieldSpec` class attributes,
    cross-field rules with :func:`~winnow.schemas.validation.validates` and
    halting points with :func:`~winnow.core.condition.halts`.  Each instance
    is one record: one attribute per field plus the errors of the last
    parse.

    Example::

        class ProductForm(Form):
            title = FieldSpec(max_length=16)
            colour = FieldSpec(multiple=True)

        form = ProductForm().parse("title=Lamp&colour=black&colour=white")
        form.is_valid()   # True
        form.to_dict()    # {"title": "Lamp", "colour": ["black", "white"]}
    """

    config: ClassVar[FormConfig] = FormConfig()

    _schema: ClassVar[FormSchema] = FormSchema()
    _engine: ClassVar[FormEngine] = FormEngine(FormSchema())

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        schema = FormSchema.from_class(cls)

        for name, spec in schema.fields.items():
            if name == "errors" or hasattr(Form, name):
                raise ConfigurationError(
                    f"{cls.__name__}: field name collides with a Form attribute",
                    field=name,
                )
            setattr(cls, name, spec)

        cls._schema = schema
        cls._engine = FormEngine(schema, cls.config)

    def __init__(self, **values: Any) -> None:
        self.errors: list[ErrorEntry] = []

        for name, spec in self.fields.items():
            setattr(self, name, spec.empty_value())

        for name, value in values.items():
            if name not in self.fields:
                raise TypeError(f"{type(self).__name__} has no field {name!r}")
            setattr(self, name, value)

    # -- schema access ---------------------------------------------------

    @property
    def fields(self) -> Mapping[str, FieldSpec]:
        """Declared fields, in declaration order."""
        return self._schema.fields

    @property
    def translator(self) -> Translator:
        return self._engine.translator

    def label(self, field_name: str) -> str:
        """Display label: the explicit ``label`` option or a translated default."""
        spec = self.fields[field_name]
        return spec.label or self.translator.label(field_name)

    # -- primary API -----------------------------------------------------

    def parse(self, input: Any) -> Form:
        """Parse and validate *input*, populating this form in place.

        Args:
            input: A URL-encoded string, a request object with a
                URL-encoded or multipart body, or a mapping of pre-decoded
                values.

        Returns:
            ``self``, so ``ProductForm().parse(body)`` can be chained.

        Raises:
            StructuralError: Missing, duplicate or unexpected keys.
            FormDataError: The input could not be decoded.
        """
        form_data = parse_form_data(input, charset=self.config.charset)
        self.errors = []
        self._engine.parse(self, form_data)
        return self

    def fill(self, source: Any) -> Form:
        """Copy field values from an object or mapping.

        A field's ``fill`` callable takes precedence; otherwise a mapping
        key or an attribute with the field's name is used.  Fields with no
        matching value keep their current value.
        """
        for name, spec in self.fields.items():
            if spec.fill is not None:
                setattr(self, name, spec.fill(source))
            elif isinstance(source, Mapping):
                if name in source:
                    setattr(self, name, source[name])
            elif hasattr(source, name):
                setattr(self, name, getattr(source, name))
        return self

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.fields}

    # -- errors ----------------------------------------------------------

    def add_error(self, field_name: Optional[str], message: str) -> None:
        """Record an already resolved *message*, e.g. from host-side checks."""
        if field_name is None:
            self.errors.append(ErrorEntry(None, None, message))
            return
        if field_name not in self.fields:
            raise ConfigurationError(f"{type(self).__name__} has no such field", field=field_name)
        self.errors.append(ErrorEntry(field_name, self.label(field_name), message))

    def add_error_key(self, spec: FieldSpec, key: str) -> None:
        """Record the translated message for error *key* on *spec*'s field."""
        message = self.translator.error_message(key)
        self.errors.append(ErrorEntry(spec.name, self.label(spec.name), message))

    def add_check_error(self, key: str) -> None:
        """Record a form-level error; unknown keys are used verbatim."""
        message = self.translator.error_message(key, default=DEFAULT_MESSAGES.get(key, key))
        self.errors.append(ErrorEntry(None, None, message))

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def is_valid(self) -> bool:
        return not self.errors

    @property
    def field_errors(self) -> dict[str, list[ErrorEntry]]:
        """Field name -> errors on that field, for fields with errors."""
        grouped: dict[str, list[ErrorEntry]] = {}
        for error in self.errors:
            if error.field_name is not None:
                grouped.setdefault(error.field_name, []).append(error)
        return grouped

    def errors_on(self, field_name: str) -> list[ErrorEntry]:
        return [error for error in self.errors if error.field_name == field_name]

    def has_errors_on(self, field_name: str) -> bool:
        return any(error.field_name == field_name for error in self.errors)

    def __repr__(self) -> str:
        values = ", ".join(f"{name}={value!r}" for name, value in self.to_dict().items())
        return f"{type(self).__name__}({values})"
