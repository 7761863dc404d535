"""
Custom exceptions for the Winnow form library.

Two disjoint channels exist.  Configuration and structural errors are
raised; end-user validation problems are never raised, they accumulate on
the form as :class:`~winnow.schemas.errors.ErrorEntry` values.
"""

from __future__ import annotations


class WinnowError(Exception):
    """Base exception for all Winnow errors.

    Attributes:
        message: Human-readable error description.
        field: Field name involved (``None`` if not field-specific).
    """

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field

        error_parts = [message]
        if field is not None:
            error_parts.append(f"Field: {field}")

        super().__init__(" | ".join(error_parts))


class ConfigurationError(WinnowError):
    """Raised when a form schema or its configuration is invalid.

    Common causes:
        - A field name that collides with a ``Form`` attribute.
        - A validation that targets a field the form does not declare.
        - An unknown scrub method passed to :func:`~winnow.core.scrub.scrub`.
    """

    pass


class FormDataError(ConfigurationError):
    """Raised when the parse input cannot be decoded into form data.

    Unsupported input types, unsupported media types and multipart bodies
    without a boundary all end up here.
    """

    pass


class StructuralError(WinnowError):
    """Raised when the submitted keys do not match the form schema.

    Structural errors abort the whole parse.  They signal an integration
    defect (the client sent a payload for a different form), not input the
    end user can correct.
    """

    pass


class MissingKeyError(StructuralError):
    """Raised when a required form key is absent from the input.

    Attributes:
        key: The missing wire key.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"missing form key: {key}")


class DuplicateValueError(StructuralError):
    """Raised when a single-valued field receives more than one value.

    Attributes:
        key: The wire key that carried multiple values.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"multiple values for {key} field")


class UnexpectedKeysError(StructuralError):
    """Raised when the input contains keys the form did not consume.

    Attributes:
        keys: The leftover keys, sorted.
    """

    def __init__(self, keys: list[str]):
        self.keys = sorted(keys)
        super().__init__(f"unexpected form keys: {', '.join(self.keys)}")
