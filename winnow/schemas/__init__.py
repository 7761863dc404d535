"""Schema entries declared on forms.

- FieldSpec: one named, configured field (pydantic model)
- ValidationSpec: a cross-field rule, declared with ``validates``
- ErrorEntry: one collected validation error
"""

from .errors import ErrorEntry
from .field_spec import FieldSpec
from .validation import ValidationSpec, validates

__all__ = [
    "ErrorEntry",
    "FieldSpec",
    "ValidationSpec",
    "validates",
]
