"""
Winnow - declarative form parsing and validation

Declare a form's fields and cross-field rules once, then parse URL-encoded
strings, multipart requests or plain mappings against it.  Structural
mismatches raise; user-correctable problems accumulate as error messages.
"""

import logging

from .core import (
    ConfigurationError,
    DictBackend,
    DuplicateValueError,
    FormConfig,
    FormDataError,
    MissingKeyError,
    StructuralError,
    TranslationBackend,
    UnexpectedKeysError,
    UploadedFile,
    WinnowError,
    halts,
)
from .form import Form, parse_form_data
from .schemas import ErrorEntry, FieldSpec, validates

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    'Form',
    'FieldSpec',
    'validates',
    'halts',
    'FormConfig',
    'ErrorEntry',
    'UploadedFile',
    'DictBackend',
    'TranslationBackend',
    'parse_form_data',
    'WinnowError',
    'ConfigurationError',
    'FormDataError',
    'StructuralError',
    'MissingKeyError',
    'DuplicateValueError',
    'UnexpectedKeysError',
]
