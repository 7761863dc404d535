"""
Core functionality for the Winnow form library.
"""

from .condition import Condition, ConditionOutcome, evaluate_condition, halts
from .config import FRAMEWORK_KEYS, FormConfig
from .exceptions import (
    ConfigurationError,
    DuplicateValueError,
    FormDataError,
    MissingKeyError,
    StructuralError,
    UnexpectedKeysError,
    WinnowError,
)
from .presence import is_blank, is_present
from .scrub import SCRUBBERS, scrub
from .translation import DictBackend, TranslationBackend, Translator
from .uploads import UploadedFile

__all__ = [
    'Condition',
    'ConditionOutcome',
    'evaluate_condition',
    'halts',
    'FRAMEWORK_KEYS',
    'FormConfig',
    'ConfigurationError',
    'DuplicateValueError',
    'FormDataError',
    'MissingKeyError',
    'StructuralError',
    'UnexpectedKeysError',
    'WinnowError',
    'is_blank',
    'is_present',
    'SCRUBBERS',
    'scrub',
    'DictBackend',
    'TranslationBackend',
    'Translator',
    'UploadedFile',
]
