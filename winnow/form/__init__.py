"""
Form declaration, form-data decoding and the parse engine.
"""

from .engine import FormEngine, FormSchema
from .form import Form
from .form_data import parse_form_data

__all__ = [
    'Form',
    'FormEngine',
    'FormSchema',
    'parse_form_data',
]
