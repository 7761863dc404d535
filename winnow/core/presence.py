"""Presence checks shared by fields and validations."""

from __future__ import annotations

import re
from typing import Any

_NON_WHITESPACE = re.compile(r"\S")


def is_present(value: Any) -> bool:
    """Return True unless *value* is meaningfully absent.

    ``None``, empty collections and whitespace-only strings are absent.
    Everything else (including ``0`` and ``False``) is present.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return _NON_WHITESPACE.search(value) is not None
    if hasattr(value, "__len__"):
        return len(value) > 0
    return True


def is_blank(value: Any) -> bool:
    return not is_present(value)
