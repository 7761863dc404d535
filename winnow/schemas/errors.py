"""Validation error entries collected on a form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ErrorEntry:
    """One validation error.

    Attributes:
        field_name: Field the error belongs to (``None`` for form-level checks).
        label: Display label of the field (``None`` for form-level checks).
        message: Resolved message, e.g. ``"is required"``.
    """

    field_name: Optional[str]
    label: Optional[str]
    message: str

    def __str__(self) -> str:
        if self.label is None:
            return self.message
        return f"{self.label} {self.message}"
