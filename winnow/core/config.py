"""
Configuration for Winnow forms.

A form class selects its configuration with a ``config`` class attribute::

    class CommentForm(Form):
        config = FormConfig.for_framework()

        body = FieldSpec(multiline=True)
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Optional

from ..utils.logger import VALID_LOG_LEVELS, set_log_level
from .translation import TranslationBackend, Translator

# Keys injected by host web frameworks into every form submission:
# Rails (authenticity_token, commit, utf8), Django, Flask-WTF.
FRAMEWORK_KEYS = frozenset({
    "authenticity_token",
    "commit",
    "utf8",
    "csrfmiddlewaretoken",
    "csrf_token",
})


@dataclass
class FormConfig:
    """
    Configuration for parsing and validating a form.

    Shared by every instance of the form class that declares it.
    """

    # === Input Handling ===
    strip_framework_keys: bool = False
    """Discard framework-injected keys (see FRAMEWORK_KEYS) before the unexpected-key check"""

    charset: str = "utf-8"
    """Charset used to decode byte bodies and multipart text parts"""

    # === Messages ===
    translator: Optional[TranslationBackend] = None
    """Optional localisation backend for error messages and labels"""

    # === Logging Configuration ===
    log_level: Optional[str] = None
    """Level applied to the 'winnow' logger (None leaves it untouched)"""

    # === Validation ===
    def __post_init__(self):
        """Validate configuration values after initialization."""
        try:
            codecs.lookup(self.charset)
        except LookupError:
            raise ValueError(f"charset must be a known codec, got {self.charset!r}")

        if self.translator is not None and not isinstance(self.translator, TranslationBackend):
            raise ValueError(
                f"translator must implement translate(key, *, scope, default), "
                f"got {type(self.translator).__name__}"
            )

        if self.log_level is not None:
            if self.log_level.upper() not in VALID_LOG_LEVELS:
                raise ValueError(
                    f"log_level must be one of {VALID_LOG_LEVELS}, got {self.log_level!r}"
                )
            set_log_level(self.log_level)

    def make_translator(self) -> Translator:
        return Translator(self.translator)

    @classmethod
    def for_framework(cls, **kwargs) -> 'FormConfig':
        """Create configuration for forms posted through a web framework."""
        return cls(strip_framework_keys=True, **kwargs)

    @classmethod
    def for_development(cls, **kwargs) -> 'FormConfig':
        """Create configuration that logs every parse decision."""
        return cls(log_level="DEBUG", **kwargs)
