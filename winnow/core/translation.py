"""Translation of error keys and field labels.

A :class:`Translator` resolves symbolic keys (``"required"``, ``"too_long"``,
a field name, ...) to human strings.  When a :class:`TranslationBackend` is
configured it is consulted first; backend failures are logged and never
crash a parse.  Without a backend the compiled-in defaults are returned.

Example::

    backend = DictBackend({"winnow": {"errors": {"required": "est requis"}}})
    Translator(backend).error_message("required")  # "est requis"
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Protocol, runtime_checkable

from ..utils.logger import get_logger

logger = get_logger(__name__)

ERRORS_SCOPE = ("winnow", "errors")
LABELS_SCOPE = ("winnow", "labels")

DEFAULT_ERROR_MESSAGE = "is invalid"

DEFAULT_MESSAGES: Mapping[str, str] = MappingProxyType({
    "bad_value": "is invalid",
    "invalid": "is invalid",
    "no_match": "is invalid",
    "not_accepted": "is not an accepted file type",
    "not_multiline": "cannot contain newlines",
    "required": "is required",
    "too_large": "is too large",
    "too_long": "is too long",
    "too_short": "is too short",
})


def default_label(name: str) -> str:
    """``"vat_number"`` -> ``"Vat number"``."""
    text = str(name).replace("_", " ")
    return text[:1].upper() + text[1:]


@runtime_checkable
class TranslationBackend(Protocol):
    """Protocol for localisation backends.

    Implementations return *default* when they have no entry for *key*.
    """

    def translate(self, key: str, *, scope: tuple[str, ...], default: str) -> str: ...


class DictBackend:
    """Backend over a nested mapping of ``scope -> ... -> key -> text``."""

    def __init__(self, messages: Mapping[str, Any]) -> None:
        self.messages = messages

    def translate(self, key: str, *, scope: tuple[str, ...], default: str) -> str:
        node: Any = self.messages
        for part in (*scope, key):
            if not isinstance(node, Mapping) or part not in node:
                return default
            node = node[part]
        return node if isinstance(node, str) else default


class Translator:
    """Resolves error keys and labels, falling back to defaults."""

    def __init__(self, backend: TranslationBackend | None = None) -> None:
        self.backend = backend

    def translate(self, key: str, scope: tuple[str, ...], default: str) -> str:
        if self.backend is None:
            return default
        try:
            return self.backend.translate(key, scope=scope, default=default)
        except Exception:
            logger.warning(
                "Translation backend %r failed for %s.%s",
                self.backend, ".".join(scope), key, exc_info=True,
            )
            return default

    def error_message(
        self,
        key: str,
        scope: tuple[str, ...] = ERRORS_SCOPE,
        default: str | None = None,
    ) -> str:
        """Message for an error key, e.g. ``"too_long"`` -> ``"is too long"``."""
        if default is None:
            default = DEFAULT_MESSAGES.get(key, DEFAULT_ERROR_MESSAGE)
        return self.translate(key, scope, default)

    def label(self, name: str) -> str:
        return self.translate(str(name), LABELS_SCOPE, default_label(name))
