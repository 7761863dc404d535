"""Scrub methods: pure string normalisers applied before validation.

The registry is read-only.  :data:`ScrubName` lists its keys so field specs
can reject unknown names when they are declared.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Callable, Iterable, Literal, Mapping

from .exceptions import ConfigurationError

ScrubName = Literal["strip", "upcase", "downcase", "squeeze", "squeeze_lines"]

_SPACE_RUNS = re.compile(r" {2,}")
_BLANK_LINE_RUNS = re.compile(r"(\r?\n)(\r?\n)(\r?\n)+")


def _squeeze(value: str) -> str:
    return _SPACE_RUNS.sub(" ", value)


def _squeeze_lines(value: str) -> str:
    # keep a single blank line between paragraphs
    return _BLANK_LINE_RUNS.sub(r"\1\2", value)


SCRUBBERS: Mapping[str, Callable[[str], str]] = MappingProxyType({
    "strip": str.strip,
    "upcase": str.upper,
    "downcase": str.lower,
    "squeeze": _squeeze,
    "squeeze_lines": _squeeze_lines,
})


def scrub(value: str, names: Iterable[str] | str | None) -> str:
    """Apply the named scrub methods to *value*, left to right.

    Args:
        value: Raw string input.
        names: Scrub method names (or a single name).  ``None`` or an empty
            list returns *value* unchanged.

    Raises:
        ConfigurationError: If a name is not in :data:`SCRUBBERS`.
    """
    if names is None:
        return value
    if isinstance(names, str):
        names = [names]

    for name in names:
        try:
            method = SCRUBBERS[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown scrub method {name!r}. "
                f"Available: {', '.join(sorted(SCRUBBERS))}"
            ) from None
        value = method(value)
    return value
