"""Tests for scrub methods."""

from __future__ import annotations

import pytest

from winnow.core.exceptions import ConfigurationError
from winnow.core.scrub import SCRUBBERS, scrub


class TestScrubMethods:
    def test_strip(self):
        assert scrub("  word \n", ["strip"]) == "word"

    def test_upcase_and_downcase(self):
        assert scrub("Word", ["upcase"]) == "WORD"
        assert scrub("Word", ["downcase"]) == "word"

    def test_squeeze_collapses_spaces_only(self):
        assert scrub("a   b\t\tc", ["squeeze"]) == "a b\t\tc"

    def test_squeeze_lines(self):
        assert scrub("one\n\n\n\ntwo", ["squeeze_lines"]) == "one\n\ntwo"
        assert scrub("one\r\n\r\n\r\ntwo", ["squeeze_lines"]) == "one\r\n\r\ntwo"

    def test_squeeze_lines_keeps_single_blank_line(self):
        assert scrub("one\n\ntwo", ["squeeze_lines"]) == "one\n\ntwo"


class TestScrubPipeline:
    def test_applies_left_to_right(self):
        assert scrub(" word \n\n", ["strip", "upcase"]) == "WORD"

    def test_idempotent(self):
        once = scrub(" word \n\n", ["strip", "upcase"])
        assert scrub(once, ["strip", "upcase"]) == once

    def test_single_name(self):
        assert scrub(" x ", "strip") == "x"

    def test_no_names_is_identity(self):
        assert scrub(" x ", None) == " x "
        assert scrub(" x ", []) == " x "

    def test_unknown_name_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown scrub method 'reverse'"):
            scrub("x", ["strip", "reverse"])

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            SCRUBBERS["reverse"] = lambda s: s[::-1]  # type: ignore[index]
