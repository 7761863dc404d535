"""Tests for FieldSpec: declaration checks and single-field validation."""

from __future__ import annotations

import re
from io import BytesIO

import pytest
from pydantic import ValidationError

from winnow import FieldSpec, Form, UploadedFile


def _upload(filename: str, content_type: str, content: bytes = b"") -> UploadedFile:
    return UploadedFile(original_filename=filename, content_type=content_type, file=BytesIO(content))


def _messages(form: Form) -> list[str]:
    return [str(error) for error in form.errors]


class _TextForm(Form):
    title = FieldSpec(max_length=5, pattern=r"^[a-z]+$")
    summary = FieldSpec(required=False, blank="n/a", scrub=["strip"])
    body = FieldSpec(multiline=True, min_length=3, max_length=None)
    answer = FieldSpec(values=["yes", "no"])
    tags = FieldSpec(multiple=True, scrub="downcase")
    note = FieldSpec(required=False)


class _UploadForm(Form):
    document = FieldSpec(accept="text/plain,text/rtf")
    photos = FieldSpec(accept="image/png", multiple=True, maxsize=10)


class TestFieldSpecDeclaration:
    def test_defaults(self):
        spec = FieldSpec()
        assert spec.required is True
        assert spec.multiline is False
        assert spec.multiple is False
        assert spec.key_required is True
        assert spec.max_length == 64
        assert spec.min_length is None
        assert spec.pattern is None
        assert spec.scrub == []
        assert spec.has_blank_substitute is False

    def test_pattern_compiled_from_string(self):
        spec = FieldSpec(pattern=r"\d+")
        assert isinstance(spec.pattern, re.Pattern)

    def test_single_scrub_name_wrapped(self):
        assert FieldSpec(scrub="strip").scrub == ["strip"]

    def test_blank_explicitly_none(self):
        spec = FieldSpec(required=False, blank=None)
        assert spec.has_blank_substitute is True

    def test_accepted_types(self):
        spec = FieldSpec(accept="image/png, Image/JPEG")
        assert spec.accepted_types == ("image/png", "image/jpeg")
        assert spec.is_file_field is True

    def test_frozen(self):
        spec = FieldSpec()
        with pytest.raises(ValidationError):
            spec.required = False  # type: ignore[misc]


class TestFieldSpecRejection:
    def test_unknown_option_rejected(self):
        with pytest.raises(ValidationError, match="extra_forbidden"):
            FieldSpec(char_limit=16)  # type: ignore[call-arg]

    def test_unknown_scrub_rejected(self):
        with pytest.raises(ValidationError):
            FieldSpec(scrub=["strip", "reverse"])

    def test_defined_if_and_unless_exclusive(self):
        with pytest.raises(ValidationError, match="mutually exclusive"):
            FieldSpec(defined_if="a", defined_unless="b")

    def test_min_length_above_max_length(self):
        with pytest.raises(ValidationError, match="exceeds max_length"):
            FieldSpec(min_length=10, max_length=5)

    def test_empty_accept(self):
        with pytest.raises(ValidationError, match="at least one MIME type"):
            FieldSpec(accept=" , ")

    def test_bad_condition_type(self):
        with pytest.raises(ValidationError, match="Condition must be"):
            FieldSpec(defined_if=3)


class TestValidateValue:
    def setup_method(self):
        self.form = _TextForm()

    def test_valid_value_returned(self):
        assert self.form.fields["title"].validate_value("abc", self.form) == "abc"
        assert self.form.errors == []

    def test_errors_accumulate_in_order(self):
        self.form.fields["title"].validate_value("ABCDEFG", self.form)
        assert _messages(self.form) == ["Title is too long", "Title is invalid"]

    def test_blank_required(self):
        self.form.fields["title"].validate_value("   ", self.form)
        assert _messages(self.form) == ["Title is required"]

    def test_blank_substitute(self):
        value = self.form.fields["summary"].validate_value("  ", self.form)
        assert value == "n/a"
        assert self.form.errors == []

    def test_scrub_applied_before_checks(self):
        assert self.form.fields["summary"].validate_value("  hi  ", self.form) == "hi"

    def test_newlines_rejected_unless_multiline(self):
        self.form.fields["answer"].validate_value("yes\nno", self.form)
        assert _messages(self.form) == ["Answer cannot contain newlines", "Answer is invalid"]

    def test_only_line_feed_separates_lines(self):
        spec = self.form.fields["note"]
        for value in ("a\x0cb", "a\rb", "a\x0bb", "a\u2028b", "a\x85b"):
            spec.validate_value(value, self.form)
        assert self.form.errors == []

    def test_trailing_newline_is_one_line(self):
        self.form.fields["note"].validate_value("a\n", self.form)
        assert self.form.errors == []

    def test_crlf_separates_lines(self):
        self.form.fields["note"].validate_value("a\r\nb", self.form)
        assert _messages(self.form) == ["Note cannot contain newlines"]

    def test_multiline_allowed(self):
        self.form.fields["body"].validate_value("line one\nline two", self.form)
        assert self.form.errors == []

    def test_too_short(self):
        self.form.fields["body"].validate_value("ab", self.form)
        assert _messages(self.form) == ["Body is too short"]

    def test_bad_value(self):
        self.form.fields["answer"].validate_value("maybe", self.form)
        assert _messages(self.form) == ["Answer is invalid"]
        assert self.form.errors[0].field_name == "answer"

    def test_length_counts_characters_not_bytes(self):
        spec = self.form.fields["title"]
        spec_without_pattern = spec.model_copy(update={"pattern": None})
        spec_without_pattern.validate_value("ééééé", self.form)
        assert self.form.errors == []
        spec_without_pattern.validate_value("éééééé", self.form)
        assert _messages(self.form) == ["Title is too long"]


class TestValidateAll:
    def test_single_value_assigned(self):
        form = _TextForm()
        form.fields["answer"].validate_all(["yes"], form)
        assert form.answer == "yes"

    def test_multiple_values_collected_in_order(self):
        form = _TextForm()
        form.fields["tags"].validate_all(["Red", "BLUE"], form)
        assert form.tags == ["red", "blue"]

    def test_multiple_values_replace_previous(self):
        form = _TextForm(tags=["old"])
        form.fields["tags"].validate_all(["new"], form)
        assert form.tags == ["new"]

    def test_empty_list_leaves_single_value_untouched(self):
        form = _TextForm()
        form.fields["answer"].validate_all([], form)
        assert form.answer is None
        assert form.errors == []

    def test_files_within_budget(self):
        form = _UploadForm()
        photos = [_upload("a.png", "image/png", b"12345"), _upload("b.png", "image/png", b"12345")]
        form.fields["photos"].validate_all(photos, form)
        assert form.photos == photos
        assert form.errors == []

    def test_files_over_budget_reported_once(self):
        form = _UploadForm()
        photos = [_upload("a.png", "image/png", b"123456"), _upload("b.png", "image/png", b"123456")]
        form.fields["photos"].validate_all(photos, form)
        assert _messages(form) == ["Photos is too large"]

    def test_too_large_follows_per_file_errors(self):
        form = _UploadForm()
        photos = [_upload("a.txt", "text/plain", b"12345678901")]
        form.fields["photos"].validate_all(photos, form)
        assert _messages(form) == ["Photos is not an accepted file type", "Photos is too large"]


class TestAcceptableFile:
    def setup_method(self):
        self.spec = _UploadForm.document

    def test_invalid_content_type(self):
        assert self.spec.is_acceptable_file(_upload("file.txt", "text/invalid")) is False

    def test_matching_accepted_type(self):
        assert self.spec.is_acceptable_file(_upload("file.rtf", "text/rtf")) is True
        assert self.spec.is_acceptable_file(_upload("file.txt", "text/plain")) is True

    def test_matching_type_not_accepted(self):
        spec = FieldSpec(accept="image/png")
        assert spec.is_acceptable_file(_upload("file.rtf", "text/rtf")) is False

    def test_content_type_disagrees_with_filename(self):
        assert self.spec.is_acceptable_file(_upload("file.txt", "text/html")) is False

    def test_declared_type_parameters_ignored(self):
        assert self.spec.is_acceptable_file(_upload("file.txt", "text/plain; charset=utf-8")) is True

    def test_octet_stream_uses_filename_type(self):
        upload = _upload("file.md", "application/octet-stream")
        assert FieldSpec(accept="text/markdown").is_acceptable_file(upload) is True
        assert FieldSpec(accept="text/plain").is_acceptable_file(upload) is False

    def test_validate_file_reports_error(self):
        form = _UploadForm()
        form.fields["document"].validate_file(_upload("file.png", "image/png"), form)
        assert _messages(form) == ["Document is not an accepted file type"]
