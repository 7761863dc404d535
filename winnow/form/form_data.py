"""Decoding of raw form input into ``key -> list of values`` mappings.

Accepted input:

- ``str`` / ``bytes``: an ``application/x-www-form-urlencoded`` query string.
- A mapping of pre-decoded data; scalar values are wrapped in lists.
- A request-like object exposing ``content_type`` (or a ``headers``
  mapping with ``content-type``) and a body (``body`` bytes, or a readable
  ``body`` / ``stream``).  URL-encoded and ``multipart/form-data`` bodies
  are supported; multipart file parts become
  :class:`~winnow.core.uploads.UploadedFile` values.

File parts with an empty filename (an unselected file input) are dropped,
but their key is still recorded with an empty list.
"""

from __future__ import annotations

from io import BytesIO
from typing import Any, Mapping
from urllib.parse import parse_qsl

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from ..core.exceptions import FormDataError
from ..core.uploads import UploadedFile
from ..utils.logger import get_logger

logger = get_logger(__name__)

FormData = dict[str, list[Any]]

URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"


def parse_form_data(input: Any, charset: str = "utf-8") -> FormData:
    """Decode *input* into a fresh ``key -> list of values`` dict.

    Raises:
        FormDataError: If the input type or media type is not supported, a
            multipart body has no boundary or is malformed, or the input is
            not valid in *charset*.
    """
    if isinstance(input, str):
        return parse_query(input, charset)
    if isinstance(input, (bytes, bytearray)):
        return parse_query(_decode(bytes(input), charset, "form data"), charset)
    if isinstance(input, Mapping):
        return normalize_mapping(input)

    content_type = _request_content_type(input)
    if content_type is None:
        raise FormDataError(f"can't parse {type(input).__name__} form data")

    media_type, options = parse_options_header(content_type)
    media_type = media_type.decode("latin-1").lower()

    if media_type == URLENCODED:
        return parse_query(_decode(_read_body(input), charset, "form data"), charset)

    if media_type == MULTIPART:
        boundary = options.get(b"boundary")
        if not boundary:
            raise FormDataError("multipart form data without a boundary")
        return parse_multipart(_read_body(input), boundary, charset)

    raise FormDataError(f"can't parse {media_type!r} form data")


def parse_query(query: str, charset: str = "utf-8") -> FormData:
    """``"a=1&b=2&b=3"`` -> ``{"a": ["1"], "b": ["2", "3"]}``."""
    data: FormData = {}
    try:
        pairs = parse_qsl(query, keep_blank_values=True, encoding=charset, errors="strict")
    except UnicodeDecodeError as exc:
        raise FormDataError(f"form data is not valid {charset}: {exc.reason}") from exc
    for key, value in pairs:
        data.setdefault(key, []).append(value)
    return data


def normalize_mapping(mapping: Mapping[str, Any]) -> FormData:
    data: FormData = {}
    for key, value in mapping.items():
        values = list(value) if isinstance(value, (list, tuple)) else [value]
        data[str(key)] = [_normalize_value(v) for v in values if not _is_empty_upload(v)]
    return data


def parse_multipart(body: bytes, boundary: bytes | str, charset: str = "utf-8") -> FormData:
    """Decode a ``multipart/form-data`` body with python-multipart."""
    collector = _MultipartCollector(charset)
    parser = MultipartParser(boundary, collector.callbacks())
    try:
        parser.write(body)
        parser.finalize()
    except MultipartParseError as exc:
        raise FormDataError(f"malformed multipart form data: {exc}") from exc
    return collector.data


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _normalize_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, str) or hasattr(value, "original_filename"):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _decode(data: bytes, charset: str, what: str) -> str:
    try:
        return data.decode(charset)
    except UnicodeDecodeError as exc:
        raise FormDataError(f"{what} is not valid {charset}: {exc.reason}") from exc


def _is_empty_upload(value: Any) -> bool:
    return hasattr(value, "original_filename") and not value.original_filename


def _request_content_type(request: Any) -> str | None:
    content_type = getattr(request, "content_type", None)
    if isinstance(content_type, str):
        return content_type
    headers = getattr(request, "headers", None)
    if headers is not None and hasattr(headers, "get"):
        return headers.get("content-type") or headers.get("Content-Type")
    return None


def _read_body(request: Any) -> bytes:
    body = getattr(request, "body", None)
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)

    stream = body if hasattr(body, "read") else getattr(request, "stream", None)
    if stream is None or not hasattr(stream, "read"):
        raise FormDataError(f"{type(request).__name__} has no readable body")

    if hasattr(stream, "seek"):
        stream.seek(0)
    data = stream.read()
    return data.encode("latin-1") if isinstance(data, str) else data


class _MultipartCollector:
    """Accumulates multipart parser callbacks into form data."""

    def __init__(self, charset: str) -> None:
        self.charset = charset
        self.data: FormData = {}
        self._headers: dict[bytes, bytes] = {}
        self._header_field = b""
        self._header_value = b""
        self._content = BytesIO()

    def callbacks(self) -> dict[str, Any]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
        }

    def on_part_begin(self) -> None:
        self._headers = {}
        self._content = BytesIO()

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._content.write(data[start:end])

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[self._header_field.lower()] = self._header_value
        self._header_field = b""
        self._header_value = b""

    def on_part_end(self) -> None:
        _, options = parse_options_header(self._headers.get(b"content-disposition"))
        raw_name = options.get(b"name")
        if raw_name is None:
            logger.debug("Ignoring multipart part without a name")
            return

        name = _decode(raw_name, self.charset, "multipart field name")
        values = self.data.setdefault(name, [])
        filename = options.get(b"filename")

        if filename is None:
            values.append(_decode(self._content.getvalue(), self.charset, f"multipart field {name!r}"))
            return

        if not filename:
            return

        self._content.seek(0)
        values.append(UploadedFile(
            original_filename=_decode(filename, self.charset, f"filename of multipart field {name!r}"),
            content_type=self._headers.get(b"content-type", b"application/octet-stream").decode("latin-1"),
            file=self._content,
        ))
