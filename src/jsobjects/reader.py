"""Reader layer: drives an ijson event stream into a TreeBuilder."""

from __future__ import annotations

import codecs
import io
import json
import logging
import os
import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import IO, Union

import ijson

from .builder import ErrorPredicate, TreeBuilder
from .values import INT64_MAX, INT64_MIN, JSDictionary

logger = logging.getLogger(__name__)


Source = Union[str, os.PathLike, IO[bytes], IO[str]]

# Offsets reported by the pure-python backend ("Unexpected symbol 'x' at 12").
_OFFSET_RE = re.compile(r" at (\d+)$")

# "\hh" control escapes as written by jsobjects.dump, preceded by an even
# number of backslashes.  JSON has no escape starting with 0 or 1.
_HEX_ESCAPE_RE = re.compile(rb"(?<!\\)((?:\\\\)*)\\([01][0-9a-fA-F])")


@dataclass(frozen=True)
class ReaderOptions:
    """Reader configuration.

    - ``backend``: ijson backend name. The pure-python backend reports
      character offsets, which give exact error columns.
    - ``hex_escapes``: accept ``\\hh`` control escapes so that dumped
      output reads back.
    """

    backend: str = "python"
    hex_escapes: bool = True


DEFAULT_OPTIONS = ReaderOptions()


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def parse(
    source: Source | None,
    on_error: ErrorPredicate | None = None,
    options: ReaderOptions | None = None,
) -> JSDictionary | None:
    """Parse a JSON object from a file path or an open stream.

    Returns ``None`` when the path is empty, the file cannot be opened, the
    document root is not an object, or *on_error* (default: stop at the
    first error) aborts the parse. Streams are left open.
    """
    if source is None:
        return None

    if isinstance(source, (str, os.PathLike)):
        path = os.fspath(source)
        if not path:
            return None
        try:
            fp = open(path, "rb")
        except OSError as exc:
            logger.warning("cannot open %s: %s", path, exc)
            return None
        with fp:
            return _parse_stream(fp, on_error, options)

    return _parse_stream(source, on_error, options)


def parse_text(
    text: str | bytes,
    on_error: ErrorPredicate | None = None,
    options: ReaderOptions | None = None,
) -> JSDictionary | None:
    """Parse a JSON object held in memory."""
    data = text.encode("utf-8") if isinstance(text, str) else text
    return _parse_stream(io.BytesIO(data), on_error, options)


# ---------------------------------------------------------------------------
# Line-fed source
# ---------------------------------------------------------------------------

class LineSource:
    """File-like wrapper handing ijson one line per ``read()``.

    Feeding a line at a time keeps the lexer from running ahead, so the
    line being consumed when an error surfaces is the line that caused it.
    """

    def __init__(self, stream: IO[bytes] | IO[str], hex_escapes: bool = True) -> None:
        self._stream = stream
        self._hex_escapes = hex_escapes
        self._starts: list[int] = []  # character offset of each line fed
        self._length = 0
        self._last = b""

    @property
    def line(self) -> int:
        """Number of lines handed out so far."""
        return len(self._starts)

    def read(self, size: int = -1) -> bytes:
        # ijson probes the stream type with read(0).
        if size == 0:
            return b""
        raw = self._stream.readline()
        if not raw:
            return b""
        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        # A leading byte order mark is not part of the document.
        if not self._starts and raw.startswith(codecs.BOM_UTF8):
            raw = raw[len(codecs.BOM_UTF8):]
        if self._hex_escapes:
            raw = _HEX_ESCAPE_RE.sub(rb"\1\\u00\2", raw)
        self._starts.append(self._length)
        self._length += len(raw.decode("utf-8", "replace"))
        self._last = raw
        return raw

    def position(self, offset: int | None = None) -> tuple[int, int]:
        """Map a character *offset* to 1-based ``(line, column)``.

        Without an offset, the end of the last line read is reported.
        """
        if offset is None or not self._starts:
            width = len(self._last.rstrip(b"\r\n").decode("utf-8", "replace"))
            return max(self.line, 1), width + 1
        index = max(bisect_right(self._starts, offset) - 1, 0)
        return index + 1, offset - self._starts[index] + 1


# ---------------------------------------------------------------------------
# Event dispatch
# ---------------------------------------------------------------------------

def _parse_stream(
    stream: IO[bytes] | IO[str],
    on_error: ErrorPredicate | None,
    options: ReaderOptions | None,
) -> JSDictionary | None:
    options = options or DEFAULT_OPTIONS
    builder = TreeBuilder(on_error)
    source = LineSource(stream, options.hex_escapes)
    feed_events(source, builder, options.backend)
    return builder.finish()


def feed_events(source: LineSource, builder: TreeBuilder, backend: str = "python") -> None:
    """Run the ijson *backend* over *source*, forwarding events to *builder*.

    Syntax errors end the stream whatever the predicate answers, since the
    lexer cannot resume; out-of-range integers can be skipped.
    """
    events = ijson.get_backend(backend).basic_parse(source, use_float=True)
    key: str | None = None
    started = False

    try:
        for event, value in events:
            if not started:
                started = True
                if event != "start_map":
                    line, column = source.position()
                    builder.error(line, column, "document root is not an object")
                    return

            if event == "map_key":
                key = value
                continue

            if event == "start_map":
                builder.enter_object(key)
            elif event == "start_array":
                builder.enter_array(key)
            elif event in ("end_map", "end_array"):
                builder.leave()
            elif event == "string":
                builder.on_string(key, value)
            elif event == "number":
                if isinstance(value, int):
                    if INT64_MIN <= value <= INT64_MAX:
                        builder.on_integer(key, value)
                    else:
                        line, column = source.position()
                        builder.error(line, column, f"integer out of 64-bit range: {value}")
                else:
                    builder.on_real(key, value)
            elif event == "boolean":
                builder.on_boolean(key, value)
            elif event == "null":
                builder.on_null(key)

            key = None
            if builder.aborted:
                return

    except json.JSONDecodeError as exc:
        # Bad string escape; its position is relative to the string lexeme.
        line, column = source.position()
        builder.error(line, column, exc.msg)
    except ijson.JSONError as exc:
        message = str(exc)
        match = _OFFSET_RE.search(message)
        line, column = source.position(int(match.group(1)) if match else None)
        builder.error(line, column, message)
