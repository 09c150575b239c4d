"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import re
from dataclasses import dataclass

from .settings import ArgumentError

_SPAN_PATTERN = re.compile(r"^(?P<start>\d*)(?::(?P<end>\d*))?$")


@dataclass(frozen=True)
class LineSpan:
    """
    A span of lines in a document, identified by 1-based line numbers.

    :param start: First line of the span.
    :param end: Last line of the span (inclusive), or `None` to extend to the end of the document.
    """

    start: int = 1
    end: int | None = None

    def __post_init__(self) -> None:
        if self.start < 1:
            raise ArgumentError(f"line numbers start at 1; got: {self.start}")
        if self.end is not None and self.end < self.start:
            raise ArgumentError(f"last line {self.end} precedes first line {self.start}")

    def __str__(self) -> str:
        return f"{self.start}:{self.end if self.end is not None else ''}"


def parse_line_span(text: str) -> LineSpan:
    """
    Parses a line span specified as `START:END`, `START:`, `:END` or `LINE`.

    :raises ArgumentError: The text is not a valid line span.
    """

    m = _SPAN_PATTERN.match(text.strip())
    if m is None or not (m.group("start") or m.group("end")):
        raise ArgumentError(f"expected: line span in the format START:END; got: {text!r}")

    start = int(m.group("start")) if m.group("start") else 1
    if m.group("end") is None:
        # a single line number
        end: int | None = start
    elif m.group("end"):
        end = int(m.group("end"))
    else:
        end = None
    return LineSpan(start, end)


def select_lines(text: str, span: LineSpan) -> str:
    """
    Extracts a span of lines from a document.

    Lines past the end of the document are ignored.
    """

    lines = text.splitlines(keepends=True)
    return "".join(lines[span.start - 1 : span.end])
