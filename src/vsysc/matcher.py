"""Line matcher - splits a source line into its identifier/keyword/content triple"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple

LINE_PATTERN = re.compile(
    r"^\s*(?P<identifier>.*?)\s*:\s*(?P<keyword>.*?)\s*:\s*(?P<content>.*?)$",
    re.IGNORECASE,
)

# Trimmed lines this short are blank.
MIN_LINE_LENGTH = 3


class LineMatch(NamedTuple):
    lineno: int
    identifier: str
    keyword: str
    content: str


def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield (1-based line number, trimmed line) for every non-blank line."""
    for index, raw in enumerate(text.split("\n")):
        line = raw.strip()
        if len(line) < MIN_LINE_LENGTH:
            continue
        yield index + 1, line


def match_line(line: str, lineno: int = 0) -> LineMatch | None:
    """Match one trimmed line. Keyword is returned lowercased."""
    m = LINE_PATTERN.match(line)
    if m is None:
        return None
    return LineMatch(
        lineno=lineno,
        identifier=m.group("identifier"),
        keyword=m.group("keyword").lower(),
        content=m.group("content"),
    )


def syntax_message(lineno: int) -> str:
    return f"Invalid syntax (line:{lineno})"
