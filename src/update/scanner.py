"""Comment-aware scanning for specifier string literals.

This is a single forward pass, not a parser. ``//`` comments run to the end
of the line, and ``/* */`` comments run to the first ``*/`` (they do not
nest). String literals are delimited by ``"``, ``'`` or a backtick, and
backslash escapes are honoured. Quote characters inside comments and comment
markers inside strings are therefore inert.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from registry.base import Registry

_QUOTES = ('"', "'", "`")


@dataclass(frozen=True)
class Candidate:
    """A specifier-shaped string literal; ``text == document[start:end]``."""
    start: int
    end: int
    text: str


def _string_end(text: str, start: int, quote: str) -> int:
    """Index of the closing quote, or of the newline/end that cut the literal short."""
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i
        if ch == "\n" and quote != "`":
            return i
        i += 1
    return n


def scan(text: str, registries: Sequence[Registry]) -> Iterator[Candidate]:
    """Yield candidate specifiers outside comments, left to right.

    A string literal is a candidate when at least one registry says its
    contents look like one of its specifiers.
    """
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "/" and text.startswith("//", i):
            newline = text.find("\n", i + 2)
            if newline == -1:
                return
            i = newline + 1
            continue
        if ch == "/" and text.startswith("/*", i):
            close = text.find("*/", i + 2)
            if close == -1:
                return
            i = close + 2
            continue
        if ch in _QUOTES:
            start = i + 1
            end = _string_end(text, start, ch)
            if end < n and text[end] == ch:
                literal = text[start:end]
                if any(registry.looks_like(literal) for registry in registries):
                    yield Candidate(start, end, literal)
                i = end + 1
            else:
                # unterminated literal: resume at the newline that ended it
                i = end
            continue
        i += 1
