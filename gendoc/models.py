"""Data models for gendoc."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenClass(str, Enum):
    """Lexical classes produced by the source code tokenizer.

    The values double as the CSS class suffix (``hl_<value>``) used by the
    HTML writer; ``NONE`` tokens are emitted without a span.
    """

    NONE = ""
    COMMENT = "c"
    PSEUDO = "p"
    OPERATOR = "o"
    NUMBER = "n"
    STRING = "s"
    TYPE = "t"
    KEYWORD = "k"
    VALUE = "v"
    FUNCTION = "f"


@dataclass
class Token:
    """A classified run of source code text.

    Attributes:
        kind: Lexical class of the run.
        text: Exact source text covered by the token.
    """

    kind: TokenClass
    text: str


@dataclass
class Position:
    """Location used for diagnostics.

    Attributes:
        filename: File being parsed, empty before the first include.
        line: One-based line number, or 0 for whole-file problems.
    """

    filename: str = ""
    line: int = 0

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


@dataclass(frozen=True)
class TocEntry:
    """Table of contents entry.

    Attributes:
        level: 0 for captions, 1 to 6 for headings.
        name: Display name, as written in the source.
    """

    level: int
    name: str


@dataclass(frozen=True)
class ForwardReference:
    """Internal link seen before the heading it targets.

    Attributes:
        position: Where the first link to the slug was found.
        name: Display name of that link.
    """

    position: Position
    name: str


@dataclass(frozen=True)
class EmbeddedImage:
    """Image content ready to be inlined as a data URI."""

    mime: str
    data: bytes
