"""API documentation extraction from source files.

An extractor finds documented declarations in a source file; `render_api`
then turns each one into a data list through the regular session
operations, so the output goes through the same validation and writer as
hand-written markup.
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .session import Session

PARAM_PREFIX = "@param "
RETURN_PREFIX = "@return "

_PYTHON_BLOCK = re.compile(r"##[^#](.*?)(def.*?)$", re.IGNORECASE | re.MULTILINE | re.DOTALL)
_PYTHON_LINE = re.compile(r"^[ \t]*#[ \t]*")
_DOC_BLOCK = re.compile(r"/\*\*[^*](.*?)\*/\n(.*?)$", re.IGNORECASE | re.MULTILINE | re.DOTALL)
_DOC_LINE = re.compile(r"^[ \t]*\*[ \t]*")


@dataclass(frozen=True)
class ApiEntry:
    """One documented declaration.

    Attributes:
        declaration: Declaration line, shown as source code.
        description: Free text lines of the comment.
        params: ``@param`` definitions, in order.
        returns: ``@return`` definitions, in order.
    """

    declaration: str
    description: tuple[str, ...] = ()
    params: tuple[str, ...] = ()
    returns: tuple[str, ...] = ()


@dataclass
class _EntryBuilder:
    declaration: str
    description: list[str] = field(default_factory=list)
    params: list[str] = field(default_factory=list)
    returns: list[str] = field(default_factory=list)

    def add(self, line: str) -> None:
        if line.startswith(PARAM_PREFIX):
            self.params.append(line[len(PARAM_PREFIX) :].strip())
        elif line.startswith(RETURN_PREFIX):
            self.returns.append(line[len(RETURN_PREFIX) :].strip())
        elif not self.params and not self.returns:
            # free text after the tags would land inside the table
            self.description.append(line)

    def build(self) -> ApiEntry:
        return ApiEntry(self.declaration, tuple(self.description), tuple(self.params), tuple(self.returns))


def _extract(pattern: re.Pattern[str], prefix: re.Pattern[str], source: str) -> list[ApiEntry]:
    entries = []
    for match in pattern.finditer(source):
        builder = _EntryBuilder(match.group(2).strip())
        for raw in match.group(1).split("\n"):
            line = prefix.sub("", raw, count=1).strip()
            if line:
                builder.add(line)
        entries.append(builder.build())
    return entries


def extract_python(source: str) -> list[ApiEntry]:
    """Find ``##`` comment blocks followed by a ``def``.

    Examples:
        extract_python("##\\n# Adds.\\n# @param a int\\ndef add(a):\\n")
        # [ApiEntry("def add(a):", ("Adds.",), ("a int",), ())]
    """
    return _extract(_PYTHON_BLOCK, _PYTHON_LINE, source)


def extract_generic(source: str) -> list[ApiEntry]:
    """Find ``/** ... */`` comment blocks followed by a declaration line."""
    return _extract(_DOC_BLOCK, _DOC_LINE, source)


Extractor = Callable[[str], list[ApiEntry]]

EXTRACTORS: dict[str, Extractor] = {"python": extract_python}


def get_extractor(language: str) -> Extractor:
    return EXTRACTORS.get(language, extract_generic)


def render_api(session: Session, language: str, entries: list[ApiEntry]) -> None:
    """Emit every entry as a data list with an argument/return table."""
    labels = session.labels
    for entry in entries:
        session.data_list_open()
        session.data_topic_open()
        session.source_code(entry.declaration, language)
        session.data_topic_close()
        session.data_description_open()
        for line in entry.description:
            session.text(html.escape(line) + " ")
        if entry.params or entry.returns:
            session.table_open()
            if entry.params:
                _header_row(session, labels["args"])
                for param in entry.params:
                    _cell_row(session, param)
            for value in entry.returns:
                _header_row(session, labels["rval"])
                _cell_row(session, value)
            session.table_close()
        session.data_description_close()
        session.data_list_close()
        session.line_break()


def _header_row(session: Session, label: str) -> None:
    session.table_row_open()
    session.table_header_open()
    session.text(label)
    session.table_header_close()
    session.table_row_close()


def _cell_row(session: Session, text: str) -> None:
    session.table_row_open()
    session.table_cell_open()
    session.text(html.escape(text))
    session.table_cell_close()
    session.table_row_close()
