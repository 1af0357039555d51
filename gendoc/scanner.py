"""Single-pass tag scanner for gendoc markup.

The scanner walks a document once, copies plain text through a whitespace
normalizer, and hands every recognized tag to the matching `Session`
operation. Tags are matched against an ordered rule table; attributed or
longer variants come before the shorter tags sharing their prefix.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Match, Pattern

from .constants import ALERT_KINDS

if TYPE_CHECKING:
    from .session import Session

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

# Tags without content, mapped to the session operation they trigger.
SIMPLE_TAGS: dict[str, str] = {
    "<hello>": "hello_open",
    "</hello>": "hello_close",
    "<b>": "bold_open",
    "</b>": "bold_close",
    "<i>": "italic_open",
    "</i>": "italic_close",
    "<u>": "underline_open",
    "</u>": "underline_close",
    "<s>": "strike_open",
    "</s>": "strike_close",
    "<sup>": "superscript_open",
    "</sup>": "superscript_close",
    "<sub>": "subscript_open",
    "</sub>": "subscript_close",
    "<quote>": "quote_open",
    "</quote>": "quote_close",
    "<p>": "paragraph_open",
    "</p>": "paragraph_close",
    "<br>": "line_break",
    "<hr>": "horizontal_ruler",
    "<ol>": "ordered_list_open",
    "</ol>": "ordered_list_close",
    "<ul>": "unordered_list_open",
    "</ul>": "unordered_list_close",
    "<li>": "list_item_open",
    "</li>": "list_item_close",
    "<dl>": "data_list_open",
    "</dl>": "data_list_close",
    "<dt>": "data_topic_open",
    "</dt>": "data_topic_close",
    "<dd>": "data_description_open",
    "</dd>": "data_description_close",
    "<grid>": "grid_open",
    "</grid>": "grid_close",
    "<gr>": "grid_row_open",
    "</gr>": "grid_row_close",
    "<gd>": "grid_cell_open",
    "<gD>": "grid_cell_wide_open",
    "</gd>": "grid_cell_close",
    "<table>": "table_open",
    "</table>": "table_close",
    "<tr>": "table_row_open",
    "</tr>": "table_row_close",
    "<th>": "table_header_open",
    "<tH>": "table_header_wide_open",
    "</th>": "table_header_close",
    "<td>": "table_cell_open",
    "<tD>": "table_cell_wide_open",
    "</td>": "table_cell_close",
    "<tn>": "table_number_open",
    "<tN>": "table_number_wide_open",
    "</tn>": "table_cell_close",
    "</a>": "external_link_close",
    "<mbl>": "mouse_button:l",
    "<mbr>": "mouse_button:r",
    "<mbw>": "mouse_button:w",
}

# Tags whose whole content up to the closing tag is one argument.
ENCLOSED_TAGS: dict[str, str] = {
    "cap": "caption",
    "a": "internal_link",
    "tt": "teletype",
    "pre": "preformatted",
    "kbd": "keyboard",
    "fig": "figure",
}

Handler = Callable[["Scanner", Match[str]], int]


@dataclass(frozen=True)
class TagRule:
    """One entry of the tag table.

    Attributes:
        pattern: Regular expression matched at a ``<``.
        handler: Called with the match; returns the index to resume at.
    """

    pattern: Pattern[str]
    handler: Handler


class Scanner:
    """Cursor over one document, feeding a `Session`.

    Args:
        session: Build state receiving the operations.
        text: Document content.
    """

    def __init__(self, session: Session, text: str):
        self.session = session
        self.text = text
        self.diagnostics = session.diagnostics

    def run(self) -> None:
        text = self.text
        pos = 0
        while pos < len(text):
            if text.startswith(COMMENT_OPEN, pos):
                pos = self._skip_comment(pos)
            elif text[pos] == "<":
                pos = self._tag(pos)
            else:
                pos = self._plain(pos)

    def _skip_comment(self, pos: int) -> int:
        end = self.text.find(COMMENT_CLOSE, pos + len(COMMENT_OPEN))
        end = len(self.text) if end == -1 else end + len(COMMENT_CLOSE)
        self.diagnostics.advance(self.text[pos:end])
        return end

    def _plain(self, pos: int) -> int:
        """Copy text up to the next tag, normalizing whitespace.

        Horizontal whitespace collapses to one space unless the previous
        source character is already whitespace; carriage returns are
        dropped; a newline is dropped when the output already ends with one.
        """
        text = self.text
        end = text.find("<", pos)
        if end == -1:
            end = len(text)

        out: list[str] = []
        for index in range(pos, end):
            char = text[index]
            if char in " \t":
                if index == 0 or text[index - 1] not in " \t\n":
                    out.append(" ")
            elif char == "\r":
                continue
            elif char == "\n":
                self.diagnostics.position.line += 1
                ends_with_newline = out[-1] == "\n" if out else self.session.writer.ends_with_newline()
                if not ends_with_newline:
                    out.append(char)
            else:
                out.append(char)

        if out:
            self.session.text("".join(out))
        return end

    def _tag(self, pos: int) -> int:
        for rule in TAG_RULES:
            match = rule.pattern.match(self.text, pos)
            if match:
                return rule.handler(self, match)
        return self._unknown(pos)

    def _unknown(self, pos: int) -> int:
        """Copy an unsupported tag through with a warning."""
        text = self.text
        end = pos + 1
        while end < len(text) and text[end] != "<" and text[end - 1] != ">":
            end += 1
        rest = text[pos:].strip()
        self.diagnostics.warning(f"not gendoc compatible tag '{rest.splitlines()[0] if rest else ''}'")
        self.session.text(text[pos:end])
        self.diagnostics.advance(text[pos:end])
        return end

    def unterminated(self, match: Match[str]) -> int:
        """Report a tag whose closing counterpart is missing and stop the scan.

        The rest of the document is consumed without output, so the line
        counter still ends up past it.
        """
        self.diagnostics.error(f"unterminated {match.group()} tag")
        self.diagnostics.advance(self.text[match.start() :])
        return len(self.text)

    def enclosed(self, start: int, closing: str) -> tuple[str, int] | None:
        """Return the content up to `closing` and the index just past it."""
        end = self.text.find(closing, start)
        if end == -1:
            return None
        return self.text[start:end], end + len(closing)


def _simple(operation: str) -> Handler:
    name, _, argument = operation.partition(":")

    def handle(scanner: Scanner, match: Match[str]) -> int:
        method = getattr(scanner.session, name)
        if argument:
            method(argument)
        else:
            method()
        return match.end()

    return handle


def _enclosed(tag: str, operation: str) -> Handler:
    closing = f"</{tag}>"

    def handle(scanner: Scanner, match: Match[str]) -> int:
        found = scanner.enclosed(match.end(), closing)
        if found is None:
            return scanner.unterminated(match)
        content, end = found
        getattr(scanner.session, operation)(content)
        scanner.diagnostics.advance(content)
        return end

    return handle


def _doc(scanner: Scanner, match: Match[str]) -> int:
    found = scanner.enclosed(match.end(), "</doc>")
    if found is None:
        return scanner.unterminated(match)
    content, end = found
    scanner.diagnostics.advance(content)
    scanner.session.doc(content)
    return end


_HEADING_CLOSE = re.compile(r"</h[1-6]>")


def _heading(scanner: Scanner, match: Match[str]) -> int:
    closing = _HEADING_CLOSE.search(scanner.text, match.end())
    if closing is None:
        return scanner.unterminated(match)
    name = scanner.text[match.end() : closing.start()]
    words = match.group("attrs").split()
    if len(words) >= 2:
        alias, anchor = words[0], words[1]
    elif words:
        alias, anchor = "", words[0]
    else:
        alias, anchor = "", name
    scanner.session.heading(int(match.group("level")), name, anchor, alias)
    scanner.diagnostics.advance(name)
    return closing.end()


def _external_link(scanner: Scanner, match: Match[str]) -> int:
    scanner.session.external_link_open(match.group("url"))
    scanner.diagnostics.advance(match.group())
    return match.end()


def _code(scanner: Scanner, match: Match[str]) -> int:
    found = scanner.enclosed(match.end(), "</code>")
    if found is None:
        return scanner.unterminated(match)
    content, end = found
    code = content.lstrip("\r\n")
    scanner.diagnostics.advance(content[: len(content) - len(code)])
    scanner.session.source_code(code.rstrip(), match.group("language").strip())
    scanner.diagnostics.advance(code)
    return end


def _user_interface_open(scanner: Scanner, match: Match[str]) -> int:
    scanner.session.user_interface_open(match.group("kind"))
    return match.end()


def _user_interface_close(scanner: Scanner, match: Match[str]) -> int:
    scanner.session.user_interface_close()
    return match.end()


def _image(scanner: Scanner, match: Match[str]) -> int:
    attrs = match.group("path").strip()
    scanner.session.image(match.group("align"), attrs.splitlines()[0] if attrs else "")
    scanner.diagnostics.advance(match.group())
    return match.end()


def _alert_open(scanner: Scanner, match: Match[str]) -> int:
    scanner.session.alert_box_open(match.group("kind"))
    return match.end()


def _alert_close(scanner: Scanner, match: Match[str]) -> int:
    scanner.session.alert_box_close()
    return match.end()


def _include(scanner: Scanner, match: Match[str]) -> int:
    scanner.session.include(match.group("path").strip())
    scanner.diagnostics.advance(match.group())
    return match.end()


def _api(scanner: Scanner, match: Match[str]) -> int:
    scanner.session.api(match.group("language"), match.group("path").strip())
    scanner.diagnostics.advance(match.group())
    return match.end()


def _literal(tag: str) -> Pattern[str]:
    return re.compile(re.escape(tag))


def _build_rules() -> tuple[TagRule, ...]:
    alerts = "|".join(ALERT_KINDS)
    rules = [
        TagRule(_literal("<doc>"), _doc),
        TagRule(_literal("<hello>"), _simple(SIMPLE_TAGS["<hello>"])),
        TagRule(_literal("</hello>"), _simple(SIMPLE_TAGS["</hello>"])),
        TagRule(re.compile(r"<h(?P<level>[1-6])(?P<attrs>[^>]*)>"), _heading),
        TagRule(_literal("<cap>"), _enclosed("cap", ENCLOSED_TAGS["cap"])),
    ]
    rules += [
        TagRule(_literal(tag), _simple(operation))
        for tag, operation in SIMPLE_TAGS.items()
        if tag not in ("<hello>", "</hello>", "</a>") and not tag.startswith("<mb")
    ]
    rules += [
        TagRule(_literal("<a>"), _enclosed("a", ENCLOSED_TAGS["a"])),
        TagRule(re.compile(r"<a (?P<url>[^>]*)>"), _external_link),
        TagRule(_literal("</a>"), _simple(SIMPLE_TAGS["</a>"])),
        TagRule(_literal("<tt>"), _enclosed("tt", ENCLOSED_TAGS["tt"])),
        TagRule(_literal("<pre>"), _enclosed("pre", ENCLOSED_TAGS["pre"])),
        TagRule(re.compile(r"<code(?P<language>[^>]*)>"), _code),
        TagRule(re.compile(r"<ui(?P<kind>[1-6])>"), _user_interface_open),
        TagRule(re.compile(r"</ui[1-6]>"), _user_interface_close),
        TagRule(_literal("<kbd>"), _enclosed("kbd", ENCLOSED_TAGS["kbd"])),
    ]
    rules += [TagRule(_literal(tag), _simple(SIMPLE_TAGS[tag])) for tag in ("<mbl>", "<mbr>", "<mbw>")]
    rules += [
        # <imgl file>, but never a plain HTML <img ...>, <img/> or <img>
        TagRule(re.compile(r"<img(?P<align>[^ />])(?P<path>[^>]*)>"), _image),
        TagRule(_literal("<fig>"), _enclosed("fig", ENCLOSED_TAGS["fig"])),
        TagRule(re.compile(rf"<(?P<kind>{alerts})>"), _alert_open),
        TagRule(re.compile(rf"</(?:{alerts})>"), _alert_close),
        TagRule(re.compile(r"<include (?P<path>[^>]*)>"), _include),
        TagRule(re.compile(r"<api (?P<language>[^ >]*) (?P<path>[^>]*)>"), _api),
    ]
    return tuple(rules)


TAG_RULES = _build_rules()


def scan(session: Session, text: str) -> None:
    """Scan `text` into `session`, advancing its line counter."""
    Scanner(session, text).run()
