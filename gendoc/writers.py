"""Output writers.

`Writer` is the capability interface every rendering call goes through.
`HtmlWriter` builds the HTML body of the final document; `EventWriter`
records the calls themselves so another tool can render them.
"""

from __future__ import annotations

import base64
import html
import json
from pathlib import Path, PurePath

from .constants import HELLO_PAGE, HIGHLIGHT_MARKERS
from .models import EmbeddedImage, Token, TokenClass
from .template import render_document


def escape(text: str) -> str:
    return html.escape(text)


def apply_highlight_markers(escaped: str) -> str:
    """Turn escaped ``<hl>``/``<hm>`` markers back into highlight spans.

    A line-wide ``</hm>`` swallows the newline that follows it, since the
    span is rendered as a block.
    """
    for marker, span in HIGHLIGHT_MARKERS.items():
        escaped_marker = escape(marker)
        if marker == "</hm>":
            escaped = escaped.replace(escaped_marker + "\r\n", span).replace(escaped_marker + "\n", span)
        escaped = escaped.replace(escaped_marker, span)
    return escaped


class Writer:
    """Rendering interface called by the session in document order.

    The base implementation forwards every call to `emit`; concrete writers
    either override `emit` or every rendering method.
    """

    extension = ""

    def __init__(self, labels: dict[str, str], line_numbers: bool = True):
        self.labels = labels
        self.line_numbers = line_numbers

    def emit(self, operation: str, *args: object) -> None:
        raise NotImplementedError

    def has_content(self) -> bool:
        raise NotImplementedError

    def ends_with_newline(self) -> bool:
        raise NotImplementedError

    def output(self, document: object) -> str:
        raise NotImplementedError

    def text(self, text: str) -> None:
        self.emit("text", text)

    def caption(self, name: str) -> None:
        self.emit("caption", name)

    def heading(self, level: int, anchor: str, name: str, alias: str = "", home: str = "", hello: bool = False) -> None:
        self.emit("heading", level, anchor, name, alias, home, hello)

    def prev_link(self, page_id: str, title: str) -> None:
        self.emit("prev_link", page_id, title)

    def next_link(self, page_id: str, name: str, clear: bool) -> None:
        self.emit("next_link", page_id, name, clear)

    def page_close(self) -> None:
        self.emit("page_close")

    def paragraph_open(self) -> None:
        self.emit("paragraph_open")

    def paragraph_close(self) -> None:
        self.emit("paragraph_close")

    def style_open(self, style: str) -> None:
        self.emit("style_open", style)

    def style_close(self, style: str) -> None:
        self.emit("style_close", style)

    def quote_open(self) -> None:
        self.emit("quote_open")

    def quote_close(self) -> None:
        self.emit("quote_close")

    def line_break(self) -> None:
        self.emit("line_break")

    def horizontal_ruler(self) -> None:
        self.emit("horizontal_ruler")

    def list_open(self, kind: str) -> None:
        self.emit("list_open", kind)

    def list_close(self, kind: str) -> None:
        self.emit("list_close", kind)

    def list_item_open(self) -> None:
        self.emit("list_item_open")

    def list_item_close(self) -> None:
        self.emit("list_item_close")

    def data_list_open(self) -> None:
        self.emit("data_list_open")

    def data_list_close(self) -> None:
        self.emit("data_list_close")

    def data_item_open(self, kind: str) -> None:
        self.emit("data_item_open", kind)

    def data_item_close(self, kind: str) -> None:
        self.emit("data_item_close", kind)

    def grid_open(self) -> None:
        self.emit("grid_open")

    def grid_close(self) -> None:
        self.emit("grid_close")

    def table_open(self) -> None:
        self.emit("table_open")

    def table_close(self) -> None:
        self.emit("table_close")

    def row_open(self) -> None:
        self.emit("row_open")

    def row_close(self) -> None:
        self.emit("row_close")

    def cell_open(self, header: bool = False, wide: bool = False, right: bool = False) -> None:
        self.emit("cell_open", header, wide, right)

    def cell_close(self, header: bool = False) -> None:
        self.emit("cell_close", header)

    def teletype(self, text: str) -> None:
        self.emit("teletype", text)

    def preformatted(self, text: str) -> None:
        self.emit("preformatted", text)

    def source_code(self, text: str, language: str, tokens: list[Token]) -> None:
        self.emit("source_code", text, language, [[token.kind.value, token.text] for token in tokens])

    def internal_link(self, name: str, target: str) -> None:
        self.emit("internal_link", name, target)

    def resolve_link(self, placeholder: str, anchor: str) -> None:
        self.emit("resolve_link", placeholder, anchor)

    def external_link_open(self, url: str) -> None:
        self.emit("external_link_open", url)

    def external_link_close(self) -> None:
        self.emit("external_link_close")

    def user_interface_open(self, kind: str) -> None:
        self.emit("user_interface_open", kind)

    def user_interface_close(self) -> None:
        self.emit("user_interface_close")

    def keyboard(self, key: str) -> None:
        self.emit("keyboard", key)

    def mouse_button(self, button: str) -> None:
        self.emit("mouse_button", button)

    def image(self, align: str, path: str, image: EmbeddedImage) -> None:
        self.emit("image", align, path, image.mime)

    def figure(self, caption: str) -> None:
        self.emit("figure", caption)

    def alert_box_open(self, kind: str) -> None:
        self.emit("alert_box_open", kind)

    def alert_box_close(self) -> None:
        self.emit("alert_box_close")


class HtmlWriter(Writer):
    """Build the HTML body of a gendoc document."""

    extension = ".html"

    def __init__(self, labels: dict[str, str], line_numbers: bool = True):
        super().__init__(labels, line_numbers)
        self._parts: list[str] = []

    @property
    def body(self) -> str:
        return "".join(self._parts)

    def emit(self, operation: str, *args: object) -> None:
        raise NotImplementedError(f"HtmlWriter does not implement {operation}")

    def _add(self, text: str) -> None:
        if text:
            self._parts.append(text)

    def _trim(self) -> None:
        while self._parts:
            last = self._parts[-1].rstrip()
            if last:
                self._parts[-1] = last
                break
            self._parts.pop()
        while self._parts and not self._parts[0].strip():
            self._parts.pop(0)
        if self._parts:
            self._parts[0] = self._parts[0].lstrip()

    def has_content(self) -> bool:
        return any(not part.isspace() for part in self._parts)

    def ends_with_newline(self) -> bool:
        return bool(self._parts) and self._parts[-1].endswith("\n")

    def output(self, document: object) -> str:
        return render_document(document, self.body)

    def text(self, text: str) -> None:
        self._add(text)

    def caption(self, name: str) -> None:
        pass

    def heading(self, level: int, anchor: str, name: str, alias: str = "", home: str = "", hello: bool = False) -> None:
        if hello:
            if level == 1:
                self._add(f'<div class="page" rel="{HELLO_PAGE}">')
            self._add(f"\n<h{level}>{name}</h{level}>")
            return

        self._trim()
        if level == 1:
            rel = f' rel="{anchor}"' if anchor else ""
            home_target = "" if home == HELLO_PAGE else home
            self._add(
                f'<div class="page"{rel}><div><ul class="breadcrumbs"><li>'
                f'<label class="home" for="_{home_target}" title="{escape(self.labels["home"])}"></label>'
                f"&nbsp;»</li><li>&nbsp;{name}</li></ul><hr></div>"
            )
        alias_span = f'<span id="{alias}"></span>' if alias else ""
        if anchor:
            self._add(f'\n{alias_span}<h{level} id="{anchor}">{name}<a href="#{anchor}"></a></h{level}>')
        else:
            self._add(f"\n{alias_span}<h{level}>{name}</h{level}>")

    def prev_link(self, page_id: str, title: str) -> None:
        self._trim()
        target = "" if page_id == HELLO_PAGE else page_id
        title_attr = f' title="{escape(title)}"' if page_id != HELLO_PAGE else ""
        self._add(
            f'<br style="clear:both;"><label class="btn prev" accesskey="p" for="_{target}"{title_attr}>'
            f'{self.labels["prev"]}</label>'
        )

    def next_link(self, page_id: str, name: str, clear: bool) -> None:
        self._trim()
        if page_id:
            if clear:
                self._add('<br style="clear:both;">')
            self._add(
                f'<label class="btn next" accesskey="n" for="_{page_id}" title="{escape(name)}">'
                f'{self.labels["next"]}</label>'
            )
        self._add("</div>\n")

    def page_close(self) -> None:
        self._trim()
        self._add("</div>")

    def paragraph_open(self) -> None:
        self._add("<p>")

    def paragraph_close(self) -> None:
        self._add("</p>")

    def style_open(self, style: str) -> None:
        self._add(f"<{style}>")

    def style_close(self, style: str) -> None:
        self._add(f"</{style}>")

    def quote_open(self) -> None:
        self._add('<blockquote class="pre"><span></span>')

    def quote_close(self) -> None:
        self._add("</blockquote>")

    def line_break(self) -> None:
        self._add("<br>")

    def horizontal_ruler(self) -> None:
        self._add("<hr>")

    def list_open(self, kind: str) -> None:
        self._add(f"<{kind}>")

    def list_close(self, kind: str) -> None:
        self._add(f"</{kind}>")

    def list_item_open(self) -> None:
        self._add("<li>")

    def list_item_close(self) -> None:
        self._add("</li>")

    def data_list_open(self) -> None:
        self._add("<dl>")

    def data_list_close(self) -> None:
        self._add("</dl>")

    def data_item_open(self, kind: str) -> None:
        self._add(f"<{kind}>")

    def data_item_close(self, kind: str) -> None:
        self._add(f"</{kind}>")

    def grid_open(self) -> None:
        self._add('<table class="grid">')

    def grid_close(self) -> None:
        self._add("</table>")

    def table_open(self) -> None:
        self._add('<div class="table"><table>')

    def table_close(self) -> None:
        self._add("</table></div>")

    def row_open(self) -> None:
        self._add("<tr>")

    def row_close(self) -> None:
        self._add("</tr>")

    def cell_open(self, header: bool = False, wide: bool = False, right: bool = False) -> None:
        tag = "th" if header else "td"
        classes = " ".join(name for name, on in (("right", right), ("wide", wide)) if on)
        self._add(f'<{tag} class="{classes}">' if classes else f"<{tag}>")

    def cell_close(self, header: bool = False) -> None:
        self._add("</th>" if header else "</td>")

    def teletype(self, text: str) -> None:
        self._add(f"<samp>{escape(text)}</samp>")

    def preformatted(self, text: str) -> None:
        self._add(f'<div class="pre"><pre>{apply_highlight_markers(escape(text))}</pre></div>')

    def source_code(self, text: str, language: str, tokens: list[Token]) -> None:
        self._add('<div class="pre">')
        if self.line_numbers:
            count = text.rstrip().count("\n") + 1
            numbers = "".join(f"{number}<br>" for number in range(1, count + 1))
            self._add(f'<pre class="lineno">{numbers}</pre>')
        code = "".join(
            escape(token.text) if token.kind is TokenClass.NONE
            else f'<span class="hl_{token.kind.value}">{escape(token.text)}</span>'
            for token in tokens
        )
        self._add(f"<code>{apply_highlight_markers(code)}</code></div>")

    def internal_link(self, name: str, target: str) -> None:
        # onclick too: some browsers do not switch pages when only the anchor changes
        self._add(f"<a href=\"#{target}\" onclick=\"c('{target}')\">{name}</a>")

    def resolve_link(self, placeholder: str, anchor: str) -> None:
        self._parts = [self.body.replace(placeholder, anchor)]

    def external_link_open(self, url: str) -> None:
        if url.startswith("#"):
            self._add(f"<a href=\"{url}\" onclick=\"c('{url[1:]}')\">")
        else:
            self._add(f'<a href="{url}" target="new">')

    def external_link_close(self) -> None:
        self._add("</a>")

    def user_interface_open(self, kind: str) -> None:
        self._add(f'<span class="ui{kind}">')

    def user_interface_close(self) -> None:
        self._add("</span>")

    def keyboard(self, key: str) -> None:
        self._add(f"<kbd>{escape(key)}</kbd>")

    def mouse_button(self, button: str) -> None:
        self._add(f'<span class="mouse{button}"></span>')

    def image(self, align: str, path: str, image: EmbeddedImage) -> None:
        data = base64.b64encode(image.data).decode("ascii")
        tag = (
            f'<img class="img{align}" alt="{escape(PurePath(path).name)}" '
            f'src="data:{image.mime};base64,{data}">'
        )
        self._add(f'<div class="imgc">{tag}</div>' if align == "c" else tag)

    def figure(self, caption: str) -> None:
        self._add(f'<div class="fig">{caption}</div>')

    def alert_box_open(self, kind: str) -> None:
        box = {"hint": "hint", "todo": "warn", "warn": "warn"}.get(kind, "info")
        self._add(f'<div class="{box}"><p><span>{self.labels[kind]}</span></p><p>')

    def alert_box_close(self) -> None:
        self._add("</p></div>")


class EventWriter(Writer):
    """Record rendering calls as JSON-serializable events."""

    extension = ".json"

    def __init__(self, labels: dict[str, str], line_numbers: bool = True):
        super().__init__(labels, line_numbers)
        self.events: list[list[object]] = []

    def emit(self, operation: str, *args: object) -> None:
        self.events.append([operation, *args])

    def has_content(self) -> bool:
        return any(event[0] != "text" or str(event[1]).strip() for event in self.events)

    def ends_with_newline(self) -> bool:
        return bool(self.events) and self.events[-1][0] == "text" and str(self.events[-1][1]).endswith("\n")

    def resolve_link(self, placeholder: str, anchor: str) -> None:
        for event in self.events:
            if event[0] == "internal_link" and event[2] == placeholder:
                event[2] = anchor

    def output(self, document: object) -> str:
        toc = [
            {"id": key, "level": entry.level, "name": entry.name}
            for key, entry in document.toc.entries.items()
        ]
        payload = {
            "labels": document.labels,
            "toc": toc,
            "events": self.events,
            "errors": document.diagnostics.error_count,
        }
        return json.dumps(payload, ensure_ascii=False, indent=1) + "\n"


WRITERS: dict[str, type[Writer]] = {"html": HtmlWriter, "json": EventWriter}


def writer_for_path(path: Path | str) -> str:
    """Pick a writer name from the output file extension (HTML by default)."""
    suffix = Path(path).suffix.lower()
    for name, writer in WRITERS.items():
        if writer.extension == suffix:
            return name
    return "html"


def create_writer(name: str, labels: dict[str, str], line_numbers: bool = True) -> Writer:
    try:
        writer_class = WRITERS[name]
    except KeyError as error:
        raise ValueError(f"Unknown writer: {name}") from error
    return writer_class(labels, line_numbers)
