"""Document build state and the operation behind every gendoc tag."""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

from .apidoc import get_extractor, render_api
from .config import GendocConfig
from .constants import (
    ALERT_KINDS,
    IMAGE_ALIGNMENTS,
    MAX_HEADING_LEVEL,
    MIN_HEADING_LEVEL,
    MOUSE_BUTTONS,
    NATIVE_EXTENSIONS,
    PATH_LABELS,
    UI_KINDS,
)
from .diagnostics import Diagnostics, Sink
from .exceptions import EmptyTocError
from .filesystem import read_image, read_source, resolve_relative
from .highlight import RuleRegistry, tokenize
from .models import Position
from .scanner import scan
from .slugify import generate_slug
from .toc import TableOfContents, placeholder
from .validator import StructuralValidator
from .writers import HtmlWriter, Writer

# Readers turn an input format into gendoc markup.
Reader = Callable[[str], str]


def read_native(text: str) -> str:
    return text


READERS: dict[str, Reader] = {extension: read_native for extension in NATIVE_EXTENSIONS}

_DOC_ENTRY = re.compile(r"<([^/][^>]+)>([^<]*)")


def _doc_entries(block: str) -> list[tuple[str, str]]:
    return [(key.strip(), value.strip()) for key, value in _DOC_ENTRY.findall(block)]


class Session:
    """State of one document build.

    A session is fed one or more input files through `include`, then
    `finish` runs the end-of-build checks and `render` produces the output
    document. Structural problems never raise: they are reported through
    `diagnostics` and the offending operation is skipped.

    Args:
        config: Build settings; defaults when None.
        writer: Output writer; an `HtmlWriter` when None.
        rules: Highlight rule sets; the bundled ones when None.
        sink: Callback receiving every formatted error and warning.

    Examples:
        session = Session(sink=print)
        session.include("manual.xml")
        session.finish()
        html_text = session.render()
    """

    def __init__(
        self,
        config: GendocConfig | None = None,
        writer: Writer | None = None,
        rules: RuleRegistry | None = None,
        sink: Sink | None = None,
    ):
        self.config = config or GendocConfig()
        self.diagnostics = Diagnostics(sink)
        self.validator = StructuralValidator(self.diagnostics)
        self.toc = TableOfContents()
        self.labels: dict[str, str] = self.config.resolved_labels()
        self.writer = writer or HtmlWriter(self.labels, self.config.line_numbers)
        self.writer.labels = self.labels
        self.rules = rules or RuleRegistry.with_bundled()
        self.hello = False
        self.hello_used = False
        # files currently being parsed, outermost first
        self._including: list[Path] = []

    @property
    def position(self) -> Position:
        return self.diagnostics.position

    @property
    def error_count(self) -> int:
        return self.diagnostics.error_count

    def _error(self, message: str) -> None:
        self.diagnostics.error(message)

    # input

    def include(self, path: str | Path) -> None:
        """Parse another document in place, relative to the current file."""
        filepath = resolve_relative(str(path), self.position.filename)
        try:
            text = read_source(filepath, self.config.max_file_size)
        except OSError as error:
            self.diagnostics.io_error(filepath, f"unable to read ({error})")
            return

        resolved = filepath.resolve()
        if resolved in self._including:
            self.diagnostics.io_error(self.position.filename, f"include cycle ({filepath})")
            return

        self._including.append(resolved)
        try:
            with self.diagnostics.entering(filepath):
                suffix = filepath.suffix.lower()
                reader = READERS.get(suffix)
                if reader is None:
                    if suffix:
                        self._error(f"there is no reader for the '{suffix[1:]}' format, parsing it as gendoc markup")
                    reader = read_native
                self.parse(reader(text))
        finally:
            self._including.pop()

    def parse(self, text: str) -> None:
        scan(self, text)

    def doc(self, block: str) -> None:
        """Store the ``<key>value`` pairs of a ``<doc>`` block as labels."""
        for key, value in _doc_entries(block):
            if key in PATH_LABELS and value:
                value = str(resolve_relative(value, self.position.filename))
            self.labels[key] = value

    def api(self, language: str, path: str) -> None:
        """Generate API documentation from a source file."""
        filepath = resolve_relative(path, self.position.filename)
        try:
            source = read_source(filepath, self.config.max_file_size)
        except OSError as error:
            self.diagnostics.io_error(filepath, f"unable to read source ({error})")
            return
        entries = get_extractor(language)(source)
        with self.diagnostics.entering(filepath):
            render_api(self, language, entries)

    # table of contents

    def hello_open(self) -> None:
        self.hello = self.hello_used = True
        self.toc.pages.start_hello()

    def hello_close(self) -> None:
        self.hello = False

    def _start_section(self, name: str) -> None:
        self.validator.check_section(self.toc.section)
        self.toc.section = name

    def caption(self, name: str) -> None:
        self._start_section(name)
        self.toc.add_caption(name)
        self.writer.caption(name)

    def heading(self, level: int, name: str, anchor: str = "", alias: str = "") -> None:
        """Add a heading, registering it in the table of contents.

        Level-1 headings start a new page: the previous page gets its
        navigation links and is closed first.
        """
        if not MIN_HEADING_LEVEL <= level <= MAX_HEADING_LEVEL:
            self._error("invalid heading level")
            return
        name = name.strip()
        self._start_section(name)
        if not name:
            self._error("empty heading name")
            return
        if self.hello:
            self.writer.heading(level, "", name, hello=True)
            return

        slug = generate_slug(anchor or name)
        pages = self.toc.pages
        if level == 1:
            if self.writer.has_content():
                self._close_page(slug, name)
            pages.advance(slug)
            if not pages.first:
                pages.first = slug

        if not slug:
            self._error(f"no id for heading ({name})")
        elif not self.toc.add_heading(slug, level, name):
            self._error(f"id for heading isn't unique ({slug})")
            slug = ""

        if slug:
            for pending in dict.fromkeys((slug, generate_slug(name))):
                if pending and self.toc.resolve(pending):
                    self.writer.resolve_link(placeholder(pending), slug)

        self.writer.heading(level, slug, name, generate_slug(alias), pages.first)

    def _close_page(self, next_id: str, next_name: str) -> None:
        previous = self.toc.pages.previous
        if previous:
            self.writer.prev_link(previous, self.toc.title(previous))
        self.writer.next_link(next_id, next_name, clear=not previous)

    # inline styling

    def paragraph_open(self) -> None:
        if self.validator.open("p"):
            self.writer.paragraph_open()

    def paragraph_close(self) -> None:
        if self.validator.close("p"):
            self.writer.paragraph_close()

    def _style_open(self, style: str) -> None:
        if self.validator.open(style):
            self.writer.style_open(style)

    def _style_close(self, style: str) -> None:
        if self.validator.close(style):
            self.writer.style_close(style)

    def bold_open(self) -> None:
        self._style_open("b")

    def bold_close(self) -> None:
        self._style_close("b")

    def italic_open(self) -> None:
        self._style_open("i")

    def italic_close(self) -> None:
        self._style_close("i")

    def underline_open(self) -> None:
        self._style_open("u")

    def underline_close(self) -> None:
        self._style_close("u")

    def strike_open(self) -> None:
        self._style_open("s")

    def strike_close(self) -> None:
        self._style_close("s")

    def superscript_open(self) -> None:
        self._style_open("sup")

    def superscript_close(self) -> None:
        self._style_close("sup")

    def subscript_open(self) -> None:
        self._style_open("sub")

    def subscript_close(self) -> None:
        self._style_close("sub")

    def quote_open(self) -> None:
        if self.validator.open("quote"):
            self.writer.quote_open()

    def quote_close(self) -> None:
        if self.validator.close("quote"):
            self.writer.quote_close()

    def line_break(self) -> None:
        self.writer.line_break()

    def horizontal_ruler(self) -> None:
        self.writer.horizontal_ruler()

    # lists

    def ordered_list_open(self) -> None:
        if self.validator.open("ol"):
            self.writer.list_open("ol")

    def ordered_list_close(self) -> None:
        if self.validator.close_list("ol"):
            self.writer.list_close("ol")

    def unordered_list_open(self) -> None:
        if self.validator.open("ul"):
            self.writer.list_open("ul")

    def unordered_list_close(self) -> None:
        if self.validator.close_list("ul"):
            self.writer.list_close("ul")

    def list_item_open(self) -> None:
        if self.validator.open_list_item():
            self.writer.list_item_open()

    def list_item_close(self) -> None:
        if self.validator.close_list_item():
            self.writer.list_item_close()

    def data_list_open(self) -> None:
        if self.validator.open("dl"):
            self.writer.data_list_open()

    def data_list_close(self) -> None:
        if self.validator.close_data_list():
            self.writer.data_list_close()

    def data_topic_open(self) -> None:
        if self.validator.open_data_item("dt"):
            self.writer.data_item_open("dt")

    def data_topic_close(self) -> None:
        if self.validator.close_data_item("dt"):
            self.writer.data_item_close("dt")

    def data_description_open(self) -> None:
        if self.validator.open_data_item("dd"):
            self.writer.data_item_open("dd")

    def data_description_close(self) -> None:
        if self.validator.close_data_item("dd"):
            self.writer.data_item_close("dd")

    # grids

    def grid_open(self) -> None:
        if self.validator.open("grid"):
            self.writer.grid_open()

    def grid_close(self) -> None:
        if self.validator.close_container("grid", "gr"):
            self.writer.grid_close()

    def grid_row_open(self) -> None:
        if self.validator.open_row("gr", "grid"):
            self.writer.row_open()

    def grid_row_close(self) -> None:
        if self.validator.close_row("gr", "grid", ("gd",)):
            self.writer.row_close()

    def grid_cell_open(self) -> None:
        if self.validator.open_cell("gd", "gr", "grid"):
            self.writer.cell_open()

    def grid_cell_wide_open(self) -> None:
        if self.validator.open_cell("gd", "gr", "grid"):
            self.writer.cell_open(wide=True)

    def grid_cell_close(self) -> None:
        if self.validator.close_cell("gd", "gr"):
            self.writer.cell_close()

    # tables

    def table_open(self) -> None:
        if self.validator.open("table"):
            self.writer.table_open()

    def table_close(self) -> None:
        if self.validator.close_container("table", "tr"):
            self.writer.table_close()

    def table_row_open(self) -> None:
        if self.validator.open_row("tr", "table"):
            self.writer.row_open()

    def table_row_close(self) -> None:
        if self.validator.close_row("tr", "table", ("th", "td")):
            self.writer.row_close()

    def _header_open(self, wide: bool) -> None:
        if self.validator.open_cell("th", "tr", "table"):
            self.writer.cell_open(header=True, wide=wide)

    def table_header_open(self) -> None:
        self._header_open(wide=False)

    def table_header_wide_open(self) -> None:
        self._header_open(wide=True)

    def table_header_close(self) -> None:
        if self.validator.close_cell("th", "tr"):
            self.writer.cell_close(header=True)

    def _cell_open(self, wide: bool, right: bool) -> None:
        if self.validator.open_cell("td", "tr", "table"):
            self.writer.cell_open(wide=wide, right=right)

    def table_cell_open(self) -> None:
        self._cell_open(wide=False, right=False)

    def table_cell_wide_open(self) -> None:
        self._cell_open(wide=True, right=False)

    def table_number_open(self) -> None:
        self._cell_open(wide=False, right=True)

    def table_number_wide_open(self) -> None:
        self._cell_open(wide=True, right=True)

    def table_cell_close(self) -> None:
        if self.validator.close_cell("td", "tr"):
            self.writer.cell_close()

    # verbatim blocks

    def teletype(self, text: str) -> None:
        self.writer.teletype(text)

    def preformatted(self, text: str) -> None:
        self.writer.preformatted(text)

    def source_code(self, text: str, language: str = "") -> None:
        rules = None
        if language:
            rules = self.rules.get(language)
            if rules is None:
                self.diagnostics.warning(f"no highlight rules for '{language}' using generics")
        self.writer.source_code(text, language, tokenize(text, rules))

    # links

    def internal_link(self, name: str, target: str = "") -> None:
        slug = generate_slug(target or name)
        if not slug:
            self._error(f"no id for link ({name})")
            return
        self.writer.internal_link(name, self.toc.link_target(slug, name, self.diagnostics.snapshot()))

    def external_link_open(self, url: str) -> None:
        self.writer.external_link_open(url)

    def external_link_close(self) -> None:
        self.writer.external_link_close()

    # user interface

    def user_interface_open(self, kind: str) -> None:
        if kind not in UI_KINDS:
            kind = UI_KINDS[0]
        if self.validator.open("ui"):
            self.writer.user_interface_open(kind)

    def user_interface_close(self) -> None:
        if self.validator.close("ui"):
            self.writer.user_interface_close()

    def keyboard(self, key: str) -> None:
        self.writer.keyboard(key)

    def mouse_button(self, kind: str) -> None:
        self.writer.mouse_button(MOUSE_BUTTONS.get(kind, MOUSE_BUTTONS["l"]))

    # images and boxes

    def image(self, align: str, path: str) -> None:
        if align not in IMAGE_ALIGNMENTS:
            align = IMAGE_ALIGNMENTS[0]
        url = self.labels.get("url", "")
        relative = path[len(url) :] if url and path.startswith(url) else path
        filepath = resolve_relative(relative, self.position.filename)
        try:
            image = read_image(filepath, self.config.max_file_size)
        except OSError as error:
            self.diagnostics.io_error(filepath, f"unable to read image ({error})")
            return
        self.writer.image(align, path, image)

    def figure(self, caption: str) -> None:
        self.writer.figure(caption)

    def alert_box_open(self, kind: str) -> None:
        if kind not in ALERT_KINDS:
            kind = ALERT_KINDS[0]
        if self.validator.open("alert"):
            self.writer.alert_box_open(kind)

    def alert_box_close(self) -> None:
        if self.validator.close("alert"):
            self.writer.alert_box_close()

    def text(self, text: str) -> None:
        self.writer.text(text)

    # end of build

    def finish(self) -> None:
        """Run the end-of-build checks and close the last page.

        Raises:
            EmptyTocError: If no heading or caption was seen at all.
        """
        for reference in self.toc.unresolved():
            self.diagnostics.error(f"unresolved link: {reference.name}", reference.position)
        self.toc.forward.clear()
        self.validator.check_section(self.toc.section)

        if self.writer.has_content():
            previous = self.toc.pages.previous
            if previous:
                self.writer.prev_link(previous, self.toc.title(previous))
            self.writer.page_close()

        if not self.toc:
            raise EmptyTocError()

    def render(self) -> str:
        return self.writer.output(self)
