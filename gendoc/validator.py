"""Open/close balance checks for container tags."""

from __future__ import annotations

from .diagnostics import Diagnostics

# Containers that cannot be reopened while open. Their counter is 0 or 1;
# every other counter is a nesting depth.
EXCLUSIVE = ("b", "i", "u", "s", "quote", "alert", "ui")

KIND_NAMES = {
    "p": "paragraph",
    "b": "bold",
    "i": "italic",
    "u": "underline",
    "s": "strike-through",
    "sup": "superscript",
    "sub": "subscript",
    "quote": "quote",
    "ol": "ordered list",
    "ul": "unordered list",
    "li": "list item",
    "dl": "data list",
    "dt": "data topic",
    "dd": "data description",
    "grid": "grid",
    "gr": "grid row",
    "gd": "grid cell",
    "table": "table",
    "tr": "table row",
    "th": "table header",
    "td": "table cell",
    "alert": "alert box",
    "ui": "user interface element",
}


class StructuralValidator:
    """Track open containers and report unbalanced tags.

    Each method returns True when the caller should go on and render the
    tag, False when the tag was rejected (already reported). Counters are
    scoped to a section: `check_section` reports leftovers and clears them.
    """

    def __init__(self, diagnostics: Diagnostics):
        self.diagnostics = diagnostics
        self.counters: dict[str, int] = {}

    def depth(self, kind: str) -> int:
        return self.counters.get(kind, 0)

    def _error(self, message: str) -> None:
        self.diagnostics.error(message)

    def open(self, kind: str) -> bool:
        """Open a container that has no parent requirement."""
        if kind in EXCLUSIVE:
            if self.depth(kind):
                self._error(f"{KIND_NAMES[kind]} is already open")
                return False
            self.counters[kind] = 1
            return True
        self.counters[kind] = self.depth(kind) + 1
        return True

    def close(self, kind: str) -> bool:
        """Close a container that has no parent requirement."""
        if not self.depth(kind):
            self._error(f"cannot close, {KIND_NAMES[kind]} is not open")
            return False
        self.counters[kind] -= 1
        return True

    def _open_child(self, kind: str, parent_open: bool, message: str) -> bool:
        if not parent_open:
            self._error(message)
            return False
        self.counters[kind] = self.depth(kind) + 1
        return True

    def _row_is_open(self, row: str, container: str) -> bool:
        return bool(self.depth(row)) and self.depth(row) >= self.depth(container)

    # lists

    def open_list_item(self) -> bool:
        return self._open_child(
            "li", bool(self.depth("ol") or self.depth("ul")), "cannot add list item, no list is open"
        )

    def close_list_item(self) -> bool:
        if not self.depth("li") or self.depth("li") < self.depth("ol") + self.depth("ul"):
            self._error("cannot close, list item is not open")
            return False
        self.counters["li"] -= 1
        return True

    def close_list(self, kind: str) -> bool:
        if not self.depth(kind):
            self._error(f"cannot close, {KIND_NAMES[kind]} is not open")
            return False
        if self.depth("li") >= self.depth("ol") + self.depth("ul"):
            self._error("list item is still open")
        self.counters[kind] -= 1
        return True

    # data lists

    def open_data_item(self, kind: str) -> bool:
        return self._open_child(
            kind,
            bool(self.depth("dl")),
            f"cannot add {KIND_NAMES[kind]}, data list is not open",
        )

    def close_data_item(self, kind: str) -> bool:
        if not self.depth(kind) or self.depth(kind) < self.depth("dl"):
            self._error(f"cannot close, {KIND_NAMES[kind]} is not open")
            return False
        self.counters[kind] -= 1
        return True

    def close_data_list(self) -> bool:
        if not self.depth("dl"):
            self._error("cannot close, data list is not open")
            return False
        if self.depth("dt") >= self.depth("dl") or self.depth("dd") >= self.depth("dl"):
            self._error("data list item is still open")
        self.counters["dl"] -= 1
        return True

    # grids and tables share the same container/row/cell shape

    def open_row(self, row: str, container: str) -> bool:
        return self._open_child(
            row,
            bool(self.depth(container)),
            f"cannot add row, {KIND_NAMES[container]} is not open",
        )

    def open_cell(self, cell: str, row: str, container: str) -> bool:
        return self._open_child(
            cell,
            self._row_is_open(row, container),
            f"cannot add {KIND_NAMES[cell]}, {KIND_NAMES[row]} is not open",
        )

    def close_cell(self, cell: str, row: str) -> bool:
        if not self.depth(cell) or self.depth(cell) < self.depth(row):
            self._error(f"cannot close, {KIND_NAMES[cell]} is not open")
            return False
        self.counters[cell] -= 1
        return True

    def close_row(self, row: str, container: str, cells: tuple[str, ...]) -> bool:
        if not self._row_is_open(row, container):
            self._error(f"cannot close, {KIND_NAMES[row]} is not open")
            return False
        for cell in cells:
            if self.depth(cell) >= self.depth(row):
                self._error(f"{KIND_NAMES[cell]} is still open")
        self.counters[row] -= 1
        return True

    def close_container(self, container: str, row: str) -> bool:
        if not self.depth(container):
            self._error(f"cannot close, {KIND_NAMES[container]} is not open")
            return False
        if self.depth(row) >= self.depth(container):
            self._error(f"{KIND_NAMES[row]} is still open")
        self.counters[container] -= 1
        return True

    def check_section(self, section: str) -> None:
        """Report containers left open in `section`, then reset all counters."""
        for kind, depth in self.counters.items():
            if depth:
                self._error(f"unclosed {kind} in section {section or 'unknown'}")
        self.counters = {}
