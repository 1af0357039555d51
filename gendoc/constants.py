"""Constants used across the gendoc package."""

from __future__ import annotations

VERSION = "1.0.0"
GENERATOR_URL = "https://gitlab.com/bztsrc/gendoc"

# Default translations and variables, overridable from a <doc> block.
DEFAULT_LABELS: dict[str, str] = {
    "lang": "en",
    "titleimg": "",
    "title": "",
    "url": "#",
    "version": "stable",
    "theme": "",
    "rslt": "Search Results",
    "home": "Home",
    "link": "Permalink to this headline",
    "info": "Important",
    "hint": "Hint",
    "note": "Note",
    "also": "See Also",
    "todo": "To Do",
    "warn": "Warning",
    "args": "Arguments",
    "rval": "Return Value",
    "prev": "Previous",
    "next": "Next",
    "copy": "unknown",
}

# <doc> keys holding paths relative to the document that declares them.
PATH_LABELS = ("theme", "titleimg")

FORWARD_PLACEHOLDER = "@GENDOC:{}@"
HELLO_PAGE = "_"
CAPTION_LEVEL = 0
MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6

ALERT_KINDS = ("info", "hint", "note", "also", "todo", "warn")
IMAGE_ALIGNMENTS = ("t", "l", "r", "c", "w")
MOUSE_BUTTONS = {"l": "left", "r": "right", "w": "wheel"}
UI_KINDS = ("1", "2", "3", "4", "5", "6")

# Inline highlight markers allowed inside <pre> and <code> blocks.
HIGHLIGHT_MARKERS = {
    "<hl>": '<span class="hl_h">',
    "</hl>": "</span>",
    "<hm>": '<span class="hl_h hl_b">',
    "</hm>": "</span>",
}

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
NATIVE_EXTENSIONS = (".xml", ".gd", ".html", ".htm")
