"""Table of contents, forward references and page linkage."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import CAPTION_LEVEL, FORWARD_PLACEHOLDER, HELLO_PAGE
from .models import ForwardReference, Position, TocEntry


def placeholder(slug: str) -> str:
    """Return the marker written in place of a not-yet-known heading id."""
    return FORWARD_PLACEHOLDER.format(slug)


@dataclass
class PageLinks:
    """Sequential page bookkeeping for previous/next navigation.

    Attributes:
        first: Id of the first page, the target of the home link.
        last: Id of the page currently being written.
        previous: Id of the page before `last`.
    """

    first: str = ""
    last: str = ""
    previous: str = ""

    def start_hello(self) -> None:
        self.first = self.last = HELLO_PAGE

    def advance(self, page_id: str) -> None:
        self.previous = self.last
        self.last = page_id


@dataclass
class TableOfContents:
    """Ordered heading registry with forward-reference tracking.

    Insertion order is document order. Keys are heading slugs, or
    ``"!<n>"`` for captions.

    Attributes:
        entries: Registered headings and captions.
        forward: Pending links keyed by the slug they point to.
        pages: Previous/next linkage of level-1 pages.
        section: Name of the heading or caption that opened the current section.
    """

    entries: dict[str, TocEntry] = field(default_factory=dict)
    forward: dict[str, ForwardReference] = field(default_factory=dict)
    pages: PageLinks = field(default_factory=PageLinks)
    section: str = ""
    _captions: int = 0

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def title(self, key: str) -> str:
        entry = self.entries.get(key)
        return entry.name if entry else ""

    def add_caption(self, name: str) -> str:
        key = f"!{self._captions}"
        self._captions += 1
        self.entries[key] = TocEntry(CAPTION_LEVEL, name)
        return key

    def add_heading(self, slug: str, level: int, name: str) -> bool:
        """Register a heading; return False when the slug is already taken."""
        if slug in self.entries:
            return False
        self.entries[slug] = TocEntry(level, name)
        return True

    def link_target(self, slug: str, name: str, position: Position) -> str:
        """Return the id to link to, or a placeholder for an unknown slug.

        Only the first link to an unknown slug is remembered, so the final
        report names where the slug was first used.
        """
        if slug in self.entries:
            return slug
        self.forward.setdefault(slug, ForwardReference(position, name))
        return placeholder(slug)

    def resolve(self, slug: str) -> bool:
        """Drop the pending reference for `slug`; True if there was one."""
        return self.forward.pop(slug, None) is not None

    def unresolved(self) -> list[ForwardReference]:
        return list(self.forward.values())

    def pages_in_order(self) -> list[tuple[str, TocEntry]]:
        return [(key, entry) for key, entry in self.entries.items() if entry.level == 1]
