"""Entry entity: one template or resource unit tracked by a bundle.

Entries are owned by the bundle system. The HTML builder only reads them.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(Enum):
    """Kind of resource an entry represents."""

    HTML = "html"
    JAVASCRIPT = "javascript"
    STYLESHEET = "stylesheet"


@dataclass(eq=False)
class Entry:
    """A template or resource unit.

    Entries compare by identity: two entries are the same fragment only if
    they are the same object, even when every attribute matches.

    Attributes:
        filename: Logical filename (e.g., "body.rhtml", "index.html")
        source_path: Path of the template source on disk
        build_path: Path the built output is written to
        language: Language code for localized entries (e.g., "en")
        type: Resource kind
        localized: Whether the entry lives in a localization directory
        hidden: Whether the entry is hidden from default listings
        composite: Member entries for a virtual grouping entry, else None
    """

    filename: str
    source_path: Path
    build_path: Path
    language: str | None = None
    type: EntryKind = EntryKind.HTML
    localized: bool = False
    hidden: bool = False
    composite: list["Entry"] | None = None

    def __post_init__(self) -> None:
        """Normalize paths."""
        self.source_path = Path(self.source_path)
        self.build_path = Path(self.build_path)

    @property
    def is_composite(self) -> bool:
        """Return True for a virtual grouping entry (even with no members)."""
        return self.composite is not None

    def expand(self) -> list["Entry"]:
        """Return the member entries of a composite, or the entry itself."""
        if self.composite is not None:
            return list(self.composite)
        return [self]

    def __repr__(self) -> str:
        return f"Entry({self.filename!r}, language={self.language!r})"
