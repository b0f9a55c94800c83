"""Abstract bundle interface consumed by the HTML builder.

A bundle is a named module of an application with its own entries and a set
of other bundles it depends on. Bundle systems implement this interface; the
builder never decides dependency order or matches languages itself.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any

from pagewright.models.entry import Entry, EntryKind


class HiddenMode(Enum):
    """Whether hidden entries are returned by `Bundle.entries_for`."""

    INCLUDE = "include"
    EXCLUDE = "exclude"


class Bundle(ABC):
    """Interface for a bundle and its dependency closure."""

    @property
    @abstractmethod
    def bundle_name(self) -> str:
        """Return the bundle name."""

    @property
    @abstractmethod
    def layout_path(self) -> Path:
        """Return the path of the layout template wrapping built pages."""

    @property
    def library(self) -> Any:
        """Return the shared registry this bundle belongs to, if any."""
        return None

    @abstractmethod
    def all_required_bundles(self) -> list["Bundle"]:
        """Return the ordered bundles that must be included, itself among them."""

    @abstractmethod
    def entries_for(
        self,
        kind: EntryKind,
        language: str | None = None,
        hidden: HiddenMode = HiddenMode.EXCLUDE,
    ) -> list[Entry]:
        """Return entries of the given kind matching the filter options.

        Args:
            kind: Resource kind to list
            language: Target language code
            hidden: Whether hidden entries are included

        Returns:
            Matching entries in the bundle's natural order
        """
