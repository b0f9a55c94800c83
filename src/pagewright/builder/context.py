"""Per-build rendering state.

An HtmlContext is created for one build invocation and never shared. It holds
the resolved fragments, the buffer rendered fragments accumulate in, and the
entry currently being rendered (None while idle).
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup

from pagewright.builder.resolver import resolve_fragments
from pagewright.helpers import HelperRegistry
from pagewright.models.bundle import Bundle
from pagewright.models.entry import Entry

logger = logging.getLogger(__name__)


@dataclass
class RenderBuffer:
    """Accumulates rendered fragment output in resolution order."""

    parts: list[str] = field(default_factory=list)

    def append(self, text: str) -> None:
        """Add rendered output."""
        self.parts.append(text)

    @property
    def text(self) -> Markup:
        """Everything rendered so far, marked safe for the layout."""
        return Markup("".join(self.parts))

    def __len__(self) -> int:
        return sum(len(part) for part in self.parts)


class HtmlContext:
    """Rendering state for building one entry.

    Attributes:
        bundle: Bundle that owns the built entry
        language: Language of the built entry
        library: Shared registry of the bundle (may be None)
        fragments: Resolved fragments, fixed at construction
        buffer: Output of the fragments rendered so far
        entry: Fragment being rendered, None while idle
        filename: Filename of the fragment being rendered, None while idle
    """

    def __init__(
        self,
        entry: Entry,
        bundle: Bundle,
        deep: bool = True,
        helpers: HelperRegistry | None = None,
    ) -> None:
        """Resolve fragments and load helpers for a build.

        Args:
            entry: Entry being built
            bundle: Bundle that owns the entry
            deep: Include HTML entries of every required bundle
            helpers: Helper registry (defaults to the library's, then built-ins)
        """
        self.target = entry
        self.bundle = bundle
        self.language = entry.language
        self.library = bundle.library
        self.deep = deep

        self.fragments = resolve_fragments(entry, bundle, deep)
        self.buffer = RenderBuffer()

        self.entry: Entry | None = None
        self.filename: str | None = None

        registry = helpers or getattr(self.library, "helpers", None) or HelperRegistry()
        self.helpers: dict[str, Callable[..., Any]] = registry.helpers_for(
            b.bundle_name for b in bundle.all_required_bundles()
        )

    @property
    def bundle_name(self) -> str:
        """Name of the bundle being built, often used for page titles."""
        return self.bundle.bundle_name

    @property
    def is_idle(self) -> bool:
        """True when no fragment is being rendered."""
        return self.entry is None

    @contextmanager
    def rendering(self, fragment: Entry) -> Iterator[Entry]:
        """Mark a fragment as being rendered for the duration of the block.

        The context returns to idle when the block exits, including when it
        raises.
        """
        self.entry = fragment
        self.filename = fragment.filename
        try:
            yield fragment
        finally:
            self.entry = None
            self.filename = None

    def variables(self, **extra: Any) -> dict[str, Any]:
        """Names visible to templates, helpers included.

        Args:
            **extra: Additional variables (override defaults)
        """
        variables: dict[str, Any] = dict(self.helpers)
        variables.update(
            {
                "entry": self.entry,
                "filename": self.filename,
                "bundle": self.bundle,
                "bundle_name": self.bundle_name,
                "language": self.language,
                "library": self.library,
                "content_for_resources": self.buffer.text,
            }
        )
        variables.update(extra)
        return variables
