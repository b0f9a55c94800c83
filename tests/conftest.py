"""Shared pytest fixtures for pagewright tests.

Fixtures are organized by category:
- Path fixtures: the on-disk sample project
- Model fixtures: entry and bundle factories for resolver and builder tests
- Configuration fixtures: configuration dictionaries
"""

import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pagewright.models import Bundle, Entry, EntryKind, HiddenMode

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_project_dir(fixtures_dir: Path) -> Path:
    """Return the path to the read-only sample project."""
    return fixtures_dir / "sample_project"


@pytest.fixture
def sample_project(sample_project_dir: Path, tmp_path: Path) -> Path:
    """Copy the sample project to a temporary directory builds can write to."""
    target = tmp_path / "sample_project"
    shutil.copytree(sample_project_dir, target)
    return target


# =============================================================================
# Model Fixtures
# =============================================================================


class FakeBundle(Bundle):
    """In-memory bundle with an explicit dependency closure.

    `requires` is the full ordered closure (excluding the bundle itself);
    it is returned after the bundle as given, without re-sorting.
    """

    def __init__(
        self,
        name: str,
        entries: list[Entry] | None = None,
        requires: list["FakeBundle"] | None = None,
        layout_path: Path | str = "layout.rhtml",
        library: Any = None,
    ) -> None:
        self.name = name
        self.entries = list(entries or [])
        self.requires = list(requires or [])
        self._layout_path = Path(layout_path)
        self._library = library
        self.entries_for_calls: list[tuple[EntryKind, str | None, HiddenMode]] = []

    @property
    def bundle_name(self) -> str:
        return self.name

    @property
    def layout_path(self) -> Path:
        return self._layout_path

    @property
    def library(self) -> Any:
        return self._library

    def all_required_bundles(self) -> list[Bundle]:
        return [self, *self.requires]

    def entries_for(
        self,
        kind: EntryKind,
        language: str | None = None,
        hidden: HiddenMode = HiddenMode.EXCLUDE,
    ) -> list[Entry]:
        self.entries_for_calls.append((kind, language, hidden))
        return [
            e
            for e in self.entries
            if e.type == kind
            and e.language in (language, None)
            and (hidden == HiddenMode.INCLUDE or not e.hidden)
        ]


@pytest.fixture
def make_entry(tmp_path: Path) -> Callable[..., Entry]:
    """Factory for entries whose sources live under tmp_path/src.

    Passing `source` writes the template text to the entry's source path.
    """

    def _make(
        filename: str,
        *,
        language: str | None = "en",
        localized: bool = True,
        type: EntryKind = EntryKind.HTML,
        hidden: bool = False,
        composite: list[Entry] | None = None,
        source: str | None = None,
    ) -> Entry:
        source_path = tmp_path / "src" / filename
        if source is not None:
            source_path.parent.mkdir(parents=True, exist_ok=True)
            source_path.write_text(source, encoding="utf-8")
        return Entry(
            filename=filename,
            source_path=source_path,
            build_path=tmp_path / "build" / filename,
            language=language,
            type=type,
            localized=localized,
            hidden=hidden,
            composite=composite,
        )

    return _make


@pytest.fixture
def make_bundle() -> type[FakeBundle]:
    """Return the in-memory bundle class."""
    return FakeBundle


@pytest.fixture
def write_layout(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a layout template under tmp_path/layouts and return its path."""

    def _write(name: str, source: str) -> Path:
        path = tmp_path / "layouts" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid configuration."""
    return {
        "output": {
            "build_dir": "build",
        }
    }


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete configuration with all options."""
    return {
        "templates": {
            "encoding": "utf-8",
            "haml_mode": "compact",
            "autoescape": True,
            "strict_undefined": False,
            "trim_blocks": True,
        },
        "output": {
            "build_dir": "public",
        },
        "project": {
            "default_language": "fr",
            "layout": "lib/layout.html.erb",
            "static_url": "https://cdn.example.com/assets",
            "bundles": {
                "app": {
                    "root": "apps/app",
                    "requires": ["core", "ui"],
                    "layout": "apps/app/layout.rhtml",
                },
                "ui": {"root": "frameworks/ui", "requires": "core"},
                "core": "frameworks/core",
            },
        },
    }
