"""Bundle model backed by the project configuration.

Each configured bundle is a directory. Entries are discovered by scanning it:
- Template files (.rhtml, .html.erb, .haml, .html.haml) are HTML entries
- .js and .css files are JavaScript and stylesheet entries
- Files under a <lang>.lproj/ directory are localized for <lang>
- Files whose name starts with "_" are hidden

For every language a bundle has, a virtual composite "index.html" entry groups
that language's localized HTML entries; building it produces the bundle page.
"""

import logging
from pathlib import Path

from pagewright.builder.dispatcher import TEMPLATE_SUFFIXES, match_template_kind
from pagewright.config import BundleConfig, PagewrightConfig
from pagewright.helpers import HelperRegistry
from pagewright.models.bundle import Bundle, HiddenMode
from pagewright.models.entry import Entry, EntryKind

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"
LPROJ_SUFFIX = ".lproj"

RESOURCE_KINDS = {
    ".js": EntryKind.JAVASCRIPT,
    ".css": EntryKind.STYLESHEET,
}


class ProjectError(ValueError):
    """Raised for unknown bundles or entries."""


def _entry_kind(path: Path) -> EntryKind | None:
    if match_template_kind(path) is not None:
        return EntryKind.HTML
    return RESOURCE_KINDS.get(path.suffix)


def _built_name(relative: Path) -> Path:
    name = relative.name
    for suffix, _ in sorted(TEMPLATE_SUFFIXES, key=lambda item: -len(item[0])):
        if name.endswith(suffix):
            return relative.with_name(name[: -len(suffix)] + ".html")
    return relative


def _language_of(relative: Path) -> str | None:
    for part in relative.parts[:-1]:
        if part.endswith(LPROJ_SUFFIX):
            return part[: -len(LPROJ_SUFFIX)]
    return None


class ProjectBundle(Bundle):
    """A bundle defined in the project configuration."""

    def __init__(self, name: str, config: BundleConfig, project: "Project") -> None:
        """Initialize the bundle.

        Args:
            name: Bundle name
            config: Bundle definition
            project: Owning project
        """
        self.name = name
        self.config = config
        self.project = project
        self.root = (project.root / config.root).resolve()
        self._entries: list[Entry] | None = None

    @property
    def bundle_name(self) -> str:
        return self.name

    @property
    def layout_path(self) -> Path:
        layout = self.config.layout or self.project.config.project.layout
        return (self.project.root / layout).resolve()

    @property
    def library(self) -> "Project":
        return self.project

    @property
    def build_root(self) -> Path:
        """Directory this bundle's documents are written under."""
        return self.project.build_dir / self.name

    def all_required_bundles(self) -> list[Bundle]:
        """Return this bundle, then its requirements depth-first, each once."""
        ordered: list[Bundle] = []
        seen: set[str] = set()

        def visit(bundle: ProjectBundle) -> None:
            if bundle.name in seen:
                return
            seen.add(bundle.name)
            ordered.append(bundle)
            for required in bundle.config.requires:
                visit(self.project.bundle(required))

        visit(self)
        return ordered

    @property
    def entries(self) -> list[Entry]:
        """All entries, composites last (scanned once)."""
        if self._entries is None:
            self._entries = self._scan()
        return self._entries

    @property
    def languages(self) -> list[str]:
        """Languages with localized entries, plus the default language."""
        found = {e.language for e in self.entries if e.localized and e.language}
        found.add(self.project.config.project.default_language)
        return sorted(found)

    def _scan(self) -> list[Entry]:
        entries: list[Entry] = []
        if not self.root.is_dir():
            logger.warning("Bundle %s root does not exist: %s", self.name, self.root)
        else:
            for path in sorted(p for p in self.root.rglob("*") if p.is_file()):
                kind = _entry_kind(path)
                if kind is None:
                    continue
                relative = path.relative_to(self.root)
                language = _language_of(relative)
                entries.append(
                    Entry(
                        filename=relative.as_posix(),
                        source_path=path,
                        build_path=self.build_root / _built_name(relative),
                        language=language,
                        type=kind,
                        localized=language is not None,
                        hidden=path.name.startswith("_"),
                    )
                )

        languages = {e.language for e in entries if e.language}
        languages.add(self.project.config.project.default_language)
        for language in sorted(languages):
            members = [
                e
                for e in entries
                if e.type == EntryKind.HTML and e.localized and e.language == language
            ]
            entries.append(
                Entry(
                    filename=INDEX_FILENAME,
                    source_path=self.root / INDEX_FILENAME,
                    build_path=self.build_root / language / INDEX_FILENAME,
                    language=language,
                    type=EntryKind.HTML,
                    localized=True,
                    composite=members,
                )
            )

        logger.debug("Scanned %d entries in bundle %s", len(entries), self.name)
        return entries

    def entries_for(
        self,
        kind: EntryKind,
        language: str | None = None,
        hidden: HiddenMode = HiddenMode.EXCLUDE,
    ) -> list[Entry]:
        return [
            e
            for e in self.entries
            if e.type == kind
            and (language is None or e.language in (language, None))
            and (hidden == HiddenMode.INCLUDE or not e.hidden)
        ]

    def entry_named(self, filename: str, language: str | None = None) -> Entry:
        """Find an entry by filename, preferring the requested language.

        Raises:
            ProjectError: If no entry matches
        """
        language = language or self.project.config.project.default_language
        candidates = [e for e in self.entries if e.filename == filename]
        for entry in candidates:
            if entry.language == language:
                return entry
        for entry in candidates:
            if entry.language is None:
                return entry
        raise ProjectError(
            f"No entry {filename!r} for language {language!r} in bundle {self.name!r}"
        )

    def __repr__(self) -> str:
        return f"ProjectBundle({self.name!r}, root={str(self.root)!r})"


class Project:
    """All bundles of a project; serves as the bundles' shared library.

    Attributes:
        config: pagewright configuration
        root: Directory bundle roots and layouts are resolved against
        helpers: Helper registry shared by every build
    """

    def __init__(
        self,
        config: PagewrightConfig,
        root: Path | None = None,
        helpers: HelperRegistry | None = None,
    ) -> None:
        """Initialize the project.

        Args:
            config: pagewright configuration
            root: Project root (defaults to the config's project root)
            helpers: Helper registry (built-in helpers if omitted)
        """
        self.config = config
        self.root = (root or config.project_root).resolve()
        self.helpers = helpers or HelperRegistry()
        self._bundles = {
            name: ProjectBundle(name, bundle_config, self)
            for name, bundle_config in config.project.bundles.items()
        }

    @property
    def build_dir(self) -> Path:
        """Directory built documents are written under."""
        return (self.root / self.config.output.build_dir).resolve()

    @property
    def bundles(self) -> list[ProjectBundle]:
        """Bundles in configuration order."""
        return list(self._bundles.values())

    def bundle(self, name: str) -> ProjectBundle:
        """Return a bundle by name.

        Raises:
            ProjectError: If the bundle is not configured
        """
        try:
            return self._bundles[name]
        except KeyError:
            raise ProjectError(
                f"Unknown bundle: {name}. Available: {sorted(self._bundles)}"
            ) from None
