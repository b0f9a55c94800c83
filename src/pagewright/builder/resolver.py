"""Fragment resolution: which templates make up one built HTML page.

A page is built from the entry itself plus, in a deep build, the HTML
entries of every bundle its bundle depends on. Composite entries are
expanded into their members, duplicates are dropped, and raw partials
(non-localized HTML templates) are filtered out.
"""

import logging
from collections.abc import Iterable

from pagewright.models.bundle import Bundle, HiddenMode
from pagewright.models.entry import Entry, EntryKind

logger = logging.getLogger(__name__)


def _expand(entries: Iterable[Entry]) -> list[Entry]:
    expanded: list[Entry] = []
    for entry in entries:
        expanded.extend(entry.expand())
    return expanded


def _unique(entries: Iterable[Entry]) -> list[Entry]:
    seen: set[int] = set()
    unique: list[Entry] = []
    for entry in entries:
        if id(entry) not in seen:
            seen.add(id(entry))
            unique.append(entry)
    return unique


def collect_entries(entry: Entry, bundle: Bundle, deep: bool = True) -> list[Entry]:
    """Collect candidate entries before deduplication and filtering.

    Args:
        entry: Entry being built
        bundle: Bundle that owns the entry
        deep: Include HTML entries of every required bundle

    Returns:
        Expanded entries in bundle order, duplicates kept
    """
    if not deep:
        return entry.expand()

    collected: list[Entry] = []
    for current in bundle.all_required_bundles():
        if current is bundle:
            contributed = [entry]
        else:
            contributed = current.entries_for(
                EntryKind.HTML,
                language=entry.language,
                hidden=HiddenMode.INCLUDE,
            )
        collected.extend(_expand(contributed))
    return collected


def is_renderable(candidate: Entry, entry: Entry) -> bool:
    """Return True if a collected entry should be rendered into the page.

    Composites are never rendered directly. Non-localized HTML templates are
    partials, except the entry being built, which is always kept.
    """
    if candidate.is_composite:
        return False
    if candidate is entry:
        return True
    return not (candidate.type == EntryKind.HTML and not candidate.localized)


def resolve_fragments(entry: Entry, bundle: Bundle, deep: bool = True) -> tuple[Entry, ...]:
    """Resolve the ordered fragments to render for an entry.

    Order follows `bundle.all_required_bundles()` and then each bundle's own
    entry order; the first occurrence of an entry wins.

    Args:
        entry: Entry being built
        bundle: Bundle that owns the entry
        deep: Include HTML entries of every required bundle

    Returns:
        Fragments to render, in order
    """
    candidates = _unique(collect_entries(entry, bundle, deep))
    fragments = tuple(c for c in candidates if is_renderable(c, entry))

    logger.debug(
        "Resolved %d fragments for %s in %s (deep=%s, %d dropped)",
        len(fragments),
        entry.filename,
        bundle.bundle_name,
        deep,
        len(candidates) - len(fragments),
    )
    return fragments
