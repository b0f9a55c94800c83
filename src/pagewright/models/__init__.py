"""pagewright data models.

- Entry: template or resource unit tracked by a bundle
- Bundle: abstract bundle with its dependency closure
- Project / ProjectBundle: bundle model backed by the project configuration
"""

from pagewright.models.bundle import Bundle, HiddenMode
from pagewright.models.entry import Entry, EntryKind
from pagewright.models.project import Project, ProjectBundle, ProjectError

__all__ = [
    "Bundle",
    "Entry",
    "EntryKind",
    "HiddenMode",
    "Project",
    "ProjectBundle",
    "ProjectError",
]
