"""Errors raised while building HTML documents."""

from pathlib import Path


class BuildError(Exception):
    """Base class for HTML build failures."""


class UnsupportedTemplateError(BuildError):
    """Raised when a source path matches no known template suffix."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Unsupported template type: {self.path}")


class TemplateRenderError(BuildError):
    """Raised when rendering a fragment or layout fails in the engine or a helper.

    Attributes:
        source_path: Template source that failed
        filename: Entry filename being rendered (None for the layout)
    """

    def __init__(
        self,
        source_path: Path | str,
        message: str,
        filename: str | None = None,
    ) -> None:
        self.source_path = Path(source_path)
        self.filename = filename
        target = filename or "layout"
        super().__init__(f"Failed to render {target} ({self.source_path}): {message}")
