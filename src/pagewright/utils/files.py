"""File access used by the HTML builder.

Reading sources and writing built documents go through a `FileStore` so the
bundle system (or a test) can substitute its own storage.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileStore:
    """Reads template sources and writes built documents on the local disk."""

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the store.

        Args:
            encoding: Text encoding for reads and writes
        """
        self.encoding = encoding

    def read_text(self, path: Path) -> str:
        """Read a template source.

        Raises:
            FileNotFoundError: If the path does not exist (names the path)
        """
        return Path(path).read_text(encoding=self.encoding)

    def write_text(self, path: Path, content: str) -> Path:
        """Write a document, creating parent directories and overwriting.

        Args:
            path: Destination path
            content: Document text

        Returns:
            The written path
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=self.encoding)
        logger.debug("Wrote %d characters to %s", len(content), path)
        return path
