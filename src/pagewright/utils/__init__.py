"""pagewright utility modules.

- logging: Standardized logging with human/verbose/JSON modes
- files: File store used to read template sources and write documents
"""

from pagewright.utils.logging import get_logger, setup_logging
from pagewright.utils.files import FileStore

__all__ = [
    "FileStore",
    "get_logger",
    "setup_logging",
]
