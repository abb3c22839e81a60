"""
File Storage Repository Interface

Abstract interface for the filesystem lookups the validator needs.
Keeps the domain layer independent of where the files actually live.
"""

from abc import ABC, abstractmethod


class IFileStorageRepository(ABC):
    """
    Read-only view of the directory files are served from.

    Contract Guarantees:
    - File paths are canonical and relative to the storage root
    - is_regular_file() never raises; any error means "not a file"
    - Implementations are safe for concurrent reads
    """

    @abstractmethod
    def resolve(self, file_path: str) -> str:
        """
        Join a relative path to the storage root.

        Args:
            file_path: Canonical relative path (e.g., 'reports/q1.pdf')

        Returns:
            Absolute path as a string. The path is not checked for existence.
        """
        pass  # pragma: no cover

    @abstractmethod
    def is_regular_file(self, file_path: str) -> bool:
        """
        Check that a path exists and is a regular file.

        Directories, missing paths and symlinks to directories all return
        False. Symlinks to regular files return True.

        Args:
            file_path: Canonical relative path

        Returns:
            True if a regular file exists at the path, False otherwise
        """
        pass  # pragma: no cover
