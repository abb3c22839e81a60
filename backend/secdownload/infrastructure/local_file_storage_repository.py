"""
Local File Storage Repository Implementation

Concrete implementation of IFileStorageRepository for the local filesystem.
"""

from pathlib import Path

from secdownload.domain.secure_download.storage_repository import IFileStorageRepository


class LocalFileStorageRepository(IFileStorageRepository):
    """
    Local filesystem implementation of IFileStorageRepository.

    The root directory is not created; a missing root simply means no
    file is ever found.

    Thread Safety:
        Only read operations are performed, so concurrent use is safe.

    Attributes:
        base_path: Directory that file paths are relative to
    """

    def __init__(self, base_path: str):
        """
        Initialize the local file storage repository.

        Args:
            base_path: Root directory for served files
        """
        self.base_path = Path(base_path)

    def resolve(self, file_path: str) -> str:
        """
        Join a relative path to the root.

        Implements IFileStorageRepository.resolve(). The caller is
        responsible for rejecting paths that could escape the root.
        """
        return str(self.base_path / file_path)

    def is_regular_file(self, file_path: str) -> bool:
        """
        Check if a regular file exists at the specified path.

        Implements IFileStorageRepository.is_regular_file(). This method
        never raises exceptions - invalid paths return False.

        Args:
            file_path: Relative path to check (e.g., 'reports/q1.pdf')

        Returns:
            True if the file exists and is a regular file, False otherwise
        """
        try:
            if not file_path or not file_path.strip():
                return False

            # is_file() follows symlinks, so links to directories are rejected
            return (self.base_path / file_path).is_file()

        except (OSError, ValueError):
            return False
