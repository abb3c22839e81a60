"""
Infrastructure Layer

Filesystem and logging adapters for the domain interfaces.
"""

from .local_file_storage_repository import LocalFileStorageRepository
from .logging_handler import LoggingOutcomeHandler

__all__ = ["LocalFileStorageRepository", "LoggingOutcomeHandler"]
