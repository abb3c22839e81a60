"""
Configuration

Environment and file based configuration for the download service.
"""

from .secdownload_config import SecDownloadConfig

__all__ = ["SecDownloadConfig"]
