"""
Application Layer

Wires validation, dispatch and configuration together.
"""

from .configuration_holder import ConfigurationHolder
from .dependency_container import DependencyContainer, DependencyNotFoundError
from .outcome_dispatcher import OutcomeDispatcher
from .secure_download_service import SecureDownloadService

__all__ = [
    "ConfigurationHolder",
    "DependencyContainer",
    "DependencyNotFoundError",
    "OutcomeDispatcher",
    "SecureDownloadService",
]
