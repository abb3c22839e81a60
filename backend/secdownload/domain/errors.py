"""
Error Handling Module

Defines domain exceptions and error categories for the application.
Domain exceptions are pure; only create_error_response logs.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    BAD_REQUEST = "bad_request"
    SECURITY = "security"
    URL_GONE = "url_gone"
    FILE_NOT_FOUND = "file_not_found"
    INVALID_FILE_PATH = "invalid_file_path"
    UNAUTHORIZED = "unauthorized"
    SERVICE_UNAVAILABLE = "service_unavailable"
    SYSTEM_ERROR = "system_error"


# User-facing copy. Never carries request details.
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.BAD_REQUEST: {
        "title": "Wut?",
        "message": "I couldn't understand that I'm afraid; the syntax appears malformed.",
        "action": "Check the download link and try again.",
    },
    ErrorCategory.SECURITY: {
        "title": "Hey!",
        "message": "Stop trying to hack my server!",
        "action": "Ask for a new download link.",
    },
    ErrorCategory.URL_GONE: {
        "title": "URL is not available",
        "message": "URL is not available anymore.",
        "action": "Ask for a new download link.",
    },
    ErrorCategory.FILE_NOT_FOUND: {
        "title": "Ooh dear",
        "message": "Sorry, I can't find that file. Could you check again?",
        "action": "Ask for a new download link.",
    },
    ErrorCategory.INVALID_FILE_PATH: {
        "title": "Invalid File Path",
        "message": "The file path must be relative to the download root.",
        "action": "Remove leading dots, slashes or backslashes from the path.",
    },
    ErrorCategory.UNAUTHORIZED: {
        "title": "Not Authorized",
        "message": "A valid API key is required to issue download links.",
        "action": "Send the configured key in the X-API-Key header.",
    },
    ErrorCategory.SERVICE_UNAVAILABLE: {
        "title": "Service Unavailable",
        "message": "This operation is not configured on the server.",
        "action": "Contact the server administrator.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error


class InvalidConfigurationError(DomainError):
    """Raised when a configuration value or option name is rejected."""
    pass


class InvalidFilePathError(DomainError):
    """
    Raised when a link is requested for a path that could escape the root.

    Only the issuing side raises this; the validator reports the same
    condition as a security outcome instead.
    """
    pass


class HandlerNotRegisteredError(DomainError):
    """Raised when an outcome has no handler to dispatch to."""
    pass


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Base application error with category and user-friendly messaging.

    Bridges domain errors with user-facing error messages and HTTP responses.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Technical error details for the server log
        """
        self.category = category
        self.technical_message = technical_message or ""

        error_info = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.title = error_info["title"]
        self.message = error_info["message"]
        self.action = error_info["action"]

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {
            "error": self.category.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    status_code: int = 400,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    The technical message goes to the server log only; the body carries
    the static copy for the category.

    Args:
        category: Error category
        technical_message: Technical error details for the server log
        status_code: HTTP status code

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message)
    if error.technical_message:
        logger.warning(f"{status_code} {category.value}: {error.technical_message}")
    return error.to_dict(), status_code
