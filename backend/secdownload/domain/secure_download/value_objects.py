"""
Secure Download Value Objects

Immutable per-request objects produced and consumed by the validator.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class SignedRequest:
    """
    Incoming download request.

    Attributes:
        url: Raw request target (path plus optional query), still percent-encoded
    """

    url: str

    @classmethod
    def coerce(cls, value: Union["SignedRequest", str]) -> "SignedRequest":
        if isinstance(value, cls):
            return value
        return cls(url=value)


@dataclass(frozen=True)
class DownloadToken:
    """
    The signature/time/path triple parsed from a request path.

    Attributes:
        signature: Supplied hex signature
        expiry_hex: Timestamp field exactly as sent
        expiry: Decoded timestamp, None when expiry_hex is not valid hex
        file_path: Canonical relative file path
    """

    signature: str
    expiry_hex: str
    expiry: Optional[int]
    file_path: str

    def is_expired(self, now: int, timeout: int) -> bool:
        """
        Check the token time against the allowed window.

        The distance is absolute, so timestamps too far in the future are
        rejected as well. An undecodable timestamp is always expired.
        """
        if self.expiry is None:
            return True
        return abs(now - self.expiry) > timeout


class OutcomeKind(Enum):
    """Possible results of validating a download request."""

    SERVE = "serve"
    BAD_REQUEST = "bad_request"
    SECURITY = "security"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Result of validating one request.

    Rejections carry a reason for server-side logs only; it must never be
    sent to the client.

    Attributes:
        kind: Which outcome this is
        file_path: Canonical relative path (serve only)
        resolved_path: Absolute path on disk (serve only)
        reason: Diagnostic message
    """

    kind: OutcomeKind
    file_path: Optional[str] = None
    resolved_path: Optional[str] = None
    reason: str = ""

    @property
    def is_served(self) -> bool:
        return self.kind is OutcomeKind.SERVE

    @classmethod
    def serve(cls, file_path: str, resolved_path: str) -> "ValidationOutcome":
        return cls(OutcomeKind.SERVE, file_path=file_path, resolved_path=resolved_path)

    @classmethod
    def bad_request(cls, reason: str) -> "ValidationOutcome":
        return cls(OutcomeKind.BAD_REQUEST, reason=reason)

    @classmethod
    def security(cls, reason: str) -> "ValidationOutcome":
        return cls(OutcomeKind.SECURITY, reason=reason)

    @classmethod
    def expired(cls, reason: str) -> "ValidationOutcome":
        return cls(OutcomeKind.EXPIRED, reason=reason)

    @classmethod
    def not_found(cls, reason: str) -> "ValidationOutcome":
        return cls(OutcomeKind.NOT_FOUND, reason=reason)
