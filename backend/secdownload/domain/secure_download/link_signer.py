"""
Signed Link Service

Issues download links that SecureDownloadValidator accepts.
"""

import posixpath
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional
from urllib.parse import quote

from secdownload.domain.errors import InvalidFilePathError

from .request_parsing import is_traversal_attempt
from .signature import SignatureVerifier

if TYPE_CHECKING:
    from secdownload.config.secdownload_config import SecDownloadConfig


@dataclass(frozen=True)
class SignedLink:
    """
    A signed download link with its validity window.
    """

    url: str
    file_path: str
    signature: str
    timestamp: int
    expires_at: datetime
    issued_at: datetime

    @property
    def timestamp_hex(self) -> str:
        return format(self.timestamp, "x")

    def get_remaining_seconds(self, now: Optional[datetime] = None) -> int:
        """Get remaining seconds until expiration, as of issuance by default."""
        now = now or self.issued_at
        remaining = self.expires_at - now
        return max(0, int(remaining.total_seconds()))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "url": self.url,
            "file_path": self.file_path,
            "signature": self.signature,
            "timestamp": self.timestamp_hex,
            "expires_at": self.expires_at.isoformat(),
            "expires_in": self.get_remaining_seconds(),
        }


class SignedLinkService:
    """
    Generates signed download links from the current configuration.

    The configuration is read through a provider so links always use the
    settings in effect at the time of the call.
    """

    def __init__(
        self,
        config_provider: Callable[[], "SecDownloadConfig"],
        clock: Callable[[], float] = time.time,
    ):
        self._config_provider = config_provider
        self._clock = clock

    def generate_signed_link(
        self, file_path: str, timestamp: Optional[int] = None
    ) -> SignedLink:
        """
        Generate a signed link for a file under the download root.

        Args:
            file_path: Path relative to the download root
            timestamp: Unix time to embed in the link (defaults to now)

        Returns:
            SignedLink valid for config.timeout seconds around the timestamp

        Raises:
            InvalidFilePathError: If the path is empty or could escape the root
        """
        if not file_path or not file_path.strip():
            raise InvalidFilePathError("file_path cannot be empty")
        if is_traversal_attempt(file_path):
            raise InvalidFilePathError(f"file_path must be relative: {file_path}")

        canonical_path = posixpath.normpath(file_path)
        if is_traversal_attempt(canonical_path):
            raise InvalidFilePathError(f"file_path escapes the root: {file_path}")

        config = self._config_provider()
        now = self._clock()
        if timestamp is None:
            timestamp = int(now)
        timestamp_hex = format(timestamp, "x")

        signature = SignatureVerifier(config.secret, config.digest).sign(
            canonical_path, timestamp_hex
        )

        parts = [config.base_url.rstrip("/")]
        if config.uri_prefix:
            parts.append(quote(config.uri_prefix))
        parts.extend([signature, timestamp_hex, quote(canonical_path)])
        url = "/".join(parts)

        return SignedLink(
            url=url,
            file_path=canonical_path,
            signature=signature,
            timestamp=timestamp,
            expires_at=datetime.fromtimestamp(timestamp + config.timeout, timezone.utc),
            issued_at=datetime.fromtimestamp(now, timezone.utc),
        )
