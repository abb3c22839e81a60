"""
Request Parsing

Pure string functions that turn a raw request URL into a DownloadToken.
None of them touch the filesystem.
"""

import posixpath
import re
from typing import Optional
from urllib.parse import unquote, urlsplit

from .value_objects import DownloadToken

_TRAVERSAL_PATTERN = re.compile(r"^\.\.?|^/|^\\")
_MALFORMED_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")
_HEX_PATTERN = re.compile(r"[0-9A-Fa-f]+")


def normalize_request_path(url: str) -> Optional[str]:
    """
    Extract and percent-decode the path of a request URL.

    The query string and fragment are dropped, the leading slash removed and
    trailing slashes trimmed.

    Args:
        url: Request target such as "/dl/abc/5f5e100/a.pdf?x=1", or an absolute URL

    Returns:
        Decoded path, or None when the URL has no usable path or the
        percent-encoding is malformed
    """
    if not url:
        return None

    try:
        parts = urlsplit(url)
    except ValueError:
        return None

    if parts.scheme:
        path = parts.path
    else:
        # "//host/x" is a path here, not a network location
        path = url.split("?", 1)[0].split("#", 1)[0]

    if not path.startswith("/"):
        return None
    path = path[1:]
    if not path:
        return None

    if _MALFORMED_ESCAPE_PATTERN.search(path):
        return None
    try:
        decoded = unquote(path, encoding="utf-8", errors="strict")
    except UnicodeDecodeError:
        return None

    decoded = decoded.rstrip("/")
    return decoded or None


def is_traversal_attempt(path: str) -> bool:
    """Check whether a path starts with '.', '..', '/' or '\\'."""
    return _TRAVERSAL_PATTERN.search(path) is not None


def strip_prefix(path: str, prefix: str) -> Optional[str]:
    """
    Remove the configured prefix and its separator from a path.

    Args:
        path: Normalized request path
        prefix: URI prefix without surrounding slashes; empty means no prefix

    Returns:
        The remainder, or None if the path is not under the prefix
    """
    if not prefix:
        return path
    if not path.startswith(prefix + "/"):
        return None
    return path[len(prefix) + 1:]


def parse_expiry(expiry_hex: str) -> Optional[int]:
    """Decode a hex timestamp; None if it is not plain hex digits."""
    if not _HEX_PATTERN.fullmatch(expiry_hex):
        return None
    return int(expiry_hex, 16)


def parse_token(remainder: str) -> Optional[DownloadToken]:
    """
    Split "<signature>/<time-hex>/<file path>" into a DownloadToken.

    Slashes inside the file path are kept. The file path is normalized
    (dot segments resolved, repeated separators collapsed).

    Returns:
        DownloadToken, or None when there are fewer than three fields
    """
    parts = remainder.split("/", 2)
    if len(parts) < 3:
        return None

    signature, expiry_hex, raw_file_path = parts
    return DownloadToken(
        signature=signature,
        expiry_hex=expiry_hex,
        expiry=parse_expiry(expiry_hex),
        file_path=posixpath.normpath(raw_file_path),
    )
