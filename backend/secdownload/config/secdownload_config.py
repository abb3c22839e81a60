"""
SecDownload Configuration

Immutable configuration for signed download validation.
Values come from defaults, an optional JSON options file and
SECDOWNLOAD_* environment variables, in that order of precedence.
"""

import json
import logging
import os
import secrets
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from secdownload.domain.errors import InvalidConfigurationError
from secdownload.domain.secure_download.signature import SUPPORTED_DIGESTS

logger = logging.getLogger(__name__)

# Option names used by existing secdownload.json files
LEGACY_OPTION_NAMES = {
    "uriPrefix": "uri_prefix",
    "rootPath": "root_path",
    "apiKey": "api_key",
    "baseUrl": "base_url",
}

ENV_OPTIONS = {
    "SECDOWNLOAD_SECRET": "secret",
    "SECDOWNLOAD_URI_PREFIX": "uri_prefix",
    "SECDOWNLOAD_ROOT_PATH": "root_path",
    "SECDOWNLOAD_TIMEOUT": "timeout",
    "SECDOWNLOAD_SERVER": "server",
    "SECDOWNLOAD_DIGEST": "digest",
    "SECDOWNLOAD_BASE_URL": "base_url",
    "SECDOWNLOAD_API_KEY": "api_key",
}


@dataclass(frozen=True)
class SecDownloadConfig:
    """
    Process-wide download configuration.

    Instances are never mutated; use merged() to derive a new one.

    Attributes:
        secret: Shared signing key, text or raw bytes
        uri_prefix: URL prefix in front of the token, without surrounding slashes
        root_path: Base directory for served files
        timeout: Maximum allowed distance in seconds between token time and now
        server: Value of the Server header on error responses
        digest: Hash algorithm used for signatures
        base_url: Scheme and host prepended to issued links
        api_key: Key required to issue links over the API (None disables it)
    """

    secret: Union[str, bytes]
    uri_prefix: str = "dl"
    root_path: str = "/tmp/secdownload"
    timeout: int = 3600
    server: str = "SecDownload"
    digest: str = "md5"
    base_url: str = ""
    api_key: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.secret, (str, bytes)) or not self.secret:
            raise InvalidConfigurationError("secret must be a non-empty string or bytes")
        if not isinstance(self.uri_prefix, str):
            raise InvalidConfigurationError("uri_prefix must be a string")
        if not isinstance(self.root_path, str) or not self.root_path:
            raise InvalidConfigurationError("root_path must be a non-empty string")
        if (
            isinstance(self.timeout, bool)
            or not isinstance(self.timeout, int)
            or self.timeout < 0
        ):
            raise InvalidConfigurationError(
                f"timeout must be a non-negative integer, got {self.timeout!r}"
            )
        if self.digest not in SUPPORTED_DIGESTS:
            raise InvalidConfigurationError(
                f"digest must be one of {', '.join(SUPPORTED_DIGESTS)}, "
                f"got {self.digest!r}"
            )
        object.__setattr__(self, "uri_prefix", self.uri_prefix.strip("/"))

    def merged(self, options: Mapping[str, Any]) -> "SecDownloadConfig":
        """
        Return a copy with only the supplied options replaced.

        Args:
            options: Mapping of option name to value. Both field names and
                the legacy camelCase names are accepted.

        Returns:
            New SecDownloadConfig instance

        Raises:
            InvalidConfigurationError: On unknown options or invalid values
        """
        changes = _normalize_options(options)
        if not changes:
            return self
        return replace(self, **changes)

    def to_public_dict(self) -> Dict[str, Any]:
        """Return the configuration without secret values."""
        data = asdict(self)
        data.pop("secret")
        data.pop("api_key")
        return data

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "SecDownloadConfig":
        """
        Build a configuration from an option mapping on top of the defaults.

        A missing secret is replaced with a random per-process one.

        Raises:
            InvalidConfigurationError: On unknown options or invalid values
        """
        changes = _normalize_options(options)
        if not changes.get("secret"):
            _warn_generated_secret()
            changes["secret"] = _generate_secret()
        return cls(**changes)

    @classmethod
    def from_file(
        cls, path: str, base: Optional["SecDownloadConfig"] = None
    ) -> "SecDownloadConfig":
        """
        Load options from a JSON file.

        Args:
            path: Path to a JSON object of options
            base: Configuration to merge into (defaults when omitted)

        Raises:
            InvalidConfigurationError: If the file cannot be read or parsed
        """
        options = _load_options_file(path)
        if base is None:
            return cls.from_options(options)
        return base.merged(options)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SecDownloadConfig":
        """
        Load configuration from environment variables.

        SECDOWNLOAD_CONFIG_FILE, when set, names a JSON options file that is
        applied first; the other SECDOWNLOAD_* variables override it.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            SecDownloadConfig instance with loaded configuration
        """
        if environ is None:
            environ = os.environ

        options: Dict[str, Any] = {}
        config_file = environ.get("SECDOWNLOAD_CONFIG_FILE")
        if config_file:
            options.update(_normalize_options(_load_options_file(config_file)))

        for name, option in ENV_OPTIONS.items():
            value = environ.get(name)
            if value:
                options[option] = value

        return cls.from_options(options)


def _load_options_file(path: str) -> Dict[str, Any]:
    try:
        options = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise InvalidConfigurationError(
            f"Could not load configuration file {path}: {e}", e
        ) from e
    if not isinstance(options, dict):
        raise InvalidConfigurationError(
            f"Configuration file {path} must contain a JSON object"
        )
    return options


def _normalize_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    field_names = SecDownloadConfig.__dataclass_fields__.keys()
    changes: Dict[str, Any] = {}
    for key, value in options.items():
        name = LEGACY_OPTION_NAMES.get(key, key)
        if name not in field_names:
            raise InvalidConfigurationError(f"Unknown configuration option: {key}")
        changes[name] = value
    if isinstance(changes.get("timeout"), str):
        changes["timeout"] = _parse_timeout(changes["timeout"])
    return changes


def _parse_timeout(value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise InvalidConfigurationError(
            f"timeout must be an integer number of seconds, got {value!r}", e
        ) from e


def _generate_secret(length: int = 32) -> str:
    """Generate a cryptographically secure secret key."""
    return secrets.token_hex(length)


def _warn_generated_secret() -> None:
    logger.warning(
        "No secret configured; using a random per-process secret. "
        "Links will not survive a restart."
    )
