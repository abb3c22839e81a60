"""
Secure Download Validator

Decides what to do with a signed download request. The pipeline is:

    normalize -> traversal guard -> prefix -> parse -> canonical path guard
    -> signature -> expiry -> file check

The first failing stage determines the outcome and nothing after it runs.
The traversal guards are pure string checks and always run before the
path is joined to the storage root.
"""

import time
from typing import TYPE_CHECKING, Callable, Union

from .request_parsing import (
    is_traversal_attempt,
    normalize_request_path,
    parse_token,
    strip_prefix,
)
from .signature import SignatureVerifier
from .storage_repository import IFileStorageRepository
from .value_objects import SignedRequest, ValidationOutcome

if TYPE_CHECKING:
    from secdownload.config.secdownload_config import SecDownloadConfig


class SecureDownloadValidator:
    """
    Validates signed download URLs against one configuration snapshot.

    Holds no per-request state, so a single instance can be shared by
    concurrent requests.
    """

    def __init__(
        self,
        config: "SecDownloadConfig",
        storage: IFileStorageRepository,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            config: Configuration snapshot (never mutated)
            storage: Repository rooted at config.root_path
            clock: Returns the current Unix time
        """
        self._config = config
        self._storage = storage
        self._clock = clock
        self._verifier = SignatureVerifier(config.secret, config.digest)

    @property
    def config(self) -> "SecDownloadConfig":
        return self._config

    def validate(self, request: Union[SignedRequest, str]) -> ValidationOutcome:
        """
        Validate a request URL.

        Args:
            request: SignedRequest or raw request target

        Returns:
            ValidationOutcome; this method does not raise for any input
        """
        request = SignedRequest.coerce(request)

        path = normalize_request_path(request.url)
        if path is None:
            return ValidationOutcome.bad_request(f"Malformed request URL: {request.url!r}")

        if is_traversal_attempt(path):
            return ValidationOutcome.security(f"Path traversal attempt: {path}")

        remainder = strip_prefix(path, self._config.uri_prefix)
        if remainder is None:
            return ValidationOutcome.security(f"Prefix mismatch: {path}")

        token = parse_token(remainder)
        if token is None:
            return ValidationOutcome.bad_request(f"Incomplete token: {remainder}")

        if is_traversal_attempt(token.file_path):
            return ValidationOutcome.security(
                f"Path traversal attempt after normalization: {remainder}"
            )

        if not self._verifier.verify(token):
            return ValidationOutcome.security(f"Signature mismatch: {remainder}")

        if token.is_expired(int(self._clock()), self._config.timeout):
            return ValidationOutcome.expired(f"Token outside time window: {remainder}")

        resolved_path = self._storage.resolve(token.file_path)
        if not self._storage.is_regular_file(token.file_path):
            return ValidationOutcome.not_found(f"Not a regular file: {resolved_path}")

        return ValidationOutcome.serve(token.file_path, resolved_path)
