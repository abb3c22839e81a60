"""
Signature Verifier

Computes and checks the keyed digest that binds a file path and a
timestamp to the shared secret:

    hexdigest(secret + "/" + file_path + time_hex)

MD5 is the default so that links signed by existing deployments keep
working. Any of SUPPORTED_DIGESTS can be configured instead.
"""

import hashlib
import hmac
from typing import Union

from .value_objects import DownloadToken

SUPPORTED_DIGESTS = ("md5", "sha1", "sha256", "sha512")
DEFAULT_DIGEST = "md5"


class SignatureVerifier:
    """
    Signs and verifies download tokens with a shared secret.
    """

    def __init__(self, secret: Union[str, bytes], digest: str = DEFAULT_DIGEST):
        if digest not in SUPPORTED_DIGESTS:
            raise ValueError(f"Unsupported digest: {digest}")
        # Byte secrets are used as-is; text secrets are UTF-8 encoded
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        self._secret = secret
        self._digest = digest

    @property
    def digest(self) -> str:
        return self._digest

    def sign(self, file_path: str, time_hex: str) -> str:
        """
        Compute the lowercase hex signature for a canonical path.

        Args:
            file_path: Canonical relative file path
            time_hex: Timestamp exactly as it appears in the URL

        Returns:
            Hex digest string
        """
        message = self._secret + f"/{file_path}{time_hex}".encode("utf-8")
        return hashlib.new(self._digest, message).hexdigest()

    def verify(self, token: DownloadToken) -> bool:
        """
        Check the token's signature against the recomputed one.

        Uses constant-time comparison to prevent timing attacks.
        """
        expected = self.sign(token.file_path, token.expiry_hex)
        return hmac.compare_digest(
            expected.encode("utf-8"), token.signature.encode("utf-8")
        )
