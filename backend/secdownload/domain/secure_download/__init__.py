"""
Secure Download Domain

Validation of time-limited signed download URLs and issuing of new ones.
"""

from .link_signer import SignedLink, SignedLinkService
from .signature import DEFAULT_DIGEST, SUPPORTED_DIGESTS, SignatureVerifier
from .storage_repository import IFileStorageRepository
from .validator import SecureDownloadValidator
from .value_objects import DownloadToken, OutcomeKind, SignedRequest, ValidationOutcome

__all__ = [
    'DEFAULT_DIGEST',
    'SUPPORTED_DIGESTS',
    'DownloadToken',
    'IFileStorageRepository',
    'OutcomeKind',
    'SecureDownloadValidator',
    'SignatureVerifier',
    'SignedLink',
    'SignedLinkService',
    'SignedRequest',
    'ValidationOutcome',
]
