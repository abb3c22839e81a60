"""
Unit tests for SecureDownloadValidator.

Storage is mocked; filesystem behavior is covered by the integration
suite. The clock is fixed at NOW.
"""

from unittest.mock import Mock

import pytest

from secdownload.config.secdownload_config import SecDownloadConfig
from secdownload.domain.secure_download.storage_repository import IFileStorageRepository
from secdownload.domain.secure_download.validator import SecureDownloadValidator
from secdownload.domain.secure_download.value_objects import (
    OutcomeKind,
    SignedRequest,
    ValidationOutcome,
)
from tests.signing import NOW, SECRET, sign, signed_url


@pytest.fixture
def storage():
    """Mock storage where every path is a regular file under /srv/files."""
    mock = Mock(spec=IFileStorageRepository)
    mock.resolve.side_effect = lambda path: f"/srv/files/{path}"
    mock.is_regular_file.return_value = True
    return mock


@pytest.fixture
def config():
    return SecDownloadConfig(
        secret=SECRET, uri_prefix="dl", root_path="/srv/files", timeout=60
    )


@pytest.fixture
def validator(config, storage):
    return SecureDownloadValidator(config, storage, clock=lambda: NOW)


class TestServe:
    """Requests that pass every check."""

    def test_valid_link_is_served(self, validator):
        """secret=s3cr3t, prefix=dl, file=reports/q1.pdf, time=now+10, timeout=60."""
        outcome = validator.validate(signed_url("reports/q1.pdf", timestamp=NOW + 10))

        assert outcome == ValidationOutcome.serve(
            "reports/q1.pdf", "/srv/files/reports/q1.pdf"
        )

    def test_accepts_signed_request(self, validator):
        outcome = validator.validate(SignedRequest(url=signed_url("notes.txt")))
        assert outcome.kind is OutcomeKind.SERVE

    def test_query_string_is_ignored(self, validator):
        outcome = validator.validate(signed_url("notes.txt") + "?utm_source=mail")
        assert outcome.kind is OutcomeKind.SERVE

    def test_percent_encoded_path(self, validator):
        time_hex = format(NOW, "x")
        signature = sign(SECRET, "reports/q1 final.pdf", time_hex)

        outcome = validator.validate(f"/dl/{signature}/{time_hex}/reports/q1%20final.pdf")

        assert outcome.kind is OutcomeKind.SERVE
        assert outcome.file_path == "reports/q1 final.pdf"

    def test_signature_covers_canonical_path(self, validator):
        time_hex = format(NOW, "x")
        signature = sign(SECRET, "reports/q1.pdf", time_hex)

        outcome = validator.validate(f"/dl/{signature}/{time_hex}/reports//./q1.pdf")

        assert outcome.kind is OutcomeKind.SERVE
        assert outcome.file_path == "reports/q1.pdf"

    def test_trailing_slash_is_trimmed(self, validator):
        outcome = validator.validate(signed_url("notes.txt") + "/")
        assert outcome.kind is OutcomeKind.SERVE

    @pytest.mark.parametrize("offset", [-60, 0, 60])
    def test_window_boundaries_are_inclusive(self, validator, offset):
        outcome = validator.validate(signed_url("notes.txt", timestamp=NOW + offset))
        assert outcome.kind is OutcomeKind.SERVE

    def test_empty_prefix(self, config, storage):
        validator = SecureDownloadValidator(
            config.merged({"uri_prefix": ""}), storage, clock=lambda: NOW
        )
        outcome = validator.validate(signed_url("notes.txt", prefix=""))
        assert outcome.kind is OutcomeKind.SERVE

    def test_nested_prefix(self, config, storage):
        validator = SecureDownloadValidator(
            config.merged({"uri_prefix": "/files/secure/"}), storage, clock=lambda: NOW
        )
        outcome = validator.validate(signed_url("notes.txt", prefix="files/secure"))
        assert outcome.kind is OutcomeKind.SERVE

    def test_alternative_digest(self, config, storage):
        validator = SecureDownloadValidator(
            config.merged({"digest": "sha256"}), storage, clock=lambda: NOW
        )

        assert validator.validate(
            signed_url("notes.txt", digest="sha256")
        ).kind is OutcomeKind.SERVE
        assert validator.validate(
            signed_url("notes.txt", digest="md5")
        ).kind is OutcomeKind.SECURITY


class TestBadRequest:
    """Malformed request URLs."""

    @pytest.mark.parametrize(
        "url", ["", "/", "/dl/%ZZ/6553f100/a.txt", "/dl/abc/6553f100/caf%C3%28.txt"]
    )
    def test_malformed_url(self, validator, storage, url):
        outcome = validator.validate(url)

        assert outcome.kind is OutcomeKind.BAD_REQUEST
        storage.is_regular_file.assert_not_called()

    @pytest.mark.parametrize("url", ["/dl/abc", "/dl/abc/6553f100"])
    def test_incomplete_token(self, validator, url):
        assert validator.validate(url).kind is OutcomeKind.BAD_REQUEST


class TestSecurity:
    """Tampering, traversal and prefix mismatches."""

    def test_wrong_signature(self, validator, storage):
        time_hex = format(NOW, "x")
        outcome = validator.validate(f"/dl/{'0' * 32}/{time_hex}/notes.txt")

        assert outcome.kind is OutcomeKind.SECURITY
        storage.resolve.assert_not_called()

    def test_wrong_signature_beats_expiry(self, validator):
        """A forged link is a security problem even if it is also stale."""
        time_hex = format(NOW - 10_000, "x")
        outcome = validator.validate(f"/dl/{'0' * 32}/{time_hex}/notes.txt")

        assert outcome.kind is OutcomeKind.SECURITY

    def test_signature_for_other_file(self, validator):
        time_hex = format(NOW, "x")
        signature = sign(SECRET, "notes.txt", time_hex)

        outcome = validator.validate(f"/dl/{signature}/{time_hex}/reports/q1.pdf")

        assert outcome.kind is OutcomeKind.SECURITY

    def test_signature_over_raw_path_is_rejected(self, validator):
        time_hex = format(NOW, "x")
        signature = sign(SECRET, "reports//./q1.pdf", time_hex)

        outcome = validator.validate(f"/dl/{signature}/{time_hex}/reports//./q1.pdf")

        assert outcome.kind is OutcomeKind.SECURITY

    def test_uppercase_signature_rejected(self, validator):
        time_hex = format(NOW, "x")
        signature = sign(SECRET, "notes.txt", time_hex).upper()

        outcome = validator.validate(f"/dl/{signature}/{time_hex}/notes.txt")

        assert outcome.kind is OutcomeKind.SECURITY

    @pytest.mark.parametrize(
        "url",
        [
            "/../dl/sig/6553f100/a.txt",
            "/./dl/sig/6553f100/a.txt",
            "/.hidden",
            "//etc/passwd",
            "/%2e%2e/etc/passwd",
            "/%2Fetc/passwd",
            "/%5Cwindows/system32",
        ],
    )
    def test_traversal_before_prefix(self, validator, storage, url):
        outcome = validator.validate(url)

        assert outcome.kind is OutcomeKind.SECURITY
        storage.resolve.assert_not_called()

    def test_traversal_after_normalization_with_valid_signature(self, validator, storage):
        """Even a correctly signed escaping path never reaches the filesystem."""
        time_hex = format(NOW, "x")
        signature = sign(SECRET, "../etc/passwd", time_hex)

        outcome = validator.validate(f"/dl/{signature}/{time_hex}/a/../../etc/passwd")

        assert outcome.kind is OutcomeKind.SECURITY
        storage.resolve.assert_not_called()

    @pytest.mark.parametrize("file_path", [".env", "./notes.txt", "a/.."])
    def test_dot_paths_after_prefix(self, validator, storage, file_path):
        outcome = validator.validate(signed_url(file_path))

        assert outcome.kind is OutcomeKind.SECURITY
        storage.resolve.assert_not_called()

    @pytest.mark.parametrize(
        "url",
        [
            signed_url("notes.txt", prefix="files"),
            signed_url("notes.txt", prefix="dlx"),
            signed_url("notes.txt", prefix="DL"),
            "/dl",
        ],
    )
    def test_prefix_mismatch(self, validator, url):
        assert validator.validate(url).kind is OutcomeKind.SECURITY


class TestExpired:
    """Links outside the time window."""

    def test_stale_link(self, validator):
        outcome = validator.validate(signed_url("notes.txt", timestamp=NOW - 61))
        assert outcome.kind is OutcomeKind.EXPIRED

    def test_link_too_far_in_future(self, validator):
        outcome = validator.validate(signed_url("notes.txt", timestamp=NOW + 61))
        assert outcome.kind is OutcomeKind.EXPIRED

    def test_signed_but_undecodable_time(self, validator, storage):
        signature = sign(SECRET, "notes.txt", "zz")

        outcome = validator.validate(f"/dl/{signature}/zz/notes.txt")

        assert outcome.kind is OutcomeKind.EXPIRED
        storage.is_regular_file.assert_not_called()


class TestNotFound:
    """Valid links to files that cannot be served."""

    def test_missing_file(self, validator, storage):
        storage.is_regular_file.return_value = False

        outcome = validator.validate(signed_url("missing.txt"))

        assert outcome.kind is OutcomeKind.NOT_FOUND
        assert "/srv/files/missing.txt" in outcome.reason
        storage.is_regular_file.assert_called_once_with("missing.txt")


class TestDeterminism:
    """Repeated validation gives the same answer."""

    @pytest.mark.parametrize(
        "url",
        [
            signed_url("notes.txt"),
            signed_url("notes.txt", timestamp=NOW - 3600),
            "/dl/%ZZ",
            "/elsewhere/x/y/z",
        ],
    )
    def test_idempotent(self, validator, url):
        assert validator.validate(url) == validator.validate(url)

    def test_config_is_exposed(self, validator, config):
        assert validator.config is config
