"""
Shared pytest fixtures and configuration for the SecDownload test suite.

This module provides:
- Hypothesis configuration for property-based testing
- A download root with sample files
- Configuration fixtures and a fixed clock
"""

import pytest
from hypothesis import HealthCheck, Phase, settings

from secdownload.config.secdownload_config import SecDownloadConfig
from tests.signing import NOW, SECRET

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.load_profile("default")


# =============================================================================
# Download Root Fixtures
# =============================================================================

@pytest.fixture
def download_root(tmp_path):
    """
    Provide a download root containing a few files.

    Layout:
        reports/q1.pdf
        notes.txt
        archive/            (directory)
    """
    root = tmp_path / "files"
    (root / "reports").mkdir(parents=True)
    (root / "reports" / "q1.pdf").write_bytes(b"%PDF-1.4 quarterly report")
    (root / "notes.txt").write_text("hello")
    (root / "archive").mkdir()
    return root


@pytest.fixture
def fixed_clock():
    """Provide a clock that always returns NOW."""
    return lambda: NOW


@pytest.fixture
def download_config(download_root) -> SecDownloadConfig:
    """Provide a configuration rooted at the sample download root."""
    return SecDownloadConfig(
        secret=SECRET,
        uri_prefix="dl",
        root_path=str(download_root),
        timeout=60,
        server="TestServer/1.0",
    )


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (real filesystem, Flask app)"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full workflows)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/e2e/* -> @pytest.mark.e2e
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in test_path or "\\e2e\\" in test_path:
            item.add_marker(pytest.mark.e2e)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
