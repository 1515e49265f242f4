"""Pytest configuration for psd-export tests."""

from typing import Any

import pytest


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "decoder: mark test as requiring the psd-tools decoder",
    )


# Check if the decoder is importable
try:
    import psd_tools  # noqa: F401

    HAS_DECODER = True
except ImportError:
    HAS_DECODER = False


# Marker to skip tests that require the decoder
skip_without_decoder = pytest.mark.skipif(
    not HAS_DECODER,
    reason="Requires the decoder: pip install psd-tools",
)
