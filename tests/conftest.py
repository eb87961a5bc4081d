from __future__ import annotations

import os
import sys

import pytest

# Add repository root to sys.path for `import nanobanana_mcp.*` in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from nanobanana_mcp.settings import get_settings  # noqa: E402

# 1x1 PNG
SAMPLE_PNG_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR4nGMAAQAABQAB/9k3WQAAAABJRU5ErkJggg=="


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached process-wide; reset around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def png_b64() -> str:
    return SAMPLE_PNG_B64
