"""
Global test configuration for gopro-uploader.

Provides a fake prober fixture so tests never need ffprobe. Factories live in
``tests/util/media.py``.
"""

import sys
from pathlib import Path

import pytest

# Ensure the project src directory is importable without relying on external environment.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from util.media import FakeProber  # noqa: E402


@pytest.fixture
def prober() -> FakeProber:
    return FakeProber()
