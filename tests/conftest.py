from __future__ import annotations

import os

import pytest

# Keep the application engine off the filesystem during tests.
os.environ.setdefault("GYMDASH_DATABASE_URL", "sqlite://")

from helpers import build_store  # noqa: E402


@pytest.fixture
def store():
    return build_store()
