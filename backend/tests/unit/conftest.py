"""Unit test configuration.

Unit tests never reach a real MongoDB: they use the in-memory repository
or motor collections mocked with AsyncMock.
"""

from typing import Generator

import pytest


@pytest.fixture(autouse=True)
def _inmemory_backend(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Force the in-memory backend regardless of .env values."""
    monkeypatch.setenv("REPOSITORY_BACKEND", "inmemory")
    yield
