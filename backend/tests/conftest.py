"""Shared test fixtures.

Loads .env/.env.test and resets the process-wide singletons (activity
repository, MongoDB client) around every test.
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest
from dotenv import load_dotenv

from infrastructure.persistence.activity_repository_factory import reset_activity_repository
from infrastructure.persistence.mongodb.connection import close_mongo_client

# Load .env first (default environment variables)
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Load .env.test for integration tests (overrides .env values)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)


@pytest.fixture(autouse=True)
def _reset_singletons() -> Generator[None, None, None]:
    """Fresh repository and MongoDB client for every test."""
    reset_activity_repository()
    close_mongo_client()
    yield
    reset_activity_repository()
    close_mongo_client()
