"""Tests for FastAPI lifespan context manager - repository startup/shutdown.

Tests verify:
- In-memory backend starts without touching MongoDB
- MongoDB backend ensures the userId index at startup
- The shared MongoDB client is closed at shutdown (also after a crash)
- Configuration errors abort startup
- Running app.py as a script serves the app through uvicorn
"""

import runpy
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app import lifespan
from domain.activity.exceptions import ConfigurationError
from infrastructure.persistence.inmemory.activity_repository import (
    InMemoryActivityRepository,
)
from infrastructure.persistence.mongodb import MongoActivityRepository


@pytest.fixture
def mock_mongo_repository():
    """MongoActivityRepository double with awaitable ensure_indexes."""
    repository = MagicMock(spec=MongoActivityRepository)
    repository.ensure_indexes = AsyncMock()
    repository.context.database_name = "fitnessactivity"
    return repository


class TestLifespanContextManager:
    """Test suite for FastAPI lifespan context manager."""

    @pytest.mark.asyncio
    async def test_inmemory_backend_starts(self, monkeypatch):
        """GIVEN REPOSITORY_BACKEND=inmemory WHEN lifespan runs THEN no MongoDB work."""
        monkeypatch.setenv("REPOSITORY_BACKEND", "inmemory")

        with patch("app.close_mongo_client") as mock_close, patch("app._logging.getLogger"):
            async with lifespan(MagicMock()):
                mock_close.assert_not_called()

            mock_close.assert_called_once()

    @pytest.mark.asyncio
    async def test_mongodb_backend_ensures_indexes(self, mock_mongo_repository):
        with (
            patch("app.get_activity_repository", return_value=mock_mongo_repository),
            patch("app.close_mongo_client") as mock_close,
            patch("app._logging.getLogger"),
        ):
            async with lifespan(MagicMock()):
                mock_mongo_repository.ensure_indexes.assert_awaited_once()

            mock_close.assert_called_once()

    @pytest.mark.asyncio
    async def test_inmemory_repository_skips_indexes(self):
        repository = InMemoryActivityRepository()

        with (
            patch("app.get_activity_repository", return_value=repository),
            patch("app.close_mongo_client"),
            patch("app._logging.getLogger") as mock_logger,
        ):
            mock_log = MagicMock()
            mock_logger.return_value = mock_log

            async with lifespan(MagicMock()):
                pass

            messages = [c.args[0] for c in mock_log.info.call_args_list]
            assert messages == ["lifespan.startup", "lifespan.ready", "lifespan.shutdown"]

    @pytest.mark.asyncio
    async def test_cleanup_on_exception(self, mock_mongo_repository):
        with (
            patch("app.get_activity_repository", return_value=mock_mongo_repository),
            patch("app.close_mongo_client") as mock_close,
            patch("app._logging.getLogger"),
        ):
            with pytest.raises(RuntimeError, match="Simulated app crash"):
                async with lifespan(MagicMock()):
                    raise RuntimeError("Simulated app crash")

            mock_close.assert_called_once()

    @pytest.mark.asyncio
    async def test_configuration_error_aborts_startup(self):
        with (
            patch(
                "app.get_activity_repository",
                side_effect=ConfigurationError("Invalid MongoDB connection URI"),
            ),
            patch("app.close_mongo_client"),
            patch("app._logging.getLogger"),
        ):
            with pytest.raises(ConfigurationError):
                async with lifespan(MagicMock()):
                    pass


class TestScriptEntryPoint:
    """python app.py hands the ASGI app to uvicorn."""

    def test_main_runs_uvicorn(self, monkeypatch):
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        app_path = Path(__file__).resolve().parents[1] / "app.py"

        with patch("uvicorn.run") as mock_run:
            runpy.run_path(str(app_path), run_name="__main__")

        mock_run.assert_called_once_with("app:app", host="0.0.0.0", port=9001, reload=False)
