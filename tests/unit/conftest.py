"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = TagService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


# =============================================================================
# Record Fixtures
# =============================================================================


def make_record(**fields: Any) -> MagicMock:
    """
    Build a stand-in for a content row.

    Timestamps are real datetimes because services compare them.
    """
    record = MagicMock()
    record.id = fields.pop("id", "item-1")
    record.user_id = fields.pop("user_id", "user-a")
    record.tags = fields.pop("tags", [])
    record.created_at = fields.pop("created_at", datetime(2024, 1, 1, 12, 0, 0))
    record.updated_at = fields.pop("updated_at", datetime(2024, 1, 1, 12, 0, 0))
    for key, value in fields.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def record_factory():
    """Provide make_record for building content rows."""
    return make_record


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
