"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: calls the live GitHub API (local only)")


@pytest.fixture
def projects_client() -> MagicMock:
    """A ProjectsClient stand-in with async capability methods."""
    client = MagicMock()
    client.owner = "owner"
    client.repo = "repo"
    client.list_projects = AsyncMock(return_value=[])
    client.list_columns = AsyncMock(return_value=[])
    client.list_cards = AsyncMock(return_value=[])
    client.list_issue_labels = AsyncMock(return_value=[])
    client.add_labels = AsyncMock(return_value=[])
    client.remove_label = AsyncMock(return_value=True)
    return client
