"""Custom exceptions for the GitHub projects client."""

from __future__ import annotations


class KanbanError(Exception):
    """Base exception for project board errors."""


class ProjectNotFoundError(KanbanError):
    """No repository project has the requested name."""


class ColumnNotFoundError(KanbanError):
    """No column in the project has the requested name."""


class GitHubAPIError(KanbanError):
    """A GitHub REST request failed or could not be sent."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
