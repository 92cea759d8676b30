"""Kanban client - Access to GitHub classic project boards and issue labels."""

from labelcards.kanban.client import DEFAULT_API_URL, MAX_PER_PAGE, ProjectsClient
from labelcards.kanban.exceptions import (
    ColumnNotFoundError,
    GitHubAPIError,
    KanbanError,
    ProjectNotFoundError,
)
from labelcards.kanban.models import Card, Column, Label, Project

__all__ = [
    "DEFAULT_API_URL",
    "MAX_PER_PAGE",
    "Card",
    "Column",
    "ColumnNotFoundError",
    "GitHubAPIError",
    "KanbanError",
    "Label",
    "Project",
    "ProjectNotFoundError",
    "ProjectsClient",
]
