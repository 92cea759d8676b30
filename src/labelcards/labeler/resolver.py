"""Column resolution - turns a column target into a concrete column id."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from labelcards.config import ColumnIdTarget
from labelcards.kanban.exceptions import ColumnNotFoundError, ProjectNotFoundError

if TYPE_CHECKING:
    from labelcards.config import ColumnTarget
    from labelcards.kanban import ProjectsClient

logger = logging.getLogger(__name__)


async def resolve_column_id(client: ProjectsClient, target: ColumnTarget) -> int:
    """Resolve a directive's column target to a column id.

    Direct ids are returned as is. Name targets are looked up by exact
    name, first the project in the repository, then the column in it.

    Args:
        client: Projects client for the repository.
        target: Column identification from a directive.

    Returns:
        The column id.

    Raises:
        ProjectNotFoundError: If no project has the given name.
        ColumnNotFoundError: If the project has no column with the given name.
        GitHubAPIError: If a lookup request fails.
    """
    if isinstance(target, ColumnIdTarget):
        return target.column_id

    projects = await client.list_projects()
    project = next((p for p in projects if p.name == target.project_name), None)
    if project is None:
        raise ProjectNotFoundError(
            f"Project '{target.project_name}' not found in {client.owner}/{client.repo}"
        )

    columns = await client.list_columns(project.id)
    column = next((c for c in columns if c.name == target.column_name), None)
    if column is None or not column.id:
        raise ColumnNotFoundError(
            f"Column '{target.column_name}' not found in project '{target.project_name}'. "
            f"Available: {[c.name for c in columns]}"
        )

    logger.debug(
        "Resolved column '%s' of project '%s' to id %d",
        target.column_name,
        target.project_name,
        column.id,
    )
    return column.id
