"""ProjectsClient - Async access to GitHub classic projects and issue labels."""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from labelcards.kanban.exceptions import GitHubAPIError
from labelcards.kanban.models import Card, Column, Label, Project
from labelcards.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("labelcards.kanban")

DEFAULT_API_URL = "https://api.github.com"

# Classic projects were served behind the inertia preview media type
PROJECTS_MEDIA_TYPE = "application/vnd.github.inertia-preview+json"

MAX_PER_PAGE = 100

_RecordT = TypeVar("_RecordT", Project, Column, Card, Label)


class ProjectsClient:
    """Client for the GitHub REST endpoints used to label column cards.

    Exposes exactly the capabilities the labeler needs: list projects,
    list columns, list cards, list/add/remove issue labels.
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            owner: Repository owner (user or organization login)
            repo: Repository name
            token: GitHub token with repo and project read access
            base_url: GitHub REST API URL (for testing/enterprise)
            timeout: Per-request timeout in seconds
        """
        self.owner = owner
        self.repo = repo
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": PROJECTS_MEDIA_TYPE,
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ProjectsClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a REST request and decode the JSON body.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            params: Query parameters
            json: JSON request body

        Returns:
            Decoded response body, or None for empty bodies

        Raises:
            GitHubAPIError: If the request cannot be sent, returns non-2xx or
                returns a body that is not JSON
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = await self.client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            raise GitHubAPIError(
                f"{method} {path} failed: {sanitize_for_log(str(e))}"
            ) from e

        if not response.is_success:
            detail = sanitize_for_log(truncate_output(response.text, max_length=500))
            raise GitHubAPIError(
                f"{method} {path} failed: {response.status_code} - {detail}",
                status_code=response.status_code,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            detail = sanitize_for_log(truncate_output(response.text, max_length=200))
            raise GitHubAPIError(
                f"{method} {path} returned a non-JSON body: {detail}",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _records(data: Any, model: type[_RecordT], path: str) -> list[_RecordT]:
        """Build models from a JSON array of records.

        Raises:
            GitHubAPIError: If the body is not an array of well-formed records
        """
        if data is None:
            return []
        if not isinstance(data, list):
            raise GitHubAPIError(f"{path} returned {type(data).__name__}, expected an array")
        try:
            return [model.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise GitHubAPIError(
                f"{path} returned a malformed {model.__name__} record: {e!r}"
            ) from e

    @property
    def _repo_path(self) -> str:
        return f"/repos/{quote(self.owner, safe='')}/{quote(self.repo, safe='')}"

    async def list_projects(self) -> list[Project]:
        """List the classic projects of the repository."""
        path = f"{self._repo_path}/projects"
        data = await self._request("GET", path, params={"per_page": MAX_PER_PAGE})
        return self._records(data, Project, path)

    async def list_columns(self, project_id: int) -> list[Column]:
        """List the columns of a project."""
        path = f"/projects/{project_id}/columns"
        data = await self._request("GET", path, params={"per_page": MAX_PER_PAGE})
        return self._records(data, Column, path)

    async def list_cards(
        self,
        column_id: int,
        page: int = 1,
        per_page: int = MAX_PER_PAGE,
        archived_state: str = "not_archived",
    ) -> list[Card]:
        """List one page of cards in a column."""
        path = f"/projects/columns/{column_id}/cards"
        data = await self._request(
            "GET",
            path,
            params={"archived_state": archived_state, "page": page, "per_page": per_page},
        )
        return self._records(data, Card, path)

    async def list_issue_labels(self, issue_number: int) -> list[Label]:
        """List the labels currently on an issue."""
        path = f"{self._repo_path}/issues/{issue_number}/labels"
        data = await self._request("GET", path, params={"per_page": MAX_PER_PAGE})
        return self._records(data, Label, path)

    async def add_labels(self, issue_number: int, labels: list[str]) -> list[Label]:
        """Add labels to an issue; labels already present are left as is.

        Returns:
            The issue's labels after the update
        """
        path = f"{self._repo_path}/issues/{issue_number}/labels"
        data = await self._request("POST", path, json={"labels": list(labels)})
        return self._records(data, Label, path)

    async def remove_label(self, issue_number: int, name: str) -> bool:
        """Remove a label from an issue.

        Returns:
            False if the label was not on the issue, True otherwise
        """
        try:
            await self._request(
                "DELETE",
                f"{self._repo_path}/issues/{issue_number}/labels/{quote(name, safe='')}",
            )
        except GitHubAPIError as e:
            if e.status_code != 404:
                raise
            logger.debug("Label %r was not on issue #%s", name, issue_number)
            return False
        return True
