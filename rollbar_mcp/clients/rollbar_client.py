"""Rollbar REST API client."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from ..config import DEFAULT_API_BASE_URL

logger = logging.getLogger(__name__)


class RollbarProject(BaseModel):
    """A project entry from GET /projects."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str | None = None
    status: str | None = None
    account_id: int | None = None


class RollbarClient:
    """Client for the Rollbar REST API, bound to a single access token."""

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Rollbar client.

        Args:
            access_token: Project or account access token.
            base_url: Rollbar API base URL.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "X-Rollbar-Access-Token": access_token,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "RollbarClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request.

        Args:
            path: Path relative to the API base URL.
            params: Query parameters. Keys with a None value are dropped.

        Returns:
            Decoded JSON response.

        Raises:
            httpx.HTTPStatusError: If the API returns a non-2xx status.
            httpx.RequestError: If no response was received.
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug(f"GET {path} params={query}")
        response = await self._client.get(path, params=query)
        response.raise_for_status()
        return response.json()

    # =========== Items ===========

    async def list_items(
        self,
        status: str | None = None,
        level: str | None = None,
        environment: str | None = None,
        limit: int = 20,
        page: int = 1,
    ) -> Any:
        params = {
            "status": status,
            "level": level,
            "environment": environment,
            "limit": limit,
            "page": page,
        }
        return await self._get("/items", params=params)

    async def get_item(self, item_id: int) -> Any:
        return await self._get(f"/item/{item_id}")

    async def get_item_by_counter(self, counter: int) -> Any:
        return await self._get(f"/item_by_counter/{counter}")

    # =========== Occurrences ===========

    async def list_occurrences(
        self,
        item_id: int | None = None,
        limit: int = 20,
        page: int = 1,
    ) -> Any:
        """List occurrences, optionally restricted to one item.

        With an item ID the item-scoped `/instances?item_id=` listing is used,
        otherwise the project-wide `/occurrences` listing.
        """
        if item_id:
            return await self._get(
                "/instances",
                params={"item_id": item_id, "limit": limit, "page": page},
            )
        return await self._get("/occurrences", params={"limit": limit, "page": page})

    async def get_occurrence(self, occurrence_id: str) -> Any:
        return await self._get(f"/instance/{occurrence_id}")

    # =========== Projects ===========

    async def list_projects(self) -> Any:
        return await self._get("/projects")

    async def get_project(self, project_id: int) -> Any:
        return await self._get(f"/project/{project_id}")

    async def list_environments(self, project_id: int) -> Any:
        return await self._get(f"/project/{project_id}/environments")

    # =========== Users ===========

    async def list_users(self) -> Any:
        return await self._get("/users")

    async def get_user(self, user_id: int) -> Any:
        return await self._get(f"/user/{user_id}")

    # =========== Deploys ===========

    async def list_deploys(
        self,
        project_id: int,
        environment: str | None = None,
        limit: int = 20,
        page: int = 1,
    ) -> Any:
        params = {"environment": environment, "limit": limit, "page": page}
        return await self._get(f"/project/{project_id}/deploys", params=params)

    async def get_deploy(self, deploy_id: int) -> Any:
        return await self._get(f"/deploy/{deploy_id}")


def parse_projects(data: Any) -> list[RollbarProject]:
    """Extract the project list from a GET /projects response.

    Entries that are not valid projects (e.g. a null id) are skipped so one
    bad entry does not hide the rest.

    Args:
        data: Decoded response body, normally `{"err": 0, "result": [...]}`.

    Returns:
        Parsed projects.

    Raises:
        ValueError: If the body does not contain a project list.
    """
    result = data.get("result") if isinstance(data, dict) else None
    if not isinstance(result, list):
        raise ValueError("Unexpected /projects response: missing 'result' list")

    projects = []
    for entry in result:
        try:
            projects.append(RollbarProject.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping malformed project entry: {e.error_count()} validation error(s)")
    return projects
