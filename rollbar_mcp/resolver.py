"""Project ID resolution for project-scoped tools."""

import logging

import httpx

from .clients.rollbar_client import RollbarClient, parse_projects
from .errors import MissingParameterError

logger = logging.getLogger(__name__)


class ProjectResolver:
    """Picks the project a call applies to.

    Precedence: explicit argument, then the configured default ID, then a
    lookup of the configured default name in the account's project list.
    Nothing is cached; each call may repeat the lookup.
    """

    def __init__(
        self,
        default_id: int | None = None,
        default_name: str | None = None,
        account_client: RollbarClient | None = None,
    ):
        self.default_id = default_id
        self.default_name = default_name
        self.account_client = account_client

    async def resolve(self, explicit_id: int | None = None) -> int | None:
        """Resolve the effective project ID.

        Args:
            explicit_id: Project ID passed by the caller. 0 counts as absent.

        Returns:
            The project ID, or None if nothing is configured or found.
        """
        if explicit_id:
            return explicit_id

        if self.default_id:
            return self.default_id

        if self.default_name:
            return await self.find_project_id_by_name(self.default_name)

        return None

    async def require(self, explicit_id: int | None = None) -> int:
        """Resolve the effective project ID or fail.

        Raises:
            MissingParameterError: If no project ID could be resolved.
        """
        project_id = await self.resolve(explicit_id)
        if not project_id:
            raise MissingParameterError(
                "project id required: pass it explicitly or set ROLLBAR_PROJECT_ID / ROLLBAR_PROJECT_NAME"
            )
        return project_id

    async def find_project_id_by_name(self, name: str) -> int | None:
        """Look up a project ID by exact name.

        Errors are logged and reported as not found.
        """
        if self.account_client is None:
            logger.error("ROLLBAR_ACCOUNT_TOKEN is not set, cannot search for project by name")
            return None

        try:
            data = await self.account_client.list_projects()
            projects = parse_projects(data)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error finding project by name '{name}': {e}")
            return None

        for project in projects:
            if project.name == name:
                return project.id

        logger.warning(f"No project named '{name}' found in account")
        return None
