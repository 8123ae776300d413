"""Project, environment and deploy tool handlers for MCP server."""

import logging
from typing import Any

from ...clients.rollbar_client import RollbarClient
from ...resolver import ProjectResolver
from ..schemas import (
    EmptyInput,
    GetDeployInput,
    GetProjectInput,
    ListDeploysInput,
    ListEnvironmentsInput,
)

logger = logging.getLogger(__name__)


async def list_projects(client: RollbarClient, args: EmptyInput, resolver: ProjectResolver) -> Any:
    return await client.list_projects()


async def get_project(client: RollbarClient, args: GetProjectInput, resolver: ProjectResolver) -> Any:
    """Get a project, falling back to the configured default project.

    Args:
        client: Account-scoped Rollbar client.
        args: Optional 'id'.
        resolver: Resolves the effective project ID.

    Returns:
        Raw API response.

    Raises:
        MissingParameterError: If no project ID can be resolved.
    """
    project_id = await resolver.require(args.id)
    return await client.get_project(project_id)


async def list_environments(
    client: RollbarClient, args: ListEnvironmentsInput, resolver: ProjectResolver
) -> Any:
    """List a project's environments.

    Args:
        client: Project-scoped Rollbar client.
        args: Optional 'projectId'.
        resolver: Resolves the effective project ID.

    Returns:
        Raw API response.
    """
    project_id = await resolver.require(args.projectId)
    logger.debug(f"Listing environments for project {project_id}")
    return await client.list_environments(project_id)


async def list_deploys(client: RollbarClient, args: ListDeploysInput, resolver: ProjectResolver) -> Any:
    """List a project's deploys.

    Args:
        client: Project-scoped Rollbar client.
        args: Optional 'projectId', 'environment' and pagination.
        resolver: Resolves the effective project ID.

    Returns:
        Raw API response.
    """
    project_id = await resolver.require(args.projectId)
    return await client.list_deploys(
        project_id,
        environment=args.environment,
        limit=args.limit,
        page=args.page,
    )


async def get_deploy(client: RollbarClient, args: GetDeployInput, resolver: ProjectResolver) -> Any:
    return await client.get_deploy(args.deployId)
