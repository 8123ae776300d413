"""User tool handlers for MCP server."""

from typing import Any

from ...clients.rollbar_client import RollbarClient
from ...resolver import ProjectResolver
from ..schemas import EmptyInput, GetUserInput


async def list_users(client: RollbarClient, args: EmptyInput, resolver: ProjectResolver) -> Any:
    return await client.list_users()


async def get_user(client: RollbarClient, args: GetUserInput, resolver: ProjectResolver) -> Any:
    return await client.get_user(args.id)
