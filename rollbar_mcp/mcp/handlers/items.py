"""Item and occurrence tool handlers for MCP server."""

from typing import Any

from ...clients.rollbar_client import RollbarClient
from ...resolver import ProjectResolver
from ..schemas import (
    GetItemByCounterInput,
    GetItemInput,
    GetOccurrenceInput,
    ListItemsInput,
    ListOccurrencesInput,
)


async def list_items(client: RollbarClient, args: ListItemsInput, resolver: ProjectResolver) -> Any:
    """List items in the project the token belongs to.

    Args:
        client: Project-scoped Rollbar client.
        args: Optional 'status', 'level', 'environment' filters and pagination.
        resolver: Unused; items are scoped by the project token.

    Returns:
        Raw API response.
    """
    return await client.list_items(
        status=args.status,
        level=args.level,
        environment=args.environment,
        limit=args.limit,
        page=args.page,
    )


async def get_item(client: RollbarClient, args: GetItemInput, resolver: ProjectResolver) -> Any:
    return await client.get_item(args.id)


async def get_item_by_counter(
    client: RollbarClient, args: GetItemByCounterInput, resolver: ProjectResolver
) -> Any:
    return await client.get_item_by_counter(args.counter)


async def list_occurrences(
    client: RollbarClient, args: ListOccurrencesInput, resolver: ProjectResolver
) -> Any:
    """List occurrences, for one item when 'itemId' is given.

    Args:
        client: Project-scoped Rollbar client.
        args: Optional 'itemId' and pagination.
        resolver: Unused.

    Returns:
        Raw API response.
    """
    return await client.list_occurrences(item_id=args.itemId, limit=args.limit, page=args.page)


async def get_occurrence(client: RollbarClient, args: GetOccurrenceInput, resolver: ProjectResolver) -> Any:
    return await client.get_occurrence(args.id)
