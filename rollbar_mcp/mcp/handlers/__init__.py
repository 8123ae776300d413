"""Tool handlers for MCP server."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from ...clients.rollbar_client import RollbarClient
from ...credentials import RollbarClients, scope_for_tool
from ...errors import (
    ErrorKind,
    InvalidArgumentsError,
    MissingParameterError,
    RollbarMCPError,
    UnknownToolError,
)
from ...resolver import ProjectResolver
from ..results import ToolFailure, ToolResult, ToolSuccess
from ..schemas import (
    EmptyInput,
    GetDeployInput,
    GetItemByCounterInput,
    GetItemInput,
    GetOccurrenceInput,
    GetProjectInput,
    GetUserInput,
    ListDeploysInput,
    ListEnvironmentsInput,
    ListItemsInput,
    ListOccurrencesInput,
    ToolInput,
)
from . import items, projects, users

__all__ = ["ToolDispatcher", "ToolRoute", "ROUTES"]

logger = logging.getLogger(__name__)

Handler = Callable[[RollbarClient, Any, ProjectResolver], Awaitable[Any]]

TOOL_PREFIX = "rollbar_"


@dataclass(frozen=True)
class ToolRoute:
    input_model: type[ToolInput]
    handler: Handler


ROUTES: dict[str, ToolRoute] = {
    "rollbar_list_items": ToolRoute(ListItemsInput, items.list_items),
    "rollbar_get_item": ToolRoute(GetItemInput, items.get_item),
    "rollbar_get_item_by_counter": ToolRoute(GetItemByCounterInput, items.get_item_by_counter),
    "rollbar_list_occurrences": ToolRoute(ListOccurrencesInput, items.list_occurrences),
    "rollbar_get_occurrence": ToolRoute(GetOccurrenceInput, items.get_occurrence),
    "rollbar_list_projects": ToolRoute(EmptyInput, projects.list_projects),
    "rollbar_get_project": ToolRoute(GetProjectInput, projects.get_project),
    "rollbar_list_environments": ToolRoute(ListEnvironmentsInput, projects.list_environments),
    "rollbar_list_users": ToolRoute(EmptyInput, users.list_users),
    "rollbar_get_user": ToolRoute(GetUserInput, users.get_user),
    "rollbar_list_deploys": ToolRoute(ListDeploysInput, projects.list_deploys),
    "rollbar_get_deploy": ToolRoute(GetDeployInput, projects.get_deploy),
}


def canonical_tool_name(name: str) -> str:
    """Map a bare tool name ('list_items') to its registered name."""
    if name in ROUTES or name.startswith(TOOL_PREFIX):
        return name
    return f"{TOOL_PREFIX}{name}"


class ToolDispatcher:
    """Maps tool calls onto Rollbar API requests.

    `invoke` never raises: every failure is returned as a ToolFailure so a
    bad call cannot take down the server.
    """

    def __init__(self, clients: RollbarClients, resolver: ProjectResolver):
        """Initialize the dispatcher.

        Args:
            clients: Clients for the configured access tokens.
            resolver: Project resolver for project-scoped tools.
        """
        self.clients = clients
        self.resolver = resolver

    async def invoke(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Dispatch a tool call and capture its outcome.

        Args:
            name: Tool name.
            arguments: Tool arguments.

        Returns:
            ToolSuccess with the decoded response body, or ToolFailure.
        """
        try:
            payload = await self._dispatch(name, arguments or {})
            return ToolSuccess(payload)
        except RollbarMCPError as e:
            logger.warning(f"Tool {name} failed: {e}")
            return ToolFailure(e.kind, str(e))
        except httpx.HTTPStatusError as e:
            logger.warning(f"Tool {name}: Rollbar API returned {e.response.status_code}")
            return ToolFailure(
                ErrorKind.UPSTREAM_ERROR,
                str(e),
                status=e.response.status_code,
                data=_response_body(e.response),
            )
        except httpx.RequestError as e:
            logger.warning(f"Tool {name}: request to Rollbar failed: {e!r}")
            return ToolFailure(ErrorKind.TRANSPORT_ERROR, str(e) or type(e).__name__)
        except Exception as e:
            logger.exception(f"Tool {name} failed unexpectedly")
            return ToolFailure(ErrorKind.INTERNAL_ERROR, str(e) or type(e).__name__)

    async def _dispatch(self, name: str, arguments: dict[str, Any]) -> Any:
        tool_name = canonical_tool_name(name)
        route = ROUTES.get(tool_name)
        scope = scope_for_tool(tool_name)
        if route is None or scope is None:
            raise UnknownToolError(f"Unknown tool: {name}")

        client = self.clients.for_scope(scope)
        args = _validate_arguments(tool_name, route.input_model, arguments)
        return await route.handler(client, args, self.resolver)


def _validate_arguments(name: str, model: type[ToolInput], arguments: dict[str, Any]) -> ToolInput:
    """Validate a tool's argument bag.

    Arguments passed as null are treated as omitted.

    Raises:
        MissingParameterError: If a required argument is absent.
        InvalidArgumentsError: If arguments are unknown or have the wrong type.
    """
    try:
        return model.model_validate({k: v for k, v in arguments.items() if v is not None})
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors() if err["type"] == "missing"]
        if missing:
            raise MissingParameterError(f"Missing required argument(s) for {name}: {', '.join(missing)}") from e
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidArgumentsError(f"Invalid arguments for {name}: {problems}") from e


def _response_body(response: httpx.Response) -> Any:
    """Decode an error response body, preferring JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text or None
