"""Access token selection.

Rollbar issues two kinds of access token. A project access token covers the
APIs inside one project (items, occurrences, environments, deploys); an
account access token covers account-wide APIs (the project and user lists).
Either may be configured on its own; tools whose token is missing stay
listed but refuse to run.
"""

import logging
from dataclasses import dataclass
from enum import Enum

import httpx

from .clients.rollbar_client import RollbarClient
from .config import RollbarSettings
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class TokenScope(str, Enum):
    PROJECT = "project"
    ACCOUNT = "account"


TOKEN_ENV_VARS: dict[TokenScope, str] = {
    TokenScope.PROJECT: "ROLLBAR_PROJECT_TOKEN",
    TokenScope.ACCOUNT: "ROLLBAR_ACCOUNT_TOKEN",
}

# Tools grouped by the token they need
SUPPORTED_TOOLS: dict[TokenScope, list[str]] = {
    TokenScope.PROJECT: [
        "rollbar_list_items",
        "rollbar_get_item",
        "rollbar_get_item_by_counter",
        "rollbar_list_occurrences",
        "rollbar_get_occurrence",
        "rollbar_list_environments",
        "rollbar_list_deploys",
        "rollbar_get_deploy",
    ],
    TokenScope.ACCOUNT: [
        "rollbar_list_projects",
        "rollbar_get_project",
        "rollbar_list_users",
        "rollbar_get_user",
    ],
}


def scope_for_tool(name: str) -> TokenScope | None:
    """Return the token scope a tool needs, or None for unknown tools."""
    for scope, names in SUPPORTED_TOOLS.items():
        if name in names:
            return scope
    return None


@dataclass(frozen=True)
class RollbarClients:
    """One client per configured access token. Not mutated after startup."""

    project: RollbarClient | None = None
    account: RollbarClient | None = None

    def is_enabled(self, scope: TokenScope) -> bool:
        return self._get(scope) is not None

    def for_scope(self, scope: TokenScope) -> RollbarClient:
        """Get the client for a token scope.

        Raises:
            ConfigurationError: If that token is not configured.
        """
        client = self._get(scope)
        if client is None:
            raise ConfigurationError(f"{TOKEN_ENV_VARS[scope]} is not set, cannot use this API")
        return client

    def _get(self, scope: TokenScope) -> RollbarClient | None:
        return self.project if scope is TokenScope.PROJECT else self.account

    async def aclose(self) -> None:
        """Close all HTTP clients."""
        for client in (self.project, self.account):
            if client is not None:
                await client.close()


def select_tokens(
    settings: RollbarSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RollbarClients:
    """Build the Rollbar clients for the configured access tokens.

    Args:
        settings: Server settings.
        transport: Optional httpx transport shared by both clients (tests).

    Returns:
        RollbarClients with a client for each configured token.

    Raises:
        ConfigurationError: If neither token is configured.
    """
    if not settings.has_any_token:
        raise ConfigurationError(
            "At least one of ROLLBAR_PROJECT_TOKEN or ROLLBAR_ACCOUNT_TOKEN is required"
        )

    def build(token: str) -> RollbarClient | None:
        if not token:
            return None
        return RollbarClient(
            access_token=token,
            base_url=settings.api_base_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    clients = RollbarClients(
        project=build(settings.project_token),
        account=build(settings.account_token),
    )

    for scope in TokenScope:
        if not clients.is_enabled(scope):
            logger.warning(
                f"{TOKEN_ENV_VARS[scope]} is not set, the following tools will not be available: "
                + ", ".join(SUPPORTED_TOOLS[scope])
            )

    return clients
