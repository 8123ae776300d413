"""Tool definitions for the MCP server."""

from typing import Any

DEFAULT_LIMIT = 20
DEFAULT_PAGE = 1

_LIMIT = {
    "type": "integer",
    "description": f"Maximum number of results to return (default: {DEFAULT_LIMIT})",
}
_PAGE = {
    "type": "integer",
    "description": f"Page number for pagination (default: {DEFAULT_PAGE})",
}

# Tool definitions as JSON schemas for MCP
TOOLS: list[dict[str, Any]] = [
    # =========== Item Tools ===========
    {
        "name": "rollbar_list_items",
        "description": "List items (errors) from Rollbar. Requires ROLLBAR_PROJECT_TOKEN.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "status": {
                    "type": "string",
                    "description": "Filter by status (active, resolved, muted, etc.)",
                },
                "level": {
                    "type": "string",
                    "description": "Filter by level (critical, error, warning, info, debug)",
                },
                "environment": {
                    "type": "string",
                    "description": "Filter by environment (production, staging, etc.)",
                },
                "limit": _LIMIT,
                "page": _PAGE,
            },
        },
    },
    {
        "name": "rollbar_get_item",
        "description": "Get a specific item (error) from Rollbar by its ID.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "id": {"type": "integer", "description": "Item ID"},
            },
            "required": ["id"],
        },
    },
    {
        "name": "rollbar_get_item_by_counter",
        "description": "Get a specific item by its project counter (the number shown in the Rollbar UI).",
        "inputSchema": {
            "type": "object",
            "properties": {
                "counter": {"type": "integer", "description": "Project counter for the item"},
            },
            "required": ["counter"],
        },
    },
    # =========== Occurrence Tools ===========
    {
        "name": "rollbar_list_occurrences",
        "description": "List occurrences of errors from Rollbar, optionally for a single item.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "itemId": {"type": "integer", "description": "Item ID to filter occurrences"},
                "limit": _LIMIT,
                "page": _PAGE,
            },
        },
    },
    {
        "name": "rollbar_get_occurrence",
        "description": "Get a specific occurrence of an error from Rollbar.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "Occurrence ID"},
            },
            "required": ["id"],
        },
    },
    # =========== Project Tools ===========
    {
        "name": "rollbar_list_projects",
        "description": "List projects in the Rollbar account. Requires ROLLBAR_ACCOUNT_TOKEN.",
        "inputSchema": {
            "type": "object",
            "properties": {},
        },
    },
    {
        "name": "rollbar_get_project",
        "description": (
            "Get a specific project from Rollbar. The project ID defaults to "
            "ROLLBAR_PROJECT_ID, or to the project named by ROLLBAR_PROJECT_NAME."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "id": {"type": "integer", "description": "Project ID"},
            },
        },
    },
    {
        "name": "rollbar_list_environments",
        "description": (
            "List environments of a Rollbar project. The project ID defaults to "
            "ROLLBAR_PROJECT_ID, or to the project named by ROLLBAR_PROJECT_NAME."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectId": {"type": "integer", "description": "Project ID"},
            },
        },
    },
    # =========== User Tools ===========
    {
        "name": "rollbar_list_users",
        "description": "List users in the Rollbar account. Requires ROLLBAR_ACCOUNT_TOKEN.",
        "inputSchema": {
            "type": "object",
            "properties": {},
        },
    },
    {
        "name": "rollbar_get_user",
        "description": "Get a specific user from Rollbar.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "id": {"type": "integer", "description": "User ID"},
            },
            "required": ["id"],
        },
    },
    # =========== Deploy Tools ===========
    {
        "name": "rollbar_list_deploys",
        "description": (
            "List deploys of a Rollbar project. The project ID defaults to "
            "ROLLBAR_PROJECT_ID, or to the project named by ROLLBAR_PROJECT_NAME."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectId": {"type": "integer", "description": "Project ID"},
                "environment": {"type": "string", "description": "Environment name"},
                "limit": _LIMIT,
                "page": _PAGE,
            },
        },
    },
    {
        "name": "rollbar_get_deploy",
        "description": "Get a specific deploy from Rollbar.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "deployId": {"type": "integer", "description": "Deploy ID"},
            },
            "required": ["deployId"],
        },
    },
]


def get_tools() -> list[dict[str, Any]]:
    """Get all tool definitions.

    Returns:
        List of tool definitions.
    """
    return TOOLS


def get_tool_names() -> list[str]:
    """Get the list of tool names.

    Returns:
        List of tool names.
    """
    return [tool["name"] for tool in TOOLS]
