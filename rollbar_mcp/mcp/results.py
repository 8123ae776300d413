"""Tool call results.

A tool call always produces a result object, success or failure. Failures
are rendered as a JSON error envelope in the same text block a successful
response would use.
"""

import json
from dataclasses import dataclass
from typing import Any

from ..errors import ErrorKind

API_ERROR = "API Error"
SERVER_ERROR = "Server Error"

_API_ERROR_KINDS = (ErrorKind.UPSTREAM_ERROR, ErrorKind.TRANSPORT_ERROR)


@dataclass(frozen=True)
class ToolSuccess:
    """Decoded upstream response body, passed through unchanged."""

    payload: Any

    def to_payload(self) -> Any:
        return self.payload


@dataclass(frozen=True)
class ToolFailure:
    kind: ErrorKind
    message: str
    status: int | None = None
    data: Any = None

    def to_payload(self) -> dict[str, Any]:
        """Build the error envelope returned to the MCP client."""
        envelope: dict[str, Any] = {
            "error": API_ERROR if self.kind in _API_ERROR_KINDS else SERVER_ERROR,
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.status is not None:
            envelope["status"] = self.status
        if self.data is not None:
            envelope["data"] = self.data
        return envelope


ToolResult = ToolSuccess | ToolFailure


def render_result(result: ToolResult) -> str:
    """Pretty-print a result as JSON text."""
    return json.dumps(result.to_payload(), indent=2, default=str)
