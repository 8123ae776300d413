"""Error taxonomy for tool calls."""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure a tool call can report."""

    CONFIGURATION_ERROR = "ConfigurationError"
    MISSING_PARAMETER = "MissingParameter"
    UNKNOWN_TOOL = "UnknownTool"
    UPSTREAM_ERROR = "UpstreamError"
    TRANSPORT_ERROR = "TransportError"
    INTERNAL_ERROR = "InternalError"


class RollbarMCPError(Exception):
    """Base class for errors raised while handling a tool call."""

    kind = ErrorKind.INTERNAL_ERROR


class ConfigurationError(RollbarMCPError):
    """A credential needed by the tool (or by the server) is not configured."""

    kind = ErrorKind.CONFIGURATION_ERROR


class MissingParameterError(RollbarMCPError):
    """A required argument is missing or could not be resolved."""

    kind = ErrorKind.MISSING_PARAMETER


class UnknownToolError(RollbarMCPError):
    kind = ErrorKind.UNKNOWN_TOOL


class InvalidArgumentsError(RollbarMCPError):
    """Arguments are unknown to the tool or have the wrong type."""
