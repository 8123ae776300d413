"""MCP (Model Context Protocol) server for Rollbar.

This module exposes the Rollbar REST API as an MCP server for use with
Claude Code and other MCP clients.
"""

from .server import main

__all__ = ["main"]
