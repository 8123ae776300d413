"""rollbar-mcp CLI.

Runs the Rollbar MCP server and inspects its configuration.
"""

import asyncio
from typing import Optional

import httpx
import typer
from rich.console import Console
from pydantic import ValidationError
from rich.table import Table
from typing_extensions import Annotated

from . import __version__
from .config import RollbarSettings, get_settings
from .credentials import TOKEN_ENV_VARS, TokenScope, scope_for_tool, select_tokens
from .errors import ConfigurationError
from .mcp.server import main as server_main
from .mcp.tools import get_tools
from .utils.logger import setup_logging

console = Console()

app = typer.Typer(
    name="rollbar-mcp",
    help="Rollbar MCP server - Rollbar REST API exposed as MCP tools",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    if value:
        print(f"rollbar-mcp {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version"),
    ] = None,
):
    """rollbar-mcp CLI."""
    pass


@app.command()
def serve(
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", "-l", help="Override ROLLBAR_LOG_LEVEL")
    ] = None,
):
    """Start the MCP server on stdio."""
    server_main(log_level)


@app.command()
def tools():
    """List the available tools and whether their token is configured."""
    settings = _load_settings()
    enabled = {
        TokenScope.PROJECT: settings.has_project_token,
        TokenScope.ACCOUNT: settings.has_account_token,
    }

    table = Table(title="Rollbar MCP tools")
    table.add_column("Tool", style="bold")
    table.add_column("Token")
    table.add_column("Available")
    table.add_column("Description")

    for tool in get_tools():
        scope = scope_for_tool(tool["name"])
        available = "[green]yes[/green]" if enabled[scope] else f"[red]no[/red] ({TOKEN_ENV_VARS[scope]} not set)"
        table.add_row(tool["name"], scope.value, available, tool["description"])

    console.print(table)


@app.command()
def config():
    """Show current configuration."""
    settings = _load_settings()
    raise typer.Exit(handle_config_show(settings))


@app.command()
def health():
    """Test the configured access tokens against the Rollbar API."""
    settings = _load_settings()
    setup_logging(settings.log_level)
    raise typer.Exit(asyncio.run(handle_health(settings)))


def _load_settings() -> RollbarSettings:
    """Load settings, exiting with status 1 when the environment is invalid."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print("[red]Invalid configuration:[/red]")
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            console.print(f"  ROLLBAR_{field.upper()}: {err['msg']}")
        raise typer.Exit(1)


def _mask(token: str) -> str:
    if not token:
        return "Not set"
    return f"{token[:4]}{'*' * 8}" if len(token) > 8 else "*" * 8


def handle_config_show(settings: RollbarSettings) -> int:
    """Print the effective settings with tokens masked."""
    console.print("Current Configuration:")
    console.print("-" * 40)
    console.print(f"Project Token: {_mask(settings.project_token)}")
    console.print(f"Account Token: {_mask(settings.account_token)}")
    console.print(f"Default Project ID: {settings.project_id or 'Not set'}")
    console.print(f"Default Project Name: {settings.project_name or 'Not set'}")
    console.print(f"API Base URL: {settings.api_base_url}")
    console.print(f"Request Timeout: {settings.request_timeout}s")
    console.print(f"Log Level: {settings.log_level}")
    if not settings.has_any_token:
        console.print("[red]At least one of ROLLBAR_PROJECT_TOKEN or ROLLBAR_ACCOUNT_TOKEN is required[/red]")
        return 1
    return 0


async def handle_health(settings: RollbarSettings) -> int:
    """Call one cheap endpoint per configured token."""
    console.print("Health Check")
    console.print("=" * 50)

    try:
        clients = select_tokens(settings)
    except ConfigurationError as e:
        console.print(f"[red]FAILED[/red] - {e}")
        return 1

    all_ok = True
    try:
        checks = []
        if clients.project is not None:
            checks.append(("Project token", clients.project.list_items))
        if clients.account is not None:
            checks.append(("Account token", clients.account.list_projects))

        for label, call in checks:
            try:
                await call()
                console.print(f"{label}: [green]OK[/green]")
            except (httpx.HTTPError, ValueError) as e:
                console.print(f"{label}: [red]FAILED[/red] - {e}")
                all_ok = False
    finally:
        await clients.aclose()

    return 0 if all_ok else 1


if __name__ == "__main__":
    app()
