"""Command-line interface for gas-mcp."""

import asyncio
import json
import sys
from typing import Any

import click

from gas_mcp.__version__ import __version__
from gas_mcp.config import (
    API_KEY_ENV,
    TIMEOUT_ENV,
    WEB_APPS_URL_ENV,
    ConfigurationError,
    RelaySettings,
)

url_option = click.option(
    "--web-apps-url", envvar=WEB_APPS_URL_ENV, help="Apps Script Web App URL (with access key)"
)
api_key_option = click.option(
    "--api-key", envvar=API_KEY_ENV, help="API key forwarded to the Web App"
)
timeout_option = click.option(
    "--timeout", envvar=TIMEOUT_ENV, type=float, default=None, help="Request timeout in seconds"
)


def _load_settings(
    web_apps_url: str | None,
    api_key: str | None,
    timeout: float | None,
    log_level: str | None = None,
) -> RelaySettings:
    """Build settings or exit with a readable error."""
    try:
        return RelaySettings.create(
            web_apps_url=web_apps_url, api_key=api_key, timeout=timeout, log_level=log_level
        )
    except ConfigurationError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Google Apps Script MCP relay.

    Serves a catalog of Google Workspace tools over MCP (stdio) and relays
    every call to your deployed Apps Script Web App:
    - Gmail, Calendar, Drive, Docs, Sheets, Slides, Forms
    - Classroom, People, Maps, Analytics
    - Gemini-backed generation and file search stores
    """
    pass


@main.command()
@url_option
@api_key_option
@timeout_option
@click.option("--log-level", envvar="GAS_MCP_LOG_LEVEL", default="INFO", help="Logging level")
def mcp(
    web_apps_url: str | None, api_key: str | None, timeout: float | None, log_level: str
) -> None:
    """Start the MCP server on stdio.

    This command is typically invoked by an MCP client (Gemini CLI,
    Claude Desktop) rather than by hand.
    """
    from gas_mcp.catalog import CatalogError
    from gas_mcp.server import main as server_main

    settings = _load_settings(web_apps_url, api_key, timeout, log_level)
    try:
        click.echo(f"Starting gas-mcp relay to {settings.redacted_url}", err=True)
        server_main(settings)
    except KeyboardInterrupt:
        click.echo("\nServer stopped.", err=True)
    except CatalogError as e:
        click.echo(f"❌ Catalog error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"❌ Server error: {e}", err=True)
        sys.exit(1)


@main.command()
@url_option
@api_key_option
@timeout_option
def doctor(web_apps_url: str | None, api_key: str | None, timeout: float | None) -> None:
    """Check configuration and catalog.

    Verifies:
    1. Web App URL is set and valid
    2. API key is set
    3. Catalog files load without errors
    """
    from gas_mcp.catalog import CatalogError, load_catalog

    click.echo("gas-mcp Status:")
    click.echo("")

    click.echo("Configuration:")
    ok = True
    try:
        settings = RelaySettings.create(web_apps_url=web_apps_url, api_key=api_key, timeout=timeout)
        click.echo(f"  ✓ Web App URL: {settings.redacted_url}")
        if settings.api_key:
            click.echo("  ✓ API key set")
        else:
            click.echo(f"  ⚠️  {API_KEY_ENV} not set (an empty key will be sent)")
        if settings.timeout:
            click.echo(f"  Timeout: {settings.timeout}s")
        else:
            click.echo("  Timeout: none")
    except ConfigurationError as e:
        click.echo(f"  ❌ {e}")
        ok = False

    click.echo("")

    click.echo("Catalog:")
    try:
        catalog = load_catalog()
        for group in catalog.groups():
            tools = catalog.tools_in_group(group)
            if tools:
                click.echo(f"  {group}: {len(tools)} tools")
        click.echo(f"  ✓ {len(catalog.tools)} tools, {len(catalog.prompts)} prompts")
    except CatalogError as e:
        click.echo(f"  ❌ {e}")
        ok = False

    click.echo("")

    if not ok:
        click.echo("❌ Setup required. Set MCP_WEB_APPS_URL to your deployed Web App URL.")
        sys.exit(1)
    click.echo("✓ Ready to use!")


@main.command()
@click.option("--group", help="Only list tools in this group")
@click.option("--prompts", "show_prompts", is_flag=True, help="List prompts instead of tools")
def tools(group: str | None, show_prompts: bool) -> None:
    """List the tools (or prompts) in the catalog."""
    from gas_mcp.catalog import load_catalog

    catalog = load_catalog()

    if show_prompts:
        for prompt in catalog.prompts:
            click.echo(f"{prompt.name}: {prompt.title or prompt.description or ''}")
        return

    entries = catalog.tools_in_group(group) if group else catalog.tools
    if group and not entries:
        click.echo(f"❌ Unknown group: {group}", err=True)
        click.echo(f"Groups: {', '.join(catalog.groups())}", err=True)
        sys.exit(1)

    for entry in entries:
        summary = entry.title or next(iter(entry.description.splitlines()), "")
        click.echo(f"[{entry.group}] {entry.name}: {summary}")


@main.command()
@click.argument("name")
@click.option("--arguments", "raw_arguments", default="{}", help="Arguments as a JSON object")
@click.option(
    "--prompt", "is_prompt", is_flag=True, help="Relay as prompts/get instead of tools/call"
)
@url_option
@api_key_option
@timeout_option
def call(
    name: str,
    raw_arguments: str,
    is_prompt: bool,
    web_apps_url: str | None,
    api_key: str | None,
    timeout: float | None,
) -> None:
    """Relay a single call to the Web App and print the result.

    NAME does not have to be in the catalog; it is sent to the Web App as is.
    """
    from gas_mcp.relay import RelayDispatcher, RpcMethod

    try:
        arguments: Any = json.loads(raw_arguments)
    except json.JSONDecodeError as e:
        click.echo(f"❌ --arguments is not valid JSON: {e}", err=True)
        sys.exit(1)
    if not isinstance(arguments, dict):
        click.echo("❌ --arguments must be a JSON object", err=True)
        sys.exit(1)

    settings = _load_settings(web_apps_url, api_key, timeout)
    method = RpcMethod.PROMPTS_GET if is_prompt else RpcMethod.TOOLS_CALL

    async def run() -> Any:
        dispatcher = RelayDispatcher(settings)
        try:
            return await dispatcher.relay(name, method, arguments)
        finally:
            await dispatcher.close()

    result = asyncio.run(run())
    click.echo(json.dumps(result.payload, indent=2, ensure_ascii=False))
    if result.is_error:
        sys.exit(1)


if __name__ == "__main__":
    main()
