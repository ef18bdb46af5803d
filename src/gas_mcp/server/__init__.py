"""MCP server relaying Google Workspace tools to an Apps Script Web App.

Tool groups served from the packaged catalog:
- Public data APIs (exchange rates, weather)
- Analytics, Calendar, Docs, Drive, Forms, Gmail
- Sheets, Slides, Classroom, People, Maps
- Gemini-backed generation and file search stores

Prompts: Drive search, weather, roadmap generation.

Transport: Stdio
Remote: one Apps Script Web App (MCP_WEB_APPS_URL)
"""

from gas_mcp.config import RelaySettings
from gas_mcp.server.relay_server import GasRelayServer, main


def create_server(settings: RelaySettings | None = None) -> GasRelayServer:
    """Create and configure a relay MCP server.

    Returns:
        GasRelayServer: Configured server instance ready to run.

    Example:
        >>> server = create_server()
        >>> asyncio.run(server.run())
    """
    return GasRelayServer(settings=settings)


__all__ = ["create_server", "GasRelayServer", "main"]
