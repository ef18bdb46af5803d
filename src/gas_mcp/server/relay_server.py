"""MCP server relaying the catalog to a Google Apps Script Web App.

Every tool and prompt in the catalog is bound at startup to the relay
dispatcher. A call is matched by name, relayed to the Web App as a single
JSON-RPC POST, and the classified result is returned to the client.
Failures come back as results with ``isError`` set, never as protocol
faults.
"""

import asyncio
import json
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    CallToolResult,
    GetPromptResult,
    Prompt,
    PromptMessage,
    TextContent,
    Tool,
)
from pydantic import ValidationError

from gas_mcp.__version__ import __version__
from gas_mcp.catalog import Catalog, load_catalog
from gas_mcp.catalog.models import Handler
from gas_mcp.config import RelaySettings, configure_logging
from gas_mcp.relay import RelayDispatcher, RelayResult, ResultKind

logger = logging.getLogger(__name__)

SERVER_NAME = "gas-mcp"


def _text_of(result: RelayResult) -> str:
    """Concatenate the text blocks of a result, or dump it as JSON."""
    content = result.payload.get("content")
    if isinstance(content, list):
        texts = [
            block["text"]
            for block in content
            if isinstance(block, dict) and isinstance(block.get("text"), str)
        ]
        if texts:
            return "\n".join(texts)
    return json.dumps(result.payload, indent=2)


class GasRelayServer:
    """MCP server exposing the Web App catalog.

    Attributes:
        server: MCP Server instance.
        settings: Relay configuration.
        catalog: Tool and prompt entries advertised to clients.
        dispatcher: Relay used by every handler.
    """

    def __init__(
        self,
        settings: RelaySettings | None = None,
        catalog: Catalog | None = None,
        dispatcher: RelayDispatcher | None = None,
    ) -> None:
        """Initialize the server and register every catalog entry.

        Args:
            settings: Relay configuration. Defaults to the environment.
            catalog: Catalog to serve. Defaults to the packaged catalog.
            dispatcher: Relay to use. Defaults to one built from ``settings``.

        Raises:
            ConfigurationError: If settings come from an incomplete environment.
            CatalogError: If the catalog files are invalid.
        """
        self.settings = settings or RelaySettings.from_env()
        self.catalog = catalog or load_catalog()
        self.dispatcher = dispatcher or RelayDispatcher(self.settings)
        self.server = Server(SERVER_NAME, version=__version__)

        self._tool_handlers: dict[str, Handler] = {
            entry.name: entry.bind(self.dispatcher) for entry in self.catalog.tools
        }
        self._prompt_handlers: dict[str, Handler] = {
            entry.name: entry.bind(self.dispatcher) for entry in self.catalog.prompts
        }
        self._setup_handlers()

        logger.info(
            "Registered %d tools and %d prompts relaying to %s",
            len(self._tool_handlers),
            len(self._prompt_handlers),
            self.settings.redacted_url,
        )

    def _setup_handlers(self) -> None:
        """Register MCP handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            return [entry.to_tool() for entry in self.catalog.tools]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
            return await self.call_tool(name, arguments)

        @self.server.list_prompts()
        async def list_prompts() -> list[Prompt]:
            return [entry.to_prompt() for entry in self.catalog.prompts]

        @self.server.get_prompt()
        async def get_prompt(name: str, arguments: dict[str, str] | None) -> GetPromptResult:
            return await self.get_prompt(name, arguments)

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        """Relay a tool call and convert the result for the MCP client.

        Args:
            name: Tool name.
            arguments: Tool arguments.

        Returns:
            The tool result; unknown tools yield an error result.
        """
        handler = self._tool_handlers.get(name)
        if handler is None:
            logger.warning("Unknown tool requested: %s", name)
            return CallToolResult(
                content=[TextContent(type="text", text=f"Unknown tool: {name}")],
                isError=True,
            )

        result = await handler(arguments or {})
        try:
            return CallToolResult.model_validate(result.payload)
        except ValidationError:
            logger.warning("Web App returned a non-MCP tool result for %s", name)
            return CallToolResult(
                content=[TextContent(type="text", text=json.dumps(result.payload, indent=2))],
                isError=result.is_error,
            )

    async def get_prompt(self, name: str, arguments: dict[str, str] | None) -> GetPromptResult:
        """Relay a prompt request and convert the result for the MCP client.

        Args:
            name: Prompt name.
            arguments: Prompt arguments.

        Returns:
            The prompt result. Error and raw-text results become a single
            user message carrying their text.

        Raises:
            ValueError: If the prompt is not in the catalog.
        """
        handler = self._prompt_handlers.get(name)
        if handler is None:
            raise ValueError(f"Unknown prompt: {name}")

        result = await handler(dict(arguments or {}))
        if result.kind is ResultKind.PROMPT:
            try:
                return GetPromptResult.model_validate(result.payload)
            except ValidationError:
                logger.warning("Web App returned a non-MCP prompt result for %s", name)

        return GetPromptResult(
            description="Error from Web App" if result.is_error else None,
            messages=[
                PromptMessage(role="user", content=TextContent(type="text", text=_text_of(result)))
            ],
        )

    async def close(self) -> None:
        await self.dispatcher.close()

    async def run(self) -> None:
        """Run the MCP server using stdio transport."""
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.close()


def main(settings: RelaySettings | None = None) -> None:
    """Entry point for the Web App relay MCP server."""
    settings = settings or RelaySettings.from_env()
    configure_logging(settings.log_level)
    server = GasRelayServer(settings=settings)
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
