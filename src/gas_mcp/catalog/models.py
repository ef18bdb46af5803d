"""Catalog entry models.

Entries are declarative: a name, an MCP-facing schema, and the remote
operation they relay to. Binding an entry to a RelayDispatcher yields its
handler.
"""

from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any

from mcp.types import Prompt, PromptArgument, Tool
from pydantic import BaseModel, Field

from gas_mcp.relay import RelayDispatcher, RelayResult, RpcMethod

Handler = Callable[[dict[str, Any] | None], Awaitable[RelayResult]]


def _empty_object_schema() -> dict[str, Any]:
    return {"type": "object", "properties": {}}


class ToolEntry(BaseModel):
    """A tool relayed to the Web App with ``tools/call``.

    Attributes:
        name: Tool name, also the remote operation name.
        title: Optional display title.
        description: Text shown to the model.
        input_schema: JSON Schema of the accepted arguments.
        group: Catalog file the entry was loaded from.
    """

    name: str = Field(..., min_length=1, description="Tool name")
    title: str | None = Field(default=None, description="Display title")
    description: str = Field(default="", description="Tool description")
    input_schema: dict[str, Any] = Field(
        default_factory=_empty_object_schema, description="JSON Schema for arguments"
    )
    group: str = Field(default="", description="Catalog group")

    model_config = {"frozen": True}

    def bind(self, dispatcher: RelayDispatcher) -> Handler:
        """Return the handler relaying this tool through ``dispatcher``."""
        return partial(dispatcher.relay, self.name, RpcMethod.TOOLS_CALL)

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=self.input_schema,
        )


class PromptArgumentEntry(BaseModel):
    """A single prompt argument."""

    name: str = Field(..., min_length=1, description="Argument name")
    description: str | None = Field(default=None, description="Argument description")
    required: bool = Field(default=False, description="Whether the argument is required")

    model_config = {"frozen": True}


class PromptEntry(BaseModel):
    """A prompt template served by the Web App with ``prompts/get``.

    Attributes:
        name: Prompt name, also the remote operation name.
        title: Optional display title.
        description: Text shown to the client.
        arguments: Accepted arguments.
        group: Catalog file the entry was loaded from.
    """

    name: str = Field(..., min_length=1, description="Prompt name")
    title: str | None = Field(default=None, description="Display title")
    description: str | None = Field(default=None, description="Prompt description")
    arguments: list[PromptArgumentEntry] = Field(
        default_factory=list, description="Prompt arguments"
    )
    group: str = Field(default="", description="Catalog group")

    model_config = {"frozen": True}

    def bind(self, dispatcher: RelayDispatcher) -> Handler:
        """Return the handler relaying this prompt through ``dispatcher``."""
        return partial(dispatcher.relay, self.name, RpcMethod.PROMPTS_GET)

    def to_prompt(self) -> Prompt:
        return Prompt(
            name=self.name,
            title=self.title,
            description=self.description,
            arguments=[
                PromptArgument(name=arg.name, description=arg.description, required=arg.required)
                for arg in self.arguments
            ],
        )


class Catalog(BaseModel):
    """Ordered, immutable collection of tool and prompt entries."""

    tools: list[ToolEntry] = Field(default_factory=list, description="Tool entries")
    prompts: list[PromptEntry] = Field(default_factory=list, description="Prompt entries")

    model_config = {"frozen": True}

    def get_tool(self, name: str) -> ToolEntry | None:
        return next((entry for entry in self.tools if entry.name == name), None)

    def get_prompt(self, name: str) -> PromptEntry | None:
        return next((entry for entry in self.prompts if entry.name == name), None)

    def groups(self) -> list[str]:
        """Group names in catalog order."""
        seen: dict[str, None] = {}
        for entry in [*self.tools, *self.prompts]:
            seen.setdefault(entry.group, None)
        return list(seen)

    def tools_in_group(self, group: str) -> list[ToolEntry]:
        return [entry for entry in self.tools if entry.group == group]
