"""Unit tests for the tool and prompt catalog."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from gas_mcp.catalog import Catalog, CatalogError, PromptEntry, ToolEntry, load_catalog
from gas_mcp.relay import RelayResult, RpcMethod

EXPECTED_GROUPS = [
    "apis",
    "analytics",
    "calendar",
    "docs",
    "drive",
    "forms",
    "gmail",
    "sheets",
    "slides",
    "classroom",
    "people",
    "maps",
    "gemini",
    "rag",
    "prompts",
]


@pytest.mark.unit
class TestPackagedCatalog:
    """Tests for the catalog shipped with the package."""

    def test_should_load_all_tools_and_prompts(self, packaged_catalog: Catalog) -> None:
        """Verify every packaged entry loads."""
        assert len(packaged_catalog.tools) == 149
        assert [p.name for p in packaged_catalog.prompts] == [
            "search_files_on_google_drive",
            "get_weather",
            "generate_roadmap",
        ]

    def test_should_keep_group_order(self, packaged_catalog: Catalog) -> None:
        """Verify groups follow the numbered file order."""
        assert packaged_catalog.groups() == EXPECTED_GROUPS

    def test_tool_names_should_be_unique(self, packaged_catalog: Catalog) -> None:
        """Verify no tool name is registered twice."""
        names = [t.name for t in packaged_catalog.tools]
        assert len(names) == len(set(names))

    def test_every_tool_should_have_object_schema(self, packaged_catalog: Catalog) -> None:
        """Verify every input schema is a JSON Schema object."""
        for tool in packaged_catalog.tools:
            assert tool.input_schema["type"] == "object", tool.name
            assert isinstance(tool.input_schema["properties"], dict), tool.name
            for required in tool.input_schema.get("required", []):
                assert required in tool.input_schema["properties"], tool.name

    def test_every_tool_should_have_description(self, packaged_catalog: Catalog) -> None:
        """Verify every tool is described for the model."""
        assert all(tool.description for tool in packaged_catalog.tools)

    def test_should_include_known_tools(self, packaged_catalog: Catalog) -> None:
        """Verify representative tools from several groups are present."""
        rate = packaged_catalog.get_tool("get_exchange_rate")
        assert rate is not None
        assert rate.group == "apis"
        assert set(rate.input_schema["properties"]) == {
            "currency_from",
            "currency_to",
            "currency_date",
        }

        docs = packaged_catalog.get_tool("manage_google_docs_using_docs_api")
        assert docs is not None
        assert docs.title == "Updates Google Docs"

        assert packaged_catalog.get_tool("search_schedule_on_Google_Calendar") is not None

    def test_prompt_arguments(self, packaged_catalog: Catalog) -> None:
        """Verify prompt arguments are loaded as required."""
        prompt = packaged_catalog.get_prompt("generate_roadmap")

        assert prompt is not None
        assert prompt.title == "Generate a roadmap"
        assert [(a.name, a.required) for a in prompt.arguments] == [("goal", True)]


@pytest.mark.unit
class TestLoadCatalog:
    """Tests for loading catalog files."""

    def test_should_load_custom_directory(self, catalog_dir: Path) -> None:
        """Verify entries, groups and defaults from a custom directory."""
        catalog = load_catalog(catalog_dir)

        assert [t.name for t in catalog.tools] == [
            "get_values_from_google_sheets",
            "explanation_sheets",
        ]
        assert catalog.groups() == ["sheets", "prompts"]
        explanation = catalog.get_tool("explanation_sheets")
        assert explanation is not None
        assert explanation.description == "Use to read the explanation.\nSecond line."
        assert explanation.input_schema == {"type": "object", "properties": {}}

    def test_should_reject_duplicate_tool_names(self, catalog_dir: Path) -> None:
        """Verify a name declared twice is a catalog error."""
        (catalog_dir / "03_more.yaml").write_text(
            "group: more\ntools:\n  - name: explanation_sheets\n    description: Again.\n",
            encoding="utf-8",
        )

        with pytest.raises(CatalogError, match="explanation_sheets"):
            load_catalog(catalog_dir)

    def test_should_allow_same_name_for_tool_and_prompt(self, catalog_dir: Path) -> None:
        """Verify tools and prompts are separate namespaces."""
        (catalog_dir / "03_more.yaml").write_text(
            "group: more\ntools:\n  - name: get_weather\n    description: Weather tool.\n",
            encoding="utf-8",
        )

        catalog = load_catalog(catalog_dir)

        assert catalog.get_tool("get_weather") is not None
        assert catalog.get_prompt("get_weather") is not None

    def test_should_reject_malformed_yaml(self, catalog_dir: Path) -> None:
        """Verify unparseable files stop loading."""
        (catalog_dir / "03_broken.yaml").write_text("tools: [unclosed\n", encoding="utf-8")

        with pytest.raises(CatalogError, match="03_broken.yaml"):
            load_catalog(catalog_dir)

    def test_should_reject_entry_without_name(self, catalog_dir: Path) -> None:
        """Verify invalid entries stop loading."""
        (catalog_dir / "03_bad.yaml").write_text(
            "tools:\n  - description: No name.\n", encoding="utf-8"
        )

        with pytest.raises(CatalogError):
            load_catalog(catalog_dir)

    def test_should_default_group_to_file_stem(self, catalog_dir: Path) -> None:
        """Verify files without a group use their file name."""
        (catalog_dir / "03_misc.yaml").write_text(
            "tools:\n  - name: misc_tool\n    description: Misc.\n", encoding="utf-8"
        )

        catalog = load_catalog(catalog_dir)

        assert catalog.get_tool("misc_tool").group == "03_misc"

    def test_empty_directory_should_give_empty_catalog(self, tmp_path: Path) -> None:
        """Verify an empty directory loads as an empty catalog."""
        catalog = load_catalog(tmp_path)

        assert catalog.tools == []
        assert catalog.prompts == []


@pytest.mark.unit
class TestEntryBinding:
    """Tests for binding entries to the dispatcher."""

    @pytest.mark.asyncio
    async def test_tool_handler_should_relay_with_fixed_name(self) -> None:
        """Verify the bound handler fixes name and tools/call."""
        dispatcher = MagicMock()
        dispatcher.relay = AsyncMock(return_value=RelayResult.text("ok", is_error=False))
        entry = ToolEntry(name="list_files", description="List files.")

        handler = entry.bind(dispatcher)
        result = await handler({"folder": "root"})

        dispatcher.relay.assert_awaited_once_with(
            "list_files", RpcMethod.TOOLS_CALL, {"folder": "root"}
        )
        assert result.payload["content"][0]["text"] == "ok"

    @pytest.mark.asyncio
    async def test_prompt_handler_should_relay_with_prompt_method(self) -> None:
        """Verify the bound handler fixes name and prompts/get."""
        dispatcher = MagicMock()
        dispatcher.relay = AsyncMock(return_value=RelayResult.text("ok", is_error=False))
        entry = PromptEntry(name="get_weather")

        await entry.bind(dispatcher)({"location": "Tokyo"})

        dispatcher.relay.assert_awaited_once_with(
            "get_weather", RpcMethod.PROMPTS_GET, {"location": "Tokyo"}
        )


@pytest.mark.unit
class TestMcpDefinitions:
    """Tests for conversion to MCP types."""

    def test_to_tool(self) -> None:
        """Verify the advertised MCP tool mirrors the entry."""
        schema = {"type": "object", "properties": {"q": {"type": "string"}}, "required": ["q"]}
        entry = ToolEntry(name="search", title="Search", description="Search.", input_schema=schema)

        tool = entry.to_tool()

        assert tool.name == "search"
        assert tool.title == "Search"
        assert tool.description == "Search."
        assert tool.inputSchema == schema

    def test_to_prompt(self, catalog_dir: Path) -> None:
        """Verify the advertised MCP prompt mirrors the entry."""
        prompt = load_catalog(catalog_dir).get_prompt("get_weather").to_prompt()

        assert prompt.name == "get_weather"
        assert prompt.title == "Get weather"
        assert prompt.arguments[0].name == "location"
        assert prompt.arguments[0].required is True
