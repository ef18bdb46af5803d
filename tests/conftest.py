"""Shared pytest fixtures for gas-mcp tests.

This module provides reusable fixtures for relay settings, small catalogs
and mocked Web App responses.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from gas_mcp.catalog import Catalog, load_catalog
from gas_mcp.config import RelaySettings
from gas_mcp.relay import RelayDispatcher

WEB_APPS_URL = "https://script.google.com/macros/s/deployment-id/exec?accessKey=sample-access-key"
API_KEY = "test_api_key_abc123"

# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def settings() -> RelaySettings:
    """Create relay settings pointing at a fake Web App."""
    return RelaySettings(web_apps_url=WEB_APPS_URL, api_key=API_KEY)


# =============================================================================
# Web App Response Fixtures
# =============================================================================


def _mock_response(body: Any = "", status_code: int = 200) -> MagicMock:
    """Create a mock httpx Response; dict bodies are serialized as JSON."""
    mock_response = MagicMock(spec=httpx.Response)
    mock_response.status_code = status_code
    mock_response.is_success = 200 <= status_code < 300
    mock_response.text = body if isinstance(body, str) else json.dumps(body)
    return mock_response


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory for mock Web App responses."""
    return _mock_response


@pytest.fixture
def mock_http_client() -> AsyncMock:
    """Create a mock httpx.AsyncClient answering with an empty 200."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.post.return_value = _mock_response("")
    return client


@pytest.fixture
def dispatcher(settings: RelaySettings, mock_http_client: AsyncMock) -> RelayDispatcher:
    """Create a dispatcher that talks to the mock client."""
    return RelayDispatcher(settings, http_client=mock_http_client)


@pytest.fixture
def last_envelope(mock_http_client: AsyncMock) -> Callable[[], dict[str, Any]]:
    """Accessor for the JSON envelope of the last POST."""
    return lambda: mock_http_client.post.call_args.kwargs["json"]


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def packaged_catalog() -> Catalog:
    """Load the catalog shipped with the package."""
    return load_catalog()


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """Create a directory with a small two-file catalog."""
    directory = tmp_path / "catalog"
    directory.mkdir()
    (directory / "01_sheets.yaml").write_text(
        """
group: sheets
tools:
  - name: get_values_from_google_sheets
    description: Use to get values from Google Sheets.
    input_schema:
      type: object
      properties:
        spreadsheetId:
          type: string
          description: Spreadsheet ID.
      required: [spreadsheetId]
  - name: explanation_sheets
    title: Sheets explanation
    description: |-
      Use to read the explanation.
      Second line.
""",
        encoding="utf-8",
    )
    (directory / "02_prompts.yaml").write_text(
        """
group: prompts
prompts:
  - name: get_weather
    title: Get weather
    description: Search the current weather.
    arguments:
      - name: location
        description: Location of the weather.
        required: true
""",
        encoding="utf-8",
    )
    return directory


# =============================================================================
# CLI Test Fixtures
# =============================================================================


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
