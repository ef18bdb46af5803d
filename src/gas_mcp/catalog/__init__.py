"""Static catalog of relayed tools and prompts.

The catalog is data, not code: every entry is declared in one of the YAML
files in this package and bound to the relay dispatcher at startup.

Example usage:
    ```python
    from gas_mcp.catalog import load_catalog

    catalog = load_catalog()
    print(f"{len(catalog.tools)} tools in {len(catalog.groups())} groups")
    ```
"""

from gas_mcp.catalog.loader import CatalogError, load_catalog
from gas_mcp.catalog.models import (
    Catalog,
    PromptArgumentEntry,
    PromptEntry,
    ToolEntry,
)

__all__ = [
    "Catalog",
    "CatalogError",
    "PromptArgumentEntry",
    "PromptEntry",
    "ToolEntry",
    "load_catalog",
]
