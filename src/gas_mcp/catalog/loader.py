"""Loader for the YAML tool and prompt catalog.

Catalog files live next to this module and are read in filename order
(numeric prefix), so the advertised tool order is stable. Each file holds
a ``group`` name and a ``tools`` and/or ``prompts`` list.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from gas_mcp.catalog.models import Catalog, PromptEntry, ToolEntry

logger = logging.getLogger(__name__)

CATALOG_DIR = Path(__file__).parent


class CatalogError(RuntimeError):
    """Raised when catalog files are malformed or contain duplicate names."""


def _check_unique(names: list[str], kind: str) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise CatalogError(f"Duplicate {kind} name in catalog: {name}")
        seen.add(name)


def load_catalog(catalog_dir: Path | None = None) -> Catalog:
    """Load every catalog YAML file into a Catalog.

    Args:
        catalog_dir: Directory holding ``*.yaml`` files. Defaults to the
            files shipped with the package.

    Returns:
        The loaded catalog.

    Raises:
        CatalogError: If a file cannot be parsed, an entry is invalid, or a
            name appears twice.
    """
    directory = catalog_dir or CATALOG_DIR
    tools: list[ToolEntry] = []
    prompts: list[PromptEntry] = []

    for yaml_file in sorted(directory.glob("*.yaml")):
        try:
            data = yaml.safe_load(yaml_file.read_text(encoding="utf-8")) or {}
            group = data.get("group", yaml_file.stem)
            tools.extend(
                ToolEntry.model_validate({**entry, "group": group})
                for entry in data.get("tools") or []
            )
            prompts.extend(
                PromptEntry.model_validate({**entry, "group": group})
                for entry in data.get("prompts") or []
            )
        except (yaml.YAMLError, ValidationError, AttributeError, TypeError) as e:
            raise CatalogError(f"Failed to load catalog file {yaml_file.name}: {e}") from e

    _check_unique([entry.name for entry in tools], "tool")
    _check_unique([entry.name for entry in prompts], "prompt")

    logger.debug("Loaded %d tools and %d prompts from %s", len(tools), len(prompts), directory)
    return Catalog(tools=tools, prompts=prompts)
