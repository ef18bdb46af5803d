"""MCP relay for Google Apps Script Web Apps.

Exposes a static catalog of tools and prompts over MCP (stdio) and relays
every call to a single Apps Script Web App, which does the Google
Workspace work.
"""

from gas_mcp.__version__ import __version__

__all__ = ["__version__"]
