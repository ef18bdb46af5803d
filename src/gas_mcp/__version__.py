"""Version information for gas-mcp."""

from importlib.metadata import PackageNotFoundError, version


def _get_version() -> str:
    """Get version from the installed distribution metadata."""
    try:
        return version("gas-mcp")
    except PackageNotFoundError:
        # Running from a source tree that was never installed
        return "0.0.0+unknown"


__version__ = _get_version()
