"""MCP tools that render Mermaid diagrams to SVG files or terminal text art."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mermaid-render-mcp")
except PackageNotFoundError:
    # Source checkout without an install.
    __version__ = "0.1.0"

__all__ = ["__version__"]
