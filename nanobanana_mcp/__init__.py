"""
Nano Banana MCP Server

MCP server for Google's Nano Banana Pro (Gemini 3 Pro Image) and
Nano Banana (Gemini 2.5 Flash Image) models, built on FastMCP with a
small, type-safe request/response adaptation layer over the Gemini REST API.
"""

__version__ = "1.0.0"

try:
    import importlib.metadata

    __version__ = importlib.metadata.version("nanobanana-mcp")
except (importlib.metadata.PackageNotFoundError, ImportError):
    # Fallback for development mode
    pass

__all__ = ["__version__"]
