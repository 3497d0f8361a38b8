# tx_mcp_server/__init__.py
"""MCP server exposing FHIR terminology lookup and validation tools."""
from importlib.metadata import PackageNotFoundError, version

__all__ = ["get_app", "__version__"]

try:
    __version__ = version("tx-mcp-server")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.1.0"


def get_app():
    """ASGI app serving the tools over SSE, e.g. ``uvicorn --factory tx_mcp_server:get_app``."""
    from .server import mcp  # pylint: disable=import-outside-toplevel
    return mcp.http_app(transport="sse")
