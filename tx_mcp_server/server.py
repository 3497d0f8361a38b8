# tx_mcp_server/server.py
from __future__ import annotations

import logging
import os

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse

from . import __version__
from .mcp_app import mcp
from .config import get_settings
from .tools import load_enabled

logger = logging.getLogger(__name__)

settings = get_settings()
loaded_tools = load_enabled(settings.enabled)


@mcp.custom_route("/health", methods=["GET"])
async def health(_req: Request) -> PlainTextResponse:
    return PlainTextResponse("OK")


@mcp.custom_route("/", methods=["GET"])
async def root(_req: Request) -> JSONResponse:
    """Server name, version and the tools it exposes."""
    return JSONResponse({"name": mcp.name, "version": __version__, "tools": loaded_tools})


def main() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    transport = os.getenv("MCP_TRANSPORT", "sse")
    logger.info(
        "Serving %s over %s (terminology server: %s)",
        loaded_tools, transport, settings.terminology_base_url,
    )
    if transport == "stdio":
        # stdout carries the protocol; logs stay on stderr
        mcp.run(transport="stdio")
        return

    mcp.run(
        transport=transport,
        host=os.getenv("MCP_HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3003")),
        path=os.getenv("MCP_HTTP_PATH", "/sse" if transport == "sse" else "/mcp"),
    )


if __name__ == "__main__":
    main()
