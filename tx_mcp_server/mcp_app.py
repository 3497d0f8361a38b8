# tx_mcp_server/mcp_app.py
from fastmcp import FastMCP

# Shared instance; tool modules register against it on import.
mcp = FastMCP(
    "Terminology Tools",
    instructions="Tools for querying terminology using a FHIR terminology service.",
)
