# tx_mcp_server/tools/terminology.py
from __future__ import annotations

import json
import logging
from typing import Annotated, Any

from fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field

from ..mcp_app import mcp  # shared FastMCP instance
from ..config import get_settings
from ..results import ErrorKind, ToolFailure, ToolOutcome, ToolSuccess, remote_rejected
from ..utils.fhir_parameters import ParameterIndex
from ..utils.terminology_client import TerminologyClient

logger = logging.getLogger(__name__)

settings = get_settings()

NO_MATCHES = "No matching codes found"


def _matches(body: Any) -> list[Any]:
    """``expansion.contains`` of a ValueSet body; empty when absent or malformed."""
    expansion = body.get("expansion") if isinstance(body, dict) else None
    contains = expansion.get("contains") if isinstance(expansion, dict) else None
    return contains if isinstance(contains, list) else []


class ValidationResult(BaseModel):
    # values are passed through as the server sent them
    valid: Any
    code: Any
    system: Any
    version: Any = None
    display: Any = None

    @classmethod
    def from_parameters(
        cls, params: ParameterIndex, code: str, system: str
    ) -> "ValidationResult":
        # version never falls back to the requested one
        return cls(
            valid=params.get("result", "Boolean", False),
            code=params.get("code", "Code", code),
            system=params.get("system", "Uri", system),
            version=params.get("version", "String"),
            display=params.get("display", "String"),
        )

    def to_text(self) -> str:
        return json.dumps(self.model_dump(exclude_none=True), indent=2, ensure_ascii=False)


# ────────────────────────────── handlers ──────────────────────────────
async def lookup_code(client: TerminologyClient, filter: str, url: str) -> ToolOutcome:
    """Expand ``url`` filtered by ``filter`` and return the top-ranked coding."""
    try:
        resp = await client.expand(url=url, filter=filter)
        if not resp.is_success:
            logger.warning("$expand rejected (%s) for url=%r", resp.status_code, url)
            return remote_rejected(resp.status_code, resp.text)

        matches = _matches(resp.json())
        if not matches:
            return ToolSuccess(text=NO_MATCHES)

        # the server ranks by relevance; keep only its best match
        return ToolSuccess(text=json.dumps(matches[0], indent=2, ensure_ascii=False))
    except Exception as e:
        logger.warning("lookup-code failed: %s", e)
        return ToolFailure(kind=ErrorKind.TRANSPORT, message=f"Error looking up codes: {e}")


async def validate_code(
    client: TerminologyClient,
    system: str,
    code: str,
    url: str,
    version: str | None = None,
) -> ToolOutcome:
    """Ask the server whether ``system|code`` is in value set ``url``.

    ``valid: false`` is a normal answer, not a failure.
    """
    try:
        resp = await client.validate_code(url=url, system=system, code=code, version=version)
        if not resp.is_success:
            logger.warning("$validate-code rejected (%s) for url=%r", resp.status_code, url)
            return remote_rejected(resp.status_code, resp.text)

        params = ParameterIndex.from_resource(resp.json())
        result = ValidationResult.from_parameters(params, code=code, system=system)
        return ToolSuccess(text=result.to_text())
    except Exception as e:
        logger.warning("validate-code failed: %s", e)
        return ToolFailure(kind=ErrorKind.TRANSPORT, message=f"Error validating code: {e}")


# ────────────────────────── MCP boundary ──────────────────────────────
def _client(tool_name: str) -> TerminologyClient:
    return TerminologyClient(get_settings().client_config(tool_name))


def _respond(outcome: ToolOutcome) -> str:
    """Unwrap a handler outcome; failures become ``isError`` tool results."""
    if isinstance(outcome, ToolFailure):
        raise ToolError(outcome.message)
    return outcome.text


if "lookup-code" in settings.enabled:
    @mcp.tool(
        name="lookup-code",
        output_schema=None,
        description=(
            "Look up a clinical code based on text description using a FHIR terminology "
            "server. Use this when populating coded fields within FHIR resources to ensure "
            "that the code is valid and compliant with the value set binding of the "
            "element. Returns the most relevant coding from the value set."
        ),
    )
    async def lookup_code_tool(
        filter: Annotated[
            str,
            Field(
                min_length=1,
                description='Text to search for (e.g. "hypertension", "tracheotomy", '
                '"left quad laceration")',
            ),
        ],
        url: Annotated[
            str,
            Field(
                min_length=1,
                description=(
                    "ValueSet URL to search within.\n"
                    "Common values:\n"
                    '- "http://snomed.info/sct?fhir_vs" (all of SNOMED CT, use this if not specified)\n'
                    '- "http://loinc.org/vs" (all of LOINC)\n'
                    '- "http://snomed.info/sct?fhir_vs=isa/71388002" (SNOMED CT procedures, i.e. '
                    "all codes that are a subtype of Procedure (71388002))"
                ),
            ),
        ],
    ) -> str:
        async with _client("lookup-code") as client:
            return _respond(await lookup_code(client, filter=filter, url=url))


if "validate-code" in settings.enabled:
    @mcp.tool(
        name="validate-code",
        output_schema=None,
        description=(
            "Validate whether a code is valid within a specified value set using a FHIR "
            "terminology server. Use this to verify that a code is appropriate for a "
            "particular context or value set binding. Returns validation result including "
            "whether the code is valid and its display text."
        ),
    )
    async def validate_code_tool(
        system: Annotated[
            str,
            Field(
                min_length=1,
                description="The code system URI (e.g. 'http://snomed.info/sct', 'http://loinc.org')",
            ),
        ],
        code: Annotated[
            str,
            Field(min_length=1, description="The code to validate (e.g. '30371007', '72133-2')"),
        ],
        url: Annotated[
            str,
            Field(
                min_length=1,
                description=(
                    "ValueSet URL to validate against.\n"
                    "Common values:\n"
                    '- "http://snomed.info/sct?fhir_vs" (all of SNOMED CT)\n'
                    '- "http://loinc.org/vs" (all of LOINC)\n'
                    "- A specific value set URL from a FHIR profile binding"
                ),
            ),
        ],
        version: Annotated[
            str | None,
            Field(
                description="Optional version of the code system (e.g. "
                "'http://snomed.info/sct/32506021000036107/version/20250831')",
            ),
        ] = None,
    ) -> str:
        async with _client("validate-code") as client:
            return _respond(
                await validate_code(client, system=system, code=code, url=url, version=version)
            )
