# tx_mcp_server/results.py
"""Outcome types returned by the terminology handlers.

Handlers never raise; they hand back a ``ToolSuccess`` or a ``ToolFailure``.
The MCP layer turns a failure into an ``isError`` tool response.
"""
from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict


class ErrorKind(str, Enum):
    REMOTE_REJECTED = "remote_rejected"  # non-2xx from the terminology server
    TRANSPORT = "transport"  # network failure, timeout, unparseable body


class ToolSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class ToolFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    status_code: int | None = None


ToolOutcome = Union[ToolSuccess, ToolFailure]


def remote_rejected(status_code: int, body: str) -> ToolFailure:
    return ToolFailure(
        kind=ErrorKind.REMOTE_REJECTED,
        message=f"Terminology server error ({status_code}): {body}",
        status_code=status_code,
    )
