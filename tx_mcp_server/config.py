# tx_mcp_server/config.py
from __future__ import annotations

import os
from pathlib import Path
from functools import lru_cache
import yaml
from pydantic import BaseModel, Field

from .utils.terminology_client import ClientConfig

DEFAULT_TX_SERVER = "https://tx.ontoserver.csiro.au/fhir"


class ToolLimit(BaseModel):
    # None keeps the httpx client default
    timeout_s: float | None = Field(default=None, gt=0)


class Settings(BaseModel):
    # ── tool toggles ─────────────────────────────────────────────
    enabled: list[str] = Field(default_factory=list)

    # ── per-tool limits ─────────────────────────────────────────
    limits: dict[str, ToolLimit] = Field(default_factory=dict)

    # ── external terminology server ─────────────────────────────
    terminology_base_url: str = Field(
        default_factory=lambda: os.getenv("TX_SERVER", DEFAULT_TX_SERVER)
    )

    def client_config(self, tool_name: str | None = None) -> ClientConfig:
        """Build the per-call client configuration for ``tool_name``."""
        limit = self.limits.get(tool_name) if tool_name else None
        return ClientConfig(
            base_url=self.terminology_base_url,
            timeout_s=limit.timeout_s if limit else None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    yaml_path = Path(__file__).with_name("tools.yaml")
    raw = yaml.safe_load(yaml_path.read_text()) if yaml_path.exists() else {}
    return Settings(**(raw or {}))
