# tx_mcp_server/utils/fhir_parameters.py
"""Index a FHIR ``Parameters`` resource by parameter name.

Each entry keeps the ``value[x]`` type tag next to the value, so callers ask
for ``("result", "Boolean")`` instead of poking at raw dicts.
"""
from __future__ import annotations

from typing import Any, NamedTuple


class ParameterValue(NamedTuple):
    kind: str  # the [x] of value[x], e.g. "Boolean", "Code", "Uri"; "" if no value
    value: Any


NO_VALUE = ParameterValue("", None)


class ParameterIndex:
    def __init__(self, values: dict[str, ParameterValue]):
        self._values = values

    @classmethod
    def from_resource(cls, resource: Any) -> "ParameterIndex":
        """Build the index; anything that is not a Parameters object indexes as empty."""
        values: dict[str, ParameterValue] = {}
        params = resource.get("parameter") if isinstance(resource, dict) else None
        if not isinstance(params, list):
            return cls(values)
        for param in params:
            if not isinstance(param, dict):
                continue
            name = param.get("name")
            if not name or name in values:  # first occurrence wins, valued or not
                continue
            values[name] = NO_VALUE
            for key, val in param.items():
                if key.startswith("value") and len(key) > len("value"):
                    values[name] = ParameterValue(key[len("value"):], val)
                    break
        return cls(values)

    def get(self, name: str, kind: str, default: Any = None) -> Any:
        """Value of ``name`` if present with type ``kind``, else ``default``."""
        entry = self._values.get(name)
        if entry is None or entry.kind != kind or entry.value is None:
            return default
        return entry.value

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)
