"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con jq y pipelines (`--json`).
- Formato estable: indentado y con claves ordenadas.
"""

from __future__ import annotations

import json
import math
from typing import Any


def _jsonable(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(v) for v in value]
    return value


def dumps_result(value: Any) -> str:
    """Serializa un resultado de exchange; tipos no-JSON se convierten a str."""

    return json.dumps(_jsonable(value), ensure_ascii=False, indent=2, sort_keys=True, default=str)
