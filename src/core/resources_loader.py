"""Cargador del fichero de claves/ajustes por exchange.

Este módulo vive en `core/` porque:
- centraliza *dónde* se buscan las claves sin acoplarse a la CLI
- evita que cada adaptador repita la lógica de paths.

Formato: un objeto JSON indexado por id de exchange; cada sección es un
objeto plano de atributos que se aplican sobre el cliente, p.ej.
`{"binance": {"apiKey": "...", "secret": "..."}}`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import RootModel, ValidationError

from core.config import AppSettings
from core.errors import SettingsFileError

KEYS_FILE_CANDIDATES = ("keys.local.json", "keys.json")


class KeysFile(RootModel[dict[str, dict[str, Any]]]):
    """Secciones de ajustes indexadas por id de exchange."""

    def section(self, exchange_id: str) -> dict[str, Any]:
        return dict(self.root.get(exchange_id) or {})


def find_keys_file(settings: AppSettings | None = None, *, cwd: Path | None = None) -> Path | None:
    """Busca el fichero de claves.

    Orden:
    1) `EXCHANGE_CLI_KEYS_FILE` si está definido (debe existir)
    2) ./keys.local.json
    3) ./keys.json
    """

    settings = settings or AppSettings()
    if settings.keys_file is not None:
        if not settings.keys_file.is_file():
            raise SettingsFileError(f"Keys file not found: {settings.keys_file}")
        return settings.keys_file

    base = cwd or Path.cwd()
    for name in KEYS_FILE_CANDIDATES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_keys_file(path: Path) -> KeysFile:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SettingsFileError(f"Cannot read keys file {path}: {exc}") from exc
    try:
        return KeysFile.model_validate(data)
    except ValidationError as exc:
        raise SettingsFileError(f"Keys file {path} must map exchange ids to objects") from exc


def load_exchange_settings(
    exchange_id: str,
    settings: AppSettings | None = None,
    *,
    cwd: Path | None = None,
) -> dict[str, Any]:
    """Devuelve la sección del exchange (vacía si no hay fichero o sección)."""

    path = find_keys_file(settings, cwd=cwd)
    if path is None:
        logger.debug("no keys file found")
        return {}
    section = load_keys_file(path).section(exchange_id)
    logger.debug("loaded {} setting(s) for {} from {}", len(section), exchange_id, path)
    return section
