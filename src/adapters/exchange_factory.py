"""Construcción del cliente de exchange (ccxt, asyncio).

Responsabilidad:
- Instanciar el exchange pedido por id con verbose/timeout.
- Aplicar la sección del fichero de claves como atributos del cliente.
- Traducir la jerarquía de errores de ccxt a `FailureKind`.
"""

from __future__ import annotations

from typing import Any

import ccxt.async_support as ccxt
from loguru import logger

from core.config import AppSettings
from core.domain.models import FailureKind
from core.errors import UnknownExchangeError


def supported_exchanges() -> list[str]:
    return list(ccxt.exchanges)


def build_exchange(
    exchange_id: str,
    *,
    verbose: bool = False,
    settings: AppSettings | None = None,
    overrides: dict[str, Any] | None = None,
) -> Any:
    """Crea el exchange `exchange_id` y aplica `overrides` encima.

    Los overrides se asignan atributo a atributo (reemplazo plano, sin
    merge profundo), después de construir el cliente.
    """

    settings = settings or AppSettings()
    if exchange_id not in ccxt.exchanges:
        raise UnknownExchangeError(exchange_id)

    exchange_class = getattr(ccxt, exchange_id)
    exchange = exchange_class({"verbose": verbose, "timeout": settings.timeout_ms})
    for key, value in (overrides or {}).items():
        setattr(exchange, key, value)
    if overrides:
        logger.debug("applied settings to {}: {}", exchange_id, ", ".join(sorted(overrides)))
    return exchange


def classify_ccxt_error(exc: BaseException) -> FailureKind | None:
    if isinstance(exc, ccxt.ExchangeError):
        return FailureKind.EXCHANGE_ERROR
    if isinstance(exc, ccxt.NetworkError):
        return FailureKind.NETWORK_ERROR
    return None


async def close_exchange(exchange: Any) -> None:
    """Cierra la sesión HTTP del cliente si la tiene."""

    close = getattr(exchange, "close", None)
    if callable(close):
        await close()
