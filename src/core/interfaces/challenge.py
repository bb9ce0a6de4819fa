"""Contratos de resolución de challenges anti-bot.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que las estrategias (cloudscraper, cfscrape externo) sean
  intercambiables y testeables sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import HeaderMap


@runtime_checkable
class ChallengeSolver(Protocol):
    """Contrato mínimo para una estrategia de bypass.

    Reglas de diseño:
    - `solve` es asíncrono porque típicamente hará I/O (HTTP o subproceso).
    - Devuelve las cabeceras a adjuntar al cliente o lanza
      `core.errors.HeaderBootstrapError`.
    """

    async def solve(self, url: str) -> HeaderMap:
        """Resuelve el challenge de `url` y devuelve el mapa de cabeceras."""

        ...
