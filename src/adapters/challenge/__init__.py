"""Estrategias de bypass de challenges anti-bot.

Cada módulo implementa `core.interfaces.challenge.ChallengeSolver`.
"""

from __future__ import annotations

from adapters.challenge.cfscrape_solver import CfscrapeSolver
from adapters.challenge.cloudscraper_solver import CloudscraperSolver
from core.config import AppSettings
from core.domain.models import BootstrapMode
from core.interfaces.challenge import ChallengeSolver


def build_solver(mode: BootstrapMode, settings: AppSettings | None = None) -> ChallengeSolver | None:
    """Devuelve la estrategia para `mode` (o `None` si no hay bypass)."""

    if mode is BootstrapMode.CLOUDSCRAPE:
        return CloudscraperSolver()
    if mode is BootstrapMode.CFSCRAPE:
        settings = settings or AppSettings()
        return CfscrapeSolver(python=settings.cfscrape_python)
    return None


__all__ = [
    "CfscrapeSolver",
    "CloudscraperSolver",
    "build_solver",
]
