"""Challenge bypass: cloudscraper.

Descarga la web del exchange con una sesión de cloudscraper y devuelve las
cabeceras que esa sesión usó en la petición que superó el challenge
(incluye `User-Agent` y `Cookie`).
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import cloudscraper
from loguru import logger

from core.domain.models import HeaderMap
from core.errors import HeaderBootstrapError
from core.interfaces.challenge import ChallengeSolver


class CloudscraperSolver(ChallengeSolver):
    """Resuelve el challenge en un hilo (cloudscraper es síncrono)."""

    def __init__(self, scraper_factory: Callable[[], Any] | None = None) -> None:
        self._scraper_factory = scraper_factory or cloudscraper.create_scraper

    def _fetch_headers(self, url: str) -> HeaderMap:
        scraper = self._scraper_factory()
        try:
            response = scraper.get(url)
            response.raise_for_status()
            return {str(k): str(v) for k, v in response.request.headers.items()}
        finally:
            scraper.close()

    async def solve(self, url: str) -> HeaderMap:
        try:
            return await asyncio.to_thread(self._fetch_headers, url)
        except Exception as exc:
            logger.error("Cloudscraper error: {}", exc)
            raise HeaderBootstrapError(f"cloudscraper failed for {url}: {exc}") from exc
