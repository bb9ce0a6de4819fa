"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para las comprobaciones de conectividad.
- Facilita testeo: se puede sustituir por un stub/mocked client.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


async def probe_url(url: str, settings: AppSettings | None = None) -> tuple[bool, str]:
    """GET `url` y resume el resultado (para diagnósticos)."""

    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        return False, f"{type(exc).__name__}: {exc}"
    if response.status_code in (403, 503):
        return False, f"HTTP {response.status_code} (challenge page? try --cloudscrape/--cfscrape)"
    return True, f"HTTP {response.status_code}"
