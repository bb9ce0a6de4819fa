"""Header bootstrap: attach challenge-bypass headers before any call."""

from __future__ import annotations

from loguru import logger

from core.domain.models import HeaderMap
from core.errors import HeaderBootstrapError
from core.interfaces.challenge import ChallengeSolver


def primary_url(client: object) -> str:
    """Return the client's main website URL (first one when there are several)."""

    urls = getattr(client, "urls", None)
    www = urls.get("www") if isinstance(urls, dict) else None
    if isinstance(www, (list, tuple)):
        www = www[0] if www else None
    if not isinstance(www, str) or not www:
        raise HeaderBootstrapError("Client does not declare a website URL (urls['www'])")
    return www


async def apply_challenge_headers(client: object, solver: ChallengeSolver) -> HeaderMap:
    """Run `solver` against the client's website and merge the headers into it."""

    url = primary_url(client)
    logger.debug("solving challenge for {} with {}", url, type(solver).__name__)
    headers = await solver.solve(url)

    current = getattr(client, "headers", None)
    merged: HeaderMap = dict(current) if isinstance(current, dict) else {}
    merged.update(headers)
    setattr(client, "headers", merged)
    logger.debug("attached {} header(s) to client", len(headers))
    return headers
