"""Challenge bypass: cfscrape en un intérprete externo.

Por qué un subproceso:
- cfscrape necesita su propio entorno (y un runtime JS instalado); no es
  dependencia de este paquete.
- El intérprete es configurable (`EXCHANGE_CLI_CFSCRAPE_PYTHON`).

La URL viaja como argumento (`sys.argv[1]`), nunca interpolada en el código.
"""

from __future__ import annotations

import asyncio
import json

from loguru import logger

from core.domain.models import HeaderMap
from core.errors import HeaderBootstrapError
from core.interfaces.challenge import ChallengeSolver

CFSCRAPE_SCRIPT = "\n".join(
    [
        "import json, sys",
        "import cfscrape",
        "tokens, user_agent = cfscrape.get_tokens(sys.argv[1])",
        "print(json.dumps({",
        "    'Cookie': '; '.join(key + '=' + tokens[key] for key in tokens),",
        "    'User-Agent': user_agent,",
        "}))",
    ]
)


def parse_cfscrape_output(output: str) -> HeaderMap:
    """Valida la salida del script: objeto JSON con `Cookie` y `User-Agent`."""

    try:
        payload = json.loads(output)
    except json.JSONDecodeError as exc:
        raise HeaderBootstrapError(f"cfscrape returned invalid JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise HeaderBootstrapError("cfscrape output must be a JSON object")

    headers: HeaderMap = {}
    for key in ("Cookie", "User-Agent"):
        value = payload.get(key)
        if not isinstance(value, str):
            raise HeaderBootstrapError(f"cfscrape output is missing {key!r}")
        headers[key] = value
    return headers


class CfscrapeSolver(ChallengeSolver):
    def __init__(self, python: str = "python") -> None:
        self._python = python

    async def solve(self, url: str) -> HeaderMap:
        try:
            process = await asyncio.create_subprocess_exec(
                self._python,
                "-c",
                CFSCRAPE_SCRIPT,
                url,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as exc:
            raise HeaderBootstrapError(f"cannot start {self._python!r}: {exc}") from exc

        stdout, _ = await process.communicate()
        if process.returncode != 0:
            raise HeaderBootstrapError(f"cfscrape exited with status {process.returncode}")

        headers = parse_cfscrape_output(stdout.decode("utf-8", errors="replace"))
        logger.debug("cfscrape returned cookie of {} char(s)", len(headers["Cookie"]))
        return headers
