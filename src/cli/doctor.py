"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import importlib.util
import shutil
from pathlib import Path

import ccxt
import typer
from rich.console import Console
from rich.table import Table

from adapters.exchange_factory import build_exchange, close_exchange, supported_exchanges
from adapters.http_client import probe_url
from core.config import AppSettings, write_user_env_vars
from core.errors import ExchangeCliError
from core.resources_loader import find_keys_file, load_keys_file
from core.services.bootstrap import primary_url

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_exchange_site(exchange_id: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        exchange = build_exchange(exchange_id, settings=settings)
    except ExchangeCliError as exc:
        return False, str(exc)
    try:
        url = primary_url(exchange)
    except ExchangeCliError as exc:
        return False, str(exc)
    finally:
        await close_exchange(exchange)
    ok, detail = await probe_url(url, settings)
    return ok, f"{url} -> {detail}"


def _check_keys(settings: AppSettings) -> tuple[str, str]:
    try:
        path = find_keys_file(settings)
        if path is None:
            return "OPTIONAL", "No keys.local.json / keys.json -> public endpoints only"
        keys = load_keys_file(path)
    except ExchangeCliError as exc:
        return "FAIL", str(exc)
    return "OK", f"{path} ({len(keys.root)} exchange section(s))"


def _check_cfscrape(settings: AppSettings) -> tuple[str, str]:
    interpreter = shutil.which(settings.cfscrape_python)
    if interpreter is None:
        return "OPTIONAL", f"{settings.cfscrape_python!r} not on PATH -> --cfscrape unavailable"
    return "OK", interpreter


@app.command()
def run(
    exchange_id: str = typer.Option("binance", "--exchange", help="Exchange whose website is probed."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="exchange-cli Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("ccxt", "OK", f"{ccxt.__version__} ({len(supported_exchanges())} exchanges)")
    table.add_row("Client timeout", "OK", f"{settings.timeout_ms} ms")

    status, detail = _check_keys(settings)
    table.add_row("Keys file", status, detail)

    if importlib.util.find_spec("cloudscraper") is not None:
        table.add_row("cloudscraper", "OK", "--cloudscrape available")
    else:
        table.add_row("cloudscraper", "FAIL", "Not importable -> reinstall the package")

    status, detail = _check_cfscrape(settings)
    table.add_row("cfscrape python", status, detail)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_exchange_site(exchange_id, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] Sites behind a challenge page usually need `--cloudscrape` or `--cfscrape`."
        )


@app.command(name="configure")
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    keys_file = typer.prompt(
        "Keys file (JSON keyed by exchange id, '-' for ./keys*.json)",
        default=str(settings.keys_file or "-"),
        show_default=True,
    ).strip()
    python = typer.prompt(
        "Python interpreter with cfscrape installed",
        default=settings.cfscrape_python,
        show_default=True,
    ).strip()

    if keys_file in ("", "-"):
        keys_file = ""
    elif not Path(keys_file).expanduser().is_file():
        raise typer.BadParameter(f"keys file not found: {keys_file}")
    if not python:
        raise typer.BadParameter("python interpreter is required")

    # Sin fichero explícito se borra la entrada guardada y vuelve la búsqueda en ./
    values: dict[str, str | None] = {
        "EXCHANGE_CLI_CFSCRAPE_PYTHON": python,
        "EXCHANGE_CLI_KEYS_FILE": str(Path(keys_file).expanduser().resolve()) if keys_file else None,
    }

    env_path = write_user_env_vars(values)

    _console.print(f"[green]Saved config to:[/green] {env_path}")
