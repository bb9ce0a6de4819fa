"""CLI principal: `exchange-cli <exchangeId> <methodName> [params...]`.

Todo token que empiece por `--` se descarta antes de leer posicionales, así
que los flags pueden ir en cualquier posición y un `-1` sigue siendo un
parámetro.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer
from rich.console import Console

from adapters.challenge import build_solver
from adapters.exchange_factory import (
    build_exchange,
    classify_ccxt_error,
    close_exchange,
    supported_exchanges,
)
from cli.ui_components import CliPresenter, print_error, print_supported_exchanges, print_usage
from core.config import AppSettings
from core.domain.models import BootstrapMode
from core.errors import ExchangeCliError, UnknownExchangeError
from core.logging_utils import configure_logging
from core.resources_loader import load_exchange_settings
from core.services.call_pipeline import CallRequest, PipelineHooks, run_call

app = typer.Typer(add_completion=False, help="Call any method of any ccxt exchange from the shell.")

_console = Console()


def split_positionals(tokens: List[str] | None) -> tuple[str | None, str | None, list[str]]:
    positional = [token for token in (tokens or []) if not token.startswith("--")]
    exchange_id = positional[0] if len(positional) > 0 else None
    method_name = positional[1] if len(positional) > 1 else None
    return exchange_id, method_name, positional[2:]


async def _execute(
    exchange_id: str,
    request: CallRequest,
    *,
    mode: BootstrapMode,
    verbose: bool,
    settings: AppSettings,
    presenter: CliPresenter,
) -> None:
    overrides = load_exchange_settings(exchange_id, settings)
    exchange = build_exchange(exchange_id, verbose=verbose, settings=settings, overrides=overrides)
    try:
        await run_call(
            exchange,
            request,
            solver=build_solver(mode, settings),
            classify=classify_ccxt_error,
            hooks=PipelineHooks(call_started=presenter.call_started, outcome=presenter.outcome),
        )
    finally:
        await close_exchange(exchange)


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def call(
    tokens: Optional[List[str]] = typer.Argument(
        None,
        metavar="EXCHANGE_ID METHOD [PARAMS]...",
        help="Exchange id, method name and positional parameters.",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose client and debug logging."),
    cloudscrape: bool = typer.Option(False, "--cloudscrape", help="Bypass the challenge page with cloudscraper."),
    cfscrape: bool = typer.Option(False, "--cfscrape", help="Bypass the challenge page with cfscrape (external python)."),
    poll: bool = typer.Option(False, "--poll", help="Repeat the call while it keeps succeeding."),
    load_markets: bool = typer.Option(False, "--load-markets", help="Load markets before the call."),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON."),
) -> None:
    """Invoke METHOD on the EXCHANGE_ID client with coerced PARAMS."""

    exchange_id, method_name, params = split_positionals(tokens)
    if not exchange_id or not method_name:
        print_usage(_console, "exchange-cli", supported_exchanges())
        return

    try:
        mode = BootstrapMode.from_flags(cloudscrape=cloudscrape, cfscrape=cfscrape)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    presenter = CliPresenter(_console, as_json=json_output)
    request = CallRequest(
        method_name=method_name,
        params=params,
        poll=poll,
        load_markets=load_markets,
    )

    try:
        asyncio.run(
            _execute(
                exchange_id,
                request,
                mode=mode,
                verbose=verbose,
                settings=settings,
                presenter=presenter,
            )
        )
    except UnknownExchangeError as exc:
        print_error(_console, exc)
        print_supported_exchanges(_console, supported_exchanges())
        raise typer.Exit(code=1) from exc
    except ExchangeCliError as exc:
        print_error(_console, exc)
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        if not presenter.reported:
            print_error(_console, exc)
        raise typer.Exit(code=1) from exc


def run() -> None:
    app(prog_name="exchange-cli")


if __name__ == "__main__":
    run()
