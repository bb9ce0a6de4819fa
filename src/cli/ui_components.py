"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El pipeline del Core solo emite `InvocationOutcome`; aquí se decide cómo se ve.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from rich.console import Console
from rich.pretty import Pretty
from rich.table import Table
from rich.text import Text

from adapters.json_exporter import dumps_result
from core.domain.models import (
    ClassifiedFailure,
    FailureKind,
    InvocationOutcome,
    Success,
    UnclassifiedFailure,
)

SEPARATOR = "-------------------------------------------"
FAILURE_SEPARATOR = "---------------------------------------------------"

USAGE_EXAMPLES = (
    "okcoinusd fetchOHLCV BTC/USD 15m",
    "bitfinex fetchBalance",
    "kraken fetchOrderBook ETH/BTC",
)

_FAILURE_STYLES = {
    FailureKind.EXCHANGE_ERROR: "red",
    FailureKind.NETWORK_ERROR: "yellow",
}


def print_supported_exchanges(console: Console, exchanges: Sequence[str]) -> None:
    console.print("Supported exchanges:", Text(", ".join(exchanges), style="green"))


def print_usage(console: Console, prog: str, exchanges: Sequence[str]) -> None:
    """Imprime el uso, ejemplos y la lista de exchanges soportados."""

    console.print("This is an example of a basic command-line interface to all exchanges")
    console.print(
        "Usage:",
        prog,
        Text("id", style="green"),
        Text("method", style="yellow"),
        Text('"param1" param2 "param3" param4 ...', style="blue"),
    )
    console.print("Examples:")
    for example in USAGE_EXAMPLES:
        console.print(prog, example, markup=False)
    print_supported_exchanges(console, exchanges)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def build_result_table(rows: Sequence[Any]) -> Table:
    """Tabla para listas de objetos (claves) o de filas (posiciones)."""

    table = Table(show_lines=False)
    if isinstance(rows[0], dict):
        columns: list[Any] = []
        for row in rows:
            if isinstance(row, dict):
                columns.extend(key for key in row if key not in columns)
        for column in columns:
            table.add_column(str(column), overflow="fold")
        for row in rows:
            row = row if isinstance(row, dict) else {}
            table.add_row(*(_cell(row.get(column)) for column in columns))
        return table

    width = max(len(row) if isinstance(row, (list, tuple)) else 1 for row in rows)
    for index in range(width):
        table.add_column(str(index), overflow="fold")
    for row in rows:
        cells = list(row) if isinstance(row, (list, tuple)) else [row]
        cells += [None] * (width - len(cells))
        table.add_row(*(_cell(cell) for cell in cells))
    return table


def print_human_readable(console: Console, result: Any) -> None:
    if isinstance(result, (list, tuple)):
        rows_are_objects = bool(result) and (result[0] is None or isinstance(result[0], (dict, list, tuple)))
        for item in result:
            if rows_are_objects:
                console.print(SEPARATOR, markup=False)
            console.print(Pretty(item))
        if rows_are_objects:
            console.print(build_result_table(result))
        return

    console.print(Pretty(result, max_depth=10, max_length=1000))


class CliPresenter:
    """Recibe los outcomes del pipeline y los pinta en la consola.

    `reported` acumula los fallos ya notificados para que la capa de
    comandos no vuelva a imprimir la excepción propagada.
    """

    def __init__(self, console: Console, *, as_json: bool = False) -> None:
        self.console = console
        self.as_json = as_json
        self.reported: list[InvocationOutcome] = []

    def call_started(self, label: str) -> None:
        self.console.print(label, markup=False, highlight=False)

    def outcome(self, outcome: InvocationOutcome) -> None:
        if isinstance(outcome, Success):
            self.render(outcome.value)
            return
        self.report_failure(outcome)

    def render(self, value: Any) -> None:
        if self.as_json:
            self.console.print(dumps_result(value), markup=False, highlight=False, soft_wrap=True)
            return
        print_human_readable(self.console, value)

    def report_failure(self, failure: ClassifiedFailure | UnclassifiedFailure) -> None:
        if isinstance(failure, ClassifiedFailure):
            style = _FAILURE_STYLES[failure.kind]
        else:
            style = "bold red"
        self.console.print(Text(f"{failure.error_type} {failure.message}", style=style))
        self.console.print(Text(FAILURE_SEPARATOR, style="dim"))
        self.reported.append(failure)


def print_error(console: Console, exc: BaseException) -> None:
    console.print(Text(f"{type(exc).__name__}: {exc}", style="bold red"))
