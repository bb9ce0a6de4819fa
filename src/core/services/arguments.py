"""Coerción de parámetros de línea de comandos.

Cada token se convierte de forma independiente (no mira a sus vecinos):

1. `undefined`            -> `UNDEFINED` (argumento omitido)
2. empieza por `{` o `[`  -> JSON estricto (error fatal si no es válido)
3. contiene alguna letra  -> el mismo string
4. resto                  -> número (prefijo numérico; NaN si no hay ninguno)

`UNDEFINED` no llega nunca al método: `bind_arguments` lo sustituye por el
valor por defecto del parámetro en esa posición.
"""

from __future__ import annotations

import inspect
import json
import math
import re
from typing import Any, Callable, Iterable, NoReturn

from core.errors import ArgumentParseError

UNDEFINED_TOKEN = "undefined"


class _Undefined:
    """Marca de argumento omitido en la línea de comandos."""

    __slots__ = ()

    def __repr__(self) -> str:
        return UNDEFINED_TOKEN


UNDEFINED = _Undefined()

_LETTER_RE = re.compile(r"[a-zA-Z]")
# Exponents never reach here: a token containing `e` is kept as a string.
_NUMERIC_PREFIX_RE = re.compile(r"^\s*(?P<literal>[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+))")

_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def parse_numeric(token: str) -> int | float:
    """Parse the longest leading decimal literal of `token`.

    Integral literals become `int`, literals with a fraction become `float`.
    No numeric prefix at all yields NaN. Only ASCII digits count.
    """

    match = _NUMERIC_PREFIX_RE.match(token)
    if match is None:
        return math.nan
    literal = match.group("literal")
    if "." not in literal:
        return int(literal)
    return float(literal)


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"{name} is not valid JSON")


def coerce_token(token: str, *, position: int | None = None) -> Any:
    if token == UNDEFINED_TOKEN:
        return UNDEFINED
    if token[:1] in ("{", "["):
        try:
            return json.loads(token, parse_constant=_reject_constant)
        except ValueError as exc:
            where = f" #{position + 1}" if position is not None else ""
            reason = getattr(exc, "msg", str(exc))
            raise ArgumentParseError(
                f"Parameter{where} is not valid JSON: {reason} ({token!r})",
                token=token,
                position=position,
            ) from exc
    if _LETTER_RE.search(token):
        return token
    return parse_numeric(token)


def coerce_arguments(tokens: Iterable[str]) -> list[Any]:
    """Coerce every token; the first malformed JSON token aborts the whole list."""

    return [coerce_token(token, position=index) for index, token in enumerate(tokens)]


def bind_arguments(target: Callable[..., Any], args: list[Any]) -> list[Any]:
    """Validate `args` against the signature of `target` and fill omitted ones.

    Every `UNDEFINED` is replaced by the default of the parameter at that
    position, or `None` when the parameter has no default. Targets without
    an introspectable signature (some builtins) are not checked.
    """

    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError):
        return [None if arg is UNDEFINED else arg for arg in args]
    try:
        signature.bind(*args)
    except TypeError as exc:
        name = getattr(target, "__name__", repr(target))
        raise ArgumentParseError(f"{name}{signature}: {exc}") from exc

    positional = [p for p in signature.parameters.values() if p.kind in _POSITIONAL_KINDS]
    resolved: list[Any] = []
    for index, arg in enumerate(args):
        if arg is UNDEFINED:
            default = positional[index].default if index < len(positional) else inspect.Parameter.empty
            arg = None if default is inspect.Parameter.empty else default
        resolved.append(arg)
    return resolved


def format_arguments(args: Iterable[Any]) -> str:
    """Render coerced arguments for the call banner."""

    parts: list[str] = []
    for arg in args:
        if arg is UNDEFINED or arg is None:
            parts.append(UNDEFINED_TOKEN)
        elif isinstance(arg, (dict, list)):
            parts.append(json.dumps(arg, separators=(",", ":")))
        else:
            parts.append(str(arg))
    return ", ".join(parts)
