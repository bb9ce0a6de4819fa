import math

import pytest

from core.errors import ArgumentParseError
from core.services.arguments import (
    UNDEFINED,
    bind_arguments,
    coerce_arguments,
    coerce_token,
    format_arguments,
    parse_numeric,
)


@pytest.mark.parametrize("tokens", [["undefined"], ["BTC/USD", "undefined"], ["undefined", "5", "undefined"]])
def test_undefined_is_marked_at_any_position(tokens) -> None:
    result = coerce_arguments(tokens)
    for token, value in zip(tokens, result):
        if token == "undefined":
            assert value is UNDEFINED


def test_json_tokens_are_parsed_exactly() -> None:
    assert coerce_token('{"type": "limit", "nested": {"a": [1, 2]}}') == {
        "type": "limit",
        "nested": {"a": [1, 2]},
    }
    assert coerce_token('["BTC/USD", 1.5, null]') == ["BTC/USD", 1.5, None]


def test_invalid_json_aborts_the_whole_argument_list() -> None:
    with pytest.raises(ArgumentParseError) as excinfo:
        coerce_arguments(["BTC/USD", "{not json", "15m"])
    assert excinfo.value.position == 1
    assert excinfo.value.token == "{not json"


@pytest.mark.parametrize("token", ["[NaN]", '{"a": Infinity}', "[-Infinity]"])
def test_non_standard_json_constants_are_rejected(token: str) -> None:
    with pytest.raises(ArgumentParseError, match="not valid JSON") as excinfo:
        coerce_arguments(["BTC/USD", token])
    assert excinfo.value.position == 1


@pytest.mark.parametrize("token", ["BTC/USD", "15m", "ETH/BTC", "1e5", "Infinity", "buy"])
def test_tokens_with_letters_pass_through(token: str) -> None:
    assert coerce_token(token) == token


def test_numeric_tokens() -> None:
    assert coerce_token("15") == 15
    assert isinstance(coerce_token("15"), int)
    assert coerce_token("-1") == -1
    assert coerce_token("0.25") == 0.25
    assert coerce_token(".5") == 0.5


def test_numeric_prefix_semantics() -> None:
    assert parse_numeric("1.5.3") == 1.5
    assert parse_numeric("12-") == 12
    assert parse_numeric("  7") == 7


@pytest.mark.parametrize("token", ["١٥", "１２", "٣.٥"])
def test_non_ascii_digits_are_not_numbers(token: str) -> None:
    assert math.isnan(coerce_token(token))


@pytest.mark.parametrize("token", ["$", "", "-", "/", "%%"])
def test_letterless_garbage_becomes_nan(token: str) -> None:
    value = coerce_token(token)
    assert isinstance(value, float)
    assert math.isnan(value)


def test_coercion_is_per_token_and_order_preserving() -> None:
    tokens = ["BTC/USD", "15m", "undefined", "100", '{"a": 1}']
    assert coerce_arguments(tokens) == ["BTC/USD", "15m", UNDEFINED, 100, {"a": 1}]
    assert coerce_arguments([]) == []


def test_bind_arguments_rejects_too_many_positionals() -> None:
    async def fetch_balance(params=None):
        return {}

    bind_arguments(fetch_balance, [])
    bind_arguments(fetch_balance, [{"type": "spot"}])
    with pytest.raises(ArgumentParseError, match="fetch_balance"):
        bind_arguments(fetch_balance, [1, 2])


def test_bind_arguments_accepts_bound_methods(fake_exchange) -> None:
    bind_arguments(fake_exchange.fetchOHLCV, ["BTC/USD", "15m"])
    with pytest.raises(ArgumentParseError):
        bind_arguments(fake_exchange.fetchOHLCV, [])


def test_undefined_takes_the_parameter_default() -> None:
    params_default: dict = {}

    async def fetch_ohlcv(symbol, timeframe="1m", since=None, limit=None, params=params_default):
        return []

    args = coerce_arguments(["BTC/USD", "undefined", "undefined", "10", "undefined"])
    resolved = bind_arguments(fetch_ohlcv, args)

    assert resolved == ["BTC/USD", "1m", None, 10, {}]
    assert resolved[4] is params_default


def test_undefined_without_default_becomes_none() -> None:
    def create_order(symbol, side, *extra):
        return None

    assert bind_arguments(create_order, [UNDEFINED, "buy", UNDEFINED]) == [None, "buy", None]
    assert bind_arguments(len, [UNDEFINED]) == [None]


def test_format_arguments() -> None:
    assert format_arguments(["BTC/USD", UNDEFINED, 5, {"a": 1}]) == 'BTC/USD, undefined, 5, {"a":1}'
