from core.domain.models import DispatchMode
from core.services.resolver import client_label, resolve_method


def test_callable_resolution(fake_exchange) -> None:
    resolution = resolve_method(fake_exchange, "fetchBalance")
    assert resolution.mode is DispatchMode.CALLABLE
    assert resolution.target == fake_exchange.fetchBalance


def test_data_resolution(fake_exchange) -> None:
    resolution = resolve_method(fake_exchange, "timeframes")
    assert resolution.mode is DispatchMode.DATA
    assert resolution.target == {"1m": "1", "15m": "15"}


def test_absent_resolution(fake_exchange) -> None:
    resolution = resolve_method(fake_exchange, "someUnknownMethod")
    assert resolution.mode is DispatchMode.ABSENT
    assert resolution.target is None


def test_none_valued_attribute_is_data_not_absent(fake_exchange) -> None:
    fake_exchange.apiKey = None
    assert resolve_method(fake_exchange, "apiKey").mode is DispatchMode.DATA


def test_client_label(fake_exchange) -> None:
    assert client_label(fake_exchange) == "fakex"
    assert client_label(object()) == "object"
