"""Application-level exception types for exchange-cli."""

from __future__ import annotations


class ExchangeCliError(Exception):
    """Base exception for exchange-cli."""


class ArgumentParseError(ExchangeCliError):
    """Raised when a command-line parameter cannot become a call argument."""

    def __init__(self, message: str, *, token: str | None = None, position: int | None = None) -> None:
        super().__init__(message)
        self.token = token
        self.position = position


class PropertyAbsentError(ExchangeCliError):
    """Raised when the requested method name does not exist on the client."""

    def __init__(self, client_id: str, name: str) -> None:
        super().__init__(f"{client_id}.{name}: no such property")
        self.client_id = client_id
        self.name = name


class HeaderBootstrapError(ExchangeCliError):
    """Raised when a challenge-bypass strategy cannot produce headers."""


class UnknownExchangeError(ExchangeCliError):
    """Raised when the exchange id is not offered by the client library."""

    def __init__(self, exchange_id: str) -> None:
        super().__init__(f"Unknown exchange id: {exchange_id}")
        self.exchange_id = exchange_id


class SettingsFileError(ExchangeCliError):
    """Raised when the keys/settings file is unreadable or malformed."""
