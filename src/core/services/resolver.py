"""Three-way resolution of a method name on the target client."""

from __future__ import annotations

from core.domain.models import DispatchMode, Resolution

_MISSING = object()


def resolve_method(client: object, name: str) -> Resolution:
    """Classify `name` on `client` as callable, plain data or absent.

    Runs once per invocation, before any call attempt.
    """

    value = getattr(client, name, _MISSING)
    if value is _MISSING:
        return Resolution(name=name, mode=DispatchMode.ABSENT)
    if callable(value):
        return Resolution(name=name, mode=DispatchMode.CALLABLE, target=value)
    return Resolution(name=name, mode=DispatchMode.DATA, target=value)


def client_label(client: object) -> str:
    """Identifier used in banners and messages (`client.id`, else class name)."""

    ident = getattr(client, "id", None)
    if isinstance(ident, str) and ident:
        return ident
    return type(client).__name__
