"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los resultados de cada iteración del loop se describen con un esquema
  explícito (variantes etiquetadas) en vez de tuplas sueltas.
- Facilita serializar/inspeccionar un resultado en tests y en `--json`.

Nota:
- Estos modelos describen *qué* ocurrió en una llamada, no *cómo* se hizo.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

HeaderMap = dict[str, str]


class DispatchMode(str, Enum):
    """Resolved category of a method name on the target client."""

    CALLABLE = "callable"
    ABSENT = "absent"
    DATA = "data"


class FailureKind(str, Enum):
    """Reportable categories of a failed invocation."""

    EXCHANGE_ERROR = "exchange-error"
    NETWORK_ERROR = "network-error"


class BootstrapMode(str, Enum):
    """Which challenge-bypass strategy runs before the first call."""

    NONE = "none"
    CLOUDSCRAPE = "cloudscrape"
    CFSCRAPE = "cfscrape"

    @classmethod
    def from_flags(cls, *, cloudscrape: bool, cfscrape: bool) -> "BootstrapMode":
        if cloudscrape and cfscrape:
            raise ValueError("--cloudscrape and --cfscrape are mutually exclusive")
        if cloudscrape:
            return cls.CLOUDSCRAPE
        if cfscrape:
            return cls.CFSCRAPE
        return cls.NONE


class LoopState(str, Enum):
    IDLE = "idle"
    INVOKING = "invoking"
    RENDERING = "rendering"
    TERMINATED = "terminated"


class Resolution(BaseModel):
    """Resultado de resolver un nombre sobre el cliente.

    `target` contiene el callable (modo CALLABLE) o el valor (modo DATA);
    en modo ABSENT siempre es `None`.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str = Field(..., min_length=1, description="Nombre de método/propiedad pedido.")
    mode: DispatchMode = Field(..., description="Modo de despacho resuelto.")
    target: Any = Field(default=None, description="Callable o valor resuelto.")


class Success(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    tag: Literal["success"] = "success"
    value: Any = Field(default=None, description="Valor devuelto por la llamada.")


class ClassifiedFailure(BaseModel):
    """Fallo reconocido por el clasificador (error de exchange o de red)."""

    tag: Literal["classified"] = "classified"
    kind: FailureKind = Field(..., description="Categoría del fallo.")
    error_type: str = Field(..., min_length=1, description="Nombre de la clase de excepción.")
    message: str = Field(default="", description="Mensaje de la excepción.")


class UnclassifiedFailure(BaseModel):
    tag: Literal["unclassified"] = "unclassified"
    error_type: str = Field(..., min_length=1, description="Nombre de la clase de excepción.")
    message: str = Field(default="", description="Mensaje de la excepción.")


InvocationOutcome = Union[Success, ClassifiedFailure, UnclassifiedFailure]
