from pydantic import BaseModel, Field, field_serializer, field_validator
from datetime import date
from typing import Literal, Optional
import re

from backend.contabilidad.settings import LIMIT_DEFAULT, LIMIT_MAX, PAGE_DEFAULT

# ingreso -> entra dinero
# egreso  -> sale dinero
OneWordTipo = Literal["ingreso", "egreso"]

FECHA_INVALIDA = "Date must be ISO (YYYY-MM-DD)"
CANTIDAD_INVALIDA = "Amount must be > 0"

_FECHA_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Mensaje cuando un campo opcional del PUT llega como null
MENSAJES_NULO = {
    "nombre": "Name must be a string!",
    "descripcion": "Description must be a string!",
    "cantidad": CANTIDAD_INVALIDA,
    "fecha": FECHA_INVALIDA,
    "tipo": "Invalid type",
    "adjunto": "Invalid value",
}


def fecha_iso(v):
    """YYYY-MM-DD y además una fecha real del calendario (no 2024-02-30)."""
    if not isinstance(v, str) or not _FECHA_RE.match(v):
        raise ValueError(FECHA_INVALIDA)
    try:
        date.fromisoformat(v)
    except ValueError:
        raise ValueError(FECHA_INVALIDA) from None
    return v


def cantidad_numerica(v):
    # bool es int en Python, pero no es una cantidad
    if isinstance(v, bool):
        raise ValueError(CANTIDAD_INVALIDA)
    return v


class Evento(BaseModel):
    id: int
    nombre: str
    descripcion: Optional[str] = None
    cantidad: float
    fecha: str
    tipo: OneWordTipo
    adjunto: Optional[str] = None

    @field_serializer("cantidad")
    def cantidad_json(self, v):
        # 1500.0 -> 1500 en el JSON
        return int(v) if float(v).is_integer() else v


class EventoCreate(BaseModel):
    # Orden de los campos = orden en que se informan los errores
    nombre: str = Field(min_length=1)
    cantidad: float = Field(gt=0, allow_inf_nan=False)
    fecha: str
    tipo: OneWordTipo
    descripcion: Optional[str] = None
    adjunto: Optional[str] = None

    @field_validator("fecha", mode="before")
    @classmethod
    def validar_fecha(cls, v):
        return fecha_iso(v)

    @field_validator("cantidad", mode="before")
    @classmethod
    def validar_cantidad(cls, v):
        return cantidad_numerica(v)


class EventoUpdate(BaseModel):
    # Todo opcional; lo que venga se valida igual que al crear.
    # Un null explícito cuenta como presente y se rechaza.
    nombre: Optional[str] = None
    cantidad: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    fecha: Optional[str] = None
    tipo: Optional[OneWordTipo] = None
    descripcion: Optional[str] = None
    adjunto: Optional[str] = None

    @field_validator("nombre", "cantidad", "fecha", "tipo", "descripcion", "adjunto", mode="before")
    @classmethod
    def no_nulo(cls, v, info):
        if v is None:
            raise ValueError(MENSAJES_NULO[info.field_name])
        if info.field_name == "fecha":
            return fecha_iso(v)
        if info.field_name == "cantidad":
            return cantidad_numerica(v)
        return v


class EventosQuery(BaseModel):
    tipo: Optional[OneWordTipo] = None
    mes: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}$")
    page: int = Field(default=PAGE_DEFAULT, ge=1)
    limit: int = Field(default=LIMIT_DEFAULT, ge=1, le=LIMIT_MAX)
