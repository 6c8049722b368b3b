# backend/contabilidad/utils/respuestas.py
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from backend.contabilidad.validacion import Violacion


class Codigo(str, Enum):
    OK = "OK"  # todo bien
    BR = "BR"  # bad request: datos no válidos
    NF = "NF"  # not found
    PF = "PF"  # falta parámetro / no encontrado al borrar


class Respuesta(BaseModel):
    code: Codigo
    message: str
    data: Optional[Dict[str, Any]] = None
    errors: Optional[List[Dict[str, Any]]] = None


def sobre(status_code: int, code: Codigo, message: str, data=None, errors=None) -> JSONResponse:
    """Monta {code, message, data?, errors?}; las claves vacías no se envían."""
    extra = {k: v for k, v in (("data", data), ("errors", errors)) if v is not None}
    cuerpo = Respuesta(code=code, message=message, **extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(cuerpo, exclude_unset=True))


def ok(message: str, data: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    return sobre(status_code, Codigo.OK, message, data=jsonable_encoder(data))


def datos_invalidos(errores: List[Violacion]) -> JSONResponse:
    return sobre(400, Codigo.BR, "Invalid Data", errors=[e.como_json() for e in errores])


def falta_id() -> JSONResponse:
    # Se responde 200 con PF; así lo espera el frontend
    return sobre(200, Codigo.PF, "Event ID is required!")


def no_encontrado(code: Codigo = Codigo.NF) -> JSONResponse:
    return sobre(404, code, "Event not found!")
