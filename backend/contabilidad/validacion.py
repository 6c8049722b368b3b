"""
Validación de peticiones antes de llegar al almacén.

Cada operación tiene su función, que devuelve ``Aceptado`` (con los valores
ya limpios: números como números, page/limit como enteros) o ``Rechazado``
(con todas las violaciones, en orden de campo). Nunca lanza excepciones.

Las violaciones tienen la forma que ya consumía el frontend:
``{"type": "field", "value": ..., "msg": ..., "path": ..., "location": ...}``.
"""
from typing import Any, Dict, List, Mapping, Optional, Type, Union
import math

from pydantic import BaseModel, ValidationError

from backend.contabilidad.entidades.evento import EventoCreate, EventosQuery, EventoUpdate

CAMPOS_EVENTO = ("nombre", "descripcion", "cantidad", "fecha", "tipo", "adjunto")
CAMPOS_QUERY = ("tipo", "mes", "page", "limit")

ID_REQUERIDO = "Event ID is required!"
VALOR_INVALIDO = "Invalid value"

# Campo obligatorio ausente o vacío
REQUERIDO = {
    "nombre": "Name is required",
    "cantidad": "Amount is required",
    "fecha": "Date is required",
    "tipo": "Type is required",
}

# Cualquier otro fallo del campo
INVALIDO = {
    "body": {
        "nombre": "Name must be a string!",
        "descripcion": "Description must be a string!",
        "cantidad": "Amount must be > 0",
        "fecha": "Date must be ISO (YYYY-MM-DD)",
        "tipo": "Invalid type",
        "adjunto": VALOR_INVALIDO,
    },
    "query": {
        "tipo": 'Tipo must be "ingreso" or "egreso"',
        "mes": "Mes must be in YYYY-MM format",
        "page": VALOR_INVALIDO,
        "limit": VALOR_INVALIDO,
    },
}


class Violacion(BaseModel):
    type: str = "field"
    value: Any = None
    msg: str
    path: str
    location: str

    def como_json(self) -> Dict[str, Any]:
        # value solo sale si llegó algo (aunque sea null)
        datos = self.model_dump()
        if "value" not in self.model_fields_set:
            datos.pop("value")
        elif isinstance(self.value, float) and not math.isfinite(self.value):
            # JSON no admite inf/nan
            datos["value"] = str(self.value)
        return datos


class Aceptado(BaseModel):
    datos: Dict[str, Any] = {}
    ok: bool = True


class Rechazado(BaseModel):
    errores: List[Violacion] = []
    ok: bool = False


Resultado = Union[Aceptado, Rechazado]


def normalizar_id(valor: Any) -> Optional[int]:
    """
    Convierte el id de la ruta/query a int. "3", " 3 ", "3.0" y 3 valen;
    cualquier otra cosa devuelve None (no hay evento con ese id).
    """
    if isinstance(valor, bool) or valor is None:
        return None
    if isinstance(valor, int):
        return valor
    try:
        numero = float(str(valor).strip())
    except ValueError:
        return None
    if not numero.is_integer():
        return None
    return int(numero)


def validar_listado(params: Mapping[str, Any]) -> Resultado:
    """GET /api/events?tipo=&mes=&page=&limit="""
    entrada = {k: params[k] for k in CAMPOS_QUERY if k in params}
    return _validar(EventosQuery, entrada, "query", requeridos=())


def validar_consulta(params: Mapping[str, Any]) -> Resultado:
    """GET /api/events/query?id= — solo comprueba que venga el id."""
    valor = params.get("id")
    if valor is None or valor == "":
        extra = {"value": valor} if "id" in params else {}
        return Rechazado(errores=[Violacion(msg=ID_REQUERIDO, path="id", location="query", **extra)])
    return Aceptado(datos={"id": valor})


def validar_creacion(body: Mapping[str, Any]) -> Resultado:
    entrada = {k: body[k] for k in CAMPOS_EVENTO if k in body}
    return _validar(EventoCreate, entrada, "body", requeridos=tuple(REQUERIDO))


def validar_actualizacion(evento_id: Any, body: Mapping[str, Any]) -> Resultado:
    errores = []
    if evento_id is None or str(evento_id) == "":
        errores.append(Violacion(value=evento_id, msg=ID_REQUERIDO, path="id", location="params"))

    entrada = {k: body[k] for k in CAMPOS_EVENTO if k in body}
    resultado = _validar(EventoUpdate, entrada, "body", requeridos=())
    if isinstance(resultado, Rechazado):
        errores.extend(resultado.errores)
    if errores:
        return Rechazado(errores=errores)
    return resultado


def _validar(modelo: Type[BaseModel], entrada: Dict[str, Any], location: str, requeridos) -> Resultado:
    try:
        instancia = modelo.model_validate(entrada)
    except ValidationError as exc:
        errores = [_violacion(err, entrada, location, requeridos) for err in exc.errors()]
        return Rechazado(errores=errores)
    # exclude_unset: en el PUT solo cuenta lo que ha venido
    if location == "body":
        return Aceptado(datos=instancia.model_dump(exclude_unset=True))
    return Aceptado(datos=instancia.model_dump())


def _violacion(err: Dict[str, Any], entrada: Dict[str, Any], location: str, requeridos) -> Violacion:
    campo = str(err["loc"][0]) if err.get("loc") else ""
    valor = entrada.get(campo)

    if campo in requeridos and (campo not in entrada or valor is None or valor == ""):
        msg = REQUERIDO[campo]
    elif err["type"] == "value_error":
        msg = str(err["ctx"]["error"])
    else:
        msg = INVALIDO[location].get(campo, VALOR_INVALIDO)
    extra = {"value": valor} if campo in entrada else {}
    return Violacion(msg=msg, path=campo, location=location, **extra)


def violaciones_de_peticion(errors: List[Dict[str, Any]]) -> List[Violacion]:
    """Errores de FastAPI (JSON mal formado, cuerpo que no es un objeto) como violaciones."""
    violaciones = []
    for err in errors:
        loc = list(err.get("loc") or ())
        location = str(loc[0]) if loc else "body"
        path = ".".join(str(p) for p in loc[1:])
        extra = {"value": err["input"]} if "input" in err else {}
        violaciones.append(Violacion(msg=err.get("msg", VALOR_INVALIDO), path=path, location=location, **extra))
    return violaciones
