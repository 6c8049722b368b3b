from fastapi import APIRouter, Body, Depends, Request
from typing import Any, Dict, List, Optional
import logging

from backend.contabilidad.entidades.evento import Evento
from backend.contabilidad.store import EventStore
from backend.contabilidad.utils.respuestas import Codigo, datos_invalidos, falta_id, no_encontrado, ok
from backend.contabilidad.validacion import (
    Rechazado,
    normalizar_id,
    validar_actualizacion,
    validar_consulta,
    validar_creacion,
    validar_listado,
)

router = APIRouter(prefix="/events", tags=["events"])
log = logging.getLogger("eventos")


def get_store(request: Request) -> EventStore:
    return request.app.state.store


def _json(evento: Evento) -> Dict[str, Any]:
    return evento.model_dump(exclude_none=True)


def _json_lista(eventos: List[Evento]) -> List[Dict[str, Any]]:
    return [_json(e) for e in eventos]


@router.get("/all")
def obtener_todos(store: EventStore = Depends(get_store)):
    eventos, total = store.list_all()
    log.info("GET /api/events/all -> %d eventos", total)
    return ok("All events retrieved successfully!", {"events": _json_lista(eventos), "total": total})


# GET /api/events?tipo=ingreso|egreso&mes=YYYY-MM&page=1&limit=10
@router.get("")
def listar_eventos(request: Request, store: EventStore = Depends(get_store)):
    resultado = validar_listado(request.query_params)
    if isinstance(resultado, Rechazado):
        log.info("Errores de validación (GET /api/events): %s", resultado.errores)
        return datos_invalidos(resultado.errores)

    q = resultado.datos
    eventos, total = store.list(tipo=q["tipo"], mes=q["mes"], page=q["page"], limit=q["limit"])
    return ok(
        "Events retrieved successfully!",
        {"events": _json_lista(eventos), "page": q["page"], "limit": q["limit"], "total": total},
    )


# GET /api/events/query?id=1
@router.get("/query")
def consultar_evento(request: Request, store: EventStore = Depends(get_store)):
    resultado = validar_consulta(request.query_params)
    if isinstance(resultado, Rechazado):
        log.info("Falta el id (GET /api/events/query)")
        return falta_id()

    evento_id = normalizar_id(resultado.datos["id"])
    evento = store.get_by_id(evento_id) if evento_id is not None else None
    log.info("Buscando evento id=%s -> %s", resultado.datos["id"], "FOUND" if evento else "NOT FOUND")

    if evento is None:
        return no_encontrado()
    return ok("Event found!", {"event": _json(evento)})


@router.post("")
def crear_evento(payload: Optional[Dict[str, Any]] = Body(default=None), store: EventStore = Depends(get_store)):
    resultado = validar_creacion(payload or {})
    if isinstance(resultado, Rechazado):
        log.info("Errores de validación (POST /api/events): %s", resultado.errores)
        return datos_invalidos(resultado.errores)

    evento = store.create(resultado.datos)
    log.info("Evento creado: %s", evento)
    return ok("Event created successfully!", {"event": _json(evento)}, status_code=201)


@router.put("/{evento_id}")
def actualizar_evento(evento_id: str, payload: Optional[Dict[str, Any]] = Body(default=None), store: EventStore = Depends(get_store)):
    resultado = validar_actualizacion(evento_id, payload or {})
    if isinstance(resultado, Rechazado):
        log.info("Errores de validación (PUT /api/events/%s): %s", evento_id, resultado.errores)
        return datos_invalidos(resultado.errores)

    id_normalizado = normalizar_id(evento_id)
    evento = store.update(id_normalizado, resultado.datos) if id_normalizado is not None else None
    if evento is None:
        return no_encontrado()
    log.info("Evento actualizado: %s", evento)
    return ok("Event updated successfully!", {"event": _json(evento)})


@router.delete("/{evento_id}")
def eliminar_evento(evento_id: str, store: EventStore = Depends(get_store)):
    id_normalizado = normalizar_id(evento_id)
    evento = store.delete(id_normalizado) if id_normalizado is not None else None
    if evento is None:
        # Aquí el código es PF, no NF
        return no_encontrado(Codigo.PF)
    log.info("Evento eliminado: %s", evento)
    return ok("Event deleted successfully!", {"event": _json(evento)})
