"""
Almacén en memoria de los eventos contables.

Una sola instancia por aplicación (se crea en ``create_app`` y llega a las
rutas con ``Depends(get_store)``). Todas las operaciones pasan por el mismo
candado: el id se calcula como ``max(ids) + 1`` leyendo la colección entera,
así que cálculo e inserción tienen que ir juntos.

Las lecturas devuelven copias: lo que sale del almacén no cambia aunque luego
se actualice el evento.
"""
from threading import RLock
from typing import Any, Dict, List, Optional, Tuple
import logging

from backend.contabilidad.entidades.evento import Evento
from backend.contabilidad.settings import LIMIT_DEFAULT, PAGE_DEFAULT

log = logging.getLogger("store")


class EventStore:
    def __init__(self, eventos: Optional[List[Evento]] = None):
        self._lock = RLock()
        self._eventos: List[Evento] = [e.model_copy() for e in (eventos or [])]

    def __len__(self) -> int:
        with self._lock:
            return len(self._eventos)

    # ---------- Lecturas ----------
    def list_all(self) -> Tuple[List[Evento], int]:
        with self._lock:
            eventos = [e.model_copy() for e in self._eventos]
        return eventos, len(eventos)

    def list(
        self,
        tipo: Optional[str] = None,
        mes: Optional[str] = None,
        page: int = PAGE_DEFAULT,
        limit: int = LIMIT_DEFAULT,
    ) -> Tuple[List[Evento], int]:
        """Filtra por tipo y/o mes (YYYY-MM) y pagina. El total es el filtrado."""
        with self._lock:
            data = list(self._eventos)

        if tipo:
            data = [e for e in data if e.tipo == tipo]
        if mes:
            data = [e for e in data if e.fecha[:7] == mes]

        total = len(data)
        start = (page - 1) * limit
        items = [e.model_copy() for e in data[start:start + limit]]
        return items, total

    def get_by_id(self, evento_id: int) -> Optional[Evento]:
        with self._lock:
            evento = self._buscar(evento_id)
            return evento.model_copy() if evento is not None else None

    # ---------- Escrituras ----------
    def create(self, campos: Dict[str, Any]) -> Evento:
        with self._lock:
            nuevo_id = max((e.id for e in self._eventos), default=0) + 1
            evento = Evento(id=nuevo_id, **campos)
            self._eventos.append(evento)
            log.debug("Evento %s asignado (total=%d)", nuevo_id, len(self._eventos))
            return evento.model_copy()

    def update(self, evento_id: int, cambios: Dict[str, Any]) -> Optional[Evento]:
        """Sobrescribe solo las claves presentes en ``cambios``; el id no se toca."""
        cambios = {k: v for k, v in cambios.items() if k != "id"}
        with self._lock:
            for i, evento in enumerate(self._eventos):
                if evento.id == evento_id:
                    actualizado = evento.model_copy(update=cambios)
                    self._eventos[i] = actualizado
                    return actualizado.model_copy()
        return None

    def delete(self, evento_id: int) -> Optional[Evento]:
        with self._lock:
            evento = self._buscar(evento_id)
            if evento is None:
                return None
            self._eventos = [e for e in self._eventos if e.id != evento_id]
            return evento

    def clear(self) -> None:
        with self._lock:
            self._eventos = []

    def _buscar(self, evento_id: int) -> Optional[Evento]:
        return next((e for e in self._eventos if e.id == evento_id), None)
