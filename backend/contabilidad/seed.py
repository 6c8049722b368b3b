import logging

from backend.contabilidad.store import EventStore

log = logging.getLogger("seed")

EVENTOS_DEMO = [
    {
        "nombre": "Sueldo diciembre",
        "descripcion": "Pago mensual",
        "cantidad": 1500,
        "fecha": "2024-12-05",
        "tipo": "ingreso",
    },
    {
        "nombre": "Renta",
        "descripcion": "Departamento",
        "cantidad": 600,
        "fecha": "2024-12-01",
        "tipo": "egreso",
    },
]


def seed(store: EventStore) -> int:
    """Carga los eventos de ejemplo. Idempotente: si ya hay datos, no hace nada."""
    if len(store) > 0:
        return 0
    for campos in EVENTOS_DEMO:
        store.create(campos)
    log.info("Seed: %d eventos de ejemplo cargados", len(EVENTOS_DEMO))
    return len(EVENTOS_DEMO)
