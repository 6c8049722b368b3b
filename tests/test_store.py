from concurrent.futures import ThreadPoolExecutor

from backend.contabilidad.store import EventStore

BONO = {"nombre": "Bono", "cantidad": 200, "fecha": "2024-12-10", "tipo": "ingreso"}


def _ids(eventos):
    return [e.id for e in eventos]


def test_create_en_almacen_vacio_asigna_id_1():
    store = EventStore()
    evento = store.create(BONO)
    assert evento.id == 1
    assert store.get_by_id(1) == evento


def test_create_asigna_max_mas_uno(store):
    evento = store.create(BONO)
    assert evento.id == 3
    assert len(store) == 3


def test_create_recalcula_id_tras_borrar_el_ultimo(store):
    store.delete(2)
    assert store.create(BONO).id == 2


def test_create_no_reutiliza_ids_vivos(store):
    store.delete(1)
    nuevo = store.create(BONO)
    assert nuevo.id == 3
    ids = _ids(store.list_all()[0])
    assert len(ids) == len(set(ids))


def test_ids_unicos_en_secuencias_de_altas_y_bajas():
    store = EventStore()
    for i in range(20):
        store.create(BONO)
        if i % 3 == 0:
            store.delete(store.list_all()[0][0].id)
        ids = _ids(store.list_all()[0])
        assert len(ids) == len(set(ids))


def test_round_trip_create_get(store):
    campos = dict(BONO, descripcion="Extra", adjunto="recibo-12.pdf")
    creado = store.create(campos)
    leido = store.get_by_id(creado.id)
    assert leido.model_dump() == {"id": creado.id, **campos}


def test_list_all_mantiene_orden_de_insercion(store):
    store.create(BONO)
    eventos, total = store.list_all()
    assert _ids(eventos) == [1, 2, 3]
    assert total == 3


def test_list_filtra_por_tipo(store):
    eventos, total = store.list(tipo="egreso")
    assert _ids(eventos) == [2]
    assert total == 1
    assert all(e.tipo == "egreso" for e in eventos)


def test_list_combina_tipo_y_mes(store):
    store.create({"nombre": "Enero", "cantidad": 10, "fecha": "2025-01-03", "tipo": "ingreso"})
    eventos, total = store.list(tipo="ingreso", mes="2024-12")
    assert _ids(eventos) == [1]
    assert total == 1

    eventos, total = store.list(mes="2025-01")
    assert _ids(eventos) == [3]


def test_list_pagina_y_total_filtrado():
    store = EventStore()
    for dia in range(1, 26):
        store.create({"nombre": f"Gasto {dia}", "cantidad": dia, "fecha": f"2024-11-{dia:02d}", "tipo": "egreso"})
    store.create({"nombre": "Sueldo", "cantidad": 1000, "fecha": "2024-11-30", "tipo": "ingreso"})

    eventos, total = store.list(tipo="egreso", page=3, limit=10)
    assert total == 25
    assert _ids(eventos) == list(range(21, 26))

    eventos, total = store.list(page=2, limit=5)
    assert _ids(eventos) == [6, 7, 8, 9, 10]
    assert total == 26


def test_list_pagina_fuera_de_rango_devuelve_vacio(store):
    eventos, total = store.list(page=5, limit=10)
    assert eventos == []
    assert total == 2


def test_update_solo_cambia_lo_presente(store):
    antes = store.get_by_id(2)
    actualizado = store.update(2, {"cantidad": 650})
    assert actualizado.cantidad == 650
    assert actualizado.model_dump(exclude={"cantidad"}) == antes.model_dump(exclude={"cantidad"})
    assert store.get_by_id(2) == actualizado


def test_update_no_cambia_el_id(store):
    actualizado = store.update(1, {"id": 99, "nombre": "Sueldo"})
    assert actualizado.id == 1
    assert store.get_by_id(99) is None


def test_update_inexistente(store):
    assert store.update(42, {"cantidad": 1}) is None
    assert len(store) == 2


def test_delete_devuelve_el_evento_borrado(store):
    borrado = store.delete(1)
    assert borrado.nombre == "Sueldo diciembre"
    assert _ids(store.list_all()[0]) == [2]
    assert store.get_by_id(1) is None


def test_delete_inexistente_no_toca_la_coleccion(store):
    antes = store.list_all()
    assert store.delete(42) is None
    assert store.list_all() == antes


def test_lo_devuelto_no_cambia_con_actualizaciones_posteriores(store):
    leido = store.get_by_id(1)
    store.update(1, {"nombre": "Otro"})
    assert leido.nombre == "Sueldo diciembre"


def test_escenario_completo(store):
    eventos, total = store.list(tipo="egreso")
    assert _ids(eventos) == [2] and total == 1

    assert store.create(BONO).id == 3

    renta = store.update(2, {"cantidad": 650})
    assert (renta.nombre, renta.cantidad, renta.fecha, renta.tipo) == ("Renta", 650, "2024-12-01", "egreso")

    assert store.delete(1).id == 1
    assert _ids(store.list_all()[0]) == [2, 3]
    assert store.get_by_id(1) is None


def test_altas_concurrentes_no_duplican_ids():
    store = EventStore()
    with ThreadPoolExecutor(max_workers=8) as pool:
        creados = list(pool.map(lambda _: store.create(BONO), range(200)))
    ids = [e.id for e in creados]
    assert sorted(ids) == list(range(1, 201))


def test_cantidades_enteras_se_serializan_como_int(store):
    assert store.get_by_id(1).model_dump()["cantidad"] == 1500
    assert isinstance(store.get_by_id(1).model_dump()["cantidad"], int)
    assert store.update(2, {"cantidad": 650.75}).model_dump()["cantidad"] == 650.75
