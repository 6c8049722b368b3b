from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import json
import logging
import time

import uvicorn

from backend.contabilidad.api import eventos
from backend.contabilidad.seed import seed
from backend.contabilidad.settings import CORS_ORIGINS, HOST, LOG_FORMAT, LOG_LEVEL, PORT, SEED_DEMO
from backend.contabilidad.store import EventStore
from backend.contabilidad.utils.respuestas import datos_invalidos
from backend.contabilidad.validacion import violaciones_de_peticion

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

log = logging.getLogger("peticiones")

# Para /health: segundos desde que arrancó el proceso
_ARRANQUE = time.monotonic()


def create_app(store: Optional[EventStore] = None, seed_demo: bool = SEED_DEMO) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # SEED idempotente (solo si el almacén está vacío)
        if seed_demo:
            seed(app.state.store)
        yield

    app = FastAPI(title="Contabilidad API", lifespan=lifespan)
    app.state.store = store if store is not None else EventStore()

    # CORS para Vite
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_peticiones(request: Request, call_next):
        log.info("%s %s query=%s", request.method, request.url.path, json.dumps(dict(request.query_params)))
        return await call_next(request)

    # JSON mal formado o cuerpo que no es un objeto -> mismo sobre BR que el resto
    @app.exception_handler(RequestValidationError)
    async def peticion_invalida(request: Request, exc: RequestValidationError):
        log.info("Petición inválida %s %s: %s", request.method, request.url.path, exc.errors())
        return datos_invalidos(violaciones_de_peticion(list(exc.errors())))

    @app.get("/health")
    def health():
        return {"status": "ok", "uptime": time.monotonic() - _ARRANQUE}

    app.include_router(eventos.router, prefix="/api")
    return app


app = create_app()


def main():
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
