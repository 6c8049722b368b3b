# backend/contabilidad/settings.py
# Cambia estos valores a tu configuración local

HOST = "0.0.0.0"
PORT = 3030

# CORS para Vite
CORS_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(levelname)s %(name)s:%(lineno)d - %(message)s"

# Paginación de GET /api/events
PAGE_DEFAULT = 1
LIMIT_DEFAULT = 10
LIMIT_MAX = 100

# Carga los dos eventos de ejemplo al arrancar
SEED_DEMO = True
