"""
Router principal que agrupa todos los sub-routers.
"""
from fastapi import APIRouter

from app.api import health
from app.api import registros
from app.api import camas
from app.api import cunas
from app.api import altas
from app.api import traslados
from app.api import cma
from app.api import enfermeria
from app.api import estadisticas
from app.api import exportacion
from app.api import demo
from app.api import websocket

api_router = APIRouter()

# ============================================
# INCLUIR TODOS LOS ROUTERS
# ============================================

api_router.include_router(health.router)

api_router.include_router(
    registros.router,
    prefix="/registros",
    tags=["Registros"]
)

api_router.include_router(
    camas.router,
    prefix="/registros/{fecha}/camas",
    tags=["Camas"]
)

api_router.include_router(
    cunas.router,
    prefix="/registros/{fecha}/camas/{cama_id}/cuna",
    tags=["Cuna Clínica"]
)

api_router.include_router(
    altas.router,
    prefix="/registros/{fecha}/altas",
    tags=["Altas"]
)

api_router.include_router(
    traslados.router,
    prefix="/registros/{fecha}/traslados",
    tags=["Traslados"]
)

api_router.include_router(
    cma.router,
    prefix="/registros/{fecha}/cma",
    tags=["CMA"]
)

api_router.include_router(
    enfermeria.router,
    prefix="/enfermeria",
    tags=["Enfermería"]
)

api_router.include_router(
    estadisticas.router,
    prefix="/estadisticas",
    tags=["Estadísticas"]
)

api_router.include_router(
    exportacion.router,
    prefix="/exportacion",
    tags=["Exportación"]
)

api_router.include_router(
    demo.router,
    prefix="/demo",
    tags=["Demo"]
)

api_router.include_router(
    websocket.router,
    tags=["WebSocket"]
)
