"""
Endpoints de Health Check.
Estado del almacenamiento local, del almacén remoto y de los clientes conectados.
"""
from datetime import datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from app.config import settings
from app.core.database import check_database_health, get_session
from app.core.websocket_manager import manager
from app.models.enums import EspacioAlmacenamiento
from app.repositories.registro_repo import RegistroRepository

router = APIRouter(
    prefix="/health",
    tags=["health"],
    responses={
        200: {"description": "Sistema saludable"},
        503: {"description": "Almacenamiento local no disponible"}
    }
)


@router.get("", summary="Health Check General", response_model=None)
async def health_check() -> JSONResponse:
    """Retorna 200 si la aplicación está corriendo."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "version": settings.APP_VERSION,
            "environment": settings.APP_ENV
        }
    )


@router.get("/readiness", summary="Readiness Probe", response_model=None)
def readiness_probe(session: Session = Depends(get_session)) -> JSONResponse:
    """
    Verifica el almacenamiento local.

    El almacén remoto solo se informa: si no responde se sigue
    guardando localmente, por lo que no afecta la disponibilidad.
    """
    db_health = check_database_health()
    if db_health.get("status") != "healthy":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "components": {"database": db_health}},
        )

    registros = {
        espacio.value: RegistroRepository(session, espacio).contar()
        for espacio in EspacioAlmacenamiento
    }

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "timestamp": datetime.now().isoformat(),
            "components": {
                "database": db_health,
                "remote_store": {
                    "enabled": settings.REMOTE_SYNC_ENABLED,
                    "url": settings.REMOTE_STORE_URL,
                },
            },
            "registros": registros,
            "websocket_connections": manager.connection_count,
        }
    )
