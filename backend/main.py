"""
API del Censo Diario de Camas Hospitalarias.
FastAPI con WebSocket para actualizaciones en tiempo real.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.config import settings
from app.core.database import create_db_and_tables
from app.utils.logger import configurar_logging

logger = configurar_logging()


# ============================================
# EVENTOS DE INICIO
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info(f"{settings.APP_TITLE} v{settings.APP_VERSION} iniciado ({settings.APP_ENV})")
    if settings.REMOTE_SYNC_ENABLED:
        logger.info(f"Sincronización remota habilitada: {settings.REMOTE_STORE_URL or 'memoria'}")
    yield
    logger.info("Aplicación detenida")


# Crear aplicación
app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)

app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
