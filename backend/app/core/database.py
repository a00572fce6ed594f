"""
Configuración de Base de Datos.
Gestión de conexiones y sesiones SQLModel (almacenamiento local).
"""
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy import text
from typing import Any, Dict, Generator
import logging

from app.config import settings

logger = logging.getLogger("censo_camas.database")


# Crear engine con configuración según tipo de base de datos
connect_args = {}
if "sqlite" in settings.DATABASE_URL:
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    connect_args=connect_args
)


def create_db_and_tables() -> None:
    """
    Crea todas las tablas en la base de datos.
    Se llama al inicio de la aplicación.
    """
    # Importar modelos para registrar las tablas en la metadata
    from app.models import documento  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    """
    Generador de sesiones para dependency injection en FastAPI.

    Uso:
        @app.get("/endpoint")
        def endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session


def check_database_health() -> Dict[str, Any]:
    """
    Verifica la conexión con la base de datos.

    Returns:
        Diccionario con status ("healthy" | "unhealthy") y detalle
    """
    try:
        with Session(engine) as session:
            session.execute(text("SELECT 1"))
        return {"status": "healthy", "url": engine.url.render_as_string(hide_password=True)}
    except Exception as e:
        logger.error(f"Base de datos no disponible: {e}")
        return {"status": "unhealthy", "error": str(e)}
