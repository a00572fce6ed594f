"""
Módulo core: funcionalidades centrales del sistema.
"""
from app.core.database import (
    create_db_and_tables,
    get_session,
    check_database_health,
    engine,
)
from app.core.websocket_manager import manager, ConnectionManager
from app.core.exceptions import (
    BaseAppException,
    ValidationError,
    OperacionRechazadaError,
    NotFoundError,
    RegistroNotFoundError,
    CamaNotFoundError,
    SincronizacionError,
    ImportacionError,
)

__all__ = [
    "create_db_and_tables",
    "get_session",
    "check_database_health",
    "engine",
    "manager",
    "ConnectionManager",
    "BaseAppException",
    "ValidationError",
    "OperacionRechazadaError",
    "NotFoundError",
    "RegistroNotFoundError",
    "CamaNotFoundError",
    "SincronizacionError",
    "ImportacionError",
]
