"""
Configuración de logging del sistema.

Todos los módulos usan loggers hijos de "censo_camas"
(censo_camas.registros, censo_camas.sync, ...).
"""
import logging
from typing import Optional

from app.config import settings

LOGGER_RAIZ = "censo_camas"


def configurar_logging(nivel: Optional[str] = None) -> logging.Logger:
    """
    Configura el logger raíz de la aplicación.

    Se puede llamar más de una vez (main y tests): el handler de
    consola se agrega solo la primera vez.

    Args:
        nivel: Nivel de logging; por defecto settings.LOG_LEVEL

    Returns:
        Logger "censo_camas"
    """
    raiz = logging.getLogger(LOGGER_RAIZ)
    raiz.setLevel(getattr(logging, (nivel or settings.LOG_LEVEL).upper(), logging.INFO))

    if not raiz.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        raiz.addHandler(handler)
        raiz.propagate = False

    # SQL solo en modo debug
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )
    return raiz


logger = configurar_logging()
