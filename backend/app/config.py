"""
Configuración centralizada de la aplicación.
Todas las configuraciones en un solo lugar para fácil mantenimiento.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Configuración principal del sistema."""

    # ============================================
    # APLICACIÓN
    # ============================================
    APP_TITLE: str = "Censo Diario de Camas Hospitalarias"
    APP_DESCRIPTION: str = "Censo diario de camas, altas, traslados y categorización CUDYR"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"
    DEBUG: bool = False

    # ============================================
    # BASE DE DATOS (almacenamiento local)
    # ============================================
    DATABASE_URL: str = "sqlite:///./censo_camas.db"

    # ============================================
    # CORS
    # ============================================
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # ============================================
    # HOSPITAL
    # ============================================
    HOSPITAL_ID: str = "hanga_roa"
    DEFAULT_BLOCKED_REASON: str = ""

    # ============================================
    # ALMACÉN REMOTO (espejo opcional)
    # ============================================
    REMOTE_SYNC_ENABLED: bool = False
    REMOTE_STORE_URL: Optional[str] = None
    REMOTE_STORE_TOKEN: Optional[str] = None
    REMOTE_TIMEOUT: float = 10.0  # segundos

    # ============================================
    # SINCRONIZACIÓN
    # ============================================
    SYNC_DEBOUNCE_MS: int = 500  # ventana de supresión de eco
    SYNC_REMOTE_MARGIN_MS: int = 1000  # margen para aceptar remoto más nuevo

    # ============================================
    # LOGGING
    # ============================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


# Instancia global de configuración
settings = Settings()
