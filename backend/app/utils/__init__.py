"""
Utilidades compartidas del sistema.
"""
from app.utils.logger import configurar_logging, logger
from app.utils.fechas import (
    marca_tiempo_actual,
    parsear_marca_tiempo,
    formatear_fecha_reporte,
    hoy_iso,
)

__all__ = [
    "configurar_logging",
    "logger",
    "marca_tiempo_actual",
    "parsear_marca_tiempo",
    "formatear_fecha_reporte",
    "hoy_iso",
]
