"""
Services de lógica de negocio.

Las operaciones sobre el registro diario son funciones puras por
módulo (cama_service, alta_service, ...). RegistroService es el único
que escribe en el almacenamiento.
"""
from app.services.registro_service import RegistroService, ResultadoConfirmacion
from app.services.sincronizacion_service import (
    AlmacenRemoto,
    AlmacenRemotoHTTP,
    AlmacenRemotoMemoria,
    ResolutorConflictos,
)
from app.services.estadisticas_service import Estadisticas, calcular_estadisticas
from app.services.cudyr_service import ResultadoCudyr, calcular_cudyr

__all__ = [
    "RegistroService",
    "ResultadoConfirmacion",
    "AlmacenRemoto",
    "AlmacenRemotoHTTP",
    "AlmacenRemotoMemoria",
    "ResolutorConflictos",
    "Estadisticas",
    "calcular_estadisticas",
    "ResultadoCudyr",
    "calcular_cudyr",
]
