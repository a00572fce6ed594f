"""
Schemas de Respuestas Comunes.
"""
from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class MessageResponse(BaseModel):
    """Respuesta genérica con mensaje."""
    success: bool
    message: str
    data: Optional[dict] = None


class ErrorResponse(BaseModel):
    """Respuesta de error."""
    error: str
    detail: Optional[str] = None
    errores: List[str] = []


class OperacionResponse(BaseModel):
    """
    Resultado de una operación sobre el registro diario.

    cambio es False cuando la operación fue rechazada o no tuvo efecto.
    registro usa el formato del documento (claves camelCase).
    """
    registro: Dict[str, Any]
    cambio: bool
    estado_sincronizacion: str
    mensaje: Optional[str] = None


class EstadisticasResponse(BaseModel):
    """Estadísticas de ocupación de un día."""
    fecha: str
    camas_ocupadas: int
    cunas_ocupadas: int
    cunas_clinicas: int
    cunas_acompanante: int
    total_cunas_usadas: int
    total_hospitalizados: int
    camas_bloqueadas: int
    capacidad_servicio: int
    capacidad_disponible: int


class EstadisticasPeriodoItem(EstadisticasResponse):
    altas: int
    traslados: int


class ImportacionResponse(BaseModel):
    success: bool
    registros_importados: int
