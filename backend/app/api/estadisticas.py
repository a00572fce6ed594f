"""
Endpoints de Estadísticas.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.exceptions import RegistroNotFoundError
from app.schemas.responses import EstadisticasPeriodoItem, EstadisticasResponse
from app.services.estadisticas_service import (
    calcular_estadisticas_periodo,
    calcular_estadisticas_registro,
)
from app.services.exportacion_service import filas_cudyr
from app.services.registro_service import RegistroService
from app.api.dependencias import get_registro_service
from app.utils.constants import ENCABEZADOS_CUDYR

router = APIRouter()


@router.get("", response_model=List[EstadisticasPeriodoItem])
def obtener_estadisticas_periodo(
    desde: str = Query(..., description="Fecha inicial (YYYY-MM-DD)"),
    hasta: str = Query(..., description="Fecha final (YYYY-MM-DD)"),
    service: RegistroService = Depends(get_registro_service),
):
    """Ocupación por día, con altas y traslados, para un rango de fechas."""
    if desde > hasta:
        raise HTTPException(status_code=400, detail="La fecha inicial es posterior a la final")
    return calcular_estadisticas_periodo(service.obtener_rango(desde, hasta))


@router.get("/{fecha}", response_model=EstadisticasResponse)
def obtener_estadisticas(fecha: str, service: RegistroService = Depends(get_registro_service)):
    """Estadísticas de ocupación del día."""
    try:
        registro = service.obtener_o_error(fecha)
    except RegistroNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    estadisticas = calcular_estadisticas_registro(registro)
    return EstadisticasResponse(fecha=fecha, **estadisticas.to_dict())


@router.get("/{fecha}/cudyr", response_model=List[Dict[str, Any]])
def obtener_resumen_cudyr(fecha: str, service: RegistroService = Depends(get_registro_service)):
    """Resumen CUDYR del día (una entrada por paciente categorizado)."""
    try:
        registro = service.obtener_o_error(fecha)
    except RegistroNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    claves = [c.lower() for c in ENCABEZADOS_CUDYR]
    return [dict(zip(claves, fila)) for fila in filas_cudyr(registro)]
