"""
Endpoints de Exportación e Importación.
"""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import JSONResponse, Response

from app.core.exceptions import ImportacionError, RegistroNotFoundError
from app.schemas.responses import ImportacionResponse
from app.services import exportacion_service
from app.services.registro_service import RegistroService
from app.api.dependencias import get_registro_service

router = APIRouter()

MEDIA_TYPE_CSV = "text/csv; charset=utf-8"


def _adjunto(contenido: str, nombre_archivo: str, media_type: str) -> Response:
    return Response(
        content=contenido,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{nombre_archivo}"'},
    )


@router.get("/json")
def exportar_respaldo(service: RegistroService = Depends(get_registro_service)):
    """Descarga el respaldo completo (fecha -> registro)."""
    contenido = exportacion_service.exportar_json(service.obtener_todos())
    return _adjunto(
        contenido,
        exportacion_service.nombre_archivo_respaldo(),
        "application/json",
    )


@router.post("/importar", response_model=ImportacionResponse)
def importar_respaldo(
    datos: Dict[str, Any] = Body(...),
    service: RegistroService = Depends(get_registro_service),
):
    """
    Importa un respaldo JSON y lo fusiona por fecha.

    Si el respaldo no cumple el formato responde 422 con hasta 5
    errores y no se modifica nada.
    """
    try:
        importados = exportacion_service.importar_json(datos, service.repo)
    except ImportacionError as e:
        return JSONResponse(
            status_code=422,
            content={"message": e.message, "errores": e.errores},
        )
    return ImportacionResponse(success=True, registros_importados=importados)


@router.get("/csv/{fecha}")
def exportar_csv(fecha: str, service: RegistroService = Depends(get_registro_service)):
    """CSV del censo de un día (incluye bloques de altas y traslados)."""
    try:
        registro = service.obtener_o_error(fecha)
    except RegistroNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return _adjunto(
        exportacion_service.exportar_csv(registro),
        exportacion_service.nombre_archivo_csv(fecha),
        MEDIA_TYPE_CSV,
    )


@router.get("/censo")
def exportar_censo(
    desde: str = Query(..., description="Fecha inicial (YYYY-MM-DD)"),
    hasta: str = Query(..., description="Fecha final (YYYY-MM-DD)"),
    service: RegistroService = Depends(get_registro_service),
):
    """Censo bruto de un rango de fechas."""
    if desde > hasta:
        raise HTTPException(status_code=400, detail="La fecha inicial es posterior a la final")

    contenido = exportacion_service.exportar_censo_bruto(service.obtener_rango(desde, hasta))
    return _adjunto(contenido, f"censo_{desde}_{hasta}.csv", MEDIA_TYPE_CSV)


@router.get("/cudyr/{fecha}")
def exportar_cudyr(fecha: str, service: RegistroService = Depends(get_registro_service)):
    try:
        registro = service.obtener_o_error(fecha)
    except RegistroNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return _adjunto(
        exportacion_service.exportar_cudyr(registro),
        f"cudyr_{fecha}.csv",
        MEDIA_TYPE_CSV,
    )
