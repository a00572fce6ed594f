"""
Endpoints de Cuna Clínica.
"""
from fastapi import APIRouter, Depends

from app.api.dependencias import ejecutar_operacion, get_registro_service
from app.schemas.registro import ActualizarCampoRequest, ActualizarCamposRequest
from app.schemas.responses import OperacionResponse
from app.services import cuna_service
from app.services.registro_service import RegistroService

router = APIRouter()


@router.post("", response_model=OperacionResponse)
async def crear_cuna(
    fecha: str,
    cama_id: str,
    service: RegistroService = Depends(get_registro_service),
):
    """Agrega una cuna clínica vacía. Sin efecto si la cama no tiene paciente."""
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cuna_service.crear_cuna(r, cama_id),
        "cuna_creada",
    )


@router.delete("", response_model=OperacionResponse)
async def eliminar_cuna(
    fecha: str,
    cama_id: str,
    service: RegistroService = Depends(get_registro_service),
):
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cuna_service.eliminar_cuna(r, cama_id),
        "cuna_eliminada",
    )


@router.patch("", response_model=OperacionResponse)
async def actualizar_campos_cuna(
    fecha: str,
    cama_id: str,
    data: ActualizarCamposRequest,
    service: RegistroService = Depends(get_registro_service),
):
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cuna_service.actualizar_campos_cuna(r, cama_id, data.campos),
        "cuna_actualizada",
    )


@router.put("/campo", response_model=OperacionResponse)
async def actualizar_campo_cuna(
    fecha: str,
    cama_id: str,
    data: ActualizarCampoRequest,
    service: RegistroService = Depends(get_registro_service),
):
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cuna_service.actualizar_campo_cuna(r, cama_id, data.campo, data.valor),
        "cuna_actualizada",
    )
