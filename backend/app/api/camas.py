"""
Endpoints de Camas del registro diario.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencias import ejecutar_operacion, get_registro_service
from app.core.exceptions import CamaNotFoundError, RegistroNotFoundError
from app.schemas.registro import (
    ActualizarCampoRequest,
    ActualizarCamposRequest,
    ActualizarCudyrRequest,
    BloquearCamaRequest,
    MoverCopiarRequest,
)
from app.schemas.responses import OperacionResponse
from app.services import cama_service
from app.services.cudyr_service import calcular_cudyr
from app.services.registro_service import RegistroService
from app.utils.constants import CATALOGO_CAMAS

router = APIRouter()


def _verificar_cama(cama_id: str) -> None:
    if cama_id not in CATALOGO_CAMAS:
        raise HTTPException(status_code=404, detail=CamaNotFoundError(cama_id).message)


@router.get("/{cama_id}")
def obtener_cama(
    fecha: str,
    cama_id: str,
    service: RegistroService = Depends(get_registro_service),
):
    """Obtiene el paciente de una cama con su categorización CUDYR."""
    _verificar_cama(cama_id)
    try:
        registro = service.obtener_o_error(fecha)
    except RegistroNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    paciente = registro.camas.get(cama_id)
    if paciente is None:
        raise HTTPException(status_code=404, detail=CamaNotFoundError(cama_id).message)

    cudyr = calcular_cudyr(paciente.cudyr)
    return {
        "paciente": paciente.a_documento(),
        "cudyr": {
            "puntaje_dependencia": cudyr.puntaje_dependencia,
            "puntaje_riesgo": cudyr.puntaje_riesgo,
            "categoria": cudyr.categoria,
            "categorizado": cudyr.categorizado,
        },
    }


@router.patch("/{cama_id}", response_model=OperacionResponse)
async def actualizar_campos(
    fecha: str,
    cama_id: str,
    data: ActualizarCamposRequest,
    service: RegistroService = Depends(get_registro_service),
):
    """Actualiza varios campos del paciente en un solo cambio."""
    _verificar_cama(cama_id)
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cama_service.actualizar_campos(r, cama_id, data.campos),
        "paciente_actualizado",
    )


@router.put("/{cama_id}/campo", response_model=OperacionResponse)
async def actualizar_campo(
    fecha: str,
    cama_id: str,
    data: ActualizarCampoRequest,
    service: RegistroService = Depends(get_registro_service),
):
    """Actualiza un campo del paciente. Una fecha de ingreso futura no tiene efecto."""
    _verificar_cama(cama_id)
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cama_service.actualizar_campo(r, cama_id, data.campo, data.valor),
        "paciente_actualizado",
    )


@router.put("/{cama_id}/cudyr", response_model=OperacionResponse)
async def actualizar_cudyr(
    fecha: str,
    cama_id: str,
    data: ActualizarCudyrRequest,
    service: RegistroService = Depends(get_registro_service),
):
    _verificar_cama(cama_id)
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cama_service.actualizar_cudyr(r, cama_id, data.item, data.valor),
        "cudyr_actualizado",
    )


@router.post("/{cama_id}/limpiar", response_model=OperacionResponse)
async def limpiar_cama(
    fecha: str,
    cama_id: str,
    service: RegistroService = Depends(get_registro_service),
):
    """Libera la cama conservando solo su ubicación."""
    _verificar_cama(cama_id)
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cama_service.limpiar_paciente(r, cama_id),
        "cama_liberada",
    )


@router.post("/{cama_id}/mover", response_model=OperacionResponse)
async def mover_o_copiar(
    fecha: str,
    cama_id: str,
    data: MoverCopiarRequest,
    service: RegistroService = Depends(get_registro_service),
):
    """Mueve o copia el paciente de la cama a otra cama."""
    _verificar_cama(cama_id)
    _verificar_cama(data.cama_destino_id)
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cama_service.mover_o_copiar_paciente(r, data.modo, cama_id, data.cama_destino_id),
        "paciente_movido",
    )


@router.post("/{cama_id}/bloqueo", response_model=OperacionResponse)
async def alternar_bloqueo(
    fecha: str,
    cama_id: str,
    data: Optional[BloquearCamaRequest] = None,
    service: RegistroService = Depends(get_registro_service),
):
    """Bloquea o desbloquea la cama."""
    _verificar_cama(cama_id)
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cama_service.alternar_bloqueo_cama(r, cama_id, data.motivo if data else None),
        "cama_bloqueo",
    )


@router.post("/{cama_id}/extra", response_model=OperacionResponse)
async def alternar_cama_extra(
    fecha: str,
    cama_id: str,
    service: RegistroService = Depends(get_registro_service),
):
    """Habilita o deshabilita una cama extra en el día."""
    _verificar_cama(cama_id)
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cama_service.alternar_cama_extra(r, cama_id),
        "cama_extra",
    )
