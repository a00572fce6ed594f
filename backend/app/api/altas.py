"""
Endpoints de Altas.
"""
from typing import Dict

from fastapi import APIRouter, Depends

from app.api.dependencias import ejecutar_operacion, get_registro_service
from app.core.exceptions import OperacionRechazadaError
from app.models.registro import RegistroDiario
from app.schemas.registro import AltaCreate, AltaUpdate
from app.schemas.responses import OperacionResponse
from app.services import alta_service
from app.services.registro_service import RegistroService

router = APIRouter()


@router.post("", response_model=OperacionResponse)
async def agregar_alta(
    fecha: str,
    data: AltaCreate,
    service: RegistroService = Depends(get_registro_service),
):
    """Da de alta al paciente de una cama (y a su cuna clínica si se indica)."""
    return await ejecutar_operacion(
        service, fecha,
        lambda r: alta_service.agregar_alta(r, data.cama_id, data.estado, data.estado_cuna),
        "alta_registrada",
    )


@router.post("/{alta_id}/deshacer", response_model=OperacionResponse)
async def deshacer_alta(
    fecha: str,
    alta_id: str,
    service: RegistroService = Depends(get_registro_service),
):
    """
    Deshace un alta.

    Responde 409 con el motivo si la cama (o la cuna) ya está ocupada.
    """
    mensajes: Dict[str, str] = {}

    def operacion(registro: RegistroDiario) -> RegistroDiario:
        resultado = alta_service.deshacer_alta(registro, alta_id)
        if not resultado.exito:
            raise OperacionRechazadaError(resultado.mensaje)
        mensajes["mensaje"] = resultado.mensaje
        return resultado.registro

    response = await ejecutar_operacion(service, fecha, operacion, "alta_deshecha")
    response.mensaje = response.mensaje or mensajes.get("mensaje")
    return response


@router.patch("/{alta_id}", response_model=OperacionResponse)
async def actualizar_alta(
    fecha: str,
    alta_id: str,
    data: AltaUpdate,
    service: RegistroService = Depends(get_registro_service),
):
    return await ejecutar_operacion(
        service, fecha,
        lambda r: alta_service.actualizar_alta(r, alta_id, data.estado),
        "alta_actualizada",
    )


@router.delete("/{alta_id}", response_model=OperacionResponse)
async def eliminar_alta(
    fecha: str,
    alta_id: str,
    service: RegistroService = Depends(get_registro_service),
):
    """Elimina el alta del log sin restaurar al paciente."""
    return await ejecutar_operacion(
        service, fecha,
        lambda r: alta_service.eliminar_alta(r, alta_id),
        "alta_eliminada",
    )
