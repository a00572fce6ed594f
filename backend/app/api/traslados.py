"""
Endpoints de Traslados.
"""
from typing import Dict

from fastapi import APIRouter, Depends

from app.api.dependencias import ejecutar_operacion, get_registro_service
from app.core.exceptions import OperacionRechazadaError
from app.models.registro import RegistroDiario
from app.schemas.registro import TrasladoCreate, TrasladoUpdate
from app.schemas.responses import OperacionResponse
from app.services import traslado_service
from app.services.registro_service import RegistroService

router = APIRouter()


@router.post("", response_model=OperacionResponse)
async def agregar_traslado(
    fecha: str,
    data: TrasladoCreate,
    service: RegistroService = Depends(get_registro_service),
):
    """Traslada al paciente de una cama (la cuna clínica con nombre lo acompaña)."""
    return await ejecutar_operacion(
        service, fecha,
        lambda r: traslado_service.agregar_traslado(
            r,
            data.cama_id,
            data.metodo_evacuacion,
            data.centro_receptor,
            data.centro_receptor_otro,
            data.acompanante,
        ),
        "traslado_registrado",
    )


@router.post("/{traslado_id}/deshacer", response_model=OperacionResponse)
async def deshacer_traslado(
    fecha: str,
    traslado_id: str,
    service: RegistroService = Depends(get_registro_service),
):
    """Deshace un traslado. Responde 409 si la cama ya está ocupada."""
    mensajes: Dict[str, str] = {}

    def operacion(registro: RegistroDiario) -> RegistroDiario:
        resultado = traslado_service.deshacer_traslado(registro, traslado_id)
        if not resultado.exito:
            raise OperacionRechazadaError(resultado.mensaje)
        mensajes["mensaje"] = resultado.mensaje
        return resultado.registro

    response = await ejecutar_operacion(service, fecha, operacion, "traslado_deshecho")
    response.mensaje = response.mensaje or mensajes.get("mensaje")
    return response


@router.patch("/{traslado_id}", response_model=OperacionResponse)
async def actualizar_traslado(
    fecha: str,
    traslado_id: str,
    data: TrasladoUpdate,
    service: RegistroService = Depends(get_registro_service),
):
    cambios = data.model_dump(exclude_unset=True)
    return await ejecutar_operacion(
        service, fecha,
        lambda r: traslado_service.actualizar_traslado(r, traslado_id, cambios),
        "traslado_actualizado",
    )


@router.delete("/{traslado_id}", response_model=OperacionResponse)
async def eliminar_traslado(
    fecha: str,
    traslado_id: str,
    service: RegistroService = Depends(get_registro_service),
):
    return await ejecutar_operacion(
        service, fecha,
        lambda r: traslado_service.eliminar_traslado(r, traslado_id),
        "traslado_eliminado",
    )
