"""
Endpoints de Registros Diarios.
"""
from typing import Any, Dict, List, Optional
import re

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from app.api.dependencias import (
    a_response,
    ejecutar_operacion,
    get_registro_service,
    notificar,
)
from app.core.exceptions import SincronizacionError
from app.core.websocket_manager import manager
from app.models.registro import PATRON_FECHA_ISO, RegistroDiario
from app.schemas.registro import InicializarDiaRequest
from app.schemas.responses import MessageResponse, OperacionResponse
from app.services.cama_service import limpiar_todas_las_camas
from app.services.registro_service import RegistroService
from app.services.sincronizacion_service import registro_desde_remoto

router = APIRouter()


def _validar_fecha(fecha: str) -> None:
    if not re.match(PATRON_FECHA_ISO, fecha):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Formato de fecha inválido (YYYY-MM-DD)",
        )


@router.get("", response_model=List[str])
def listar_fechas(service: RegistroService = Depends(get_registro_service)):
    """Fechas con registro, de la más reciente a la más antigua."""
    return service.fechas_disponibles()


@router.get("/{fecha}")
def obtener_registro(fecha: str, service: RegistroService = Depends(get_registro_service)):
    """Obtiene el registro de una fecha en formato de documento."""
    registro = service.obtener(fecha)
    if registro is None:
        raise HTTPException(status_code=404, detail=f"No existe registro para {fecha}")
    return registro.a_documento()


@router.post("/{fecha}", response_model=OperacionResponse)
async def inicializar_dia(
    fecha: str,
    data: Optional[InicializarDiaRequest] = None,
    service: RegistroService = Depends(get_registro_service),
):
    """
    Crea el registro del día (en blanco o copiando el anterior).
    Si ya existe se retorna sin cambios.
    """
    _validar_fecha(fecha)
    copiar_anterior = data.copiar_anterior if data is not None else False
    resultado = await service.inicializar_dia(fecha, copiar_anterior)
    await notificar("registro_creado", resultado, service.espacio)
    return a_response(resultado)


@router.put("/{fecha}", response_model=OperacionResponse)
async def guardar_registro(
    fecha: str,
    documento: Dict[str, Any] = Body(...),
    service: RegistroService = Depends(get_registro_service),
):
    """Reemplaza el registro completo de una fecha."""
    try:
        registro = RegistroDiario.model_validate(documento)
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))

    if registro.fecha != fecha:
        raise HTTPException(status_code=400, detail="La fecha del documento no coincide con la URL")

    resultado = await service.guardar(registro)
    await notificar("registro_actualizado", resultado, service.espacio)
    return a_response(resultado)


@router.post("/{fecha}/limpiar", response_model=OperacionResponse)
async def limpiar_registro(fecha: str, service: RegistroService = Depends(get_registro_service)):
    """Libera todas las camas y vacía altas y traslados."""
    return await ejecutar_operacion(service, fecha, limpiar_todas_las_camas, "registro_limpiado")


# ============================================
# SINCRONIZACIÓN REMOTA
# ============================================

@router.post("/{fecha}/remoto", response_model=MessageResponse)
async def recibir_registro_remoto(
    fecha: str,
    documento: Dict[str, Any] = Body(...),
    service: RegistroService = Depends(get_registro_service),
):
    """
    Recibe un registro publicado por el almacén remoto.

    Se aplica la regla de resolución de conflictos; si se acepta,
    se guarda localmente y se notifica a los suscriptores de la fecha.
    """
    try:
        remoto = registro_desde_remoto(documento)
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))

    if remoto.fecha != fecha:
        raise HTTPException(status_code=400, detail="La fecha del documento no coincide con la URL")

    aceptado = service.recibir_remoto(remoto)
    if aceptado:
        await manager.send_update(
            "registro_remoto",
            fecha=fecha,
            espacio=service.espacio.value,
            ultima_actualizacion=remoto.ultima_actualizacion,
        )

    return MessageResponse(
        success=aceptado,
        message="Registro remoto aplicado" if aceptado else "Registro remoto descartado",
    )


@router.post("/{fecha}/sincronizar")
async def sincronizar_registro(fecha: str, service: RegistroService = Depends(get_registro_service)):
    """Lee el registro del almacén remoto y lo aplica si corresponde."""
    try:
        registro, aceptado = await service.sincronizar_desde_remoto(fecha)
    except SincronizacionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    if registro is None:
        raise HTTPException(status_code=404, detail=f"No existe registro para {fecha}")

    if aceptado:
        await manager.send_update(
            "registro_remoto",
            fecha=fecha,
            espacio=service.espacio.value,
            ultima_actualizacion=registro.ultima_actualizacion,
        )
    return registro.a_documento()
