"""
Dependencias compartidas por los endpoints del registro diario.
"""
from typing import Callable

from fastapi import Depends, HTTPException, Query, status
from sqlmodel import Session

from app.core.database import get_session
from app.core.exceptions import OperacionRechazadaError, RegistroNotFoundError
from app.core.websocket_manager import manager
from app.models.enums import EspacioAlmacenamiento
from app.models.registro import RegistroDiario
from app.schemas.responses import OperacionResponse
from app.services.registro_service import RegistroService, ResultadoConfirmacion
from app.services.sincronizacion_service import obtener_almacen_remoto


def obtener_espacio(
    demo: bool = Query(False, description="Usar el espacio de datos de demostración"),
) -> EspacioAlmacenamiento:
    return EspacioAlmacenamiento.DEMO if demo else EspacioAlmacenamiento.PRODUCCION


def get_registro_service(
    session: Session = Depends(get_session),
    espacio: EspacioAlmacenamiento = Depends(obtener_espacio),
) -> RegistroService:
    return RegistroService(session, espacio, obtener_almacen_remoto())


def a_response(resultado: ResultadoConfirmacion) -> OperacionResponse:
    return OperacionResponse(
        registro=resultado.registro.a_documento(),
        cambio=resultado.cambio,
        estado_sincronizacion=resultado.estado_sincronizacion.value,
        mensaje=resultado.mensaje,
    )


async def notificar(tipo: str, resultado: ResultadoConfirmacion, espacio: EspacioAlmacenamiento) -> None:
    """Notifica a los clientes suscritos a la fecha si hubo cambios."""
    if not resultado.cambio:
        return
    await manager.send_update(
        tipo,
        fecha=resultado.registro.fecha,
        espacio=espacio.value,
        ultima_actualizacion=resultado.registro.ultima_actualizacion,
    )


async def ejecutar_operacion(
    service: RegistroService,
    fecha: str,
    operacion: Callable[[RegistroDiario], RegistroDiario],
    tipo_evento: str,
) -> OperacionResponse:
    """
    Aplica una operación pura sobre el registro de la fecha, la confirma
    y notifica por WebSocket.

    Raises:
        HTTPException 404: Si no existe registro para la fecha
        HTTPException 409: Si la operación fue rechazada con un mensaje para el usuario
    """
    try:
        resultado = await service.aplicar(fecha, operacion)
    except RegistroNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except OperacionRechazadaError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

    await notificar(tipo_evento, resultado, service.espacio)
    return a_response(resultado)
