"""
Servicio de Altas.
Registra el egreso de pacientes (vivo o fallecido) y permite deshacerlo.

Ubicación: app/services/alta_service.py
"""
from typing import Optional
import logging

from app.models.enums import EstadoAltaEnum
from app.models.registro import Alta, RegistroDiario
from app.services.cama_service import nuevo_registro, obtener_cama
from app.services.egreso_service import (
    ResultadoDeshacer,
    buscar_evento,
    datos_evento_cuna,
    datos_evento_principal,
    restaurar_evento,
)
from app.services.paciente_factory import cama_limpia

logger = logging.getLogger("censo_camas.alta")


def agregar_alta(
    registro: RegistroDiario,
    cama_id: str,
    estado: EstadoAltaEnum,
    estado_cuna: Optional[EstadoAltaEnum] = None,
) -> RegistroDiario:
    """
    Da de alta al paciente de una cama.

    Genera un alta para el paciente principal y, si existe una cuna
    clínica con nombre y se indicó estado_cuna, una segunda alta
    anidada. La cama queda libre (cuna incluida).

    Args:
        registro: Registro actual
        cama_id: ID de la cama
        estado: Condición de egreso del paciente principal
        estado_cuna: Condición de egreso de la cuna clínica (opcional)

    Returns:
        Nuevo registro, o el mismo si la cama está vacía
    """
    paciente = obtener_cama(registro, cama_id)
    if paciente is None:
        return registro

    if not paciente.esta_ocupada:
        logger.warning(f"Intento de alta en cama vacía: {cama_id}")
        return registro

    datos_cuna = datos_evento_cuna(cama_id, paciente) if estado_cuna is not None else None
    principal = datos_evento_principal(cama_id, paciente, incluir_cuna=datos_cuna is None)

    nuevas = [Alta(**principal, estado=estado)]
    if datos_cuna is not None:
        nuevas.append(Alta(**datos_cuna, estado=estado_cuna))

    camas = dict(registro.camas)
    camas[cama_id] = cama_limpia(cama_id, paciente.ubicacion)

    logger.info(f"Alta registrada: {paciente.nombre} ({cama_id}), {len(nuevas)} evento(s)")
    return nuevo_registro(registro, camas=camas, altas=[*registro.altas, *nuevas])


def deshacer_alta(registro: RegistroDiario, alta_id: str) -> ResultadoDeshacer:
    """
    Deshace un alta restaurando la instantánea en la cama (o en la cuna).

    Se rechaza con un mensaje para el usuario si el lugar de destino
    está ocupado o si, para una cuna, la cama principal está vacía.

    Args:
        registro: Registro actual
        alta_id: ID del alta

    Returns:
        ResultadoDeshacer con el registro resultante
    """
    alta = buscar_evento(registro.altas, alta_id)
    if alta is None:
        return ResultadoDeshacer(
            exito=False,
            mensaje=f"Alta {alta_id} no encontrada",
            registro=registro,
            evento_id=alta_id,
        )

    camas, mensaje = restaurar_evento(registro, alta, "el alta")
    if camas is None:
        logger.warning(mensaje)
        return ResultadoDeshacer(
            exito=False, mensaje=mensaje, registro=registro,
            evento_id=alta_id, cama_id=alta.cama_id,
        )

    altas = [a for a in registro.altas if a.id != alta_id]
    logger.info(f"Alta deshecha: {alta.nombre_paciente} ({alta.cama_id})")
    return ResultadoDeshacer(
        exito=True,
        mensaje=mensaje,
        registro=nuevo_registro(registro, camas=camas, altas=altas),
        evento_id=alta_id,
        cama_id=alta.cama_id,
    )


def actualizar_alta(registro: RegistroDiario, alta_id: str, estado: EstadoAltaEnum) -> RegistroDiario:
    """Corrige la condición de egreso de un alta."""
    if buscar_evento(registro.altas, alta_id) is None:
        logger.warning(f"Alta {alta_id} no encontrada")
        return registro

    estado = EstadoAltaEnum(estado).value
    altas = [
        a.model_copy(update={"estado": estado}) if a.id == alta_id else a
        for a in registro.altas
    ]
    return nuevo_registro(registro, altas=altas)


def eliminar_alta(registro: RegistroDiario, alta_id: str) -> RegistroDiario:
    """Elimina un alta del log sin restaurar al paciente."""
    if buscar_evento(registro.altas, alta_id) is None:
        logger.warning(f"Alta {alta_id} no encontrada")
        return registro

    return nuevo_registro(registro, altas=[a for a in registro.altas if a.id != alta_id])
