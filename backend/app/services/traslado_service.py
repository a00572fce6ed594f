"""
Servicio de Traslados.
Registra la evacuación de pacientes a otros centros y permite deshacerla.

Ubicación: app/services/traslado_service.py
"""
from typing import Any, Dict, Optional
import logging

from app.models.registro import RegistroDiario, Traslado
from app.services.cama_service import nuevo_registro, obtener_cama
from app.services.egreso_service import (
    ResultadoDeshacer,
    buscar_evento,
    datos_evento_cuna,
    datos_evento_principal,
    restaurar_evento,
)
from app.services.paciente_factory import cama_limpia
from app.utils.constants import METODO_EVACUACION_CON_ACOMPANANTE

logger = logging.getLogger("censo_camas.traslado")

# Campos del traslado que se pueden corregir después de registrarlo
CAMPOS_EDITABLES_TRASLADO = {
    "metodo_evacuacion",
    "centro_receptor",
    "centro_receptor_otro",
    "acompanante",
}


def agregar_traslado(
    registro: RegistroDiario,
    cama_id: str,
    metodo_evacuacion: str,
    centro_receptor: str,
    centro_receptor_otro: Optional[str] = None,
    acompanante: Optional[str] = None,
) -> RegistroDiario:
    """
    Traslada al paciente de una cama a otro centro.

    Si la cama tiene una cuna clínica con nombre, la cuna se traslada
    junto a la madre (evento anidado). El acompañante solo se registra
    para evacuaciones en avión comercial.

    Args:
        registro: Registro actual
        cama_id: ID de la cama
        metodo_evacuacion: Medio de evacuación
        centro_receptor: Centro que recibe al paciente
        centro_receptor_otro: Texto libre cuando el centro es "Otro"
        acompanante: Acompañante (vuelo comercial)

    Returns:
        Nuevo registro, o el mismo si la cama está vacía
    """
    paciente = obtener_cama(registro, cama_id)
    if paciente is None:
        return registro

    if not paciente.esta_ocupada:
        logger.warning(f"Intento de traslado en cama vacía: {cama_id}")
        return registro

    if metodo_evacuacion != METODO_EVACUACION_CON_ACOMPANANTE:
        acompanante = None

    datos_traslado = {
        "metodo_evacuacion": metodo_evacuacion,
        "centro_receptor": centro_receptor,
        "centro_receptor_otro": centro_receptor_otro,
        "acompanante": acompanante,
    }

    datos_cuna = datos_evento_cuna(cama_id, paciente)
    principal = datos_evento_principal(cama_id, paciente, incluir_cuna=datos_cuna is None)

    nuevos = [Traslado(**principal, **datos_traslado)]
    if datos_cuna is not None:
        nuevos.append(Traslado(**datos_cuna, **datos_traslado))

    camas = dict(registro.camas)
    camas[cama_id] = cama_limpia(cama_id, paciente.ubicacion)

    logger.info(
        f"Traslado registrado: {paciente.nombre} ({cama_id}) -> {centro_receptor}"
    )
    return nuevo_registro(registro, camas=camas, traslados=[*registro.traslados, *nuevos])


def deshacer_traslado(registro: RegistroDiario, traslado_id: str) -> ResultadoDeshacer:
    """
    Deshace un traslado restaurando la instantánea en la cama (o en la cuna).
    """
    traslado = buscar_evento(registro.traslados, traslado_id)
    if traslado is None:
        return ResultadoDeshacer(
            exito=False,
            mensaje=f"Traslado {traslado_id} no encontrado",
            registro=registro,
            evento_id=traslado_id,
        )

    camas, mensaje = restaurar_evento(registro, traslado, "el traslado")
    if camas is None:
        logger.warning(mensaje)
        return ResultadoDeshacer(
            exito=False, mensaje=mensaje, registro=registro,
            evento_id=traslado_id, cama_id=traslado.cama_id,
        )

    traslados = [t for t in registro.traslados if t.id != traslado_id]
    logger.info(f"Traslado deshecho: {traslado.nombre_paciente} ({traslado.cama_id})")
    return ResultadoDeshacer(
        exito=True,
        mensaje=mensaje,
        registro=nuevo_registro(registro, camas=camas, traslados=traslados),
        evento_id=traslado_id,
        cama_id=traslado.cama_id,
    )


def actualizar_traslado(
    registro: RegistroDiario,
    traslado_id: str,
    cambios: Dict[str, Any],
) -> RegistroDiario:
    """
    Corrige datos de un traslado (medio, centro, acompañante).

    Acepta nombres de atributo o alias JSON; los demás campos se ignoran.
    """
    if buscar_evento(registro.traslados, traslado_id) is None:
        logger.warning(f"Traslado {traslado_id} no encontrado")
        return registro

    aceptados = {}
    for campo, valor in cambios.items():
        atributo = Traslado.resolver_campo(campo)
        if atributo in CAMPOS_EDITABLES_TRASLADO:
            aceptados[atributo] = valor
    if not aceptados:
        return registro

    traslados = [
        t.model_copy(update=aceptados) if t.id == traslado_id else t
        for t in registro.traslados
    ]
    return nuevo_registro(registro, traslados=traslados)


def eliminar_traslado(registro: RegistroDiario, traslado_id: str) -> RegistroDiario:
    """Elimina un traslado del log sin restaurar al paciente."""
    if buscar_evento(registro.traslados, traslado_id) is None:
        logger.warning(f"Traslado {traslado_id} no encontrado")
        return registro

    return nuevo_registro(
        registro, traslados=[t for t in registro.traslados if t.id != traslado_id]
    )
