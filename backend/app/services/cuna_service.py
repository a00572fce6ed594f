"""
Ciclo de vida de la cuna clínica.

La cuna clínica es un RN enfermo que comparte cama con su madre.
Solo puede existir en una cama con paciente principal y excluye
la cuna de acompañante (RN sano).
"""
from datetime import date
from typing import Any, Dict, Optional
import logging

from app.models.paciente import PacienteCuna
from app.models.registro import RegistroDiario
from app.services.cama_service import obtener_cama, reemplazar_cama
from app.services.paciente_factory import aplicar_cambios, crear_cuna_vacia, preparar_cambios

logger = logging.getLogger("censo_camas.cunas")


def crear_cuna(registro: RegistroDiario, cama_id: str) -> RegistroDiario:
    """
    Crea una cuna clínica vacía en la cama.

    Siempre reemplaza una cuna existente por una nueva y
    desactiva la cuna de acompañante. Se rechaza si la cama
    no tiene paciente principal.
    """
    paciente = obtener_cama(registro, cama_id)
    if paciente is None:
        return registro

    if not paciente.esta_ocupada:
        logger.warning(f"No se puede agregar cuna clínica a cama vacía {cama_id}")
        return registro

    actualizado = paciente.model_copy(update={
        "cuna_clinica": crear_cuna_vacia(cama_id),
        "tiene_cuna_acompanante": False,
    })
    return reemplazar_cama(registro, cama_id, actualizado)


def eliminar_cuna(registro: RegistroDiario, cama_id: str) -> RegistroDiario:
    """Elimina la cuna clínica de la cama."""
    paciente = obtener_cama(registro, cama_id)
    if paciente is None:
        return registro

    return reemplazar_cama(registro, cama_id, paciente.model_copy(update={"cuna_clinica": None}))


def actualizar_campo_cuna(
    registro: RegistroDiario,
    cama_id: str,
    campo: str,
    valor: Any,
    hoy: Optional[date] = None,
) -> RegistroDiario:
    """
    Actualiza un campo de la cuna clínica.

    Sin efecto si la cama no tiene cuna o si la fecha de ingreso es futura.
    """
    paciente = obtener_cama(registro, cama_id)
    if paciente is None or paciente.cuna_clinica is None:
        return registro

    aceptados, rechazados = preparar_cambios(PacienteCuna, {campo: valor}, hoy)
    if rechazados:
        logger.warning(f"Actualización de cuna '{campo}' rechazada en cama {cama_id}")
        return registro

    return _reemplazar_cuna(registro, cama_id, aceptados)


def actualizar_campos_cuna(
    registro: RegistroDiario,
    cama_id: str,
    campos: Dict[str, Any],
    hoy: Optional[date] = None,
) -> RegistroDiario:
    """Actualiza varios campos de la cuna clínica en un solo commit."""
    paciente = obtener_cama(registro, cama_id)
    if paciente is None or paciente.cuna_clinica is None:
        return registro

    aceptados, rechazados = preparar_cambios(PacienteCuna, campos, hoy)
    if rechazados:
        logger.warning(f"Campos de cuna descartados en cama {cama_id}: {', '.join(rechazados)}")
    if not aceptados:
        return registro

    return _reemplazar_cuna(registro, cama_id, aceptados)


def _reemplazar_cuna(registro: RegistroDiario, cama_id: str, cambios: Dict[str, Any]) -> RegistroDiario:
    paciente = registro.camas[cama_id]
    cuna = aplicar_cambios(paciente.cuna_clinica, cambios)
    if cuna is None:
        return registro
    return reemplazar_cama(registro, cama_id, paciente.model_copy(update={"cuna_clinica": cuna}))
