"""
Turno de enfermería del registro diario (2 cupos fijos).
"""
from typing import List
import logging

from app.models.registro import RegistroDiario
from app.services.cama_service import nuevo_registro
from app.utils.constants import CUPOS_ENFERMERIA

logger = logging.getLogger("censo_camas.enfermeria")


def normalizar_enfermeras(enfermeras: List[str]) -> List[str]:
    """Ajusta la lista a exactamente 2 cupos (rellena con vacíos o recorta)."""
    resultado = list(enfermeras or [])[:CUPOS_ENFERMERIA]
    resultado.extend([""] * (CUPOS_ENFERMERIA - len(resultado)))
    return resultado


def actualizar_enfermera(registro: RegistroDiario, indice: int, nombre: str) -> RegistroDiario:
    """
    Asigna un nombre a un cupo del turno.

    Args:
        registro: Registro actual
        indice: Cupo (0 o 1)
        nombre: Nombre del enfermero/a (vacío para liberar el cupo)

    Returns:
        Nuevo registro, o el mismo si el índice está fuera de rango
    """
    if not 0 <= indice < CUPOS_ENFERMERIA:
        logger.warning(f"Cupo de enfermería inválido: {indice}")
        return registro

    enfermeras = normalizar_enfermeras(registro.enfermeras)
    enfermeras[indice] = nombre
    return nuevo_registro(registro, enfermeras=enfermeras)
