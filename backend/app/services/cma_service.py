"""
Registro de Cirugía Mayor Ambulatoria (CMA).
Log del día independiente de la ocupación de camas.
"""
from typing import Any, Dict
import logging
import uuid

from app.models.registro import RegistroCMA, RegistroDiario
from app.services.cama_service import nuevo_registro
from app.utils.fechas import marca_tiempo_actual

logger = logging.getLogger("censo_camas.cma")


def agregar_cma(registro: RegistroDiario, datos: Dict[str, Any]) -> RegistroDiario:
    """
    Agrega una entrada al log de CMA.

    El id y la marca de tiempo se generan aquí; si vienen en los datos se ignoran.
    """
    datos = {k: v for k, v in datos.items() if k not in ("id", "timestamp", "marca_tiempo")}
    entrada = RegistroCMA(**datos, id=str(uuid.uuid4()), marca_tiempo=marca_tiempo_actual())
    logger.info(f"CMA agregada: {entrada.nombre_paciente} ({entrada.tipo_intervencion})")
    return nuevo_registro(registro, cma=[*registro.cma, entrada])


def actualizar_cma(registro: RegistroDiario, cma_id: str, cambios: Dict[str, Any]) -> RegistroDiario:
    """Combina los cambios con la entrada existente. Sin efecto si el id no existe."""
    entrada = next((c for c in registro.cma if c.id == cma_id), None)
    if entrada is None:
        logger.warning(f"CMA {cma_id} no encontrada")
        return registro

    datos = entrada.model_dump()
    for campo, valor in cambios.items():
        atributo = RegistroCMA.resolver_campo(campo)
        if atributo is not None and atributo != "id":
            datos[atributo] = valor
    try:
        actualizada = RegistroCMA.model_validate(datos)
    except ValueError:
        logger.warning(f"Datos inválidos para CMA {cma_id}")
        return registro

    return nuevo_registro(
        registro,
        cma=[actualizada if c.id == cma_id else c for c in registro.cma],
    )


def eliminar_cma(registro: RegistroDiario, cma_id: str) -> RegistroDiario:
    if not any(c.id == cma_id for c in registro.cma):
        logger.warning(f"CMA {cma_id} no encontrada")
        return registro
    return nuevo_registro(registro, cma=[c for c in registro.cma if c.id != cma_id])
