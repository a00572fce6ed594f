"""
Fábrica de pacientes.
Crea ocupantes vacíos con los valores por defecto del catálogo
y copias profundas para mover, copiar y tomar instantáneas.
"""
from datetime import date
from typing import Any, Dict, Optional, Tuple, TypeVar
import logging

from pydantic import ValidationError as PydanticValidationError

from app.models.enums import ModoCamaEnum
from app.models.paciente import Paciente, PacienteCuna
from app.utils.constants import CATALOGO_CAMAS, CatalogoCamas
from app.utils.fechas import es_fecha_futura

logger = logging.getLogger("censo_camas.pacientes")

P = TypeVar("P", bound=PacienteCuna)

# Campos que no se modifican con actualizaciones genéricas
CAMPOS_PROTEGIDOS = {"cama_id", "cuna_clinica"}


def crear_paciente_vacio(cama_id: str, catalogo: CatalogoCamas = CATALOGO_CAMAS) -> Paciente:
    """
    Crea un paciente vacío (cama libre).

    El mobiliario por defecto sale del catálogo; cada llamada
    retorna contenedores nuevos (lista de dispositivos incluida).

    Args:
        cama_id: ID de la cama
        catalogo: Catálogo de camas

    Returns:
        Paciente vacío sin cuna clínica ni cuna de acompañante
    """
    definicion = catalogo.obtener(cama_id)
    modo = ModoCamaEnum.CUNA if definicion and definicion.es_cuna_por_defecto else ModoCamaEnum.CAMA
    return Paciente(cama_id=cama_id, modo_cama=modo)


def crear_cuna_vacia(cama_id: str) -> PacienteCuna:
    """Crea una cuna clínica vacía en modo Cuna."""
    return PacienteCuna(cama_id=cama_id, modo_cama=ModoCamaEnum.CUNA)


def clonar_paciente(paciente: P) -> P:
    """Copia profunda de un paciente (sin referencias compartidas)."""
    return paciente.model_copy(deep=True)


def cama_limpia(cama_id: str, ubicacion: Optional[str]) -> Paciente:
    """
    Paciente vacío que conserva solo la ubicación de la cama anterior.

    Se usa al limpiar, mover, dar de alta o trasladar.
    """
    limpio = crear_paciente_vacio(cama_id)
    return limpio.model_copy(update={"ubicacion": ubicacion})


def a_paciente_cuna(paciente: PacienteCuna) -> PacienteCuna:
    """Convierte cualquier paciente en PacienteCuna (descarta la cuna anidada)."""
    datos = paciente.model_dump(exclude={"cuna_clinica"})
    return PacienteCuna.model_validate(datos)


def a_paciente(paciente: PacienteCuna) -> Paciente:
    """Convierte un PacienteCuna (o instantánea) en Paciente principal."""
    return Paciente.model_validate(paciente.model_dump())


def preparar_cambios(
    modelo: type,
    campos: Dict[str, Any],
    hoy: Optional[date] = None,
) -> Tuple[Dict[str, Any], list]:
    """
    Normaliza un diccionario de cambios a nombres de atributo.

    Descarta campos desconocidos o protegidos y la fecha de ingreso
    si es futura.

    Args:
        modelo: Clase del paciente (Paciente o PacienteCuna)
        campos: Cambios con nombres de atributo o alias JSON
        hoy: Fecha de referencia para validar la fecha de ingreso

    Returns:
        Tupla (cambios aceptados, nombres de campos rechazados)
    """
    aceptados: Dict[str, Any] = {}
    rechazados = []
    for campo, valor in campos.items():
        atributo = modelo.resolver_campo(campo)
        if atributo is None or atributo in CAMPOS_PROTEGIDOS:
            rechazados.append(campo)
            continue
        if atributo == "fecha_ingreso" and isinstance(valor, str) and es_fecha_futura(valor, hoy):
            logger.warning(f"Fecha de ingreso futura rechazada: {valor}")
            rechazados.append(campo)
            continue
        aceptados[atributo] = valor
    return aceptados, rechazados


def aplicar_cambios(paciente: P, cambios: Dict[str, Any]) -> Optional[P]:
    """
    Retorna una copia validada del paciente con los cambios aplicados.

    Args:
        paciente: Paciente original (no se modifica)
        cambios: Cambios con nombres de atributo

    Returns:
        Nuevo paciente, o None si algún valor no es válido
    """
    datos = paciente.model_dump()
    datos.update(cambios)
    try:
        return type(paciente).model_validate(datos)
    except PydanticValidationError as e:
        logger.warning(f"Valores inválidos para cama {paciente.cama_id}: {e.error_count()} error(es)")
        return None
