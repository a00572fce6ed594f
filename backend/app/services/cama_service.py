"""
Operaciones sobre camas del registro diario.

Todas las operaciones son funciones puras: reciben el registro actual
y retornan un registro nuevo. Una operación rechazada (cama vacía,
fecha futura, cama inexistente) retorna el mismo objeto recibido y
registra una advertencia; el llamador detecta la falta de efecto con
`nuevo is registro`.
"""
from datetime import date
from typing import Any, Dict, Optional
import logging

from app.config import settings
from app.models.cudyr import PuntajeCudyr
from app.models.enums import ModoMovimientoEnum
from app.models.paciente import Paciente
from app.models.registro import RegistroDiario
from app.services.paciente_factory import (
    aplicar_cambios,
    cama_limpia,
    clonar_paciente,
    preparar_cambios,
)
from app.utils.constants import CATALOGO_CAMAS
from app.utils.fechas import marca_tiempo_actual

logger = logging.getLogger("censo_camas.camas")


# ============================================
# HELPERS DEL REGISTRO
# ============================================

def nuevo_registro(registro: RegistroDiario, **cambios: Any) -> RegistroDiario:
    """
    Copia el registro aplicando cambios y renovando lastUpdated.

    Args:
        registro: Registro original (no se modifica)
        **cambios: Atributos a reemplazar

    Returns:
        Nuevo RegistroDiario
    """
    cambios["ultima_actualizacion"] = marca_tiempo_actual()
    # Copia profunda final: el registro nuevo no comparte objetos con el original
    return registro.model_copy(update=cambios).model_copy(deep=True)


def reemplazar_cama(registro: RegistroDiario, cama_id: str, paciente: Paciente) -> RegistroDiario:
    """Nuevo registro con una cama reemplazada."""
    camas = dict(registro.camas)
    camas[cama_id] = paciente
    return nuevo_registro(registro, camas=camas)


def obtener_cama(registro: RegistroDiario, cama_id: str) -> Optional[Paciente]:
    """Obtiene la cama del registro, registrando una advertencia si no existe."""
    paciente = registro.camas.get(cama_id)
    if paciente is None:
        logger.warning(f"Cama {cama_id} no existe en el registro {registro.fecha}")
    return paciente


# ============================================
# ACTUALIZACIÓN DE DATOS DEL PACIENTE
# ============================================

def actualizar_campo(
    registro: RegistroDiario,
    cama_id: str,
    campo: str,
    valor: Any,
    hoy: Optional[date] = None,
) -> RegistroDiario:
    """
    Actualiza un campo del paciente principal.

    Rechaza (sin efecto) una fecha de ingreso posterior a hoy.

    Args:
        registro: Registro actual
        cama_id: ID de la cama
        campo: Nombre del campo (atributo o alias JSON)
        valor: Nuevo valor
        hoy: Fecha de referencia (por defecto, hoy)

    Returns:
        Nuevo registro, o el mismo si la operación fue rechazada
    """
    paciente = obtener_cama(registro, cama_id)
    if paciente is None:
        return registro

    aceptados, rechazados = preparar_cambios(Paciente, {campo: valor}, hoy)
    if rechazados:
        logger.warning(f"Actualización de '{campo}' rechazada en cama {cama_id}")
        return registro

    actualizado = aplicar_cambios(paciente, aceptados)
    if actualizado is None:
        return registro

    return reemplazar_cama(registro, cama_id, actualizado)


def actualizar_campos(
    registro: RegistroDiario,
    cama_id: str,
    campos: Dict[str, Any],
    hoy: Optional[date] = None,
) -> RegistroDiario:
    """
    Actualiza varios campos del paciente en un solo commit.

    Los campos rechazados (ej: fecha de ingreso futura) se descartan
    y el resto se aplica.

    Args:
        registro: Registro actual
        cama_id: ID de la cama
        campos: Diccionario campo -> valor
        hoy: Fecha de referencia

    Returns:
        Nuevo registro, o el mismo si no quedó ningún cambio válido
    """
    paciente = obtener_cama(registro, cama_id)
    if paciente is None:
        return registro

    aceptados, rechazados = preparar_cambios(Paciente, campos, hoy)
    if rechazados:
        logger.warning(f"Campos descartados en cama {cama_id}: {', '.join(rechazados)}")
    if not aceptados:
        return registro

    actualizado = aplicar_cambios(paciente, aceptados)
    if actualizado is None:
        return registro

    return reemplazar_cama(registro, cama_id, actualizado)


def actualizar_cudyr(
    registro: RegistroDiario,
    cama_id: str,
    item: str,
    valor: int,
) -> RegistroDiario:
    """
    Actualiza un ítem CUDYR del paciente.

    Si el paciente no tiene puntaje, se crea uno en cero antes de aplicar el cambio.
    """
    paciente = obtener_cama(registro, cama_id)
    if paciente is None:
        return registro

    atributo = _resolver_item_cudyr(item)
    if atributo is None:
        logger.warning(f"Ítem CUDYR desconocido: {item}")
        return registro

    actual = paciente.cudyr or PuntajeCudyr()
    datos = actual.model_dump()
    datos[atributo] = valor
    try:
        cudyr = PuntajeCudyr.model_validate(datos)
    except ValueError:
        logger.warning(f"Valor CUDYR inválido para {item}: {valor}")
        return registro

    return reemplazar_cama(registro, cama_id, paciente.model_copy(update={"cudyr": cudyr}))


def _resolver_item_cudyr(item: str) -> Optional[str]:
    if item in PuntajeCudyr.model_fields:
        return item
    for nombre, info in PuntajeCudyr.model_fields.items():
        if info.alias == item:
            return nombre
    return None


# ============================================
# LIMPIEZA
# ============================================

def limpiar_paciente(registro: RegistroDiario, cama_id: str) -> RegistroDiario:
    """
    Deja la cama libre.

    Solo se conserva la ubicación; se eliminan la cuna clínica
    y la cuna de acompañante.
    """
    paciente = obtener_cama(registro, cama_id)
    if paciente is None:
        return registro

    return reemplazar_cama(registro, cama_id, cama_limpia(cama_id, paciente.ubicacion))


def limpiar_todas_las_camas(registro: RegistroDiario) -> RegistroDiario:
    """
    Limpia todas las camas del catálogo y vacía los logs de altas y traslados.
    """
    camas = dict(registro.camas)
    for definicion in CATALOGO_CAMAS:
        anterior = registro.camas.get(definicion.id)
        ubicacion = anterior.ubicacion if anterior is not None else ""
        camas[definicion.id] = cama_limpia(definicion.id, ubicacion)

    logger.info(f"Todas las camas limpiadas en registro {registro.fecha}")
    return nuevo_registro(registro, camas=camas, altas=[], traslados=[])


# ============================================
# MOVER / COPIAR
# ============================================

def mover_o_copiar_paciente(
    registro: RegistroDiario,
    modo: ModoMovimientoEnum,
    cama_origen_id: str,
    cama_destino_id: str,
) -> RegistroDiario:
    """
    Mueve o copia un paciente a otra cama.

    El destino recibe una copia profunda del origen conservando su
    propio bedId y ubicación. Al mover, el origen queda libre
    (conservando su ubicación); al copiar, el origen no cambia.

    Args:
        registro: Registro actual
        modo: MOVER o COPIAR
        cama_origen_id: Cama con el paciente
        cama_destino_id: Cama de destino

    Returns:
        Nuevo registro, o el mismo si el origen está vacío
    """
    origen = obtener_cama(registro, cama_origen_id)
    destino = obtener_cama(registro, cama_destino_id)
    if origen is None or destino is None:
        return registro

    modo = ModoMovimientoEnum(modo)

    if not origen.esta_ocupada:
        logger.warning(f"No se puede {modo.value} un paciente vacío desde {cama_origen_id}")
        return registro

    if cama_origen_id == cama_destino_id:
        logger.warning(f"Origen y destino son la misma cama ({cama_origen_id})")
        return registro

    camas = dict(registro.camas)
    copia = clonar_paciente(origen).model_copy(update={
        "cama_id": cama_destino_id,
        "ubicacion": destino.ubicacion,
    })
    camas[cama_destino_id] = copia

    if modo == ModoMovimientoEnum.MOVER:
        camas[cama_origen_id] = cama_limpia(cama_origen_id, origen.ubicacion)

    logger.info(f"Paciente {modo.value}: {cama_origen_id} -> {cama_destino_id}")
    return nuevo_registro(registro, camas=camas)


# ============================================
# BLOQUEO Y CAMAS EXTRA
# ============================================

def alternar_bloqueo_cama(
    registro: RegistroDiario,
    cama_id: str,
    motivo: Optional[str] = None,
) -> RegistroDiario:
    """
    Bloquea o desbloquea una cama.

    Al bloquear se usa el motivo indicado (o el motivo por defecto);
    al desbloquear el motivo se limpia.
    """
    paciente = obtener_cama(registro, cama_id)
    if paciente is None:
        return registro

    bloquear = not paciente.bloqueada
    cambios = {
        "bloqueada": bloquear,
        "motivo_bloqueo": (motivo or settings.DEFAULT_BLOCKED_REASON) if bloquear else "",
    }
    logger.info(f"Cama {cama_id} {'bloqueada' if bloquear else 'desbloqueada'}")
    return reemplazar_cama(registro, cama_id, paciente.model_copy(update=cambios))


def alternar_cama_extra(registro: RegistroDiario, cama_id: str) -> RegistroDiario:
    """Agrega o quita una cama extra de las camas activas del día."""
    definicion = CATALOGO_CAMAS.obtener(cama_id)
    if definicion is None or not definicion.es_extra:
        logger.warning(f"La cama {cama_id} no es una cama extra")
        return registro

    activas = list(registro.camas_extra_activas)
    if cama_id in activas:
        activas = [c for c in activas if c != cama_id]
    else:
        activas.append(cama_id)

    return nuevo_registro(registro, camas_extra_activas=activas)
