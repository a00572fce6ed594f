"""
Lógica común de egresos (altas y traslados).

Un egreso toma una instantánea del paciente (y de su cuna clínica
si corresponde), libera la cama y agrega los eventos al log.
Deshacer restaura la instantánea si el lugar de destino está libre.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, TypeVar
import uuid

from app.models.paciente import Paciente
from app.models.registro import EventoEgreso, RegistroDiario
from app.services.paciente_factory import a_paciente, a_paciente_cuna, clonar_paciente
from app.utils.constants import CATALOGO_CAMAS

E = TypeVar("E", bound=EventoEgreso)

TIPO_CAMA_CUNA = "Cuna"


@dataclass
class ResultadoDeshacer:
    """Resultado de deshacer un alta o traslado."""
    exito: bool
    mensaje: str
    registro: RegistroDiario
    evento_id: Optional[str] = None
    cama_id: Optional[str] = None


def nuevo_id_evento() -> str:
    return str(uuid.uuid4())


def datos_evento_principal(
    cama_id: str, paciente: Paciente, incluir_cuna: bool = True
) -> Dict[str, Any]:
    """
    Campos comunes del evento del paciente principal.

    Con incluir_cuna=False la instantánea no lleva la cuna clínica: la
    cuna tiene su propio evento anidado y se restaura por separado.
    """
    datos_originales = clonar_paciente(paciente)
    if not incluir_cuna:
        datos_originales = datos_originales.model_copy(update={"cuna_clinica": None})

    definicion = CATALOGO_CAMAS.obtener(cama_id)
    return {
        "id": nuevo_id_evento(),
        "nombre_cama": definicion.nombre if definicion else cama_id,
        "cama_id": cama_id,
        "tipo_cama": definicion.tipo.value if definicion else "",
        "nombre_paciente": paciente.nombre,
        "rut": paciente.rut,
        "diagnostico": paciente.diagnostico,
        "edad": paciente.edad,
        "prevision": paciente.prevision,
        "origen": paciente.condicion_permanencia,
        "es_rapanui": paciente.es_rapanui,
        "datos_originales": datos_originales,
        "es_anidado": False,
    }


def datos_evento_cuna(cama_id: str, paciente: Paciente) -> Optional[Dict[str, Any]]:
    """
    Campos del evento de la cuna clínica, o None si no hay cuna con nombre.

    Previsión, condición de permanencia y pertenencia rapanui se toman de la madre.
    """
    cuna = paciente.cuna_clinica
    if cuna is None or not cuna.esta_ocupada:
        return None

    definicion = CATALOGO_CAMAS.obtener(cama_id)
    nombre_cama = definicion.nombre if definicion else cama_id
    return {
        "id": nuevo_id_evento(),
        "nombre_cama": f"{nombre_cama} (Cuna)",
        "cama_id": cama_id,
        "tipo_cama": TIPO_CAMA_CUNA,
        "nombre_paciente": cuna.nombre,
        "rut": cuna.rut,
        "diagnostico": cuna.diagnostico,
        "edad": cuna.edad,
        "prevision": paciente.prevision,
        "origen": paciente.condicion_permanencia,
        "es_rapanui": paciente.es_rapanui,
        "datos_originales": a_paciente(cuna),
        "es_anidado": True,
    }


def restaurar_evento(
    registro: RegistroDiario,
    evento: EventoEgreso,
    etiqueta: str,
) -> Tuple[Optional[Dict[str, Paciente]], str]:
    """
    Calcula el mapa de camas con la instantánea del evento restaurada.

    Args:
        registro: Registro actual
        evento: Alta o traslado a deshacer
        etiqueta: "el alta" o "el traslado" (para los mensajes)

    Returns:
        Tupla (camas nuevas, mensaje). camas es None si se rechaza.
    """
    if evento.datos_originales is None:
        return None, f"No hay datos guardados para deshacer {etiqueta} de {evento.nombre_paciente}."

    actual = registro.camas.get(evento.cama_id)
    if actual is None:
        return None, f"La cama {evento.nombre_cama} no existe en el registro."

    camas = dict(registro.camas)

    if not evento.es_anidado:
        if actual.esta_ocupada:
            return None, (
                f"No se puede deshacer {etiqueta} de {evento.nombre_paciente} porque "
                f"la cama {evento.nombre_cama} ya está ocupada por otro paciente."
            )
        restaurado = clonar_paciente(evento.datos_originales).model_copy(update={
            "cama_id": evento.cama_id,
            "ubicacion": actual.ubicacion,
        })
        camas[evento.cama_id] = restaurado
    else:
        if not actual.esta_ocupada:
            return None, (
                "Para restaurar la cuna clínica, primero debe estar ocupada "
                "la cama principal (Madre / Tutor)."
            )
        if actual.cuna_clinica is not None and actual.cuna_clinica.esta_ocupada:
            return None, (
                f"No se puede deshacer {etiqueta} de {evento.nombre_paciente} porque "
                "ya existe una cuna clínica ocupada en esta cama."
            )
        cuna = a_paciente_cuna(evento.datos_originales)
        camas[evento.cama_id] = actual.model_copy(update={
            "cuna_clinica": cuna,
            "tiene_cuna_acompanante": False,
        })

    return camas, f"Se deshizo {etiqueta} de {evento.nombre_paciente}."


def buscar_evento(eventos: List[E], evento_id: str) -> Optional[E]:
    for evento in eventos:
        if evento.id == evento_id:
            return evento
    return None
