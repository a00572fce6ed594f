"""
Servicio de estadísticas del censo.
Calcula la ocupación del servicio a partir del mapa de camas.

Todas las funciones son puras: no modifican la entrada ni hacen I/O.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Mapping, Optional

from app.models.enums import ModoCamaEnum
from app.models.paciente import Paciente
from app.models.registro import RegistroDiario
from app.utils.constants import CATALOGO_CAMAS, CAPACIDAD_HOSPITAL, CatalogoCamas


@dataclass(frozen=True)
class Estadisticas:
    """
    Estadísticas de ocupación de un día.

    Attributes:
        camas_ocupadas: Camas con paciente principal (censo)
        cunas_ocupadas: Solo cunas clínicas anidadas (contador interno)
        cunas_clinicas: Cama en modo Cuna ocupada + cunas anidadas (para recursos)
        cunas_acompanante: Cunas de RN sano asociadas a la madre
        total_cunas_usadas: Mobiliario de cuna en uso, con o sin paciente
        total_hospitalizados: camas_ocupadas + cunas_ocupadas
        camas_bloqueadas: Camas bloqueadas
        capacidad_servicio: Capacidad física menos camas bloqueadas
        capacidad_disponible: Capacidad del servicio menos hospitalizados
    """
    camas_ocupadas: int = 0
    cunas_ocupadas: int = 0
    cunas_clinicas: int = 0
    cunas_acompanante: int = 0
    total_cunas_usadas: int = 0
    total_hospitalizados: int = 0
    camas_bloqueadas: int = 0
    capacidad_servicio: int = 0
    capacidad_disponible: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def _tiene_nombre(paciente: Optional[object]) -> bool:
    nombre = getattr(paciente, "nombre", None) if paciente is not None else None
    return bool(nombre and nombre.strip())


def calcular_estadisticas(
    camas: Mapping[str, Paciente],
    catalogo: CatalogoCamas = CATALOGO_CAMAS,
    capacidad_total: int = CAPACIDAD_HOSPITAL,
) -> Estadisticas:
    """
    Calcula las estadísticas de ocupación.

    Recorre cada cama del catálogo (incluidas las extra); las entradas
    faltantes se omiten. Una cama bloqueada solo suma al contador de
    bloqueadas.

    Una misma cama puede sumar dos veces a cunas_clinicas: cuando está
    en modo Cuna con paciente y además tiene una cuna clínica ocupada.

    Args:
        camas: Mapa cama_id -> Paciente
        catalogo: Catálogo de camas a recorrer
        capacidad_total: Capacidad física del servicio

    Returns:
        Estadisticas del día
    """
    ocupadas = 0
    cunas_ocupadas = 0
    cunas_clinicas = 0
    cunas_acompanante = 0
    cunas_recurso = 0
    bloqueadas = 0

    for definicion in catalogo:
        paciente = camas.get(definicion.id)
        if paciente is None:
            continue

        if paciente.bloqueada:
            bloqueadas += 1
            continue

        principal_ocupada = _tiene_nombre(paciente)
        cuna_ocupada = _tiene_nombre(paciente.cuna_clinica)
        modo_cuna = paciente.modo_cama == ModoCamaEnum.CUNA

        if principal_ocupada:
            ocupadas += 1
        if cuna_ocupada:
            cunas_ocupadas += 1

        if principal_ocupada and modo_cuna:
            cunas_clinicas += 1
            cunas_recurso += 1
        if cuna_ocupada:
            cunas_clinicas += 1
            cunas_recurso += 1
        if not principal_ocupada and modo_cuna:
            # Cuna armada sin paciente
            cunas_recurso += 1

        if paciente.tiene_cuna_acompanante:
            cunas_acompanante += 1
            cunas_recurso += 1

    total_hospitalizados = ocupadas + cunas_ocupadas
    capacidad_servicio = capacidad_total - bloqueadas

    return Estadisticas(
        camas_ocupadas=ocupadas,
        cunas_ocupadas=cunas_ocupadas,
        cunas_clinicas=cunas_clinicas,
        cunas_acompanante=cunas_acompanante,
        total_cunas_usadas=cunas_recurso,
        total_hospitalizados=total_hospitalizados,
        camas_bloqueadas=bloqueadas,
        capacidad_servicio=capacidad_servicio,
        capacidad_disponible=capacidad_servicio - total_hospitalizados,
    )


def calcular_estadisticas_registro(registro: RegistroDiario) -> Estadisticas:
    """Estadísticas de un registro diario completo."""
    return calcular_estadisticas(registro.camas)


def calcular_estadisticas_periodo(registros: Iterable[RegistroDiario]) -> List[Dict[str, object]]:
    """
    Estadísticas por día para un conjunto de registros, ordenadas por fecha.

    Incluye el número de altas y traslados del día junto a la ocupación.
    """
    resultado = []
    for registro in sorted(registros, key=lambda r: r.fecha):
        estadisticas = calcular_estadisticas(registro.camas)
        resultado.append({
            "fecha": registro.fecha,
            **estadisticas.to_dict(),
            "altas": len(registro.altas),
            "traslados": len(registro.traslados),
        })
    return resultado
