"""
Servicio de categorización CUDYR.

Calcula puntajes y categorías de dependencia/riesgo a partir
de los 14 ítems del instrumento.

Categorías:
- Dependencia: 1 (13-18, total), 2 (7-12, parcial), 3 (0-6, autosuficiencia parcial)
- Riesgo: A (>=19, máximo), B (12-18), C (6-11), D (0-5, mínimo)
- Categoría combinada: riesgo + dependencia (ej: "B2")
"""
from dataclasses import dataclass
from typing import Optional

from app.models.cudyr import PuntajeCudyr, ITEMS_DEPENDENCIA, ITEMS_RIESGO


@dataclass(frozen=True)
class ResultadoCudyr:
    """Valores derivados de un puntaje CUDYR."""
    puntaje_dependencia: int
    puntaje_riesgo: int
    categoria_dependencia: str
    categoria_riesgo: str
    categoria: str
    categorizado: bool


def puntaje_vacio() -> PuntajeCudyr:
    """Retorna un puntaje CUDYR con todos los ítems en 0."""
    return PuntajeCudyr()


def calcular_puntaje_dependencia(cudyr: Optional[PuntajeCudyr]) -> int:
    """Suma de los 6 ítems de dependencia."""
    if cudyr is None:
        return 0
    return sum(getattr(cudyr, item) for item in ITEMS_DEPENDENCIA)


def calcular_puntaje_riesgo(cudyr: Optional[PuntajeCudyr]) -> int:
    """Suma de los 8 ítems de riesgo."""
    if cudyr is None:
        return 0
    return sum(getattr(cudyr, item) for item in ITEMS_RIESGO)


def categoria_dependencia(puntaje: int) -> str:
    if puntaje >= 13:
        return "1"
    if puntaje >= 7:
        return "2"
    return "3"


def categoria_riesgo(puntaje: int) -> str:
    if puntaje >= 19:
        return "A"
    if puntaje >= 12:
        return "B"
    if puntaje >= 6:
        return "C"
    return "D"


def calcular_cudyr(cudyr: Optional[PuntajeCudyr]) -> ResultadoCudyr:
    """
    Calcula todos los valores derivados de un puntaje CUDYR.

    Un puntaje ausente se trata como todos los ítems en 0.

    Args:
        cudyr: Puntaje a evaluar (o None)

    Returns:
        ResultadoCudyr con sumas, categorías y si el paciente está categorizado
    """
    dependencia = calcular_puntaje_dependencia(cudyr)
    riesgo = calcular_puntaje_riesgo(cudyr)
    cat_dependencia = categoria_dependencia(dependencia)
    cat_riesgo = categoria_riesgo(riesgo)

    return ResultadoCudyr(
        puntaje_dependencia=dependencia,
        puntaje_riesgo=riesgo,
        categoria_dependencia=cat_dependencia,
        categoria_riesgo=cat_riesgo,
        categoria=f"{cat_riesgo}{cat_dependencia}",
        categorizado=dependencia > 0 or riesgo > 0,
    )
