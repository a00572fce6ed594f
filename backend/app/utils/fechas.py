"""
Utilidades de fechas.
Formato ISO (YYYY-MM-DD) para claves de registro y DD-MM-YYYY para reportes.
"""
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional


def marca_tiempo_actual() -> str:
    """
    Retorna la marca de tiempo actual en UTC.

    Formato ISO-8601 con milisegundos y sufijo Z
    (ej: 2025-01-15T10:30:00.123Z), compatible con los respaldos existentes.
    """
    ahora = datetime.now(timezone.utc)
    return ahora.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ahora.microsecond // 1000:03d}Z"


def parsear_marca_tiempo(valor: Optional[str]) -> Optional[datetime]:
    """
    Convierte una marca de tiempo ISO-8601 en datetime con zona horaria.

    Args:
        valor: String ISO-8601 (acepta sufijo Z)

    Returns:
        datetime en UTC o None si el valor es vacío o inválido
    """
    if not valor:
        return None
    try:
        resultado = datetime.fromisoformat(valor.replace("Z", "+00:00"))
    except ValueError:
        return None
    if resultado.tzinfo is None:
        resultado = resultado.replace(tzinfo=timezone.utc)
    return resultado


def parsear_fecha(valor: Optional[str]) -> Optional[date]:
    """Convierte YYYY-MM-DD en date. Retorna None si no es válida."""
    if not valor:
        return None
    try:
        return date.fromisoformat(valor[:10])
    except ValueError:
        return None


def hoy_iso() -> str:
    """Fecha de hoy en formato YYYY-MM-DD."""
    return date.today().isoformat()


def es_fecha_futura(valor: Optional[str], hoy: Optional[date] = None) -> bool:
    """
    Indica si una fecha es posterior a hoy.

    La comparación es por día calendario (hora normalizada a medianoche).
    Un valor vacío o no parseable no se considera futuro.
    """
    fecha = parsear_fecha(valor)
    if fecha is None:
        return False
    return fecha > (hoy or date.today())


def formatear_fecha_reporte(valor: Optional[str]) -> str:
    """
    Convierte YYYY-MM-DD a DD-MM-YYYY.

    Examples:
        >>> formatear_fecha_reporte("2025-01-15")
        '15-01-2025'
        >>> formatear_fecha_reporte("")
        '-'
    """
    if not valor:
        return "-"
    partes = valor[:10].split("-")
    if len(partes) != 3:
        return valor
    anio, mes, dia = partes
    return f"{dia}-{mes}-{anio}"


def dias_entre(desde: Optional[str], hasta: str) -> int:
    """Días transcurridos entre dos fechas ISO. 0 si falta el inicio."""
    inicio = parsear_fecha(desde)
    fin = parsear_fecha(hasta)
    if inicio is None or fin is None:
        return 0
    return (fin - inicio).days


def sumar_dias(valor: str, dias: int) -> str:
    """Suma días a una fecha ISO y retorna una fecha ISO."""
    return (date.fromisoformat(valor) + timedelta(days=dias)).isoformat()


def fechas_del_mes(anio: int, mes: int) -> List[str]:
    """Todas las fechas ISO de un mes calendario."""
    fecha = date(anio, mes, 1)
    resultado = []
    while fecha.month == mes:
        resultado.append(fecha.isoformat())
        fecha += timedelta(days=1)
    return resultado
