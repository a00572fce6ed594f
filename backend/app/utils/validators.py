"""
Funciones de validación.
"""
from typing import Optional
import re

# RUT chileno opcional, con o sin puntos y guión (ej: 12.345.678-9, 123456789)
PATRON_RUT = re.compile(r"^(\d{1,2}\.?\d{3}\.?\d{3}-?[\dkK])?$")
PATRON_FECHA = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def calcular_digito_verificador(numero: str) -> str:
    """
    Calcula el dígito verificador de un RUT (módulo 11).

    Args:
        numero: Parte numérica del RUT, sin puntos

    Returns:
        Dígito verificador ('0'-'9' o 'K')
    """
    suma = 0
    multiplicador = 2

    for digito in reversed(numero):
        suma += int(digito) * multiplicador
        multiplicador = multiplicador + 1 if multiplicador < 7 else 2

    dv = 11 - (suma % 11)
    if dv == 11:
        return "0"
    if dv == 10:
        return "K"
    return str(dv)


def validar_rut_chileno(rut: str) -> bool:
    """
    Valida formato y dígito verificador de un RUT chileno.

    Args:
        rut: RUT en formato "12345678-9" o "12.345.678-K"

    Returns:
        True si el RUT es válido
    """
    rut = rut.upper().replace(".", "").replace(" ", "")
    if not re.match(r"^\d{7,8}-[\dK]$", rut):
        return False

    numero, dv = rut.split("-")
    return dv == calcular_digito_verificador(numero)


def validar_formato_rut(rut: Optional[str]) -> bool:
    """Valida solo el formato. Un RUT vacío es válido (campo opcional)."""
    if not rut or not rut.strip():
        return True
    return bool(PATRON_RUT.match(rut.strip()))


def formatear_rut(numero: str) -> str:
    """
    Formatea un número de RUT con puntos, guión y dígito verificador.

    Examples:
        >>> formatear_rut("12345678")
        '12.345.678-5'
    """
    formateado = ""
    for i, digito in enumerate(reversed(numero)):
        if i > 0 and i % 3 == 0:
            formateado = "." + formateado
        formateado = digito + formateado
    return f"{formateado}-{calcular_digito_verificador(numero)}"
