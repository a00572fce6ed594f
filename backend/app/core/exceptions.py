"""
Excepciones personalizadas del sistema.
Proporciona excepciones semánticas para mejor manejo de errores.

Las operaciones puras sobre el registro diario nunca lanzan excepciones
por reglas de dominio (retornan el mismo registro). Estas excepciones
cubren la capa de orquestación, la infraestructura y la API.
"""
from typing import List, Optional


class BaseAppException(Exception):
    """
    Excepción base de la aplicación.
    Todas las excepciones personalizadas heredan de esta.
    """
    def __init__(self, message: str, code: str = "ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# ============================================
# ERRORES DE VALIDACIÓN
# ============================================

class ValidationError(BaseAppException):
    """Error de validación de datos."""
    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR")


class OperacionRechazadaError(BaseAppException):
    """
    Operación rechazada por una regla de dominio.

    Se usa en la capa API para informar al usuario el motivo
    (ej: deshacer un alta sobre una cama ya ocupada).
    """
    def __init__(self, message: str):
        super().__init__(message, "OPERACION_RECHAZADA")


# ============================================
# ERRORES DE NO ENCONTRADO
# ============================================

class NotFoundError(BaseAppException):
    """Recurso no encontrado."""
    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} con identificador '{identifier}' no encontrado",
            "NOT_FOUND"
        )
        self.resource = resource
        self.identifier = identifier


class RegistroNotFoundError(NotFoundError):
    """Registro diario no encontrado."""
    def __init__(self, fecha: str):
        super().__init__("Registro diario", fecha)


class CamaNotFoundError(NotFoundError):
    """Cama no encontrada en el catálogo."""
    def __init__(self, cama_id: str):
        super().__init__("Cama", cama_id)


# ============================================
# ERRORES DE SINCRONIZACIÓN
# ============================================

class SincronizacionError(BaseAppException):
    """Error al escribir o leer del almacén remoto."""
    def __init__(self, message: str):
        super().__init__(message, "SYNC_ERROR")


# ============================================
# ERRORES DE IMPORTACIÓN
# ============================================

class ImportacionError(BaseAppException):
    """El archivo de respaldo no cumple con el formato requerido."""
    def __init__(self, message: str, errores: Optional[List[str]] = None):
        super().__init__(message, "IMPORTACION_ERROR")
        self.errores = errores or []
