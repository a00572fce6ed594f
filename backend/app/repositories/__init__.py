"""
Repositories para acceso a datos.
Abstraen las queries SQL y proporcionan una interfaz limpia.
"""
from app.repositories.base import BaseRepository
from app.repositories.registro_repo import RegistroRepository

__all__ = [
    "BaseRepository",
    "RegistroRepository",
]
