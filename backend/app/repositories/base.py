"""
Repository Base.
Consultas acotadas a un espacio de almacenamiento (produccion | demo).
"""
from typing import TypeVar, Generic, List, Type
from sqlmodel import Session, select, func

from app.models.enums import EspacioAlmacenamiento

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Repository base para tablas con columna "espacio".

    Toda consulta construida con _consulta() queda filtrada por el
    espacio del repository.

    Uso:
        class MiRepository(BaseRepository[MiTabla]):
            def __init__(self, session: Session, espacio: EspacioAlmacenamiento):
                super().__init__(session, MiTabla, espacio)
    """

    def __init__(
        self,
        session: Session,
        model: Type[T],
        espacio: EspacioAlmacenamiento = EspacioAlmacenamiento.PRODUCCION,
    ):
        """
        Inicializa el repository.

        Args:
            session: Sesión de base de datos
            model: Tabla SQLModel con columna espacio
            espacio: Espacio de almacenamiento
        """
        self.session = session
        self.model = model
        self.espacio = EspacioAlmacenamiento(espacio)

    def _consulta(self, *condiciones):
        return select(self.model).where(self.model.espacio == self.espacio.value, *condiciones)

    def _filas(self) -> List[T]:
        return list(self.session.exec(self._consulta()).all())

    def contar(self) -> int:
        """Cuenta las filas del espacio."""
        result = self.session.exec(
            select(func.count())
            .select_from(self.model)
            .where(self.model.espacio == self.espacio.value)
        ).first()
        return result or 0

    def eliminar_todos(self) -> int:
        """Elimina todas las filas del espacio. Retorna cuántas se eliminaron."""
        filas = self._filas()
        for fila in filas:
            self.session.delete(fila)
        self.session.commit()
        return len(filas)
