"""
Repository de Registros Diarios.

Almacenamiento local de un documento JSON por fecha dentro de un
espacio (produccion | demo). El espacio se inyecta en el constructor;
dos repositories con espacios distintos nunca ven los datos del otro.
"""
from typing import Dict, List, Optional

import json
import logging

from sqlmodel import Session, select

from app.models.documento import DocumentoRegistro, NominaEnfermeria, ahora_utc
from app.models.enums import EspacioAlmacenamiento
from app.models.registro import RegistroDiario
from app.repositories.base import BaseRepository

logger = logging.getLogger("censo_camas.repositorio")


class RegistroRepository(BaseRepository[DocumentoRegistro]):
    """Repository para los registros diarios de un espacio de almacenamiento."""

    def __init__(
        self,
        session: Session,
        espacio: EspacioAlmacenamiento = EspacioAlmacenamiento.PRODUCCION,
    ):
        super().__init__(session, DocumentoRegistro, espacio)

    # ============================================
    # LECTURA
    # ============================================

    def _documento(self, fecha: str) -> Optional[DocumentoRegistro]:
        return self.session.exec(self._consulta(DocumentoRegistro.fecha == fecha)).first()

    def obtener_por_fecha(self, fecha: str) -> Optional[RegistroDiario]:
        """
        Obtiene el registro de una fecha.

        Args:
            fecha: Fecha YYYY-MM-DD

        Returns:
            RegistroDiario o None si no existe
        """
        documento = self._documento(fecha)
        if documento is None:
            return None
        return self._a_registro(documento)

    def obtener_anterior(self, fecha: str) -> Optional[RegistroDiario]:
        """
        Obtiene el registro existente más cercano estrictamente anterior a la fecha.

        Las fechas ISO se ordenan correctamente como texto.
        """
        documento = self.session.exec(
            self._consulta(DocumentoRegistro.fecha < fecha)
            .order_by(DocumentoRegistro.fecha.desc())
        ).first()
        if documento is None:
            return None
        return self._a_registro(documento)

    def obtener_todos_registros(self) -> Dict[str, RegistroDiario]:
        """Mapa fecha -> RegistroDiario del espacio completo."""
        documentos = self.session.exec(
            self._consulta().order_by(DocumentoRegistro.fecha)
        ).all()
        return {doc.fecha: self._a_registro(doc) for doc in documentos}

    def obtener_rango(self, desde: str, hasta: str) -> List[RegistroDiario]:
        """Registros entre dos fechas (inclusive), ordenados por fecha."""
        documentos = self.session.exec(
            self._consulta(DocumentoRegistro.fecha >= desde, DocumentoRegistro.fecha <= hasta)
            .order_by(DocumentoRegistro.fecha)
        ).all()
        return [self._a_registro(doc) for doc in documentos]

    def fechas_disponibles(self) -> List[str]:
        """Fechas con registro, de la más reciente a la más antigua."""
        return list(self.session.exec(
            select(DocumentoRegistro.fecha)
            .where(DocumentoRegistro.espacio == self.espacio.value)
            .order_by(DocumentoRegistro.fecha.desc())
        ).all())

    # ============================================
    # ESCRITURA
    # ============================================

    def guardar_registro(self, registro: RegistroDiario) -> RegistroDiario:
        """
        Guarda (inserta o reemplaza) el registro de su fecha.

        Args:
            registro: Registro a persistir

        Returns:
            El mismo registro
        """
        self._escribir(registro)
        self.session.commit()
        logger.debug(f"Registro {registro.fecha} guardado en espacio {self.espacio.value}")
        return registro

    def fusionar(self, registros: Dict[str, RegistroDiario]) -> int:
        """
        Fusión superficial por fecha: las fechas importadas reemplazan a las
        existentes y las demás se conservan.

        Returns:
            Número de registros escritos
        """
        for registro in registros.values():
            self._escribir(registro)
        self.session.commit()
        logger.info(f"{len(registros)} registro(s) fusionados en espacio {self.espacio.value}")
        return len(registros)

    def guardar_varios(self, registros: List[RegistroDiario]) -> int:
        return self.fusionar({r.fecha: r for r in registros})

    def eliminar_todos(self) -> int:
        """Elimina todos los registros del espacio. Retorna cuántos se eliminaron."""
        eliminados = super().eliminar_todos()
        logger.warning(f"{eliminados} registro(s) eliminados del espacio {self.espacio.value}")
        return eliminados

    # ============================================
    # NÓMINA DE ENFERMERÍA
    # ============================================

    def obtener_nomina(self) -> List[str]:
        nomina = self.session.get(NominaEnfermeria, self.espacio.value)
        if nomina is None:
            return []
        return json.loads(nomina.contenido)

    def guardar_nomina(self, nombres: List[str]) -> List[str]:
        """Reemplaza la nómina de enfermeros/as del espacio."""
        nomina = self.session.get(NominaEnfermeria, self.espacio.value)
        if nomina is None:
            nomina = NominaEnfermeria(espacio=self.espacio.value)
        nomina.contenido = json.dumps(nombres, ensure_ascii=False)
        nomina.updated_at = ahora_utc()
        self.session.add(nomina)
        self.session.commit()
        return nombres

    # ============================================
    # HELPERS
    # ============================================

    def _escribir(self, registro: RegistroDiario) -> None:
        documento = self._documento(registro.fecha)
        contenido = json.dumps(registro.a_documento(), ensure_ascii=False)
        if documento is None:
            documento = DocumentoRegistro(
                espacio=self.espacio.value,
                fecha=registro.fecha,
                contenido=contenido,
            )
        else:
            documento.contenido = contenido
            documento.updated_at = ahora_utc()
        self.session.add(documento)

    @staticmethod
    def _a_registro(documento: DocumentoRegistro) -> RegistroDiario:
        return RegistroDiario.model_validate(json.loads(documento.contenido))
