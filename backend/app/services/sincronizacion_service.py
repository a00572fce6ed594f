"""
Sincronización con el almacén remoto.

El almacén remoto es un espejo opcional de documentos por fecha.
La escritura local siempre ocurre primero; el remoto es best-effort.

Resolución de conflictos (last-writer-wins con supresión de eco):
1. Si el registro remoto es más de SYNC_REMOTE_MARGIN_MS más nuevo
   que el local, se acepta (viene de otro cliente).
2. Si no, y hubo un cambio local hace menos de SYNC_DEBOUNCE_MS,
   se descarta como eco de la propia escritura.
3. En otro caso se acepta el remoto.

Dos ediciones rápidas desde clientes distintos dentro de la ventana
pueden perder una de ellas: no es un esquema causalmente consistente.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional
import copy
import logging
import time

import httpx

from app.config import settings
from app.core.exceptions import SincronizacionError
from app.models.enums import EspacioAlmacenamiento
from app.models.registro import RegistroDiario
from app.utils.fechas import parsear_marca_tiempo

logger = logging.getLogger("censo_camas.sync")

Suscriptor = Callable[[RegistroDiario], None]


# ============================================
# FORMATO DEL DOCUMENTO REMOTO
# ============================================

def documento_remoto(registro: RegistroDiario) -> Dict[str, Any]:
    """Serializa para el remoto: los campos ausentes se envían como null."""
    return registro.a_documento(incluir_nulos=True)


def normalizar_documento_remoto(documento: Dict[str, Any]) -> Dict[str, Any]:
    """
    Revierte los null del remoto en clinicalCrib (null -> ausente).

    No modifica el documento recibido.
    """
    normalizado = copy.deepcopy(documento)
    for cama in (normalizado.get("beds") or {}).values():
        if isinstance(cama, dict) and "clinicalCrib" in cama and cama["clinicalCrib"] is None:
            del cama["clinicalCrib"]
    return normalizado


def registro_desde_remoto(documento: Dict[str, Any]) -> RegistroDiario:
    return RegistroDiario.model_validate(normalizar_documento_remoto(documento))


# ============================================
# ALMACENES REMOTOS
# ============================================

class AlmacenRemoto(ABC):
    """Interfaz del almacén remoto (un documento por fecha)."""

    @abstractmethod
    async def guardar(self, registro: RegistroDiario) -> None:
        """Escribe el registro; lanza SincronizacionError si falla."""

    @abstractmethod
    async def obtener(self, fecha: str) -> Optional[RegistroDiario]:
        """Lee el registro de una fecha o None si no existe."""


class AlmacenRemotoMemoria(AlmacenRemoto):
    """
    Almacén remoto en memoria del proceso.

    Guarda los documentos serializados (como lo haría el remoto real)
    y notifica a los suscriptores de cada fecha en cada escritura.
    """

    def __init__(self):
        self.documentos: Dict[str, Dict[str, Any]] = {}
        self._suscriptores: Dict[str, List[Suscriptor]] = {}

    async def guardar(self, registro: RegistroDiario) -> None:
        self.documentos[registro.fecha] = documento_remoto(registro)
        for callback in list(self._suscriptores.get(registro.fecha, [])):
            callback(registro_desde_remoto(self.documentos[registro.fecha]))

    async def obtener(self, fecha: str) -> Optional[RegistroDiario]:
        documento = self.documentos.get(fecha)
        if documento is None:
            return None
        return registro_desde_remoto(documento)

    def suscribir(self, fecha: str, callback: Suscriptor) -> Callable[[], None]:
        """
        Suscribe un callback a las escrituras de una fecha.

        Returns:
            Función que anula la suscripción
        """
        self._suscriptores.setdefault(fecha, []).append(callback)

        def anular() -> None:
            suscriptores = self._suscriptores.get(fecha, [])
            if callback in suscriptores:
                suscriptores.remove(callback)

        return anular


class AlmacenRemotoHTTP(AlmacenRemoto):
    """
    Almacén remoto vía API REST de documentos.

    Rutas: GET/PUT {base_url}/hospitals/{hospital_id}/records/{fecha}
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        hospital_id: str = settings.HOSPITAL_ID,
        timeout: float = settings.REMOTE_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.hospital_id = hospital_id
        self.timeout = timeout
        self.transport = transport

    def _url(self, fecha: str) -> str:
        return f"{self.base_url}/hospitals/{self.hospital_id}/records/{fecha}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _cliente(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def guardar(self, registro: RegistroDiario) -> None:
        try:
            async with self._cliente() as client:
                response = await client.put(
                    self._url(registro.fecha),
                    json=documento_remoto(registro),
                    headers=self._headers(),
                )
        except httpx.TimeoutException:
            raise SincronizacionError(f"Timeout al guardar {registro.fecha} en el almacén remoto")
        except httpx.RequestError as exc:
            raise SincronizacionError(f"Error de conexión con el almacén remoto: {exc}")

        if response.status_code >= 400:
            raise SincronizacionError(
                f"El almacén remoto rechazó {registro.fecha} (status {response.status_code})"
            )

    async def obtener(self, fecha: str) -> Optional[RegistroDiario]:
        try:
            async with self._cliente() as client:
                response = await client.get(self._url(fecha), headers=self._headers())
        except httpx.TimeoutException:
            raise SincronizacionError(f"Timeout al leer {fecha} del almacén remoto")
        except httpx.RequestError as exc:
            raise SincronizacionError(f"Error de conexión con el almacén remoto: {exc}")

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise SincronizacionError(
                f"Error al leer {fecha} del almacén remoto (status {response.status_code})"
            )
        return registro_desde_remoto(response.json())


_almacen_configurado: Optional[AlmacenRemoto] = None


def obtener_almacen_remoto() -> Optional[AlmacenRemoto]:
    """
    Almacén remoto según configuración (instancia única por proceso).

    Returns:
        AlmacenRemotoHTTP si hay URL, AlmacenRemotoMemoria si la
        sincronización está habilitada sin URL, None si está deshabilitada
    """
    global _almacen_configurado
    if not settings.REMOTE_SYNC_ENABLED:
        return None
    if _almacen_configurado is None:
        if settings.REMOTE_STORE_URL:
            _almacen_configurado = AlmacenRemotoHTTP(
                settings.REMOTE_STORE_URL, token=settings.REMOTE_STORE_TOKEN
            )
        else:
            _almacen_configurado = AlmacenRemotoMemoria()
        logger.info(f"Almacén remoto: {type(_almacen_configurado).__name__}")
    return _almacen_configurado


# ============================================
# RESOLUCIÓN DE CONFLICTOS
# ============================================

class ResolutorConflictos:
    """
    Decide si un registro remoto entrante reemplaza al local.

    Mantiene la hora del último cambio local por fecha. El reloj
    (segundos) es inyectable para tests.
    """

    def __init__(
        self,
        margen_remoto_ms: int = settings.SYNC_REMOTE_MARGIN_MS,
        ventana_eco_ms: int = settings.SYNC_DEBOUNCE_MS,
        reloj: Callable[[], float] = time.monotonic,
    ):
        self.margen_remoto_ms = margen_remoto_ms
        self.ventana_eco_ms = ventana_eco_ms
        self.reloj = reloj
        self._ultimo_cambio_local: Dict[str, float] = {}

    def registrar_cambio_local(self, fecha: str) -> None:
        self._ultimo_cambio_local[fecha] = self.reloj()

    def ms_desde_cambio_local(self, fecha: str) -> Optional[float]:
        ultimo = self._ultimo_cambio_local.get(fecha)
        if ultimo is None:
            return None
        return (self.reloj() - ultimo) * 1000

    def aceptar_remoto(
        self,
        local: Optional[RegistroDiario],
        remoto: RegistroDiario,
    ) -> bool:
        """
        Aplica la regla de resolución.

        Args:
            local: Registro local actual (None si no existe)
            remoto: Registro recibido del almacén remoto

        Returns:
            True si el remoto debe reemplazar al local
        """
        if local is None:
            return True

        local_ms = _a_ms(local.ultima_actualizacion)
        remoto_ms = _a_ms(remoto.ultima_actualizacion)

        if remoto_ms > local_ms + self.margen_remoto_ms:
            return True

        transcurrido = self.ms_desde_cambio_local(remoto.fecha)
        if transcurrido is not None and transcurrido < self.ventana_eco_ms:
            logger.debug(f"Actualización remota de {remoto.fecha} descartada como eco")
            return False

        return True


def _a_ms(marca: str) -> float:
    fecha = parsear_marca_tiempo(marca)
    return fecha.timestamp() * 1000 if fecha else 0.0


# Un resolutor por espacio, compartido por el proceso (las ventanas de eco
# deben sobrevivir entre requests)
_resolutores: Dict[EspacioAlmacenamiento, ResolutorConflictos] = {}


def obtener_resolutor(espacio: EspacioAlmacenamiento) -> ResolutorConflictos:
    """Resolutor de conflictos del espacio (se crea al primer uso)."""
    espacio = EspacioAlmacenamiento(espacio)
    if espacio not in _resolutores:
        _resolutores[espacio] = ResolutorConflictos()
    return _resolutores[espacio]
