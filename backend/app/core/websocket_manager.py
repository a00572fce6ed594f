"""
Gestor de conexiones WebSocket.
Maneja la suscripción por fecha y el broadcast de registros actualizados.
"""
from typing import List, Dict, Optional, Set
from fastapi import WebSocket
import logging

logger = logging.getLogger("censo_camas.websocket")


class ConnectionManager:
    """
    Gestor de conexiones WebSocket.

    Características:
    - Mantiene lista de conexiones activas
    - Cada conexión está suscrita como máximo a una fecha
    - Cambiar de fecha anula la suscripción anterior
    - Limpieza automática de conexiones muertas
    """

    def __init__(self):
        # Todas las conexiones activas
        self.active_connections: List[WebSocket] = []
        # Conexiones por fecha (YYYY-MM-DD)
        self.suscripciones_fecha: Dict[str, Set[WebSocket]] = {}

    async def connect(
        self,
        websocket: WebSocket,
        fecha: Optional[str] = None
    ) -> None:
        """
        Conecta un cliente WebSocket.

        Args:
            websocket: Conexión WebSocket
            fecha: Fecha a la que suscribirse (opcional)
        """
        await websocket.accept()
        self.active_connections.append(websocket)

        if fecha:
            self.suscribir(websocket, fecha)

        logger.info(
            f"WebSocket conectado. Total conexiones: {len(self.active_connections)}"
        )

    def disconnect(self, websocket: WebSocket) -> None:
        """
        Desconecta un cliente WebSocket.

        Args:
            websocket: Conexión a desconectar
        """
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

        self.anular_suscripcion(websocket)

        logger.info(
            f"WebSocket desconectado. Total conexiones: {len(self.active_connections)}"
        )

    def suscribir(self, websocket: WebSocket, fecha: str) -> None:
        """
        Suscribe una conexión a una fecha.

        Una conexión escucha una sola fecha: se elimina de la anterior.
        """
        self.anular_suscripcion(websocket)
        self.suscripciones_fecha.setdefault(fecha, set()).add(websocket)

    def anular_suscripcion(self, websocket: WebSocket) -> None:
        """Elimina la conexión de cualquier fecha a la que esté suscrita."""
        for fecha in list(self.suscripciones_fecha.keys()):
            if websocket in self.suscripciones_fecha[fecha]:
                self.suscripciones_fecha[fecha].discard(websocket)
                # Limpiar set vacío
                if not self.suscripciones_fecha[fecha]:
                    del self.suscripciones_fecha[fecha]

    def fecha_suscrita(self, websocket: WebSocket) -> Optional[str]:
        for fecha, conexiones in self.suscripciones_fecha.items():
            if websocket in conexiones:
                return fecha
        return None

    async def broadcast(self, message: dict) -> None:
        """
        Envía un mensaje a todos los clientes conectados.

        Args:
            message: Diccionario con el mensaje a enviar
        """
        await self._enviar(list(self.active_connections), message)

    async def broadcast_to_fecha(self, fecha: str, message: dict) -> None:
        """
        Envía un mensaje solo a clientes suscritos a una fecha.

        Args:
            fecha: Fecha del registro (YYYY-MM-DD)
            message: Diccionario con el mensaje a enviar
        """
        if fecha not in self.suscripciones_fecha:
            return
        await self._enviar(list(self.suscripciones_fecha[fecha]), message)

    async def send_update(
        self,
        tipo: str,
        fecha: Optional[str] = None,
        **kwargs
    ) -> None:
        """
        Envía una actualización de estado.

        Args:
            tipo: Tipo de actualización (registro_actualizado, alta_registrada, etc.)
            fecha: Fecha afectada; si se omite se envía a todos
            **kwargs: Datos adicionales
        """
        message = {
            "tipo": tipo,
            "fecha": fecha,
            **kwargs
        }

        if fecha:
            await self.broadcast_to_fecha(fecha, message)
        else:
            await self.broadcast(message)

    async def _enviar(self, conexiones: List[WebSocket], message: dict) -> None:
        disconnected: List[WebSocket] = []

        for connection in conexiones:
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning(f"Error enviando mensaje: {e}")
                disconnected.append(connection)

        # Limpiar conexiones muertas
        for conn in disconnected:
            self.disconnect(conn)

    @property
    def connection_count(self) -> int:
        """Número total de conexiones activas."""
        return len(self.active_connections)


# Instancia global del manager
manager = ConnectionManager()
