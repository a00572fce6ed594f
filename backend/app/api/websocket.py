"""
Endpoints de WebSocket.
"""
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState
import json
import logging

from app.core.websocket_manager import manager

router = APIRouter()
logger = logging.getLogger("censo_camas.websocket")


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    Endpoint WebSocket para actualizaciones del registro diario.

    El cliente puede enviar mensajes JSON con:
    - {"action": "subscribe", "fecha": "YYYY-MM-DD"} para escuchar una fecha
      (anula la suscripción a la fecha anterior)
    - {"action": "unsubscribe"} para dejar de escuchar
    - {"action": "ping"} para mantener la conexión viva
    """
    await manager.connect(websocket)

    try:
        while True:
            if websocket.client_state != WebSocketState.CONNECTED:
                break

            try:
                data = await websocket.receive_json()
            except WebSocketDisconnect:
                break
            except ValueError as e:
                logger.warning(f"Mensaje WebSocket inválido: {e}")
                continue

            action = data.get("action") if isinstance(data, dict) else None

            if action == "subscribe":
                fecha = data.get("fecha")
                if fecha:
                    manager.suscribir(websocket, fecha)
                    await websocket.send_json({"tipo": "subscribed", "fecha": fecha})

            elif action == "unsubscribe":
                fecha = manager.fecha_suscrita(websocket)
                manager.anular_suscripcion(websocket)
                await websocket.send_json({"tipo": "unsubscribed", "fecha": fecha})

            elif action == "ping":
                await websocket.send_json({"tipo": "pong"})

    except WebSocketDisconnect:
        pass  # Desconexión normal
    finally:
        manager.disconnect(websocket)
        logger.info("Cliente WebSocket desconectado")


@router.websocket("/ws/{fecha}")
async def websocket_fecha_endpoint(websocket: WebSocket, fecha: str):
    """
    Endpoint WebSocket con suscripción automática a una fecha.
    """
    await manager.connect(websocket, fecha)

    try:
        while True:
            try:
                data = await websocket.receive_json()
            except json.JSONDecodeError as e:
                logger.warning(f"Mensaje WebSocket inválido: {e}")
                continue
            if isinstance(data, dict) and data.get("action") == "ping":
                await websocket.send_json({"tipo": "pong"})
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
