"""Web 服务器"""

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from ..hooks.signal import Connection
from ..state.manager import UIStateManager
from ..telemetry import get_logger
from .api import StateApi

logger = get_logger(__name__)


class WebServer:
    """调试服务器

    - REST: StateApi
    - WebSocket /ws: 连接时发送快照，之后推送每次 state_changed
    """

    def __init__(self, manager: UIStateManager):
        self.app = FastAPI(title="uistate")
        self.manager = manager
        self.clients: list[WebSocket] = []
        self._api = StateApi(manager)
        self._connection: Connection | None = manager.state_changed.connect(self._on_state_changed)

        self._api.setup_routes(self.app)
        self._setup_routes()

    async def _on_state_changed(self, new_state: str | None, old_state: str | None) -> None:
        """state_changed 回调"""
        await self.broadcast(
            {
                "type": "state_change",
                "new_state": new_state,
                "old_state": old_state,
            }
        )

    def _setup_routes(self):
        @self.app.websocket("/ws")
        async def websocket_endpoint(websocket: WebSocket):
            await websocket.accept()
            self.clients.append(websocket)
            try:
                await websocket.send_json({"type": "snapshot", **self.manager.snapshot()})
                while True:
                    # 只推送，忽略客户端消息
                    await websocket.receive_text()
            except WebSocketDisconnect:
                self._drop(websocket)

    def _drop(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)

    async def broadcast(self, data: dict):
        """广播消息给所有客户端"""
        for client in list(self.clients):
            try:
                await client.send_json(data)
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.debug(f"[WebServer] Dropping client: {e}")
                self._drop(client)

    def close(self) -> None:
        """断开 state_changed 订阅"""
        if self._connection:
            self._connection.disconnect()
            self._connection = None
