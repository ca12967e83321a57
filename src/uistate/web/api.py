"""HTTP 控制接口 - 远程驱动 UIStateManager（调试用）"""

from typing import TYPE_CHECKING, Any

from fastapi import HTTPException
from pydantic import BaseModel

from ..telemetry import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI

    from ..state.manager import UIStateManager

logger = get_logger(__name__)


class SetStateRequest(BaseModel):
    """状态流转请求体"""

    state: str
    force: bool = False
    properties: Any = None


class ShowComponentRequest(BaseModel):
    """单个组件显示请求体"""

    properties: Any = None
    bypass_whitelist: bool = False


class ResultResponse(BaseModel):
    """(success, reason) 响应"""

    success: bool
    reason: str | None = None


class StateApi:
    """HTTP 控制接口

    提供 `/api/state` 与 `/api/component/*` 端点。
    """

    def __init__(self, manager: "UIStateManager"):
        self.manager = manager

    def setup_routes(self, app: "FastAPI") -> None:
        """设置 API 路由"""

        @app.get("/api/state")
        async def get_state():
            """获取状态快照"""
            return self.manager.snapshot()

        @app.post("/api/state", response_model=ResultResponse)
        async def set_state(request: SetStateRequest):
            """流转到指定状态"""
            logger.debug(f"[StateApi] set_state: {request.state} (force={request.force})")
            success, reason = await self.manager.set_state(
                request.state, force=request.force, properties=request.properties
            )
            return ResultResponse(success=bool(success), reason=reason)

        @app.post("/api/state/default", response_model=ResultResponse)
        async def set_default():
            """回到默认状态"""
            success, reason = await self.manager.set_default()
            return ResultResponse(success=bool(success), reason=reason)

        @app.post("/api/state/previous", response_model=ResultResponse)
        async def go_previous():
            """回到上一个状态"""
            result = await self.manager.go_previous()
            if result is None:
                return ResultResponse(success=False, reason="No previous state recorded.")
            return ResultResponse(success=bool(result.success), reason=result.reason)

        @app.post("/api/component/{name}/show", response_model=ResultResponse)
        async def show_component(name: str, request: ShowComponentRequest | None = None):
            """显示单个组件"""
            request = request or ShowComponentRequest()
            if name not in self.manager.components:
                raise HTTPException(status_code=404, detail=f"Component {name} not found")
            shown = await self.manager.show_component(
                name,
                {"properties": request.properties, "bypass_whitelist": request.bypass_whitelist},
            )
            return ResultResponse(
                success=shown, reason=None if shown else "Not allowed by current state"
            )

        @app.post("/api/component/{name}/hide", response_model=ResultResponse)
        async def hide_component(name: str):
            """隐藏单个组件"""
            if name not in self.manager.components:
                raise HTTPException(status_code=404, detail=f"Component {name} not found")
            await self.manager.hide_component(name)
            return ResultResponse(success=True)
