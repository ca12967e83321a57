"""调试服务入口"""

import asyncio

import uvicorn

from .. import config
from ..render.console import print_state
from ..state.manager import UIStateManager
from ..telemetry import get_logger, setup_logging
from .server import WebServer

logger = get_logger(__name__)


def create_app(manager: UIStateManager | None = None) -> WebServer:
    """创建 Web 应用

    Args:
        manager: UIStateManager 实例（可选，默认创建并 init()）
    """
    if manager is None:
        manager = UIStateManager()
        manager.init()
    return WebServer(manager)


async def start_server(host: str | None = None, port: int | None = None) -> None:
    """启动服务器"""
    server = create_app()
    await server.manager.set_default()
    print_state(server.manager)

    uvicorn_config = uvicorn.Config(
        server.app,
        host=host or config.WEB_HOST,
        port=port or config.WEB_PORT,
        log_level=config.LOG_LEVEL.lower(),
    )
    uvicorn_server = uvicorn.Server(uvicorn_config)

    logger.info(
        f"[WebServer] uistate debug server starting at "
        f"http://{uvicorn_config.host}:{uvicorn_config.port}"
    )

    try:
        await uvicorn_server.serve()
    finally:
        server.close()
        await server.manager.aclose()


def main():
    """入口函数"""
    setup_logging()
    try:
        asyncio.run(start_server())
    except KeyboardInterrupt:
        print("\nServer stopped")


if __name__ == "__main__":
    main()
