"""Pytest 配置"""

import asyncio

import pytest

from uistate import MemoryPlatform, UIStateManager
from uistate.telemetry import metrics


class FakeComponent:
    """记录 show/hide 调用的测试组件"""

    def __init__(self, name: str = ""):
        self.name = name
        self.show_calls: list = []
        self.hide_calls = 0
        self.visible = False

    def show(self, properties=None):
        self.show_calls.append(properties)
        self.visible = True

    def hide(self):
        self.hide_calls += 1
        self.visible = False


class AsyncFakeComponent(FakeComponent):
    """show/hide 为 async 的测试组件"""

    def __init__(self, name: str = "", delay: float = 0.0):
        super().__init__(name)
        self.delay = delay

    async def show(self, properties=None):
        await asyncio.sleep(self.delay)
        super().show(properties)

    async def hide(self):
        await asyncio.sleep(self.delay)
        super().hide()


@pytest.fixture
def platform():
    """创建测试用内存平台"""
    return MemoryPlatform()


@pytest.fixture
def manager(platform):
    """创建测试用 UIStateManager（未 init）"""
    return UIStateManager(overlay=platform, controls=platform)


@pytest.fixture
def initialized(manager):
    """已 init() 的 UIStateManager"""
    manager.init()
    return manager


@pytest.fixture
def make_component():
    """组件工厂"""

    def factory(name: str = "", is_async: bool = False):
        return AsyncFakeComponent(name) if is_async else FakeComponent(name)

    return factory


@pytest.fixture(autouse=True)
def reset_metrics():
    """每次测试前重置指标"""
    metrics.reset()
    yield
    metrics.reset()
