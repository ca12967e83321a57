"""Telemetry - 统一日志和指标入口

提供统一的日志工厂和指标 facade，便于观测性追踪。

日志格式: [module] msg
指标示例: transition.ok, transition.fail, component.show, hooks.calls
"""

import logging

# 全局日志配置
_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """获取带模块前缀的 logger

    Args:
        name: 模块名（通常使用 __name__）

    Returns:
        配置好的 Logger 实例
    """
    logger = logging.getLogger(name)
    return logger


def setup_logging(level: str | None = None) -> None:
    """配置根 logger（入口程序调用，库代码不调用）

    Args:
        level: 日志级别名，None 使用配置默认值
    """
    from .config import LOG_LEVEL

    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=_LOG_FORMAT)


def report_warning(logger: logging.Logger, kind: str, message: str) -> str:
    """警告旁路：记录 warning 日志并计数

    所有非致命错误（组件不存在、重复注册等）都经由此处上报。

    Args:
        logger: 调用方 logger
        kind: 错误类型（ErrorKind.value）
        message: 可读消息

    Returns:
        格式化后的消息（便于作为 reason 返回）
    """
    from .config import LOG_PREFIX, METRICS_ENABLED

    text = f"{LOG_PREFIX} {kind}: {message}"
    logger.warning(text)
    if METRICS_ENABLED:
        metrics.inc("uistate.warnings", labels={"kind": kind})
    return text


class Metrics:
    """指标收集 facade

    提供简单的计数器和 gauge 接口。
    当前实现为内存存储。
    """

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._gauges: dict[str, float] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """递增计数器

        Args:
            name: 指标名（如 "transition.ok"）
            labels: 可选标签（如 {"kind": "StateNotFound"}）
            value: 递增值，默认 1
        """
        key = self._make_key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def gauge(self, name: str, value: float, labels: dict[str, str] | None = None) -> None:
        """设置 gauge 值

        Args:
            name: 指标名（如 "hides.pending"）
            value: gauge 值
            labels: 可选标签
        """
        key = self._make_key(name, labels)
        self._gauges[key] = value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """获取计数器值（用于测试）"""
        key = self._make_key(name, labels)
        return self._counters.get(key, 0)

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        """获取 gauge 值（用于测试）"""
        key = self._make_key(name, labels)
        return self._gauges.get(key, 0.0)

    def reset(self) -> None:
        """重置所有指标（用于测试）"""
        self._counters.clear()
        self._gauges.clear()

    def _make_key(self, name: str, labels: dict[str, str] | None) -> str:
        """生成指标 key"""
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"

    def get_all_counters(self) -> dict[str, int]:
        """获取所有计数器（用于调试）"""
        return dict(self._counters)


# 全局指标实例
metrics = Metrics()
