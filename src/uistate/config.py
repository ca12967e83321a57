"""uistate 配置

配置分为以下几类：
- 匹配配置：通配符、分组后缀
- 内置状态：Gameplay / HideAll
- Signal 配置：stream 缓冲上限
- Hook 配置：回调异常处理策略
- 日志 / 指标配置
- 调试服务配置
"""

import os

# === 匹配配置 ===
WILDCARD = "*"  # 通配符：匹配所有组件 / 所有 overlay 元素
GROUP_SUFFIX = "_*"  # 分组后缀：HUD_* 匹配 HUD_Bar, HUD_Map

# === 内置状态 ===
GAMEPLAY_STATE = "Gameplay"  # 默认状态：隐藏所有组件，显示系统 overlay
HIDE_ALL_STATE = "HideAll"  # 隐藏所有组件与 overlay

# === Overlay 配置 ===
ALL_OVERLAY = "All"  # 通配 overlay 元素标识（对应平台的 "全部"）

# === Signal 配置 ===
SIGNAL_STREAM_MAX_SIZE = 256  # 每个 stream() 订阅者的缓冲上限，满时丢弃最旧事件

# === Hook 配置 ===
# False: 回调异常直接抛出，中止剩余流转步骤
# True: 每个回调单独 catch 并记录日志
HOOK_ISOLATE_ERRORS = os.environ.get("UISTATE_HOOK_ISOLATE_ERRORS", "") in ("1", "true", "yes")

# === 日志配置 ===
LOG_LEVEL = os.environ.get("UISTATE_LOG_LEVEL", "INFO")  # 日志级别
LOG_PREFIX = "[UIStateManager]"  # 警告消息前缀

# === 指标配置 ===
METRICS_ENABLED = True  # 是否启用指标收集

# === 调试服务配置 ===
WEB_HOST = os.environ.get("UISTATE_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("UISTATE_PORT", "8765"))
