#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
MultiLog - 多目标分级日志库

一次日志调用分发到多个独立配置的输出设备，每个设备有自己的最低级别，
可以在运行时增删目标或调整级别，而不影响已打开的其他设备。

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "liber"
__email__ = "liberalcxl@gmail.com"
__description__ = "多目标分级日志库，单次调用分发到多个独立设置级别的输出设备"

# 导入核心类和函数
from .multilog import MultiLog, Destination, SUMMARY_HEADER, NO_LOGS_LINE
from .core.levels import (
    Severity,
    DEFAULT_LEVEL,
    EMPTY_THRESHOLD,
    SILENT_BY_DEFAULT,
    level_to_string,
    string_to_level,
    normalize_level
)
from .core.device import LogDevice
from .core.formatter import Formatter
from .core.config import DestinationConfig, MultiLogConfig

# 导入诊断日志
from .logging.logger import get_logger, configure_logging

# 导入异常类
from .exceptions.base import (
    MultiLogError,
    LogNotFoundError,
    DeviceError,
    ConfigurationError,
    LoggerClosedError
)

# 公开的API
__all__ = [
    # 版本信息
    "__version__",
    "__author__",
    "__email__",
    "__description__",

    # 多目标日志器
    "MultiLog",
    "Destination",
    "SUMMARY_HEADER",
    "NO_LOGS_LINE",

    # 日志级别
    "Severity",
    "DEFAULT_LEVEL",
    "EMPTY_THRESHOLD",
    "SILENT_BY_DEFAULT",
    "level_to_string",
    "string_to_level",
    "normalize_level",

    # 设备、格式化和配置
    "LogDevice",
    "Formatter",
    "DestinationConfig",
    "MultiLogConfig",

    # 诊断日志
    "get_logger",
    "configure_logging",

    # 异常类
    "MultiLogError",
    "LogNotFoundError",
    "DeviceError",
    "ConfigurationError",
    "LoggerClosedError",
]
