#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
核心模块

包含日志级别、日志设备、格式化器和配置模型。
"""

from .levels import (
    Severity,
    LEVEL_LABELS,
    DEFAULT_LEVEL,
    EMPTY_THRESHOLD,
    SILENT_BY_DEFAULT,
    level_to_string,
    string_to_level,
    normalize_level
)
from .device import LogDevice, DEFAULT_ROTATION_AGE, DEFAULT_ROTATION_SIZE
from .formatter import Formatter, msg_to_str
from .config import DestinationConfig, MultiLogConfig, DEFAULT_NAME

__all__ = [
    # 日志级别
    "Severity",
    "LEVEL_LABELS",
    "DEFAULT_LEVEL",
    "EMPTY_THRESHOLD",
    "SILENT_BY_DEFAULT",
    "level_to_string",
    "string_to_level",
    "normalize_level",

    # 设备和格式化
    "LogDevice",
    "DEFAULT_ROTATION_AGE",
    "DEFAULT_ROTATION_SIZE",
    "Formatter",
    "msg_to_str",

    # 配置
    "DestinationConfig",
    "MultiLogConfig",
    "DEFAULT_NAME",
]
