#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
异常模块

定义MultiLog库中使用的各种异常类。
"""

from .base import (
    MultiLogError,
    LogNotFoundError,
    DeviceError,
    ConfigurationError,
    LoggerClosedError
)

__all__ = [
    "MultiLogError",
    "LogNotFoundError",
    "DeviceError",
    "ConfigurationError",
    "LoggerClosedError"
]
