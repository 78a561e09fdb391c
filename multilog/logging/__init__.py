#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
诊断日志模块

提供MultiLog库自身的诊断日志记录功能。
"""

from .logger import (
    get_logger,
    configure_logging,
    reset_logging
)

__all__ = [
    "get_logger",
    "configure_logging",
    "reset_logging"
]
