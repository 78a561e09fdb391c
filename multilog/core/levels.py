#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
日志级别模块

定义有序的日志级别枚举，以及级别与字符串之间的相互转换。
无法识别的输入一律降级为UNKNOWN，而不是抛出异常。
"""

from enum import IntEnum
from typing import Any


class Severity(IntEnum):
    """日志级别

    按数值排序，DEBUG最低。UNKNOWN作为哨兵值，高于所有真实级别。
    """
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    UNKNOWN = 5


# 可识别的级别名称，下标即级别数值
LEVEL_LABELS = ("DEBUG", "INFO", "WARN", "ERROR", "FATAL")


def level_to_string(level: Any) -> str:
    """将日志级别转换为字符串

    Args:
        level: 级别数值或Severity

    Returns:
        str: DEBUG/INFO/WARN/ERROR/FATAL之一，其他任何值返回UNKNOWN
    """
    if isinstance(level, bool) or not isinstance(level, int):
        return "UNKNOWN"
    if 0 <= level < len(LEVEL_LABELS):
        return LEVEL_LABELS[level]
    return "UNKNOWN"


def string_to_level(value: Any) -> Severity:
    """将字符串转换为日志级别（不区分大小写）

    Args:
        value: 级别名称，非字符串对象会先经过str()转换

    Returns:
        Severity: 对应的级别，无法识别时返回Severity.UNKNOWN
    """
    if value is None:
        return Severity.UNKNOWN
    if isinstance(value, Severity):
        return value

    label = str(value).strip().upper()
    if label in LEVEL_LABELS:
        return Severity(LEVEL_LABELS.index(label))
    return Severity.UNKNOWN


def normalize_level(value: Any) -> Severity:
    """把调用方传入的任意级别表示规范化为Severity

    所有公开入口在比较级别之前都应先调用此函数。

    Args:
        value: Severity、整数、字符串或None

    Returns:
        Severity: 规范化后的级别
    """
    if isinstance(value, Severity):
        return value
    if value is None:
        return Severity.UNKNOWN
    if isinstance(value, int) and not isinstance(value, bool):
        if Severity.DEBUG <= value <= Severity.UNKNOWN:
            return Severity(value)
        return Severity.UNKNOWN
    return string_to_level(value)


# 未显式指定级别时的默认值。保留原有行为：默认目标不输出任何日志
SILENT_BY_DEFAULT = True
DEFAULT_LEVEL = Severity.UNKNOWN if SILENT_BY_DEFAULT else Severity.INFO

# 没有任何日志目标时的最低级别哨兵
EMPTY_THRESHOLD = Severity.UNKNOWN
