#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
日志格式化模块

默认的日志行渲染器。MultiLog只通过 (级别, 时间, 程序名, 消息) -> str
这一接口调用渲染器，调用方可以替换为任意可调用对象。
"""

import os
import traceback
from datetime import datetime
from typing import Any, Optional

DEFAULT_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"
LINE_FORMAT = "{initial}, [{time} #{pid}] {label:>5} -- {progname}: {message}\n"


def msg_to_str(message: Any) -> str:
    """将消息对象转换为字符串

    Args:
        message: 字符串、异常或任意对象

    Returns:
        str: 字符串原样返回；异常附带类名和回溯；其他对象使用repr()
    """
    if isinstance(message, str):
        return message
    if isinstance(message, BaseException):
        text = f"{message} ({type(message).__name__})"
        if message.__traceback__ is not None:
            text += "\n" + "".join(traceback.format_tb(message.__traceback__)).rstrip("\n")
        return text
    return repr(message)


class Formatter:
    """默认日志格式化器

    输出形如 ``I, [2024-01-01T12:00:00.000000 #1234]  INFO -- app: started``
    """

    def __init__(self, datetime_format: Optional[str] = None):
        """
        初始化格式化器

        Args:
            datetime_format: 时间格式，None表示使用默认格式
        """
        self.datetime_format = datetime_format

    def format_datetime(self, timestamp: datetime) -> str:
        return timestamp.strftime(self.datetime_format or DEFAULT_DATETIME_FORMAT)

    def __call__(self, label: str, timestamp: datetime, progname: Any, message: Any) -> str:
        """渲染一行日志

        Args:
            label: 级别名称，如INFO
            timestamp: 日志时间
            progname: 程序名，可以为None
            message: 日志消息

        Returns:
            str: 以换行符结尾的日志行
        """
        return LINE_FORMAT.format(
            initial=label[:1],
            time=self.format_datetime(timestamp),
            pid=os.getpid(),
            label=label,
            progname="" if progname is None else progname,
            message=msg_to_str(message),
        )
