#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
日志设备模块

把一个原始输出目标（文件路径或可写流）包装为统一的日志设备。
文件轮转完全委托给标准库的RotatingFileHandler。
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Optional, Union

from ..exceptions.base import DeviceError
from ..logging.logger import get_logger

logger = get_logger(__name__)

# 默认轮转参数：保留的旧文件数量为0表示不轮转
DEFAULT_ROTATION_AGE = 0
DEFAULT_ROTATION_SIZE = 1048576


class _RaisingHandlerMixin:
    """让处理器把写入错误直接抛给调用方，而不是打印到stderr"""

    def handleError(self, record: logging.LogRecord) -> None:
        raise


class _StreamHandler(_RaisingHandlerMixin, logging.StreamHandler):
    terminator = ""


class _RotatingFileHandler(_RaisingHandlerMixin, logging.handlers.RotatingFileHandler):
    terminator = ""


def _is_standard_stream(stream: Any) -> bool:
    """判断是否为进程的标准输出/错误流"""
    standard = (sys.stdout, sys.stderr, sys.__stdout__, sys.__stderr__)
    return any(stream is s for s in standard if s is not None)


class LogDevice:
    """日志设备

    包装文件路径或可写流，对外提供write/close以及描述信息。
    设备由其所属的日志目标独占，close()只会真正关闭一次。
    """

    def __init__(self,
                 target: Union[str, os.PathLike, Any],
                 rotation_age: int = DEFAULT_ROTATION_AGE,
                 rotation_size: int = DEFAULT_ROTATION_SIZE):
        """
        初始化日志设备

        Args:
            target: 文件路径，或任何具有write方法的流对象
            rotation_age: 轮转时保留的旧文件数量，0表示不轮转
            rotation_size: 触发轮转的文件大小（字节）

        Raises:
            DeviceError: target既不是路径也不是可写流
        """
        self.rotation_age = rotation_age
        self.rotation_size = rotation_size
        self._closed = False

        if isinstance(target, (str, os.PathLike)):
            path = Path(target)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._handler = _RotatingFileHandler(
                filename=str(path),
                maxBytes=rotation_size,
                backupCount=rotation_age,
                encoding='utf-8'
            )
            self._owns_stream = True
            self._filename: Optional[str] = self._handler.baseFilename
        elif callable(getattr(target, "write", None)):
            self._handler = _StreamHandler(target)
            self._owns_stream = not _is_standard_stream(target)
            name = getattr(target, "name", None)
            self._filename = name if isinstance(name, str) and not name.startswith("<") else None
        else:
            raise DeviceError("日志设备必须是文件路径或可写流", target=target)

        self._handler.setFormatter(logging.Formatter("%(message)s"))
        logger.debug(f"打开日志设备: {self.describe()}")

    @property
    def stream(self) -> Any:
        """底层流对象"""
        return self._handler.stream

    @property
    def filename(self) -> Optional[str]:
        """文件名，非文件设备返回None"""
        return self._filename

    @property
    def closed(self) -> bool:
        return self._closed

    def uses(self, target: Any) -> bool:
        """target是否占用与本设备相同的资源

        target可以是LogDevice、文件路径或流。标准输出和标准错误从不关闭，
        可以被多个设备共享，总是返回False。
        """
        if isinstance(target, LogDevice):
            if target is self:
                return True
            target = target.stream
        if isinstance(target, (str, os.PathLike)):
            return self._filename is not None and os.path.abspath(target) == self._filename
        if target is None or _is_standard_stream(target):
            return False
        return self._handler.stream is target

    def write(self, text: str) -> None:
        """写入一条已格式化的日志

        Args:
            text: 完整的日志行（含换行符）

        Raises:
            ValueError: 设备已关闭
            OSError: 底层写入失败
        """
        if self._closed:
            raise ValueError("I/O operation on closed log device")
        record = logging.makeLogRecord({"msg": text})
        self._handler.handle(record)

    def close(self) -> None:
        """关闭设备，重复调用无副作用"""
        if self._closed:
            return
        self._closed = True

        stream = self._handler.stream
        self._handler.close()
        if isinstance(self._handler, _StreamHandler):
            if self._owns_stream:
                stream.close()
            else:
                self._handler.flush()
        logger.debug(f"关闭日志设备: {self.describe()}")

    def fileno(self) -> Optional[int]:
        """文件描述符，不支持时返回None"""
        try:
            return self._handler.stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None

    def isatty(self) -> bool:
        """是否为交互式终端"""
        try:
            return bool(self._handler.stream.isatty())
        except (AttributeError, OSError, ValueError):
            return False

    def describe(self) -> str:
        """设备描述，例如 fd=1 TTY filename=/var/log/app.log"""
        fd = self.fileno()
        parts = [f"fd={fd if fd is not None else 'n/a'}"]
        if self.isatty():
            parts.append("TTY")
        if self._filename:
            parts.append(f"filename={self._filename}")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"LogDevice({self.describe()})"
