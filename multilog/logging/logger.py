#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
诊断日志模块

MultiLog自身的运行诊断（配置、增删目标、关闭等）通过标准库logging输出，
统一挂在"multilog"命名空间下。未调用configure_logging()之前只挂NullHandler，
不会向应用输出任何内容。
"""

import logging
import logging.handlers
import sys
from typing import Optional, Dict
from pathlib import Path

ROOT_LOGGER_NAME = "multilog"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# 全局日志记录器字典
_loggers: Dict[str, logging.Logger] = {}
# configure_logging()安装的处理器，重新配置时先移除
_handlers: list = []

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """获取诊断日志记录器

    Args:
        name: 日志记录器名称，自动补全为multilog.前缀

    Returns:
        logging.Logger: 日志记录器实例
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        full_name = f"{ROOT_LOGGER_NAME}.{name}"
    else:
        full_name = name

    if full_name not in _loggers:
        _loggers[full_name] = logging.getLogger(full_name)

    return _loggers[full_name]


def configure_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    console_output: bool = True,
    file_path: Optional[str] = None,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> None:
    """配置诊断日志输出

    只作用于multilog命名空间，不修改根日志记录器。

    Args:
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: 日志格式字符串
        console_output: 是否输出到控制台(stderr)
        file_path: 日志文件路径
        max_file_size: 日志文件最大大小（字节）
        backup_count: 日志文件备份数量
    """
    numeric_level = getattr(logging, level.upper())
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    # 清除上一次安装的处理器
    reset_logging()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(numeric_level)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(numeric_level)
        root.addHandler(console_handler)
        _handlers.append(console_handler)

    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=file_path,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(numeric_level)
        root.addHandler(file_handler)
        _handlers.append(file_handler)

    get_logger("logging").info(f"诊断日志配置完成 - 级别: {level}, 控制台输出: {console_output}, 文件输出: {file_path}")


def reset_logging() -> None:
    """移除configure_logging()安装的所有处理器"""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()
    root.setLevel(logging.NOTSET)
