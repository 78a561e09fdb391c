#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
测试模块

包含multilog库的单元测试，覆盖日志级别、日志设备、配置和多目标分发。
"""

import io
from typing import Any, List

__version__ = '0.1.0'
__author__ = 'MultiLog Team'
__description__ = 'Comprehensive test suite for multilog library'

# 测试配置
TEST_CONFIG = {
    'destination_names': ['default', 'default2', 'default3'],
    'rotation': {
        'age': 2,
        'size': 64,
    },
    'test_messages': {
        'simple': 'TEST',
        'unicode': '测试中文字符 🚀 emoji',
        'percent': '100% done %s %d',
    }
}


# 测试工具函数
def make_streams(count: int = 3) -> List[io.StringIO]:
    """创建若干内存流作为日志设备

    Args:
        count: 流的数量

    Returns:
        List[io.StringIO]: 内存流列表
    """
    return [io.StringIO() for _ in range(count)]


def get_test_destinations(streams: List[io.StringIO], level: Any = 'INFO') -> list:
    """为每个流生成一个日志目标配置

    Args:
        streams: 内存流列表
        level: 所有目标的级别

    Returns:
        list: 目标配置列表，名称依次为default、default2、default3...
    """
    names = TEST_CONFIG['destination_names']
    destinations = []
    for index, stream in enumerate(streams):
        name = names[index] if index < len(names) else f"default{index + 1}"
        destinations.append({'name': name, 'device': stream, 'level': level})
    return destinations


def get_test_message(message_type: str = 'simple') -> str:
    """获取测试消息

    Args:
        message_type: 消息类型 ('simple', 'unicode', 'percent')

    Returns:
        str: 测试消息
    """
    return TEST_CONFIG['test_messages'].get(message_type, TEST_CONFIG['test_messages']['simple'])


class RecordingFormatter:
    """记录每次调用参数的格式化器"""

    def __init__(self):
        self.calls = []

    def __call__(self, label, timestamp, progname, message):
        self.calls.append((label, timestamp, progname, message))
        return f"{label} {progname} {message}\n"


class FailingStream(io.StringIO):
    """写入或关闭时抛出OSError的流"""

    def __init__(self, fail_write: bool = True, fail_close: bool = False):
        super().__init__()
        self.fail_write = fail_write
        self.fail_close = fail_close

    def write(self, text):
        if self.fail_write:
            raise OSError("disk full")
        return super().write(text)

    def close(self):
        if self.fail_close:
            raise OSError("close failed")
        super().close()
