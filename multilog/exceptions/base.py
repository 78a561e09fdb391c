#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
异常基类模块

定义MultiLog库中使用的所有异常类。
设备的I/O错误不在此列，它们原样抛给调用方。
"""

from typing import Optional, Any


class MultiLogError(Exception):
    """MultiLog库的基础异常类

    所有MultiLog相关的异常都应该继承自这个类。
    """

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Any] = None):
        """
        初始化异常

        Args:
            message: 错误消息
            error_code: 错误代码
            details: 错误详情
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details

    def __str__(self) -> str:
        """返回异常的字符串表示"""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        """返回异常的详细表示"""
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code}', details={self.details})"


class LogNotFoundError(MultiLogError, KeyError):
    """日志目标不存在

    当按名称操作一个未注册的日志目标时抛出。
    """

    def __init__(self, message: str, name: Optional[Any] = None, **kwargs):
        """
        初始化目标不存在异常

        Args:
            message: 错误消息
            name: 目标名称
            **kwargs: 其他参数
        """
        super().__init__(message, error_code="NOT_FOUND", details=kwargs or None)
        self.name = name

    def __str__(self) -> str:
        if self.name is not None:
            return f"日志目标不存在 [{self.name}]: {self.message}"
        return f"日志目标不存在: {self.message}"


class DeviceError(MultiLogError):
    """设备相关异常

    当传入的对象既不是路径也不是可写流，无法包装为日志设备时抛出。
    """

    def __init__(self, message: str, target: Optional[Any] = None, **kwargs):
        """
        初始化设备异常

        Args:
            message: 错误消息
            target: 无法包装的目标对象
            **kwargs: 其他参数
        """
        super().__init__(message, error_code="DEVICE_ERROR", details=kwargs or None)
        self.target = target

    def __str__(self) -> str:
        if self.target is not None:
            return f"设备错误 [{type(self.target).__name__}]: {self.message}"
        return f"设备错误: {self.message}"


class ConfigurationError(MultiLogError):
    """配置相关异常

    当日志目标配置无效时抛出。
    """

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        """
        初始化配置异常

        Args:
            message: 错误消息
            config_key: 配置键
            **kwargs: 其他参数
        """
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=kwargs or None)
        self.config_key = config_key

    def __str__(self) -> str:
        if self.config_key:
            return f"配置错误 [{self.config_key}]: {self.message}"
        return f"配置错误: {self.message}"


class LoggerClosedError(MultiLogError):
    """日志器已关闭

    在close()之后仍尝试修改日志目标时抛出。
    """

    def __init__(self, message: str = "日志器已关闭", operation: Optional[str] = None, **kwargs):
        """
        初始化已关闭异常

        Args:
            message: 错误消息
            operation: 被拒绝的操作
            **kwargs: 其他参数
        """
        super().__init__(message, error_code="LOGGER_CLOSED", details=kwargs or None)
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"日志器已关闭 [{self.operation}]: {self.message}"
        return f"日志器已关闭: {self.message}"
