#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
多目标日志模块

一次日志调用分发到多个独立配置的输出设备，每个设备有自己的最低级别。
例如同时向控制台输出INFO级别、向轮转文件输出DEBUG级别的日志。

分发流程：
1. 规范化级别；低于所有目标的最低级别时直接返回，不做任何格式化。
2. 解析程序名和消息（支持延迟求值的消息工厂）。
3. 只格式化一次，再写入每个级别允许的目标。
"""

import os
import sys
import threading
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from typeguard import typechecked

from .core.config import DEFAULT_NAME, DestinationConfig, MultiLogConfig
from .core.device import DEFAULT_ROTATION_AGE, DEFAULT_ROTATION_SIZE, LogDevice
from .core.formatter import Formatter
from .core.levels import (
    EMPTY_THRESHOLD,
    Severity,
    level_to_string,
    normalize_level,
)
from .exceptions.base import (
    ConfigurationError,
    DeviceError,
    LoggerClosedError,
    LogNotFoundError,
)
from .logging.logger import get_logger

logger = get_logger(__name__)

SUMMARY_HEADER = "Summary of logs:"
NO_LOGS_LINE = " *** No logs!"

LevelLike = Union[Severity, int, str, None]

_UNSET = object()


class Destination:
    """日志目标：名称、独占的设备和最低级别"""

    def __init__(self, name: str, device: LogDevice, level: Severity):
        self.name = name
        self.device = device
        self.level = level

    def accepts(self, severity: Severity) -> bool:
        """级别等于阈值时也会写入"""
        return self.level <= severity

    def __repr__(self) -> str:
        return f"Destination(name={self.name!r}, level={level_to_string(self.level)}, device={self.device!r})"


class MultiLog:
    """多目标日志器

    持有一组按名称索引的日志目标，并维护所有目标的最低级别缓存，
    用于在分发前快速丢弃无人接收的日志。

    关闭之后写日志是无操作（返回True），修改目标的操作抛出LoggerClosedError。
    所有操作由一把可重入锁串行化。
    """

    @typechecked
    def __init__(self,
                 destinations: Any = None,
                 progname: Optional[str] = None,
                 rotation_age: int = DEFAULT_ROTATION_AGE,
                 rotation_size: int = DEFAULT_ROTATION_SIZE,
                 formatter: Optional[Callable[..., str]] = None,
                 default_device: Any = None):
        """
        初始化多目标日志器

        Args:
            destinations: 初始目标，取值同configure_logs()
            progname: 默认程序名
            rotation_age: 目标未指定时使用的轮转保留数量
            rotation_size: 目标未指定时使用的轮转大小（字节）
            formatter: 渲染函数 (级别, 时间, 程序名, 消息) -> str，None表示默认格式
            default_device: 目标未指定设备时使用的设备，None表示配置时的sys.stdout
        """
        self.progname = progname
        self.rotation_age = rotation_age
        self.rotation_size = rotation_size
        self.formatter = formatter
        self.default_device = default_device
        self._default_formatter = Formatter()

        self._destinations: Dict[str, Destination] = {}
        self._lowest_level = EMPTY_THRESHOLD
        self._closed = False
        self._lock = threading.RLock()

        self.configure_logs(destinations)

    @classmethod
    def from_config(cls, config: Union[MultiLogConfig, Mapping[str, Any]], **kwargs) -> "MultiLog":
        """从配置对象创建日志器

        Args:
            config: MultiLogConfig实例或配置字典
            **kwargs: 传给构造函数的其他参数，如formatter

        Returns:
            MultiLog: 日志器实例
        """
        if not isinstance(config, MultiLogConfig):
            config = MultiLogConfig.from_dict(config)
        return cls(
            destinations=config.destinations,
            progname=config.progname,
            rotation_age=config.rotation_age,
            rotation_size=config.rotation_size,
            **kwargs
        )

    # ------------------------------------------------------------------
    # 属性
    # ------------------------------------------------------------------

    @property
    def lowest_level(self) -> Severity:
        """所有目标中的最低级别，没有目标时为EMPTY_THRESHOLD"""
        return self._lowest_level

    @property
    def names(self) -> List[str]:
        """按插入顺序排列的目标名称"""
        with self._lock:
            return list(self._destinations)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def datetime_format(self) -> Optional[str]:
        return self._default_formatter.datetime_format

    @datetime_format.setter
    def datetime_format(self, value: Optional[str]) -> None:
        self._default_formatter.datetime_format = value

    def __len__(self) -> int:
        return len(self._destinations)

    def __contains__(self, name: Any) -> bool:
        return name in self._destinations

    # ------------------------------------------------------------------
    # 目标管理
    # ------------------------------------------------------------------

    def configure_logs(self, logdevs: Any = None) -> None:
        """整体替换所有日志目标

        新设备全部打开成功后才替换现有目标，随后关闭不再使用的旧设备；
        任何一步失败时，已打开的文件设备被关闭，现有目标保持不变。

        Args:
            logdevs: 取值如下
                - None: 一个名为default、输出到标准输出、级别为DEFAULT_LEVEL的目标
                - 空集合（[]、{}）: 没有任何目标
                - 文件路径或可写流: 作为唯一的default目标，级别为DEFAULT_LEVEL
                - 字典或DestinationConfig: 单个目标配置
                - 上述配置组成的列表

        Raises:
            ConfigurationError: 配置格式错误
            DeviceError: 设备无法包装，或被多个目标共享
            OSError: 文件设备无法打开
            LoggerClosedError: 日志器已关闭
        """
        with self._lock:
            self._ensure_open("configure_logs")
            entries = self._parse_logdevs(logdevs)

            staged: Dict[str, Destination] = {}
            opened: List[LogDevice] = []
            try:
                for entry in entries:
                    device = entry.device
                    if device is None:
                        device = self.default_device if self.default_device is not None else sys.stdout
                    log_device = self._open_device(entry.name, device, entry.rotation_age,
                                                   entry.rotation_size, staged)
                    if isinstance(device, (str, os.PathLike)):
                        opened.append(log_device)
                    self._install(staged, entry.name, log_device, entry.level)
            except Exception as e:
                logger.error(f"配置日志目标失败，保留现有目标: {e}")
                for log_device in opened:
                    log_device.close()
                raise

            previous = self._destinations
            self._destinations = staged
            self._recompute_lowest_level()

            retired = [
                destination for destination in previous.values()
                if not any(new.device.uses(destination.device) for new in staged.values())
            ]
            logger.info(f"日志目标配置完成: {len(self._destinations)} 个目标, 最低级别: {level_to_string(self._lowest_level)}")
            self._close_destinations(retired)

    @typechecked
    def add_log(self,
                name: str,
                device: Any,
                level: LevelLike,
                rotation_age: Optional[int] = None,
                rotation_size: Optional[int] = None) -> None:
        """添加或替换一个日志目标，不影响其他目标

        同名目标已存在时，先关闭其设备再替换。device为None时不添加。

        Args:
            name: 目标名称
            device: 文件路径、可写流或LogDevice
            level: 最低级别，可以是Severity、整数或字符串
            rotation_age: 轮转保留数量，None表示使用默认值
            rotation_size: 轮转大小（字节），None表示使用默认值

        Raises:
            DeviceError: 设备无法包装，或已被其他目标占用
            LoggerClosedError: 日志器已关闭
        """
        with self._lock:
            self._ensure_open("add_log")
            if device is None:
                logger.warning(f"日志目标未提供设备，忽略: {name}")
                return
            self._add(name, device, normalize_level(level), rotation_age, rotation_size)

    def remove_log(self, name: Any) -> None:
        """移除一个日志目标并关闭其设备，名称不存在时不做任何事

        Args:
            name: 目标名称
        """
        with self._lock:
            destination = self._destinations.pop(name, None)
            if destination is None:
                return

            if destination.level == self._lowest_level:
                self._recompute_lowest_level()

            destination.device.close()
            logger.info(f"移除日志目标: {name}")

    def set_level(self, name: Any, level: Any = _UNSET) -> None:
        """设置日志目标的级别

        只传一个参数时设置所有目标，例如 set_level("WARN")；
        传两个参数时设置指定目标，例如 set_level("file", "DEBUG")。

        Args:
            name: 目标名称；单参数调用时为级别
            level: 级别，可以是Severity、整数或字符串

        Raises:
            LogNotFoundError: 指定的目标不存在
            LoggerClosedError: 日志器已关闭
        """
        if level is _UNSET:
            level, name = name, None
        level = normalize_level(level)

        with self._lock:
            self._ensure_open("set_level")
            if name is not None:
                if name not in self._destinations:
                    raise LogNotFoundError(f"没有名为 '{name}' 的日志目标", name=name)
                self._destinations[name].level = level
            else:
                for destination in self._destinations.values():
                    destination.level = level

            self._recompute_lowest_level()
            logger.info(f"设置日志级别: {level_to_string(level)} (目标: {name if name is not None else '全部'})")

    def get_level(self, name: Any = None) -> Optional[Severity]:
        """获取日志目标的级别

        Args:
            name: 目标名称，默认为default

        Returns:
            Optional[Severity]: 目标的级别，目标不存在时返回None
        """
        if name is None:
            name = DEFAULT_NAME
        destination = self._destinations.get(name)
        return destination.level if destination is not None else None

    def get_device(self, name: Any = None) -> Optional[LogDevice]:
        """获取日志目标的设备，目标不存在时返回None"""
        if name is None:
            name = DEFAULT_NAME
        destination = self._destinations.get(name)
        return destination.device if destination is not None else None

    # ------------------------------------------------------------------
    # 写日志
    # ------------------------------------------------------------------

    def add(self,
            severity: LevelLike,
            message: Any = None,
            progname: Any = None,
            message_factory: Optional[Callable[[], Any]] = None) -> bool:
        """写一条日志到所有级别允许的目标

        未提供message时，先尝试调用message_factory；两者都没有时，
        把程序名当作消息，程序名恢复为默认值。

        Args:
            severity: 日志级别，None视为UNKNOWN
            message: 日志消息
            progname: 程序名，None表示使用默认程序名
            message_factory: 无参函数，仅在日志确实需要输出时调用一次

        Returns:
            bool: 总是返回True

        Raises:
            OSError: 某个设备写入失败，剩余目标不再写入
        """
        severity = normalize_level(severity)

        with self._lock:
            if self._closed or not self._destinations or severity < self._lowest_level:
                return True

            if progname is None:
                progname = self.progname
            if message is None:
                if message_factory is not None:
                    message = message_factory()
                else:
                    message = progname
                    progname = self.progname

            formatted = self._format_message(level_to_string(severity), datetime.now(), progname, message)
            for destination in list(self._destinations.values()):
                if destination.accepts(severity):
                    destination.device.write(formatted)
        return True

    log = add

    def debug(self, message: Any = None, progname: Any = None,
              message_factory: Optional[Callable[[], Any]] = None) -> bool:
        return self.add(Severity.DEBUG, message, progname, message_factory)

    def info(self, message: Any = None, progname: Any = None,
             message_factory: Optional[Callable[[], Any]] = None) -> bool:
        return self.add(Severity.INFO, message, progname, message_factory)

    def warn(self, message: Any = None, progname: Any = None,
             message_factory: Optional[Callable[[], Any]] = None) -> bool:
        return self.add(Severity.WARN, message, progname, message_factory)

    warning = warn

    def error(self, message: Any = None, progname: Any = None,
              message_factory: Optional[Callable[[], Any]] = None) -> bool:
        return self.add(Severity.ERROR, message, progname, message_factory)

    def fatal(self, message: Any = None, progname: Any = None,
              message_factory: Optional[Callable[[], Any]] = None) -> bool:
        return self.add(Severity.FATAL, message, progname, message_factory)

    def unknown(self, message: Any = None, progname: Any = None,
                message_factory: Optional[Callable[[], Any]] = None) -> bool:
        return self.add(Severity.UNKNOWN, message, progname, message_factory)

    def is_enabled_for(self, severity: LevelLike) -> bool:
        """是否至少有一个目标会接收该级别的日志"""
        with self._lock:
            if self._closed or not self._destinations:
                return False
            return normalize_level(severity) >= self._lowest_level

    def summarise(self) -> List[str]:
        """以所有目标都能看到的级别输出目标汇总

        Returns:
            List[str]: 输出的汇总行；没有目标时只有一行 " *** No logs!"
        """
        with self._lock:
            if not self._destinations:
                # 没有目标能接收这一行，只交给诊断日志
                logger.warning(NO_LOGS_LINE.strip())
                return [NO_LOGS_LINE]

            level = self._lowest_level
            total = len(self._destinations)
            lines = [SUMMARY_HEADER]
            for index, (name, destination) in enumerate(self._destinations.items(), start=1):
                lines.append(
                    f" ({index}/{total}) {name} "
                    f"(level: {level_to_string(destination.level)}, device: {destination.device.describe()})"
                )

            for line in lines:
                self.add(level, line)
            return lines

    summarize = summarise

    def close(self) -> None:
        """关闭所有设备，重复调用无副作用

        即使某个设备关闭失败，其余设备也会被关闭，随后抛出第一个错误。
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True

            destinations = list(self._destinations.values())
            self._destinations = {}
            self._lowest_level = EMPTY_THRESHOLD

            logger.info(f"日志器已关闭，共关闭 {len(destinations)} 个目标")
            self._close_destinations(destinations)

    def __enter__(self):
        """上下文管理器入口"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """上下文管理器出口"""
        self.close()

    def __repr__(self) -> str:
        return (f"MultiLog(destinations={self.names}, lowest_level={level_to_string(self._lowest_level)}, "
                f"closed={self._closed})")

    # ------------------------------------------------------------------
    # 内部方法
    # ------------------------------------------------------------------

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise LoggerClosedError(operation=operation)

    def _parse_logdevs(self, logdevs: Any) -> List[DestinationConfig]:
        """把configure_logs()的各种输入统一为配置列表"""
        if logdevs is None:
            return [DestinationConfig()]
        if isinstance(logdevs, (DestinationConfig, Mapping)):
            if isinstance(logdevs, Mapping) and not logdevs:
                return []
            return [DestinationConfig.parse(logdevs)]
        if isinstance(logdevs, (str, os.PathLike, LogDevice)) or callable(getattr(logdevs, "write", None)):
            return [DestinationConfig(device=logdevs)]
        if isinstance(logdevs, Iterable):
            return [DestinationConfig.parse(entry) for entry in logdevs]
        raise ConfigurationError(f"不支持的日志目标配置类型: {type(logdevs).__name__}")

    def _open_device(self,
                     name: str,
                     device: Any,
                     rotation_age: Optional[int],
                     rotation_size: Optional[int],
                     destinations: Dict[str, Destination]) -> LogDevice:
        """包装设备，拒绝与其他目标共享的设备或流"""
        for other in destinations.values():
            if other.name != name and other.device.uses(device):
                raise DeviceError(f"设备已被日志目标 '{other.name}' 使用", target=device)

        if isinstance(device, LogDevice):
            return device
        return LogDevice(
            device,
            rotation_age=self.rotation_age if rotation_age is None else rotation_age,
            rotation_size=self.rotation_size if rotation_size is None else rotation_size,
        )

    @staticmethod
    def _install(destinations: Dict[str, Destination],
                 name: str,
                 log_device: LogDevice,
                 level: Severity) -> Optional[Destination]:
        """插入或替换目标，被替换目标的设备不再使用时关闭"""
        previous = destinations.get(name)
        destinations[name] = Destination(name, log_device, level)
        if previous is not None and not log_device.uses(previous.device):
            previous.device.close()
        return previous

    def _close_destinations(self, destinations: List[Destination]) -> None:
        """关闭一组目标的设备，全部尝试后抛出第一个错误"""
        first_error: Optional[BaseException] = None
        for destination in destinations:
            try:
                destination.device.close()
            except Exception as e:
                logger.error(f"关闭日志目标失败: {destination.name}: {e}")
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error

    def _add(self,
             name: str,
             device: Any,
             level: Severity,
             rotation_age: Optional[int],
             rotation_size: Optional[int]) -> Destination:
        """打开设备并插入或替换目标，调用方负责加锁"""
        log_device = self._open_device(name, device, rotation_age, rotation_size, self._destinations)
        previous = self._install(self._destinations, name, log_device, level)
        destination = self._destinations[name]

        if previous is not None:
            self._recompute_lowest_level()
            logger.info(f"替换日志目标: {name} (级别: {level_to_string(level)})")
        else:
            self._lowest_level = min(self._lowest_level, level)
            logger.info(f"添加日志目标: {name} (级别: {level_to_string(level)}, 设备: {log_device.describe()})")
        return destination

    def _recompute_lowest_level(self) -> None:
        """重新计算最低级别缓存，调用方负责加锁"""
        if self._destinations:
            self._lowest_level = min(d.level for d in self._destinations.values())
        else:
            self._lowest_level = EMPTY_THRESHOLD

    def _format_message(self, label: str, timestamp: datetime, progname: Any, message: Any) -> str:
        formatter = self.formatter or self._default_formatter
        return formatter(label, timestamp, progname, message)
