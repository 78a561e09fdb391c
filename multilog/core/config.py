#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
配置管理模块

定义日志目标和MultiLog整体的配置模型，负责校验和默认值填充。
"""

import os
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .device import DEFAULT_ROTATION_AGE, DEFAULT_ROTATION_SIZE
from .levels import DEFAULT_LEVEL, Severity, normalize_level
from ..exceptions.base import ConfigurationError
from ..logging.logger import get_logger

logger = get_logger(__name__)

DEFAULT_NAME = "default"


class DestinationConfig(BaseModel):
    """单个日志目标的配置

    所有字段都可省略。device为None时由MultiLog替换为标准输出，
    轮转参数为None时使用MultiLog的默认值。
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    name: str = Field(default=DEFAULT_NAME, description="日志目标名称")
    device: Any = Field(
        default=None,
        validation_alias=AliasChoices("device", "dev"),
        description="文件路径或可写流"
    )
    level: Severity = Field(default=DEFAULT_LEVEL, description="最低输出级别")
    rotation_age: Optional[int] = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("rotation_age", "shift_age"),
        description="轮转保留的旧文件数量"
    )
    rotation_size: Optional[int] = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("rotation_size", "shift_size"),
        description="触发轮转的文件大小(字节)"
    )

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Severity:
        return normalize_level(value)

    @classmethod
    def parse(cls, data: Union["DestinationConfig", Mapping[str, Any]]) -> "DestinationConfig":
        """从字典或已有配置对象构建配置

        Args:
            data: 配置字典或DestinationConfig实例

        Returns:
            DestinationConfig: 校验后的配置

        Raises:
            ConfigurationError: 配置格式错误
        """
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"不支持的日志目标配置类型: {type(data).__name__}")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            logger.error(f"日志目标配置校验失败: {e}")
            raise ConfigurationError(f"日志目标配置无效: {e}", config_key=str(data.get("name", DEFAULT_NAME)))


class MultiLogConfig(BaseModel):
    """MultiLog配置"""
    model_config = ConfigDict(extra="forbid")

    progname: Optional[str] = Field(default=None, description="默认程序名")
    rotation_age: int = Field(default=DEFAULT_ROTATION_AGE, ge=0, description="默认轮转保留数量")
    rotation_size: int = Field(default=DEFAULT_ROTATION_SIZE, ge=0, description="默认轮转大小(字节)")
    destinations: Optional[List[DestinationConfig]] = Field(default=None, description="日志目标列表")

    @classmethod
    def from_dict(cls, config_data: Mapping[str, Any]) -> "MultiLogConfig":
        """从字典加载配置

        Raises:
            ConfigurationError: 配置格式错误
        """
        try:
            return cls.model_validate(dict(config_data))
        except ValidationError as e:
            logger.error(f"加载配置失败: {e}")
            raise ConfigurationError(f"配置格式错误: {e}")

    @classmethod
    def from_env(cls, prefix: str = "MULTILOG_") -> "MultiLogConfig":
        """从环境变量加载默认参数

        识别 {prefix}PROGNAME、{prefix}ROTATION_AGE、{prefix}ROTATION_SIZE。

        Args:
            prefix: 环境变量前缀

        Returns:
            MultiLogConfig: 配置实例
        """
        config_data: Dict[str, Any] = {}
        for key in ("progname", "rotation_age", "rotation_size"):
            value = os.environ.get(f"{prefix}{key.upper()}")
            if value is not None:
                config_data[key] = value

        logger.info(f"从环境变量加载配置，前缀: {prefix}")
        return cls.from_dict(config_data)

    def to_dict(self) -> dict:
        """将配置导出为字典"""
        return self.model_dump()
