#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
核心功能测试

测试multilog库的配置模型、格式化器、异常处理和诊断日志。
"""

import unittest
import tempfile
import os
import io
import shutil
import logging
from datetime import datetime
from unittest.mock import patch

from multilog.core.config import DestinationConfig, MultiLogConfig, DEFAULT_NAME
from multilog.core.formatter import Formatter, msg_to_str
from multilog.core.levels import Severity
from multilog.exceptions.base import (
    MultiLogError, LogNotFoundError, DeviceError, ConfigurationError, LoggerClosedError
)
from multilog.logging.logger import get_logger, configure_logging, reset_logging


class TestDestinationConfig(unittest.TestCase):
    """日志目标配置测试"""

    def test_defaults(self):
        """测试默认值"""
        config = DestinationConfig()

        self.assertEqual(config.name, DEFAULT_NAME)
        self.assertIsNone(config.device)
        self.assertEqual(config.level, Severity.UNKNOWN)
        self.assertIsNone(config.rotation_age)
        self.assertIsNone(config.rotation_size)

    def test_aliases(self):
        """测试dev/shift_age/shift_size别名"""
        stream = io.StringIO()
        config = DestinationConfig.parse({
            'name': 'file',
            'dev': stream,
            'level': 'debug',
            'shift_age': 3,
            'shift_size': 4096
        })

        self.assertIs(config.device, stream)
        self.assertEqual(config.level, Severity.DEBUG)
        self.assertEqual(config.rotation_age, 3)
        self.assertEqual(config.rotation_size, 4096)

    def test_level_normalization(self):
        """测试级别规范化"""
        self.assertEqual(DestinationConfig(level='Error').level, Severity.ERROR)
        self.assertEqual(DestinationConfig(level=2).level, Severity.WARN)
        self.assertEqual(DestinationConfig(level='bogus').level, Severity.UNKNOWN)
        self.assertEqual(DestinationConfig(level=None).level, Severity.UNKNOWN)

    def test_parse_existing_instance(self):
        """测试已有配置对象原样返回"""
        config = DestinationConfig(name='x')
        self.assertIs(DestinationConfig.parse(config), config)

    def test_invalid_config(self):
        """测试无效配置"""
        with self.assertRaises(ConfigurationError) as context:
            DestinationConfig.parse({'name': 'neg', 'rotation_age': -1})
        self.assertEqual(context.exception.config_key, 'neg')

        with self.assertRaises(ConfigurationError):
            DestinationConfig.parse({'unexpected': True})

        with self.assertRaises(ConfigurationError):
            DestinationConfig.parse('not a mapping')


class TestMultiLogConfig(unittest.TestCase):
    """MultiLog配置测试"""

    def test_default_config(self):
        """测试默认配置"""
        config = MultiLogConfig()

        self.assertIsNone(config.progname)
        self.assertEqual(config.rotation_age, 0)
        self.assertEqual(config.rotation_size, 1048576)
        self.assertIsNone(config.destinations)

    def test_from_dict(self):
        """测试从字典加载配置"""
        config = MultiLogConfig.from_dict({
            'progname': 'svc',
            'destinations': [{'name': 'a', 'level': 'INFO'}, {'name': 'b'}]
        })

        self.assertEqual(config.progname, 'svc')
        self.assertEqual([d.name for d in config.destinations], ['a', 'b'])
        self.assertEqual(config.destinations[0].level, Severity.INFO)

        with self.assertRaises(ConfigurationError):
            MultiLogConfig.from_dict({'rotation_size': 'huge'})

    @patch.dict(os.environ, {'MULTILOG_PROGNAME': 'envapp', 'MULTILOG_ROTATION_AGE': '4',
                             'MULTILOG_ROTATION_SIZE': '2048'})
    def test_from_env(self):
        """测试从环境变量加载配置"""
        config = MultiLogConfig.from_env()

        self.assertEqual(config.progname, 'envapp')
        self.assertEqual(config.rotation_age, 4)
        self.assertEqual(config.rotation_size, 2048)

    def test_to_dict(self):
        """测试导出为字典"""
        config_dict = MultiLogConfig(progname='svc').to_dict()

        self.assertIsInstance(config_dict, dict)
        self.assertEqual(config_dict['progname'], 'svc')
        self.assertEqual(config_dict['rotation_age'], 0)


class TestFormatter(unittest.TestCase):
    """格式化器测试"""

    def test_msg_to_str(self):
        """测试消息转换"""
        self.assertEqual(msg_to_str("plain"), "plain")
        self.assertEqual(msg_to_str({'a': 1}), "{'a': 1}")
        self.assertEqual(msg_to_str(ValueError("bad value")), "bad value (ValueError)")

    def test_exception_with_traceback(self):
        """测试带回溯的异常"""
        try:
            raise RuntimeError("exploded")
        except RuntimeError as e:
            text = msg_to_str(e)

        self.assertTrue(text.startswith("exploded (RuntimeError)\n"))
        self.assertIn("test_exception_with_traceback", text)

    def test_format_line(self):
        """测试格式化一行日志"""
        formatter = Formatter(datetime_format="%H:%M")
        line = formatter("WARN", datetime(2024, 1, 2, 3, 4, 5), "app", "careful")

        self.assertEqual(line, f"W, [03:04 #{os.getpid()}]  WARN -- app: careful\n")


class TestExceptions(unittest.TestCase):
    """异常处理测试"""

    def test_base_exception(self):
        """测试基础异常"""
        error = MultiLogError("something failed", error_code="E1", details={'k': 'v'})

        self.assertEqual(str(error), "[E1] something failed")
        self.assertEqual(error.details, {'k': 'v'})
        self.assertIn("MultiLogError", repr(error))

    def test_exception_hierarchy(self):
        """测试异常继承关系"""
        for error in (LogNotFoundError("m", name="x"), DeviceError("m"),
                      ConfigurationError("m"), LoggerClosedError()):
            self.assertIsInstance(error, MultiLogError)

    def test_messages(self):
        """测试异常消息"""
        self.assertIn("[x]", str(LogNotFoundError("missing", name="x")))
        self.assertIn("[level]", str(ConfigurationError("bad", config_key="level")))
        self.assertIn("[int]", str(DeviceError("bad", target=1)))
        self.assertIn("[add_log]", str(LoggerClosedError(operation="add_log")))


class TestDiagnosticLogging(unittest.TestCase):
    """诊断日志测试"""

    def setUp(self):
        """测试前准备"""
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """测试后清理"""
        reset_logging()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_get_logger(self):
        """测试获取日志记录器"""
        self.assertEqual(get_logger().name, 'multilog')
        self.assertEqual(get_logger('sub').name, 'multilog.sub')
        self.assertEqual(get_logger('multilog.core').name, 'multilog.core')
        self.assertIs(get_logger('sub'), get_logger('sub'))

    def test_configure_logging(self):
        """测试配置诊断日志写入文件"""
        log_file = os.path.join(self.temp_dir, 'diag', 'multilog.log')
        root_handlers = list(logging.getLogger().handlers)
        configure_logging(level='DEBUG', console_output=False, file_path=log_file)

        self.assertEqual(logging.getLogger('multilog').level, logging.DEBUG)
        get_logger('test').debug("diagnostic entry")

        # 只作用于multilog命名空间
        self.assertEqual(logging.getLogger().handlers, root_handlers)
        reset_logging()

        with open(log_file, encoding='utf-8') as f:
            content = f.read()
        self.assertIn("diagnostic entry", content)
        self.assertIn("multilog.test", content)

    def test_lifecycle_is_logged(self):
        """测试目标增删会记录诊断日志"""
        from multilog import MultiLog

        with self.assertLogs('multilog', level='INFO') as captured:
            log = MultiLog([])
            log.add_log('console', io.StringIO(), 'INFO')
            log.remove_log('console')
            log.close()

        output = "\n".join(captured.output)
        self.assertIn("console", output)


if __name__ == '__main__':
    unittest.main()
