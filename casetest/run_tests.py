#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
测试运行器

运行所有测试模块并打印测试总结。
"""

import unittest
import sys
import os
import time

# 添加项目根目录到路径
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# 导入测试模块
from casetest import test_levels
from casetest import test_device
from casetest import test_core
from casetest import test_multilog

MODULE_MAP = {
    'levels': test_levels,
    'device': test_device,
    'core': test_core,
    'multilog': test_multilog,
}

# 快速测试跳过的测试名关键字
SLOW_KEYWORDS = ['concurrent']


class ColoredTextTestResult(unittest.TextTestResult):
    """带颜色的测试结果"""

    def __init__(self, stream, descriptions, verbosity):
        super().__init__(stream, descriptions, verbosity)
        self.success_count = 0
        self.verbosity = verbosity  # 显式保存verbosity属性

    def addSuccess(self, test):
        super().addSuccess(test)
        self.success_count += 1
        if self.verbosity > 1:
            self.stream.write("\033[92m✓\033[0m ")
            self.stream.write(self.getDescription(test))
            self.stream.writeln()

    def addError(self, test, err):
        super().addError(test, err)
        if self.verbosity > 1:
            self.stream.write("\033[91m✗\033[0m ")
            self.stream.write(self.getDescription(test))
            self.stream.writeln(" (ERROR)")

    def addFailure(self, test, err):
        super().addFailure(test, err)
        if self.verbosity > 1:
            self.stream.write("\033[91m✗\033[0m ")
            self.stream.write(self.getDescription(test))
            self.stream.writeln(" (FAIL)")


class ColoredTextTestRunner(unittest.TextTestRunner):
    """带颜色的测试运行器"""

    def _makeResult(self):
        return ColoredTextTestResult(self.stream, self.descriptions, self.verbosity)


def create_test_suite(modules=None, quick=False):
    """创建测试套件

    Args:
        modules: 测试模块列表，None表示全部
        quick: 是否跳过较慢的测试
    """
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    for module in modules or MODULE_MAP.values():
        module_suite = loader.loadTestsFromModule(module)
        if not quick:
            suite.addTests(module_suite)
            continue
        for test in iter_tests(module_suite):
            test_name = test._testMethodName.lower()
            if not any(keyword in test_name for keyword in SLOW_KEYWORDS):
                suite.addTest(test)

    return suite


def iter_tests(suite):
    """展开嵌套的测试套件"""
    for item in suite:
        if isinstance(item, unittest.TestSuite):
            yield from iter_tests(item)
        else:
            yield item


def run_suite(suite, title):
    """运行测试套件并打印总结"""
    runner = ColoredTextTestRunner(
        verbosity=2,
        stream=sys.stdout,
        buffer=True
    )

    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)

    start_time = time.time()
    result = runner.run(suite)
    duration = time.time() - start_time

    total_tests = result.testsRun
    success_count = getattr(result, 'success_count', total_tests - len(result.failures) - len(result.errors))

    print("\n" + "=" * 70)
    print("测试总结")
    print("=" * 70)
    print(f"总测试数: {total_tests}")
    print(f"\033[92m成功: {success_count}\033[0m")
    if result.failures:
        print(f"\033[91m失败: {len(result.failures)}\033[0m")
    if result.errors:
        print(f"\033[91m错误: {len(result.errors)}\033[0m")
    print(f"\n执行时间: {duration:.2f} 秒")

    return result.wasSuccessful()


def main():
    """主函数"""
    import argparse

    parser = argparse.ArgumentParser(description='MultiLog 测试运行器')
    parser.add_argument('--module', '-m', help='运行特定模块的测试')
    parser.add_argument('--quick', '-q', action='store_true', help='运行快速测试')
    parser.add_argument('--list', '-l', action='store_true', help='列出所有测试')

    args = parser.parse_args()

    if args.list:
        print("可用测试:")
        for test in iter_tests(create_test_suite()):
            print(f"  {test}")
        return

    if args.module:
        if args.module not in MODULE_MAP:
            print(f"未知的测试模块: {args.module}")
            print(f"可用模块: {', '.join(MODULE_MAP.keys())}")
            sys.exit(1)
        success = run_suite(create_test_suite([MODULE_MAP[args.module]]), f"运行 {args.module} 模块测试")
    elif args.quick:
        success = run_suite(create_test_suite(quick=True), "运行快速测试")
    else:
        success = run_suite(create_test_suite(), "MultiLog 测试套件")

    # 返回适当的退出码
    sys.exit(0 if success else 1)


if __name__ == '__main__':
    main()
