#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
MultiLog示例

三个INFO级别的目标输出到标准输出，使用自定义格式，打印目标汇总后写一条日志。
"""

from multilog import MultiLog


def short_format(severity, timestamp, progname, message):
    """单字母级别 + 程序名 + 短时间"""
    return f"{severity[:1]} {progname} [{timestamp.strftime('%y-%m-%d %H:%M:%S')}] {message}\n"


def main():
    destinations = [
        {"name": "default", "level": "INFO"},
        {"name": "default2", "level": "INFO"},
        {"name": "default3", "level": "INFO"},
    ]

    log = MultiLog(destinations, progname="demo", formatter=short_format)
    log.summarise()
    log.info("TEST")


if __name__ == '__main__':
    main()
