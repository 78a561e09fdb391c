#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
MultiLog - 多目标分级日志库
设置脚本，用于打包和发布
"""

from setuptools import setup, find_packages

# 读取README文件
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# 读取requirements文件
with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="multilog",
    version="0.1.0",
    author="liber",
    author_email="liberalcxl@gmail.com",
    description="多目标分级日志库，单次调用分发到多个独立设置级别的输出设备",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/liberalchang/multilog",
    packages=find_packages(exclude=["casetest", "casetest.*", "examples", "examples.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: System :: Logging",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
