#!/usr/bin/env python3
"""
Setup script for WebToEpub EPUB packer
"""

from setuptools import find_packages, setup

setup(
    name="webtoepub",
    version="0.1.0",
    description="Pack web-novel chapters into EPUB 2 files",
    python_requires=">=3.8",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["webtoepub"],
    install_requires=[
        "beautifulsoup4>=4.11.0",
        "lxml>=4.9.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "webtoepub=webtoepub:main",
        ],
    },
)
