# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Setup configuration for keystretch.

This makes the package pip-installable.
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

# Core dependencies
install_requires = [
    "pydantic>=2.5.3",
    "pydantic-settings>=2.1.0",
    "structlog>=24.1.0",
]

# Development dependencies
dev_requires = [
    "pytest>=7.4.4",
    "pytest-cov>=4.1.0",
    "hypothesis>=6.92.2",
    "ruff>=0.1.11",
    "mypy>=1.8.0",
]

setup(
    name="keystretch",
    version="1.0.0",
    author="keystretch Contributors",
    author_email="",
    description="Salted, key-stretched password hashing with a self-describing encoding",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Security :: Cryptography",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.11",
    install_requires=install_requires,
    extras_require={
        "dev": dev_requires,
        "test": dev_requires,
    },
    entry_points={
        "console_scripts": [
            "keystretch=keystretch.cli:cli",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
