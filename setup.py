#!/usr/bin/env python3
"""
Setup script for datasource-registry - case-insensitive registry of
pluggable data sources with one-time interpreter discovery.
"""

from pathlib import Path
from setuptools import setup, find_packages

# Read README for long description
this_directory = Path(__file__).parent
readme_path = this_directory / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text()

setup(
    name="datasource-registry",
    version="0.1.0",
    description="Thread-safe, case-insensitive registry of pluggable data sources",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",

    packages=find_packages(exclude=["tests*", "examples*", "docs*"]),
    include_package_data=True,

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Database",
    ],

    python_requires=">=3.10",

    install_requires=[
        "typer>=0.7.0",
        "rich>=12.0.0",
        "orjson>=3.9.0",
    ],

    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pytest-mock>=3.12.0",
        ],
    },

    entry_points={
        "console_scripts": [
            "datasource-registry = datasource_registry.cli:main",
        ],
    },

    package_data={
        "datasource_registry": ["py.typed"],
    },

    zip_safe=False,
)
