"""
Setup script for Serval.
"""

from pathlib import Path
from setuptools import find_packages, setup

# Read version from VERSION file
version_file = Path(__file__).parent / "VERSION"
version = version_file.read_text().strip()

setup(
    name="serval-http",
    version=version,
    description="JSON-API HTTP adapter with normalized response payloads",
    author="Garudex Labs",
    python_requires=">=3.9",
    packages=find_packages(include=["serval", "serval.*"]),
    install_requires=[
        "httpx>=0.24",
        "structlog>=23.1",
        "PyYAML>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "serval=serval.cli.main:cli",
        ],
    },
)
