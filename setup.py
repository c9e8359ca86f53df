#!/usr/bin/env python3
"""
Setup script for Cozy Kitchen Planner Console
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="cozy-kitchen",
    version="0.1.0",
    description="Console demo wiring a Semantic Kernel planner to Microsoft Graph and native plugins",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={
        "cozy_kitchen": [
            "plugins/prompts/*/*/skprompt.txt",
            "plugins/prompts/*/*/config.json",
        ],
    },
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0.1",
        "aiohttp>=3.9.0",
        "openai>=1.35.0",
        "semantic-kernel>=1.0.0",
        "azure-identity>=1.15.0",
        "msgraph-beta-sdk>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.2.2",
            "pytest-asyncio>=0.23.7",
            "pytest-cov>=5.0.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "cozy-kitchen=cozy_kitchen.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
