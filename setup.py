# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Setup configuration for exceptional-records package."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file if it exists
this_directory = Path(__file__).parent
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "Error record model, fingerprinting and serialization for error tracking"

setup(
    name="exceptional-records",
    version="0.1.0",
    author="Exceptional Contributors",
    description="Error record model, fingerprinting and serialization for error tracking",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "exceptional": ["schemas/*.json"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "jsonschema>=4.18.0",  # Full-form validation on deserialize
        "werkzeug>=3.0.0",  # Cookie header parsing that keeps repeated names
    ],
    extras_require={
        "flask": [
            "flask>=3.0.0",  # Request context adapter
        ],
        "test": [
            "pytest>=7.0.0",
            "flask>=3.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pylint>=3.0.0",
            "mypy>=1.0.0",
            "flask>=3.0.0",
        ],
    },
)
