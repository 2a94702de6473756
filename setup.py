#!/usr/bin/env python3
"""
Setup script for the Monasteries of Sikkim site
"""

from setuptools import setup, find_namespace_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="sikkim-monastery-explorer",
    version="1.0.0",
    author="Monastery Explorer Team",
    description="Interactive map, gallery and contact site for the monasteries of Sikkim",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["components", "components.*", "utils"]),
    py_modules=["app", "wsgi"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "monastery-api=wsgi:main",
        ],
    },
    include_package_data=True,
)
