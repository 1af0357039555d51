"""
Setup configuration for the gendoc package.

This script uses setuptools to package and distribute gendoc. It reads the
requirements and long description directly from external files for ease of
maintenance, and ships the bundled highlight rules as package data.
"""
from setuptools import find_packages, setup

VERSION = "1.0.0"


def read_requirements():
    """
    Read requirements from requirements.txt file.
    """
    with open("requirements.txt", encoding="UTF-8") as file:
        return [line.strip() for line in file if line.strip() and not line.startswith("#")]


def get_long_description():
    """
    Read README.md file.
    """
    with open("README.md", encoding="utf8") as file:
        return file.read()


setup(
    name="gendoc",
    description="Generate a single self-contained HTML documentation file from simple markup.",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="GPL-3.0-or-later",
    version=VERSION,
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"gendoc": ["rules/*.toml"]},
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest", "hypothesis"],
        "fuzz": ["atheris"],
    },
    entry_points={
        "console_scripts": [
            "gendoc=gendoc.cli:cli",
        ]
    },
    python_requires=">=3.11",
)
