# setup.py

import sys
import os
from setuptools import setup, find_packages
# Ensure Python 3.8+
if sys.version_info < (3, 8):
    sys.exit("ERROR: discord-lite requires Python 3.8 or higher.")

# Read the long description from README.md
def read_long_description():
    here = os.path.abspath(os.path.dirname(__file__))
    try:
        with open(os.path.join(here, "README.md"), encoding="utf-8") as fh:
            return fh.read()
    except FileNotFoundError:
        return "discord-lite: A lightweight terminal client for the Discord REST API."


setup(
    name="discord-lite",
    version="0.1.0",
    packages=find_packages(exclude=["test", "test.*"]),
    description="A lightweight terminal client for the Discord REST API.",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Intended Audience :: End Users/Desktop",
        "Topic :: Communications :: Chat",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.8",
    install_requires=[
        "requests",
        "rich",
        "types-requests",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "discord-lite=discord_lite:main",
        ],
    },
)
