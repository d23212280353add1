"""
Setup script for kube-mcp.
This allows the tool to be installed using pip.
"""

from setuptools import setup, find_packages
import os

# Get the directory containing setup.py
setup_dir = os.path.dirname(os.path.abspath(__file__))

# Read README.md from the same directory as setup.py
with open(os.path.join(setup_dir, "README.md"), "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="kube-mcp",
    version="0.1.0",
    description="MCP server exposing Kubernetes operations through kubectl, locally or over SSH",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["kube_mcp", "kube_mcp.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0.0",
        "pyyaml>=5.1",
        "mcp>=1.17.0,<2",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "kube-mcp=kube_mcp.cli.cli:main",
        ],
    },
)
