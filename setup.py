"""
setup.py for the node build orchestrator

Runtime Requirements (invoked, not installed):
- Docker (Linux builds run inside the node-build image)
- make and a C++ toolchain (native builds on other hosts)

Usage:
- node-build                      # build and archive symbols
- node-build --build-container    # rebuild the build image first
- Configure the symbol archiver in node_build/config/build.yaml or via --config
"""

from pathlib import Path
from setuptools import setup, find_packages

# Read README for long description
readme_path = Path("README.md")
long_description = ""
if readme_path.exists():
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="node-build",
    version="1.0.0",
    description="Reproducible Node build orchestrator with embedded build IDs and symbol archiving",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["node_build", "node_build.*"]),
    package_data={
        "node_build": [
            "config/*.yaml",
        ]
    },
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "node-build=node_build.main:main",
        ],
    },
    zip_safe=False,
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: POSIX :: Linux",
        "Operating System :: MacOS",
        "Topic :: Software Development :: Build Tools",
    ],
)
