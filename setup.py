"""Setup script for localgit Python package."""

from setuptools import setup, find_packages

setup(
    name="localgit",
    version="0.1.0",
    description="Local Git tools and commit message filtering for Claude agents",
    packages=find_packages(include=["localgit", "localgit.*"]),
    python_requires=">=3.10",
    install_requires=[
        "claude-agent-sdk",
    ],
    extras_require={
        "dev": ["pytest", "pytest-asyncio", "black", "mypy"],
    },
    entry_points={
        "console_scripts": [
            "localgit=localgit.cli:main",
        ],
    },
)
