# setup.py
from setuptools import setup, find_packages

setup(
    name="font_scout",
    version="0.1.0",
    description="Font inspection toolkit: metadata extraction, font matching and page discovery",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "lxml>=4.9",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "fonttools>=4.40",
        "brotli>=1.0",
        "tinycss2>=1.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "fontscout=font_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
