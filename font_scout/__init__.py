# font_scout/__init__.py
"""
FontScout package initializer.
Defines package version and exposes the CLI group.
"""
__version__ = "0.1.0"

from .cli import cli  # noqa: E402
