"""
Top-level package for changelog_generator.

This package exposes the Markdown renderer via
:mod:`changelog_generator.render` and the CLI entry point via the
``changelog_generator.cli`` module.
"""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:
    __version__ = version("changelog-generator")
except PackageNotFoundError:
    # Running from a source checkout without installation
    __version__ = "0.0.dev0"
