"""
Configuration loading for changelog_generator.

Provides a loader for the optional ``.changelog_config.json`` file. See
:mod:`changelog_generator.config.loader` for implementation details.
"""

from .loader import ConfigError, load_config  # noqa: F401
