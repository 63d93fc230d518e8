"""
Configuration loader for changelog_generator.

The tool reads an optional JSON configuration file named
``.changelog_config.json``. The file is looked up in the repository root
first and then in the ``~/.changelog_generator/`` directory in the
user's home directory. A missing file is not an error and yields an
empty configuration; command line options override every value.

If the configuration file is malformed or holds values of the wrong
type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where logging is not configured. The CLI re-enables propagation once it
# has configured the root logger.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_FILE_NAME = ".changelog_config.json"


class ConfigError(Exception):
    """Raised when the configuration file is malformed or invalid."""

    pass


def _get_config_directory() -> Path:
    """Get the user-level configuration directory: ``~/.changelog_generator/``."""
    return Path.home() / ".changelog_generator"


def find_config_file(repo_root: Optional[Path] = None) -> Optional[Path]:
    """Return the configuration file to use, or None if there is none.

    A file in ``repo_root`` takes precedence over the user-level one.
    """
    candidates = []
    if repo_root is not None:
        candidates.append(repo_root / CONFIG_FILE_NAME)
    candidates.append(_get_config_directory() / CONFIG_FILE_NAME)
    for path in candidates:
        if path.is_file():
            return path
    return None


def _validate(data: Dict[str, Any]) -> None:
    if "repo_url" in data and not isinstance(data["repo_url"], str):
        raise ConfigError("'repo_url' must be a string")
    if "allow_unknown" in data and not isinstance(data["allow_unknown"], bool):
        raise ConfigError("'allow_unknown' must be a boolean")
    if "file" in data and not isinstance(data["file"], str):
        raise ConfigError("'file' must be a string")
    if "exclude" in data:
        exclude = data["exclude"]
        if not isinstance(exclude, list) or not all(isinstance(item, str) for item in exclude):
            raise ConfigError("'exclude' must be a list of strings")


def load_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load the changelog configuration and return it.

    Args:
        repo_root: Root of the repository. A configuration file found
                   there wins over the user-level one.

    Returns:
        A dictionary with any of the keys:
        - repo_url (str): Base URL used for commit and pull request links
        - allow_unknown (bool): Keep unknown commit types in their own section
        - exclude (list[str]): Commit types left out of the changelog
        - file (str): Changelog file to prepend to

    Raises:
        ConfigError: If the configuration file is malformed or invalid.
    """
    config_path = find_config_file(repo_root)
    if config_path is None:
        logger.debug("No configuration file found, using defaults")
        return {}

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    _validate(data)

    logger.debug("Loaded configuration from: %s", config_path)
    logger.debug("Configuration data: %s", data)
    return data
