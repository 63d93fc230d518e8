"""
Project metadata lookup.

The release version and repository URL are read from the project's
``package.json`` or, when there is none, from ``pyproject.toml``. The
version is bumped according to the requested release kind.
"""

from __future__ import annotations

import json
import logging
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


URL_KEYS = ("repository", "source", "homepage")
SCP_URL_PATTERN = re.compile(r"^[\w.-]+@([\w.-]+):(.+)$")
SHORTHAND_PATTERN = re.compile(r"^[\w.-]+/[\w.-]+$")
HOST_SHORTHAND_PATTERN = re.compile(r"^(github|gitlab|bitbucket):([\w.-]+/[\w.-]+)$")
SHORTHAND_HOSTS = {
    "github": "github.com",
    "gitlab": "gitlab.com",
    "bitbucket": "bitbucket.org",
}
VERSION_PATTERN = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)")


class MetadataError(Exception):
    """Raised when project metadata cannot be read or interpreted."""

    pass


@dataclass
class ProjectMetadata:
    """Version and repository URL of the project being released."""

    version: Optional[str] = None
    repo_url: Optional[str] = None


def _strip_git_suffix(path: str) -> str:
    return path[:-4] if path.endswith(".git") else path


def normalize_repo_url(url: Optional[str]) -> Optional[str]:
    """Turn a repository reference into a browsable HTTPS base URL.

    Handles ``git+https://`` prefixes, ``git@host:path`` and
    ``ssh://git@host/path`` remotes, ``git://`` URLs, the
    ``github:user/repo`` style host shorthands and the bare ``user/repo``
    GitHub shorthand. A trailing slash or ``.git`` suffix is dropped.
    """
    if not url:
        return None
    url = url.strip()
    if url.startswith("git+"):
        url = url[4:]
    if url.startswith("ssh://"):
        rest = url[len("ssh://"):]
        rest = rest.split("@", 1)[-1]
        host, _, path = rest.partition("/")
        host = host.split(":", 1)[0]
        return f"https://{host}/{_strip_git_suffix(path)}"
    if url.startswith("git://"):
        url = "https://" + url[len("git://"):]
    host_shorthand = HOST_SHORTHAND_PATTERN.match(url)
    if host_shorthand:
        host = SHORTHAND_HOSTS[host_shorthand.group(1)]
        return f"https://{host}/{_strip_git_suffix(host_shorthand.group(2))}"
    scp = SCP_URL_PATTERN.match(url)
    if scp:
        return f"https://{scp.group(1)}/{_strip_git_suffix(scp.group(2))}"
    if SHORTHAND_PATTERN.match(url):
        return f"https://github.com/{url}"
    return _strip_git_suffix(url.rstrip("/"))


def _read_package_json(path: Path) -> ProjectMetadata:
    try:
        data: Dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read %s: %s", path, exc)
        raise MetadataError(f"Invalid JSON in {path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise MetadataError(f"{path.name} must contain a JSON object")

    repository = data.get("repository")
    if isinstance(repository, dict):
        repository = repository.get("url")
    version = data.get("version")
    return ProjectMetadata(
        version=str(version) if version else None,
        repo_url=normalize_repo_url(repository) if isinstance(repository, str) else None,
    )


def _read_pyproject(path: Path) -> ProjectMetadata:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.error("Failed to read %s: %s", path, exc)
        raise MetadataError(f"Invalid TOML in {path.name}: {exc}") from exc

    project = data.get("project", {})
    if not isinstance(project, dict):
        raise MetadataError(f"[project] in {path.name} must be a table")
    project_urls = project.get("urls", {})
    if not isinstance(project_urls, dict):
        raise MetadataError(f"[project.urls] in {path.name} must be a table")
    urls = {str(key).lower(): value for key, value in project_urls.items()}
    repo_url = next((urls[key] for key in URL_KEYS if isinstance(urls.get(key), str)), None)
    version = project.get("version")
    return ProjectMetadata(
        version=str(version) if version else None,
        repo_url=normalize_repo_url(repo_url),
    )


def read_project_metadata(root: Path) -> ProjectMetadata:
    """Read version and repository URL from the project in ``root``.

    ``package.json`` is preferred over ``pyproject.toml``. When neither
    exists an empty :class:`ProjectMetadata` is returned.

    Raises
    ------
    MetadataError
        If the metadata file exists but cannot be parsed.
    """
    package_json = root / "package.json"
    if package_json.is_file():
        logger.debug("Reading project metadata from %s", package_json)
        return _read_package_json(package_json)
    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        logger.debug("Reading project metadata from %s", pyproject)
        return _read_pyproject(pyproject)
    logger.debug("No project metadata found in %s", root)
    return ProjectMetadata()


def bump_version(version: Optional[str], patch: bool = False, minor: bool = False, major: bool = False) -> Optional[str]:
    """Return ``version`` incremented for the requested release kind.

    ``major`` resets minor and patch, ``minor`` resets patch. Without a
    release kind, or without a current version, None is returned.

    Raises
    ------
    MetadataError
        If ``version`` does not start with ``MAJOR.MINOR.PATCH``.
    """
    if not version or not (patch or minor or major):
        return None
    match = VERSION_PATTERN.match(version.strip())
    if not match:
        raise MetadataError(f"Cannot bump non-semantic version '{version}'")
    major_n, minor_n, patch_n = (int(part) for part in match.groups())
    if major:
        return f"{major_n + 1}.0.0"
    if minor:
        return f"{major_n}.{minor_n + 1}.0"
    return f"{major_n}.{minor_n}.{patch_n + 1}"
