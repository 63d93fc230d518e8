"""
Command line interface for the changelog_generator tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``changelog`` command. It orchestrates
repository detection, configuration loading, version and repository URL
lookup, reading and parsing the commit history, rendering the release
section and writing it out. Status messages are printed to stderr so
that ``--file -`` leaves stdout to the changelog itself.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional

import click

from changelog_generator import __version__
from changelog_generator.config.loader import ConfigError, load_config
from changelog_generator.output.file_writer import STDOUT_PATH, write_changelog
from changelog_generator.parsing.commit_parser import parse_commits
from changelog_generator.project.metadata import (
    MetadataError,
    bump_version,
    normalize_repo_url,
    read_project_metadata,
)
from changelog_generator.render.markdown_writer import RenderOptions, render_markdown
from changelog_generator.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation until the CLI configures logging, see enable_package_logging.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_NO_COMMITS = 4
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6
EXIT_METADATA_ERROR = 9
EXIT_WRITE_FAILURE = 10

DEFAULT_FILE = "CHANGELOG.md"


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"→ {self.message}...", err=True)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            elapsed = time.time() - self.start_time
            click.echo(f"  ✓ Done ({elapsed:.1f}s)", err=True)
        return False


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=True)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=True)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=True)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def enable_package_logging() -> None:
    """Let the package module loggers propagate to the handlers configured by the CLI."""
    for name, item in logging.Logger.manager.loggerDict.items():
        if name.startswith("changelog_generator") and isinstance(item, logging.Logger):
            item.propagate = True


def split_types(value: Optional[str]) -> List[str]:
    """Split a comma separated list of commit types."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def resolve_repo_url(option_url: Optional[str], config_url: Optional[str], project_url: Optional[str], client: GitClient) -> Optional[str]:
    """Pick the repository URL used for links.

    The command line wins over the configuration file, which wins over
    the project metadata. The ``origin`` remote is the last resort.
    """
    for candidate in (option_url, config_url, project_url):
        if candidate:
            return normalize_repo_url(candidate)
    return normalize_repo_url(client.get_remote_url())


@click.command()
@click.option("-p", "--patch", is_flag=True, help="Create a patch changelog.")
@click.option("-m", "--minor", is_flag=True, help="Create a minor changelog.")
@click.option("-M", "--major", is_flag=True, help="Create a major changelog.")
@click.option("-t", "--tag", help="Generate from a specific tag or range (e.g. v1.2.3 or v1.2.3..v1.2.4).")
@click.option("-x", "--exclude", help="Exclude selected commit types (comma separated).")
@click.option("-f", "--file", "file_path", help=f"File to write to, defaults to {DEFAULT_FILE}, use - for stdout.")
@click.option("-u", "--repo-url", help="Specify the repository URL for commit links.")
@click.option("-a", "--allow-unknown", is_flag=True, help="Allow unknown commit types.")
@click.option("--release-version", help="Version label for the heading, overrides the computed version.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="changelog")
def main(
    patch: bool,
    minor: bool,
    major: bool,
    tag: Optional[str],
    exclude: Optional[str],
    file_path: Optional[str],
    repo_url: Optional[str],
    allow_unknown: bool,
    release_version: Optional[str],
    verbose: bool,
) -> None:
    """📝 Generate a changelog from conventional commits.

    Reads the Git history since the latest tag (or the given range),
    groups the commits by type and prepends a Markdown release section
    to the changelog file.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )
    enable_package_logging()

    try:
        repo_root = GitClient.find_repo_root(Path.cwd())
        if repo_root is None:
            print_error("Current directory is not inside a Git repository.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        logger.debug("Repository root: %s", repo_root)

        try:
            config = load_config(repo_root)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        try:
            metadata = read_project_metadata(repo_root)
            version = release_version or bump_version(metadata.version, patch=patch, minor=minor, major=major)
        except MetadataError as exc:
            print_error(f"Project metadata error: {exc}")
            raise click.exceptions.Exit(EXIT_METADATA_ERROR)

        client = GitClient(repo_root)
        excluded = split_types(exclude) if exclude is not None else config.get("exclude", [])

        try:
            with ProgressIndicator("Reading commit history"):
                revisions = GitClient.resolve_revisions(tag, None if tag else client.get_latest_tag())
                raw_commits = client.get_log(revisions)
            url = resolve_repo_url(repo_url, config.get("repo_url"), metadata.repo_url, client)
        except GitError as exc:
            print_error(f"Git error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        commits = parse_commits(raw_commits, exclude=excluded)
        if not commits:
            print_warning("No conventional commits found.")
            raise click.exceptions.Exit(EXIT_NO_COMMITS)
        print_success(f"Found {len(commits)} commit{'s' if len(commits) != 1 else ''} in range '{revisions or 'HEAD'}'")

        options = RenderOptions(
            patch=patch,
            minor=minor,
            major=major,
            repo_url=url,
            allow_unknown=allow_unknown or bool(config.get("allow_unknown", False)),
        )
        print_info(f"Version: {version or 'unversioned'}", indent=1)
        changelog = render_markdown(version, commits, options)

        target = file_path or config.get("file") or DEFAULT_FILE
        try:
            write_changelog(target, changelog)
        except OSError as exc:
            print_error(f"Failed to write changelog: {exc}")
            raise click.exceptions.Exit(EXIT_WRITE_FAILURE)

        if target != STDOUT_PATH:
            print_success(f"Changelog written to {target}")
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
