"""
Git client implementation for changelog_generator.

This module wraps the read-only Git operations needed to build a
changelog: locating the repository, finding the latest tag, reading the
commit log for a revision range and looking up the remote URL. All
subprocess calls go through :meth:`GitClient._run` so that unit tests
can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


LOG_SEPARATOR = "===END==="
LOG_FORMAT = f"%H%n%s%n%b%n{LOG_SEPARATOR}"


@dataclass
class RawCommit:
    """A commit as read from ``git log``, before conventional parsing."""

    hash: str
    subject: str
    body: str


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for reading history from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    @staticmethod
    def resolve_revisions(tag: Optional[str], latest_tag: Optional[str]) -> str:
        """Return the revision range passed to ``git log``.

        An explicit range (``a..b``) is used verbatim, a single tag is
        expanded to ``<tag>..HEAD``. Without a tag the latest tag is used,
        and without any tag the whole history is read (empty range).
        """
        tag = (tag or latest_tag or "").strip()
        if not tag:
            return ""
        if ".." in tag:
            return tag
        return f"{tag}..HEAD"

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.error("Unable to execute Git: %s", e)
            raise GitError(f"Unable to execute git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_latest_tag(self) -> Optional[str]:
        """Return the most recent tag reachable from HEAD, or None if there is none."""
        result = self._run(["describe", "--tags", "--abbrev=0"], check=False)
        if result.returncode != 0:
            logger.debug("No tag found: %s", result.stderr.strip())
            return None
        return result.stdout.strip() or None

    def get_log(self, revisions: str = "") -> List[RawCommit]:
        """Read the commit log for ``revisions``.

        Parameters
        ----------
        revisions : str
            Revision range, e.g. ``v1.0.0..HEAD``. Empty reads the whole
            history of HEAD.

        Returns
        -------
        List[RawCommit]
            Commits in log order (newest first).

        Raises
        ------
        GitError
            If ``git log`` fails, e.g. because the range is unknown.
        """
        args = ["log", "-E", f"--format={LOG_FORMAT}"]
        if revisions:
            args.append(revisions)
        result = self._run(args, check=True)
        commits = parse_log_output(result.stdout)
        logger.debug("Read %d commit(s) for range '%s'", len(commits), revisions or "HEAD")
        return commits

    def get_remote_url(self, remote: str = "origin") -> Optional[str]:
        """Return the URL of ``remote``, or None if it is not configured."""
        result = self._run(["remote", "get-url", remote], check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None


def parse_log_output(output: str) -> List[RawCommit]:
    """Split ``git log`` output produced with :data:`LOG_FORMAT` into raw commits."""
    commits: List[RawCommit] = []
    for chunk in output.split(f"\n{LOG_SEPARATOR}"):
        chunk = chunk.strip("\n")
        if not chunk:
            continue
        lines = chunk.split("\n")
        commit_hash = lines[0].strip()
        subject = lines[1] if len(lines) > 1 else ""
        body = "\n".join(lines[2:]).strip("\n")
        commits.append(RawCommit(hash=commit_hash, subject=subject, body=body))
    return commits
