"""
Version control integration for changelog_generator.

Only Git is supported. See :mod:`changelog_generator.vcs.git_client`.
"""

from .git_client import GitClient, GitError, RawCommit  # noqa: F401
