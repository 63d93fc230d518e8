"""
Conventional commit parsing.

See :mod:`changelog_generator.parsing.commit_parser` for details.
"""

from .commit_parser import parse_commit, parse_commits  # noqa: F401
