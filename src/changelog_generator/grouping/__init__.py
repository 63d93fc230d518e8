"""
Grouping logic for changelog entries.

This package provides the commit data model and the logic that sorts
commits into typed, categorised sections. See
:mod:`changelog_generator.grouping.commit_grouper` and
:mod:`changelog_generator.grouping.commit_model` for details.
"""

from .commit_grouper import TYPES, group_commits, resolve_type, section_heading  # noqa: F401
from .commit_model import CommitRecord  # noqa: F401
