"""
Classification and grouping of commits into changelog sections.

Commits are bucketed by their resolved type and then by category. Type
buckets are rendered in sorted order while categories and commits keep
the order in which they were first seen.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from .commit_model import CommitRecord


BREAKING_TYPE = "breaking"
DEFAULT_TYPE = "other"

TYPES: Mapping[str, str] = MappingProxyType(
    {
        "breaking": "Breaking Changes :boom:",
        "build": "Build System / Dependencies :construction_worker: :arrow_up:",
        "ci": "Continuous Integration :rocket:",
        "docs": "Documentation Changes :memo:",
        "feat": "New Features :sparkles:",
        "fix": "Bug Fixes :bug:",
        "perf": "Performance Improvements :zap:",
        "refactor": "Refactors :recycle:",
        "style": "Code Style Changes :art: :lipstick:",
        "test": "Tests 🧪",
        "other": "Other Changes :question:",
    }
)

# type -> category -> commits, all insertion ordered
CommitGroups = Dict[str, Dict[str, List[CommitRecord]]]


def resolve_type(commit_type: str, allow_unknown: bool = False) -> str:
    """Return the bucket key for a commit type.

    Known types map to themselves. Unknown types keep their own bucket
    when ``allow_unknown`` is set and fall back to ``other`` otherwise.
    """
    if commit_type in TYPES or allow_unknown:
        return commit_type
    return DEFAULT_TYPE


def group_commits(commits: Iterable[CommitRecord], allow_unknown: bool = False) -> CommitGroups:
    """Partition commits into type and category buckets.

    Parameters
    ----------
    commits : Iterable[CommitRecord]
        Commits in log order.
    allow_unknown : bool
        Keep unknown types in their own buckets instead of ``other``.

    Returns
    -------
    CommitGroups
        Nested mapping of resolved type to category to commits. Every
        commit appears in exactly one bucket.
    """
    groups: CommitGroups = {}
    for commit in commits:
        commit_type = resolve_type(commit.type or "", allow_unknown)
        categories = groups.setdefault(commit_type, {})
        categories.setdefault(commit.category or "", []).append(commit)
    return groups


def ordered_types(groups: CommitGroups) -> List[str]:
    """Return the type keys of ``groups`` in rendering order."""
    return sorted(groups)


def section_heading(commit_type: str, allow_unknown: bool = False) -> str:
    """Return the display heading for a resolved type key."""
    heading = TYPES.get(commit_type)
    if heading is None and allow_unknown:
        heading = f"{TYPES[DEFAULT_TYPE]} ({commit_type})"
    return heading or ""
