"""
Data models for changelog generation.

The :class:`CommitRecord` is a single parsed conventional commit as it
is handed to the renderer. Records are immutable; grouping and
rendering never modify them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CommitRecord:
    """Representation of a parsed commit.

    Attributes
    ----------
    hash : str
        Full commit identifier.
    type : str
        Conventional Commit type (feat, fix, docs, etc.). Any string is
        accepted, not only the known ones.
    subject : str
        Single-line summary. May contain ``#123`` pull request references.
    category : str
        Scope used for sub-grouping within a type. Empty string means no
        category.
    body : str
        Multi-line free text following the subject.
    flag_if_breaking : Optional[str]
        Label rendered as a ``(<label>): `` prefix when the commit
        introduces a breaking change.
    """

    hash: str
    type: str
    subject: str
    category: str = ""
    body: str = ""
    flag_if_breaking: Optional[str] = None
