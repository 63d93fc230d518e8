"""
Parsing of raw Git log entries into conventional commit records.

A subject line has the form ``type(scope)!: description``. The scope is
optional and becomes the record's category; the ``!`` marker, or a
``BREAKING CHANGE`` line in the body, moves the commit into the
``breaking`` type and keeps its original type as the breaking flag.
Entries that do not follow the convention are dropped.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from changelog_generator.grouping.commit_grouper import BREAKING_TYPE
from changelog_generator.grouping.commit_model import CommitRecord
from changelog_generator.vcs.git_client import RawCommit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


COMMIT_PATTERN = re.compile(r"^(\w*)(?:\(([\w$.\-* ]*)\))?(!)?: (.*)$")
BREAKING_PATTERN = re.compile(r"^BREAKING[ -]CHANGE", re.MULTILINE)


def parse_commit(raw: RawCommit) -> Optional[CommitRecord]:
    """Parse a single raw commit.

    Returns
    -------
    Optional[CommitRecord]
        The parsed record, or ``None`` if the subject does not follow the
        conventional commit format.
    """
    match = COMMIT_PATTERN.match(raw.subject)
    if not match or not match.group(1) or not match.group(4):
        return None

    commit_type = match.group(1).lower()
    flag_if_breaking = None
    if match.group(3) or BREAKING_PATTERN.search(raw.body):
        flag_if_breaking = commit_type
        commit_type = BREAKING_TYPE

    return CommitRecord(
        hash=raw.hash,
        type=commit_type,
        subject=match.group(4),
        category=match.group(2) or "",
        body=raw.body,
        flag_if_breaking=flag_if_breaking,
    )


def parse_commits(raw_commits: Iterable[RawCommit], exclude: Iterable[str] = ()) -> List[CommitRecord]:
    """Parse raw commits, dropping non-conventional ones and excluded types.

    Parameters
    ----------
    raw_commits : Iterable[RawCommit]
        Entries as returned by :meth:`GitClient.get_log`.
    exclude : Iterable[str]
        Commit types to leave out of the result. Compared against the
        resolved type, so ``breaking`` excludes breaking changes.

    Returns
    -------
    List[CommitRecord]
        Parsed commits in their original order.
    """
    excluded = {item.strip().lower() for item in exclude if item.strip()}
    commits: List[CommitRecord] = []
    skipped = 0
    for raw in raw_commits:
        commit = parse_commit(raw)
        if commit is None or commit.type in excluded:
            skipped += 1
            continue
        commits.append(commit)
    logger.debug("Parsed %d commit(s), skipped %d", len(commits), skipped)
    return commits
