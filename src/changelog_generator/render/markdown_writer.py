"""
Markdown rendering of a changelog release section.

The :func:`render_markdown` function is a pure function from a version
label, an ordered list of :class:`CommitRecord` objects and a
:class:`RenderOptions` instance to a Markdown string. It performs no I/O
apart from reading the current date, which can be overridden with the
``today`` argument.

The produced document looks like::

    ### 1.2.0 (2024-01-31)

    ##### New Features :sparkles:

    * **api:** add endpoint ([1234abcd](https://github.com/u/r/commit/1234abcd...))

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional

from changelog_generator.grouping.commit_grouper import (
    BREAKING_TYPE,
    group_commits,
    ordered_types,
    section_heading,
)
from changelog_generator.grouping.commit_model import CommitRecord
from changelog_generator.render.links import format_link, get_commit_url, link_pull_requests


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


SHORT_HASH_LENGTH = 8
BODY_INDENT = " " * 6

# Trailer blocks removed from commit bodies, applied in this order. Each
# pattern spans the marker line plus a fixed number of following lines.
# Line content stops at any line terminator, including a CR.
_LINE = r"[^\n\r\u2028\u2029]*"
TRAILER_PATTERNS = (
    re.compile(rf"\n+END BREAKING CHANGE{_LINE}(?:\n*{_LINE}){{4}}"),
    re.compile(rf"\n+See{_LINE}(?:\n*{_LINE}){{3}}"),
    re.compile(rf"\n+Closes{_LINE}(?:\n*{_LINE}){{2}}"),
)


@dataclass(frozen=True)
class RenderOptions:
    """Options controlling how a changelog section is rendered.

    Attributes
    ----------
    patch, minor, major : bool
        Release kind. Selects the heading level; ``major`` wins over
        ``minor`` which wins over ``patch``.
    repo_url : Optional[str]
        Base URL of the hosting repository. Without it no links are
        generated.
    allow_unknown : bool
        Render commit types outside the known catalog under their own
        heading instead of folding them into "other".
    """

    patch: bool = False
    minor: bool = False
    major: bool = False
    repo_url: Optional[str] = None
    allow_unknown: bool = False


def _today() -> date:
    return datetime.now(timezone.utc).date()


def build_heading(version: Optional[str], options: RenderOptions, today: date) -> str:
    """Return the release heading line."""
    if options.major:
        marker = "##"
    elif options.minor:
        marker = "###"
    else:
        marker = "####"
    stamp = today.isoformat()
    if version:
        return f"{marker} {version} ({stamp})"
    return f"{marker} {stamp}"


def strip_trailers(body: str) -> str:
    """Remove ``END BREAKING CHANGE``, ``See`` and ``Closes`` trailer blocks from a body.

    The removal is line based and best effort: every block is replaced by
    a newline followed by a single space.
    """
    for pattern in TRAILER_PATTERNS:
        body = pattern.sub("\n ", body)
    return body


def indent_body(body: str) -> str:
    """Indent every line of ``body`` so it nests under a details block."""
    return BODY_INDENT + body.replace("\n", "\n" + BODY_INDENT)


def format_summary(commit: CommitRecord, options: RenderOptions, html: bool = False) -> str:
    """Return the one-line summary of a commit: prefix, subject and short hash.

    When ``options.repo_url`` is set, the short hash and pull request
    references are linked, as HTML anchors if ``html`` is true.
    """
    commit_hash = commit.hash or ""
    shorthash = commit_hash[:SHORT_HASH_LENGTH]
    subject = commit.subject or ""

    if options.repo_url:
        shorthash = format_link(shorthash, get_commit_url(options.repo_url, commit_hash), html=html)
        subject = link_pull_requests(subject, options.repo_url, html=html)

    flag = f"({commit.flag_if_breaking}): " if commit.flag_if_breaking else ""
    return f"{flag}{subject.strip()} ({shorthash})"


def format_details(commit: CommitRecord, options: RenderOptions) -> str:
    """Return the collapsible ``<details>`` block of a breaking commit."""
    summary = format_summary(commit, options, html=True)
    body = strip_trailers(commit.body) if commit.body else ""
    return (
        f"\n   * <details>\n      <summary>{summary}</summary>\n\n"
        f"{indent_body(body)}</details>"
    )


def format_entry(commit: CommitRecord, commit_type: str, prefix: str, options: RenderOptions) -> str:
    """Return the changelog line(s) of one commit under the bullet ``prefix``."""
    if commit_type != BREAKING_TYPE:
        return f"{prefix} {format_summary(commit, options)}"

    details = format_details(commit, options)
    if prefix == "*":
        return " " + details.strip()
    return f"{prefix} {details}"


def render_markdown(
    version: Optional[str],
    commits: Iterable[CommitRecord],
    options: RenderOptions,
    today: Optional[date] = None,
) -> str:
    """Generate the Markdown changelog section for a release.

    Parameters
    ----------
    version : Optional[str]
        Version label of the release. When empty, only the date is used
        in the heading.
    commits : Iterable[CommitRecord]
        Parsed commits in log order.
    options : RenderOptions
        Rendering options.
    today : Optional[date]
        Release date. Defaults to the current UTC date.

    Returns
    -------
    str
        The newline separated changelog section, ending with a blank line.
    """
    content: List[str] = [build_heading(version, options, today or _today()), ""]

    groups = group_commits(commits, options.allow_unknown)
    logger.debug("Rendering %d section(s)", len(groups))

    for commit_type in ordered_types(groups):
        content.append(f"##### {section_heading(commit_type, options.allow_unknown)}")
        content.append("")

        for category, entries in groups[commit_type].items():
            heading = "*" + (f" **{category}:**" if category else "")
            if len(entries) > 1 and category:
                content.append(heading)
                prefix = "  *"
            else:
                prefix = heading

            for commit in entries:
                content.append(format_entry(commit, commit_type, prefix, options))

        content.append("")

    content.append("")
    return "\n".join(content)
