"""
Hyperlink helpers for changelog entries.

Commit hashes and pull request references are turned into links that
point at the hosting provider. Two link styles exist: a plain Markdown
link and an inline HTML anchor, the latter used for breaking changes
which are rendered inside ``<details>`` blocks.
"""

from __future__ import annotations

import re


PR_PATTERN = re.compile(r"#[1-9]\d*")


def get_commit_url(base_url: str, commit_hash: str) -> str:
    """Build the URL of a commit for the repository provider.

    Parameters
    ----------
    base_url : str
        Base URL of the project, e.g. ``https://github.com/user/repo``.
    commit_hash : str
        Hash of the commit being linked.

    Returns
    -------
    str
        The URL pointing to the commit. BitBucket uses a ``commits``
        path segment, every other provider ``commit``. A trailing
        ``.git`` on GitLab URLs is dropped.
    """
    segment = "commit"
    if "bitbucket" in base_url:
        segment = "commits"
    if "gitlab" in base_url and base_url.endswith(".git"):
        base_url = base_url[:-4]
    return f"{base_url}/{segment}/{commit_hash}"


def format_link(text: str, url: str, html: bool = False) -> str:
    """Return ``text`` linked to ``url`` as Markdown or as an HTML anchor."""
    if html:
        return f'<a href="{url}">{text}</a>'
    return f"[{text}]({url})"


def link_pull_requests(subject: str, repo_url: str, html: bool = False) -> str:
    """Rewrite every ``#<number>`` reference in ``subject`` into a pull request link."""

    def _replace(match: re.Match) -> str:
        ref = match.group(0)
        return format_link(ref, f"{repo_url}/pull/{ref[1:]}", html=html)

    return PR_PATTERN.sub(_replace, subject)
