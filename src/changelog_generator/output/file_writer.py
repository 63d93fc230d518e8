"""
Writing the rendered changelog.

New release sections are prepended to the existing changelog so the
most recent release comes first. The special path ``-`` writes to
standard output instead.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


STDOUT_PATH = "-"


def write_changelog(path: str, text: str) -> None:
    """Prepend ``text`` to the changelog at ``path``, or print it when ``path`` is ``-``.

    The file is created if it does not exist yet.

    Raises
    ------
    OSError
        If the file cannot be read or written.
    """
    if path == STDOUT_PATH:
        click.echo(text, nl=False)
        return

    target = Path(path)
    existing = target.read_text(encoding="utf-8") if target.exists() else ""
    target.write_text(text + existing, encoding="utf-8")
    logger.debug("Wrote %d character(s) to %s", len(text), target)
