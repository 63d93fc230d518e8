"""
Output of rendered changelogs. See :mod:`changelog_generator.output.file_writer`.
"""

from .file_writer import write_changelog  # noqa: F401
