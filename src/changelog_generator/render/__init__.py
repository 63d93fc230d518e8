"""
Rendering of changelog documents.

See :mod:`changelog_generator.render.markdown_writer` for the Markdown
renderer and :mod:`changelog_generator.render.links` for provider
specific link building.
"""

from .links import get_commit_url  # noqa: F401
from .markdown_writer import RenderOptions, render_markdown  # noqa: F401
