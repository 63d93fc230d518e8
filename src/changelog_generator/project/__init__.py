"""
Project metadata lookup for changelog_generator.

See :mod:`changelog_generator.project.metadata`.
"""

from .metadata import MetadataError, ProjectMetadata, bump_version, normalize_repo_url, read_project_metadata  # noqa: F401
