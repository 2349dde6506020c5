"""Export packager."""

from .github import GitHubExporter
from .packager import (
    build_project_bundle,
    build_project_package,
    build_template_bundle,
    build_template_files,
    ensure_relative_paths,
    synthesize_app,
    to_zip,
)
from .sources import TEMPLATE_FILES, load_template_source, resolve_template_slug

__all__ = [
    "TEMPLATE_FILES",
    "GitHubExporter",
    "build_project_bundle",
    "build_project_package",
    "build_template_bundle",
    "build_template_files",
    "ensure_relative_paths",
    "load_template_source",
    "resolve_template_slug",
    "synthesize_app",
    "to_zip",
]
