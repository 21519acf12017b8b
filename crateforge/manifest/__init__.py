"""Cargo manifest handling: starter parsing, dependency merging, rendering.

Usage::

    from crateforge.manifest import (
        merge_dependency_sets,
        parse_starter,
        render_dependency_section,
    )

    web = parse_starter("web", web_text)
    db = parse_starter("db", db_text)
    merged = merge_dependency_sets([web, db])
    print(render_dependency_section(merged))
"""

from crateforge.manifest.merge import combine_specs, merge_dependency_sets, merge_pair
from crateforge.manifest.models import (
    DependencySet,
    DependencySpec,
    ProjectDescription,
    TargetKind,
)
from crateforge.manifest.parser import parse_starter
from crateforge.manifest.render import (
    render_dependency_section,
    render_label,
    render_package_section,
)

__all__ = [
    "combine_specs",
    "merge_dependency_sets",
    "merge_pair",
    "parse_starter",
    "render_dependency_section",
    "render_label",
    "render_package_section",
    "DependencySet",
    "DependencySpec",
    "ProjectDescription",
    "TargetKind",
]
