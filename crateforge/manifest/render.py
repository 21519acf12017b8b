"""Rendering of ``Cargo.toml`` sections.

The package section and the dependency section are rendered independently;
the generation flow prepends the label line and writes the file.
"""

from __future__ import annotations

import json
import re

from crateforge.errors import DependencySectionError, ManifestSectionError
from crateforge.manifest.models import SOURCE_FIELDS, DependencySet, DependencySpec, ProjectDescription

INITIAL_VERSION = "0.1.0"
EDITION = "2021"
DEFAULT_DESCRIPTION = "No description"
DEFAULT_AUTHOR = "Unspecified Author"

_PACKAGE_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_PACKAGE_NAME_MAX = 64
_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def toml_string(value: str) -> str:
    """Quote *value* as a TOML basic string."""
    return json.dumps(value, ensure_ascii=False)


def render_label(label: str) -> str:
    """The comment line that opens every generated manifest."""
    return f"#{label}\n"


# ---------------------------------------------------------------------------
# [package]
# ---------------------------------------------------------------------------

def validate_package_name(name: str) -> None:
    """Raise :class:`ManifestSectionError` unless *name* is a usable crate name."""
    if not name:
        raise ManifestSectionError("name", name, "must not be empty")
    if len(name) > _PACKAGE_NAME_MAX:
        raise ManifestSectionError("name", name, f"must be at most {_PACKAGE_NAME_MAX} characters")
    if not _PACKAGE_NAME_RE.match(name):
        raise ManifestSectionError(
            "name",
            name,
            "must start with a letter and contain only ASCII letters, digits, '-' or '_'",
        )


def render_package_section(description: ProjectDescription) -> str:
    """Render the ``[package]`` table for *description*.

    Missing description and author fall back to fixed placeholders.

    Raises:
        ManifestSectionError: If the name is not a valid crate name or the
            description/author contain control characters.
    """
    validate_package_name(description.name)

    summary = description.description if description.description is not None else DEFAULT_DESCRIPTION
    author = description.author if description.author is not None else DEFAULT_AUTHOR
    for field, value in (("description", summary), ("author", author)):
        if _CONTROL_RE.search(value):
            raise ManifestSectionError(field, value, "must not contain control characters")

    lines = [
        "[package]",
        f"name = {toml_string(description.name)}",
        f"version = {toml_string(INITIAL_VERSION)}",
        f"edition = {toml_string(EDITION)}",
        f"authors = [{toml_string(author)}]",
        f"description = {toml_string(summary)}",
    ]
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# [dependencies]
# ---------------------------------------------------------------------------

def render_dependency(name: str, spec: DependencySpec) -> str:
    """Render a single ``[dependencies]`` line.

    Raises:
        DependencySectionError: If the name is not a bare TOML key or the entry
            has neither a version nor a source.
    """
    if not _BARE_KEY_RE.match(name):
        raise DependencySectionError(name, "name is not a valid dependency key")
    if spec.version is None and not spec.has_source():
        raise DependencySectionError(name, "dependency has neither a version nor a source")

    if spec.is_simple():
        return f"{name} = {toml_string(spec.version)}"

    pairs: list[str] = []
    if spec.version is not None:
        pairs.append(f"version = {toml_string(spec.version)}")
    for field in SOURCE_FIELDS:
        value = getattr(spec, field)
        if value is not None:
            pairs.append(f"{field} = {toml_string(value)}")
    if spec.features:
        features = ", ".join(toml_string(f) for f in spec.features)
        pairs.append(f"features = [{features}]")
    if not spec.default_features:
        pairs.append("default-features = false")
    if spec.optional:
        pairs.append("optional = true")
    return f"{name} = {{ {', '.join(pairs)} }}"


def render_dependency_section(dependencies: DependencySet) -> str:
    """Render the ``[dependencies]`` table, one line per entry sorted by name.

    Returns an empty string for an empty table.  Any entry that fails to
    render aborts the whole section.
    """
    if not dependencies:
        return ""
    lines = ["", "[dependencies]"]
    lines.extend(render_dependency(name, dependencies[name]) for name in sorted(dependencies))
    return "\n".join(lines) + "\n"
