"""Parsing of starter manifests into dependency tables.

A starter is a partial ``Cargo.toml``.  Only its ``[dependencies]`` table is
read; each entry is either a bare version string (``serde = "1.0"``) or an
inline/sub-table with the usual Cargo keys.
"""

from __future__ import annotations

import tomllib
from typing import Any

from pydantic import ValidationError

from crateforge.errors import ManifestParseError
from crateforge.manifest.models import DependencySet, DependencySpec
from crateforge.manifest.version_req import InvalidVersionReq, parse_version_req

# Cargo spells multi-word keys with hyphens.
_KEY_ALIASES: dict[str, str] = {
    "default-features": "default_features",
}


def parse_starter(starter: str, text: str) -> DependencySet:
    """Parse the manifest text of *starter* into a :data:`DependencySet`.

    Args:
        starter: Starter name, used only for error reporting.
        text: Raw TOML manifest text.

    Returns:
        Mapping of dependency name to spec.  Empty when the manifest has no
        ``[dependencies]`` table.

    Raises:
        ManifestParseError: If the text is not TOML, the table has the wrong
            shape, or a version requirement is malformed.
    """
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestParseError(starter, f"invalid TOML: {exc}") from exc

    table = document.get("dependencies", {})
    if not isinstance(table, dict):
        raise ManifestParseError(starter, "[dependencies] must be a table")

    dependencies: DependencySet = {}
    for name, raw in table.items():
        dependencies[name] = _parse_entry(starter, name, raw)
    return dependencies


def _parse_entry(starter: str, name: str, raw: Any) -> DependencySpec:
    if isinstance(raw, str):
        fields: dict[str, Any] = {"version": raw}
    elif isinstance(raw, dict):
        fields = {_KEY_ALIASES.get(key, key): value for key, value in raw.items()}
        # TOML arrays load as lists; strict validation only takes tuples.
        if isinstance(fields.get("features"), list):
            fields["features"] = tuple(fields["features"])
    else:
        raise ManifestParseError(
            starter,
            f"dependency '{name}' must be a version string or a table, "
            f"got {type(raw).__name__}",
        )

    try:
        spec = DependencySpec.model_validate(fields, strict=True)
    except ValidationError as exc:
        raise ManifestParseError(starter, f"dependency '{name}': {exc}") from exc

    if spec.version is not None:
        try:
            parse_version_req(spec.version)
        except InvalidVersionReq as exc:
            raise ManifestParseError(starter, f"dependency '{name}': {exc}") from exc
    return spec
