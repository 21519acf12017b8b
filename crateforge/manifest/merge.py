"""Merging of per-starter dependency tables.

Two layers:

* :func:`combine_specs` merges two specs declared for the same dependency
  into one spec that honours both declarations, or raises
  :class:`~crateforge.errors.DependencyConflict`.
* :func:`merge_dependency_sets` folds the dependency tables of every
  requested starter, left to right, into one table.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from crateforge.errors import DependencyConflict
from crateforge.manifest.models import SOURCE_FIELDS, DependencySet, DependencySpec
from crateforge.manifest.version_req import InvalidVersionReq, parse_version_req

logger = logging.getLogger(__name__)


def combine_specs(name: str, left: DependencySpec, right: DependencySpec) -> DependencySpec:
    """Combine two declarations of dependency *name* into one.

    The result's version requirement accepts exactly the versions both sides
    accept, its features are the union of both, and ``default_features`` is
    kept if either side keeps it.  Disagreement on ``optional`` or on any
    source field, or version requirements with no common version, raise
    :class:`DependencyConflict`.
    """
    if left.optional != right.optional:
        raise DependencyConflict(
            name,
            f"optional = {str(left.optional).lower()}",
            f"optional = {str(right.optional).lower()}",
            "starters disagree on whether the dependency is optional",
        )

    for field in SOURCE_FIELDS:
        ours, theirs = getattr(left, field), getattr(right, field)
        if ours != theirs:
            raise DependencyConflict(
                name,
                f"{field} = {ours!r}",
                f"{field} = {theirs!r}",
                f"starters disagree on the dependency {field}",
            )

    return left.model_copy(
        update={
            "version": _combine_versions(name, left.version, right.version),
            "features": tuple(sorted(set(left.features) | set(right.features))),
            "default_features": left.default_features or right.default_features,
        }
    )


def _combine_versions(name: str, left: str | None, right: str | None) -> str | None:
    if left is None:
        return right
    if right is None or left == right:
        return left

    try:
        combined = parse_version_req(left).intersect(parse_version_req(right))
    except InvalidVersionReq as exc:
        raise DependencyConflict(name, left, right, str(exc)) from exc
    if combined.is_empty():
        raise DependencyConflict(
            name, left, right, "version requirements have no version in common"
        )
    return str(combined)


def merge_pair(accumulated: DependencySet, incoming: DependencySet) -> DependencySet:
    """Merge two dependency tables.

    Names found on only one side are copied unchanged; names found on both
    sides are combined with :func:`combine_specs`.
    """
    names_a = set(accumulated)
    names_b = set(incoming)

    result: DependencySet = {}
    for name in names_a & names_b:
        result[name] = combine_specs(name, accumulated[name], incoming[name])
    for name in names_a ^ names_b:
        result[name] = accumulated[name] if name in accumulated else incoming[name]
    return result


def merge_dependency_sets(dependency_sets: Iterable[DependencySet]) -> DependencySet:
    """Fold dependency tables left to right, starting from an empty table.

    Callers must pass the tables in a stable order (request order of the
    starters).  The first :class:`DependencyConflict` aborts the merge.
    """
    merged: DependencySet = {}
    for index, dependency_set in enumerate(dependency_sets):
        merged = merge_pair(merged, dependency_set)
        logger.debug("Merged dependency set %d: %d entries", index, len(merged))
    return merged
