"""Cargo version requirements reduced to half-open version intervals.

Only what the dependency combiner needs: parse a requirement such as
``"^1.2, <1.8"`` into comparators, turn each comparator into the interval
``[lower, upper)`` of ``(major, minor, patch)`` versions it accepts, and
intersect requirements.  Build metadata is ignored.  Pre-release tags do not
move the bounds, but two exact comparators that name different pre-releases
of the same version are treated as disjoint.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

Version = tuple[int, int, int]

_ZERO: Version = (0, 0, 0)

_COMPARATOR_RE = re.compile(
    r"""
    ^(?P<op>\^|~|=|>=|<=|>|<)?
    (?P<major>\d+|\*|x|X)
    (?:\.(?P<minor>\d+|\*|x|X))?
    (?:\.(?P<patch>\d+|\*|x|X))?
    (?:-(?P<pre>[0-9A-Za-z.-]+))?
    (?:\+[0-9A-Za-z.-]+)?$
    """,
    re.VERBOSE,
)

_WILDCARDS = {"*", "x", "X"}


class InvalidVersionReq(ValueError):
    """Raised when a string is not a valid Cargo version requirement."""


@dataclass(frozen=True)
class Comparator:
    op: str
    major: Optional[int]
    minor: Optional[int]
    patch: Optional[int]
    text: str
    pre: Optional[str] = None

    @property
    def is_wildcard(self) -> bool:
        """True for a bare ``*`` that accepts every version."""
        return self.major is None

    def exact_version(self) -> Optional[tuple[int, int, int, Optional[str]]]:
        """The single version an ``=MAJOR.MINOR.PATCH`` comparator pins, else ``None``."""
        if self.op != "=" or self.patch is None:
            return None
        return self.major, self.minor, self.patch, self.pre

    def bounds(self) -> tuple[Version, Optional[Version]]:
        """Return ``(lower, upper)``; ``upper`` is exclusive, ``None`` is unbounded."""
        major, minor, patch = self.major, self.minor, self.patch
        if major is None:
            return _ZERO, None

        floor = (major, minor or 0, patch or 0)
        if patch is not None:
            ceiling = (major, minor, patch + 1)
        elif minor is not None:
            ceiling = (major, minor + 1, 0)
        else:
            ceiling = (major + 1, 0, 0)

        if self.op == "=":
            return floor, ceiling
        if self.op == ">":
            return ceiling, None
        if self.op == ">=":
            return floor, None
        if self.op == "<":
            return _ZERO, floor
        if self.op == "<=":
            return _ZERO, ceiling
        if self.op == "~":
            if minor is None:
                return floor, (major + 1, 0, 0)
            return floor, (major, minor + 1, 0)

        # caret, also the default operator
        if major > 0 or minor is None:
            return floor, (major + 1, 0, 0)
        if minor > 0 or patch is None:
            return floor, (0, minor + 1, 0)
        return floor, (0, 0, patch + 1)


def _part(raw: Optional[str]) -> tuple[Optional[int], bool]:
    if raw is None:
        return None, False
    if raw in _WILDCARDS:
        return None, True
    return int(raw), False


def parse_comparator(text: str) -> Comparator:
    compact = re.sub(r"\s+", "", text)
    match = _COMPARATOR_RE.match(compact)
    if not match:
        raise InvalidVersionReq(f"invalid version comparator {text.strip()!r}")

    op = match.group("op") or "^"
    major, major_wild = _part(match.group("major"))
    minor, minor_wild = _part(match.group("minor"))
    patch, patch_wild = _part(match.group("patch"))

    if major_wild and (match.group("minor") or match.group("patch")):
        raise InvalidVersionReq(f"wildcard major version must stand alone in {text.strip()!r}")
    if minor_wild and patch is not None:
        raise InvalidVersionReq(f"numeric patch after wildcard minor in {text.strip()!r}")
    if (major_wild or minor_wild or patch_wild) and match.group("op") not in (None, "="):
        raise InvalidVersionReq(f"wildcards cannot follow an operator in {text.strip()!r}")

    # A wildcard behaves like an omitted component under exact matching.
    if major_wild or minor_wild or patch_wild:
        op = "="
    return Comparator(
        op=op, major=major, minor=minor, patch=patch, text=compact, pre=match.group("pre")
    )


@dataclass(frozen=True)
class VersionReq:
    """A comma-separated list of comparators, all of which must hold."""

    comparators: tuple[Comparator, ...]

    def interval(self) -> tuple[Version, Optional[Version]]:
        lower, upper = _ZERO, None
        for comparator in self.comparators:
            lo, hi = comparator.bounds()
            lower = max(lower, lo)
            if hi is not None:
                upper = hi if upper is None else min(upper, hi)
        return lower, upper

    def is_empty(self) -> bool:
        """True when no version satisfies every comparator."""
        pinned = {c.exact_version() for c in self.comparators} - {None}
        if len(pinned) > 1:
            return True
        lower, upper = self.interval()
        return upper is not None and lower >= upper

    def intersect(self, other: "VersionReq") -> "VersionReq":
        """Requirement accepting exactly the versions both sides accept.

        A bare ``*`` may only appear on its own, so it is dropped as soon as
        either side contributes a concrete comparator.
        """
        merged: list[Comparator] = []
        seen: set[str] = set()
        for comparator in self.comparators + other.comparators:
            if comparator.text not in seen:
                seen.add(comparator.text)
                merged.append(comparator)
        concrete = [c for c in merged if not c.is_wildcard]
        return VersionReq(tuple(concrete or merged[:1]))

    def __str__(self) -> str:
        return ", ".join(c.text for c in self.comparators)


def parse_version_req(text: str) -> VersionReq:
    """Parse a Cargo version requirement.

    Raises:
        InvalidVersionReq: If the text is empty, any comparator is malformed,
            or a bare ``*`` is combined with other comparators.
    """
    parts = text.split(",")
    if not text.strip() or any(not p.strip() for p in parts):
        raise InvalidVersionReq(f"invalid version requirement {text!r}")
    comparators = tuple(parse_comparator(p) for p in parts)
    if len(comparators) > 1 and any(c.is_wildcard for c in comparators):
        raise InvalidVersionReq(f"a bare wildcard must be the only comparator in {text!r}")
    return VersionReq(comparators)
