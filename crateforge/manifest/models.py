"""Pydantic v2 models for generation requests and Cargo dependency tables."""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TargetKind(str, Enum):
    """Kind of crate to generate. Decides the entry-point file and its template."""
    BIN = "bin"
    LIB = "lib"


# ---------------------------------------------------------------------------
# Request model
# ---------------------------------------------------------------------------

class ProjectDescription(BaseModel):
    """Everything a caller supplies to generate one project."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Cargo package name")
    description: Optional[str] = Field(default=None, description="Package description")
    author: Optional[str] = Field(default=None, description="Package author")
    target_kind: TargetKind = Field(default=TargetKind.BIN, description="bin or lib")
    starters: list[str] = Field(
        default_factory=list,
        description="Starter names in request order; duplicates are kept",
    )

    def content_hash(self) -> str:
        """SHA-256 hex digest of the canonical JSON form of this description."""
        return hashlib.sha256(self.model_dump_json().encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Dependency model
# ---------------------------------------------------------------------------

SOURCE_FIELDS: tuple[str, ...] = ("path", "git", "branch", "tag", "rev", "registry", "package")


class DependencySpec(BaseModel):
    """One ``[dependencies]`` entry: a version requirement plus its attributes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: Optional[str] = None
    features: tuple[str, ...] = ()
    optional: bool = False
    default_features: bool = True
    path: Optional[str] = None
    git: Optional[str] = None
    branch: Optional[str] = None
    tag: Optional[str] = None
    rev: Optional[str] = None
    registry: Optional[str] = None
    package: Optional[str] = None

    @field_validator("features")
    @classmethod
    def _normalise_features(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(sorted(set(value)))

    @field_validator("version")
    @classmethod
    def _strip_version(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None

    def source(self) -> tuple[Optional[str], ...]:
        """Alternate-source fields as a tuple, in ``SOURCE_FIELDS`` order."""
        return tuple(getattr(self, name) for name in SOURCE_FIELDS)

    def has_source(self) -> bool:
        return any(value is not None for value in self.source())

    def is_simple(self) -> bool:
        """True when the dependency can be written as ``name = "<version>"``."""
        return (
            self.version is not None
            and not self.features
            and not self.optional
            and self.default_features
            and not self.has_source()
        )


DependencySet = dict[str, DependencySpec]
