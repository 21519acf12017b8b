"""Exception hierarchy for project generation.

Every failure raised while generating a project derives from
``GenerationError`` so the boundary layer (CLI or any embedding service)
can report it as one tagged result.  Each subclass keeps the structured
fields that describe the failure instead of only a formatted message.
"""

from __future__ import annotations

from pathlib import Path


class GenerationError(Exception):
    """Base class for every project generation failure."""


class ManifestSectionError(GenerationError):
    """Raised when package metadata cannot be rendered into ``[package]``."""

    def __init__(self, field: str, value: str, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid package {field} {value!r}: {reason}")


class DependencySectionError(GenerationError):
    """Raised when a single dependency entry cannot be rendered."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Could not render dependency '{name}': {reason}")


class DependencyConflict(GenerationError):
    """Raised when two starters declare irreconcilable specs for one dependency."""

    def __init__(self, name: str, left: str, right: str, reason: str) -> None:
        self.name = name
        self.left = left
        self.right = right
        self.reason = reason
        super().__init__(
            f"Conflicting declarations for dependency '{name}': "
            f"{left} vs {right} ({reason})"
        )


class StarterLookupError(GenerationError):
    """Raised when a named starter is absent or unreadable."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Could not get content of '{name}' starter: {reason}")


class ManifestParseError(GenerationError):
    """Raised when a starter's manifest text is not a valid dependency table."""

    def __init__(self, starter: str, reason: str) -> None:
        self.starter = starter
        self.reason = reason
        super().__init__(f"Could not parse manifest of '{starter}' starter: {reason}")


class ProjectIoError(GenerationError):
    """Raised on filesystem failures outside the assembler (e.g. reading the archive)."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"I/O error on {self.path}: {cause}")


class ProjectCreationError(ProjectIoError):
    """Raised when the assembler cannot create a directory or write a file."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(path, cause)
        self.args = (f"Could not create project file {self.path}: {cause}",)


class CompressionError(GenerationError):
    """Raised when the assembled project cannot be archived."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Could not compress project {self.path}: {cause}")


class IdentityExhausted(GenerationError):
    """Raised when no free project identity was found within the attempt budget."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            f"No free project identity found after {attempts} attempt(s)"
        )
