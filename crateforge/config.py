"""crateforge configuration.

Typed configuration for the generation service.  Built once at process
start (usually through :meth:`Config.from_env`) and passed explicitly into
every :func:`crateforge.scaffolder.generate` call; nothing reads ambient
environment state after that.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config(BaseModel):
    """Global crateforge configuration.

    Attributes:
        label: Text placed after ``#`` on the first line of every generated
            ``Cargo.toml``.
        workspace_dir: Temporary workspace where project directories and
            archives are materialised.
        content_dir: Directory holding ``<starter>.toml`` files.
        max_identity_attempts: Upper bound on identity candidates tried per
            request before giving up.
        log_level: Root log level used by :func:`crateforge.utils.configure_logging`.
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(default="generated by crateforge")
    workspace_dir: Path = Field(default=Path("./tmp"))
    content_dir: Path = Field(default=Path("./starters"))
    max_identity_attempts: int = Field(
        default=32, ge=1, description="Identity candidates tried before failing"
    )
    log_level: str = Field(default="INFO")

    @field_validator("label")
    @classmethod
    def _single_line_label(cls, value: str) -> str:
        if "\n" in value or "\r" in value:
            raise ValueError("label must be a single line")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CRATEFORGE_LABEL, CRATEFORGE_WORKSPACE, CRATEFORGE_CONTENT,
            CRATEFORGE_MAX_IDENTITY_ATTEMPTS, CRATEFORGE_LOG_LEVEL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CRATEFORGE_LABEL"):
            kwargs["label"] = os.environ["CRATEFORGE_LABEL"]
        if os.environ.get("CRATEFORGE_WORKSPACE"):
            kwargs["workspace_dir"] = Path(os.environ["CRATEFORGE_WORKSPACE"])
        if os.environ.get("CRATEFORGE_CONTENT"):
            kwargs["content_dir"] = Path(os.environ["CRATEFORGE_CONTENT"])
        if os.environ.get("CRATEFORGE_MAX_IDENTITY_ATTEMPTS"):
            kwargs["max_identity_attempts"] = int(
                os.environ["CRATEFORGE_MAX_IDENTITY_ATTEMPTS"]
            )
        if os.environ.get("CRATEFORGE_LOG_LEVEL"):
            kwargs["log_level"] = os.environ["CRATEFORGE_LOG_LEVEL"]
        return cls(**kwargs)

    def ensure_directories(self) -> None:
        """Create the workspace directory if it does not exist yet."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)
