"""Shared pytest fixtures for the crateforge test suite.

Provides reusable fixtures for:
- Temporary workspace and starter content directories
- Sample starter manifests and an in-memory starter store
- Configurations pointing at the temporary directories
- Deterministic clocks for identity generation
"""

from __future__ import annotations

import textwrap
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from crateforge.config import Config
from crateforge.manifest.models import ProjectDescription, TargetKind
from crateforge.starters import InMemoryStarterStore


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    """Temporary workspace for generated projects (auto-cleanup)."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    yield workspace


@pytest.fixture
def content_dir(tmp_path: Path, starter_manifests: dict[str, str]) -> Path:
    """Starter content directory holding one ``<name>.toml`` per sample starter."""
    content = tmp_path / "starters"
    content.mkdir()
    for name, text in starter_manifests.items():
        (content / f"{name}.toml").write_text(text, encoding="utf-8")
    yield content


# ---------------------------------------------------------------------------
# Starters
# ---------------------------------------------------------------------------

@pytest.fixture
def starter_manifests() -> dict[str, str]:
    """Raw manifest text of a handful of realistic starters."""
    return {
        "web": textwrap.dedent("""\
            [package]
            name = "web-starter"
            version = "0.1.0"

            [dependencies]
            axum = "0.7"
            tokio = { version = "1", features = ["macros", "rt-multi-thread"] }
            serde = { version = "1.0", features = ["derive"] }
        """),
        "db": textwrap.dedent("""\
            [dependencies]
            sqlx = { version = "0.7", features = ["postgres", "runtime-tokio"] }
            tokio = { version = "1.35", features = ["rt-multi-thread", "sync"] }
        """),
        "cli": textwrap.dedent("""\
            [dependencies]
            clap = { version = "4", features = ["derive"] }
            anyhow = "1.0"
        """),
        "serde-json": textwrap.dedent("""\
            [dependencies]
            serde = { version = "1.0", features = ["rc"] }
            serde_json = "1.0"
        """),
        "old-tokio": textwrap.dedent("""\
            [dependencies]
            tokio = "0.2"
        """),
        "optional-serde": textwrap.dedent("""\
            [dependencies]
            serde = { version = "1.0", optional = true }
        """),
        "empty": "[package]\nname = \"empty\"\n",
        "broken": "[dependencies\nserde = 1.0\n",
    }


@pytest.fixture
def starter_store(starter_manifests: dict[str, str]) -> InMemoryStarterStore:
    return InMemoryStarterStore(starter_manifests)


# ---------------------------------------------------------------------------
# Config & requests
# ---------------------------------------------------------------------------

@pytest.fixture
def config(workspace_dir: Path, content_dir: Path) -> Config:
    return Config(
        label="generated by crateforge tests",
        workspace_dir=workspace_dir,
        content_dir=content_dir,
        max_identity_attempts=8,
    )


@pytest.fixture
def bin_description() -> ProjectDescription:
    return ProjectDescription(
        name="hello-app",
        description="A greeting binary",
        author="Ferris",
        target_kind=TargetKind.BIN,
    )


@pytest.fixture
def lib_description() -> ProjectDescription:
    return ProjectDescription(name="adder", target_kind=TargetKind.LIB)


# ---------------------------------------------------------------------------
# Clocks
# ---------------------------------------------------------------------------

FIXED_INSTANT = datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def frozen_clock():
    """A clock that always returns the same instant."""
    return lambda: FIXED_INSTANT


@pytest.fixture
def ticking_clock():
    """A clock that advances by one microsecond per call."""
    state = {"now": FIXED_INSTANT}

    def _tick() -> datetime:
        state["now"] += timedelta(microseconds=1)
        return state["now"]

    return _tick
