"""Starter lookup.

A starter store resolves a starter name to the raw text of its partial
``Cargo.toml``.  Two stores ship with crateforge: one backed by a content
directory of ``<name>.toml`` files and one backed by an in-memory mapping.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from crateforge.errors import StarterLookupError

_STARTER_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")
STARTER_SUFFIX = ".toml"


class StarterStore(Protocol):
    """Anything that can resolve starter names to manifest text."""

    async def get_starter(self, name: str) -> str: ...

    async def list_starters(self) -> list[str]: ...


def _check_name(name: str) -> None:
    if not _STARTER_NAME_RE.match(name):
        raise StarterLookupError(name, "starter names may only contain letters, digits, '-' or '_'")


class DirectoryStarterStore:
    """Starters stored as ``<content_dir>/<name>.toml``."""

    def __init__(self, content_dir: str | Path) -> None:
        self.content_dir = Path(content_dir)

    async def get_starter(self, name: str) -> str:
        """Return the manifest text of *name*.

        Raises:
            StarterLookupError: If the name is malformed, the file is missing,
                or it cannot be read as UTF-8.
        """
        _check_name(name)
        path = self.content_dir / f"{name}{STARTER_SUFFIX}"
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError as exc:
            raise StarterLookupError(name, "no such starter") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise StarterLookupError(name, str(exc)) from exc

    async def list_starters(self) -> list[str]:
        if not self.content_dir.is_dir():
            return []
        return sorted(
            p.stem
            for p in self.content_dir.glob(f"*{STARTER_SUFFIX}")
            if p.is_file() and _STARTER_NAME_RE.match(p.stem)
        )


class InMemoryStarterStore:
    """Starters held in a plain ``{name: manifest_text}`` mapping."""

    def __init__(self, starters: Mapping[str, str] | None = None) -> None:
        self._starters = dict(starters or {})

    async def get_starter(self, name: str) -> str:
        _check_name(name)
        try:
            return self._starters[name]
        except KeyError:
            raise StarterLookupError(name, "no such starter") from None

    async def list_starters(self) -> list[str]:
        return sorted(self._starters)
