"""Zip packaging of an assembled project."""

from __future__ import annotations

import asyncio
import zipfile
from pathlib import Path

from crateforge.errors import CompressionError, ProjectIoError


def zip_project(
    root: Path,
    package_name: str,
    compression: int = zipfile.ZIP_DEFLATED,
) -> Path:
    """Archive every file under *root* into ``<root>.zip`` beside it.

    Entries are stored as ``<package_name>/<path relative to root>`` so the
    archive unpacks into a directory named after the crate.

    Raises:
        CompressionError: If the archive cannot be written.
    """
    root = Path(root)
    archive = root.with_name(f"{root.name}.zip")
    try:
        with zipfile.ZipFile(archive, "w", compression=compression) as zf:
            for file in sorted(root.rglob("*")):
                if file.is_file():
                    arcname = f"{package_name}/{file.relative_to(root).as_posix()}"
                    zf.write(file, arcname=arcname)
    except (OSError, ValueError, zipfile.LargeZipFile) as exc:
        raise CompressionError(root, exc) from exc
    return archive


def read_archive(archive: Path) -> bytes:
    try:
        return Path(archive).read_bytes()
    except OSError as exc:
        raise ProjectIoError(archive, exc) from exc


async def package_project(root: Path, package_name: str) -> bytes:
    """Zip *root* and return the archive's bytes."""
    archive = await asyncio.to_thread(zip_project, root, package_name)
    return await asyncio.to_thread(read_archive, archive)
