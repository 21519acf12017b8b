"""Project assembly: the on-disk Cargo project behind one generation request."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from crateforge.errors import ProjectCreationError
from crateforge.manifest.models import TargetKind

from .identity import IdentityGenerator
from .templates import TemplateRenderer, output_name

logger = logging.getLogger(__name__)

MANIFEST_TEMPLATE = "Cargo.toml.j2"

ENTRY_POINT_TEMPLATES: dict[TargetKind, str] = {
    TargetKind.BIN: "src/main.rs.j2",
    TargetKind.LIB: "src/lib.rs.j2",
}


class ProjectAssembler:
    """Writes the files of one project under ``<workspace>/<identity>/``.

    The directory is owned by the request that claimed it.  Nothing is
    removed on failure; reclaiming orphaned directories is left to the
    operator.
    """

    def __init__(
        self, identity: str, root: Path, renderer: TemplateRenderer | None = None
    ) -> None:
        self.identity = identity
        self.root = Path(root)
        self.renderer = renderer or TemplateRenderer()

    @classmethod
    async def create(
        cls, identities: IdentityGenerator, renderer: TemplateRenderer | None = None
    ) -> "ProjectAssembler":
        """Claim a fresh identity and create its project root."""
        identity, root = await asyncio.to_thread(identities.claim)
        logger.info("Created project directory %s", root)
        return cls(identity, root, renderer)

    async def write_entry_point(self, target_kind: TargetKind) -> Path:
        """Write ``src/main.rs`` or ``src/lib.rs`` from the template for *target_kind*."""
        template = ENTRY_POINT_TEMPLATES[target_kind]
        return await self._render(template, {})

    async def write_manifest(
        self, label: str, package_section: str, dependency_section: str = ""
    ) -> Path:
        """Write ``Cargo.toml`` from already-rendered sections."""
        return await self._render(
            MANIFEST_TEMPLATE,
            {
                "label": label,
                "package_section": package_section,
                "dependency_section": dependency_section,
            },
        )

    async def _render(self, template: str, context: dict[str, str]) -> Path:
        path = self.root / output_name(template)
        try:
            return await self.renderer.render_to_file(template, path, context)
        except OSError as exc:
            raise ProjectCreationError(path, exc) from exc
