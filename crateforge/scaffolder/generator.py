"""Main generation orchestrator.

Takes a ``ProjectDescription`` and produces the zipped bytes of a Cargo
project whose ``Cargo.toml`` merges the dependency tables of every
requested starter.
"""

from __future__ import annotations

import logging

from crateforge.config import Config
from crateforge.manifest.merge import merge_dependency_sets
from crateforge.manifest.models import DependencySet, ProjectDescription
from crateforge.manifest.parser import parse_starter
from crateforge.manifest.render import (
    render_dependency_section,
    render_label,
    render_package_section,
)
from crateforge.starters import DirectoryStarterStore, StarterStore

from .assembler import ProjectAssembler
from .identity import IdentityGenerator
from .packager import package_project
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)


class ProjectGenerator:
    """Generation orchestrator.

    One instance serves any number of requests, concurrently if needed: the
    only state shared between requests is the workspace directory, and each
    request works inside a directory it claimed for itself.

    Attributes:
        config: Immutable service configuration.
        starters: Store resolving starter names to manifest text.
    """

    def __init__(self, config: Config, starters: StarterStore | None = None) -> None:
        self.config = config
        self.starters = starters or DirectoryStarterStore(config.content_dir)
        self.renderer = TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self, description: ProjectDescription) -> bytes:
        """Generate the project for *description* and return the zip bytes.

        Raises:
            GenerationError: The first failure of any stage; partially written
                project directories are left in place.
        """
        identities = IdentityGenerator(
            self.config.workspace_dir,
            description,
            max_attempts=self.config.max_identity_attempts,
        )

        # 1. Claim a project directory and write the entry point
        project = await ProjectAssembler.create(identities, self.renderer)
        await project.write_entry_point(description.target_kind)

        # 2. Render the package section
        label = render_label(self.config.label)
        package_section = render_package_section(description)

        # 3. Merge starter dependencies, if any
        dependency_section = ""
        if description.starters:
            merged = await self.collect_dependencies(description.starters)
            dependency_section = render_dependency_section(merged)

        # 4. Write Cargo.toml
        await project.write_manifest(label, package_section, dependency_section)

        # 5. Zip
        archive = await package_project(project.root, description.name)
        logger.info(
            "Generated %s (%s, %d starter(s), %d bytes)",
            description.name,
            project.identity,
            len(description.starters),
            len(archive),
        )
        return archive

    async def collect_dependencies(self, starter_names: list[str]) -> DependencySet:
        """Fetch, parse and merge the dependency tables of *starter_names* in order."""
        texts: list[str] = []
        for name in starter_names:
            texts.append(await self.starters.get_starter(name))

        parsed = [parse_starter(name, text) for name, text in zip(starter_names, texts)]
        return merge_dependency_sets(parsed)


async def generate(
    description: ProjectDescription,
    config: Config,
    starters: StarterStore | None = None,
) -> bytes:
    """Generate one project; see :meth:`ProjectGenerator.generate`."""
    return await ProjectGenerator(config, starters).generate(description)
