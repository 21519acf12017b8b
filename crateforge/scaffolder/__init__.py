"""crateforge scaffolder -- generates zipped Cargo projects.

Quick usage::

    from crateforge.config import Config
    from crateforge.manifest import ProjectDescription, TargetKind
    from crateforge.scaffolder import ProjectGenerator

    generator = ProjectGenerator(Config.from_env())
    archive = await generator.generate(
        ProjectDescription(name="my-crate", target_kind=TargetKind.LIB, starters=["web"])
    )
"""

from crateforge.scaffolder.assembler import ProjectAssembler
from crateforge.scaffolder.generator import ProjectGenerator, generate
from crateforge.scaffolder.identity import IdentityGenerator
from crateforge.scaffolder.packager import package_project, zip_project
from crateforge.scaffolder.templates import TemplateRenderer

__all__ = [
    "IdentityGenerator",
    "ProjectAssembler",
    "ProjectGenerator",
    "TemplateRenderer",
    "generate",
    "package_project",
    "zip_project",
]
