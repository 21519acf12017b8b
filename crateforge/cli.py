"""Command-line entry point.

Usage::

    python -m crateforge my-crate --starter web --starter db -o my-crate.zip
    python -m crateforge my-lib --lib --description "Tiny helpers"
    python -m crateforge --list-starters
    python -m crateforge --save-config crateforge.json --label "acme"
    python -m crateforge my-crate --config crateforge.json
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from crateforge.config import Config
from crateforge.errors import GenerationError
from crateforge.manifest.models import ProjectDescription, TargetKind
from crateforge.scaffolder import ProjectGenerator
from crateforge.starters import DirectoryStarterStore
from crateforge.utils import (
    configure_logging,
    console,
    print_error,
    print_success,
    print_summary_table,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crateforge",
        description="crateforge -- scaffold a zipped Cargo project from starters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m crateforge my-crate --starter web --starter db\n"
            "  python -m crateforge my-lib --lib -o ./my-lib.zip\n"
        ),
    )
    parser.add_argument("name", nargs="?", help="Cargo package name")
    parser.add_argument(
        "--lib",
        action="store_true",
        help="Generate a library crate instead of a binary",
    )
    parser.add_argument(
        "--starter", "-s",
        action="append",
        default=[],
        dest="starters",
        help="Starter to merge into [dependencies] (repeatable, order kept)",
    )
    parser.add_argument("--description", default=None, help="Package description")
    parser.add_argument("--author", default=None, help="Package author")
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Archive destination (default: ./<name>.zip)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Load settings from a JSON file written by --save-config instead of the environment",
    )
    parser.add_argument(
        "--save-config",
        default=None,
        metavar="PATH",
        help="Write the effective settings to a JSON file and exit",
    )
    parser.add_argument("--workspace", default=None, help="Override the workspace directory")
    parser.add_argument("--content", default=None, help="Override the starter content directory")
    parser.add_argument("--label", default=None, help="Override the manifest label")
    parser.add_argument(
        "--list-starters",
        action="store_true",
        help="List available starters and exit",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    overrides: dict[str, object] = {}
    if args.workspace:
        overrides["workspace_dir"] = Path(args.workspace)
    if args.content:
        overrides["content_dir"] = Path(args.content)
    if args.label:
        overrides["label"] = args.label
    if overrides:
        config = Config(**{**config.model_dump(), **overrides})
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m crateforge``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _config_from_args(args)
    except (OSError, ValidationError) as exc:
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)
    configure_logging(config.log_level)
    store = DirectoryStarterStore(config.content_dir)

    if args.save_config:
        saved = config.save(Path(args.save_config))
        print_success(f"Configuration written to {saved}")
        return

    if args.list_starters:
        for name in asyncio.run(store.list_starters()):
            console.print(name)
        return

    if not args.name:
        parser.error("the package name is required")

    description = ProjectDescription(
        name=args.name,
        description=args.description,
        author=args.author,
        target_kind=TargetKind.LIB if args.lib else TargetKind.BIN,
        starters=args.starters,
    )
    output = Path(args.output) if args.output else Path(f"{args.name}.zip")

    try:
        archive = asyncio.run(ProjectGenerator(config, store).generate(description))
        output.write_bytes(archive)
    except GenerationError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except OSError as exc:
        print_error(f"Error: could not write {output}: {exc}")
        sys.exit(1)

    print_summary_table(
        {
            "Package": description.name,
            "Kind": description.target_kind.value,
            "Starters": ", ".join(description.starters) or "-",
            "Archive": str(output),
            "Size": f"{len(archive)} bytes",
        },
        title="Generated project",
    )
    print_success("Project generated successfully!")


if __name__ == "__main__":
    main()
