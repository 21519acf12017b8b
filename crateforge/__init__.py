"""crateforge -- Cargo project scaffolding with starter dependency merging."""

__version__ = "0.1.0"
