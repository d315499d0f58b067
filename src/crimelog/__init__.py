"""In-memory incident log store with chained hashing, aggregates and merge."""

from . import config, contracts, core, io, report

__all__ = [
    "config",
    "contracts",
    "core",
    "io",
    "report",
]
