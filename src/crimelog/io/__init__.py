"""I/O helpers for crimelog."""

from .ingest import iter_incidents, load_incidents, parse_incident_line

__all__ = ["iter_incidents", "load_incidents", "parse_incident_line"]
