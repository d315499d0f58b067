"""Incident log ingestion.

Input is a text stream of delimiter-separated lines, seven fields each:
id, nature, report date, occurrence date, location, disposition and general
location. There is no header row and no quoting; every line either becomes
one stored incident or is rejected.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from crimelog.config import IngestPolicy
from crimelog.contracts.error import BadInputError
from crimelog.core.classify import category_from_nature
from crimelog.core.records import FIELD_COUNT, Category, Incident
from crimelog.core.store import IncidentStore, validate_incident_id

logger = logging.getLogger(__name__)

_LINE_HINT = "Expected: id,nature,report date,occurrence date,location,disposition,general location"


def parse_incident_line(
    line: str,
    *,
    delimiter: str = ",",
    classifier: Callable[[str], Category] = category_from_nature,
) -> Incident:
    """Split one log line into an ``Incident``; category comes from ``classifier``."""

    fields = line.rstrip("\r\n").split(delimiter)
    if len(fields) != FIELD_COUNT:
        raise BadInputError(
            f"expected {FIELD_COUNT} fields, found {len(fields)}",
            hint=_LINE_HINT,
        )
    incident_id, nature, report_date, occurrence_date, location, disposition, general = fields
    validate_incident_id(incident_id)
    return Incident(
        incident_id=incident_id,
        nature=nature,
        report_date=report_date,
        occurrence_date=occurrence_date,
        location=location,
        disposition=disposition,
        general_location=general,
        category=classifier(nature),
    )


def iter_incidents(
    lines: Iterable[str],
    *,
    delimiter: str = ",",
    skip_malformed: bool = False,
    max_rows: int = 0,
    source: str = "<stream>",
) -> Iterator[Incident]:
    rows = 0
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        rows += 1
        if max_rows and rows > max_rows:
            raise BadInputError(
                f"{source}: row limit of {max_rows} exceeded at line {line_no}",
                hint="Raise ingest.max_rows or set it to 0 to disable the check",
            )
        try:
            incident = parse_incident_line(line, delimiter=delimiter)
        except BadInputError as exc:
            if skip_malformed:
                logger.warning("Skipping %s line %d: %s", source, line_no, exc)
                continue
            raise BadInputError(f"{source} line {line_no}: {exc}", hint=exc.hint) from exc
        yield incident


def load_incidents(
    path: str | Path,
    store: IncidentStore | None = None,
    *,
    policy: IngestPolicy | None = None,
) -> IncidentStore:
    """Ingest every line of ``path`` into ``store`` (a fresh store if omitted)."""

    policy = policy or IngestPolicy()
    target = store if store is not None else IncidentStore()
    log_path = Path(path)
    if not log_path.exists():
        raise FileNotFoundError(log_path)

    before = len(target)
    with log_path.open("r", encoding=policy.encoding, newline="") as fh:
        for incident in iter_incidents(
            fh,
            delimiter=policy.delimiter,
            skip_malformed=policy.skip_malformed,
            max_rows=policy.max_rows,
            source=str(log_path),
        ):
            target.insert(incident)
    logger.info(
        "Loaded %d incidents from %s (count=%d, capacity=%d)",
        len(target) - before,
        log_path,
        len(target),
        target.capacity,
    )
    return target


__all__ = ["iter_incidents", "load_incidents", "parse_incident_line"]
