from __future__ import annotations

import logging
from typing import Set

from .store import IncidentStore

logger = logging.getLogger(__name__)


def merge(source: IncidentStore, destination: IncidentStore) -> int:
    """Copy incidents from ``source`` whose id is absent from ``destination``.

    Identity is the incident id alone. ``source`` is left untouched and the
    number of inserted incidents is returned.
    """

    known: Set[str] = {incident.incident_id for incident in destination}
    pending = list(source)
    inserted = 0
    for incident in pending:
        if incident.incident_id in known:
            continue
        destination.insert(incident)
        known.add(incident.incident_id)
        inserted += 1
    logger.debug(
        "Merged %d of %d incidents; destination now holds %d",
        inserted,
        len(pending),
        len(destination),
    )
    return inserted


__all__ = ["merge"]
