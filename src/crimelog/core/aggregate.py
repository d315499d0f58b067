"""Read-only aggregate queries over an incident store."""

from __future__ import annotations

from typing import Dict, Iterable, List

from .records import BREAKDOWN_ORDER, GENERAL_LOCATIONS, Category, Incident

_USED = -1


def location_counts(incidents: Iterable[Incident]) -> Dict[str, int]:
    """Count incidents per general-location tag, in tag order.

    Tags outside the closed set are not counted.
    """

    counts = {tag: 0 for tag in GENERAL_LOCATIONS}
    for incident in incidents:
        if incident.general_location in counts:
            counts[incident.general_location] += 1
    return counts


def top_k_locations(incidents: Iterable[Incident], k: int) -> List[str]:
    """Return the ``k`` busiest general locations, highest count first.

    Ties go to the tag listed earlier in ``GENERAL_LOCATIONS``.
    """

    if k <= 0:
        return []
    counts = list(location_counts(incidents).values())
    picked: List[str] = []
    for _ in range(min(k, len(GENERAL_LOCATIONS))):
        highest = 0
        for idx, value in enumerate(counts):
            if value > counts[highest]:
                highest = idx
        picked.append(GENERAL_LOCATIONS[highest])
        counts[highest] = _USED
    return picked


def nature_breakdown(incidents: Iterable[Incident]) -> Dict[Category, float]:
    """Percentage of incidents per category; all zeros when there are none."""

    tallies = {category: 0 for category in BREAKDOWN_ORDER}
    total = 0
    for incident in incidents:
        tallies[incident.category] += 1
        total += 1
    if total == 0:
        return {category: 0.0 for category in BREAKDOWN_ORDER}
    return {category: 100.0 * count / total for category, count in tallies.items()}


__all__ = ["location_counts", "nature_breakdown", "top_k_locations"]
