from __future__ import annotations

import logging
import math
from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional, Sequence, Tuple

from crimelog.contracts.error import InvalidIdentifierError

from .records import Incident

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_CAPACITY: int = 10
LOAD_FACTOR_THRESHOLD: float = 4.0
HASH_SUFFIX_LENGTH: int = 5

Chain = Deque[Incident]


def hash_suffix(incident_id: str) -> int:
    """Return the integer formed by the trailing digits of ``incident_id``."""

    suffix = incident_id[-HASH_SUFFIX_LENGTH:]
    if not suffix or not (suffix.isascii() and suffix.isdigit()):
        raise InvalidIdentifierError(incident_id)
    return int(suffix)


def validate_incident_id(incident_id: str) -> None:
    hash_suffix(incident_id)


class IncidentStore:
    """Separate-chaining hash table of incidents keyed by incident id.

    Each bucket is a chain ordered most-recent first. Plain inserts never
    check for an existing id, so duplicates may coexist; ``merge`` is the
    only path that dedups by id.
    """

    __slots__ = ("_buckets", "_size", "_threshold")

    def __init__(
        self,
        initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
        load_factor_threshold: float = LOAD_FACTOR_THRESHOLD,
    ) -> None:
        if initial_capacity < 1:
            raise ValueError("initial_capacity must be > 0")
        if not math.isfinite(load_factor_threshold) or load_factor_threshold <= 0:
            raise ValueError("load_factor_threshold must be a finite number > 0")
        self._buckets: List[Chain] = [deque() for _ in range(initial_capacity)]
        self._size = 0
        self._threshold = float(load_factor_threshold)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Incident]:
        for chain in self._buckets:
            yield from chain

    @property
    def count(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._buckets)

    @property
    def load_factor_threshold(self) -> float:
        return self._threshold

    @property
    def buckets(self) -> Sequence[Chain]:
        """Raw bucket structure, exposed for inspection and tests."""
        return self._buckets

    def set_buckets(self, buckets: Iterable[Iterable[Incident]]) -> None:
        """Replace the whole bucket structure; count is recomputed from it."""

        replacement: List[Chain] = [deque(chain) for chain in buckets]
        if not replacement:
            raise ValueError("bucket structure must hold at least one bucket")
        self._buckets = replacement
        self._size = sum(len(chain) for chain in replacement)

    def load_factor(self) -> float:
        return self._size / len(self._buckets)

    def bucket_index(self, incident_id: str) -> int:
        return hash_suffix(incident_id) % len(self._buckets)

    def insert(self, incident: Incident) -> None:
        idx = self.bucket_index(incident.incident_id)
        self._buckets[idx].appendleft(incident)
        self._size += 1
        if self.load_factor() >= self._threshold:
            self.resize()

    def resize(self) -> None:
        """Double capacity and reinsert every record through ``insert``."""

        old = self._buckets
        new_capacity = len(old) * 2
        logger.debug(
            "Resizing incident store: capacity %d -> %d (%d records)",
            len(old),
            new_capacity,
            self._size,
        )
        self._buckets = [deque() for _ in range(new_capacity)]
        self._size = 0
        for chain in old:
            for incident in chain:
                self.insert(incident)

    def get(self, incident_id: str) -> Optional[Incident]:
        for incident in self._buckets[self.bucket_index(incident_id)]:
            if incident.incident_id == incident_id:
                return incident
        return None

    def contains(self, incident_id: str) -> bool:
        return self.get(incident_id) is not None

    def remove(self, incident_id: str) -> bool:
        """Remove the most recently inserted record with ``incident_id``."""

        chain = self._buckets[self.bucket_index(incident_id)]
        if not chain:
            return False
        for pos, incident in enumerate(chain):
            if incident.incident_id == incident_id:
                del chain[pos]
                self._size -= 1
                return True
        return False

    def max_chain_length(self) -> int:
        longest = 0
        for chain in self._buckets:
            longest = max(longest, len(chain))
        return longest

    def verify(self, verbose: bool = False) -> Tuple[bool, List[str]]:
        """Check the count, home-bucket and load-factor invariants."""

        msgs: List[str] = []
        total = 0
        misplaced = 0
        for idx, chain in enumerate(self._buckets):
            total += len(chain)
            for incident in chain:
                if self.bucket_index(incident.incident_id) != idx:
                    misplaced += 1
                    msgs.append(f"Misplaced incident {incident.incident_id!r} in bucket {idx}")
        size_ok = total == self._size
        if not size_ok:
            msgs.append(f"Size mismatch: count={self._size}, summed={total}")
        lf_ok = self.load_factor() < self._threshold
        if not lf_ok:
            msgs.append(
                f"Load factor {self.load_factor():.3f} at or above threshold {self._threshold}"
            )
        if verbose:
            msgs.append(
                f"Capacity={self.capacity}, Count={self._size}, "
                f"LF={self.load_factor():.3f}, MaxChainLen={self.max_chain_length()}"
            )
        return (size_ok and lf_ok and misplaced == 0), msgs


__all__ = [
    "DEFAULT_INITIAL_CAPACITY",
    "HASH_SUFFIX_LENGTH",
    "LOAD_FACTOR_THRESHOLD",
    "IncidentStore",
    "hash_suffix",
    "validate_incident_id",
]
