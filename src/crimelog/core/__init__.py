from .aggregate import location_counts, nature_breakdown, top_k_locations
from .classify import NATURE_KEYWORDS, category_from_nature
from .merge import merge
from .records import BREAKDOWN_ORDER, FIELD_COUNT, GENERAL_LOCATIONS, Category, Incident
from .store import (
    DEFAULT_INITIAL_CAPACITY,
    HASH_SUFFIX_LENGTH,
    LOAD_FACTOR_THRESHOLD,
    IncidentStore,
    hash_suffix,
    validate_incident_id,
)

__all__ = [
    "BREAKDOWN_ORDER",
    "Category",
    "DEFAULT_INITIAL_CAPACITY",
    "FIELD_COUNT",
    "GENERAL_LOCATIONS",
    "HASH_SUFFIX_LENGTH",
    "Incident",
    "IncidentStore",
    "LOAD_FACTOR_THRESHOLD",
    "NATURE_KEYWORDS",
    "category_from_nature",
    "hash_suffix",
    "location_counts",
    "merge",
    "nature_breakdown",
    "top_k_locations",
    "validate_incident_id",
]
