"""JSON report assembly and schema validation."""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import Draft202012Validator

from .core.aggregate import location_counts, nature_breakdown, top_k_locations
from .core.store import IncidentStore

REPORT_SCHEMA = "crimelog.report.v1"


def load_report_schema() -> Dict[str, Any]:
    schema_resource = resources.files("crimelog.contracts") / "report_schema.json"
    with schema_resource.open(encoding="utf-8") as stream:
        return json.loads(stream.read())


def build_report(
    store: IncidentStore, *, top_k: int, source: Optional[str] = None
) -> Dict[str, Any]:
    breakdown = nature_breakdown(store)
    return {
        "schema": REPORT_SCHEMA,
        "source": source,
        "total_incidents": len(store),
        "capacity": store.capacity,
        "load_factor": store.load_factor(),
        "location_counts": location_counts(store),
        "top_locations": top_k_locations(store, top_k),
        "nature_breakdown": {category.value: pct for category, pct in breakdown.items()},
    }


def validate_report(payload: Any, schema: Optional[Dict[str, Any]] = None) -> List[str]:
    """Return one message per schema violation; empty when ``payload`` is valid."""

    validator = Draft202012Validator(schema or load_report_schema())
    errors = sorted(
        validator.iter_errors(payload), key=lambda err: [str(part) for part in err.path]
    )
    return [f"{err.message} @ {list(err.path)}" for err in errors]


def read_report(path: str | Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


__all__ = ["REPORT_SCHEMA", "build_report", "load_report_schema", "read_report", "validate_report"]
