"""Typed configuration loader for the crimelog CLI."""

from __future__ import annotations

import codecs
import math
import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .contracts.error import BadInputError
from .core.store import DEFAULT_INITIAL_CAPACITY, LOAD_FACTOR_THRESHOLD

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def _parse_bool(raw: Any, name: str) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
    raise BadInputError(f"{name} must be boolean")


def _coerce_fields(
    section: dict[str, Any], name: str, casters: Mapping[str, Callable[[Any], Any]]
) -> None:
    for key, caster in casters.items():
        if key not in section:
            continue
        value = section[key]
        if isinstance(value, bool):
            raise BadInputError(f"{name}.{key} must be a {caster.__name__}, not a boolean")
        try:
            coerced = caster(value)
        except (TypeError, ValueError, OverflowError) as exc:
            raise BadInputError(f"{name}.{key} must be a {caster.__name__}") from exc
        if caster is int and isinstance(value, float) and coerced != value:
            raise BadInputError(f"{name}.{key} must be a whole number")
        section[key] = coerced


@dataclass
class StorePolicy:
    initial_capacity: int = DEFAULT_INITIAL_CAPACITY
    load_factor_threshold: float = LOAD_FACTOR_THRESHOLD

    def validate(self) -> None:
        if self.initial_capacity <= 0:
            raise BadInputError("store.initial_capacity must be > 0")
        if not math.isfinite(self.load_factor_threshold) or self.load_factor_threshold <= 0:
            raise BadInputError("store.load_factor_threshold must be a finite number > 0")
        # below 1/capacity a single insert would double the table repeatedly
        if self.load_factor_threshold < 1 / self.initial_capacity:
            raise BadInputError(
                "store.load_factor_threshold must be >= 1 / store.initial_capacity"
            )


@dataclass
class IngestPolicy:
    delimiter: str = ","
    skip_malformed: bool = False
    max_rows: int = 5_000_000
    encoding: str = "utf-8"

    def validate(self) -> None:
        if len(self.delimiter) != 1:
            raise BadInputError("ingest.delimiter must be a single character")
        if self.max_rows < 0:
            raise BadInputError("ingest.max_rows must be >= 0")
        if not self.encoding:
            raise BadInputError("ingest.encoding must not be empty")
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise BadInputError(f"ingest.encoding is not a known codec: {self.encoding}") from exc


@dataclass
class ReportPolicy:
    top_k: int = 3

    def validate(self) -> None:
        if self.top_k < 0:
            raise BadInputError("report.top_k must be >= 0")


@dataclass
class AppConfig:
    store: StorePolicy = field(default_factory=StorePolicy)
    ingest: IngestPolicy = field(default_factory=IngestPolicy)
    report: ReportPolicy = field(default_factory=ReportPolicy)

    @classmethod
    def load(cls, path: Path | None) -> AppConfig:
        if path is None:
            cfg = cls()
        else:
            try:
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise BadInputError(f"Config file not found: {path}") from exc
            except tomllib.TOMLDecodeError as exc:
                raise BadInputError(f"Invalid TOML: {exc}") from exc
            cfg = cls.from_dict(data)
        cfg.apply_env_overrides(os.environ)
        cfg.validate()
        return cfg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        sections: dict[str, dict[str, Any]] = {}
        for name in ("store", "ingest", "report"):
            section = data.get(name, {})
            if not isinstance(section, dict):
                raise BadInputError(f"[{name}] section must be a table")
            sections[name] = dict(section)

        _coerce_fields(
            sections["store"],
            "store",
            {"initial_capacity": int, "load_factor_threshold": float},
        )
        _coerce_fields(sections["ingest"], "ingest", {"max_rows": int})
        _coerce_fields(sections["report"], "report", {"top_k": int})
        for key in ("delimiter", "encoding"):
            if key in sections["ingest"] and not isinstance(sections["ingest"][key], str):
                raise BadInputError(f"ingest.{key} must be a string")

        ingest_data = sections["ingest"]
        if "skip_malformed" in ingest_data:
            ingest_data["skip_malformed"] = _parse_bool(
                ingest_data["skip_malformed"], "ingest.skip_malformed"
            )

        try:
            store = StorePolicy(**sections["store"])
            ingest = IngestPolicy(**ingest_data)
            report = ReportPolicy(**sections["report"])
        except TypeError as exc:
            raise BadInputError(f"Unknown config key: {exc}") from exc
        return cls(store=store, ingest=ingest, report=report)

    def apply_env_overrides(self, env: Mapping[str, str]) -> None:
        mapping: dict[str, tuple[object, str, Callable[[str], Any]]] = {
            "CRIMELOG_INITIAL_CAPACITY": (self.store, "initial_capacity", int),
            "CRIMELOG_LOAD_FACTOR_THRESHOLD": (self.store, "load_factor_threshold", float),
            "CRIMELOG_DELIMITER": (self.ingest, "delimiter", str),
            "CRIMELOG_MAX_ROWS": (self.ingest, "max_rows", int),
            "CRIMELOG_ENCODING": (self.ingest, "encoding", str),
            "CRIMELOG_TOP_K": (self.report, "top_k", int),
        }
        for key, (target, attr, caster) in mapping.items():
            raw_value = env.get(key)
            if raw_value is None:
                continue
            try:
                value = caster(raw_value)
            except ValueError as exc:
                raise BadInputError(f"Invalid env override {key}={raw_value!r}") from exc
            setattr(target, attr, value)

        raw_skip = env.get("CRIMELOG_SKIP_MALFORMED")
        if raw_skip is not None:
            try:
                self.ingest.skip_malformed = _parse_bool(raw_skip, "CRIMELOG_SKIP_MALFORMED")
            except BadInputError as exc:
                raise BadInputError(
                    f"Invalid env override CRIMELOG_SKIP_MALFORMED={raw_skip!r}"
                ) from exc

    def validate(self) -> None:
        self.store.validate()
        self.ingest.validate()
        self.report.validate()


def load_app_config(path: str | None) -> AppConfig:
    config_path = Path(path) if path else None
    return AppConfig.load(config_path)
