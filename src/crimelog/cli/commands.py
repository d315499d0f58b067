"""CLI command registration and handlers for crimelog."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from crimelog.config import AppConfig
from crimelog.contracts.error import BadInputError, Exit, InvariantError, IOErrorEnvelope
from crimelog.core.aggregate import location_counts, nature_breakdown, top_k_locations
from crimelog.core.merge import merge
from crimelog.core.store import IncidentStore
from crimelog.report import build_report, read_report, validate_report


@dataclass(frozen=True)
class CLIContext:
    """Runtime hooks supplied by the top-level CLI entrypoint."""

    emit_success: Callable[..., None]
    load_store: Callable[[Sequence[str]], IncidentStore]
    app_config: Callable[[], AppConfig]
    logger: logging.Logger
    json_enabled: Callable[[], bool]
    guard: Callable[[Callable[[argparse.Namespace], int]], Callable[[argparse.Namespace], int]]


def register_subcommands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ctx: CLIContext,
) -> Dict[str, Callable[[argparse.Namespace], int]]:
    """Define CLI subcommands and return their handlers."""

    handlers: Dict[str, Callable[[argparse.Namespace], int]] = {}

    def _register(
        name: str,
        help_text: Optional[str],
        configure: Callable[[argparse.ArgumentParser], Callable[[argparse.Namespace], int]],
    ) -> None:
        parser = subparsers.add_parser(name, help=help_text)
        handler = configure(parser)
        handlers[name] = ctx.guard(handler)

    _register(
        "load",
        "Ingest incident logs and print store statistics.",
        lambda parser: _configure_load(parser, ctx),
    )
    _register("find", "Look up one incident by id.", lambda parser: _configure_find(parser, ctx))
    _register(
        "delete",
        "Remove incidents by id and report the new count.",
        lambda parser: _configure_delete(parser, ctx),
    )
    _register(
        "top-locations",
        "List the general locations with the most incidents.",
        lambda parser: _configure_top_locations(parser, ctx),
    )
    _register(
        "breakdown",
        "Percentage of incidents per category.",
        lambda parser: _configure_breakdown(parser, ctx),
    )
    _register(
        "merge",
        "Merge one log into another, skipping ids already present.",
        lambda parser: _configure_merge(parser, ctx),
    )
    _register(
        "verify",
        "Check store invariants after ingesting a log.",
        lambda parser: _configure_verify(parser, ctx),
    )
    _register(
        "report",
        "Write a schema-validated JSON report for a log.",
        lambda parser: _configure_report(parser, ctx),
    )
    _register(
        "validate-report",
        "Validate a saved JSON report against the bundled schema.",
        lambda parser: _configure_validate_report(parser, ctx),
    )

    return handlers


def _add_csv_argument(parser: argparse.ArgumentParser, *, multiple: bool = False) -> None:
    if multiple:
        parser.add_argument(
            "--csv",
            required=True,
            nargs="+",
            help="One or more incident log files, ingested in order",
        )
    else:
        parser.add_argument("--csv", required=True, help="Incident log file")


def _store_stats(store: IncidentStore) -> Dict[str, Any]:
    return {
        "count": len(store),
        "capacity": store.capacity,
        "load_factor": store.load_factor(),
        "max_chain_length": store.max_chain_length(),
    }


def _configure_load(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_csv_argument(parser, multiple=True)

    def handler(args: argparse.Namespace) -> int:
        store = ctx.load_store(args.csv)
        stats = _store_stats(store)
        text = (
            f"count={stats['count']} capacity={stats['capacity']} "
            f"load_factor={stats['load_factor']:.3f} max_chain={stats['max_chain_length']}"
        )
        ctx.emit_success("load", text=text, data={"csv": list(args.csv), **stats})
        return int(Exit.OK)

    return handler


def _configure_find(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_csv_argument(parser)
    parser.add_argument("incident_id")

    def handler(args: argparse.Namespace) -> int:
        store = ctx.load_store([args.csv])
        incident = store.get(args.incident_id)
        if incident is None:
            text = f"{args.incident_id}: not found"
        else:
            text = ", ".join(f"{key}={value}" for key, value in incident.to_dict().items())
        data = {
            "incident_id": args.incident_id,
            "found": incident is not None,
            "incident": incident.to_dict() if incident is not None else None,
        }
        ctx.emit_success("find", text=text, data=data)
        return int(Exit.OK)

    return handler


def _configure_delete(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_csv_argument(parser)
    parser.add_argument("incident_ids", nargs="+", metavar="incident_id")

    def handler(args: argparse.Namespace) -> int:
        store = ctx.load_store([args.csv])
        removed: Dict[str, bool] = {}
        for incident_id in args.incident_ids:
            removed[incident_id] = store.remove(incident_id)
            if not removed[incident_id]:
                ctx.logger.info("No incident with id %s", incident_id)
        lines = [f"{key}: {'removed' if ok else 'absent'}" for key, ok in removed.items()]
        lines.append(f"count={len(store)}")
        ctx.emit_success(
            "delete", text="\n".join(lines), data={"removed": removed, "count": len(store)}
        )
        return int(Exit.OK)

    return handler


def _configure_top_locations(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_csv_argument(parser)
    parser.add_argument(
        "-k",
        "--top-k",
        type=int,
        default=None,
        help="Number of locations to list (default: report.top_k from config)",
    )

    def handler(args: argparse.Namespace) -> int:
        k = args.top_k if args.top_k is not None else ctx.app_config().report.top_k
        store = ctx.load_store([args.csv])
        counts = location_counts(store)
        top = top_k_locations(store, k)
        text = "\n".join(f"{rank}. {tag} ({counts[tag]})" for rank, tag in enumerate(top, 1))
        ctx.emit_success(
            "top-locations",
            text=text,
            data={"k": k, "locations": top, "counts": {tag: counts[tag] for tag in top}},
        )
        return int(Exit.OK)

    return handler


def _configure_breakdown(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_csv_argument(parser)

    def handler(args: argparse.Namespace) -> int:
        store = ctx.load_store([args.csv])
        breakdown = {category.value: pct for category, pct in nature_breakdown(store).items()}
        text = "\n".join(f"{name}: {pct:.2f}%" for name, pct in breakdown.items())
        ctx.emit_success(
            "breakdown", text=text, data={"total": len(store), "breakdown": breakdown}
        )
        return int(Exit.OK)

    return handler


def _configure_merge(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    parser.add_argument("--source", required=True, help="Log whose incidents are copied")
    parser.add_argument("--dest", required=True, help="Log that receives new incidents")

    def handler(args: argparse.Namespace) -> int:
        source = ctx.load_store([args.source])
        destination = ctx.load_store([args.dest])
        before = len(destination)
        inserted = merge(source, destination)
        ctx.logger.info("Merged %s into %s: %d new incidents", args.source, args.dest, inserted)
        data = {
            "source_count": len(source),
            "dest_before": before,
            "dest_after": len(destination),
            "inserted": inserted,
            "capacity": destination.capacity,
        }
        text = (
            f"inserted={inserted} dest_before={before} dest_after={len(destination)} "
            f"capacity={destination.capacity}"
        )
        ctx.emit_success("merge", text=text, data=data)
        return int(Exit.OK)

    return handler


def _configure_verify(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_csv_argument(parser)
    parser.add_argument("--verbose", action="store_true")

    def handler(args: argparse.Namespace) -> int:
        store = ctx.load_store([args.csv])
        ok, messages = store.verify(verbose=args.verbose)
        if not ok:
            raise InvariantError("; ".join(messages))
        text = "\n".join(["OK: store verified", *messages])
        ctx.emit_success("verify", text=text, data={"verified": True, "messages": messages})
        return int(Exit.OK)

    return handler


def _configure_report(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_csv_argument(parser)
    parser.add_argument("--top-k", type=int, default=None)
    parser.add_argument("--out", default=None, help="Write the report here instead of stdout")

    def handler(args: argparse.Namespace) -> int:
        k = args.top_k if args.top_k is not None else ctx.app_config().report.top_k
        store = ctx.load_store([args.csv])
        payload = build_report(store, top_k=k, source=args.csv)
        errors = validate_report(payload)
        if errors:
            raise InvariantError("Report failed schema validation: " + "; ".join(errors))
        if args.out:
            out_path = Path(args.out).expanduser().resolve()
            try:
                out_path.parent.mkdir(parents=True, exist_ok=True)
                out_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
            except OSError as exc:
                raise IOErrorEnvelope(str(exc)) from exc
            ctx.logger.info("Wrote report: %s", out_path)
            ctx.emit_success("report", text=str(out_path), data={"out": str(out_path)})
        else:
            text = None if ctx.json_enabled() else json.dumps(payload, indent=2)
            ctx.emit_success("report", text=text, data={"report": payload})
        return int(Exit.OK)

    return handler


def _configure_validate_report(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    parser.add_argument("path", help="Report JSON file")

    def handler(args: argparse.Namespace) -> int:
        try:
            payload = read_report(args.path)
        except json.JSONDecodeError as exc:
            raise BadInputError(f"{args.path}: invalid JSON ({exc})") from exc
        errors: List[str] = validate_report(payload)
        if errors:
            raise BadInputError(
                f"{args.path}: {len(errors)} schema violation(s): " + "; ".join(errors)
            )
        ctx.emit_success(
            "validate-report",
            text="Validation finished: report valid",
            data={"path": args.path, "valid": True},
        )
        return int(Exit.OK)

    return handler


__all__ = ["CLIContext", "register_subcommands"]
