"""Command-line interface for computing analytics snapshots.

Provides subcommands: `snapshot` (one wallet) and `batch` (every wallet
directory under a root, computed in parallel with Dask). Each command is
implemented as a `cmd_*` function that accepts an argparse namespace.
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Sequence, cast

import pandas as pd
from dask import delayed, compute  # type: ignore[attr-defined]

from policy_analytics.aggregate.window import RANGE_DAYS
from policy_analytics.config import get_settings
from policy_analytics.export import export_snapshot, snapshot_to_json
from policy_analytics.ingest.load_records import (
    load_claims,
    load_contract_stats,
    load_policies,
    load_wallet,
)
from policy_analytics.logging_config import configure_logging
from policy_analytics.snapshot import build_snapshot

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def parse_as_of(value: str) -> float:
    """Parse an ``--as-of`` date/datetime into epoch seconds.

    Naive values are taken as UTC; a bare date means midnight of that day.
    """
    try:
        ts = pd.Timestamp(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid --as-of value: {value!r}") from exc
    if ts is pd.NaT:
        raise argparse.ArgumentTypeError(f"invalid --as-of value: {value!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.timestamp()


def _snapshot_for_wallet(
    wallet_dir: Path,
    range_token: str,
    reference_time: float,
    tz: str,
    out_dir: Path,
) -> Path:
    """Runs inside a Dask task: load one wallet, build and export its snapshot."""
    policies, claims, contract_stats = load_wallet(wallet_dir)
    snapshot = build_snapshot(
        policies,
        claims,
        range_token=range_token,
        reference_time=reference_time,
        contract_stats=contract_stats,
        tz=tz,
    )
    return export_snapshot(snapshot, out_dir / wallet_dir.name)


# --------------------------------------------------
# SNAPSHOT
# --------------------------------------------------
def cmd_snapshot(args: argparse.Namespace) -> None:
    """Build one snapshot and print it, or export it with ``--export``.

    Args:
        args: argparse namespace with `policies`, `claims`, `contract_stats`,
            `range`, `as_of`, `export`, `out_dir`.
    """
    s = get_settings()
    policies = load_policies(args.policies)
    claims = load_claims(args.claims)
    contract_stats = load_contract_stats(args.contract_stats) if args.contract_stats else None

    snapshot = build_snapshot(
        policies,
        claims,
        range_token=args.range or s.default_range,
        reference_time=args.as_of,
        contract_stats=contract_stats,
        tz=s.timezone,
    )

    if args.export:
        export_snapshot(snapshot, args.out_dir or s.export_dir)
    else:
        print(snapshot_to_json(snapshot))


# --------------------------------------------------
# BATCH
# --------------------------------------------------
def cmd_batch(args: argparse.Namespace) -> None:
    """Export a snapshot for every wallet directory under `input_dir`.

    All wallets share one reference time so the batch is consistent.

    Args:
        args: argparse namespace with `input_dir`, `range`, `as_of`, `out_dir`.
    """
    s = get_settings()
    wallets = sorted(p for p in args.input_dir.iterdir() if p.is_dir())
    if not wallets:
        raise RuntimeError(f"No wallet directories found in {args.input_dir}")

    reference_time = args.as_of if args.as_of is not None else time.time()
    range_token = args.range or s.default_range
    out_dir = args.out_dir or s.export_dir

    tasks = [
        delayed(_snapshot_for_wallet)(w, range_token, reference_time, s.timezone, out_dir)
        for w in wallets
    ]
    # `compute` is untyped in our environment; cast to Any before calling
    paths = cast(Any, compute)(*tasks)

    log.info("Batch complete: %d snapshot(s) written under %s", len(paths), out_dir)


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser with `snapshot` and `batch`.
    """
    p = argparse.ArgumentParser(prog="policy-analytics")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Unknown tokens are accepted and resolved to the default window.
    range_help = f"one of {', '.join(RANGE_DAYS)} (default from ANALYTICS_DEFAULT_RANGE)"

    p_snap = sub.add_parser("snapshot")
    p_snap.add_argument("--policies", type=Path, required=True)
    p_snap.add_argument("--claims", type=Path, required=True)
    p_snap.add_argument("--contract-stats", type=Path, default=None)
    p_snap.add_argument("--range", default=None, help=range_help)
    p_snap.add_argument("--as-of", type=parse_as_of, default=None)
    p_snap.add_argument("--export", action="store_true")
    p_snap.add_argument("--out-dir", type=Path, default=None)

    p_batch = sub.add_parser("batch")
    p_batch.add_argument("--input-dir", type=Path, required=True)
    p_batch.add_argument("--range", default=None, help=range_help)
    p_batch.add_argument("--as-of", type=parse_as_of, default=None)
    p_batch.add_argument("--out-dir", type=Path, default=None)

    return p


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    args = build_parser().parse_args(argv)

    s = get_settings()
    # stdout is reserved for the snapshot JSON
    configure_logging(s.log_path, s.log_level, stream=sys.stderr)

    if args.cmd == "snapshot":
        cmd_snapshot(args)
    elif args.cmd == "batch":
        cmd_batch(args)
    else:
        raise SystemExit(2)


if __name__ == "__main__":
    main()
