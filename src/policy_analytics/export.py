"""JSON export of analytics snapshots.

The export is a pure formatting step: the file content is exactly the
snapshot serialized with camelCase keys and two-space indentation, nothing
is recomputed here.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from pathlib import Path

from policy_analytics.models import AnalyticsSnapshot

log = logging.getLogger(__name__)


def snapshot_to_json(snapshot: AnalyticsSnapshot) -> str:
    """Serialize a snapshot as pretty-printed JSON."""
    return snapshot.model_dump_json(by_alias=True, indent=2)


def export_filename(range_token: str, export_date: date) -> str:
    """Return ``analytics-<rangeToken>-<YYYY-MM-DD>.json``."""
    return f"analytics-{range_token}-{export_date.isoformat()}.json"


def export_snapshot(
    snapshot: AnalyticsSnapshot,
    out_dir: Path,
    export_date: date | None = None,
) -> Path:
    """Write a snapshot to `out_dir` and return the file path.

    Args:
        snapshot: Snapshot to export.
        out_dir: Target directory (created if missing).
        export_date: Date used in the file name. Defaults to the UTC calendar
            day of the snapshot's reference time.

    Returns:
        Path of the written file.
    """
    if export_date is None:
        export_date = datetime.fromtimestamp(snapshot.reference_time, tz=timezone.utc).date()

    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(snapshot.window.range_token, export_date)
    path.write_text(snapshot_to_json(snapshot), encoding="utf-8")

    log.info("Exported %s snapshot to %s", snapshot.window.range_token, path)
    return path
