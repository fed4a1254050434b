"""Turn already-fetched ledger records into validated models.

The ledger reader hands over plain JSON-like rows (camelCase keys, numbers as
decimal strings). `parse_policies` / `parse_claims` validate each row with
the pydantic models; rows that cannot be read at all (not a mapping) are
skipped and counted rather than aborting the run. The `load_*` helpers read
the same rows from JSON files on disk.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from policy_analytics.models import Claim, ContractStats, Policy

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

POLICIES_FILE = "policies.json"
CLAIMS_FILE = "claims.json"
CONTRACT_STATS_FILE = "contract_stats.json"


def _parse_rows(rows: Sequence[Any], model: type[M]) -> tuple[list[M], int]:
    """Validate rows against `model`.

    Args:
        rows: List of mappings or already-built `model` instances.
        model: Pydantic model to validate with.

    Returns:
        A tuple of (list_of_models, bad_count).

    Raises:
        TypeError: if `rows` is not a list or tuple.
    """
    if not isinstance(rows, (list, tuple)):
        raise TypeError(
            f"{model.__name__} records must be a list, got {type(rows).__name__}"
        )

    good: list[M] = []
    bad = 0
    for row in rows:
        if isinstance(row, model):
            good.append(row)
            continue
        if not isinstance(row, Mapping):
            bad += 1
            continue
        try:
            good.append(model.model_validate(dict(row)))
        except ValidationError:
            bad += 1

    if bad:
        log.warning("Skipped %d unreadable %s record(s)", bad, model.__name__)
    return good, bad


def parse_policies(rows: Sequence[Any]) -> list[Policy]:
    """Validate raw policy rows, skipping unreadable ones."""
    policies, _ = _parse_rows(rows, Policy)
    return policies


def parse_claims(rows: Sequence[Any]) -> list[Claim]:
    """Validate raw claim rows, skipping unreadable ones."""
    claims, _ = _parse_rows(rows, Claim)
    return claims


def parse_contract_stats(row: Mapping[str, Any] | ContractStats | None) -> ContractStats | None:
    if row is None or isinstance(row, ContractStats):
        return row
    if not isinstance(row, Mapping):
        raise TypeError(f"contract stats must be a mapping, got {type(row).__name__}")
    return ContractStats.model_validate(dict(row))


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def load_policies(path: Path) -> list[Policy]:
    policies = parse_policies(_read_json(path))
    log.info("Loaded %d policies from %s", len(policies), path)
    return policies


def load_claims(path: Path) -> list[Claim]:
    claims = parse_claims(_read_json(path))
    log.info("Loaded %d claims from %s", len(claims), path)
    return claims


def load_contract_stats(path: Path) -> ContractStats:
    stats = parse_contract_stats(_read_json(path))
    return stats if stats is not None else ContractStats()


def load_wallet(wallet_dir: Path) -> tuple[list[Policy], list[Claim], ContractStats | None]:
    """Load one wallet's records from a directory.

    The directory must contain ``policies.json`` and ``claims.json``;
    ``contract_stats.json`` is optional.

    Args:
        wallet_dir: Directory holding the wallet's JSON files.

    Returns:
        (policies, claims, contract_stats_or_None)
    """
    policies = load_policies(wallet_dir / POLICIES_FILE)
    claims = load_claims(wallet_dir / CLAIMS_FILE)

    stats_path = wallet_dir / CONTRACT_STATS_FILE
    contract_stats = load_contract_stats(stats_path) if stats_path.exists() else None
    return policies, claims, contract_stats
