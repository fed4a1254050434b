"""Enum codes used by the policy contract and their display labels.

Labels are looked up through explicit tables keyed by enum member rather than
by position in a list, so reordering or extending an enum cannot silently
shift labels. Any code outside a table maps to ``UNKNOWN``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

UNKNOWN = "Unknown"


class PlanType(IntEnum):
    BASIC = 0
    PREMIUM = 1
    PLATINUM = 2


class PaymentType(IntEnum):
    ONE_TIME = 0
    MONTHLY = 1


class PolicyStatus(IntEnum):
    ACTIVE = 0
    EXPIRED = 1
    CANCELLED = 2
    SUSPENDED = 3


class ClaimStatus(IntEnum):
    PENDING = 0
    APPROVED = 1
    REJECTED = 2
    PAID = 3


PLAN_LABELS: dict[PlanType, str] = {
    PlanType.BASIC: "Basic",
    PlanType.PREMIUM: "Premium",
    PlanType.PLATINUM: "Platinum",
}

PAYMENT_TYPE_LABELS: dict[PaymentType, str] = {
    PaymentType.ONE_TIME: "One-time",
    PaymentType.MONTHLY: "Monthly",
}

CLAIM_STATUS_LABELS: dict[ClaimStatus, str] = {
    ClaimStatus.PENDING: "Pending",
    ClaimStatus.APPROVED: "Approved",
    ClaimStatus.REJECTED: "Rejected",
    ClaimStatus.PAID: "Paid",
}

# Claims that resulted in a payout decision in the claimant's favour.
APPROVED_CLAIM_STATUSES = frozenset({ClaimStatus.APPROVED, ClaimStatus.PAID})


def _lookup(enum_cls: type[IntEnum], table: dict[Any, str], code: Any) -> str:
    """Translate a raw enum code to its label, falling back to ``UNKNOWN``."""
    if code is None or isinstance(code, bool):
        return UNKNOWN
    try:
        member = enum_cls(int(code))
    except (TypeError, ValueError):
        return UNKNOWN
    return table.get(member, UNKNOWN)


def plan_label(code: Any) -> str:
    return _lookup(PlanType, PLAN_LABELS, code)


def payment_type_label(code: Any) -> str:
    return _lookup(PaymentType, PAYMENT_TYPE_LABELS, code)


def claim_status_label(code: Any) -> str:
    return _lookup(ClaimStatus, CLAIM_STATUS_LABELS, code)


def is_active_policy(code: Any) -> bool:
    return code is not None and code == PolicyStatus.ACTIVE


def is_approved_claim(code: Any) -> bool:
    return code in APPROVED_CLAIM_STATUSES
