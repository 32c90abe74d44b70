from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Sequence

from ..core.constants import DEFAULT_LEAVE_ENTITLEMENTS
from ..core.enums import LeaveStatus
from .model import LeaveApplication, LeaveBalance


def empty_balances(entitlements: Mapping[str, int] = DEFAULT_LEAVE_ENTITLEMENTS) -> list[LeaveBalance]:
    return [LeaveBalance(type=t, total=int(total)) for t, total in entitlements.items()]


def compute_leave_balances(
    applications: Iterable[LeaveApplication],
    balances: Sequence[LeaveBalance],
) -> list[LeaveBalance]:
    """Fill ``used`` from approved applications; ``total`` is left alone.

    Leave types are matched exactly, so an application whose type has no
    balance row is not counted anywhere.
    """
    approved = [a for a in applications if a.status == LeaveStatus.APPROVED]
    return [
        replace(b, used=sum(a.total_days for a in approved if a.leave_type == b.type))
        for b in balances
    ]
