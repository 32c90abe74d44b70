from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollBreakdown, PayrollRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def breakdown(self, record: PayrollRecord) -> PayrollBreakdown:
        raise NotImplementedError
