from __future__ import annotations

from typing import Mapping, Optional, Protocol

from ..core.enums import ProfileSection
from .model import EmployeeProfile


class ProfileRepository(Protocol):
    def get(self, user_id: int) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def save_section(
        self,
        *,
        user_id: int,
        section: ProfileSection,
        details: Mapping[str, str],
        employee_fields: Optional[Mapping[str, str]] = None,
    ) -> bool:
        """Replace one section and, in the same transaction, the given employee columns.

        False when the employee does not exist.
        """

        raise NotImplementedError
