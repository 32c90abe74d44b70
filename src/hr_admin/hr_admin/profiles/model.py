from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..core.enums import ProfileSection, Role


@dataclass(frozen=True)
class EmployeeProfile:
    """Employee row plus the free-form profile sections.

    ``full_name``, ``email``, ``department`` and ``job_title`` live on the
    employee row; every other field lives in its section.
    """

    user_id: int
    full_name: str
    email: str
    role: Role
    department: Optional[str] = None
    job_title: Optional[str] = None
    sections: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def section(self, name: ProfileSection) -> dict:
        return dict(self.sections.get(name.value, {}))

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "email": self.email,
            "role": Role(self.role).value,
            "department": self.department or "N/A",
            "job_title": self.job_title or "N/A",
            **{s.value: self.section(s) for s in ProfileSection},
        }
