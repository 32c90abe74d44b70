from __future__ import annotations

import json
from typing import Mapping, Optional

from ..core.enums import ProfileSection, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeProfile
from .repository import ProfileRepository

# Employee columns a profile section may write
_EMPLOYEE_COLUMNS = ("full_name", "email", "department", "job_title")


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: int) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, full_name, email, department, job_title, role FROM employees WHERE user_id=%s",
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            cur.execute("SELECT section, details FROM employee_profiles WHERE user_id=%s", (int(user_id),))
            sections = {row["section"]: json.loads(row["details"] or "{}") for row in fetchall(cur)}

        return EmployeeProfile(
            user_id=int(r["user_id"]),
            full_name=r["full_name"],
            email=r["email"],
            role=Role(r["role"]),
            department=r.get("department"),
            job_title=r.get("job_title"),
            sections=sections,
        )

    def save_section(
        self,
        *,
        user_id: int,
        section: ProfileSection,
        details: Mapping[str, str],
        employee_fields: Optional[Mapping[str, str]] = None,
    ) -> bool:
        columns = {k: v for k, v in (employee_fields or {}).items() if k in _EMPLOYEE_COLUMNS}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM employees WHERE user_id=%s FOR UPDATE", (int(user_id),))
            if not fetchone(cur):
                return False

            if columns:
                assignments = ", ".join(f"{k}=%s" for k in columns)
                cur.execute(
                    f"UPDATE employees SET {assignments} WHERE user_id=%s",
                    (*columns.values(), int(user_id)),
                )
            cur.execute(
                """
                INSERT INTO employee_profiles(user_id, section, details)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE details=VALUES(details)
                """,
                (int(user_id), section.value, json.dumps(dict(details))),
            )
            return True
