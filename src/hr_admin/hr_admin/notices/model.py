from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import NoticeStatus


@dataclass(frozen=True)
class Notice:
    notice_id: int
    date: date
    subject: str
    paragraph: str
    status: NoticeStatus
