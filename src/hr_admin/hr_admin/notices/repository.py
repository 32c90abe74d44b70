from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Notice


class NoticeRepository(Protocol):
    def create(self, *, notice_date: date, subject: str, paragraph: str) -> int:
        raise NotImplementedError

    def get(self, *, notice_id: int) -> Optional[Notice]:
        raise NotImplementedError

    def list_notices(self) -> Sequence[Notice]:
        raise NotImplementedError

    def mark_read(self, *, notice_id: int) -> bool:
        raise NotImplementedError
