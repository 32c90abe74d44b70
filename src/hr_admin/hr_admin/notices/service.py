from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import today_local
from ..common.pagination import Page, equals, paginate
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import NoticeStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Notice
from .repository import NoticeRepository

logger = logging.getLogger(__name__)


def to_row(n: Notice) -> dict:
    return {
        "notice_id": n.notice_id,
        "date": n.date.strftime("%Y-%m-%d"),
        "subject": n.subject,
        "paragraph": n.paragraph,
        "status": NoticeStatus(n.status).value,
    }


class NoticeService:
    def __init__(self, notices: NoticeRepository):
        self._notices = notices

    def create(self, *, current_role: Role, subject: str, paragraph: str, notice_date: Optional[date] = None) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can publish notices")

        notice_id = self._notices.create(
            notice_date=notice_date or today_local(),
            subject=require_non_empty(subject, "Subject"),
            paragraph=require_non_empty(paragraph, "Notice text"),
        )
        logger.info("Notice %s published", notice_id)
        return notice_id

    def mark_read(self, *, notice_id: int) -> None:
        notice = self._notices.get(notice_id=int(notice_id))
        if not notice:
            raise NotFoundError("Notice not found")
        if notice.status == NoticeStatus.READ:
            return
        self._notices.mark_read(notice_id=notice.notice_id)

    def list_notices(self, *, status: str = "All", page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page[dict]:
        predicate = equals(lambda n: NoticeStatus(n.status).value, status)
        result = paginate(
            predicate,
            self._notices.list_notices(),
            page,
            page_size,
            sort_key=lambda n: (n.date, n.notice_id),
            reverse=True,
        )
        return result.map(to_row)

    def unread_count(self) -> int:
        return sum(1 for n in self._notices.list_notices() if n.status == NoticeStatus.UNREAD)
