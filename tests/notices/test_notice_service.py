from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.hr_admin.hr_admin.core.enums import NoticeStatus, Role
from src.hr_admin.hr_admin.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hr_admin.hr_admin.notices.model import Notice
from src.hr_admin.hr_admin.notices.service import NoticeService


class InMemoryNotices:
    def __init__(self):
        self._rows: dict[int, Notice] = {}

    def create(self, *, notice_date, subject, paragraph):
        nid = len(self._rows) + 1
        self._rows[nid] = Notice(nid, notice_date, subject, paragraph, NoticeStatus.UNREAD)
        return nid

    def get(self, *, notice_id):
        return self._rows.get(notice_id)

    def list_notices(self):
        return list(self._rows.values())

    def mark_read(self, *, notice_id):
        self._rows[notice_id] = replace(self._rows[notice_id], status=NoticeStatus.READ)
        return True


def test_create_defaults_to_today(monkeypatch, fixed_today):
    monkeypatch.setattr("src.hr_admin.hr_admin.notices.service.today_local", lambda: fixed_today)
    repo = InMemoryNotices()
    nid = NoticeService(repo).create(current_role=Role.ADMIN, subject="Holiday", paragraph="Office closed")
    assert repo.get(notice_id=nid).date == fixed_today


def test_create_requires_admin_and_text():
    svc = NoticeService(InMemoryNotices())
    with pytest.raises(AuthorizationError):
        svc.create(current_role=Role.EMPLOYEE, subject="S", paragraph="P")
    with pytest.raises(ValidationError):
        svc.create(current_role=Role.ADMIN, subject="S", paragraph=" ")


def test_mark_read_and_unread_count():
    svc = NoticeService(InMemoryNotices())
    first = svc.create(current_role=Role.ADMIN, subject="A", paragraph="a", notice_date=date(2024, 5, 1))
    svc.create(current_role=Role.ADMIN, subject="B", paragraph="b", notice_date=date(2024, 5, 15))
    assert svc.unread_count() == 2

    svc.mark_read(notice_id=first)
    svc.mark_read(notice_id=first)
    assert svc.unread_count() == 1

    with pytest.raises(NotFoundError):
        svc.mark_read(notice_id=99)


def test_list_newest_first_with_status_filter():
    svc = NoticeService(InMemoryNotices())
    first = svc.create(current_role=Role.ADMIN, subject="A", paragraph="a", notice_date=date(2024, 5, 1))
    svc.create(current_role=Role.ADMIN, subject="B", paragraph="b", notice_date=date(2024, 5, 15))
    svc.mark_read(notice_id=first)

    page = svc.list_notices()
    assert [n["subject"] for n in page.items] == ["B", "A"]
    assert [n["subject"] for n in svc.list_notices(status="Read").items] == ["A"]
