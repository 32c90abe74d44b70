from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Labels the classifier can derive from a day's punches."""

    ABSENT = "Absent"
    LATE_IN = "Late IN"
    HALF_DAY = "Half Day"
    EARLY_OUT = "Early Out"
    LATE_IN_EARLY_OUT = "Late In and Early Out"


class LeaveStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PayrollStatus(str, Enum):
    PENDING = "Pending"
    PROCESSED = "Processed"


class TicketCategory(str, Enum):
    HR = "HR"
    NETWORK = "Network"
    ADMIN = "Admin"
    ATTENDANCE = "Attendance"


class TicketStatus(str, Enum):
    OPEN = "Open"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CLOSED = "Closed"


class NoticeStatus(str, Enum):
    READ = "Read"
    UNREAD = "Unread"


class ProfileSection(str, Enum):
    """Editable parts of an employee profile, stored one row per section."""

    PERSONAL = "personal"
    CONTACT = "contact"
    BANK = "bank"
    EMERGENCY = "emergency"
    EDUCATION = "education"
