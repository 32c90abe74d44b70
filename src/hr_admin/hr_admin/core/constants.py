"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Attendance classification thresholds
LATE_IN_CUTOFF = "18:15"
EARLY_OUT_MINUTES = 6 * 60
HALF_DAY_MAX_MINUTES = 7 * 60

# Yearly leave entitlement per leave type (days)
DEFAULT_LEAVE_ENTITLEMENTS = {
    "Sick Leave": 8,
    "Casual Leave": 10,
    "Annual Leave": 14,
}

# Every fourth late check-in costs half a day of pay
LATE_INS_PER_HALF_DAY = 4

DEFAULT_PAGE_SIZE = 5
PAGE_SIZE_OPTIONS = (5, 10, 20, 50)

# Used to derive the per-day rate when payroll input does not give one
DAYS_PER_MONTH = 30

GENDERS = ("Male", "Female", "Other")
# Education year picker offers the current year and the 49 before it
EDUCATION_YEARS_BACK = 49
MAX_GPA = 4
