"""HR administration service: attendance, leave, payroll, tickets and notices."""

__version__ = "0.3.0"
