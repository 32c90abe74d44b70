"""Example: using the pure logic and the service layer without Flask.

Controllers are a thin layer; the rules live in the classifier and services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.hr_admin.hr_admin.attendance.classifier import classify
from src.hr_admin.hr_admin.container import build_container


def main():
    for time_in, time_out in [("09:00", "17:00"), ("10:00", "15:00"), ("19:00", "23:00"), ("", "17:00")]:
        print(f"{time_in or '--:--'} -> {time_out}: {classify(time_in, time_out)}")
    print("09:00 -> 16:00 on sick leave:", classify("09:00", "16:00", "Sick leave"))

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    today = date.today()
    print(container.attendance_service.list_for_user(1, start=today.replace(day=1), end=today).to_dict())
    for balance in container.leave_service.balances(1):
        print(f"{balance.type}: {balance.used}/{balance.total} used, {balance.remaining} left")


if __name__ == "__main__":
    main()
