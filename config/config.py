import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "hr_admin"),
    }


# Yearly entitlement per leave type (days)
LEAVE_ENTITLEMENTS = {
    "Sick Leave": int(os.getenv("SICK_LEAVE_DAYS", "8")),
    "Casual Leave": int(os.getenv("CASUAL_LEAVE_DAYS", "10")),
    "Annual Leave": int(os.getenv("ANNUAL_LEAVE_DAYS", "14")),
}
