from .config import LEAVE_ENTITLEMENTS, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="hr_admin")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

# Tests never touch a real database on startup
AUTO_INIT_DB = False
AUTO_SEED_DB = False

LEAVE_ENTITLEMENTS = dict(LEAVE_ENTITLEMENTS)
