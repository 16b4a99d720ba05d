import os

from .config import Config, db_config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = db_config()
STORE_TIMEOUT_SECONDS = Config.STORE_TIMEOUT_SECONDS

DEBUG = True
LOG_LEVEL = Config.LOG_LEVEL

# If enabled, app applies database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

TIMEZONE = Config.TIMEZONE
DEDUP_POLICY = Config.DEDUP_POLICY
DEDUP_WINDOW_MINUTES = Config.DEDUP_WINDOW_MINUTES
CARD_DIGITS_ONLY = Config.CARD_DIGITS_ONLY
CARD_STRIP_LEADING_ZEROS = Config.CARD_STRIP_LEADING_ZEROS
KEEPALIVE_TOKENS = Config.KEEPALIVE_TOKENS

REFERENCE_DIR = Config.REFERENCE_DIR
LEDGER_PATH = Config.LEDGER_PATH
ADMIN_TOKEN = Config.ADMIN_TOKEN or "dev-admin-token"
