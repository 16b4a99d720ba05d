from .config import Config, db_config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = db_config()
STORE_TIMEOUT_SECONDS = Config.STORE_TIMEOUT_SECONDS

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

AUTO_INIT_DB = Config.AUTO_INIT_DB

TIMEZONE = Config.TIMEZONE
DEDUP_POLICY = Config.DEDUP_POLICY
DEDUP_WINDOW_MINUTES = Config.DEDUP_WINDOW_MINUTES
CARD_DIGITS_ONLY = Config.CARD_DIGITS_ONLY
CARD_STRIP_LEADING_ZEROS = Config.CARD_STRIP_LEADING_ZEROS
KEEPALIVE_TOKENS = Config.KEEPALIVE_TOKENS

REFERENCE_DIR = Config.REFERENCE_DIR
LEDGER_PATH = Config.LEDGER_PATH
# Empty token disables the reload endpoint.
ADMIN_TOKEN = Config.ADMIN_TOKEN
