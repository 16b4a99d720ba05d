from .config import Config, db_config

SECRET_KEY = "test-secret"
DB_CONFIG = db_config()
STORE_TIMEOUT_SECONDS = 1

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

TIMEZONE = "Asia/Kolkata"
DEDUP_POLICY = "time_window"
DEDUP_WINDOW_MINUTES = 10
CARD_DIGITS_ONLY = False
CARD_STRIP_LEADING_ZEROS = False
KEEPALIVE_TOKENS = ("PING", "KEEPALIVE", "HEARTBEAT")

REFERENCE_DIR = Config.REFERENCE_DIR
LEDGER_PATH = ""
ADMIN_TOKEN = "test-admin-token"
