import os


def _flag(name: str, default: str = "0") -> bool:
    return bool(int(os.environ.get(name, default)))


def _csv(name: str, default: str) -> tuple:
    return tuple(t.strip() for t in os.environ.get(name, default).split(",") if t.strip())


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "rfid-attendance-dev"

    # DB
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "rfid_attendance")
    STORE_TIMEOUT_SECONDS = int(os.environ.get("STORE_TIMEOUT_SECONDS", "5"))
    AUTO_INIT_DB = _flag("AUTO_INIT_DB")

    # Scan pipeline
    TIMEZONE = os.environ.get("TIMEZONE", "Asia/Kolkata")
    DEDUP_POLICY = os.environ.get("DEDUP_POLICY", "time_window")
    DEDUP_WINDOW_MINUTES = int(os.environ.get("DEDUP_WINDOW_MINUTES", "10"))
    CARD_DIGITS_ONLY = _flag("CARD_DIGITS_ONLY")
    CARD_STRIP_LEADING_ZEROS = _flag("CARD_STRIP_LEADING_ZEROS")
    KEEPALIVE_TOKENS = _csv("KEEPALIVE_TOKENS", "PING,KEEPALIVE,HEARTBEAT")

    # Reference data and secondary outputs
    REFERENCE_DIR = os.environ.get("REFERENCE_DIR", "data/reference")
    LEDGER_PATH = os.environ.get("LEDGER_PATH", "data/ledger/scans.csv")
    ADMIN_TOKEN = os.environ.get("ADMIN_TOKEN", "")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def db_config() -> dict:
    return {
        "host": Config.DB_HOST,
        "port": Config.DB_PORT,
        "user": Config.DB_USER,
        "password": Config.DB_PASSWORD,
        "database": Config.DB_NAME,
    }
