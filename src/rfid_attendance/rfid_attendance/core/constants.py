"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

BATCH_WILDCARD = "ALL"
DEFAULT_DEDUP_WINDOW_MINUTES = 10
DEFAULT_STORE_TIMEOUT_SECONDS = 5
DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_KEEPALIVE_TOKENS = ("PING", "KEEPALIVE", "HEARTBEAT")

LEDGER_FIELDS = ("date", "time", "role", "name", "card_id", "class", "batch", "subject")

# Widths of the attendance_records columns that reference values are copied into.
REFERENCE_FIELD_MAX_LENGTHS = {
    "name": 150,
    "card_id": 64,
    "staff_id": 64,
    "class": 64,
    "batch": 32,
    "subject": 150,
}
