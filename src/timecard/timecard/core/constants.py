"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_PAGE = 1
DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 366
MIN_PASSWORD_LENGTH = 6
DEFAULT_TOKEN_HOURS = 24
JWT_ALGORITHM = "HS256"
DEFAULT_SLOW_REQUEST_MS = 1000

SENSITIVE_FIELDS = ("password", "token", "secret", "apiKey", "currentPassword", "newPassword")

CSV_FIELDS = ("date", "clockIn", "clockOut", "breakMinutes", "workHours")
