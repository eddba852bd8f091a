"""Constants and defaults."""

DEFAULT_DEPARTMENT_TYPE = "General"
DEFAULT_IDENTITY_HEADER = "X-Auth-Request-Email"

USERS_COLLECTION = "users"
FEEDBACK_COLLECTION = "feedback"

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

MAIL_BRAND = "oneManage"
