"""Settings shared by every environment, read from the process environment."""
import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "coaching_attendance"),
}

CENTER_NAME = os.getenv("CENTER_NAME", "Wings Coaching Center")

# Login + admin tools password, stored as a werkzeug hash
# (generate with werkzeug.security.generate_password_hash).
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")
SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", str(12 * 60 * 60)))

# "combined" (streak + frequency, with CRITICAL) or "streak_only"
RISK_POLICY = os.getenv("RISK_POLICY", "combined")
STREAK_THRESHOLD = int(os.getenv("STREAK_THRESHOLD", "3"))
FREQUENT_THRESHOLD = int(os.getenv("FREQUENT_THRESHOLD", "2"))
WEEK_WINDOW = int(os.getenv("WEEK_WINDOW", "6"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
