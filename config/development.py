import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "nurse_payroll"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Month boundaries for salary periods are evaluated in this timezone
REFERENCE_TIMEZONE = os.getenv("REFERENCE_TIMEZONE", "Asia/Tokyo")
PARALLEL_AGGREGATION = bool(int(os.getenv("PARALLEL_AGGREGATION", "1")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed default pay rates on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
