"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REFERENCE_TIMEZONE = "Asia/Tokyo"
METERS_PER_KM = 1000
MINUTES_PER_HOUR = 60
YEAR_MONTH_FORMAT = "%Y-%m"
MYSQL_DUPLICATE_KEY_ERRNO = 1062
MYSQL_RETRYABLE_ERRNOS = (1205, 1213)  # lock wait timeout, deadlock
AGGREGATION_WORKERS = 3
# Last year whose December still has a representable following month
MAX_SALARY_YEAR = 9998
# Scale of salary_settings.setting_value DECIMAL(12,2)
RATE_DECIMAL_PLACES = 2
