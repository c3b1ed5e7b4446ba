DEFAULT_TOLERANCE_MINUTES = 5
DEFAULT_ROUNDING_MINUTES = 0

DAY_START = "06:00"
NIGHT_START = "21:00"

LOCAL_TIMEZONE = "America/Bogota"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
