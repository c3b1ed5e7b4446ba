import os

# Grace minutes before lateness counts, when a day override leaves it unset
DEFAULT_TOLERANCE_MINUTES = int(os.getenv("DEFAULT_TOLERANCE_MINUTES", "5"))
DEFAULT_ROUNDING_MINUTES = int(os.getenv("DEFAULT_ROUNDING_MINUTES", "0"))

# Legal day window; everything outside it is night
DAY_START = os.getenv("DAY_START", "06:00")
NIGHT_START = os.getenv("NIGHT_START", "21:00")

LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "America/Bogota")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
