import os

DEFAULT_TOLERANCE_MINUTES = int(os.getenv("DEFAULT_TOLERANCE_MINUTES", "5"))
DEFAULT_ROUNDING_MINUTES = int(os.getenv("DEFAULT_ROUNDING_MINUTES", "0"))

DAY_START = os.getenv("DAY_START", "06:00")
NIGHT_START = os.getenv("NIGHT_START", "21:00")

LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "America/Bogota")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
