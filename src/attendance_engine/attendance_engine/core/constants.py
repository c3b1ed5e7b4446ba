"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TOLERANCE_MINUTES = 5
DEFAULT_ROUNDING_MINUTES = 0
DEFAULT_DAY_START = time(6, 0)
DEFAULT_NIGHT_START = time(21, 0)
DEFAULT_LOCAL_TIMEZONE = "America/Bogota"

# ISO weekday (1=Monday..7=Sunday)
WEEKDAY_NAMES = {
    1: "Lunes",
    2: "Martes",
    3: "Miércoles",
    4: "Jueves",
    5: "Viernes",
    6: "Sábado",
    7: "Domingo",
}
