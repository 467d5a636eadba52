"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_ON_TIME_THRESHOLD = "08:15:00"
DEFAULT_PERMISSION_LIMIT = 2

ABSENT_IN_TIME = "00:00:00"
MANUAL_PRESENT_IN_TIME = "08:00:00"

HALF_DAY = Decimal("0.5")
SALARY_QUANTUM = Decimal("0.01")
