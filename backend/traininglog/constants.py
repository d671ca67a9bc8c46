from enum import Enum

class Category(str, Enum):
    strength = "strength"
    cardio = "cardio"
    zone2 = "zone2"
    pilates = "pilates"
    mobility = "mobility"
    plyometrics = "plyometrics"
    stretching = "stretching"
    other = "other"

class WeightUnit(str, Enum):
    lb = "lb"
    kg = "kg"

CATEGORIES: tuple[str, ...] = tuple(c.value for c in Category)

# Progress history looks at this many of the most recent logged sessions
HISTORY_LIMIT = 30
RECENT_PRS_LIMIT = 10
