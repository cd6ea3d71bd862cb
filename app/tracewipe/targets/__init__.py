"""Target enumeration: where history and log artifacts live."""

from tracewipe.targets.catalog import (
    SYSTEM_LOG_FILES,
    USER_HISTORY_FILES,
    USER_SESSION_DIRS,
)
from tracewipe.targets.enumerator import TargetEnumerator, discover_homes

__all__ = [
    "SYSTEM_LOG_FILES",
    "USER_HISTORY_FILES",
    "USER_SESSION_DIRS",
    "TargetEnumerator",
    "discover_homes",
]
