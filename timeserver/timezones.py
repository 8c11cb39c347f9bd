"""
Timezone name resolution and the list of supported timezone names.
"""

import logging
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from .errors import UnknownTimezoneError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"


def load_location(name: str) -> ZoneInfo:
    """
    Resolve an IANA timezone name.

    An empty name means UTC. Raises UnknownTimezoneError for anything the
    timezone database does not know.
    """
    key = name or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.debug(f"Could not load timezone {key!r}: {e}")
        raise UnknownTimezoneError(name) from e


def load_timezone_names(filepath: Optional[str] = None) -> List[str]:
    """
    Load the list of supported timezone names.

    With a filepath, names are read one per line (blank lines skipped).
    Without one, every name known to the installed timezone database is
    returned, sorted.
    """
    if filepath is None:
        return sorted(available_timezones())

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            names = [line.strip() for line in f]
    except OSError as e:
        logger.error(f"Error loading timezone list from {filepath}: {e}")
        return []

    names = [name for name in names if name]
    logger.info(f"Loaded {len(names)} timezone names from {filepath}")
    return names
