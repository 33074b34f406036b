from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional, Union

from dateutil import parser

PLACEHOLDER_DATES = {"recent", "unknown", "n/a", "na", "none", "tbd", "tba", "null"}
# Two fixed fallbacks differing in year, month and day; a string that parses
# differently under each is missing a date part.
_FALLBACK_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _parse_complete_date(cleaned: str) -> Optional[datetime]:
    first, second = (parser.parse(cleaned, default=default) for default in _FALLBACK_DEFAULTS)
    if first != second:
        return None
    return first


def parse_event_datetime(value: Union[datetime, str, None]) -> Optional[datetime]:
    """Parse an untrusted start/end value into a UTC-normalised datetime.

    Timezone-aware values are converted to UTC; naive values are taken as UTC.
    Anything unparsable yields ``None`` rather than raising, and so do partial
    dates such as ``June 2025`` or a bare ``10:00``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        cleaned = re.sub(r"\s+", " ", str(value)).strip()
        if not cleaned or cleaned.lower() in PLACEHOLDER_DATES:
            return None
        try:
            parsed = parser.isoparse(cleaned)
        except (ValueError, OverflowError):
            try:
                parsed = _parse_complete_date(cleaned)
            except (ValueError, TypeError, OverflowError):
                return None
            if parsed is None:
                return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None
