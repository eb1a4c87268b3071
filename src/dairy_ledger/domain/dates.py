"""Calendar-day normalization for entry keys."""

import math
from datetime import date, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dairy_ledger.domain.errors import EntryValidationError


def normalize_date(value: object, tz: tzinfo | None = None) -> date | None:
    """Collapse a date-like value to its calendar day.

    Naive datetimes are taken as wall-clock time. Aware datetimes are
    converted to ``tz`` first, or to the host's local zone when ``tz`` is
    None. Numbers are epoch milliseconds. Returns None for anything that
    cannot be read as a date.
    """
    if isinstance(value, datetime):
        return _datetime_day(value, tz)
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return _epoch_millis_day(value, tz)
    if isinstance(value, str):
        return _parse_text(value.strip(), tz)
    return None


def today(tz: tzinfo | None = None) -> date:
    """Return the current calendar day in ``tz`` or host local time."""
    if tz is None:
        return date.today()
    return datetime.now(tz=tz).date()


def resolve_timezone(name: str | None) -> ZoneInfo | None:
    """Return the zone for an IANA name, or None when no name is given."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise EntryValidationError(f"Unknown timezone: {name}") from exc


def _datetime_day(value: datetime, tz: tzinfo | None) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(tz).date()


def _epoch_millis_day(value: float, tz: tzinfo | None) -> date | None:
    try:
        if not math.isfinite(value):
            return None
        moment = datetime.fromtimestamp(value / 1000, tz=tz)
    except (OverflowError, OSError, ValueError):
        return None
    return moment.date()


def _parse_text(text: str, tz: tzinfo | None) -> date | None:
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _datetime_day(parsed, tz)
