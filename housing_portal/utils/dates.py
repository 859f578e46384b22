"""Day-level date comparisons shared by status checks and admin filters.

Event dates and deadlines are stored as YYYY-MM-DD strings. Every
comparison here truncates to the day, so an event happening today is
neither past nor expired.
"""

from datetime import date
from typing import Optional

def parse_day(value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD string (a trailing time part is ignored).
    
    Returns None for blank or malformed values; callers treat such
    dates as matching no comparison.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None

def today() -> date:
    """Current local day."""
    return date.today()

def is_before_day(value: Optional[str], reference: Optional[date] = None) -> bool:
    """True when value is a day strictly before reference (default: today)."""
    day = parse_day(value)
    if day is None:
        return False
    return day < (reference or today())

def is_on_or_after_day(value: Optional[str], reference: Optional[date] = None) -> bool:
    """True when value is reference (default: today) or a later day."""
    day = parse_day(value)
    if day is None:
        return False
    return day >= (reference or today())

def is_past_event(event_date: Optional[str], reference: Optional[date] = None) -> bool:
    """An event is past once its day precedes the reference day."""
    return is_before_day(event_date, reference)

def is_upcoming_event(event_date: Optional[str], reference: Optional[date] = None) -> bool:
    """An event is upcoming on its own day and before."""
    return is_on_or_after_day(event_date, reference)

def is_deadline_passed(deadline: Optional[str], reference: Optional[date] = None) -> bool:
    """Registration closes the day after the deadline, not on it."""
    return is_before_day(deadline, reference)
