"""
Week Service

Helpers for the Monday-anchored week identifiers used by the meal planner
and grocery lists.
"""

from datetime import date, datetime, timedelta

DAY_NAMES = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')
DAY_NAMES_LONG = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')


class InvalidWeekStart(ValueError):
    """Raised when a week identifier is missing or not a YYYY-MM-DD date."""
    pass


def get_week_start(value=None):
    """Return the Monday of the week containing value (today by default)."""
    if value is None:
        value = date.today()
    if isinstance(value, datetime):
        value = value.date()
    return value - timedelta(days=value.weekday())


def add_weeks(week_start, weeks):
    """Add weeks to a week start. Negative values go back in time."""
    return week_start + timedelta(weeks=weeks)


def to_iso_date(value):
    """Format a date as YYYY-MM-DD."""
    return value.isoformat()


def from_iso_date(value):
    """Parse a YYYY-MM-DD string into a date."""
    if not value or not isinstance(value, str):
        raise InvalidWeekStart('weekStart is required')
    try:
        return datetime.strptime(value.strip(), '%Y-%m-%d').date()
    except ValueError:
        raise InvalidWeekStart(f'weekStart must be a YYYY-MM-DD date, got {value!r}') from None


def get_day_date(week_start, day_of_week):
    """Calendar date for day_of_week (0=Mon ... 6=Sun) within the week."""
    return week_start + timedelta(days=day_of_week)


def format_day_date(value):
    """Format a day for display, e.g. "Feb 17"."""
    return f"{value.strftime('%b')} {value.day}"


def format_week_range(week_start):
    """Format the week for display, e.g. "Feb 17–23" or "Feb 28 – Mar 6"."""
    week_end = week_start + timedelta(days=6)
    start_month = week_start.strftime('%b')
    end_month = week_end.strftime('%b')
    if start_month == end_month:
        return f"{start_month} {week_start.day}–{week_end.day}"
    return f"{start_month} {week_start.day} – {end_month} {week_end.day}"


def is_current_week(week_start):
    return week_start == get_week_start()


def describe_week(week_start):
    """Display summary of a week for the planner header and day cards."""
    return {
        'weekStart': to_iso_date(week_start),
        'label': format_week_range(week_start),
        'isCurrent': is_current_week(week_start),
        'previousWeekStart': to_iso_date(add_weeks(week_start, -1)),
        'nextWeekStart': to_iso_date(add_weeks(week_start, 1)),
        'days': [
            {
                'dayOfWeek': day_of_week,
                'name': DAY_NAMES[day_of_week],
                'longName': DAY_NAMES_LONG[day_of_week],
                'date': to_iso_date(get_day_date(week_start, day_of_week)),
                'label': format_day_date(get_day_date(week_start, day_of_week)),
            }
            for day_of_week in range(7)
        ],
    }
