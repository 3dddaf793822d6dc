"""Helpers for ``publishedAt`` values: sort keys and display strings."""

from datetime import date, datetime, time, timezone

# Accepted in addition to ISO 8601
EXTRA_FORMATS = (
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def parse_date(value: str | date | datetime | None) -> datetime | None:
    """Parse a published date into an aware datetime.

    Date-only values and naive datetimes are taken as UTC. Returns None
    for missing or unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    else:
        text = str(value).strip()
        if not text:
            return None
        parsed = _parse_text(text)
        if parsed is None:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_text(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in EXTRA_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def sort_timestamp(value: str | date | datetime | None) -> float:
    """Return the POSIX timestamp used to order posts.

    Missing or unparseable dates map to 0, the oldest position.
    """
    parsed = parse_date(value)
    if parsed is None:
        return 0.0
    return parsed.timestamp()


def format_date(value: str | date | datetime | None) -> str:
    """Format a published date for display, e.g. ``March 1, 2025``.

    Unparseable values are shown as written; missing values as "".
    """
    parsed = parse_date(value)
    if parsed is None:
        return "" if value is None else str(value).strip()
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"
