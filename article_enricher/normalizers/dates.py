"""Normalize loosely formatted date text to ISO YYYY-MM-DD."""

import re
from datetime import date, datetime
from email.utils import parsedate_to_datetime
from typing import Optional

# Anything earlier is an epoch default or a typo, not a web article
MIN_PLAUSIBLE_YEAR = 1995

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Full names first so the alternation never stops at the abbreviation
MONTH_NAMES = (
    r"(?:january|february|march|april|may|june|july|august|september|"
    r"october|november|december|jan|feb|mar|apr|jun|jul|aug|sept|sep|oct|nov|dec)"
)

# January 5, 2021 / Jan. 5th, 2021
MONTH_DAY_YEAR = re.compile(
    rf"\b({MONTH_NAMES})\.?\s+(\d{{1,2}})(?:st|nd|rd|th)?,?\s+(\d{{4}})\b",
    re.I,
)

# 5 January 2021 / 5th Jan 2021
DAY_MONTH_YEAR = re.compile(
    rf"\b(\d{{1,2}})(?:st|nd|rd|th)?\s+({MONTH_NAMES})\.?,?\s+(\d{{4}})\b",
    re.I,
)

# 2021-01-05, 2021/01/05, 01/05/2021, 05-01-2021
NUMERIC_DATE = re.compile(
    r"\b(?:(\d{4})[-/](\d{1,2})[-/](\d{1,2})|(\d{1,2})[-/](\d{1,2})[-/](\d{4}))\b"
)

# Formats accepted by the direct parse
DIRECT_FORMATS = [
    "%Y-%m-%d",       # 2021-01-05
    "%Y/%m/%d",       # 2021/01/05
    "%B %d, %Y",      # January 5, 2021
    "%b %d, %Y",      # Jan 5, 2021
    "%B %d %Y",       # January 5 2021
    "%b %d %Y",       # Jan 5 2021
    "%d %B %Y",       # 5 January 2021
    "%d %b %Y",       # 5 Jan 2021
    "%m/%d/%Y",       # 01/05/2021
]


def month_number(name: str) -> int:
    """Month number for a full or abbreviated month name.

    Unknown names fall back to January rather than failing.
    """
    return MONTHS.get(name.strip(".").lower()[:3], 1)


def _calendar_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_calendar_date(text: Optional[str]) -> Optional[date]:
    """Parse a whole string as a calendar date, without any range check."""
    if not text:
        return None

    text = text.strip()
    if not text:
        return None

    # ISO date or datetime: 2021-01-05, 2021-01-05T10:00:00Z, ...+02:00
    iso = re.match(r"^(\d{4})-(\d{2})-(\d{2})(?:$|[T\s])", text)
    if iso:
        parsed = _calendar_date(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))
        if parsed is None:
            return None
        if len(text) == 10:
            return parsed
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            # Odd time suffix, the date part alone is still trustworthy
            return parsed

    # RFC 2822: Tue, 05 Jan 2021 10:00:00 GMT
    try:
        return parsedate_to_datetime(text).date()
    except (TypeError, ValueError, IndexError, AttributeError):
        pass

    for fmt in DIRECT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    return None


def is_plausible_year(year: int) -> bool:
    return MIN_PLAUSIBLE_YEAR <= year <= datetime.now().year


def is_valid_plausible_date(text: Optional[str]) -> bool:
    """True if text is a calendar date between 1995 and the current year."""
    parsed = parse_calendar_date(text)
    return parsed is not None and is_plausible_year(parsed.year)


def _iso(year: int, month: int, day: int) -> Optional[str]:
    parsed = _calendar_date(year, month, day)
    return parsed.isoformat() if parsed else None


def parse_loose_date(text: Optional[str]) -> Optional[str]:
    """Find a date in free text and return it as YYYY-MM-DD.

    Tried in order:
    1. The whole text as a plausible date
    2. Month DD, YYYY (ordinal suffixes allowed)
    3. DD Month YYYY
    4. YYYY-MM-DD, YYYY/MM/DD, or NN/NN/YYYY (day first only when the
       first number cannot be a month)

    Returns None when nothing matches, including impossible dates
    such as 2021-13-40.
    """
    if not text:
        return None

    if is_valid_plausible_date(text):
        return parse_calendar_date(text).isoformat()

    match = MONTH_DAY_YEAR.search(text)
    if match:
        return _iso(int(match.group(3)), month_number(match.group(1)), int(match.group(2)))

    match = DAY_MONTH_YEAR.search(text)
    if match:
        return _iso(int(match.group(3)), month_number(match.group(2)), int(match.group(1)))

    match = NUMERIC_DATE.search(text)
    if match:
        if match.group(1):
            return _iso(int(match.group(1)), int(match.group(2)), int(match.group(3)))

        year = int(match.group(6))
        part1 = int(match.group(4))
        part2 = int(match.group(5))
        if part1 > 12:
            return _iso(year, part2, part1)
        return _iso(year, part1, part2)

    return None


def to_iso_date(text: Optional[str]) -> Optional[str]:
    """parse_loose_date restricted to the plausible publication window."""
    iso = parse_loose_date(text)
    if iso and is_plausible_year(int(iso[:4])):
        return iso
    return None
