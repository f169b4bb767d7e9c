"""Year resolution for the Julian dates in a boarding pass."""

# Standard imports
import calendar
from datetime import date, timedelta

# Project imports
from bcbp.fields import CharClass

# Years (relative to the reference date) that a flight date may fall in.
# A boarding pass is read close to its flight, either shortly before it
# or afterwards when it is logged.
FLIGHT_DATE_YEAR_OFFSETS = (-1, 0, 1)

# Furthest an issuance year may be from the reference year. A single
# year digit repeats every ten years.
ISSUANCE_YEAR_WINDOW = 9

def ordinal_date(year: int, day_of_year: int) -> date | None:
    """Creates a date from a year and day of year."""
    if day_of_year < 1 or day_of_year > 366:
        return None
    if day_of_year == 366 and not calendar.isleap(year):
        return None
    return date(year, 1, 1) + timedelta(days=day_of_year-1)

def resolve_flight_date(day_of_year: int, today: date) -> date | None:
    """
    Resolves a flight's Julian date to a calendar date.

    The flight date carries no year. Because the pass may be read
    before or after the flight, look at the day of year in each
    candidate year and pick the date closest to today. When two dates
    are equally close, the future one wins.
    """
    dates = [
        ordinal_date(today.year + offset, day_of_year)
        for offset in FLIGHT_DATE_YEAR_OFFSETS
    ]
    dates = [d for d in dates if d is not None]
    if len(dates) == 0:
        # Day 366 with no leap year among the candidate years.
        return None
    return min(dates, key=lambda d: (abs(d - today), d < today))

def resolve_issuance_date(
    year_digit: int, day_of_year: int, today: date
) -> date | None:
    """
    Resolves a pass issuance date from the last digit of its year and
    its day of year.

    Picks the matching date closest to today, within
    ISSUANCE_YEAR_WINDOW years. A pass is issued before it is read, so
    ties go to the past.
    """
    years = [
        y for y in range(
            today.year - ISSUANCE_YEAR_WINDOW,
            today.year + ISSUANCE_YEAR_WINDOW + 1,
        )
        if y % 10 == year_digit
    ]
    dates = [ordinal_date(y, day_of_year) for y in years]
    dates = [d for d in dates if d is not None]
    if len(dates) == 0:
        return None
    return min(dates, key=lambda d: (abs(d - today), d > today))

def parse_issuance_date(raw: str | None, today: date) -> date | None:
    """Resolves a raw four-character date of pass issuance."""
    if raw is None or len(raw) != 4 or not CharClass.DIGIT.matches(raw):
        return None
    return resolve_issuance_date(int(raw[0]), int(raw[1:]), today)
