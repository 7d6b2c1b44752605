"""Date string decoding for the conventions found in quote files.

Three conventions are tried in order:

1. ISO, as written by database exports: ``2001-06-01``
2. European day/month/year: ``13/4/01``, ``13.04.2001``, ``31-Dec-01``
   (the Yahoo UK download format), ``13 April 2001``
3. US month/day/year: ``Mar-01-99``, ``Apr-1-01``, ``April 1, 2001``,
   ``4/13/01``

Two-digit years follow the ``strptime`` ``%y`` window: 00-68 are 2000-2068,
69-99 are 1969-1999.
"""

import re
from datetime import date

from stockchart.dates.calendar import CalendarDate
from stockchart.exceptions import InvalidDate, UnrecognizedDateFormat

_MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

_TWO_DIGIT_YEAR_PIVOT = 69

_SEP = r"[\s./-]+"
_YEAR = r"(\d{4}|\d{2})"

_ISO_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_EU_NUMERIC = re.compile(rf"^(\d{{1,2}}){_SEP}(\d{{1,2}}){_SEP}{_YEAR}$")
_EU_NAMED = re.compile(rf"^(\d{{1,2}})(?:st|nd|rd|th)?{_SEP}([A-Za-z]+)\.?[\s,./-]+{_YEAR}$")
_US_NAMED = re.compile(
    rf"^([A-Za-z]+)\.?{_SEP}(\d{{1,2}})(?:st|nd|rd|th)?[\s,./-]+{_YEAR}$"
)
_US_NUMERIC = _EU_NUMERIC


def month_from_name(name: str) -> int | None:
    """Return 1-12 for an English month name or abbreviation of 3+ letters."""
    token = name.lower()
    if len(token) < 3:
        return None
    for number, full in enumerate(_MONTH_NAMES, start=1):
        if full.startswith(token):
            return number
    return None


def _expand_year(text: str) -> int:
    year = int(text)
    if len(text) == 2:
        return 2000 + year if year < _TWO_DIGIT_YEAR_PIVOT else 1900 + year
    return year


def _decode_european(text: str) -> CalendarDate | None:
    match = _EU_NUMERIC.match(text)
    if match:
        day, month, year = match.groups()
        return CalendarDate(_expand_year(year), int(month), int(day))

    match = _EU_NAMED.match(text)
    if match:
        day, name, year = match.groups()
        month = month_from_name(name)
        if month is not None:
            return CalendarDate(_expand_year(year), month, int(day))
    return None


def _decode_us(text: str) -> CalendarDate | None:
    match = _US_NAMED.match(text)
    if match:
        name, day, year = match.groups()
        month = month_from_name(name)
        if month is not None:
            return CalendarDate(_expand_year(year), month, int(day))

    match = _US_NUMERIC.match(text)
    if match:
        month, day, year = match.groups()
        return CalendarDate(_expand_year(year), int(month), int(day))
    return None


def parse_date(text: str) -> CalendarDate:
    """Decode a date string using the ISO, European then US conventions.

    An ISO-shaped string naming a non-existent day fails at once. For the
    other conventions an impossible day is only reported once every
    convention has been tried, since ``4/13/01`` is invalid European but
    valid US.

    Args:
        text: Date string, surrounding whitespace ignored.

    Returns:
        The decoded CalendarDate.

    Raises:
        InvalidDate: A convention matched but the day does not exist.
        UnrecognizedDateFormat: No convention matched.
    """
    stripped = text.strip()

    match = _ISO_PATTERN.match(stripped)
    if match:
        year, month, day = match.groups()
        return CalendarDate(int(year), int(month), int(day))

    invalid: InvalidDate | None = None
    for decoder in (_decode_european, _decode_us):
        try:
            decoded = decoder(stripped)
        except InvalidDate as e:
            invalid = e
            continue
        if decoded is not None:
            return decoded

    if invalid is not None:
        raise invalid
    raise UnrecognizedDateFormat(f"Unrecognized date format: {text!r}")


def coerce_date(value: object) -> CalendarDate:
    """Turn a CalendarDate, ``datetime.date`` or string into a CalendarDate.

    Raises:
        InvalidDate: See parse_date.
        UnrecognizedDateFormat: For strings no convention matches and for
            values of any other type.
    """
    if isinstance(value, CalendarDate):
        return value
    if isinstance(value, date):
        return CalendarDate.from_date(value)
    if isinstance(value, str):
        return parse_date(value)
    raise UnrecognizedDateFormat(f"Cannot read a date from {value!r}")
