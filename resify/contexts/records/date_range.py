"""
Date ranges at mixed precision.

A resume date may be a year ("2012"), a month ("2012-06"), a day, or a full
timestamp with or without a zone. Each endpoint remembers the layout it was
parsed with, so writing a record back out reproduces the precision it was
written in instead of expanding "2012" to a full date.

Examples:
    >>> when = DateRange.parse("2010-08", "2015-12")
    >>> when.format()
    ('2010-08', '2015-12')
    >>> DateRange.parse("2012", "").format()
    ('2012', '')
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Mapping, Optional, Tuple

from resify.contexts.records.exceptions import DateParseError
from resify.contexts.records.logger import _log_warning

_DATE = r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
_MINUTE = _DATE + r" (?P<hour>\d{2}):(?P<minute>\d{2})"
_SECOND = _MINUTE + r":(?P<second>\d{2})"
_ZONE = r" (?P<zone>[A-Z][A-Za-z]{2,4}|[+-]\d{4})"

_NUMERIC_ZONE = re.compile(r"^([+-])(\d{2})(\d{2})$")


@dataclass(frozen=True)
class DateLayout:
    """
    One accepted date/time layout.

    Attributes:
        name: Precision tag (e.g., "year_month")
        pattern: Regex with named groups year..second and zone
        template: str.format template producing the same layout
        zoned: Whether the layout ends in a time zone
    """

    name: str
    pattern: re.Pattern
    template: str
    zoned: bool = False

    def parse(self, value: str) -> Optional[datetime]:
        """Parse value with this layout, or return None if it does not fit."""
        match = self.pattern.fullmatch(value)
        if match is None:
            return None

        fields = match.groupdict()
        try:
            parsed = datetime(
                int(fields["year"]),
                int(fields.get("month") or 1),
                int(fields.get("day") or 1),
                int(fields.get("hour") or 0),
                int(fields.get("minute") or 0),
                int(fields.get("second") or 0),
            )
        except ValueError:
            # Right shape, impossible value (month 13, February 30)
            return None

        if self.zoned:
            parsed = parsed.replace(tzinfo=_parse_zone(fields["zone"]))
        return parsed

    def format(self, value: datetime) -> str:
        """Format value in this layout."""
        text = self.template.format(value)
        if self.zoned:
            text += " " + _zone_name(value)
        return text


def _parse_zone(zone: str) -> timezone:
    """
    Time zone for a zone string, keeping the string as the zone's name.

    Abbreviations carry no offset information on their own, so they get a
    zero offset and only their name survives.
    """
    numeric = _NUMERIC_ZONE.match(zone)
    if numeric:
        sign, hours, minutes = numeric.groups()
        offset = timedelta(hours=int(hours), minutes=int(minutes))
        return timezone(-offset if sign == "-" else offset, zone)
    return timezone(timedelta(0), zone)


def _zone_name(value: datetime) -> str:
    name = value.tzname()
    if name is None:
        return "UTC"
    if name.startswith("UTC") and len(name) > 3:
        # Unnamed fixed offsets report themselves as "UTC+07:00"
        return value.strftime("%z")
    return name


def _layout(name: str, pattern: str, template: str, zoned: bool = False) -> DateLayout:
    if zoned:
        pattern += _ZONE
    return DateLayout(name=name, pattern=re.compile(pattern), template=template, zoned=zoned)


_DATE_TEMPLATE = "{0.year:04d}-{0.month:02d}-{0.day:02d}"
_MINUTE_TEMPLATE = _DATE_TEMPLATE + " {0.hour:02d}:{0.minute:02d}"
_SECOND_TEMPLATE = _MINUTE_TEMPLATE + ":{0.second:02d}"

DATETIME_ZONE = _layout("datetime_zone", _SECOND, _SECOND_TEMPLATE, zoned=True)
DATETIME = _layout("datetime", _SECOND, _SECOND_TEMPLATE)
MINUTE_ZONE = _layout("minute_zone", _MINUTE, _MINUTE_TEMPLATE, zoned=True)
MINUTE = _layout("minute", _MINUTE, _MINUTE_TEMPLATE)
DATE = _layout("date", _DATE, _DATE_TEMPLATE)
YEAR_MONTH = _layout("year_month", r"(?P<year>\d{4})-(?P<month>\d{2})", "{0.year:04d}-{0.month:02d}")
YEAR = _layout("year", r"(?P<year>\d{4})", "{0.year:04d}")

# Most specific first; the first layout that parses wins
LAYOUTS: List[DateLayout] = [DATETIME_ZONE, DATETIME, MINUTE_ZONE, MINUTE, DATE, YEAR_MONTH, YEAR]


@dataclass(frozen=True)
class DateEndpoint:
    """
    A point in time and the layout it is written in.

    Attributes:
        value: The timestamp
        layout: Layout used to write the value back out (defaults to a plain date)
    """

    value: datetime
    layout: DateLayout = DATE

    def format(self) -> str:
        return self.layout.format(self.value)

    def __str__(self) -> str:
        return self.format()


def parse_date(value: str) -> DateEndpoint:
    """
    Parse a date string with the first layout that accepts it.

    Raises:
        ValueError: If no layout accepts value
    """
    for layout in LAYOUTS:
        parsed = layout.parse(value)
        if parsed is not None:
            return DateEndpoint(value=parsed, layout=layout)
    raise ValueError(
        f"cannot parse {value!r} as any of: {', '.join(layout.name for layout in LAYOUTS)}"
    )


@dataclass(frozen=True)
class DateRange:
    """
    An optionally open-ended interval with per-endpoint precision.

    Either endpoint may be None (unset). DateRange() is the empty range.

    Attributes:
        start: The "from" endpoint, or None
        end: The "to" endpoint, or None
    """

    start: Optional[DateEndpoint] = None
    end: Optional[DateEndpoint] = None

    @classmethod
    def empty(cls) -> "DateRange":
        """The deliberately empty range (no dates at all)."""
        return cls()

    @classmethod
    def parse(cls, from_value: Optional[str], to_value: Optional[str]) -> "DateRange":
        """
        Parse a range from its "from" and "to" strings.

        An empty string leaves that endpoint unset. A string that no layout
        accepts also leaves it unset, with a warning, as long as the other
        endpoint parses. Both strings empty gives the empty range.

        Args:
            from_value: Start of the range ("" for open start)
            to_value: End of the range ("" for open end)

        Returns:
            DateRange, empty only when both strings are empty

        Raises:
            DateParseError: If a date was given but neither endpoint parses
        """
        from_value = from_value or ""
        to_value = to_value or ""

        start, from_error = cls._parse_endpoint(from_value)
        end, to_error = cls._parse_endpoint(to_value)

        if start is None and end is None and (from_value or to_value):
            raise DateParseError(from_value, to_value, from_error, to_error)

        if start is None and from_value:
            _log_warning(f"Ignoring unparseable from: date: {from_error}")
        if end is None and to_value:
            _log_warning(f"Ignoring unparseable to: date: {to_error}")

        return cls(start=start, end=end)

    @staticmethod
    def _parse_endpoint(value: str) -> Tuple[Optional[DateEndpoint], Optional[str]]:
        if not value:
            return None, "field undefined"
        try:
            return parse_date(value), None
        except ValueError as e:
            return None, str(e)

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> "DateRange":
        """
        Build a range from its serialized {from, to} mapping.

        None gives the empty range, as does a mapping with neither key. A
        mapping with dates none of which parse raises DateParseError.
        """
        if data is None:
            return cls.empty()
        return cls.parse(_as_text(data.get("from")), _as_text(data.get("to")))

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def start_text(self) -> str:
        return self.start.format() if self.start else ""

    @property
    def end_text(self) -> str:
        return self.end.format() if self.end else ""

    def format(self) -> Tuple[str, str]:
        """Both endpoints in their original layouts ("" for unset)."""
        return self.start_text, self.end_text

    def to_dict(self) -> Optional[Dict[str, str]]:
        """
        Serialized form: {"from": ..., "to": ...} without empty values.

        Returns None for the empty range so callers can omit the field.
        """
        start, end = self.format()
        if not start and not end:
            return None

        whence = {}
        if start:
            whence["from"] = start
        if end:
            whence["to"] = end
        return whence


def _as_text(value) -> str:
    # YAML reads a bare 2012 as an int
    return "" if value is None else str(value)
