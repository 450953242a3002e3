# Dot Shared Helpers
# Utility functions used across the Dot Feedback service

import re
from datetime import datetime, timezone

from .errors import InvalidMonthError

MONTH_PATTERN = re.compile(r'^(\d{4})-(\d{1,2})$')


def utc_now():
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def format_timestamp(value):
    """Format a datetime as ISO-8601 UTC text with millisecond precision.

    Naive datetimes are taken to be UTC already.
    e.g. 2026-01-05T09:30:00.000Z
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime('%Y-%m-%dT%H:%M:%S.') + f'{value.microsecond // 1000:03d}Z'


class YearMonth:
    """A calendar month, e.g. YearMonth(2026, 1) for January 2026."""

    __slots__ = ('year', 'month')

    def __init__(self, year, month):
        if not 1 <= year <= 9998:
            raise InvalidMonthError(f'Invalid year: {year}')
        if not 1 <= month <= 12:
            raise InvalidMonthError(f'Invalid month: {year}-{month}')
        self.year = year
        self.month = month

    @classmethod
    def parse(cls, text):
        """Parse 'YYYY-MM' text.

        Raises InvalidMonthError if the text is missing or malformed.
        """
        if text is None or not str(text).strip():
            raise InvalidMonthError('month is required, e.g. 2026-01')

        match = MONTH_PATTERN.match(str(text).strip())
        if not match:
            raise InvalidMonthError(f'Invalid month: {text} (expected YYYY-MM)')

        return cls(int(match.group(1)), int(match.group(2)))

    def start(self):
        """First instant of the month (UTC)"""
        return datetime(self.year, self.month, 1, tzinfo=timezone.utc)

    def end(self):
        """First instant of the following month (UTC), exclusive"""
        if self.month == 12:
            return datetime(self.year + 1, 1, 1, tzinfo=timezone.utc)
        return datetime(self.year, self.month + 1, 1, tzinfo=timezone.utc)

    def interval(self):
        """Half-open [start, end) bounds as timestamp text"""
        return format_timestamp(self.start()), format_timestamp(self.end())

    def __eq__(self, other):
        if not isinstance(other, YearMonth):
            return NotImplemented
        return (self.year, self.month) == (other.year, other.month)

    def __hash__(self):
        return hash((self.year, self.month))

    def __repr__(self):
        return f'YearMonth({self.year}, {self.month})'

    def __str__(self):
        return f'{self.year:04d}-{self.month:02d}'
