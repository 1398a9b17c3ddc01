# Copyright (c) 2013-2026 NASK. All rights reserved.

import datetime
import re


ISO_DATE_REGEX = re.compile(
    # here we don't check ranges of particular values (e.g. that month is
    # in 01..12) because it is better to do it in functions that use this
    # regex (-> better debug information in case of incorrect input data)

    r'''
    \A
    (?P<year>
        \d{4}
    )
    -?
    (?P<month>
        \d{2}
    )
    -?
    (?P<day>
        \d{2}
    )
    \Z
    ''', re.ASCII | re.VERBOSE)


ISO_TIME_REGEX = re.compile(
    r'''
    \A
    (?P<hour>
        \d{2}
    )
    :?
    (?P<minute>
        \d{2}
    )
    (?:
        :?
        (?P<second>
            \d{2}
        )
        (?:
            \.
            (?P<secondfraction>
                \d+
            )
        )?
    )?
    (?:
        Z
    |
        (?:
            (?P<tzhour>
                [+-]
                \d{2}
            )
            (?:
                :?
                (?P<tzminute>
                    \d{2}
                )
            )?
        )
    )?
    \Z
    ''', re.ASCII | re.VERBOSE)


ISO_DATETIME_REGEX = re.compile(
    r'{date}[T\s]{time}'.format(date=ISO_DATE_REGEX.pattern.rstrip('Z\\ \r\n'),
                                time=ISO_TIME_REGEX.pattern.lstrip('A\\ \r\n')),
    re.ASCII | re.VERBOSE)


def datetime_utc_normalize(dt):
    """
    Normalize a :class:`datetime.datetime` to a naive UTC one.

    Args:
        `dt`: A :class:`datetime.datetime` instance (naive or TZ-aware).

    Returns:
        An equivalent *naive* :class:`datetime.datetime` instance
        (naive input is assumed to be already in UTC).

    >>> naive_dt = datetime.datetime(2013, 6, 6, 12, 13, 57, 751219)
    >>> datetime_utc_normalize(naive_dt)
    datetime.datetime(2013, 6, 6, 12, 13, 57, 751219)

    >>> tzinfo = datetime.timezone(datetime.timedelta(minutes=120))
    >>> tz_aware_dt = datetime.datetime(2013, 6, 6, 14, 13, 57, 751219,
    ...                                 tzinfo=tzinfo)
    >>> datetime_utc_normalize(tz_aware_dt)
    datetime.datetime(2013, 6, 6, 12, 13, 57, 751219)
    """
    if dt.utcoffset() is None:
        return dt.replace(tzinfo=None)
    return dt.astimezone(datetime.timezone.utc).replace(tzinfo=None)


def parse_iso_date(s, prestrip=True):
    """
    Parse *ISO-8601*-formatted calendar date.

    Args:
        `s`: *ISO-8601*-formatted date as a string.

    Kwargs:
        `prestrip` (default: True):
            Whether the :meth:`strip` method should be called on the
            input string before performing the actual processing.

    Returns:
        A :class:`datetime.date` instance.

    Raises:
        :exc:`~exceptions.ValueError` for invalid input.

    >>> parse_iso_date('2013-06-13')
    datetime.date(2013, 6, 13)
    >>> parse_iso_date('20130613')
    datetime.date(2013, 6, 13)
    >>> parse_iso_date('2013-02-30')     # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    >>> parse_iso_date('2013-1')         # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    """
    if prestrip:
        s = s.strip()
    match = ISO_DATE_REGEX.match(s)
    if match:
        return _make_date_from_match(match)
    raise ValueError('could not parse {!a} as ISO date'.format(s))


def parse_iso_datetime(s, prestrip=True):
    """
    Parse *ISO-8601*-formatted combined date and time.

    Returns:
        A :class:`datetime.datetime` instance (a TZ-aware one if the
        input string contains a timezone designator; otherwise a naive
        one).

    Raises:
        :exc:`~exceptions.ValueError` for invalid input.

    >>> parse_iso_datetime('2013-06-13 10:02')
    datetime.datetime(2013, 6, 13, 10, 2)
    >>> parse_iso_datetime('2013-06-13T10:02:04.5')
    datetime.datetime(2013, 6, 13, 10, 2, 4, 500000)
    >>> parse_iso_datetime('2013-06-13T24:00')
    datetime.datetime(2013, 6, 14, 0, 0)
    >>> parse_iso_datetime('2013-06-13')   # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    """
    if prestrip:
        s = s.strip()
    match = ISO_DATETIME_REGEX.match(s)
    if match:
        d = _make_date_from_match(match)
        t = _make_time_from_match(match)
        if match.group('hour') == '24':
            try:
                d += datetime.timedelta(1)
            except OverflowError:
                raise ValueError('{!a} is out of the supported date range'
                                 .format(s)) from None
        return datetime.datetime.combine(d, t)
    raise ValueError('could not parse {!a} as ISO combined date + time'
                     .format(s))


def parse_iso_datetime_to_utc(s, prestrip=True):
    """
    Parse *ISO-8601*-formatted combined date and time, and normalize it to UTC.

    Returns:
        A :class:`datetime.datetime` instance (a naive one, normalized
        to UTC).

    Raises:
        :exc:`~exceptions.ValueError` for invalid input.

    >>> parse_iso_datetime_to_utc('2013-06-13T10:02Z')
    datetime.datetime(2013, 6, 13, 10, 2)
    >>> parse_iso_datetime_to_utc('2013-06-13 10:02+02:00')
    datetime.datetime(2013, 6, 13, 8, 2)
    >>> parse_iso_datetime_to_utc('2013-06-13T22:02:04.1234-07')
    datetime.datetime(2013, 6, 14, 5, 2, 4, 123400)
    >>> parse_iso_datetime_to_utc('  2013-06-13T10:02Z  \t')
    datetime.datetime(2013, 6, 13, 10, 2)
    """
    dt = parse_iso_datetime(s, prestrip=prestrip)
    try:
        return datetime_utc_normalize(dt)
    except OverflowError:
        raise ValueError('{!a} is out of the supported date range when '
                         'normalized to UTC'.format(s)) from None


def _make_date_from_match(match):
    g = match.groupdict()
    return datetime.date(int(g['year']),
                         int(g['month']),
                         int(g['day']))


def _make_time_from_match(match):
    g = match.groupdict()
    hour = int(g['hour'])
    if hour == 24:
        hour = 0
    minute = int(g['minute'])
    if g['secondfraction']:
        fract_str = g['secondfraction']
        microsecond = (int(fract_str) * 1000000) // (10 ** len(fract_str))
        microsecond = min(microsecond, 999999)  # must be less than million
    else:
        microsecond = 0
    if g['second']:
        second = int(g['second'])
        if second == 60:  # ISO 'leap second' -- not supported by datetime
            second = 59
            microsecond = 999999
    else:
        second = 0
    if g['tzhour']:
        utc_offset = int(g['tzhour']) * 60
        if g['tzminute']:
            tzminute = int(g['tzminute'])
            if tzminute > 59:
                raise ValueError('minute part {!a} in time zone designator '
                                 'is out of range 00..59'.format(tzminute))
            if g['tzhour'].startswith('-'):
                utc_offset -= tzminute
            else:
                utc_offset += tzminute
        tzinfo = datetime.timezone(datetime.timedelta(minutes=utc_offset))
    else:
        tzinfo = None
    return datetime.time(hour, minute, second, microsecond, tzinfo)
