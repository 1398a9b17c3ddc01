# Copyright (c) 2013-2026 NASK. All rights reserved.


def ascii_str(obj):

    r"""
    Safely convert the given object to an ASCII-only :class:`str`.

    This function does its best to obtain a string representation
    (possibly :class:`str`-like or :class:`bytes`-like converted to str,
    though :func:`repr` can also be used as the last-resort fallback)
    and then escaping any non-ASCII characters -- *not raising* any
    encoding/decoding exceptions.

    >>> ascii_str('')
    ''
    >>> ascii_str(b'')
    ''
    >>> ascii_str('Ala ma kota\nA kot?\n2=2 ')   # pure ASCII str => unchanged
    'Ala ma kota\nA kot?\n2=2 '
    >>> ascii_str('Ech, ale błąd!')       # non-pure-ASCII-str => escaped
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(b'Ech, ale b\xc5\x82\xc4\x85d!')   # UTF-8 bytes => decoded + escaped
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(ValueError('Ech, ale błąd!'))
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(42)
    '42'

    >>> class Nasty(object):
    ...     def __str__(self): raise UnicodeError
    ...     def __repr__(self): return u'quite nasŧy'
    ...
    >>> ascii_str(Nasty())
    'quite nas\\u0167y'
    """
    if isinstance(obj, str):
        s = obj
    else:
        if isinstance(obj, memoryview):
            obj = bytes(obj)
        if isinstance(obj, (bytes, bytearray)):
            s = obj.decode('utf-8', 'backslashreplace')
        else:
            try:
                s = str(obj)
            except ValueError:
                s = repr(obj)
    return s.encode('ascii', 'backslashreplace').decode('ascii')


def as_unicode(obj, decode_error_handling='strict'):

    r"""
    Convert the given object to a :class:`str` (possibly containing
    various **non**-ASCII characters).

    :class:`bytes`/:class:`bytearray`/:class:`memoryview` objects are
    decoded as *UTF-8* (`decode_error_handling` is passed as the second
    argument to :meth:`~bytes.decode`); any other objects are converted
    with :class:`str` or -- if that fails -- with :func:`repr`.

    >>> as_unicode('')
    ''
    >>> as_unicode(b'O\xc5\x82\xc3\xb3wek') == 'Oł\xf3wek'
    True
    >>> as_unicode(bytearray(b'O\xc5\x82\xc3\xb3wek')) == 'Oł\xf3wek'
    True
    >>> as_unicode(b'\xdd')                     # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    UnicodeDecodeError: ...
    >>> as_unicode(42) == '42'
    True
    """
    if isinstance(obj, memoryview):
        obj = bytes(obj)
    if isinstance(obj, (bytes, bytearray)):
        s = obj.decode('utf-8', decode_error_handling)
    else:
        try:
            s = str(obj)
        except ValueError:
            s = repr(obj)
    return s


def str_to_bool(s):
    """
    Return True or False, given one of the known strings (see examples below).

    Used to convert *configuration option* values, so it is deliberately
    more liberal than the wire-level `boolean` type (which accepts only
    ``"true"`` and ``"false"``).

    >>> str_to_bool('1')
    True
    >>> str_to_bool('Yes')  # note: checks are case-insensitive
    True
    >>> str_to_bool('on')
    True
    >>> str_to_bool('0')
    False
    >>> str_to_bool('nO')
    False
    >>> str_to_bool('off')
    False

    Other string values cause ValueError:

    >>> str_to_bool('unknown')        # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...

    Non-str values cause TypeError:

    >>> str_to_bool(True)             # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    """
    if not isinstance(s, str):
        raise TypeError('{!a} is not a str'.format(s))
    s_lowercased = s.lower()
    try:
        return str_to_bool.LOWERCASE_TO_BOOL[s_lowercased]
    except KeyError:
        raise ValueError(str_to_bool.PUBLIC_MESSAGE_PATTERN.format(
            ascii_str(s)).rstrip('.')) from None

str_to_bool.LOWERCASE_TO_BOOL = {
    '1': True,
    'y': True,
    'yes': True,
    't': True,
    'true': True,
    'on': True,

    '0': False,
    'n': False,
    'no': False,
    'f': False,
    'false': False,
    'off': False,
}

str_to_bool.PUBLIC_MESSAGE_PATTERN = (
    '"{}" is not a valid YES/NO flag (expected one of: %s; or a '
    'variant of any of them with some letters upper-cased).' % (
        ', '.join('"{}"'.format(k) for k, v in sorted(
            str_to_bool.LOWERCASE_TO_BOOL.items(),
            key=lambda item: (item[1], item[0])))))
