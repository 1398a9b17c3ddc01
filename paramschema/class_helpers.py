# Copyright (c) 2013-2026 NASK. All rights reserved.

import collections.abc as collections_abc


def is_seq(obj):
    """
    Check if the object is a sequence but *not* a str/bytes/bytearray.

    >>> is_seq([1, 2])
    True
    >>> is_seq((1, 2))
    True
    >>> is_seq('12')
    False
    >>> is_seq(b'12')
    False
    >>> is_seq({1, 2})
    False
    >>> is_seq({'a': 1})
    False
    """
    return (isinstance(obj, collections_abc.Sequence) and
            not isinstance(obj, (str, bytes, bytearray)))


def attr_repr(*attr_names):
    """
    Make a __repr__() implementation based on given attribute names.

    Any number of positional args:
        Names of instance attributes and/or class attributes.

    Returns:
        A function being the requested __repr__() implementation.

    >>> class A(object):
    ...    __repr__ = attr_repr('x', 'y')
    ...    x = 1
    ...    def __init__(self):
    ...        self.y = 'qwerty'
    >>> a = A()
    >>> a
    <A x=1, y='qwerty'>
    """
    format_repr = ('<{0.__class__.__qualname__} ' +
                   ', '.join('%s={0.%s!r}' % (name, name)
                             for name in attr_names) +
                   '>').format
    format_repr_fallback = object.__repr__

    def __repr__(self):
        # noinspection PyBroadException
        try:
            return format_repr(self)
        except Exception:
            return format_repr_fallback(self)

    return __repr__


def get_class_name(obj):
    """
    Get the qualified name of the class of the given object (or of the
    object itself if it is a class).

    >>> get_class_name(42)
    'int'
    >>> get_class_name(dict)
    'dict'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    return cls.__qualname__
