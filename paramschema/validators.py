# Copyright (c) 2026 NASK. All rights reserved.

"""
Reusable per-field value constraints.

A *validator* is any callable that takes one argument -- an already
coerced (internal) field value -- and either:

* returns :obj:`None` or any true value (the value is OK), or

* returns :obj:`False` (then the *load* machinery records a plain
  :exc:`~paramschema.exceptions.InvalidValue`), or

* raises :exc:`~paramschema.exceptions.FieldValueError` (typically,
  :exc:`~paramschema.exceptions.InvalidValue` with a specific
  `public_message`).

Validators are run only by the *load* machinery, and only when the
value has been coerced successfully.  Each failing validator of a field
adds its own error at the path of the field.

>>> check = Length(min=2, max=3)
>>> check('abc')
>>> check('abcd')                          # doctest: +ELLIPSIS
Traceback (most recent call last):
  ...
paramschema.exceptions.InvalidValue: Length of "abcd" is greater than 3.
"""

import re

from paramschema.class_helpers import attr_repr
from paramschema.encoding_helpers import ascii_str
from paramschema.exceptions import (
    InvalidSchemaDefinition,
    InvalidValue,
)


class BaseValidator(object):

    def __call__(self, value):
        raise NotImplementedError

    @staticmethod
    def _fail(msg_pattern, *args):
        raise InvalidValue(public_message=msg_pattern.format(
            *[(ascii_str(a) if isinstance(a, (str, bytes)) else a)
              for a in args]))


class Length(BaseValidator):

    """
    Check that ``len(value)`` is within the given (inclusive) bounds.

    Args/kwargs:
        `min` (default: :obj:`None`): the minimum length.
        `max` (default: :obj:`None`): the maximum length.
    """

    __repr__ = attr_repr('min', 'max')

    def __init__(self, min=None, max=None):
        if min is None and max is None:
            raise InvalidSchemaDefinition('at least one of `min`/`max` must be specified')
        if min is not None and max is not None and min > max:
            raise InvalidSchemaDefinition(
                '`min` ({!a}) is greater than `max` ({!a})'.format(min, max))
        self.min = min
        self.max = max

    def __call__(self, value):
        length = len(value)
        if self.min is not None and length < self.min:
            self._fail('Length of "{}" is lesser than {}.', value, self.min)
        if self.max is not None and length > self.max:
            self._fail('Length of "{}" is greater than {}.', value, self.max)


class Range(BaseValidator):

    """
    Check that the value is within the given (inclusive) bounds.

    >>> Range(min=0)(-1)
    Traceback (most recent call last):
      ...
    paramschema.exceptions.InvalidValue: -1 is lesser than 0.
    """

    __repr__ = attr_repr('min', 'max')

    def __init__(self, min=None, max=None):
        if min is None and max is None:
            raise InvalidSchemaDefinition('at least one of `min`/`max` must be specified')
        if min is not None and max is not None and min > max:
            raise InvalidSchemaDefinition(
                '`min` ({!a}) is greater than `max` ({!a})'.format(min, max))
        self.min = min
        self.max = max

    def __call__(self, value):
        if self.min is not None and value < self.min:
            self._fail('{} is lesser than {}.', value, self.min)
        if self.max is not None and value > self.max:
            self._fail('{} is greater than {}.', value, self.max)


class OneOf(BaseValidator):

    """
    Check that the value is one of the specified choices.

    >>> OneOf(['USD', 'EUR'])('PLN')
    Traceback (most recent call last):
      ...
    paramschema.exceptions.InvalidValue: "PLN" is not one of: "USD", "EUR".
    """

    __repr__ = attr_repr('choices')

    def __init__(self, choices):
        self.choices = tuple(choices)
        if not self.choices:
            raise InvalidSchemaDefinition('`choices` cannot be empty')

    def __call__(self, value):
        if value not in self.choices:
            raise InvalidValue(public_message='"{}" is not one of: {}.'.format(
                ascii_str(value),
                ', '.join('"{}"'.format(ascii_str(c)) for c in self.choices)))


class Regex(BaseValidator):

    """
    Check that the (string) value matches the given regular expression.

    Args/kwargs:
        `regex`: a regular expression (a string or a compiled one).

    Kwargs:
        `error_message` (default: :obj:`None`): a custom public message
            (if not specified, a generic one is used).

    Note that :meth:`re.Pattern.search` is used, so the regex should be
    anchored if the whole value is to be matched.
    """

    __repr__ = attr_repr('regex', 'error_message')

    def __init__(self, regex, error_message=None):
        if isinstance(regex, str):
            try:
                regex = re.compile(regex)
            except re.error as exc:
                raise InvalidSchemaDefinition(
                    'invalid regular expression {!a} ({})'.format(regex, exc)) from None
        self.regex = regex
        self.error_message = error_message

    def __call__(self, value):
        if self.regex.search(value) is None:
            if self.error_message is not None:
                raise InvalidValue(public_message=self.error_message)
            self._fail('"{}" is not a valid value.', value)


# lowercase aliases (convenient in field definitions)
length = Length
value_range = Range
one_of = OneOf
regex = Regex
