# Copyright (c) 2013-2026 NASK. All rights reserved.

"""
Type objects: per-type conversion and validation of field values.

Each *type object* provides two methods:

* :meth:`~BaseType.coerce_in` -- called by the *load* machinery to
  convert an *external* (wire) value into an *internal* one;

* :meth:`~BaseType.coerce_out` -- called by the *dump* machinery to
  convert an *internal* value into an *external* one.

Both of them are pure functions of their argument (and of the type
object's attributes).  They signal problems by raising instances of
:exc:`~paramschema.exceptions.FieldValueError` subclasses (which are
caught and collected by the machinery).

The nested types :class:`One` and :class:`Many` are *not* converters
by themselves -- the machinery recurses into their schemas.
"""

import datetime
import decimal
import enum
import math
import re

from paramschema.class_helpers import is_seq
from paramschema.datetime_helpers import (
    datetime_utc_normalize,
    parse_iso_date,
    parse_iso_datetime_to_utc,
)
from paramschema.encoding_helpers import ascii_str
from paramschema.enums import EnumMapping
from paramschema.exceptions import (
    InvalidFormat,
    InvalidSchemaDefinition,
    TypeMismatch,
    UnknownEnumValue,
)


INTEGER_STR_REGEX = re.compile(r'\A[+-]?[0-9]+\Z', re.ASCII)
DECIMAL_STR_REGEX = re.compile(
    r'''
    \A
    [+-]?
    (?:
        [0-9]+
        (?:
            \.
            [0-9]*
        )?
    |
        \.
        [0-9]+
    )
    (?:
        [eE]
        [+-]?
        [0-9]+
    )?
    \Z
    ''', re.ASCII | re.VERBOSE)



#
# The base type class

class BaseType(object):

    """
    The base class for all type classes.

    Type objects can be customized in two ways:

    1) by subclassing (and overridding/extending some of class-level
       attributes and/or methods);

    2) by specifying custom *per-instance* values with keyword
       arguments passed to the constructor -- then corresponding
       class-level attributes are overridden.

    >>> StringType(strip=True).strip
    True
    >>> StringType(no_such_attr=42)     # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    paramschema.exceptions.InvalidSchemaDefinition: ...
    """

    #: The name under which the class is registered in `TYPE_NAME_TO_CLASS`.
    type_name = None

    #: Whether the machinery should recurse into `schema` of the type.
    is_nested = False

    def __init__(self, **kwargs):
        self._init_kwargs = kwargs
        self._set_per_instance_attrs(kwargs)

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__qualname__,
            ', '.join(
                '{}={!r}'.format(key, value)
                for key, value in sorted(self._init_kwargs.items())))

    def coerce_in(self, raw):
        """
        Convert the given external value to an internal one.

        The default implementation just passes the value unchanged.
        This method can be extended (using :func:`super`) in subclasses.

        The method should always return a new object (or an immutable
        one), **never** modifying the given value in-place.
        """
        return raw

    def coerce_out(self, value):
        """
        Convert the given internal value to an external one.

        The default implementation just passes the value unchanged.
        This method can be extended (using :func:`super`) in subclasses.
        """
        return value


    #
    # non-public internals

    def _set_per_instance_attrs(self, per_instance_attrs):
        # per-instance customizations of class-level attributes
        cls = self.__class__
        for attr_name, obj in per_instance_attrs.items():
            if attr_name.startswith('_') or not hasattr(cls, attr_name):
                raise InvalidSchemaDefinition(
                    '{}.__init__() got an unexpected keyword argument {!a}'
                    .format(cls.__qualname__, attr_name))
            setattr(self, attr_name, obj)

    @staticmethod
    def _type_mismatch(value, expected_descr):
        return TypeMismatch(public_message=(
            'Expected {}, got a value of type "{}"'.format(
                expected_descr,
                ascii_str(type(value).__name__))))



#
# Scalar types

class AnyType(BaseType):

    """
    For arbitrary values (passed through unchanged in both directions).
    """

    type_name = 'any'


class StringType(BaseType):

    """
    For text data.

    :class:`bytes`/:class:`bytearray` input values are decoded (using
    the :attr:`encoding`); any other non-:class:`str` values cause
    :exc:`~paramschema.exceptions.TypeMismatch`.
    """

    type_name = 'string'

    encoding = 'utf-8'
    strip = False
    allow_empty = True

    def coerce_in(self, raw):
        raw = super(StringType, self).coerce_in(raw)
        if isinstance(raw, (bytes, bytearray)):
            try:
                raw = raw.decode(self.encoding)
            except UnicodeError:
                raise InvalidFormat(public_message=(
                    '"{}" cannot be decoded with encoding "{}"'.format(
                        ascii_str(raw),
                        self.encoding))) from None
        if not isinstance(raw, str):
            raise self._type_mismatch(raw, 'a string')
        return self._fix_value(raw)

    def coerce_out(self, value):
        value = super(StringType, self).coerce_out(value)
        if not isinstance(value, str):
            raise self._type_mismatch(value, 'a string')
        return self._fix_value(value)

    def _fix_value(self, value):
        if self.strip:
            value = value.strip()
        if not self.allow_empty and not value:
            raise InvalidFormat(public_message='The value is empty')
        return value


class IntegerType(BaseType):

    """
    For integer numbers.

    Accepted input values: :class:`int` (but *not* :class:`bool`),
    :class:`float`/:class:`decimal.Decimal` with an integral value, or
    a string of decimal digits (optionally signed; surrounding
    whitespace is tolerated -- because some upstream APIs send numbers
    as strings).
    """

    type_name = 'integer'

    def coerce_in(self, raw):
        raw = super(IntegerType, self).coerce_in(raw)
        return self._coerce_value(raw)

    def coerce_out(self, value):
        value = super(IntegerType, self).coerce_out(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._type_mismatch(value, 'an integer number')
        return value

    def _coerce_value(self, value):
        if isinstance(value, bool):
            raise self._type_mismatch(value, 'an integer number')
        if isinstance(value, (bytes, bytearray)):
            value = value.decode('ascii', 'replace')
        if isinstance(value, str):
            stripped = value.strip()
            if not INTEGER_STR_REGEX.match(stripped):
                raise self._invalid_format(value)
            try:
                return int(stripped)
            except ValueError:
                # (e.g., exceeding the limit of int string conversion length)
                raise self._invalid_format(value) from None
        if isinstance(value, int):
            return value
        if isinstance(value, (float, decimal.Decimal)):
            # e.g. float is OK *only* if it is an integer number (such as 42.0)
            if not _is_finite(value) or value != int(value):
                raise self._invalid_format(value)
            return int(value)
        raise self._type_mismatch(value, 'an integer number')

    @staticmethod
    def _invalid_format(value):
        return InvalidFormat(public_message=(
            '"{}" cannot be interpreted as an '
            'integer number'.format(ascii_str(value))))


class DecimalType(BaseType):

    """
    For decimal (fixed-point) numbers, represented internally as
    :class:`decimal.Decimal` instances.

    Accepted input values: :class:`int` (but *not* :class:`bool`),
    :class:`float` (converted via its shortest :func:`str` form),
    :class:`decimal.Decimal`, or a numeric string.  Non-finite values
    (*NaN*, *Infinity*) are rejected.

    External (dumped) values are strings -- so that no precision is
    lost on the wire.
    """

    type_name = 'decimal'

    def coerce_in(self, raw):
        raw = super(DecimalType, self).coerce_in(raw)
        return self._coerce_value(raw)

    def coerce_out(self, value):
        value = super(DecimalType, self).coerce_out(value)
        if isinstance(value, str):
            value = self._coerce_value(value)
        elif isinstance(value, bool) or not isinstance(value, (int, float, decimal.Decimal)):
            raise self._type_mismatch(value, 'a decimal number')
        else:
            value = self._coerce_value(value)
        return str(value)

    def _coerce_value(self, value):
        if isinstance(value, bool):
            raise self._type_mismatch(value, 'a decimal number')
        if isinstance(value, (bytes, bytearray)):
            value = value.decode('ascii', 'replace')
        if isinstance(value, str):
            stripped = value.strip()
            if not DECIMAL_STR_REGEX.match(stripped):
                raise self._invalid_format(value)
            try:
                return decimal.Decimal(stripped)
            except decimal.InvalidOperation:
                # (e.g., an exponent beyond the limits of the `decimal` module)
                raise self._invalid_format(value) from None
        if isinstance(value, int):
            return decimal.Decimal(value)
        if isinstance(value, (float, decimal.Decimal)):
            if not _is_finite(value):
                raise self._invalid_format(value)
            if isinstance(value, float):
                return decimal.Decimal(repr(value))
            return value
        raise self._type_mismatch(value, 'a decimal number')

    @staticmethod
    def _invalid_format(value):
        return InvalidFormat(public_message=(
            '"{}" cannot be interpreted as a '
            'decimal number'.format(ascii_str(value))))


class FloatType(DecimalType):

    """
    For floating-point numbers (accepting the same input values as
    :class:`DecimalType`, but producing -- in both directions --
    :class:`float` values).
    """

    type_name = 'float'

    def coerce_in(self, raw):
        return self._as_finite_float(super(FloatType, self).coerce_in(raw), raw)

    def coerce_out(self, value):
        if isinstance(value, bool) or not isinstance(value, (int, float, decimal.Decimal)):
            raise self._type_mismatch(value, 'a number')
        return self._as_finite_float(self._coerce_value(value), value)

    def _as_finite_float(self, dec_value, given):
        # (a finite `Decimal` beyond the range of `float` becomes infinity)
        value = float(dec_value)
        if not math.isfinite(value):
            raise self._invalid_format(given)
        return value

    @staticmethod
    def _invalid_format(value):
        return InvalidFormat(public_message=(
            '"{}" cannot be interpreted as a '
            'number'.format(ascii_str(value))))


class BooleanType(BaseType):

    """
    For boolean flags.

    Accepted input values: :obj:`True`/:obj:`False`, or one of the
    strings: ``"true"``, ``"false"`` (see :attr:`str_to_bool`).
    """

    type_name = 'boolean'

    str_to_bool = {
        'true': True,
        'false': False,
    }

    def coerce_in(self, raw):
        raw = super(BooleanType, self).coerce_in(raw)
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            try:
                return self.str_to_bool[raw]
            except KeyError:
                raise InvalidFormat(public_message=(
                    '"{}" is not one of: {}'.format(
                        ascii_str(raw),
                        ', '.join('"{}"'.format(s) for s in self.str_to_bool)))) from None
        raise self._type_mismatch(raw, 'a boolean')

    def coerce_out(self, value):
        value = super(BooleanType, self).coerce_out(value)
        if not isinstance(value, bool):
            raise self._type_mismatch(value, 'a boolean')
        return value


class DateType(BaseType):

    """
    For calendar dates (:class:`datetime.date`), transmitted as
    *ISO-8601*-formatted strings.
    """

    type_name = 'date'

    def coerce_in(self, raw):
        raw = super(DateType, self).coerce_in(raw)
        if isinstance(raw, datetime.datetime):
            raise self._type_mismatch(raw, 'a date')
        if isinstance(raw, datetime.date):
            return raw
        if isinstance(raw, str):
            try:
                return parse_iso_date(raw)
            except ValueError:
                raise InvalidFormat(public_message=(
                    '"{}" is not a valid date '
                    'specification'.format(ascii_str(raw)))) from None
        raise self._type_mismatch(raw, 'a date string')

    def coerce_out(self, value):
        value = super(DateType, self).coerce_out(value)
        if isinstance(value, datetime.datetime) or not isinstance(value, datetime.date):
            raise self._type_mismatch(value, 'a date')
        return value.isoformat()


class DateTimeType(BaseType):

    """
    For date-and-time (timestamp) values, automatically normalized to
    UTC (internal values are *naive* :class:`datetime.datetime` objects).

    External (dumped) values are *ISO-8601*-formatted strings with the
    ``Z`` suffix.
    """

    type_name = 'datetime'

    keep_sec_fraction = True

    def coerce_in(self, raw):
        raw = super(DateTimeType, self).coerce_in(raw)
        if isinstance(raw, datetime.datetime):
            value = self._utc_normalized(raw)
        elif isinstance(raw, str):
            try:
                value = parse_iso_datetime_to_utc(raw)
            except ValueError:
                raise self._invalid_format(raw) from None
        else:
            raise self._type_mismatch(raw, 'a date + time string')
        if not self.keep_sec_fraction:
            value = value.replace(microsecond=0)
        return value

    def coerce_out(self, value):
        value = super(DateTimeType, self).coerce_out(value)
        if not isinstance(value, datetime.datetime):
            raise self._type_mismatch(value, 'a date + time')
        value = self._utc_normalized(value)
        if not self.keep_sec_fraction:
            value = value.replace(microsecond=0)
        return value.isoformat() + 'Z'

    def _utc_normalized(self, dt):
        try:
            return datetime_utc_normalize(dt)
        except OverflowError:
            # (a TZ-aware value that cannot be expressed in UTC)
            raise self._invalid_format(dt) from None

    @staticmethod
    def _invalid_format(value):
        return InvalidFormat(public_message=(
            '"{}" is not a valid date + '
            'time specification'.format(ascii_str(value))))


class EnumType(BaseType):

    """
    For values limited to a finite set, with distinct internal and
    external representations.

    The constructor-argument-or-subclass-attribute :attr:`enum_mapping`
    is obligatory.  It can be specified as an
    :class:`~paramschema.enums.EnumMapping` instance or as anything that
    can be passed to the :class:`~paramschema.enums.EnumMapping`
    constructor (a mapping, an iterable of pairs or an
    :class:`enum.Enum` subclass).  Its bijection is verified eagerly.

    >>> status = EnumType(enum_mapping={'new': 'NEW', 'charged': 'CHARGED'})
    >>> status.coerce_in('NEW')
    'new'
    >>> status.coerce_out('charged')
    'CHARGED'
    >>> status.coerce_in('UNKNOWN')        # doctest: +ELLIPSIS
    Traceback (most recent call last):
      ...
    paramschema.exceptions.UnknownEnumValue: "UNKNOWN" is not one of: "NEW", "CHARGED"
    """

    type_name = 'enum'

    enum_mapping = None

    def __init__(self, **kwargs):
        super(EnumType, self).__init__(**kwargs)
        if self.enum_mapping is None:
            raise InvalidSchemaDefinition(
                "'enum_mapping' not specified for {} "
                "(neither as a class attribute nor "
                "as a constructor argument)"
                .format(self.__class__.__qualname__))
        if not isinstance(self.enum_mapping, EnumMapping):
            self.enum_mapping = EnumMapping(self.enum_mapping)

    def coerce_in(self, raw):
        raw = super(EnumType, self).coerce_in(raw)
        try:
            return self.enum_mapping.to_internal(raw)
        except KeyError:
            raise UnknownEnumValue(public_message=(
                '"{}" is not one of: {}'.format(
                    ascii_str(raw),
                    ', '.join('"{}"'.format(ascii_str(v))
                              for v in self.enum_mapping.external_values)))) from None

    def coerce_out(self, value):
        value = super(EnumType, self).coerce_out(value)
        try:
            return self.enum_mapping.to_external(value)
        except KeyError:
            raise UnknownEnumValue(public_message=(
                '"{}" is not one of the internal values: {}'.format(
                    ascii_str(value),
                    ', '.join('"{}"'.format(ascii_str(v))
                              for v in self.enum_mapping.internal_values)))) from None



#
# Collection types

class ListOf(BaseType):

    """
    For lists of scalar values (each coerced with :attr:`item_type`).

    The constructor-argument-or-subclass-attribute :attr:`item_type`
    (anything accepted by :func:`resolve_type`, except nested types) is
    obligatory; it can also be given as the sole positional argument.

    Note that the *load* and *dump* machinery does not call
    :meth:`coerce_in`/:meth:`coerce_out` of this class -- instead, it
    walks the items itself (to be able to report each invalid item at
    its own path, e.g., ``tags[3]``).  The methods are provided for
    standalone use (they fail on the first invalid item).
    """

    type_name = 'list'

    item_type = None
    allow_empty = True

    def __init__(self, item_type=None, **kwargs):
        if item_type is not None:
            kwargs['item_type'] = item_type
        super(ListOf, self).__init__(**kwargs)
        if self.item_type is None:
            raise InvalidSchemaDefinition(
                "'item_type' not specified for {}".format(self.__class__.__qualname__))
        self.item_type = resolve_type(self.item_type)
        if self.item_type.is_nested or isinstance(self.item_type, ListOf):
            raise InvalidSchemaDefinition(
                '{} supports only scalar item types (for lists of '
                'nested structures use {})'.format(
                    self.__class__.__qualname__,
                    Many.__qualname__))

    def coerce_in(self, raw):
        self.verify_sequence(raw)
        return [self.item_type.coerce_in(v) for v in raw]

    def coerce_out(self, value):
        self.verify_sequence(value)
        return [self.item_type.coerce_out(v) for v in value]

    def verify_sequence(self, value):
        if not is_seq(value):
            raise self._type_mismatch(value, 'a list')
        if not self.allow_empty and not value:
            raise InvalidFormat(public_message='The list is empty')



#
# Nested types

class _NestedType(BaseType):

    is_nested = True

    schema = None

    def __init__(self, schema=None, **kwargs):
        if schema is not None:
            kwargs['schema'] = schema
        super(_NestedType, self).__init__(**kwargs)
        if self.schema is None:
            raise InvalidSchemaDefinition(
                "'schema' not specified for {}".format(self.__class__.__qualname__))

    @property
    def is_resolved(self):
        """Whether :attr:`schema` is a schema object (not a name)."""
        return not isinstance(self.schema, str)

    def with_schema(self, schema):
        """Get a new instance of the same class, referring to `schema`."""
        kwargs = dict(self._init_kwargs, schema=schema)
        return self.__class__(**kwargs)

    def coerce_in(self, raw):
        raise TypeError("nested types are handled by the engines")

    coerce_out = coerce_in


class One(_NestedType):

    """
    For a nested structure (one-to-one composition).

    The sole argument is a :class:`~paramschema.schema.Schema` instance
    or the name of a schema registered in a
    :class:`~paramschema.schema.SchemaRegistry`.
    """

    type_name = 'one'


class Many(_NestedType):

    """
    For a list of nested structures (one-to-many composition).

    The sole argument is like for :class:`One`.
    """

    type_name = 'many'

    allow_empty = True



#
# Type resolution

TYPE_NAME_TO_CLASS = {
    cls.type_name: cls
    for cls in (
        AnyType,
        StringType,
        IntegerType,
        DecimalType,
        FloatType,
        BooleanType,
        DateType,
        DateTimeType,
    )
}


def resolve_type(type_spec):
    """
    Get a type object for the given type specification.

    Args:
        `type_spec`: one of:

        * a :class:`BaseType` instance (returned unchanged),
        * a :class:`BaseType` subclass (instantiated with no arguments),
        * a name from :data:`TYPE_NAME_TO_CLASS` (e.g., ``'string'``),
        * an :class:`~paramschema.enums.EnumMapping` instance or an
          :class:`enum.Enum` subclass (an :class:`EnumType` is made).

    Raises:
        :exc:`~paramschema.exceptions.InvalidSchemaDefinition`.

    >>> resolve_type('integer')
    IntegerType()
    >>> resolve_type(StringType)
    StringType()
    >>> resolve_type('int')              # doctest: +ELLIPSIS
    Traceback (most recent call last):
      ...
    paramschema.exceptions.InvalidSchemaDefinition: [schema definition error] unknown type name 'int' ...
    """
    if isinstance(type_spec, BaseType):
        return type_spec
    if isinstance(type_spec, type) and issubclass(type_spec, BaseType):
        if type_spec in (EnumType, ListOf) or issubclass(type_spec, _NestedType):
            raise InvalidSchemaDefinition(
                '{} cannot be used without arguments'.format(type_spec.__qualname__))
        return type_spec()
    if isinstance(type_spec, str):
        try:
            return TYPE_NAME_TO_CLASS[type_spec]()
        except KeyError:
            raise InvalidSchemaDefinition(
                'unknown type name {!a} (expected one of: {})'.format(
                    type_spec,
                    ', '.join(sorted(map(repr, TYPE_NAME_TO_CLASS))))) from None
    if isinstance(type_spec, EnumMapping) or (
          isinstance(type_spec, type) and issubclass(type_spec, enum.Enum)):
        return EnumType(enum_mapping=type_spec)
    raise InvalidSchemaDefinition('{!a} is not a valid type specification'.format(type_spec))


def _is_finite(value):
    if isinstance(value, decimal.Decimal):
        return value.is_finite()
    return math.isfinite(value)
