# Copyright (c) 2014-2026 NASK. All rights reserved.

import collections
import copy
import datetime
import decimal
import enum
import unittest

from unittest_expander import (
    expand,
    foreach,
    param,
)

from paramschema.enums import EnumMapping
from paramschema.exceptions import (
    InvalidFormat,
    InvalidSchemaDefinition,
    TypeMismatch,
    UnknownEnumValue,
)
from paramschema.types import (
    AnyType,
    BaseType,
    BooleanType,
    DateTimeType,
    DateType,
    DecimalType,
    EnumType,
    FloatType,
    IntegerType,
    ListOf,
    Many,
    One,
    StringType,
    resolve_type,
)
from paramschema.tests._generic_helpers import TestCaseMixin



#
# Some mix-ins and helpers
#

class TypeTestMixin(TestCaseMixin):

    CLASS = None              # must be set in concrete test case classes
    INIT_KWARGS_BASE = None   # can be set in concrete test case classes

    def test__coerce_in(self):
        for init_kwargs, given, expected in self.cases__coerce_in():
            self._check(init_kwargs, given, expected, 'coerce_in')

    def test__coerce_out(self):
        for init_kwargs, given, expected in self.cases__coerce_out():
            self._check(init_kwargs, given, expected, 'coerce_out')

    def _check(self, init_kwargs, given, expected, method_name):
        init_kwargs = dict(self.INIT_KWARGS_BASE or {}, **init_kwargs)
        deep_copy_of_given = copy.deepcopy(given)
        t = self.CLASS(**init_kwargs)
        method = getattr(t, method_name)
        if isinstance(expected, type) and issubclass(
              expected, BaseException):
            with self.assertRaises(expected) as cm:
                method(given)
            self.assertIs(type(cm.exception), expected,
                          f"{given=!r}; {repr(cm.exception)=!s}")
        else:
            coerced_value = method(given)
            self.assertEqualIncludingTypes(coerced_value, expected)
        # ensure that the given value has not been modified
        self.assertEqualIncludingTypes(deep_copy_of_given, given)


class case(collections.namedtuple('case', 'init_kwargs, given, expected')):

    def __new__(cls, **kwargs):
        if 'init_kwargs' not in kwargs:
            kwargs['init_kwargs'] = {}
        return super(case, cls).__new__(cls, **kwargs)


#
# Tests of some generic type features
#

class TestInitKwargsAndAttributes(TestCaseMixin, unittest.TestCase):

    class MyType(StringType):
        foo = 'foo'

    def test_no_init_kwargs(self):
        t = self.MyType()
        self.assertEqual(t.foo, 'foo')
        self.assertIs(t.strip, False)
        self.assertEqualIncludingTypes(t._init_kwargs, {})
        self.assertEqual(repr(t), 'TestInitKwargsAndAttributes.MyType()')

    def test_init_kwargs_override_class_attributes(self):
        t = self.MyType(foo='bar', strip=True)
        self.assertEqual(t.foo, 'bar')
        self.assertIs(t.strip, True)
        self.assertEqual(self.MyType.foo, 'foo')
        self.assertEqual(repr(t), "TestInitKwargsAndAttributes.MyType(foo='bar', strip=True)")

    def test_illegal_init_kwargs(self):
        with self.assertRaises(InvalidSchemaDefinition):
            self.MyType(no_such_attr=42)
        with self.assertRaises(InvalidSchemaDefinition):
            self.MyType(_init_kwargs={})

    def test_base_type_passes_values_unchanged(self):
        t = BaseType()
        obj = object()
        self.assertIs(t.coerce_in(obj), obj)
        self.assertIs(t.coerce_out(obj), obj)


#
# Tests of particular type classes
#

class TestAnyType(TypeTestMixin, unittest.TestCase):

    CLASS = AnyType

    def cases__coerce_in(self):
        yield case(given='x', expected='x')
        yield case(given=[1, {'a': None}], expected=[1, {'a': None}])

    def cases__coerce_out(self):
        yield case(given=42, expected=42)


class TestStringType(TypeTestMixin, unittest.TestCase):

    CLASS = StringType

    def cases__coerce_in(self):
        yield case(given='USD', expected='USD')
        yield case(given='', expected='')
        yield case(given=' USD ', expected=' USD ')
        yield case(init_kwargs={'strip': True}, given=' USD ', expected='USD')
        yield case(given='Zażółć', expected='Zażółć')
        yield case(given=b'Za\xc5\xbc\xc3\xb3\xc5\x82\xc4\x87', expected='Zażółć')
        yield case(given=bytearray(b'USD'), expected='USD')
        yield case(given=b'\xdd', expected=InvalidFormat)
        yield case(init_kwargs={'allow_empty': False}, given='', expected=InvalidFormat)
        yield case(init_kwargs={'allow_empty': False, 'strip': True}, given=' \t',
                   expected=InvalidFormat)
        yield case(given=42, expected=TypeMismatch)
        yield case(given=None, expected=TypeMismatch)
        yield case(given=['USD'], expected=TypeMismatch)

    def cases__coerce_out(self):
        yield case(given='USD', expected='USD')
        yield case(given=b'USD', expected=TypeMismatch)
        yield case(given=42, expected=TypeMismatch)


class TestIntegerType(TypeTestMixin, unittest.TestCase):

    CLASS = IntegerType

    def cases__coerce_in(self):
        yield case(given=42, expected=42)
        yield case(given=-42, expected=-42)
        yield case(given=123000000000000000000000, expected=123000000000000000000000)
        yield case(given=42.0, expected=42)
        yield case(given=decimal.Decimal('42.000'), expected=42)
        yield case(given='42', expected=42)
        yield case(given=' -42\n', expected=-42)
        yield case(given='+042', expected=42)
        yield case(given=b'42', expected=42)
        yield case(given=42.5, expected=InvalidFormat)
        yield case(given=float('inf'), expected=InvalidFormat)
        yield case(given=decimal.Decimal('42.1'), expected=InvalidFormat)
        yield case(given='42.0', expected=InvalidFormat)
        yield case(given='4_2', expected=InvalidFormat)
        yield case(given='0x1', expected=InvalidFormat)
        yield case(given='', expected=InvalidFormat)
        yield case(given='٤٢', expected=InvalidFormat)  # non-ASCII digits
        yield case(given='1' * 5000, expected=InvalidFormat)  # beyond int conversion limit
        yield case(given=True, expected=TypeMismatch)
        yield case(given=None, expected=TypeMismatch)
        yield case(given=[42], expected=TypeMismatch)

    def cases__coerce_out(self):
        yield case(given=42, expected=42)
        yield case(given=False, expected=TypeMismatch)
        yield case(given='42', expected=TypeMismatch)
        yield case(given=42.0, expected=TypeMismatch)


class TestDecimalType(TypeTestMixin, unittest.TestCase):

    CLASS = DecimalType

    def cases__coerce_in(self):
        yield case(given='500', expected=decimal.Decimal('500'))
        yield case(given=' 12.50 ', expected=decimal.Decimal('12.50'))
        yield case(given='-.5', expected=decimal.Decimal('-0.5'))
        yield case(given='1e3', expected=decimal.Decimal('1E+3'))
        yield case(given=500, expected=decimal.Decimal('500'))
        yield case(given=0.1, expected=decimal.Decimal('0.1'))
        yield case(given=decimal.Decimal('3.14'), expected=decimal.Decimal('3.14'))
        yield case(given='NaN', expected=InvalidFormat)
        yield case(given='Infinity', expected=InvalidFormat)
        yield case(given=float('-inf'), expected=InvalidFormat)
        yield case(given='1_000', expected=InvalidFormat)
        yield case(given='12,50', expected=InvalidFormat)
        yield case(given='', expected=InvalidFormat)
        yield case(given='1e9999999999999999999', expected=InvalidFormat)
        yield case(given=True, expected=TypeMismatch)
        yield case(given=None, expected=TypeMismatch)
        yield case(given={'amount': 1}, expected=TypeMismatch)

    def cases__coerce_out(self):
        yield case(given=decimal.Decimal('500'), expected='500')
        yield case(given=decimal.Decimal('12.50'), expected='12.50')
        yield case(given=500, expected='500')
        yield case(given=0.1, expected='0.1')
        yield case(given='12.5', expected='12.5')
        yield case(given='1e9999999999999999999', expected=InvalidFormat)
        yield case(given='abc', expected=InvalidFormat)
        yield case(given=True, expected=TypeMismatch)
        yield case(given=None, expected=TypeMismatch)


@expand
class TestNaNIsRejected(unittest.TestCase):

    # (separate from the `cases__*()` because NaN is not equal to itself)

    @foreach(
        param(IntegerType, 'coerce_in', float('nan')),
        param(DecimalType, 'coerce_in', float('nan')),
        param(DecimalType, 'coerce_in', decimal.Decimal('NaN')),
        param(DecimalType, 'coerce_out', decimal.Decimal('NaN')),
        param(FloatType, 'coerce_in', float('nan')),
        param(FloatType, 'coerce_out', float('nan')),
    )
    def test(self, type_class, method_name, given):
        method = getattr(type_class(), method_name)
        with self.assertRaises(InvalidFormat):
            method(given)


class TestFloatType(TypeTestMixin, unittest.TestCase):

    CLASS = FloatType

    def cases__coerce_in(self):
        yield case(given='1.5', expected=1.5)
        yield case(given=2, expected=2.0)
        yield case(given=decimal.Decimal('0.25'), expected=0.25)
        yield case(given=0.1, expected=0.1)
        yield case(given='1e400', expected=InvalidFormat)  # beyond the float range
        yield case(given='abc', expected=InvalidFormat)
        yield case(given=False, expected=TypeMismatch)

    def cases__coerce_out(self):
        yield case(given=1.5, expected=1.5)
        yield case(given=2, expected=2.0)
        yield case(given=decimal.Decimal('1e400'), expected=InvalidFormat)
        yield case(given='1.5', expected=TypeMismatch)
        yield case(given=True, expected=TypeMismatch)


class TestBooleanType(TypeTestMixin, unittest.TestCase):

    CLASS = BooleanType

    def cases__coerce_in(self):
        yield case(given=True, expected=True)
        yield case(given=False, expected=False)
        yield case(given='true', expected=True)
        yield case(given='false', expected=False)
        yield case(given='True', expected=InvalidFormat)
        yield case(given='yes', expected=InvalidFormat)
        yield case(given='1', expected=InvalidFormat)
        yield case(given='', expected=InvalidFormat)
        yield case(given=1, expected=TypeMismatch)
        yield case(given=0, expected=TypeMismatch)
        yield case(given=None, expected=TypeMismatch)

    def cases__coerce_out(self):
        yield case(given=True, expected=True)
        yield case(given=False, expected=False)
        yield case(given='true', expected=TypeMismatch)
        yield case(given=1, expected=TypeMismatch)


class TestDateType(TypeTestMixin, unittest.TestCase):

    CLASS = DateType

    def cases__coerce_in(self):
        yield case(given='2020-02-29', expected=datetime.date(2020, 2, 29))
        yield case(given='20200229', expected=datetime.date(2020, 2, 29))
        yield case(given=datetime.date(2020, 2, 29), expected=datetime.date(2020, 2, 29))
        yield case(given='2019-02-29', expected=InvalidFormat)
        yield case(given='2020-13-01', expected=InvalidFormat)
        yield case(given='2020-02-29T10:00', expected=InvalidFormat)
        yield case(given=datetime.datetime(2020, 2, 29, 10), expected=TypeMismatch)
        yield case(given=20200229, expected=TypeMismatch)

    def cases__coerce_out(self):
        yield case(given=datetime.date(2020, 2, 29), expected='2020-02-29')
        yield case(given=datetime.datetime(2020, 2, 29, 10), expected=TypeMismatch)
        yield case(given='2020-02-29', expected=TypeMismatch)


class TestDateTimeType(TypeTestMixin, unittest.TestCase):

    CLASS = DateTimeType

    def cases__coerce_in(self):
        yield case(
            given='2020-01-01T10:00:00Z',
            expected=datetime.datetime(2020, 1, 1, 10, 0, 0),
        )
        yield case(
            given='2020-01-01 12:30+02:00',
            expected=datetime.datetime(2020, 1, 1, 10, 30),
        )
        yield case(
            given='2020-01-01T10:00:00.123456',
            expected=datetime.datetime(2020, 1, 1, 10, 0, 0, 123456),
        )
        yield case(
            init_kwargs={'keep_sec_fraction': False},
            given='2020-01-01T10:00:00.123456',
            expected=datetime.datetime(2020, 1, 1, 10, 0, 0),
        )
        yield case(
            given=datetime.datetime(
                2020, 1, 1, 12,
                tzinfo=datetime.timezone(datetime.timedelta(hours=2))),
            expected=datetime.datetime(2020, 1, 1, 10),
        )
        yield case(
            given=datetime.datetime(2020, 1, 1, 10),
            expected=datetime.datetime(2020, 1, 1, 10),
        )
        yield case(given='2020-01-01', expected=InvalidFormat)
        yield case(given='2020-01-01T25:00', expected=InvalidFormat)
        yield case(given='2020-01-01T10:00+01:60', expected=InvalidFormat)
        yield case(given='9999-12-31T24:00', expected=InvalidFormat)
        yield case(given='9999-12-31T23:00-05:00', expected=InvalidFormat)
        yield case(
            given=datetime.datetime(
                9999, 12, 31, 23,
                tzinfo=datetime.timezone(datetime.timedelta(hours=-5))),
            expected=InvalidFormat,
        )
        yield case(given=datetime.date(2020, 1, 1), expected=TypeMismatch)
        yield case(given=1577872800, expected=TypeMismatch)

    def cases__coerce_out(self):
        yield case(
            given=datetime.datetime(2020, 1, 1, 10),
            expected='2020-01-01T10:00:00Z',
        )
        yield case(
            given=datetime.datetime(2020, 1, 1, 10, 0, 0, 500000),
            expected='2020-01-01T10:00:00.500000Z',
        )
        yield case(
            given=datetime.datetime(
                2020, 1, 1, 12,
                tzinfo=datetime.timezone(datetime.timedelta(hours=2))),
            expected='2020-01-01T10:00:00Z',
        )
        yield case(
            given=datetime.datetime(
                1, 1, 1, 2,
                tzinfo=datetime.timezone(datetime.timedelta(hours=5))),
            expected=InvalidFormat,
        )
        yield case(given='2020-01-01T10:00:00Z', expected=TypeMismatch)
        yield case(given=datetime.date(2020, 1, 1), expected=TypeMismatch)


class _Status(enum.Enum):
    NEW = 'NEW'
    CHARGED = 'CHARGED'


class TestEnumType(TypeTestMixin, unittest.TestCase):

    CLASS = EnumType
    INIT_KWARGS_BASE = {'enum_mapping': {'new': 'NEW', 'charged': 'CHARGED'}}

    def cases__coerce_in(self):
        yield case(given='NEW', expected='new')
        yield case(given='CHARGED', expected='charged')
        yield case(given='new', expected=UnknownEnumValue)
        yield case(given='UNKNOWN', expected=UnknownEnumValue)
        yield case(given=['NEW'], expected=UnknownEnumValue)
        yield case(
            init_kwargs={'enum_mapping': _Status},
            given='CHARGED',
            expected=_Status.CHARGED,
        )
        yield case(
            init_kwargs={'enum_mapping': [(1, 100), (2, 200)]},
            given=200,
            expected=2,
        )

    def cases__coerce_out(self):
        yield case(given='new', expected='NEW')
        yield case(given='NEW', expected=UnknownEnumValue)
        yield case(
            init_kwargs={'enum_mapping': _Status},
            given=_Status.NEW,
            expected='NEW',
        )

    def test_enum_mapping_is_obligatory(self):
        with self.assertRaises(InvalidSchemaDefinition):
            EnumType()

    def test_non_bijective_mapping_is_rejected(self):
        with self.assertRaises(InvalidSchemaDefinition):
            EnumType(enum_mapping={'new': 'NEW', 'fresh': 'NEW'})

    def test_enum_mapping_is_converted(self):
        t = EnumType(enum_mapping={'new': 'NEW'})
        self.assertIsInstance(t.enum_mapping, EnumMapping)
        m = EnumMapping({'new': 'NEW'})
        self.assertIs(EnumType(enum_mapping=m).enum_mapping, m)

    def test_error_message_lists_external_values(self):
        t = EnumType(**self.INIT_KWARGS_BASE)
        with self.assertRaises(UnknownEnumValue) as cm:
            t.coerce_in('UNKNOWN')
        self.assertEqual(cm.exception.public_message,
                         '"UNKNOWN" is not one of: "NEW", "CHARGED"')


class TestListOf(TypeTestMixin, unittest.TestCase):

    CLASS = ListOf
    INIT_KWARGS_BASE = {'item_type': 'integer'}

    def cases__coerce_in(self):
        yield case(given=[1, '2', 3.0], expected=[1, 2, 3])
        yield case(given=(1, 2), expected=[1, 2])
        yield case(given=[], expected=[])
        yield case(init_kwargs={'allow_empty': False}, given=[], expected=InvalidFormat)
        yield case(given=[1, 'x'], expected=InvalidFormat)
        yield case(given='12', expected=TypeMismatch)
        yield case(given={1, 2}, expected=TypeMismatch)
        yield case(given=None, expected=TypeMismatch)

    def cases__coerce_out(self):
        yield case(given=[1, 2], expected=[1, 2])
        yield case(given=[1, '2'], expected=TypeMismatch)

    def test_positional_item_type(self):
        t = ListOf(StringType(strip=True))
        self.assertEqual(t.coerce_in([' a ', 'b']), ['a', 'b'])

    def test_item_type_is_obligatory(self):
        with self.assertRaises(InvalidSchemaDefinition):
            ListOf()

    def test_nested_item_types_are_rejected(self):
        with self.assertRaises(InvalidSchemaDefinition):
            ListOf(ListOf('string'))
        with self.assertRaises(InvalidSchemaDefinition):
            ListOf(Many('Phone'))


class TestNestedTypes(unittest.TestCase):

    def test_schema_is_obligatory(self):
        with self.assertRaises(InvalidSchemaDefinition):
            One()
        with self.assertRaises(InvalidSchemaDefinition):
            Many()

    def test_name_references(self):
        t = Many('Phone')
        self.assertTrue(t.is_nested)
        self.assertFalse(t.is_resolved)
        resolved = t.with_schema('Another')
        self.assertIsInstance(resolved, Many)
        self.assertEqual(resolved.schema, 'Another')
        self.assertEqual(t.schema, 'Phone')

    def test_nested_types_are_not_converters(self):
        with self.assertRaises(TypeError):
            One('Address').coerce_in({})


@expand
class TestResolveType(unittest.TestCase):

    @foreach(
        param('string', StringType),
        param('integer', IntegerType),
        param('decimal', DecimalType),
        param('boolean', BooleanType),
        param('float', FloatType),
        param('date', DateType),
        param('datetime', DateTimeType),
        param('any', AnyType),
        param(StringType, StringType),
        param(EnumMapping({'a': 'A'}), EnumType),
        param(_Status, EnumType),
    )
    def test_resolvable(self, type_spec, expected_class):
        self.assertIs(type(resolve_type(type_spec)), expected_class)

    def test_instance_is_returned_unchanged(self):
        t = IntegerType()
        self.assertIs(resolve_type(t), t)

    @foreach(
        param('int'),
        param('String'),
        param(int),
        param(None),
        param(EnumType),
        param(ListOf),
        param(One),
        param({'a': 'A'}),
    )
    def test_unresolvable(self, type_spec):
        with self.assertRaises(InvalidSchemaDefinition):
            resolve_type(type_spec)
