# Copyright (c) 2014-2026 NASK. All rights reserved.

import unittest
from unittest.mock import sentinel as sen

from unittest_expander import (
    expand,
    foreach,
    param,
)

from paramschema.const import NOTHING
from paramschema.exceptions import InvalidSchemaDefinition
from paramschema.fields import Field
from paramschema.types import (
    DecimalType,
    EnumType,
    IntegerType,
    Many,
    One,
    StringType,
)
from paramschema.validators import Length
from paramschema.tests._generic_helpers import TestCaseMixin


@expand
class TestField(TestCaseMixin, unittest.TestCase):

    def test_defaults(self):
        f = Field('currency_code', 'string')
        self.assertEqual(f.name, 'currency_code')
        self.assertEqual(f.key, 'currency_code')
        self.assertIsInstance(f.type, StringType)
        self.assertIsNone(f.required)
        self.assertIs(f.default, NOTHING)
        self.assertFalse(f.has_default)
        self.assertEqualIncludingTypes(f.validators, ())
        self.assertIs(f.load_only, False)
        self.assertIs(f.dump_only, False)
        self.assertEqualIncludingTypes(f.custom_info, {})
        self.assertFalse(f.is_nested)

    def test_all_arguments(self):
        validator = Length(max=3)
        f = Field('currency_code', StringType(strip=True),
                  key='currencyCode',
                  required=True,
                  default='USD',
                  validators=[validator],
                  load_only=True,
                  custom_info={'doc': sen.doc})
        self.assertEqual(f.key, 'currencyCode')
        self.assertIs(f.required, True)
        self.assertEqual(f.default, 'USD')
        self.assertTrue(f.has_default)
        self.assertEqualIncludingTypes(f.validators, (validator,))
        self.assertIs(f.load_only, True)
        self.assertEqualIncludingTypes(f.custom_info, {'doc': sen.doc})

    def test_single_callable_validator(self):
        f = Field('x', 'integer', validators=bool)
        self.assertEqual(f.validators, (bool,))

    @foreach(
        param(None, False, False),
        param(None, True, True),
        param(True, False, True),
        param(False, True, False),
    )
    def test_is_required(self, required, all_required, expected):
        f = Field('x', 'string', required=required)
        self.assertIs(f.is_required(all_required), expected)

    def test_get_default(self):
        self.assertIs(Field('x', 'string').get_default(), NOTHING)
        self.assertEqual(Field('x', 'string', default='a').get_default(), 'a')
        self.assertEqual(Field('x', 'string', default=lambda: 'b').get_default(), 'b')
        f = Field('x', 'any', default={'a': []})
        first = f.get_default()
        first['a'].append(1)
        self.assertEqual(f.get_default(), {'a': []})

    def test_none_as_default(self):
        f = Field('x', 'string', default=None)
        self.assertTrue(f.has_default)
        self.assertIsNone(f.get_default())

    def test_nested(self):
        f = Field('phones', Many('Phone'))
        self.assertTrue(f.is_nested)
        self.assertIsInstance(f.type, Many)

    def test_enum_type_given_as_mapping(self):
        from paramschema.enums import EnumMapping
        f = Field('status', EnumMapping({'new': 'NEW'}))
        self.assertIsInstance(f.type, EnumType)

    @foreach(
        param(name='class').label('keyword'),
        param(name='first-name').label('not identifier'),
        param(name='').label('empty name'),
        param(name=42).label('non-str name'),
        param(type_spec='str').label('unknown type name'),
        param(type_spec=One).label('nested type class without schema'),
        param(key='').label('empty key'),
        param(key=b'key').label('bytes key'),
        param(required='yes').label('bad required'),
        param(required=1).label('int 1 as required'),
        param(required=0).label('int 0 as required'),
        param(validators=[42]).label('non-callable validator'),
        param(load_only=True, dump_only=True).label('load_only + dump_only'),
        param(type_spec=EnumType).label('enum type without mapping'),
        param(type_spec={'new': 'NEW', 'fresh': 'NEW'}).label('dict as type'),
    )
    def test_invalid_definitions(self, name='x', type_spec='string', *,
                                 label, context_targets, **kwargs):
        with self.assertRaises(InvalidSchemaDefinition):
            Field(name, type_spec, **kwargs)

    def test_repr(self):
        self.assertEqual(
            repr(Field('amount', DecimalType(), key='Amount', required=True)),
            "Field('amount', DecimalType(), key='Amount', required=True)")
        self.assertEqual(repr(Field('n', 'integer')), "Field('n', IntegerType())")

    def test_replace(self):
        f = Field('amount', 'decimal', key='Amount', required=True)
        f2 = f.replace(key='amt', required=False)
        self.assertIsNot(f2, f)
        self.assertEqual(f2.name, 'amount')
        self.assertEqual(f2.key, 'amt')
        self.assertIs(f2.required, False)
        self.assertIs(f2.type, f.type)
        # the original one is intact
        self.assertEqual(f.key, 'Amount')
        self.assertIs(f.required, True)

    def test_replace_type(self):
        f = Field('user', One('User'), key='theUser')
        f2 = f.replace(type=One('Another'))
        self.assertEqual(f2.type.schema, 'Another')
        self.assertEqual(f2.key, 'theUser')
