# Copyright (c) 2014-2026 NASK. All rights reserved.

import unittest

from unittest_expander import (
    expand,
    foreach,
    param,
)

from paramschema.exceptions import (
    CyclicSchemaDefinition,
    DuplicateKey,
    FieldValueError,
    InvalidFormat,
    InvalidSchemaDefinition,
    InvalidValue,
    MissingField,
    TypeMismatch,
    UnknownEnumValue,
    UnknownField,
    ValidationError,
)


@expand
class TestFieldValueErrors(unittest.TestCase):

    @foreach(
        param(FieldValueError, 'Invalid value.'),
        param(MissingField, 'Missing required field.'),
        param(TypeMismatch, 'Unexpected type of value.'),
        param(InvalidFormat, 'Invalid format of value.'),
        param(UnknownEnumValue, 'Unknown enum value.'),
        param(UnknownField, 'Unknown field.'),
        param(InvalidValue, 'Invalid value.'),
    )
    def test_default_public_messages(self, exc_class, expected_public_message):
        exc = exc_class()
        self.assertIsInstance(exc, FieldValueError)
        self.assertIsInstance(exc, ValueError)
        self.assertEqual(exc.public_message, expected_public_message)
        self.assertEqual(str(exc), expected_public_message)

    def test_custom_public_message(self):
        exc = InvalidFormat('some internal detail', public_message=b'Z\xc5\x82y format.')
        self.assertEqual(exc.public_message, 'Zły format.')
        self.assertEqual(exc.args, ('some internal detail',))
        self.assertEqual(
            repr(exc),
            "<InvalidFormat: args=('some internal detail',); public_message='Zły format.'>")

    def test_illegal_kwargs(self):
        with self.assertRaises(TypeError):
            MissingField(spam='ham')


@expand
class TestSchemaDefinitionErrors(unittest.TestCase):

    @foreach(
        param(InvalidSchemaDefinition),
        param(DuplicateKey),
        param(CyclicSchemaDefinition),
    )
    def test_str(self, exc_class):
        exc = exc_class('something is wrong')
        self.assertIsInstance(exc, InvalidSchemaDefinition)
        self.assertNotIsInstance(exc, FieldValueError)
        self.assertEqual(str(exc), '[schema definition error] something is wrong')


class TestValidationError(unittest.TestCase):

    def setUp(self):
        self.missing = MissingField()
        self.type_mismatch = TypeMismatch(public_message='Expected a list, got "str".')
        self.invalid_value = InvalidValue(public_message='Length of "" is lesser than 1.')
        self.exc = ValidationError([
            ('detail.phones', [self.type_mismatch]),
            ('status', [self.missing, self.invalid_value]),
        ])

    def test_errors(self):
        self.assertEqual(self.exc.errors, {
            'detail.phones': [self.type_mismatch],
            'status': [self.missing, self.invalid_value],
        })
        self.assertEqual(self.exc.paths, ['detail.phones', 'status'])
        self.assertEqual(self.exc.args, (self.exc.errors,))

    def test_errors_are_copied(self):
        exc_list = [self.missing]
        exc = ValidationError({'a': exc_list})
        exc_list.append(self.invalid_value)
        self.assertEqual(exc.errors, {'a': [self.missing]})

    def test_messages(self):
        self.assertEqual(self.exc.messages(), {
            'detail.phones': ['Expected a list, got "str".'],
            'status': ['Missing required field.', 'Length of "" is lesser than 1.'],
        })

    def test_error_types(self):
        self.assertEqual(self.exc.error_types(), {
            'detail.phones': [TypeMismatch],
            'status': [MissingField, InvalidValue],
        })

    def test_public_message(self):
        self.assertEqual(
            self.exc.public_message,
            'Problem with field "detail.phones" (Expected a list, got "str"). '
            'Problem with field "status" (Missing required field). '
            'Problem with field "status" (Length of "" is lesser than 1).')
        self.assertEqual(str(self.exc), self.exc.public_message)

    def test_root_path_problem(self):
        exc = ValidationError({'': [TypeMismatch(public_message='Expected a mapping.')]})
        self.assertEqual(exc.public_message, 'Problem with the data (Expected a mapping).')

    def test_explicit_public_message(self):
        exc = ValidationError({'a': [self.missing]}, public_message='Bad request.')
        self.assertEqual(str(exc), 'Bad request.')
        self.assertEqual(exc.messages(), {'a': ['Missing required field.']})
