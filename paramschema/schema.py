# Copyright (c) 2013-2026 NASK. All rights reserved.

"""
Schemas (ordered, immutable collections of fields) and the registry of
named schemas.

>>> address = define([
...     Field('street', 'string'),
...     Field('zip_code', 'string', key='zipCode'),
... ], name='Address', all_required=True)
>>> address
<Schema 'Address': street, zip_code>
>>> address.field_names
('street', 'zip_code')
>>> address.fields_by_key['zipCode'].name
'zip_code'
>>> rec = address.record_class(street='Main St.')
>>> rec.street
'Main St.'
>>> rec.zip_code
UNSET
"""

import dataclasses
import types as _py_types
import typing

from pyramid.decorator import reify

from paramschema.const import UNSET
from paramschema.exceptions import (
    CyclicSchemaDefinition,
    DuplicateKey,
    InvalidSchemaDefinition,
)
from paramschema.fields import Field
from paramschema.log_helpers import get_logger


LOGGER = get_logger(__name__)


class Schema(object):

    """
    An ordered, immutable set of :class:`~paramschema.fields.Field`
    instances.

    Args/kwargs:
        `fields`:
            An iterable of :class:`~paramschema.fields.Field` instances
            (their order is the order of keys in loaded/dumped dicts).

    Kwargs (keyword-only):
        `name` (default: :obj:`None`):
            The schema name (used for registry lookups, for the record
            class name and in messages).
        `all_required` (default: :obj:`False`):
            The default *required* flag for fields whose own `required`
            is :obj:`None`.
        `registry` (default: :obj:`None`):
            A :class:`SchemaRegistry` to resolve schema names referred
            to by nested types (`One('Address')` etc.).  Note: typically
            you do not pass it -- use :meth:`SchemaRegistry.define`.

    Raises:
        :exc:`~paramschema.exceptions.DuplicateKey` if two fields share
        an internal name or an external key;
        :exc:`~paramschema.exceptions.InvalidSchemaDefinition` (or its
        subclass :exc:`~paramschema.exceptions.CyclicSchemaDefinition`)
        for other problems.
    """

    def __init__(self, fields, *, name=None, all_required=False, registry=None):
        if name is not None and (not isinstance(name, str) or not name):
            raise InvalidSchemaDefinition(
                'schema name must be a non-empty str (got: {!a})'.format(name))
        self.name = name
        self.all_required = bool(all_required)
        self.fields = tuple(self._iter_resolved_fields(fields, registry))
        self._verify_uniqueness()
        self._verify_no_cycles()
        LOGGER.debug('Schema %s defined (fields: %s)',
                     self._descr, ', '.join(self.field_names))

    def __repr__(self):
        return '<{} {}: {}>'.format(
            self.__class__.__qualname__,
            repr(self.name) if self.name is not None else '(anonymous)',
            ', '.join(self.field_names))

    def __iter__(self):
        return iter(self.fields)

    def __len__(self):
        return len(self.fields)

    def __getitem__(self, field_name):
        return self.fields_by_name[field_name]

    def __contains__(self, field_name):
        return field_name in self.fields_by_name


    #
    # public properties

    @reify
    def field_names(self):
        """Instance property: a tuple of the internal names of the fields."""
        return tuple(f.name for f in self.fields)

    @reify
    def fields_by_name(self):
        """
        Instance property: a read-only mapping: internal names -> fields.
        """
        return _py_types.MappingProxyType({f.name: f for f in self.fields})

    @reify
    def fields_by_key(self):
        """
        Instance property: a read-only mapping: external keys -> fields.
        """
        return _py_types.MappingProxyType({f.key: f for f in self.fields})

    @reify
    def record_class(self):
        """
        Instance property: the record class of the schema.

        It is a *frozen* dataclass with one attribute per field (in the
        order of the fields); each attribute's default value is
        :data:`~paramschema.const.UNSET`.  It is generated once per
        schema (on first access).
        """
        class_name = (self.name if self.name is not None and self.name.isidentifier()
                      else 'Record')
        record_class = dataclasses.make_dataclass(
            class_name,
            [(f.name, typing.Any, dataclasses.field(default=UNSET))
             for f in self.fields],
            frozen=True)
        record_class.__module__ = __name__
        LOGGER.debug('Record class generated for schema %s', self._descr)
        return record_class

    @property
    def nested_schemas(self):
        """A tuple of (distinct) schemas nested directly in this one."""
        seen = []
        for field in self.fields:
            if field.is_nested and not any(s is field.type.schema for s in seen):
                seen.append(field.type.schema)
        return tuple(seen)


    #
    # non-public internals

    @property
    def _descr(self):
        return repr(self.name) if self.name is not None else '(anonymous)'

    def _iter_resolved_fields(self, fields, registry):
        if isinstance(fields, (str, bytes, bytearray)) or not hasattr(fields, '__iter__'):
            raise InvalidSchemaDefinition(
                'schema {}: `fields` should be an iterable of {} '
                'instances (got: {!a})'.format(self._descr, Field.__qualname__, fields))
        for field in fields:
            if not isinstance(field, Field):
                raise InvalidSchemaDefinition(
                    'schema {}: {!a} is not a {} instance'.format(
                        self._descr, field, Field.__qualname__))
            if field.is_nested and not field.type.is_resolved:
                field = field.replace(type=field.type.with_schema(
                    self._resolve_schema_name(field, registry)))
            elif field.is_nested and not isinstance(field.type.schema, Schema):
                raise InvalidSchemaDefinition(
                    'schema {}, field {!a}: {!a} is neither a schema '
                    'nor a schema name'.format(self._descr, field.name, field.type.schema))
            yield field

    def _resolve_schema_name(self, field, registry):
        ref_name = field.type.schema
        if ref_name == self.name:
            raise CyclicSchemaDefinition(
                'schema {}, field {!a}: a schema cannot nest '
                'itself'.format(self._descr, field.name))
        if registry is None:
            raise InvalidSchemaDefinition(
                'schema {}, field {!a}: cannot resolve the schema name {!a} '
                '(no schema registry is in use)'.format(self._descr, field.name, ref_name))
        try:
            return registry.get(ref_name)
        except KeyError:
            raise InvalidSchemaDefinition(
                'schema {}, field {!a}: unknown schema name {!a} (note: '
                'a nested schema must be defined before the schema that '
                'refers to it)'.format(self._descr, field.name, ref_name)) from None

    def _verify_uniqueness(self):
        for attr_name, descr in [('name', 'internal name'), ('key', 'external key')]:
            seen = set()
            for field in self.fields:
                value = getattr(field, attr_name)
                if value in seen:
                    raise DuplicateKey(
                        'schema {}: {} {!a} is used by more than '
                        'one field'.format(self._descr, descr, value))
                seen.add(value)

    def _verify_no_cycles(self):
        # depth-first search over the nesting graph (each schema is
        # visited once; nested schemas were verified when they were made,
        # so a cycle could only lead back to this one)
        visited_ids = {id(self)}
        stack = [self]
        while stack:
            schema = stack.pop()
            for nested in schema.nested_schemas:
                if nested is self:
                    raise CyclicSchemaDefinition(
                        'schema {}: cyclic nesting detected'.format(self._descr))
                if id(nested) not in visited_ids:
                    visited_ids.add(id(nested))
                    stack.append(nested)


def define(fields, *, name=None, all_required=False):
    """
    Define a (named or anonymous) schema.

    Equivalent to: `Schema(fields, name=name, all_required=all_required)`.
    """
    return Schema(fields, name=name, all_required=all_required)


class SchemaRegistry(object):

    """
    A registry of named schemas.

    Nested types of schemas defined with :meth:`define` can refer to
    previously defined schemas by name.

    >>> from paramschema.types import Many
    >>> registry = SchemaRegistry()
    >>> phone = registry.define('Phone', [
    ...     Field('country_code', 'string', key='countryCode'),
    ...     Field('number', 'string'),
    ... ])
    >>> user = registry.define('User', [
    ...     Field('phones', Many('Phone')),
    ... ])
    >>> user['phones'].type.schema is phone
    True
    >>> sorted(registry)
    ['Phone', 'User']
    >>> registry.define('Node', [
    ...     Field('children', Many('Node')),
    ... ])                                   # doctest: +ELLIPSIS
    Traceback (most recent call last):
      ...
    paramschema.exceptions.CyclicSchemaDefinition: [schema definition error] ...
    """

    def __init__(self):
        self._schemas = {}

    def __repr__(self):
        return '<{} {}>'.format(
            self.__class__.__qualname__,
            sorted(self._schemas))

    def __contains__(self, name):
        return name in self._schemas

    def __iter__(self):
        return iter(self._schemas)

    def __len__(self):
        return len(self._schemas)

    def define(self, name, fields, *, all_required=False):
        """
        Define a named schema and register it.

        Raises:
            :exc:`~paramschema.exceptions.InvalidSchemaDefinition` if
            the name is already registered (or for any reason described
            in :class:`Schema`).
        """
        if name in self._schemas:
            raise InvalidSchemaDefinition(
                'schema {!a} is already defined'.format(name))
        schema = Schema(fields, name=name, all_required=all_required, registry=self)
        self._schemas[name] = schema
        LOGGER.debug('Schema %a registered', name)
        return schema

    def get(self, name):
        """
        Get the schema registered under the given name.

        Raises:
            :exc:`~exceptions.KeyError` if there is no such schema.
        """
        return self._schemas[name]
