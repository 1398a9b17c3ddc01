# Copyright (c) 2026 NASK. All rights reserved.

"""
Bijective tables between *internal* symbolic values and their
*external* (wire) representations -- used by
:class:`paramschema.types.EnumType`.
"""

import collections.abc as collections_abc
import enum

from paramschema.encoding_helpers import ascii_str
from paramschema.exceptions import InvalidSchemaDefinition


class EnumMapping(object):

    """
    An immutable, bijective, *internal value* <-> *external value* table.

    The constructor accepts one positional argument, being one of:

    * a mapping: ``{<internal value>: <external value>, ...}``;

    * an iterable of ``(<internal value>, <external value>)`` pairs;

    * an :class:`enum.Enum` subclass -- then the internal values are the
      enum members and the external ones are the values of the members.

    All values must be hashable.  The bijection is verified eagerly:
    if two internal values share an external value (or vice versa)
    :exc:`~paramschema.exceptions.InvalidSchemaDefinition` is raised.

    >>> m = EnumMapping({'new': 'NEW', 'charged': 'CHARGED'})
    >>> m.to_internal('NEW')
    'new'
    >>> m.to_external('charged')
    'CHARGED'
    >>> m.external_values
    ('NEW', 'CHARGED')
    >>> 'new' in m
    True
    >>> EnumMapping([('new', 'NEW'), ('fresh', 'NEW')])   # doctest: +ELLIPSIS
    Traceback (most recent call last):
      ...
    paramschema.exceptions.InvalidSchemaDefinition: [schema definition error] ...

    >>> class Color(enum.Enum):
    ...     RED = 'r'
    ...     GREEN = 'g'
    ...
    >>> colors = EnumMapping(Color)
    >>> colors.to_internal('g')
    <Color.GREEN: 'g'>
    >>> colors.to_external(Color.RED)
    'r'
    """

    def __init__(self, pairs):
        self._source = pairs
        pairs = list(self._iter_pairs(pairs))
        if not pairs:
            raise InvalidSchemaDefinition('an enum mapping cannot be empty')
        internal_to_external = {}
        external_to_internal = {}
        for internal, external in pairs:
            self._verify_hashable(internal, 'internal')
            self._verify_hashable(external, 'external')
            if internal in internal_to_external:
                raise InvalidSchemaDefinition(
                    'enum mapping is not a bijection: internal '
                    'value {!a} is specified more than once'.format(internal))
            if external in external_to_internal:
                raise InvalidSchemaDefinition(
                    'enum mapping is not a bijection: external value {!a} '
                    'is shared by internal values {!a} and {!a}'.format(
                        external,
                        external_to_internal[external],
                        internal))
            internal_to_external[internal] = external
            external_to_internal[external] = internal
        self._internal_to_external = internal_to_external
        self._external_to_internal = external_to_internal

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__qualname__, self._source)

    def __contains__(self, internal):
        try:
            return internal in self._internal_to_external
        except TypeError:
            return False

    def __iter__(self):
        return iter(self._internal_to_external)

    def __len__(self):
        return len(self._internal_to_external)

    @property
    def internal_values(self):
        return tuple(self._internal_to_external)

    @property
    def external_values(self):
        return tuple(self._external_to_internal)

    def items(self):
        """Get a tuple of ``(<internal value>, <external value>)`` pairs."""
        return tuple(self._internal_to_external.items())

    def to_internal(self, external):
        """
        Get the internal value for the given external one.

        Raises :exc:`~exceptions.KeyError` if there is no such value.
        """
        return self._lookup(self._external_to_internal, external)

    def to_external(self, internal):
        """
        Get the external value for the given internal one.

        Raises :exc:`~exceptions.KeyError` if there is no such value.
        """
        return self._lookup(self._internal_to_external, internal)


    #
    # non-public internals

    @staticmethod
    def _iter_pairs(pairs):
        if isinstance(pairs, type) and issubclass(pairs, enum.Enum):
            for member in pairs:
                yield member, member.value
        elif isinstance(pairs, collections_abc.Mapping):
            yield from pairs.items()
        elif isinstance(pairs, (str, bytes, bytearray)):
            raise InvalidSchemaDefinition(
                'enum mapping cannot be made from a str/bytes/bytearray '
                '({!a})'.format(pairs))
        else:
            try:
                items = list(pairs)
            except TypeError:
                raise InvalidSchemaDefinition(
                    'enum mapping cannot be made from {!a} (expected '
                    'a mapping, an iterable of pairs or an Enum '
                    'subclass)'.format(pairs)) from None
            for item in items:
                try:
                    internal, external = item
                except (TypeError, ValueError):
                    raise InvalidSchemaDefinition(
                        '{!a} is not an (<internal value>, <external value>) '
                        'pair'.format(item)) from None
                yield internal, external

    @staticmethod
    def _verify_hashable(value, which):
        try:
            hash(value)
        except TypeError:
            raise InvalidSchemaDefinition(
                'unhashable {} enum value: {}'.format(
                    which, ascii_str(repr(value)))) from None

    @staticmethod
    def _lookup(table, key):
        try:
            return table[key]
        except TypeError:
            # (unhashable keys are just unknown keys)
            raise KeyError(key) from None
