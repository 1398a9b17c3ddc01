# Copyright (c) 2013-2026 NASK. All rights reserved.

"""
.. note::

   A *field* is a declarative, immutable description of one schema
   entry.  It is made once (typically, at import time) and shared by
   all *load*/*dump* calls.
"""

import copy
import keyword

from paramschema.const import NOTHING
from paramschema.exceptions import InvalidSchemaDefinition
from paramschema.types import resolve_type


class Field(object):

    """
    A schema field specification.

    Args/kwargs:
        `name`:
            The *internal* name of the field -- a valid (non-keyword)
            Python identifier.
        `type`:
            The field type: anything accepted by
            :func:`paramschema.types.resolve_type` or a nested type
            (:class:`~paramschema.types.One`,
            :class:`~paramschema.types.Many`).

    Kwargs (keyword-only):
        `key` (default: :obj:`None`):
            The *external* key of the field -- a non-empty :class:`str`;
            if :obj:`None` -- the same as `name`.
        `required` (default: :obj:`None`):
            :obj:`True`, :obj:`False` or :obj:`None` (the latter means:
            inherit the `all_required` flag of the schema).
        `default` (default: :data:`~paramschema.const.NOTHING`):
            The *internal* value to be used when the field is absent
            from the loaded data.  If it is callable, it is called (with
            no arguments) to obtain the value; otherwise a deep copy of
            it is used.  :data:`~paramschema.const.NOTHING` means: no
            default.
        `validators` (default: empty tuple):
            A sequence of callables (see :mod:`paramschema.validators`).
        `load_only` (default: :obj:`False`):
            If true, the field is skipped when dumping.
        `dump_only` (default: :obj:`False`):
            If true, the field is skipped when loading.
        `custom_info` (default: :obj:`None` -- converted to an empty dict):
            A dictionary containing arbitrary data (accessible as the
            :attr:`custom_info` instance attribute).

    Raises:
        :exc:`~paramschema.exceptions.InvalidSchemaDefinition`.

    >>> Field('currency_code', 'string', key='currencyCode')
    Field('currency_code', StringType(), key='currencyCode')
    >>> f = Field('amount', 'decimal', required=True)
    >>> f.key
    'amount'
    >>> f.is_required(all_required=False)
    True
    >>> Field('class', 'string')       # doctest: +ELLIPSIS
    Traceback (most recent call last):
      ...
    paramschema.exceptions.InvalidSchemaDefinition: [schema definition error] ...
    """

    def __init__(self, name, type, *,
                 key=None,
                 required=None,
                 default=NOTHING,
                 validators=(),
                 load_only=False,
                 dump_only=False,
                 custom_info=None):
        self._init_args = (name, type)
        self._init_kwargs = {
            arg_name: value
            for arg_name, value, arg_default in [
                ('key', key, None),
                ('required', required, None),
                ('default', default, NOTHING),
                ('validators', validators, ()),
                ('load_only', load_only, False),
                ('dump_only', dump_only, False),
                ('custom_info', custom_info, None),
            ]
            if value is not arg_default}
        self.name = self._verified_name(name)
        self.type = self._verified_type(type)
        self.key = self._verified_key(name if key is None else key)
        self.required = self._verified_required(required)
        self.default = default
        self.validators = self._verified_validators(validators)
        if load_only and dump_only:
            raise InvalidSchemaDefinition(
                'field {!a}: `load_only` and `dump_only` '
                'cannot be both set'.format(name))
        self.load_only = bool(load_only)
        self.dump_only = bool(dump_only)
        self.custom_info = dict(custom_info or {})

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__qualname__,
            ', '.join(
                ['{!r}'.format(self._init_args[0]), '{!r}'.format(self.type)] +
                ['{}={!r}'.format(key, value)
                 for key, value in sorted(self._init_kwargs.items())]))

    @property
    def is_nested(self):
        return self.type.is_nested

    @property
    def has_default(self):
        return self.default is not NOTHING

    def is_required(self, all_required):
        """
        Get the effective *required* flag (for the given schema flag).
        """
        if self.required is None:
            return bool(all_required)
        return self.required

    def get_default(self):
        """
        Get the default internal value (:data:`NOTHING` if there is none).
        """
        if self.default is NOTHING:
            return NOTHING
        if callable(self.default):
            return self.default()
        return copy.deepcopy(self.default)

    def replace(self, **changes):
        """
        Make a new field -- a copy of this one with the given arguments
        replaced.

        >>> f = Field('x', 'string', required=True)
        >>> f.replace(key='X')
        Field('x', StringType(), key='X', required=True)
        """
        name = changes.pop('name', self._init_args[0])
        type_ = changes.pop('type', self.type)
        kwargs = dict(self._init_kwargs)
        kwargs.update(changes)
        return self.__class__(name, type_, **kwargs)


    #
    # non-public internals

    @staticmethod
    def _verified_name(name):
        if not (isinstance(name, str) and name.isidentifier()) or keyword.iskeyword(name):
            raise InvalidSchemaDefinition(
                'field name must be a valid (non-keyword) Python '
                'identifier (got: {!a})'.format(name))
        return name

    def _verified_type(self, type_spec):
        try:
            return resolve_type(type_spec)
        except InvalidSchemaDefinition as exc:
            raise InvalidSchemaDefinition(
                'field {!a}: {}'.format(self._init_args[0], exc.args[0])) from None

    def _verified_key(self, key):
        if not isinstance(key, str) or not key:
            raise InvalidSchemaDefinition(
                'field {!a}: key must be a non-empty str (got: {!a})'
                .format(self.name, key))
        return key

    def _verified_required(self, required):
        if required is not None and not isinstance(required, bool):
            raise InvalidSchemaDefinition(
                'field {!a}: `required` must be True, False or None '
                '(got: {!a})'.format(self.name, required))
        return required

    def _verified_validators(self, validators):
        if callable(validators):
            validators = (validators,)
        validators = tuple(validators)
        for validator in validators:
            if not callable(validator):
                raise InvalidSchemaDefinition(
                    'field {!a}: validator {!a} is not callable'
                    .format(self.name, validator))
        return validators
