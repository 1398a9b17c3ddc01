# Copyright (c) 2013-2026 NASK. All rights reserved.

"""
The *load* (external -> internal) and *dump* (internal -> external)
machinery.

Both engines walk the schema depth-first, collecting *all* per-field
errors (together with the paths of the offending fields) instead of
stopping at the first one.  If any errors have been collected, a
single :exc:`~paramschema.exceptions.ValidationError` is raised at the
end of the walk.

Paths are built from *external keys* when loading (they refer to the
data the caller has received) and from *internal names* when dumping
(they refer to the data the caller has produced).  Items of sequences
are addressed with ``[<index>]``, e.g.: ``detail.phones[2].countryCode``.

>>> from paramschema.fields import Field
>>> from paramschema.schema import define
>>> from paramschema.types import One
>>> user = define([Field('first_name', 'string', key='firstName')], all_required=True)
>>> detail = define([
...     Field('amount', 'decimal'),
...     Field('user', One(user)),
... ], all_required=True)
>>> Loader(detail).load({'amount': '1.5', 'user': {'firstName': 'John'}})
{'amount': Decimal('1.5'), 'user': {'first_name': 'John'}}
>>> Loader(detail).load({'amount': 'x', 'user': {}})      # doctest: +ELLIPSIS
Traceback (most recent call last):
  ...
paramschema.exceptions.ValidationError: Problem with field "amount" (...). Problem with field "user.firstName" (Missing required field).
>>> Dumper(detail).dump({'amount': Decimal('1.5'), 'user': {'first_name': 'John'}})
{'amount': '1.5', 'user': {'firstName': 'John'}}
"""

import collections.abc as collections_abc
import decimal
from decimal import Decimal  # noqa (used in doctests)

from paramschema.class_helpers import is_seq
from paramschema.const import (
    NOTHING,
    ROOT_PATH,
    UNSET,
)
from paramschema.encoding_helpers import ascii_str
from paramschema.exceptions import (
    FieldValueError,
    InvalidFormat,
    InvalidValue,
    MissingField,
    TypeMismatch,
    UnknownField,
    ValidationError,
)
from paramschema.log_helpers import get_logger
from paramschema.options import (
    DumpOptions,
    LoadOptions,
    UNKNOWN_ERROR,
)
from paramschema.types import (
    ListOf,
    Many,
    One,
)


LOGGER = get_logger(__name__)


# internal sentinel object (`None` is a legitimate value)
_FAILED = object()


def join_path(prefix, name):
    """
    >>> join_path('', 'detail')
    'detail'
    >>> join_path('detail', 'amount')
    'detail.amount'
    >>> join_path('[3]', 'amount')
    '[3].amount'
    """
    if prefix == ROOT_PATH:
        return name
    return '{}.{}'.format(prefix, name)


def index_path(prefix, index):
    """
    >>> index_path('detail.phones', 2)
    'detail.phones[2]'
    >>> index_path('', 0)
    '[0]'
    """
    return '{}[{}]'.format(prefix, index)


class _ErrorCollector(object):

    def __init__(self):
        self.errors = {}

    def __bool__(self):
        return bool(self.errors)

    def __len__(self):
        return len(self.errors)

    def add(self, path, exc):
        assert isinstance(exc, FieldValueError)
        self.errors.setdefault(path, []).append(exc)

    def raise_if_any(self, operation_descr):
        if self.errors:
            LOGGER.debug('%s failed: %d invalid field path(s)',
                         operation_descr, len(self.errors))
            raise ValidationError(self.errors)


def _mapping_type_mismatch(value):
    return TypeMismatch(public_message=(
        'Expected a mapping, got a value of type "{}"'.format(
            ascii_str(type(value).__name__))))


def _sequence_type_mismatch(value):
    return TypeMismatch(public_message=(
        'Expected a list, got a value of type "{}"'.format(
            ascii_str(type(value).__name__))))



class Loader(object):

    """
    The *load* engine: converts external data into the internal
    representation (a :class:`dict` or, if the `struct` option is set,
    a record; or a :class:`list` of them if the `many` option is set).

    Args/kwargs:
        `schema`:
            A :class:`~paramschema.schema.Schema` instance.
        `options` (default: :obj:`None`):
            A :class:`~paramschema.options.LoadOptions` instance
            (:obj:`None` means: default options).

    Kwargs:
        `materialize` (default: :obj:`True`):
            If false, the whole traversal (including coercion and
            validation of all values) is performed but no output
            structure is assembled (:meth:`load` returns :obj:`None`).
    """

    def __init__(self, schema, options=None, *, materialize=True):
        self.schema = schema
        self.options = options if options is not None else LoadOptions()
        self.materialize = materialize

    def load(self, data):
        """
        Load the given external data.

        Raises:
            :exc:`~paramschema.exceptions.ValidationError`.
        """
        errors = _ErrorCollector()
        if self.options.many:
            if is_seq(data):
                result = [
                    self._load_mapping(self.schema, item, index_path(ROOT_PATH, i), ROOT_PATH, errors)
                    for i, item in enumerate(data)]
            else:
                errors.add(ROOT_PATH, _sequence_type_mismatch(data))
                result = None
        else:
            result = self._load_mapping(self.schema, data, ROOT_PATH, ROOT_PATH, errors)
        errors.raise_if_any('Load' if self.materialize else 'Validation')
        return result if self.materialize else None


    #
    # non-public internals

    # `path` -- external (for error reports): with external keys and indexes
    # `ipath` -- internal (for options): with internal names and without indexes

    def _load_mapping(self, schema, data, path, ipath, errors):
        if not isinstance(data, collections_abc.Mapping):
            errors.add(path, _mapping_type_mismatch(data))
            return _FAILED
        output = {}
        for field in schema.fields:
            if field.dump_only:
                continue
            field_ipath = join_path(ipath, field.name)
            if self.options.is_excluded(field_ipath):
                continue
            field_path = join_path(path, field.key)
            raw = data.get(field.key, UNSET)
            if raw is None and self.options.ignore_nil:
                raw = UNSET
            if raw is UNSET:
                default = field.get_default()
                if default is not NOTHING:
                    output[field.name] = default
                elif self._is_required(schema, field, field_ipath):
                    errors.add(field_path, MissingField())
            elif raw is None:
                if self._is_required(schema, field, field_ipath):
                    errors.add(field_path, MissingField())
                else:
                    output[field.name] = None
            else:
                value = self._load_value(field, raw, field_path, field_ipath, errors)
                if value is not _FAILED:
                    output[field.name] = value
        if self.options.unknown == UNKNOWN_ERROR:
            self._check_unknown_keys(schema, data, path, errors)
        if not self.materialize:
            return None
        if self.options.struct:
            return self._make_record(schema, output)
        return output

    def _load_value(self, field, raw, path, ipath, errors):
        field_type = field.type
        if isinstance(field_type, One):
            value = self._load_mapping(field_type.schema, raw, path, ipath, errors)
        elif isinstance(field_type, Many):
            value = self._load_many(field_type, raw, path, ipath, errors)
        elif isinstance(field_type, ListOf):
            value = self._load_list_of(field_type, raw, path, errors)
        else:
            try:
                value = field_type.coerce_in(raw)
            except FieldValueError as exc:
                errors.add(path, exc)
                return _FAILED
        if value is _FAILED:
            return _FAILED
        if field.validators and not field.is_nested:
            if not self._run_validators(field, value, path, errors):
                return _FAILED
        return value

    def _load_many(self, field_type, raw, path, ipath, errors):
        if not is_seq(raw):
            errors.add(path, _sequence_type_mismatch(raw))
            return _FAILED
        if not field_type.allow_empty and not raw:
            errors.add(path, InvalidFormat(public_message='The list is empty'))
            return _FAILED
        items = [self._load_mapping(field_type.schema, item, index_path(path, i), ipath, errors)
                 for i, item in enumerate(raw)]
        if any(item is _FAILED for item in items):
            return _FAILED
        return items

    def _load_list_of(self, field_type, raw, path, errors):
        try:
            field_type.verify_sequence(raw)
        except FieldValueError as exc:
            errors.add(path, exc)
            return _FAILED
        items = []
        ok = True
        for i, item in enumerate(raw):
            try:
                items.append(field_type.item_type.coerce_in(item))
            except FieldValueError as exc:
                errors.add(index_path(path, i), exc)
                ok = False
        return items if ok else _FAILED

    def _run_validators(self, field, value, path, errors):
        ok = True
        for validator in field.validators:
            try:
                verdict = validator(value)
            except FieldValueError as exc:
                errors.add(path, exc)
                ok = False
            else:
                if verdict is False:
                    errors.add(path, InvalidValue())
                    ok = False
        return ok

    def _is_required(self, schema, field, ipath):
        override = self.options.required_override(ipath)
        if override is not None:
            return override
        return field.is_required(schema.all_required)

    @staticmethod
    def _check_unknown_keys(schema, data, path, errors):
        fields_by_key = schema.fields_by_key
        for key in data:
            field = fields_by_key.get(key) if isinstance(key, str) else None
            if field is None or field.dump_only:
                errors.add(join_path(path, ascii_str(key)), UnknownField())

    @staticmethod
    def _make_record(schema, output):
        return schema.record_class(**output)



class Dumper(object):

    """
    The *dump* engine: converts internal data (a mapping, a record or
    any object with appropriate attributes; or a sequence of them if the
    `many` option is set) into the external representation (a
    :class:`dict`, or a :class:`list` of dicts).

    Args/kwargs:
        `schema`:
            A :class:`~paramschema.schema.Schema` instance.
        `options` (default: :obj:`None`):
            A :class:`~paramschema.options.DumpOptions` instance
            (:obj:`None` means: default options).

    Fields whose values are absent (or are
    :data:`~paramschema.const.UNSET`) are omitted from the output --
    unless they are required; then
    :exc:`~paramschema.exceptions.MissingField` is reported.
    """

    # types whose instances are never accepted as objects to be dumped
    _NON_OBJECT_TYPES = (str, bytes, bytearray, int, float, decimal.Decimal, type(None))

    def __init__(self, schema, options=None):
        self.schema = schema
        self.options = options if options is not None else DumpOptions()

    def dump(self, data):
        """
        Dump the given internal data.

        Raises:
            :exc:`~paramschema.exceptions.ValidationError`.
        """
        errors = _ErrorCollector()
        if self.options.many:
            if is_seq(data):
                result = [
                    self._dump_object(self.schema, item, index_path(ROOT_PATH, i), ROOT_PATH, errors)
                    for i, item in enumerate(data)]
            else:
                errors.add(ROOT_PATH, _sequence_type_mismatch(data))
                result = None
        else:
            result = self._dump_object(self.schema, data, ROOT_PATH, ROOT_PATH, errors)
        errors.raise_if_any('Dump')
        return result


    #
    # non-public internals

    # `path` -- for error reports: with internal names and indexes
    # `ipath` -- for options: with internal names and without indexes

    def _dump_object(self, schema, obj, path, ipath, errors):
        getter = self._get_value_getter(obj)
        if getter is None:
            errors.add(path, _mapping_type_mismatch(obj))
            return _FAILED
        output = {}
        for field in schema.fields:
            if field.load_only:
                continue
            field_ipath = join_path(ipath, field.name)
            if self.options.is_excluded(field_ipath):
                continue
            field_path = join_path(path, field.name)
            value = getter(field.name)
            if value is None and self.options.ignore_nil:
                continue
            if value is UNSET or value is None:
                if field.is_required(schema.all_required):
                    errors.add(field_path, MissingField())
                elif value is None:
                    output[field.key] = None
                continue
            raw = self._dump_value(field, value, field_path, field_ipath, errors)
            if raw is not _FAILED:
                output[field.key] = raw
        return output

    def _get_value_getter(self, obj):
        if isinstance(obj, collections_abc.Mapping):
            return lambda name: obj.get(name, UNSET)
        if isinstance(obj, self._NON_OBJECT_TYPES) or is_seq(obj):
            return None
        return lambda name: getattr(obj, name, UNSET)

    def _dump_value(self, field, value, path, ipath, errors):
        field_type = field.type
        if isinstance(field_type, One):
            return self._dump_object(field_type.schema, value, path, ipath, errors)
        if isinstance(field_type, Many):
            if not is_seq(value):
                errors.add(path, _sequence_type_mismatch(value))
                return _FAILED
            return [self._dump_object(field_type.schema, item, index_path(path, i), ipath, errors)
                    for i, item in enumerate(value)]
        if isinstance(field_type, ListOf):
            try:
                field_type.verify_sequence(value)
            except FieldValueError as exc:
                errors.add(path, exc)
                return _FAILED
            items = []
            for i, item in enumerate(value):
                try:
                    items.append(field_type.item_type.coerce_out(item))
                except FieldValueError as exc:
                    errors.add(index_path(path, i), exc)
            return items
        try:
            return field_type.coerce_out(value)
        except FieldValueError as exc:
            errors.add(path, exc)
            return _FAILED
