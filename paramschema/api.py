# Copyright (c) 2026 NASK. All rights reserved.

"""
The public entry points: :func:`load`, :func:`dump` and :func:`validate`.

None of them raises for problems with the processed data -- instead,
each of them returns a :class:`Result`:

>>> from paramschema.fields import Field
>>> from paramschema.schema import define
>>> from paramschema.types import EnumType
>>> schema = define([
...     Field('status', EnumType(enum_mapping={'new': 'NEW', 'charged': 'CHARGED'})),
... ], all_required=True)
>>> result = load(schema, {'status': 'NEW'})
>>> result.ok
True
>>> result.value
{'status': 'new'}
>>> dump(schema, result.value).value
{'status': 'NEW'}
>>> result = load(schema, {'status': 'UNKNOWN'})
>>> bool(result)
False
>>> result.error.error_types()
{'status': [<class 'paramschema.exceptions.UnknownEnumValue'>]}
>>> validate(schema, {'status': 'CHARGED'})
Result(value=None)
"""

from paramschema.engine import Dumper, Loader
from paramschema.exceptions import ValidationError
from paramschema.options import DumpOptions, LoadOptions


class Result(object):

    """
    The outcome of a :func:`load`, :func:`dump` or :func:`validate` call.

    Exactly one of the attributes :attr:`value` and :attr:`error` is
    meaningful: if :attr:`error` is :obj:`None` the operation succeeded
    and :attr:`value` is its result (which can be :obj:`None`, e.g.,
    in the case of :func:`validate`); otherwise :attr:`error` is a
    :exc:`~paramschema.exceptions.ValidationError` (and :attr:`value`
    is :obj:`None`).

    The truth value of a :class:`Result` is the same as of its
    :attr:`ok` property.

    >>> from paramschema.exceptions import MissingField
    >>> Result.success(42).unwrap()
    42
    >>> Result.failure(ValidationError({'x': [MissingField()]})).unwrap()
    Traceback (most recent call last):
      ...
    paramschema.exceptions.ValidationError: Problem with field "x" (Missing required field).
    """

    __slots__ = ('value', 'error')

    def __init__(self, value=None, error=None):
        if error is not None and not isinstance(error, ValidationError):
            raise TypeError('{!a} is not a {} instance'.format(
                error, ValidationError.__qualname__))
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value):
        return cls(value=value)

    @classmethod
    def failure(cls, error):
        return cls(error=error)

    def __repr__(self):
        if self.ok:
            return '{}(value={!r})'.format(self.__class__.__qualname__, self.value)
        return '{}(error={!r})'.format(self.__class__.__qualname__, self.error)

    def __eq__(self, other):
        if isinstance(other, Result):
            return (self.value, self.error) == (other.value, other.error)
        return NotImplemented

    __hash__ = None

    def __bool__(self):
        return self.ok

    @property
    def ok(self):
        """Whether the operation succeeded."""
        return self.error is None

    def unwrap(self):
        """
        Get :attr:`value` or -- if the operation failed -- raise
        :attr:`error`.
        """
        if self.error is not None:
            raise self.error
        return self.value


def load(schema, data, options=None, **option_kwargs):
    """
    Load (convert and validate) external data according to the schema.

    Args:
        `schema`:
            A :class:`~paramschema.schema.Schema` instance.
        `data`:
            External data: a mapping (keyed by external keys) or -- if
            the `many` option is set -- a sequence of such mappings.
        `options` (default: :obj:`None`):
            A :class:`~paramschema.options.LoadOptions` instance.

    Any keyword arguments are names and values of
    :class:`~paramschema.options.LoadOptions` attributes (if `options`
    is also given, the keyword arguments override its values).

    Returns:
        A :class:`Result` whose :attr:`~Result.value` is the internal
        representation (a :class:`dict` or a record; or a :class:`list`
        of them).

    Raises:
        :exc:`~exceptions.TypeError` for an unknown option name,
        :exc:`~exceptions.ValueError` for an invalid option value.
    """
    loader = Loader(schema, _get_options(LoadOptions, options, option_kwargs))
    return _call(loader.load, data)


def dump(schema, data, options=None, **option_kwargs):
    """
    Dump (convert) internal data to the external representation.

    Args:
        `schema`:
            A :class:`~paramschema.schema.Schema` instance.
        `data`:
            Internal data: a mapping (keyed by internal names), a
            record or any object with appropriate attributes; or -- if
            the `many` option is set -- a sequence of them.
        `options` (default: :obj:`None`):
            A :class:`~paramschema.options.DumpOptions` instance.

    Keyword arguments: like for :func:`load` (but concerning
    :class:`~paramschema.options.DumpOptions`).

    Returns:
        A :class:`Result` whose :attr:`~Result.value` is the external
        representation (a :class:`dict`, or a :class:`list` of them).
    """
    dumper = Dumper(schema, _get_options(DumpOptions, options, option_kwargs))
    return _call(dumper.dump, data)


def validate(schema, data, options=None, **option_kwargs):
    """
    Check external data against the schema (without assembling any
    output structure).

    Arguments: like for :func:`load`.

    Returns:
        A :class:`Result` whose :attr:`~Result.value` is :obj:`None`.
    """
    loader = Loader(schema, _get_options(LoadOptions, options, option_kwargs),
                    materialize=False)
    return _call(loader.load, data)


def _get_options(options_class, options, option_kwargs):
    if options is None:
        return options_class(**option_kwargs)
    if not isinstance(options, options_class):
        raise TypeError('{!a} is not a {} instance'.format(
            options, options_class.__qualname__))
    if option_kwargs:
        return options.replace(**option_kwargs)
    return options


def _call(func, data):
    try:
        value = func(data)
    except ValidationError as exc:
        return Result.failure(exc)
    return Result.success(value)
