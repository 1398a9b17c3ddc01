# Copyright (c) 2026 NASK. All rights reserved.

"""
Per-call options of the *load*/*validate* and *dump* operations.

>>> opts = LoadOptions(unknown='error', exclude=['detail.user'])
>>> opts.is_excluded('detail.user')
True
>>> opts.is_excluded('detail.user.first_name')
True
>>> opts.is_excluded('detail.amount')
False
>>> LoadOptions(unknown='fail')                    # doctest: +ELLIPSIS
Traceback (most recent call last):
  ...
ValueError: `unknown` must be one of: 'exclude', 'error' (got: 'fail')
>>> LoadOptions(no_such_option=True)               # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
  ...
TypeError: ...
"""

import dataclasses
import types as _py_types
import typing

from paramschema.config import Config
from paramschema.const import CONFIG_SECTION_NAME


UNKNOWN_EXCLUDE = 'exclude'
UNKNOWN_ERROR = 'error'
UNKNOWN_CHOICES = (UNKNOWN_EXCLUDE, UNKNOWN_ERROR)

PARAMSCHEMA_CONFIG_SPEC = '''
    [{section}]
    struct = false :: bool
    unknown = exclude
    ignore_nil = false :: bool
    exclude = :: list_of_str
    required = None :: py
'''.format(section=CONFIG_SECTION_NAME)


class _BaseOptions(object):

    # (to be set in subclasses)
    _config_opt_names = ()

    @classmethod
    def from_config_section(cls, config_section, **overrides):
        """
        Make options from the given config section (see:
        :data:`PARAMSCHEMA_CONFIG_SPEC`); any keyword arguments
        override the section's values.

        Options that are irrelevant to the particular options class are
        ignored (e.g., `unknown` in the case of :class:`DumpOptions`).
        """
        kwargs = {opt_name: config_section[opt_name]
                  for opt_name in cls._config_opt_names
                  if opt_name in config_section}
        kwargs.update(overrides)
        return cls(**kwargs)

    @classmethod
    def from_config_files(cls, *paths, **overrides):
        """
        Make options from the `[paramschema]` section of the given
        configuration files (default values are used for everything not
        specified in the files).
        """
        config = Config(PARAMSCHEMA_CONFIG_SPEC, paths=paths)
        return cls.from_config_section(config[CONFIG_SECTION_NAME], **overrides)

    def replace(self, **changes):
        """Get a copy of the options with the given values replaced."""
        return dataclasses.replace(self, **changes)

    def is_excluded(self, path):
        """
        Whether the given (internal, dotted) field path is excluded
        (directly or because some ancestor path is excluded).
        """
        if not self.exclude:
            return False
        if path in self.exclude:
            return True
        return any(path.startswith(excluded + '.') for excluded in self.exclude)

    def _normalize_exclude(self):
        exclude = self.exclude
        if isinstance(exclude, str):
            exclude = [exclude]
        try:
            exclude = frozenset(exclude)
        except TypeError:
            raise ValueError('`exclude` must be an iterable of '
                             'dotted paths (got: {!a})'.format(self.exclude)) from None
        if not all(isinstance(p, str) and p for p in exclude):
            raise ValueError('`exclude` must contain only non-empty '
                             'str paths (got: {!a})'.format(self.exclude))
        object.__setattr__(self, 'exclude', exclude)

    def _verify_bool_options(self, *opt_names):
        for opt_name in opt_names:
            value = getattr(self, opt_name)
            if not isinstance(value, bool):
                raise ValueError('`{}` must be a bool (got: {!a})'.format(opt_name, value))


@dataclasses.dataclass(frozen=True)
class LoadOptions(_BaseOptions):

    """
    Options of :func:`~paramschema.api.load` and
    :func:`~paramschema.api.validate`.

    Attributes:
        `struct` (default: :obj:`False`):
            If true, the result is a record (an instance of the schema's
            :attr:`~paramschema.schema.Schema.record_class`) instead of
            a :class:`dict`.
        `required` (default: :obj:`None`):
            The *required* override: :obj:`None` (no override), a
            :class:`bool` (applies to all fields) or a mapping of
            internal dotted field paths (such as
            ``'detail.user.first_name'``; note: no list indexes) to
            :class:`bool` values.  Precedence: per-path > global >
            field's own flag > schema's `all_required`.
        `unknown` (default: ``'exclude'``):
            What to do with keys that are not defined in the schema:
            ``'exclude'`` -- ignore them; ``'error'`` -- report each of
            them as :exc:`~paramschema.exceptions.UnknownField`.
        `exclude` (default: empty :class:`frozenset`):
            Internal dotted field paths to skip.
        `ignore_nil` (default: :obj:`False`):
            If true, :obj:`None` values are treated as absent.
        `many` (default: :obj:`False`):
            If true, the input is a sequence of mappings (and the result
            is a :class:`list`).
    """

    struct: bool = False
    required: typing.Any = None
    unknown: str = UNKNOWN_EXCLUDE
    exclude: typing.AbstractSet[str] = frozenset()
    ignore_nil: bool = False
    many: bool = False

    _config_opt_names = ('struct', 'required', 'unknown', 'exclude', 'ignore_nil')

    def __post_init__(self):
        self._verify_bool_options('struct', 'ignore_nil', 'many')
        if self.unknown not in UNKNOWN_CHOICES:
            raise ValueError('`unknown` must be one of: {} (got: {!a})'.format(
                ', '.join(map(repr, UNKNOWN_CHOICES)),
                self.unknown))
        self._normalize_exclude()
        self._normalize_required()

    def required_override(self, path):
        """
        Get the *required* override for the given (internal, dotted)
        field path: :obj:`True`, :obj:`False` or :obj:`None` (no
        override).

        >>> opts = LoadOptions(required={'detail.amount': False})
        >>> opts.required_override('detail.amount') is False
        True
        >>> opts.required_override('detail') is None
        True
        >>> LoadOptions(required=True).required_override('x')
        True
        """
        if isinstance(self.required, bool) or self.required is None:
            return self.required
        return self.required.get(path)

    def _normalize_required(self):
        required = self.required
        if required is None or isinstance(required, bool):
            return
        try:
            required = dict(required)
        except (TypeError, ValueError):
            raise ValueError('`required` must be None, a bool or a mapping of '
                             'dotted paths to bools (got: {!a})'.format(self.required)) from None
        for path, flag in required.items():
            if not (isinstance(path, str) and path) or not isinstance(flag, bool):
                raise ValueError('`required` mapping must map non-empty str paths '
                                 'to bools (got: {!a}: {!a})'.format(path, flag))
        object.__setattr__(self, 'required', _py_types.MappingProxyType(required))


@dataclasses.dataclass(frozen=True)
class DumpOptions(_BaseOptions):

    """
    Options of :func:`~paramschema.api.dump`.

    Attributes:
        `exclude` (default: empty :class:`frozenset`):
            Internal dotted field paths to skip.
        `ignore_nil` (default: :obj:`False`):
            If true, :obj:`None` values are not written to the output.
        `many` (default: :obj:`False`):
            If true, the input is a sequence of mappings/records (and
            the result is a :class:`list`).
    """

    exclude: typing.AbstractSet[str] = frozenset()
    ignore_nil: bool = False
    many: bool = False

    _config_opt_names = ('exclude', 'ignore_nil')

    def __post_init__(self):
        self._verify_bool_options('ignore_nil', 'many')
        self._normalize_exclude()
