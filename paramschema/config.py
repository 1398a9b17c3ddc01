# Copyright (c) 2013-2026 NASK. All rights reserved.

"""
Reading process-wide defaults from INI-like configuration files.

A *config spec* declares the legal sections and options, together with
their default values and *converters* (names of functions that convert
the raw option strings into Python objects).  Its syntax is::

    [section_name]
    opt_name = default value :: converter_name
    other_opt_name :: converter_name

-- an option with no default value (no ``=``) is *required*; a missing
``:: converter_name`` part means the ``str`` converter.

>>> config = Config('''
...     [my_section]
...     some_flag = false :: bool
...     some_names = :: list_of_str
...     other = spam
... ''', strings=['''
...     [my_section]
...     some_flag = yes
...     some_names = foo, bar,
... '''])
>>> config['my_section'] == {'some_flag': True, 'some_names': ['foo', 'bar'], 'other': 'spam'}
True
>>> config['my_section'].sect_name
'my_section'
>>> config['no_such_section']                        # doctest: +ELLIPSIS
Traceback (most recent call last):
  ...
paramschema.config.NoConfigSectionError: [configuration-related error] no config section `no_such_section`
"""

import ast
import configparser
import json
import textwrap

from paramschema.class_helpers import get_class_name
from paramschema.encoding_helpers import ascii_str, as_unicode, str_to_bool
from paramschema.log_helpers import get_logger


LOGGER = get_logger(__name__)



class ConfigError(Exception):

    """
    A generic, `Config`-related, exception class.

    >>> print(ConfigError('Some Message'))
    [configuration-related error] Some Message
    """

    def __str__(self):
        return '[configuration-related error] ' + super().__str__()



class _KeyErrorSubclassMixin(KeyError):  # a non-public helper

    def __str__(self):
        # skipping the `KeyError`'s implementation of `__str__()` (which
        # applies `repr()` to the sole argument)
        return super(KeyError, self).__str__()



class NoConfigSectionError(_KeyErrorSubclassMixin, ConfigError):

    """
    Raised by `Config.__getitem__()` when the specified section is missing.

    >>> exc = NoConfigSectionError('some_sect')
    >>> isinstance(exc, ConfigError) and isinstance(exc, KeyError)
    True
    >>> print(exc)
    [configuration-related error] no config section `some_sect`
    >>> exc.sect_name
    'some_sect'
    """

    def __init__(self, sect_name=None, *args):
        sect_ref = f'`{sect_name}`' if sect_name is not None else '<unspecified>'
        msg = f'no config section {sect_ref}'
        super().__init__(msg, *args)
        self.sect_name = sect_name



class NoConfigOptionError(_KeyErrorSubclassMixin, ConfigError):

    """
    Raised by `ConfigSection.__getitem__()` when the specified option is missing.

    >>> exc = NoConfigOptionError('mysect', 'myopt')
    >>> isinstance(exc, ConfigError) and isinstance(exc, KeyError)
    True
    >>> print(exc)
    [configuration-related error] no config option `myopt` in section `mysect`
    >>> exc.sect_name
    'mysect'
    >>> exc.opt_name
    'myopt'
    """

    def __init__(self, sect_name=None, opt_name=None, *args):
        sect_ref = f'`{sect_name}`' if sect_name is not None else '<unspecified>'
        opt_ref = f'`{opt_name}`' if opt_name is not None else '<unspecified>'
        msg = f'no config option {opt_ref} in section {sect_ref}'
        super().__init__(msg, *args)
        self.sect_name = sect_name
        self.opt_name = opt_name



def make_list_converter(item_converter, name=None, delimiter=','):
    """
    Make a converter of delimiter-separated lists (a trailing delimiter
    is allowed).

    >>> conv = make_list_converter(int)
    >>> conv(' 1, 2,3, ')
    [1, 2, 3]
    >>> conv('')
    []
    """

    def converter(s):
        s = s.strip()
        if s.endswith(delimiter):
            # remove trailing delimiter
            s = s[:-len(delimiter)].rstrip()
        if s:
            return [item_converter(item.strip())
                    for item in s.split(delimiter)]
        else:
            return []

    if name is None:
        base_name = getattr(item_converter, '__name__', get_class_name(item_converter))
        name = '__{0}__list__converter'.format(base_name)
    converter.__name__ = name
    converter.item_converter = item_converter
    converter.delimiter = delimiter
    return converter


def py_literal(s):
    """
    Convert the given string using :func:`ast.literal_eval`.

    >>> py_literal(" {'detail.amount': False} ")
    {'detail.amount': False}
    """
    return ast.literal_eval(as_unicode(s).strip())



class Config(dict):

    """
    A :class:`dict` that maps section names to :class:`ConfigSection`
    instances, made from a *config spec* (see the module docs) and the
    given configuration files and/or strings.

    Args:
        `config_spec`:
            The config spec (a :class:`str`).

    Kwargs (keyword-only):
        `paths` (default: empty tuple):
            Paths of configuration files to read (in the given order;
            later ones override earlier ones).  Nonexistent files are
            skipped (with a DEBUG-level log message).
        `strings` (default: empty tuple):
            Configuration strings to read (after the files).
        `custom_converters` (default: :obj:`None`):
            A mapping of additional converters (name -> callable) that
            extend/override :attr:`BASIC_CONVERTERS`.

    Sections that are present in the files/strings but not in the config
    spec are ignored.  Options that are not declared in a spec section
    are illegal.

    Raises:
        :exc:`ConfigError` (aggregating all problems found: missing
        required options, illegal options, conversion errors).
    """

    DEFAULT_CONVERTER_SPEC = 'str'
    BASIC_CONVERTERS = {
        'str': str,
        'bool': str_to_bool,
        'int': int,
        'float': float,
        'list_of_str': make_list_converter(str, 'list_of_str'),
        'list_of_bool': make_list_converter(str_to_bool, 'list_of_bool'),
        'list_of_int': make_list_converter(int, 'list_of_int'),
        'py': py_literal,
        'json': json.loads,
    }
    assert DEFAULT_CONVERTER_SPEC in BASIC_CONVERTERS

    def __init__(self, config_spec, *, paths=(), strings=(), custom_converters=None):
        super().__init__()
        converters = dict(self.BASIC_CONVERTERS)
        if custom_converters:
            converters.update(custom_converters)
        parser = self._read_config_sources(paths, strings)
        self.update(self._make_config_sections(
            _parse_config_spec(config_spec),
            parser,
            converters))

    @classmethod
    def section(cls, config_spec, **kwargs):
        """
        Make a :class:`Config` and get its only section.

        The config spec must declare exactly one section.
        """
        config = cls(config_spec, **kwargs)
        if len(config) != 1:
            raise ConfigError(
                'the config spec declares {} sections (expected '
                'exactly one)'.format(len(config)))
        [sect] = config.values()
        return sect

    def __repr__(self):
        return '{}({})'.format(self.__class__.__qualname__, super().__repr__())

    def __getitem__(self, sect_name):
        try:
            return super().__getitem__(sect_name)
        except KeyError:
            raise NoConfigSectionError(sect_name) from None


    #
    # non-public internals

    @staticmethod
    def _read_config_sources(paths, strings):
        parser = configparser.ConfigParser(interpolation=None)
        try:
            for path in paths:
                if not parser.read(path, encoding='utf-8'):
                    LOGGER.debug('Config file %a does not exist or cannot be read '
                                 '(skipping it)', path)
            for s in strings:
                parser.read_string(textwrap.dedent(s))
        except configparser.Error as exc:
            raise ConfigError('cannot parse configuration ({}: {})'.format(
                get_class_name(exc),
                ascii_str(exc))) from exc
        return parser

    def _make_config_sections(self, spec, parser, converters):
        resultant_config_sections = {}
        missing_opt_locations = []
        illegal_opt_locations = []
        conversion_errors = []
        for sect_name, opt_specs in spec.items():
            given_opts = (dict(parser.items(sect_name)) if parser.has_section(sect_name)
                          else {})
            sect = ConfigSection(sect_name)
            for opt_name in given_opts:
                if opt_name not in opt_specs:
                    illegal_opt_locations.append('{}.{}'.format(sect_name, opt_name))
            for opt_name, (default, converter_spec) in opt_specs.items():
                opt_descr = '`{}.{}`'.format(sect_name, opt_name)
                opt_value = given_opts.get(opt_name, default)
                if opt_value is None:
                    missing_opt_locations.append('{}.{}'.format(sect_name, opt_name))
                    continue
                converter = converters.get(converter_spec)
                if converter is None:
                    conversion_errors.append(
                        'unknown config value converter '
                        '`{0}` (for {1})'.format(converter_spec, opt_descr))
                    continue
                try:
                    sect[opt_name] = converter(opt_value)
                except Exception as exc:
                    conversion_errors.append(
                        'error when applying config value converter {0!a} '
                        'to {1}={2!a} ({3}: {4})'.format(
                            converter_spec,
                            opt_descr,
                            opt_value,
                            get_class_name(exc),
                            ascii_str(exc)))
            resultant_config_sections[sect_name] = sect
        if missing_opt_locations or illegal_opt_locations or conversion_errors:
            error_msg = '; '.join(filter(None, [
                ("missing required config options: {0}".format(
                    ", ".join(missing_opt_locations))
                 if missing_opt_locations else None),
                ("illegal config options: {0}".format(
                    ", ".join(illegal_opt_locations))
                 if illegal_opt_locations else None)
            ] + conversion_errors))
            raise ConfigError(error_msg)
        return resultant_config_sections



class ConfigSection(dict):

    """
    A subclass of `dict`; its instances are values of `Config` mappings.

    Lookup-by-key failures are signalled with `NoConfigOptionError`
    (which is a subclass of both `KeyError` and `ConfigError`).

    >>> s = ConfigSection('some_sect', {'some_opt': 'FOO_bar,spam'})
    >>> s
    ConfigSection('some_sect', {'some_opt': 'FOO_bar,spam'})
    >>> s.sect_name
    'some_sect'
    >>> s['some_opt']
    'FOO_bar,spam'
    >>> s == {'some_opt': 'FOO_bar,spam'}
    True
    >>> s == ConfigSection('another_sect', {'some_opt': 'FOO_bar,spam'})
    False
    >>> s['another_opt']     # doctest: +ELLIPSIS
    Traceback (most recent call last):
      ...
    paramschema.config.NoConfigOptionError: [conf... `another_opt` in section `some_sect`
    """

    def __init__(self, sect_name, opt_name_to_value=None):
        self.sect_name = sect_name
        if opt_name_to_value is None:
            opt_name_to_value = {}
        super().__init__(opt_name_to_value)

    def __repr__(self):
        return '{}({!r}, {})'.format(
            self.__class__.__qualname__,
            self.sect_name,
            super().__repr__())

    def __eq__(self, other):
        if isinstance(other, ConfigSection) and other.sect_name != self.sect_name:
            return False
        return super().__eq__(other)

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __getitem__(self, opt_name):
        try:
            return super().__getitem__(opt_name)
        except KeyError:
            raise NoConfigOptionError(self.sect_name, opt_name) from None



def _parse_config_spec(config_spec):
    """
    >>> _parse_config_spec('''
    ...     [sect]
    ...     a = 1 :: int
    ...     b :: bool
    ...     c = spam
    ... ''') == {'sect': {'a': ('1', 'int'), 'b': (None, 'bool'), 'c': ('spam', 'str')}}
    True
    """
    parser = configparser.ConfigParser(
        interpolation=None,
        allow_no_value=True,
        delimiters=('=',))
    try:
        parser.read_string(textwrap.dedent(config_spec))
    except configparser.Error as exc:
        raise ConfigError('invalid config spec ({}: {})'.format(
            get_class_name(exc),
            ascii_str(exc))) from exc
    spec = {}
    for sect_name in parser.sections():
        opt_specs = spec[sect_name] = {}
        for raw_opt, raw_value in parser.items(sect_name):
            if raw_value is None:
                # no '=' => a required option (possibly with a converter spec)
                opt_name, _, converter_spec = raw_opt.partition('::')
                default = None
            else:
                default, _, converter_spec = raw_value.rpartition('::')
                if not _:
                    default, converter_spec = raw_value, ''
                opt_name = raw_opt
                default = default.strip()
            opt_specs[opt_name.strip()] = (
                default,
                converter_spec.strip() or Config.DEFAULT_CONVERTER_SPEC)
    return spec
