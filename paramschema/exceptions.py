# Copyright (c) 2013-2026 NASK. All rights reserved.

from paramschema.const import ROOT_PATH
from paramschema.encoding_helpers import ascii_str, as_unicode


#
# Generic mix-ins
#

class _ErrorWithPublicMessageMixin(object):

    r"""
    A mix-in class that provides the :attr:`public_message` property.

    The value of this property is a :class:`str`.  It is taken either
    from the `public_message` constructor keyword argument (which should
    be a :class:`str` or an UTF-8-decodable :class:`bytes`) or -- if the
    argument was not specified -- from the value of the
    :attr:`default_public_message` attribute.

    The public message should be a complete sentence (or several
    sentences): first word capitalized (if not being an identifier
    that begins with a lower case letter) + the period at the end.

    .. warning::

       Generally, the message is intended to be presented to clients
       (e.g., to the senders of the loaded data).  **Ensure that you do
       not disclose any sensitive details in the message.**

    The :class:`str` conversion provided by the class uses the value of
    :attr:`public_message`:

    >>> class SomeError(_ErrorWithPublicMessageMixin, Exception):
    ...     pass
    ...
    >>> str(SomeError('a', 'b'))  # using attribute default_public_message
    'Internal error.'
    >>> str(SomeError('a', 'b', public_message='Spąm.')) == 'Spąm.'
    True

    The :func:`repr` conversion results in a programmer-readable
    representation (containing the class name, :func:`repr`-formatted
    constructor arguments and the :attr:`public_message` property):

    >>> SomeError('a', 'b')   # using class's default_public_message
    <SomeError: args=('a', 'b'); public_message='Internal error.'>
    >>> SomeError('a', 'b', public_message='Spam.')
    <SomeError: args=('a', 'b'); public_message='Spam.'>
    """

    #: (overridable in subclasses)
    default_public_message = 'Internal error.'

    def __init__(self, *args, **kwargs):
        try:
            public_message = kwargs.pop('public_message')
        except KeyError:
            pass
        else:
            self._public_message = as_unicode(public_message)
        try:
            super(_ErrorWithPublicMessageMixin, self).__init__(*args, **kwargs)
        except TypeError:
            if kwargs:
                raise TypeError(
                    'illegal keyword arguments for {} constructor: {}'.format(
                        self.__class__.__name__,
                        ', '.join(sorted(map(repr, kwargs)))))
            else:
                raise

    @property
    def public_message(self):
        """The aforementioned property."""
        try:
            return self._public_message
        except AttributeError:
            # (in subclasses `default_public_message` can also be a @property)
            self._public_message = as_unicode(self.default_public_message)
            return self._public_message

    def __str__(self):
        return self.public_message

    def __repr__(self):
        return ('<{0.__class__.__name__}: args={0.args!r}; '
                'public_message={0.public_message!r}>'.format(self))


#
# Schema definition errors (raised at definition time)
#

class InvalidSchemaDefinition(Exception):

    """
    Raised when a field, an enum mapping or a schema is defined
    improperly.

    Such errors are never caused by the processed data -- they are
    always raised *when the definition is being made* (typically, when
    the module that contains the definition is being imported).

    >>> print(InvalidSchemaDefinition('Some Message'))
    [schema definition error] Some Message
    """

    def __str__(self):
        return '[schema definition error] ' + super(InvalidSchemaDefinition, self).__str__()


class DuplicateKey(InvalidSchemaDefinition):
    """
    Raised when two fields at the same level of a schema share an
    internal name or an external key.
    """


class CyclicSchemaDefinition(InvalidSchemaDefinition):
    """
    Raised when a schema would (directly or transitively) nest itself.
    """


#
# Per-field data errors (collected by the engines)
#

class FieldValueError(_ErrorWithPublicMessageMixin, ValueError):

    """
    The base class for per-field data errors.

    Instances of its subclasses are raised by `coerce_in()` and
    `coerce_out()` methods of type objects (see
    :mod:`paramschema.types`) as well as by field validators (see
    :mod:`paramschema.validators`).  They are caught by the *load* and
    *dump* machinery and collected -- together with the paths of the
    offending fields -- into one :exc:`ValidationError`.

    It is recommended (though not required) to instantiate such an
    exception specifying the `public_message` keyword argument.
    """

    default_public_message = 'Invalid value.'


class MissingField(FieldValueError):
    """A required field is absent (and it has no default)."""
    default_public_message = 'Missing required field.'


class TypeMismatch(FieldValueError):
    """The value is of a type that cannot be handled by the field type."""
    default_public_message = 'Unexpected type of value.'


class InvalidFormat(FieldValueError):
    """The value is of an acceptable type but cannot be parsed."""
    default_public_message = 'Invalid format of value.'


class UnknownEnumValue(FieldValueError):
    """The value is not present in the enum mapping."""
    default_public_message = 'Unknown enum value.'


class UnknownField(FieldValueError):
    """The key is not defined in the schema (reported only on request)."""
    default_public_message = 'Unknown field.'


class InvalidValue(FieldValueError):
    """The value has been rejected by a field validator."""
    default_public_message = 'Invalid value.'


#
# The aggregate error
#

class ValidationError(_ErrorWithPublicMessageMixin, Exception):

    r"""
    The aggregate of all per-field errors found during one *load*,
    *dump* or *validate* call.

    Each instance should be initialized with one argument: a mapping
    (or an iterable of pairs) that maps *field paths* (such as
    ``'detail.user.firstName'`` or ``'detail.phones[2].countryCode'``;
    root-level problems are reported under the ``''`` path) to lists of
    :exc:`FieldValueError` instances.  It is exposed as the
    :attr:`errors` attribute (a :class:`dict`, preserving the order in
    which the problems were found).

    This exception class provides :attr:`default_public_message` (see:
    :exc:`_ErrorWithPublicMessageMixin`) as a property whose value is a
    nice, user-readable message that includes, *for each contained
    exception*, the path and the :attr:`public_message` of that
    exception.

    >>> exc = ValidationError({
    ...     'detail.amount': [MissingField()],
    ...     'status': [UnknownEnumValue(public_message='"X" is not one of: "NEW".')],
    ... })
    >>> exc.public_message == (
    ...     'Problem with field "detail.amount" (Missing required field). '
    ...     'Problem with field "status" ("X" is not one of: "NEW").')
    True
    >>> sorted(exc.errors)
    ['detail.amount', 'status']
    >>> exc.messages() == {
    ...     'detail.amount': ['Missing required field.'],
    ...     'status': ['"X" is not one of: "NEW".'],
    ... }
    True
    """

    msg_template = 'Problem with {where} ({exc_public_message}).'

    def __init__(self, errors, **kwargs):
        self.errors = {path: list(exc_list)
                       for path, exc_list in dict(errors).items()}
        super(ValidationError, self).__init__(self.errors, **kwargs)

    @property
    def default_public_message(self):
        """The aforementioned property."""
        messages = []
        for path, exc_list in self.errors.items():
            where = ('the data' if path == ROOT_PATH
                     else 'field "{}"'.format(ascii_str(path)))
            for exc in exc_list:
                messages.append(self.msg_template.format(
                    where=where,
                    exc_public_message=self._get_exc_public_message(exc).rstrip('.')))
        return ' '.join(messages)

    @property
    def paths(self):
        """A :class:`list` of the paths of all offending fields."""
        return list(self.errors)

    def messages(self):
        """
        Get a new ``{<path>: [<public message>, ...], ...}`` :class:`dict`.
        """
        return {path: [self._get_exc_public_message(exc) for exc in exc_list]
                for path, exc_list in self.errors.items()}

    def error_types(self):
        """
        Get a new ``{<path>: [<error class>, ...], ...}`` :class:`dict`.
        """
        return {path: [type(exc) for exc in exc_list]
                for path, exc_list in self.errors.items()}

    @staticmethod
    def _get_exc_public_message(exc):
        if isinstance(exc, _ErrorWithPublicMessageMixin):
            return exc.public_message
        return FieldValueError.default_public_message
