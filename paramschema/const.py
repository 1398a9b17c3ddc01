# Copyright (c) 2026 NASK. All rights reserved.


class _Marker(object):

    """
    Base of the singleton marker objects defined in this module.

    >>> UNSET
    UNSET
    >>> bool(UNSET)
    False
    >>> import copy
    >>> copy.deepcopy(UNSET) is UNSET
    True
    """

    _name = None

    def __new__(cls):
        try:
            return cls.__dict__['_instance']
        except KeyError:
            inst = cls._instance = super(_Marker, cls).__new__(cls)
            return inst

    def __repr__(self):
        return self._name

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return self._name


class _UnsetMarker(_Marker):
    _name = 'UNSET'


class _NothingMarker(_Marker):
    _name = 'NOTHING'


#: Held by attributes of *records* (see :attr:`Schema.record_class`)
#: whose fields were omitted in the loaded data.  It is distinct from
#: :obj:`None` (which is a legitimate *null* value).
UNSET = _UnsetMarker()

#: The default value of the `default` argument of
#: :class:`paramschema.fields.Field` (meaning: *no default*).
NOTHING = _NothingMarker()


#: The path under which root-level problems are reported.
ROOT_PATH = ''

#: The default name of the configuration section with default options.
CONFIG_SECTION_NAME = 'paramschema'
