# Copyright (c) 2026 NASK. All rights reserved.

"""
*paramschema* -- schema-driven loading, validation and dumping of data
exchanged with external APIs.
"""

from paramschema.log_helpers import install_null_handler

install_null_handler()


from paramschema.api import (  # noqa
    Result,
    dump,
    load,
    validate,
)
from paramschema.const import (  # noqa
    NOTHING,
    UNSET,
)
from paramschema.enums import EnumMapping  # noqa
from paramschema.exceptions import (  # noqa
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
from paramschema.fields import Field  # noqa
from paramschema.options import (  # noqa
    DumpOptions,
    LoadOptions,
)
from paramschema.schema import (  # noqa
    Schema,
    SchemaRegistry,
    define,
)
from paramschema.types import (  # noqa
    AnyType,
    BooleanType,
    DateTimeType,
    DateType,
    DecimalType,
    EnumType,
    FloatType,
    IntegerType,
    ListOf,
    Many,
    One,
    StringType,
)
