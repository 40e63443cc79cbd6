"""
Scalar value access and single-attribute custom type materialization.

Decoded column values are wrapped in a typed accessor and, when the caller
asks for a custom type, used to populate an instance of that type:

- create_value_access: typed getters over one decoded value
- SingleAttributeInput: one-read input stream handed to custom types
- materialize / resolve_and_materialize: construct and populate a custom type
- get_object: typed get of one result cell
"""
__version__ = '0.1.0'

from database_udt.access import ValueAccess, create_value_access
from database_udt.adapters import register_udt_loader
from database_udt.boolean import BooleanCoercion
from database_udt.bridge import ReadState, SingleAttributeInput
from database_udt.context import ConversionContext
from database_udt.convert import get_object
from database_udt.dispatch import materialize, resolve_and_materialize
from database_udt.exceptions import DatabaseError, DataError, DataErrors
from database_udt.exceptions import DriverSystemError, FeatureNotSupported
from database_udt.exceptions import InvalidTextRepresentation
from database_udt.exceptions import NotSupportedErrors, NumericValueOutOfRange
from database_udt.exceptions import SystemErrors
from database_udt.options import ConversionOptions
from database_udt.types import ScalarValue
from database_udt.udt import CustomTypeHandle, SingleAttributeType, UdtMap

__all__ = [
    'ValueAccess',
    'create_value_access',
    'register_udt_loader',
    'BooleanCoercion',
    'ReadState',
    'SingleAttributeInput',
    'ConversionContext',
    'ConversionOptions',
    'get_object',
    'materialize',
    'resolve_and_materialize',
    'ScalarValue',
    'CustomTypeHandle',
    'SingleAttributeType',
    'UdtMap',
    'DatabaseError',
    'DataError',
    'NumericValueOutOfRange',
    'InvalidTextRepresentation',
    'DriverSystemError',
    'FeatureNotSupported',
    'DataErrors',
    'NotSupportedErrors',
    'SystemErrors',
]
