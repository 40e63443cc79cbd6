"""
Conversion contexts and decoded values for value access tests.
"""
import decimal

import pytest
from database_udt import types
from database_udt.context import ConversionContext
from database_udt.options import ConversionOptions


@pytest.fixture
def context():
    """Default connection context: lenient booleans, int2 byte truncation"""
    return ConversionContext()


@pytest.fixture
def strict_context():
    """Context with strict boolean coercion and strict narrowing"""
    options = ConversionOptions(boolean_coercion='strict', strict_narrowing=True)
    return ConversionContext(options)


@pytest.fixture(scope='module')
def decoded_values():
    """One representative decoded value per backend type, keyed by oid"""
    return {
        types.INT2: 300,
        types.INT4: 70000,
        types.INT8: 9223372036854775807,
        types.FLOAT4: 1.5,
        types.FLOAT8: 3.75,
        types.NUMERIC: decimal.Decimal('123456.789123'),
        types.BOOL: True,
        types.TEXT: 'a@b.com',
        types.VARCHAR: 'Variable length string',
    }
