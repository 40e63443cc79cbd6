import decimal
import math

import pytest
from database_udt.boolean import BooleanCoercion
from database_udt.exceptions import DataError
from database_udt.options import ConversionOptions


@pytest.mark.parametrize(('value', 'expected'), [
    (0, False),
    (1, True),
    (-1, True),
    (2, True),
    (0.0, False),
    (decimal.Decimal('0.5'), True),
])
def test_lenient_numbers(value, expected):
    assert BooleanCoercion().from_number(value) is expected


@pytest.mark.parametrize('value', [2, -1, 0.5])
def test_strict_numbers(value):
    with pytest.raises(DataError):
        BooleanCoercion(strict=True).from_number(value)


def test_nan_is_never_boolean():
    with pytest.raises(DataError):
        BooleanCoercion().from_number(math.nan)


@pytest.mark.parametrize(('text', 'expected'), [
    ('t', True), ('TRUE', True), (' yes ', True), ('on', True), ('1', True),
    ('f', False), ('False', False), ('no', False), ('off', False), ('0', False),
    ('5', True),
])
def test_lenient_strings(text, expected):
    assert BooleanCoercion().from_string(text) is expected


def test_strict_strings():
    policy = BooleanCoercion(strict=True)
    assert policy.from_string('y') is True
    with pytest.raises(DataError):
        policy.from_string('5')
    with pytest.raises(DataError):
        policy.from_string('perhaps')


def test_from_options():
    assert BooleanCoercion.from_options(ConversionOptions()).strict is False
    assert BooleanCoercion.from_options(ConversionOptions(boolean_coercion='strict')).strict is True


if __name__ == '__main__':
    __import__('pytest').main([__file__])
