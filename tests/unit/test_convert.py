"""
Tests for typed get of one cell: a DOMAIN over text mapped onto Email.

The server reports the base type oid (text) for domain columns, so the
custom type is inferred from the requested class or from the type map.
"""
import decimal

import pytest
from database_udt import types
from database_udt.context import ConversionContext
from database_udt.convert import get_object
from database_udt.exceptions import DataError, FeatureNotSupported
from database_udt.udt import UdtMap
from fixtures.customtypes import Email, NotCapable, Port

EMAILS = ['test@example.com', 'test2@example.com', 'foo@bar.baz']


@pytest.fixture
def mapped_context():
    """Connection context with the email domain and Port registered"""
    return ConversionContext(udt_map=UdtMap({'public.email': Email, '"Port"': Port}))


def test_requested_custom_type(mapped_context):
    result = [get_object(mapped_context, types.TEXT, value, requested_type=Email)
              for value in EMAILS]
    assert result == [Email(value) for value in EMAILS]


def test_requested_custom_type_without_mapping(context):
    assert get_object(context, types.TEXT, 'a@b.com', requested_type=Email) == Email('a@b.com')


def test_null_row(mapped_context):
    assert get_object(mapped_context, types.TEXT, None, requested_type=Email) is None
    assert get_object(mapped_context, types.TEXT, None, type_name='public.email') is None


def test_type_name_lookup(mapped_context):
    result = get_object(mapped_context, types.TEXT, 'a@b.com', type_name='public.email')
    assert result == Email('a@b.com')


def test_unqualified_registration(context):
    context.udt_map.register('email', Email)
    result = get_object(context, types.TEXT, 'a@b.com', type_name='public.email')
    assert result == Email('a@b.com')


def test_base_type_unmapped(mapped_context):
    assert get_object(mapped_context, types.TEXT, 'a@b.com') == 'a@b.com'


def test_override_base_type(mapped_context):
    mapped_context.udt_map.register('text', Email)
    result = {get_object(mapped_context, types.TEXT, value).address for value in EMAILS}
    assert result == set(EMAILS)


def test_call_map_overrides_connection_map(mapped_context):
    mapped_context.udt_map.register('text', Email)
    result = {get_object(mapped_context, types.TEXT, value, type_map={}) for value in EMAILS}
    assert result == set(EMAILS)


def test_call_map_plain_mapping(context):
    result = get_object(context, types.TEXT, 'a@b.com', type_map={'text': Email})
    assert result == Email('a@b.com')


def test_type_unassignable(mapped_context):
    mapped_context.udt_map.register('text', Email)
    with pytest.raises(DataError):
        get_object(mapped_context, types.TEXT, 'a@b.com', requested_type=Port)


def test_requested_builtin_type(context):
    assert get_object(context, types.TEXT, '42', requested_type=int) == 42
    assert get_object(context, types.INT4, 42, requested_type=str) == '42'
    assert get_object(context, types.INT4, 42, requested_type=decimal.Decimal) == decimal.Decimal(42)


def test_requested_unsupported_type(context, counted):
    with pytest.raises(FeatureNotSupported):
        get_object(context, types.TEXT, 'a@b.com', requested_type=NotCapable)
    assert NotCapable.instances == 0


def test_natural_type(context):
    assert get_object(context, types.INT4, 5) == 5
    assert get_object(context, types.BOOL, False) is False


if __name__ == '__main__':
    __import__('pytest').main([__file__])
