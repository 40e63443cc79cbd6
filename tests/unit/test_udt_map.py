"""
Tests for the custom type registry and construction handles.
"""
import pytest
from database_udt.udt import CustomTypeHandle, UdtMap, is_single_attribute_type
from fixtures.customtypes import Email, NotCapable, Port


def test_register_and_lookup():
    udt_map = UdtMap()
    handle = udt_map.register('public.email', Email)

    assert udt_map.lookup('public.email') is handle
    assert udt_map['public.email'] is handle
    assert 'public.email' in udt_map
    assert len(udt_map) == 1
    assert handle.type_ is Email


def test_lookup_falls_back_to_unqualified_name():
    udt_map = UdtMap({'email': Email})
    assert udt_map.lookup('public.email').type_ is Email
    assert udt_map.lookup('port') is None
    assert udt_map.lookup(None) is None


def test_missing_key():
    with pytest.raises(KeyError):
        UdtMap()['email']


def test_register_rejects_not_capable():
    with pytest.raises(TypeError):
        UdtMap().register('thing', NotCapable)


def test_handle_for_type():
    udt_map = UdtMap({'public.email': Email, 'port': Port})
    assert udt_map.handle_for_type(Port).type_ is Port
    assert udt_map.handle_for_type(NotCapable) is None


def test_unregister():
    udt_map = UdtMap({'port': Port})
    udt_map.unregister('port')
    udt_map.unregister('port')
    assert len(udt_map) == 0


def test_handle_uses_factory():
    default = CustomTypeHandle(Email).create()
    assert default == Email()
    built = CustomTypeHandle(Email, lambda: Email('preset')).create()
    assert built == Email('preset')


def test_handle_equality():
    assert CustomTypeHandle(Email) == CustomTypeHandle(Email)
    assert CustomTypeHandle(Email) != CustomTypeHandle(Port)
    assert CustomTypeHandle(Email).name.endswith('customtypes.Email')


def test_is_single_attribute_type():
    assert is_single_attribute_type(Email)
    assert not is_single_attribute_type(Email())
    assert not is_single_attribute_type(NotCapable)
    assert not is_single_attribute_type(str)


if __name__ == '__main__':
    __import__('pytest').main([__file__])
