import json

import pytest
from database_udt.config.udt_mapping import UdtMappingConfig, import_type
from database_udt.udt import UdtMap
from fixtures.customtypes import Email, Port


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / 'udt_mapping.json'
    path.write_text(json.dumps({
        'public.email': 'fixtures.customtypes:Email',
        'port': 'fixtures.customtypes.Port',
        'missing': 'no_such_module:Thing',
        'plain': 'fixtures.customtypes:NotCapable',
        'bad': 42,
    }))
    return path


def test_import_type():
    assert import_type('fixtures.customtypes:Email') is Email
    assert import_type('fixtures.customtypes.Port') is Port
    with pytest.raises(ValueError):
        import_type('Email')


def test_load_config(config_file):
    config = UdtMappingConfig(config_file)
    assert config.mappings['public.email'] == 'fixtures.customtypes:Email'
    assert 'bad' not in config.mappings


def test_register_into_skips_bad_entries(config_file, caplog):
    udt_map = UdtMappingConfig(config_file).register_into(UdtMap())
    assert sorted(udt_map) == ['port', 'public.email']
    assert udt_map['public.email'].type_ is Email
    assert 'no_such_module' in caplog.text


def test_unreadable_config(tmp_path, caplog):
    path = tmp_path / 'broken.json'
    path.write_text('{not json')
    config = UdtMappingConfig(path)
    assert config.mappings == {}
    assert 'Failed to load' in caplog.text


def test_add_mapping():
    config = UdtMappingConfig(config_file=None)
    config.add_mapping('email', 'fixtures.customtypes:Email')
    udt_map = config.register_into(UdtMap())
    assert udt_map.lookup('public.email').type_ is Email


if __name__ == '__main__':
    __import__('pytest').main([__file__])
