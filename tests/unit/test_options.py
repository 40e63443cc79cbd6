import json

import pytest
from database_udt.context import ConversionContext
from database_udt.options import ConversionOptions


def test_init_defaults():
    """Test default initialization"""
    options = ConversionOptions()

    assert options.boolean_coercion == 'lenient'
    assert options.strict_narrowing is False
    assert options.udt_mapping_file is None


def test_validation():
    """Test validation rules"""
    with pytest.raises(ValueError):
        ConversionOptions(boolean_coercion='invalid')

    with pytest.raises(ValueError):
        ConversionOptions(strict_narrowing='yes')


def test_context_defaults():
    context = ConversionContext()
    assert context.boolean_coercion.strict is False
    assert context.strict_narrowing is False
    assert len(context.udt_map) == 0


def test_context_from_strict_options():
    context = ConversionContext(ConversionOptions(boolean_coercion='strict', strict_narrowing=True))
    assert context.boolean_coercion.strict is True
    assert context.strict_narrowing is True


def test_context_loads_mapping_file(tmp_path):
    path = tmp_path / 'udt_mapping.json'
    path.write_text(json.dumps({'public.email': 'fixtures.customtypes:Email'}))

    context = ConversionContext(ConversionOptions(udt_mapping_file=str(path)))
    assert list(context.udt_map) == ['public.email']


if __name__ == '__main__':
    __import__('pytest').main([__file__])
