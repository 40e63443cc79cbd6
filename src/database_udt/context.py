"""
Connection-scoped conversion context.

A context is created once per connection and shared, read-only, by every
value accessor and dispatch made on behalf of that connection.
"""
from database_udt.boolean import BooleanCoercion
from database_udt.config.udt_mapping import UdtMappingConfig
from database_udt.options import ConversionOptions
from database_udt.udt import UdtMap


class ConversionContext:
    """Options, boolean policy and custom type map of one connection."""

    def __init__(self, options: ConversionOptions | None = None,
                 udt_map: UdtMap | None = None,
                 boolean_coercion: BooleanCoercion | None = None) -> None:
        self.options = options if options is not None else ConversionOptions()
        self.boolean_coercion = boolean_coercion or BooleanCoercion.from_options(self.options)
        if udt_map is None:
            udt_map = UdtMap()
            if self.options.udt_mapping_file:
                UdtMappingConfig(self.options.udt_mapping_file).register_into(udt_map)
        self.udt_map = udt_map

    @property
    def strict_narrowing(self) -> bool:
        return self.options.strict_narrowing

    def __repr__(self) -> str:
        return (f'ConversionContext(options={self.options!r}, '
                f'udt_map={self.udt_map!r})')
