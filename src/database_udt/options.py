from dataclasses import dataclass

from libb import ConfigOptions

__all__ = [
    'ConversionOptions',
    'BOOLEAN_COERCIONS',
]

BOOLEAN_COERCIONS = ('lenient', 'strict')


@dataclass
class ConversionOptions(ConfigOptions):
    """Options

    Connection-scoped settings for value conversion:
    - boolean_coercion: `lenient` (any nonzero number is true) or `strict`
      (only 0 and 1 are accepted) (default: lenient)
    - strict_narrowing: raise instead of truncating when an int2 value is
      read as a byte (default: False)
    - udt_mapping_file: JSON file of type name to class mappings (default: None)
    """
    boolean_coercion: str = 'lenient'
    strict_narrowing: bool = False
    udt_mapping_file: str = None

    def __post_init__(self):
        if self.boolean_coercion not in BOOLEAN_COERCIONS:
            raise ValueError(f'boolean_coercion must be one of: {BOOLEAN_COERCIONS}')
        if not isinstance(self.strict_narrowing, bool):
            raise ValueError('strict_narrowing must be a bool')
