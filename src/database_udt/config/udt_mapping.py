"""
Configuration for custom type mappings.

The file maps backend type names to classes given as `module:Class`:

    {"public.email": "myapp.types:Email", "text": "myapp.types:Email"}
"""
import importlib
import json
import logging
import pathlib

from database_udt.udt import UdtMap, is_single_attribute_type

logger = logging.getLogger(__name__)

DEFAULT_LOCATIONS = (
    '~/.config/database_udt/udt_mapping.json',
    '/etc/database_udt/udt_mapping.json',
    'udt_mapping.json',  # Current directory
)


def import_type(path: str) -> type:
    """Import a class from `module:Class` (or `module.Class`)"""
    if ':' in path:
        module_name, _, attr = path.partition(':')
    else:
        module_name, _, attr = path.rpartition('.')
    if not module_name or not attr:
        raise ValueError(f'Not a class path: {path}')
    obj = importlib.import_module(module_name)
    for part in attr.split('.'):
        obj = getattr(obj, part)
    return obj


class UdtMappingConfig:
    """Configuration for custom type mappings"""

    def __init__(self, config_file=None):
        self._mappings: dict[str, str] = {}

        if config_file:
            self.load_config(config_file)
        else:
            for location in DEFAULT_LOCATIONS:
                path = pathlib.Path(location).expanduser()
                if path.exists():
                    self.load_config(path)
                    break

    @property
    def mappings(self) -> dict[str, str]:
        return dict(self._mappings)

    def load_config(self, config_file):
        """Load configuration from file, merging with what is loaded already"""
        try:
            with pathlib.Path(config_file).open() as f:
                config = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f'Failed to load udt mapping config: {e}')
            return

        if not isinstance(config, dict):
            logger.warning(f'Ignoring udt mapping config {config_file}: expected an object')
            return

        for type_name, class_path in config.items():
            if not isinstance(class_path, str):
                logger.warning(f'Ignoring mapping for {type_name}: {class_path!r} is not a class path')
                continue
            self._mappings[type_name] = class_path
        logger.info(f'Loaded udt mapping configuration from {config_file}')

    def add_mapping(self, type_name, class_path):
        """Add a single type name mapping"""
        self._mappings[type_name] = class_path

    def register_into(self, udt_map: UdtMap) -> UdtMap:
        """Import the configured classes and register them into udt_map.

        Entries that cannot be imported, or name a class without the
        single-attribute capability, are logged and skipped.
        """
        for type_name, class_path in self._mappings.items():
            try:
                type_ = import_type(class_path)
            except (ImportError, AttributeError, ValueError) as e:
                logger.warning(f'Skipping {type_name}: cannot import {class_path}: {e}')
                continue
            if not is_single_attribute_type(type_):
                logger.warning(f'Skipping {type_name}: {class_path} does not implement SingleAttributeType')
                continue
            udt_map.register(type_name, type_)
        return udt_map
