"""
psycopg integration: return custom types straight from fetched rows.

The server reports the base type oid for domain columns, so loaders are
registered on the base type. The value is first loaded by psycopg's own
loader for that base type, then wrapped in a ValueAccess and materialized.

Usage:
    conn = psycopg.connect(...)
    register_udt_loader(conn, 'public.email', Email, base='text')
    conn.execute('select email from testemail').fetchone()  # (Email(...),)
"""
import logging
from collections.abc import Callable
from typing import Any

import psycopg
from psycopg.adapt import AdaptersMap, Loader
from psycopg.postgres import types as pg_types
from psycopg.pq import Format

from database_udt.access import create_value_access
from database_udt.bridge import SingleAttributeInput
from database_udt.context import ConversionContext
from database_udt.dispatch import materialize
from database_udt.udt import CustomTypeHandle, is_single_attribute_type

logger = logging.getLogger(__name__)


class UdtLoader(Loader):
    """Loader materializing a custom type from its base type's value"""

    type_name: str = None
    handle: CustomTypeHandle = None
    base_oid: int = None
    conversion_context: ConversionContext = None

    def __init__(self, oid, context=None):
        super().__init__(oid, context)
        base_cls = psycopg.adapters.get_loader(self.base_oid, self.format)
        self._base_loader = base_cls(self.base_oid, context)

    def load(self, data) -> Any:
        """Load base value, then populate the custom type from it"""
        value = self._base_loader.load(data)
        access = create_value_access(self.conversion_context, self.base_oid, value)
        return materialize(self.type_name, self.handle, SingleAttributeInput(access))


def _adapters_of(target: Any) -> AdaptersMap:
    if isinstance(target, AdaptersMap):
        return target
    return target.adapters


def create_udt_loader(type_name: str, handle: CustomTypeHandle, base_oid: int,
                      conversion_context: ConversionContext,
                      format: Format = Format.TEXT) -> type[UdtLoader]:
    """Factory function for loader classes bound to one custom type.
    """
    suffix = 'Binary' if format == Format.BINARY else ''
    cls = type(f'{handle.type_.__name__}{suffix}Loader', (UdtLoader,), {
        'format': format,
        'type_name': type_name,
        'handle': handle,
        'base_oid': base_oid,
        'conversion_context': conversion_context,
    })
    return cls


def register_udt_loader(target: Any, type_name: str, type_: type,
                        base: str | int = 'text',
                        conversion_context: ConversionContext | None = None,
                        factory: Callable[[], Any] | None = None) -> None:
    """Register loaders returning `type_` for columns of the base type.

    Args:
        target: AdaptersMap, or a connection/cursor exposing `adapters`
        type_name: Backend type name passed to the custom type's `read_sql`
        type_: SingleAttributeType subclass to materialize
        base: Name or oid of the type the server reports for the column
        conversion_context: Context for the value accessors (default context
            if omitted)
        factory: Optional construction function for `type_`
    """
    if not is_single_attribute_type(type_):
        raise TypeError(f'{type_!r} does not implement SingleAttributeType')
    info = pg_types.get(base)
    if info is None:
        raise ValueError(f'Unknown base type: {base}')
    conversion_context = conversion_context or ConversionContext()
    handle = CustomTypeHandle(type_, factory)
    adapters = _adapters_of(target)

    for format in (Format.TEXT, Format.BINARY):
        if psycopg.adapters.get_loader(info.oid, format) is None:
            continue
        loader = create_udt_loader(type_name, handle, info.oid, conversion_context, format)
        adapters.register_loader(info.oid, loader)
        logger.debug(f'Registered {loader.__name__} on {info.name} for {type_name}')
