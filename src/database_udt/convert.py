"""
Typed get of one result cell.

Ties the pieces together the way a result set does for `get_object`:

1. NULL cells come back as None, nothing is constructed
2. A requested custom type is inferred from the class (domains arrive
   with their base type oid)
3. A requested builtin type goes to the matching getter
4. Otherwise the type map is consulted by type name, then by the name of
   the reported base type; a per-call map replaces the connection's map
5. Unmapped values come back as their natural Python type
"""
import logging
from collections.abc import Mapping
from typing import Any

from database_udt import types
from database_udt.access import create_value_access
from database_udt.bridge import SingleAttributeInput
from database_udt.context import ConversionContext
from database_udt.dispatch import materialize, resolve_and_materialize
from database_udt.udt import UdtMap, is_single_attribute_type

logger = logging.getLogger(__name__)


def _effective_map(context: ConversionContext,
                   type_map: UdtMap | Mapping[str, type] | None) -> UdtMap:
    if type_map is None:
        return context.udt_map
    if isinstance(type_map, UdtMap):
        return type_map
    return UdtMap(type_map)


def get_object(context: ConversionContext, oid: int, value: Any,
               type_name: str | None = None, requested_type: type | None = None,
               type_map: UdtMap | Mapping[str, type] | None = None) -> Any:
    """Convert one decoded cell for the caller.

    Args:
        context: Connection-scoped conversion context
        oid: Backend type oid reported for the column
        value: Decoded value, None for SQL NULL
        type_name: Backend type name, when known (e.g. a domain's name)
        requested_type: Class the caller asked for, if any
        type_map: Per-call type map overriding the connection's map

    Returns
        None for NULL, a custom type instance, or a plain Python value
    """
    access = create_value_access(context, oid, value)
    if access.is_null:
        return None
    base_name = types.base_type_name(oid)
    name = type_name or base_name

    if requested_type is not None:
        if is_single_attribute_type(requested_type):
            return resolve_and_materialize(_effective_map(context, type_map), name,
                                           requested_type, SingleAttributeInput(access))
        return access.get_object(requested_type)

    udt_map = _effective_map(context, type_map)
    for candidate in (type_name, base_name):
        handle = udt_map.lookup(candidate)
        if handle is not None:
            logger.debug(f'Type map entry {candidate} selects {handle!r}')
            return materialize(candidate, handle, SingleAttributeInput(access))
    return access.get_object()
