"""
Materialization of single-attribute custom types.

Only scalar custom types are supported (DOMAIN and ENUM values mapped onto
a class). The dispatcher constructs the instance through its factory, lets
it read its one attribute from the stream and checks that it did.
"""
import logging
from typing import Any

from database_udt.bridge import SingleAttributeInput
from database_udt.exceptions import DataError, DriverSystemError
from database_udt.exceptions import FeatureNotSupported
from database_udt.udt import CustomTypeHandle, SingleAttributeType, UdtMap
from database_udt.udt import is_single_attribute_type

logger = logging.getLogger(__name__)


def _type_label(target: Any) -> str:
    if isinstance(target, type):
        return f'{target.__module__}.{target.__qualname__}'
    return repr(target)


def _as_handle(target: type | CustomTypeHandle) -> CustomTypeHandle:
    if isinstance(target, CustomTypeHandle):
        if not is_single_attribute_type(target.type_):
            raise FeatureNotSupported(
                f'Custom type does not implement SingleAttributeType: {target.name}')
        return target
    if not is_single_attribute_type(target):
        raise FeatureNotSupported(
            f'Custom type does not implement SingleAttributeType: {_type_label(target)}')
    return CustomTypeHandle(target)


def _construct(handle: CustomTypeHandle) -> SingleAttributeType:
    try:
        instance = handle.create()
    except Exception as e:
        logger.debug(f'Construction of {handle.name} failed: {e}')
        raise DriverSystemError(f'Could not construct {handle.name}: {e}') from e
    if not isinstance(instance, SingleAttributeType):
        raise DriverSystemError(
            f'Factory of {handle.name} returned {type(instance).__name__}, '
            'not a SingleAttributeType instance')
    return instance


def materialize(type_name: str, target: type | CustomTypeHandle,
                stream: SingleAttributeInput) -> SingleAttributeType:
    """Construct a custom type instance and populate it from one attribute.

    Args:
        type_name: Backend type name, passed on to `read_sql`
        target: SingleAttributeType subclass or a handle carrying its factory
        stream: Input stream over the attribute

    Returns
        The populated instance; never None

    Raises
        FeatureNotSupported: target lacks the single-attribute capability
        DriverSystemError: the factory failed or returned a wrong object
        DataError: the instance read no attribute, or a read failed
    """
    handle = _as_handle(target)
    instance = _construct(handle)
    instance.read_sql(stream, type_name)
    if not stream.read_done:
        raise DataError(f'No attributes read by custom type instance of {handle.name}')
    logger.debug(f'Materialized {handle.name} from backend type {type_name}')
    return instance


def resolve_and_materialize(udt_map: UdtMap | None, type_name: str,
                            requested_type: type,
                            stream: SingleAttributeInput) -> SingleAttributeType:
    """Materialize a value as the type the caller asked for.

    Used when the server reported the base type of a domain, so the custom
    type can only be inferred from the requested class. A factory registered
    for the class in `udt_map` takes precedence over the class's own.

    Raises
        FeatureNotSupported: requested_type lacks the single-attribute
            capability; nothing is constructed
    """
    if not is_single_attribute_type(requested_type):
        raise FeatureNotSupported(
            f'Custom type does not implement SingleAttributeType: {_type_label(requested_type)}')
    handle = udt_map.handle_for_type(requested_type) if udt_map is not None else None
    return materialize(type_name, handle or requested_type, stream)
