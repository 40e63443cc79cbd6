"""
Custom type capability, construction handles and the type name registry.

A class takes part in single-attribute materialization by subclassing
`SingleAttributeType`. Construction always goes through an explicit
factory: the class's `create` classmethod unless a factory is registered
with the `UdtMap`.
"""
import abc
import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Self

logger = logging.getLogger(__name__)


class SingleAttributeType(abc.ABC):
    """Capability of custom types populated from exactly one scalar value.

    Subclasses implement `read_sql`, which must issue exactly one read
    against the stream. `create` must be callable without arguments; the
    default calls the class with no arguments.

    Usage:
        class Email(SingleAttributeType):
            def read_sql(self, stream, type_name):
                self.address = stream.read_string()
    """

    @classmethod
    def create(cls) -> Self:
        return cls()

    @abc.abstractmethod
    def read_sql(self, stream, type_name: str) -> None:
        """Populate self from the stream for backend type `type_name`.
        """


def is_single_attribute_type(target: Any) -> bool:
    """Check whether target is a class with the single-attribute capability.

    >>> is_single_attribute_type(str)
    False
    """
    return isinstance(target, type) and issubclass(target, SingleAttributeType)


class CustomTypeHandle:
    """A custom type class together with the factory that constructs it."""

    def __init__(self, type_: type, factory: Callable[[], Any] | None = None) -> None:
        self.type_ = type_
        self.factory = factory

    @property
    def name(self) -> str:
        return f'{self.type_.__module__}.{self.type_.__qualname__}'

    def create(self) -> Any:
        """Construct a new, unpopulated instance.
        """
        if self.factory is not None:
            return self.factory()
        return self.type_.create()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CustomTypeHandle):
            return NotImplemented
        return self.type_ is other.type_ and self.factory is other.factory

    def __hash__(self) -> int:
        return hash((self.type_, self.factory))

    def __repr__(self) -> str:
        return f'CustomTypeHandle({self.name})'


def _unqualified(type_name: str) -> str:
    return type_name.rsplit('.', 1)[-1]


class UdtMap(Mapping):
    """Backend type name to custom type registry of one connection.

    Lookups try the exact name first and then the name without its schema,
    so a class registered as `email` is found for `public.email`. Dispatch only reads
    from the map; registration happens while the connection is set up.
    """

    def __init__(self, entries: Mapping[str, type] | None = None) -> None:
        self._handles: dict[str, CustomTypeHandle] = {}
        for type_name, type_ in (entries or {}).items():
            self.register(type_name, type_)

    def register(self, type_name: str, type_: type,
                 factory: Callable[[], Any] | None = None) -> CustomTypeHandle:
        """Register a custom type class (and optional factory) for a type name.
        """
        if not is_single_attribute_type(type_):
            raise TypeError(f'{type_!r} does not implement SingleAttributeType')
        handle = CustomTypeHandle(type_, factory)
        self._handles[type_name] = handle
        logger.debug(f'Registered {handle!r} for backend type {type_name}')
        return handle

    def unregister(self, type_name: str) -> None:
        self._handles.pop(type_name, None)

    def lookup(self, type_name: str | None) -> CustomTypeHandle | None:
        """Find the handle registered for a backend type name, or None.
        """
        if not type_name:
            return None
        if type_name in self._handles:
            return self._handles[type_name]
        return self._handles.get(_unqualified(type_name))

    def handle_for_type(self, type_: type) -> CustomTypeHandle | None:
        """Find the handle registered for a class under any type name.
        """
        for handle in self._handles.values():
            if handle.type_ is type_:
                return handle
        return None

    def __getitem__(self, type_name: str) -> CustomTypeHandle:
        handle = self.lookup(type_name)
        if handle is None:
            raise KeyError(type_name)
        return handle

    def __iter__(self) -> Iterator[str]:
        return iter(self._handles)

    def __len__(self) -> int:
        return len(self._handles)

    def __repr__(self) -> str:
        return f'UdtMap({sorted(self._handles)})'


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
