"""
Single-attribute input stream handed to custom types.

A custom type populates itself by issuing typed "next attribute" reads
against the stream. Only scalar (single attribute) types are supported, so
the stream allows exactly one read: the first read moves it from UNREAD to
READ_DONE and any later read is rejected with FeatureNotSupported.
"""
import datetime
import decimal
import enum
import logging
from collections.abc import Callable
from typing import Any

from database_udt.access import ValueAccess
from database_udt.exceptions import FeatureNotSupported

logger = logging.getLogger(__name__)


class ReadState(enum.Enum):
    UNREAD = 'unread'
    READ_DONE = 'read_done'


class SingleAttributeInput:
    """Input stream over exactly one ValueAccess.

    Usage:
        stream = SingleAttributeInput(access)
        stream.read_string()   # 'a@b.com'
        stream.read_done       # True
        stream.read_string()   # raises FeatureNotSupported
    """

    def __init__(self, access: ValueAccess) -> None:
        self.access = access
        self.state = ReadState.UNREAD
        self._was_null = False

    @property
    def read_done(self) -> bool:
        return self.state is ReadState.READ_DONE

    def was_null(self) -> bool:
        """Whether the attribute read was SQL NULL.
        """
        return self._was_null

    def _read(self, kind: str, getter: Callable[[], Any]) -> Any:
        """Single dispatch point for every read.

        The state only changes once the getter has returned, so a failed
        conversion leaves the stream UNREAD.
        """
        if self.state is ReadState.READ_DONE:
            raise FeatureNotSupported(
                f'Only a single attribute can be read from {self.access._type_name}, '
                f'second read as {kind} rejected')
        value = getter()
        self._was_null = self.access.is_null
        self.state = ReadState.READ_DONE
        logger.debug(f'Read {kind} attribute from {self.access!r}')
        return value

    def read_string(self) -> str | None:
        return self._read('string', self.access.get_string)

    def read_boolean(self) -> bool:
        return self._read('boolean', self.access.get_boolean)

    def read_byte(self) -> int:
        return self._read('byte', self.access.get_byte)

    def read_short(self) -> int:
        return self._read('short', self.access.get_short)

    def read_int(self) -> int:
        return self._read('int', self.access.get_int)

    def read_long(self) -> int:
        return self._read('long', self.access.get_long)

    def read_float(self) -> float:
        return self._read('float', self.access.get_float)

    def read_double(self) -> float:
        return self._read('double', self.access.get_double)

    def read_decimal(self) -> decimal.Decimal | None:
        return self._read('decimal', self.access.get_decimal)

    def read_bytes(self) -> bytes | None:
        return self._read('bytes', self.access.get_bytes)

    def read_date(self) -> datetime.date | None:
        return self._read('date', self.access.get_date)

    def read_timestamp(self) -> datetime.datetime | None:
        return self._read('timestamp', self.access.get_timestamp)

    def read_object(self, target: type | None = None) -> Any:
        return self._read('object', lambda: self.access.get_object(target))

    def __repr__(self) -> str:
        return f'SingleAttributeInput({self.access!r}, state={self.state.name})'
