"""
Typed access to one decoded backend value.

A ValueAccess wraps a single `ScalarValue` and exposes one getter per
target kind (string, boolean, byte, short, int, long, float, double,
decimal, bytes, date, timestamp, object). Conversions follow the backend
type's semantics rather than generic parsing:

1. NULL never raises: every getter returns its default and `is_null` is set
2. Integral values become exact decimals with exponent 0
3. Narrowing to a fixed-width target raises NumericValueOutOfRange, except
   int2 read as a byte, which keeps the low 8 bits like the rest of the
   driver does (unless the connection enables strict narrowing)
4. Booleans are derived through the connection's BooleanCoercion policy

Usage:
    access = create_value_access(context, types.INT2, 300)
    access.get_byte()       # 44
    access.get_decimal()    # Decimal('300')
"""
import datetime
import decimal
import logging
import math
import re
from typing import Any

import dateutil.parser
import numpy as np

from database_udt import types
from database_udt.exceptions import DataError, FeatureNotSupported
from database_udt.exceptions import InvalidTextRepresentation
from database_udt.exceptions import NumericValueOutOfRange
from database_udt.types import ScalarValue

logger = logging.getLogger(__name__)

_FLOAT4_MAX = float(np.finfo(np.float32).max)

_INTEGER_RE = re.compile(r'^[+-]?\d+$')
_DECIMAL_RE = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')

_PG_FLOAT_SPECIALS = {'nan': 'NaN', 'inf': 'Infinity', '-inf': '-Infinity'}

_ACCESS_REGISTRY: dict[int, type['ValueAccess']] = {}

_SHOWN_LIMIT = 40


def _shown(value: Any) -> str:
    """Text of a number for an error message, shortened when long.

    >>> _shown(300)
    '300'
    >>> _shown(10 ** 5000)
    '10000000000000000000...(5001 digits)'
    >>> _shown(decimal.Decimal('1e5000'))
    '1E+5000'
    """
    if isinstance(value, int):
        value = decimal.Decimal(value)
    text = str(value)
    if len(text) > _SHOWN_LIMIT:
        return f'{text[:_SHOWN_LIMIT // 2]}...({len(text)} digits)'
    return text


def register_value_access(cls: type['ValueAccess']) -> type['ValueAccess']:
    """Class decorator registering an accessor for the oids it declares.
    """
    for oid in cls.oids:
        _ACCESS_REGISTRY[oid] = cls
    return cls


class ValueAccess:
    """Base class for typed access to one decoded value.

    Subclasses implement the `_to_*` hooks for the conversions their
    backend type supports; the public getters take care of NULL. Hooks
    that are not overridden raise DataError.
    """

    oids: tuple[int, ...] = ()

    def __init__(self, context, value: Any, oid: int | None = None) -> None:
        if isinstance(value, ScalarValue):
            if oid is None and value.oid != types.UNSPECIFIED:
                oid = value.oid
            value = value.value
        if oid is None:
            oid = self.oids[0] if self.oids else types.UNSPECIFIED
        self.context = context
        self._oid = oid
        if not types.is_null(value):
            value = self._coerce(value)
        self.scalar = ScalarValue(value, oid)

    def _coerce(self, value: Any) -> Any:
        return value

    @property
    def _type_name(self) -> str:
        return types.base_type_name(self._oid) or f'oid {self._oid}'

    @property
    def value(self) -> Any:
        return self.scalar.value

    @property
    def is_null(self) -> bool:
        return self.scalar.is_null

    def get_string(self) -> str | None:
        return None if self.is_null else self._to_string()

    def get_boolean(self) -> bool:
        return False if self.is_null else self._to_boolean()

    def get_byte(self) -> int:
        return 0 if self.is_null else self._to_byte()

    def get_short(self) -> int:
        return 0 if self.is_null else self._to_short()

    def get_int(self) -> int:
        return 0 if self.is_null else self._to_int()

    def get_long(self) -> int:
        return 0 if self.is_null else self._to_long()

    def get_float(self) -> float:
        return 0.0 if self.is_null else self._to_float()

    def get_double(self) -> float:
        return 0.0 if self.is_null else self._to_double()

    def get_decimal(self) -> decimal.Decimal | None:
        return None if self.is_null else self._to_decimal()

    def get_bytes(self) -> bytes | None:
        return None if self.is_null else self._to_bytes()

    def get_date(self) -> datetime.date | None:
        return None if self.is_null else self._to_date()

    def get_timestamp(self) -> datetime.datetime | None:
        return None if self.is_null else self._to_timestamp()

    def get_object(self, target: type | None = None) -> Any:
        """Get the value as its natural Python type, or as `target`.

        `target` is one of the builtin types with a getter; custom types
        go through the dispatcher instead.
        """
        if self.is_null:
            return None
        if target is None:
            return self._to_object()
        getter = _OBJECT_GETTERS.get(target)
        if getter is None:
            raise FeatureNotSupported(
                f'Conversion of {self._type_name} to '
                f'{getattr(target, "__name__", target)!s} is not supported')
        return getter(self)

    # conversion hooks

    def _unsupported(self, kind: str) -> DataError:
        logger.debug(f'No {kind} conversion for {self._type_name} value {self.value!r}')
        return DataError(f'Cannot convert the column of type {self._type_name} '
                         f'to requested type {kind}.')

    def _narrow(self, value: int | float | decimal.Decimal, dtype: type,
                kind: str) -> int:
        # compare before int(): 1e1000000 would expand to a million digits
        info = np.iinfo(dtype)
        if info.min <= value <= info.max:
            return int(value)
        raise NumericValueOutOfRange(f'Bad value for type {kind} : {_shown(value)}')

    def _to_string(self) -> str:
        return str(self.value)

    def _to_boolean(self) -> bool:
        raise self._unsupported('boolean')

    def _to_byte(self) -> int:
        return self._narrow(self._to_long(), np.int8, 'byte')

    def _to_short(self) -> int:
        return self._narrow(self._to_long(), np.int16, 'short')

    def _to_int(self) -> int:
        return self._narrow(self._to_long(), np.int32, 'int')

    def _to_long(self) -> int:
        raise self._unsupported('long')

    def _to_float(self) -> float:
        value = self._to_double()
        if math.isfinite(value) and abs(value) > _FLOAT4_MAX:
            raise NumericValueOutOfRange(f'Bad value for type float : {value}')
        return float(np.float32(value))

    def _to_double(self) -> float:
        raise self._unsupported('double')

    def _to_decimal(self) -> decimal.Decimal:
        raise self._unsupported('decimal')

    def _to_bytes(self) -> bytes:
        return self._to_string().encode()

    def _to_date(self) -> datetime.date:
        raise self._unsupported('date')

    def _to_timestamp(self) -> datetime.datetime:
        raise self._unsupported('timestamp')

    def _to_object(self) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.scalar!r})'


_OBJECT_GETTERS = {
    str: ValueAccess.get_string,
    bool: ValueAccess.get_boolean,
    int: ValueAccess.get_long,
    float: ValueAccess.get_double,
    decimal.Decimal: ValueAccess.get_decimal,
    bytes: ValueAccess.get_bytes,
    datetime.date: ValueAccess.get_date,
    datetime.datetime: ValueAccess.get_timestamp,
}


class IntegralValueAccess(ValueAccess):
    """Shared conversions of the integer types."""

    def _coerce(self, value):
        return int(value)

    def _to_boolean(self):
        return self.context.boolean_coercion.from_number(self.value)

    def _to_long(self):
        return self._narrow(self.value, np.int64, 'long')

    def _to_double(self):
        return float(self.value)

    def _to_decimal(self):
        return decimal.Decimal(self.value)


@register_value_access
class Int2ValueAccess(IntegralValueAccess):
    """Access to an `int2` (smallint) value."""

    oids = (types.INT2,)

    def _to_byte(self):
        if self.context.strict_narrowing:
            return super()._to_byte()
        return np.int64(self.value).astype(np.int8).item()


@register_value_access
class Int4ValueAccess(IntegralValueAccess):
    oids = (types.INT4,)


@register_value_access
class Int8ValueAccess(IntegralValueAccess):
    oids = (types.INT8,)


class FloatingValueAccess(ValueAccess):
    """Shared conversions of `float4` and `float8`.

    Integral targets truncate toward zero; NaN and infinities have no
    integral or decimal form.
    """

    def _coerce(self, value):
        return float(value)

    def _finite(self, kind: str) -> float:
        if not math.isfinite(self.value):
            raise DataError(f'Bad value for type {kind} : {self._to_string()}')
        return self.value

    def _to_string(self):
        text = self._render()
        return _PG_FLOAT_SPECIALS.get(text, text)

    def _render(self) -> str:
        return repr(self.value)

    def _to_boolean(self):
        return self.context.boolean_coercion.from_number(self.value)

    def _to_long(self):
        return self._narrow(self._finite('long'), np.int64, 'long')

    def _to_double(self):
        return self.value

    def _to_decimal(self):
        self._finite('decimal')
        return decimal.Decimal(self._render())


@register_value_access
class Float4ValueAccess(FloatingValueAccess):
    oids = (types.FLOAT4,)

    def _coerce(self, value):
        return float(np.float32(value))

    def _render(self):
        return str(np.float32(self.value))


@register_value_access
class Float8ValueAccess(FloatingValueAccess):
    oids = (types.FLOAT8,)


@register_value_access
class NumericValueAccess(ValueAccess):
    """Access to a `numeric` value held as a Decimal."""

    oids = (types.NUMERIC,)

    def _coerce(self, value):
        if isinstance(value, decimal.Decimal):
            return value
        if isinstance(value, int):
            return decimal.Decimal(value)
        if isinstance(value, float):
            return decimal.Decimal(repr(value))
        return decimal.Decimal(str(value))

    def _to_string(self):
        if self.value.is_nan():
            return 'NaN'
        return format(self.value, 'f')

    def _to_boolean(self):
        return self.context.boolean_coercion.from_number(self.value)

    def _to_long(self):
        if not self.value.is_finite():
            raise DataError(f'Bad value for type long : {self._to_string()}')
        return self._narrow(self.value, np.int64, 'long')

    def _to_double(self):
        return float(self.value)

    def _to_decimal(self):
        return self.value


@register_value_access
class BoolValueAccess(ValueAccess):
    """Access to a `bool` value, rendered as text the way the server does."""

    oids = (types.BOOL,)

    def _coerce(self, value):
        return bool(value)

    def _to_string(self):
        return 't' if self.value else 'f'

    def _to_boolean(self):
        return self.value

    def _to_long(self):
        return int(self.value)

    def _to_double(self):
        return float(self.value)

    def _to_decimal(self):
        return decimal.Decimal(int(self.value))


@register_value_access
class TextValueAccess(ValueAccess):
    """Access to a textual value.

    Numeric getters parse the text (surrounding whitespace ignored);
    fractional text read as an integer truncates toward zero.
    """

    oids = (types.TEXT, types.VARCHAR, types.BPCHAR, types.NAME, types.CHAR)

    def _coerce(self, value):
        if isinstance(value, bytes | bytearray | memoryview):
            return bytes(value).decode()
        return str(value)

    @property
    def _text(self) -> str:
        return self.value

    def _bad_value(self, kind: str) -> InvalidTextRepresentation:
        return InvalidTextRepresentation(f'Bad value for type {kind} : {self._text}')

    def _parse_decimal(self, kind: str) -> decimal.Decimal:
        text = self._text.strip()
        if _DECIMAL_RE.match(text) is None and text.lower() != 'nan':
            raise self._bad_value(kind)
        return decimal.Decimal(text)

    def _to_string(self):
        return self._text

    def _to_boolean(self):
        return self.context.boolean_coercion.from_string(self._text)

    def _to_long(self):
        text = self._text.strip()
        if _INTEGER_RE.match(text):
            return self._narrow(decimal.Decimal(text), np.int64, 'long')
        number = self._parse_decimal('long')
        if not number.is_finite():
            raise self._bad_value('long')
        return self._narrow(number, np.int64, 'long')

    def _to_double(self):
        text = self._text.strip()
        if '_' in text:
            raise self._bad_value('double')
        try:
            return float(text)
        except ValueError:
            raise self._bad_value('double') from None

    def _to_decimal(self):
        return self._parse_decimal('decimal')

    def _to_bytes(self):
        return self._text.encode()

    def _parse_iso(self, kind: str) -> datetime.datetime:
        try:
            return dateutil.parser.isoparse(self._text.strip())
        except ValueError:
            raise self._bad_value(kind) from None

    def _to_date(self):
        return self._parse_iso('date').date()

    def _to_timestamp(self):
        return self._parse_iso('timestamp')


class ObjectValueAccess(TextValueAccess):
    """Fallback for oids without a dedicated accessor.

    The value is kept as decoded; conversions work on its text form.
    """

    oids = ()

    def _coerce(self, value):
        return value

    @property
    def _text(self):
        if isinstance(self.value, bytes | bytearray | memoryview):
            return bytes(self.value).decode(errors='replace')
        return str(self.value)

    def _to_bytes(self):
        if isinstance(self.value, bytes | bytearray | memoryview):
            return bytes(self.value)
        return super()._to_bytes()

    def _to_object(self):
        return self.value


def create_value_access(context, oid: int, value: Any) -> ValueAccess:
    """Wrap a decoded value in the accessor for its backend type.

    Never fails: oids without a registered accessor get a TextValueAccess
    for text values and an ObjectValueAccess otherwise.
    """
    cls = _ACCESS_REGISTRY.get(oid)
    if cls is None:
        cls = TextValueAccess if isinstance(value, str) else ObjectValueAccess
        logger.debug(f'No accessor registered for oid {oid}, using {cls.__name__}')
    return cls(context, value, oid)
