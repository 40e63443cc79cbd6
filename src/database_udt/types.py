"""
Backend scalar types and the decoded values handed over by the decoder.

Type oids are looked up in psycopg's registry of builtin PostgreSQL types
rather than hard-coded, so the names used here are the server's names.
"""
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
from psycopg.postgres import types as pg_types

_oid = lambda x: pg_types.get(x).oid

INT2 = _oid('int2')
INT4 = _oid('int4')
INT8 = _oid('int8')
FLOAT4 = _oid('float4')
FLOAT8 = _oid('float8')
NUMERIC = _oid('numeric')
BOOL = _oid('bool')
TEXT = _oid('text')
VARCHAR = _oid('varchar')
BPCHAR = _oid('bpchar')
NAME = _oid('name')
CHAR = _oid('"char"')
UNSPECIFIED = 0

_NULL_SENTINELS = (pd.NA, pd.NaT)


def is_null(value: Any) -> bool:
    """Check whether a decoded value stands for SQL NULL.

    >>> is_null(None)
    True
    >>> is_null(float('nan'))
    False
    >>> is_null(np.datetime64('NaT'))
    True
    """
    if value is None:
        return True
    if isinstance(value, np.datetime64 | np.timedelta64) and np.isnat(value):
        return True
    return any(value is sentinel for sentinel in _NULL_SENTINELS)


def base_type_name(oid: int) -> str | None:
    """Return the server's name for a builtin type oid, or None.

    >>> base_type_name(25)
    'text'
    """
    info = pg_types.get(oid)
    if info is None:
        return None
    return info.name


@dataclass(frozen=True)
class ScalarValue:
    """One decoded backend value plus the oid it was decoded as."""

    value: Any
    oid: int = UNSPECIFIED

    @property
    def is_null(self) -> bool:
        return is_null(self.value)

    def __repr__(self) -> str:
        shown = 'NULL' if self.is_null else repr(self.value)
        return f'ScalarValue({shown}, oid={self.oid})'


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
