"""
Exception classes for value access and custom type materialization.

Each class carries the SQLSTATE a server would report for the same
condition, so callers can treat driver-side and server-side failures alike.
"""
import psycopg

DATA_ERROR = '22000'
NUMERIC_VALUE_OUT_OF_RANGE = '22003'
INVALID_TEXT_REPRESENTATION = '22P02'
FEATURE_NOT_SUPPORTED = '0A000'
SYSTEM_ERROR = '60000'


class DatabaseError(Exception):
    """Base class for all database_udt errors.
    """

    sqlstate: str | None = None

    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        if sqlstate is not None:
            self.sqlstate = sqlstate


class DataError(DatabaseError):
    """Value cannot be converted, or a custom type read no attributes.
    """

    sqlstate = DATA_ERROR


class NumericValueOutOfRange(DataError):
    """Requested numeric target cannot represent the value.
    """

    sqlstate = NUMERIC_VALUE_OUT_OF_RANGE


class InvalidTextRepresentation(DataError):
    """Text value does not parse as the requested type.
    """

    sqlstate = INVALID_TEXT_REPRESENTATION


class DriverSystemError(DatabaseError):
    """Construction of a custom type instance failed.

    Indicates a registration bug on the caller side, never a data issue.
    """

    sqlstate = SYSTEM_ERROR


class FeatureNotSupported(DatabaseError, NotImplementedError):
    """Requested custom type or read pattern is not supported.
    """

    sqlstate = FEATURE_NOT_SUPPORTED


DataErrors = (
    psycopg.DataError,
    DataError,
    )

NotSupportedErrors = (
    psycopg.NotSupportedError,
    FeatureNotSupported,
    )

SystemErrors = (
    psycopg.InternalError,
    DriverSystemError,
    )
