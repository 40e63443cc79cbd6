"""
Boolean coercion for values that are not stored as booleans.

Numbers follow the zero/nonzero rule unless the policy is strict, in which
case only 0 and 1 are accepted. Text accepts the spellings the server
itself accepts for boolean input.
"""
import decimal
import logging
from numbers import Number

from database_udt.exceptions import DataError

logger = logging.getLogger(__name__)

TRUE_STRINGS: set[str] = {'1', 't', 'true', 'y', 'yes', 'on'}
FALSE_STRINGS: set[str] = {'0', 'f', 'false', 'n', 'no', 'off'}


def _cannot_cast(value) -> DataError:
    return DataError(f'Cannot cast to boolean: {value!r}')


class BooleanCoercion:
    """Policy converting numbers and text to bool.

    >>> BooleanCoercion().from_number(2)
    True
    >>> BooleanCoercion(strict=True).from_string(' Yes ')
    True
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    @classmethod
    def from_options(cls, options) -> 'BooleanCoercion':
        return cls(strict=options.boolean_coercion == 'strict')

    def from_number(self, value: Number) -> bool:
        """Convert a number: zero is false, anything else is true.

        A strict policy rejects numbers other than 0 and 1, as does any
        policy for NaN.
        """
        if isinstance(value, float | decimal.Decimal) and value != value:
            raise _cannot_cast(value)
        if value == 0:
            return False
        if value == 1 or not self.strict:
            return True
        logger.debug(f'Strict boolean coercion rejected {value!r}')
        raise _cannot_cast(value)

    def from_string(self, value: str) -> bool:
        """Convert text, ignoring case and surrounding whitespace.

        Numeric text that is not a boolean spelling goes through
        `from_number`.
        """
        token = value.strip().lower()
        if token in TRUE_STRINGS:
            return True
        if token in FALSE_STRINGS:
            return False
        try:
            number = decimal.Decimal(token)
        except decimal.InvalidOperation:
            raise _cannot_cast(value) from None
        return self.from_number(number)

    def __repr__(self) -> str:
        return f'BooleanCoercion(strict={self.strict})'


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
