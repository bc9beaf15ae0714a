"""Exceptions raised by FixedInt operations.

Each error also derives from the closest builtin, so ``except ValueError``
and friends keep working for callers that do not know about this package.
"""


class FixedIntError(Exception):
    """Base class for all fixedint errors."""


class InvalidFormat(FixedIntError, ValueError):
    """Hexadecimal input contains a non-hex character or no digits at all."""


class InvalidWidth(FixedIntError, ValueError):
    """Requested width is not a positive multiple of the word size."""


class Overflow(FixedIntError, OverflowError):
    """Input does not fit the configured width."""


class DivisionByZero(FixedIntError, ZeroDivisionError):
    """Division, modulo or a modular operation with a zero divisor."""


class OperandWidthMismatch(FixedIntError, TypeError):
    """Two operands with different widths were combined."""


class NoInverseExists(FixedIntError, ArithmeticError):
    """The operands of a modular inverse are not coprime."""


class EntropyError(FixedIntError, RuntimeError):
    """The operating system could not supply random bytes."""
