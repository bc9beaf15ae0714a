"""Fixed-width unsigned integers for public-key style arithmetic."""

from fixedint.bignum import FixedInt
from fixedint.constants import DEFAULT_BITS, FERMAT_TRIALS, WORD_BITS
from fixedint.entropy import EntropySource, set_seed
from fixedint.errors import (
    FixedIntError, InvalidFormat, InvalidWidth, Overflow, DivisionByZero,
    OperandWidthMismatch, NoInverseExists, EntropyError,
)
from fixedint.numtheory import gcd, exponentiation, inverse, prime_check
