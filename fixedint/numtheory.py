"""Number-theoretic algorithms on FixedInt values.

Everything here is expressed through the FixedInt operators, so the usual
width rules apply: operands must share a width and intermediate products
wrap modulo 2**bits.
"""

import logging

from fixedint.constants import FERMAT_TRIALS
from fixedint.errors import DivisionByZero, NoInverseExists, OperandWidthMismatch

logger = logging.getLogger(__name__)


def _same_width(*values):
    widths = {value.bits for value in values}
    if len(widths) > 1:
        raise OperandWidthMismatch(f"operands have different widths: {sorted(widths)}")


def gcd(a, b):
    """Greatest common divisor by the Euclidean algorithm."""
    _same_width(a, b)
    while b:
        a, b = b, a % b
    return a


def exponentiation(base, exponent, modulus):
    """Compute ``base ** exponent % modulus`` by square-and-multiply.

    Exponent bits are consumed from the least significant end: the running
    base is squared every step and multiplied into the result when the bit
    is set. ``base`` is reduced modulo ``modulus`` first.

    A product of two residues needs twice the modulus bit length, so the
    loop runs at double width and the result is narrowed back at the end.
    """
    _same_width(base, exponent, modulus)
    if not modulus:
        raise DivisionByZero("modulus is zero")
    bits = modulus.bits
    modulus = modulus.resize(2 * bits)
    result = type(modulus).one(2 * bits) % modulus
    base = base.resize(2 * bits) % modulus
    while exponent:
        if exponent.is_odd():
            result = result * base % modulus
        base = base * base % modulus
        exponent = exponent >> 1
    return result.resize(bits)


def _signed_difference(x, x_negative, y, y_negative):
    # (±x) - (±y) as a (magnitude, negative) pair
    if x_negative != y_negative:
        return x + y, x_negative
    if x < y:
        return y - x, not x_negative
    return x - y, x_negative


def inverse(a, modulus):
    """Modular multiplicative inverse via the extended Euclidean algorithm.

    The Bezout coefficients are signed while the storage is not, so each
    coefficient travels as a (magnitude, negative) pair alongside the
    remainder sequence. Raises NoInverseExists when ``gcd(a, modulus) != 1``.
    """
    _same_width(a, modulus)
    if not modulus:
        raise DivisionByZero("modulus is zero")
    cls = type(a)
    if modulus == 1:
        return cls.zero(a.bits)
    r0, r1 = a, modulus
    x0, x0_negative = cls.zero(a.bits), False
    x1, x1_negative = cls.one(a.bits), False
    while r0 > 1:
        if not r1:
            raise NoInverseExists(f"{a} and {modulus} share the factor {r0}")
        q, r = divmod(r0, r1)
        r0, r1 = r1, r
        x0_next = _signed_difference(x1, x1_negative, q * x0, x0_negative)
        x1, x1_negative = x0, x0_negative
        x0, x0_negative = x0_next
    if not r0:
        raise NoInverseExists(f"{a} has no inverse modulo {modulus}")
    if x1_negative:
        return (modulus - x1) % modulus
    return x1 % modulus


def _random_base(n, source):
    """Uniform base in ``[2, n - 2]`` drawn with at most ``num_bits(n - 1)`` bits."""
    width = (n - 1).num_bits()
    limit = n - 2
    while True:
        a = n.randomize(width, source=source)
        if 1 < a <= limit:
            return a


def prime_check(n, trials=FERMAT_TRIALS, source=None):
    """Fermat probable-prime test.

    A ``False`` answer is always correct. ``True`` means none of ``trials``
    random bases was a witness; Carmichael numbers can pass when every drawn
    base happens to be coprime to them.
    """
    if n < 2:
        return False
    if n < 4:
        return True
    if n.is_even():
        return False
    high = n - 1
    for trial in range(trials):
        a = _random_base(n, source)
        if gcd(n, a) != 1:
            logger.debug("trial %d: base %s shares a factor with %s", trial, a, n)
            return False
        if exponentiation(a, high, n) != 1:
            logger.debug("trial %d: base %s is a Fermat witness for %s", trial, a, n)
            return False
    logger.debug("%s passed %d Fermat trials", n, trials)
    return True
