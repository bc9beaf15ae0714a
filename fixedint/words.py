"""Word-level kernels over little-endian ``uint32`` arrays.

Every kernel takes arrays of equal length and returns a fresh array of that
same length. The length is the whole notion of width here: anything that
would land past the top word is dropped.
"""

import numpy as np

from fixedint.constants import WORD_BITS, WORD_MASK
from fixedint.errors import DivisionByZero


def zeros(count):
    return np.zeros(count, dtype=np.uint32)


def bit_length(a):
    """Index of the highest set bit plus one, 0 for an all-zero array."""
    nonzero = np.flatnonzero(a)
    if len(nonzero) == 0:
        return 0
    top = int(nonzero[-1])
    return top * WORD_BITS + int(a[top]).bit_length()


def compare_words(a, b):
    """Three-way compare decided by the most significant differing word."""
    differ = np.flatnonzero(a != b)
    if len(differ) == 0:
        return 0
    top = differ[-1]
    return -1 if a[top] < b[top] else 1


def add_words(a, b):
    """Ripple-carry addition; the carry out of the top word is discarded."""
    result = []
    carry = 0
    for x, y in zip(a.tolist(), b.tolist()):
        total = x + y + carry
        result.append(total & WORD_MASK)
        carry = total >> WORD_BITS
    return np.array(result, dtype=np.uint32)


def sub_words(a, b):
    """Subtract with borrow.

    Returns ``(difference, borrow)``. A set borrow means ``a < b`` and the
    difference holds the two's complement wraparound value.
    """
    result = []
    borrow = 0
    for x, y in zip(a.tolist(), b.tolist()):
        diff = x - y - borrow
        borrow = 1 if diff < 0 else 0
        result.append(diff & WORD_MASK)
    return np.array(result, dtype=np.uint32), borrow


def mul_words(a, b):
    """Schoolbook product keeping only the low ``len(a)`` words.

    Each 64-bit partial product is split into its low and high halves, and
    the halves are summed column by column in uint64 (at most 2n terms below
    2**32 per column). One carry pass then folds the columns back into
    32-bit words. Columns at index >= len(a) are never formed.
    """
    n = len(a)
    partial = np.outer(a.astype(np.uint64), b.astype(np.uint64))
    low = partial & np.uint64(WORD_MASK)
    high = partial >> np.uint64(WORD_BITS)
    columns = np.zeros(n, dtype=np.uint64)
    for i in range(n):
        columns[i:] += low[i, :n - i]
        columns[i + 1:] += high[i, :n - i - 1]
    result = []
    carry = 0
    for column in columns.tolist():
        total = column + carry
        result.append(total & WORD_MASK)
        carry = total >> WORD_BITS
    return np.array(result, dtype=np.uint32)


def shl_words(a, shift):
    """Logical left shift. Bits pushed past the top word are lost."""
    n = len(a)
    if shift >= n * WORD_BITS:
        return zeros(n)
    whole, part = divmod(shift, WORD_BITS)
    wide = a.astype(np.uint64)
    result = np.zeros(n, dtype=np.uint64)
    result[whole:] = wide[:n - whole] << np.uint64(part)
    if part:
        # spill of each source word into the next destination word
        result[whole + 1:] |= wide[:n - whole - 1] >> np.uint64(WORD_BITS - part)
    return (result & np.uint64(WORD_MASK)).astype(np.uint32)


def shr_words(a, shift):
    """Logical right shift. Bits pushed past word 0 are lost."""
    n = len(a)
    if shift >= n * WORD_BITS:
        return zeros(n)
    whole, part = divmod(shift, WORD_BITS)
    wide = a.astype(np.uint64)
    result = np.zeros(n, dtype=np.uint64)
    result[:n - whole] = wide[whole:] >> np.uint64(part)
    if part:
        result[:n - whole - 1] |= wide[whole + 1:] << np.uint64(WORD_BITS - part)
    return (result & np.uint64(WORD_MASK)).astype(np.uint32)


def divmod_words(a, b):
    """Binary long division by shift-and-subtract.

    The divisor is shifted left until its top bit lines up with the
    dividend's, then tried against the running remainder one bit position at
    a time. Positions where the subtraction does not borrow are committed and
    become quotient bits. Returns ``(quotient, remainder)``.
    """
    divisor_bits = bit_length(b)
    if divisor_bits == 0:
        raise DivisionByZero("division by zero")
    if compare_words(a, b) < 0:
        return zeros(len(a)), a.copy()
    offset = bit_length(a) - divisor_bits
    divisor = shl_words(b, offset)
    remainder = a.copy()
    quotient = zeros(len(a))
    for position in range(offset, -1, -1):
        difference, borrow = sub_words(remainder, divisor)
        if not borrow:
            remainder = difference
            quotient[position // WORD_BITS] |= np.uint32(1 << (position % WORD_BITS))
        divisor = shr_words(divisor, 1)
    return quotient, remainder
