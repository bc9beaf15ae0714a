"""Fixed-width unsigned integers stored as little-endian 32-bit words.

Arithmetic wraps modulo 2**bits: the carry out of the top word, product
words past the width and bits shifted off either end are all discarded.
That is the defined behaviour of the type, not an error. Size ``bits`` to at
least the sum of the operand bit lengths when a full product matters.
"""

import operator
import string
import sys

import numpy as np

from fixedint import entropy, numtheory, words
from fixedint.constants import DEFAULT_BITS, FERMAT_TRIALS, WORD_BITS, WORD_MASK
from fixedint.errors import InvalidFormat, InvalidWidth, OperandWidthMismatch, Overflow

HEX_DIGITS = frozenset(string.hexdigits)
HEX_CHUNK = WORD_BITS // 4  # hex digits per word


def word_count(bits):
    """Number of words backing a ``bits``-wide value."""
    if not isinstance(bits, int) or bits <= 0 or bits % WORD_BITS:
        raise InvalidWidth(f"width must be a positive multiple of {WORD_BITS}, got {bits!r}")
    return bits // WORD_BITS


def parse_hex(text, bits):
    """Parse hexadecimal text into a word array.

    The text is consumed in 8-digit chunks from its tail; a shorter leading
    chunk fills the last word it reaches. Leading zeros are accepted, but more
    significant digits than ``bits / 4`` raise Overflow.
    """
    count = word_count(bits)
    if not text:
        raise InvalidFormat("empty hexadecimal string")
    for ch in text:
        if ch not in HEX_DIGITS:
            raise InvalidFormat(f"found non-hexadecimal character {ch!r} in input string")
    significant = text.lstrip('0')
    if len(significant) > count * HEX_CHUNK:
        raise Overflow(f"{len(significant)} significant hex digits do not fit in {bits} bits")
    result = words.zeros(count)
    end = len(significant)
    i = 0
    while end > 0:
        start = max(0, end - HEX_CHUNK)
        result[i] = int(significant[start:end], 16)
        end = start
        i += 1
    return result


def _from_uint64(value, bits):
    count = word_count(bits)
    if not 0 <= value <= 0xFFFFFFFFFFFFFFFF:
        raise Overflow(f"{value} is not a 64-bit unsigned integer")
    result = words.zeros(count)
    result[0] = value & WORD_MASK
    if count > 1:
        result[1] = value >> WORD_BITS
    return result


def _int_outside(value, bits):
    """-1 below the range of a ``bits``-wide value, 1 above it, 0 inside."""
    if value < 0:
        return -1
    if value >> bits:
        return 1
    return 0


def _shift_count(shift):
    shift = operator.index(shift)
    if shift < 0:
        raise ValueError("negative shift count")
    return shift


class FixedInt:
    """Unsigned integer of a fixed width.

    ``value`` may be an int in ``[0, 2**64)``, a string of hex digits, or
    another FixedInt (its width then overrides ``bits``). Instances are
    immutable; every operation returns a new value.
    """

    __slots__ = ('bits', 'words')

    def __init__(self, value=0, bits=DEFAULT_BITS):
        if isinstance(value, FixedInt):
            bits = value.bits
            storage = value.words.copy()
        elif isinstance(value, str):
            storage = parse_hex(value, bits)
        elif isinstance(value, (int, np.integer)):
            storage = _from_uint64(int(value), bits)
        else:
            raise TypeError(f"Unsupported type for FixedInt initialization: {type(value).__name__}")
        storage.flags.writeable = False
        self.bits = bits
        self.words = storage

    @classmethod
    def _wrap(cls, storage, bits):
        # adopt a freshly computed word array without re-validating it
        obj = cls.__new__(cls)
        storage.flags.writeable = False
        obj.bits = bits
        obj.words = storage
        return obj

    @classmethod
    def zero(cls, bits=DEFAULT_BITS):
        return cls(0, bits=bits)

    @classmethod
    def one(cls, bits=DEFAULT_BITS):
        return cls(1, bits=bits)

    @classmethod
    def from_hex(cls, text, bits=DEFAULT_BITS):
        return cls(text, bits=bits)

    @classmethod
    def from_words(cls, values, bits=DEFAULT_BITS):
        """Build a value from ``bits / 32`` little-endian words."""
        values = [operator.index(v) for v in values]
        if len(values) != word_count(bits):
            raise ValueError(f"{bits}-bit value needs {bits // WORD_BITS} words, got {len(values)}")
        for v in values:
            if not 0 <= v <= WORD_MASK:
                raise Overflow(f"{v} is not a 32-bit word")
        return cls._wrap(np.array(values, dtype=np.uint32), bits)

    @classmethod
    def random(cls, bits=DEFAULT_BITS, max_bits=0, source=None):
        """Value whose low ``max_bits`` bits are uniformly random.

        ``max_bits=0`` randomizes every word; a bound past the width raises
        ValueError.
        """
        count = word_count(bits)
        if not 0 <= max_bits <= bits:
            raise ValueError(f"max_bits must be in [0, {bits}], got {max_bits}")
        if max_bits == 0:
            max_bits = bits
        if source is None:
            source = entropy.get_source()
        used = -(-max_bits // WORD_BITS)
        storage = words.zeros(count)
        storage[:used] = source.random_words(used)
        spare = used * WORD_BITS - max_bits
        if spare:
            storage[used - 1] &= np.uint32(WORD_MASK >> spare)
        return cls._wrap(storage, bits)

    def randomize(self, max_bits=0, source=None):
        """Random value of this width, see :meth:`random`."""
        return self.random(self.bits, max_bits, source)

    def copy(self):
        return FixedInt(self)

    def resize(self, bits):
        """Same value at another width; narrowing must not drop set bits."""
        count = word_count(bits)
        if self.num_bits() > bits:
            raise Overflow(f"{self.num_bits()}-bit value does not fit in {bits} bits")
        storage = words.zeros(count)
        kept = min(count, len(self.words))
        storage[:kept] = self.words[:kept]
        return self._wrap(storage, bits)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def _coerce(self, other):
        if isinstance(other, FixedInt):
            if other.bits != self.bits:
                raise OperandWidthMismatch(
                    f"cannot combine {self.bits}-bit and {other.bits}-bit operands")
            return other
        if isinstance(other, (int, np.integer)):
            if _int_outside(int(other), self.bits):
                raise Overflow(f"{other} does not fit in {self.bits} bits")
            return FixedInt(format(int(other), 'x'), bits=self.bits)
        return None

    def _require(self, other):
        coerced = self._coerce(other)
        if coerced is None:
            raise TypeError(f"expected FixedInt or int, got {type(other).__name__}")
        return coerced

    # comparison

    def _compare(self, other):
        if isinstance(other, (int, np.integer)):
            outside = _int_outside(int(other), self.bits)
            if outside:
                return -outside
        other = self._coerce(other)
        if other is None:
            return None
        return words.compare_words(self.words, other.words)

    def __eq__(self, other):
        if isinstance(other, (int, np.integer)) and _int_outside(int(other), self.bits):
            return False
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return bool(np.array_equal(self.words, other.words))

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other):
        result = self._compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other):
        result = self._compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other):
        result = self._compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other):
        result = self._compare(other)
        return NotImplemented if result is None else result >= 0

    def __hash__(self):
        return hash(self.to_int())

    def __bool__(self):
        return bool(self.words.any())

    def num_bits(self):
        """Number of bits needed to represent the value (0 for zero)."""
        return words.bit_length(self.words)

    def is_even(self):
        return not self.words[0] & 1

    def is_odd(self):
        return bool(self.words[0] & 1)

    # arithmetic, all modulo 2**bits

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._wrap(words.add_words(self.words, other.words), self.bits)

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        difference, _ = words.sub_words(self.words, other.words)
        return self._wrap(difference, self.bits)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._wrap(words.mul_words(self.words, other.words), self.bits)

    def __divmod__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        quotient, remainder = words.divmod_words(self.words, other.words)
        return self._wrap(quotient, self.bits), self._wrap(remainder, self.bits)

    def __floordiv__(self, other):
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[0]

    def __mod__(self, other):
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[1]

    def __lshift__(self, shift):
        return self._wrap(words.shl_words(self.words, _shift_count(shift)), self.bits)

    def __rshift__(self, shift):
        return self._wrap(words.shr_words(self.words, _shift_count(shift)), self.bits)

    # number theory

    def gcd(self, other):
        return numtheory.gcd(self, self._require(other))

    def exponentiation(self, exponent, modulus):
        """``self ** exponent % modulus``."""
        return numtheory.exponentiation(self, self._require(exponent), self._require(modulus))

    def inverse(self, modulus):
        """``x`` such that ``self * x % modulus == 1``."""
        return numtheory.inverse(self, self._require(modulus))

    def prime_check(self, trials=FERMAT_TRIALS, source=None):
        return numtheory.prime_check(self, trials=trials, source=source)

    # conversion and text

    def to_int(self):
        return int.from_bytes(self.words.astype('<u4').tobytes(), 'little')

    def __int__(self):
        return self.to_int()

    def to_hex(self):
        """Lower-case hex without prefix or leading zeros; zero renders as ``0``."""
        nonzero = np.flatnonzero(self.words)
        if len(nonzero) == 0:
            return '0'
        values = self.words[int(nonzero[-1])::-1].tolist()
        return format(values[0], 'x') + ''.join(format(w, '08x') for w in values[1:])

    def write(self, stream=None):
        """Write the hex rendering to ``stream`` (stdout by default)."""
        if stream is None:
            stream = sys.stdout
        stream.write(self.to_hex())

    def __str__(self):
        return self.to_hex()

    def __repr__(self):
        return f"FixedInt('{self.to_hex()}', bits={self.bits})"
