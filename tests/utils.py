"""Test utilities: conversions from Python ints, random operands."""

from fixedint import FixedInt


def to_fixed(value, bits=64):
    """FixedInt holding ``value`` (any width) via its hex rendering."""
    return FixedInt(format(value, 'x'), bits=bits)


def random_values(count, bits=64, max_bits=0):
    """Reproducible list of random FixedInt values."""
    return [FixedInt.random(bits, max_bits) for _ in range(count)]
