"""Tests for gcd, modular exponentiation, modular inverse and the Fermat test."""

import math

import pytest

from fixedint import (DivisionByZero, FixedInt, NoInverseExists, OperandWidthMismatch,
                      exponentiation, gcd, inverse, prime_check)
from tests.utils import random_values, to_fixed

SMALL_PRIMES = [2, 3, 5, 7, 11, 13, 97, 101, 65537, 2147483647]
COMPOSITES = [0, 1, 4, 9, 15, 91, 341, 1001, 4294967297]


def test_gcd():
    assert FixedInt(12).gcd(FixedInt(18)) == 6
    assert FixedInt(17).gcd(FixedInt(5)) == 1


def test_gcd_with_zero():
    assert FixedInt(42).gcd(FixedInt(0)) == 42
    assert FixedInt(0).gcd(FixedInt(42)) == 42


def test_gcd_euclid_step():
    values = random_values(10, bits=128, max_bits=100)
    for a, b in zip(values, values[1:]):
        assert gcd(a, b) == gcd(b, a % b)
        assert int(gcd(a, b)) == math.gcd(int(a), int(b))


def test_gcd_accepts_int():
    assert FixedInt(21).gcd(14) == 7


def test_exponentiation():
    assert FixedInt(3).exponentiation(FixedInt(5), FixedInt(7)) == 5


def test_exponentiation_function():
    assert exponentiation(FixedInt(2), FixedInt(10), FixedInt(1000)) == 24


def test_exponentiation_zero_exponent():
    assert FixedInt(5).exponentiation(0, 7) == 1


def test_exponentiation_modulus_one():
    assert FixedInt(5).exponentiation(3, 1) == 0


def test_exponentiation_reduces_base():
    assert FixedInt(10).exponentiation(2, 7) == pow(10, 2, 7)


def test_exponentiation_matches_pow():
    bits = 256
    moduli = random_values(4, bits=bits, max_bits=120)
    for m in moduli:
        m = m + 1
        base = FixedInt.random(bits, 120) % m
        exponent = FixedInt.random(bits, 40)
        expected = pow(int(base), int(exponent), int(m))
        assert int(base.exponentiation(exponent, m)) == expected


def test_exponentiation_zero_modulus():
    with pytest.raises(DivisionByZero):
        FixedInt(3).exponentiation(2, 0)


def test_exponentiation_full_width_modulus():
    m = FixedInt(0xFFFFFFFB, bits=32)
    assert int(FixedInt(3, bits=32).exponentiation(5, m)) == pow(3, 5, 0xFFFFFFFB)
    base = FixedInt('fffffffa', bits=32)
    exponent = FixedInt('deadbeef', bits=32)
    assert int(base.exponentiation(exponent, m)) == pow(0xFFFFFFFA, 0xDEADBEEF, 0xFFFFFFFB)


def test_exponentiation_near_full_width_matches_pow():
    bits = 128
    modulus = (1 << 127) - 1
    for base in random_values(3, bits=bits, max_bits=126):
        exponent = FixedInt.random(bits, 48)
        result = base.exponentiation(exponent, to_fixed(modulus, bits))
        assert result.bits == bits
        assert int(result) == pow(int(base), int(exponent), modulus)


def test_exponentiation_width_mismatch():
    with pytest.raises(OperandWidthMismatch):
        exponentiation(FixedInt(3), FixedInt(5, bits=128), FixedInt(7))


def test_inverse():
    assert FixedInt(3).inverse(FixedInt(11)) == 4
    assert inverse(FixedInt(7), FixedInt(40)) == 23


def test_inverse_of_one():
    assert FixedInt(1).inverse(11) == 1


def test_inverse_operand_larger_than_modulus():
    assert FixedInt(12).inverse(11) == 1
    assert FixedInt(25).inverse(11) == pow(25, -1, 11)


def test_inverse_modulus_one():
    assert FixedInt(5).inverse(1) == 0


def test_inverse_property():
    modulus = to_fixed(0xFFFFFFFFFFFFFFC5, bits=128)  # largest 64-bit prime
    for a in random_values(8, bits=128, max_bits=63):
        if not a:
            continue
        x = a.inverse(modulus)
        assert (a * x) % modulus == 1
        assert x < modulus


def test_inverse_matches_pow():
    for a, m in [(17, 3120), (65537, 0xC0FFEE), (123456789, 1000000007)]:
        assert int(FixedInt(a, bits=128).inverse(m)) == pow(a, -1, m)


def test_inverse_not_coprime():
    with pytest.raises(NoInverseExists):
        FixedInt(6).inverse(9)
    with pytest.raises(NoInverseExists):
        FixedInt(22).inverse(11)
    with pytest.raises(ArithmeticError):
        FixedInt(0).inverse(7)


def test_inverse_zero_modulus():
    with pytest.raises(DivisionByZero):
        FixedInt(3).inverse(0)


@pytest.mark.parametrize('value', SMALL_PRIMES)
def test_prime_check_primes(value):
    assert FixedInt(value).prime_check()


@pytest.mark.parametrize('value', COMPOSITES)
def test_prime_check_composites(value):
    assert not FixedInt(value, bits=128).prime_check()


def test_prime_check_repeated_runs():
    p = FixedInt(97)
    assert all(p.prime_check() for _ in range(5))
    assert not any(FixedInt(91).prime_check() for _ in range(5))


def test_prime_check_function_and_trials():
    assert prime_check(FixedInt(101), trials=3)
    assert not prime_check(FixedInt(561, bits=64), trials=100)


def test_prime_check_wide_value():
    p = to_fixed((1 << 61) - 1, bits=128)  # Mersenne prime M61
    assert p.prime_check(trials=5)
    assert not (p * 3).prime_check(trials=5)


def test_prime_check_full_width_values():
    assert FixedInt(0xFFFFFFFB, bits=32).prime_check(trials=10)  # largest 32-bit prime
    assert not FixedInt(0xFFFFFFFF, bits=32).prime_check(trials=10)
    assert to_fixed((1 << 61) - 1, bits=64).prime_check(trials=5)
