"""Tests for Euclid, modular reduction and factorisation."""

import math

import pytest

from signalflow.discrete import euclid_steps, factor_tree, is_prime, mod, prime_factors
from signalflow.discrete.number_theory import tree_leaves
from signalflow.errors import InputValidationError


def test_euclid_steps_records_each_division():
    g, steps = euclid_steps(48, 18)
    assert g == 6
    assert steps == [
        "Start with a = 48, b = 18",
        "48 = 18 × 2 + 12",
        "18 = 12 × 1 + 6",
        "12 = 6 × 2 + 0",
        "gcd(48, 18) = 6",
    ]


def test_euclid_argument_order_irrelevant():
    assert euclid_steps(18, 48)[0] == euclid_steps(48, 18)[0]


@pytest.mark.parametrize("a,b", [(1071, 462), (17, 5), (100, 100), (1, 999)])
def test_euclid_matches_math_gcd(a, b):
    assert euclid_steps(a, b)[0] == math.gcd(a, b)


def test_euclid_rejects_non_positive():
    with pytest.raises(InputValidationError):
        euclid_steps(0, 5)


def test_mod_is_non_negative():
    assert mod(17, 5) == 2
    assert mod(-7, 3) == 2
    assert mod(0, 4) == 0


def test_mod_requires_positive_modulus():
    with pytest.raises(InputValidationError):
        mod(5, 0)
    with pytest.raises(InputValidationError):
        mod(5, -2)


def test_is_prime():
    primes = [n for n in range(-2, 40) if is_prime(n)]
    assert primes == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37]


@pytest.mark.parametrize("n,expected", [
    (2, [2]),
    (12, [2, 2, 3]),
    (97, [97]),
    (360, [2, 2, 2, 3, 3, 5]),
    (2 * 3 * 101, [2, 3, 101]),
])
def test_prime_factors(n, expected):
    assert prime_factors(n) == expected
    assert math.prod(prime_factors(n)) == n


def test_prime_factors_rejects_small_numbers():
    with pytest.raises(InputValidationError):
        prime_factors(1)


def test_factor_tree_splits_by_smallest_factor():
    assert factor_tree(7) == 7
    assert factor_tree(12) == (12, 2, (6, 2, 3))
    assert sorted(tree_leaves(factor_tree(360))) == prime_factors(360)
