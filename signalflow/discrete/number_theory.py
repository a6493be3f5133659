"""Elementary number theory with step-by-step output."""

from __future__ import annotations

from signalflow.discrete.validation import require_int
from signalflow.errors import InputValidationError


def euclid_steps(a: int, b: int) -> tuple[int, list[str]]:
    """GCD by repeated division, returning the gcd and one line per division."""
    a = require_int("a", a, minimum=1)
    b = require_int("b", b, minimum=1)
    x, y = max(a, b), min(a, b)
    steps = [f"Start with a = {x}, b = {y}"]
    while y != 0:
        quotient, remainder = divmod(x, y)
        steps.append(f"{x} = {y} × {quotient} + {remainder}")
        x, y = y, remainder
    steps.append(f"gcd({a}, {b}) = {x}")
    return x, steps


def mod(a: int, m: int) -> int:
    """Least non-negative residue of ``a`` modulo ``m``."""
    a = require_int("a", a)
    m = require_int("m", m)
    if m <= 0:
        raise InputValidationError(f"Modulus must be positive, got {m}")
    return a % m


def is_prime(n: int) -> bool:
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def prime_factors(n: int) -> list[int]:
    """Prime factorisation in non-decreasing order, with multiplicity."""
    n = require_int("n", n, minimum=2)
    factors = []
    divisor = 2
    while divisor * divisor <= n:
        while n % divisor == 0:
            factors.append(divisor)
            n //= divisor
        divisor += 1
    if n > 1:
        factors.append(n)
    return factors


def factor_tree(n: int):
    """Split ``n`` by its smallest factor until only primes remain.

    Returns ``n`` itself for a prime, else ``(n, left, right)`` where ``left``
    is the tree of the smallest prime factor and ``right`` that of the cofactor.
    """
    n = require_int("n", n, minimum=2)
    if is_prime(n):
        return n
    factor = prime_factors(n)[0]
    return (n, factor_tree(factor), factor_tree(n // factor))


def tree_leaves(tree) -> list[int]:
    """Leaves of a factor tree from left to right."""
    if isinstance(tree, int):
        return [tree]
    _, left, right = tree
    return tree_leaves(left) + tree_leaves(right)
