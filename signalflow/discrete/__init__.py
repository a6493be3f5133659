"""
Discrete-math calculators: counting, number theory and small finite groups.
"""

from .combinatorics import PigeonholeResult, combinations, pascal_triangle, permutations, pigeonhole
from .number_theory import euclid_steps, factor_tree, is_prime, mod, prime_factors
from .groups import (
    Cyclic,
    Multiplicative,
    Symmetric,
    make_group,
    cayley_table,
    cyclic_subgroup,
    group_order,
    is_abelian,
    is_cyclic,
)

__all__ = [
    'PigeonholeResult',
    'combinations',
    'pascal_triangle',
    'permutations',
    'pigeonhole',
    'euclid_steps',
    'factor_tree',
    'is_prime',
    'mod',
    'prime_factors',
    'Cyclic',
    'Multiplicative',
    'Symmetric',
    'make_group',
    'cayley_table',
    'cyclic_subgroup',
    'group_order',
    'is_abelian',
    'is_cyclic',
]
