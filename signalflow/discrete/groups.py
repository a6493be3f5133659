"""Small finite groups for Cayley tables and cyclic subgroups.

A group is one of three frozen variants, each knowing its elements, its
binary operation, its identity and how to print an element:

    Cyclic(n)          Z_n under addition mod n
    Multiplicative(n)  units of Z/nZ under multiplication mod n
    Symmetric(n)       permutations of n points under composition

Permutations are tuples ``p`` with ``p[i]`` the image of point ``i``.
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from typing import Hashable, Union

from signalflow import defaults
from signalflow.discrete.validation import require_int
from signalflow.errors import InputValidationError

Element = Hashable


def _check_parameter(n, maximum: int = defaults.MAX_GROUP_PARAMETER) -> None:
    require_int("Group parameter", n, minimum=defaults.MIN_GROUP_PARAMETER, maximum=maximum)


@dataclass(frozen=True)
class Cyclic:
    n: int

    def __post_init__(self):
        _check_parameter(self.n)

    @property
    def name(self) -> str:
        return f"Z_{self.n}"

    @property
    def identity(self) -> int:
        return 0

    def elements(self) -> list[int]:
        return list(range(self.n))

    def operation(self, a: int, b: int) -> int:
        return (a + b) % self.n

    def format_element(self, element: int) -> str:
        return str(element)


@dataclass(frozen=True)
class Multiplicative:
    n: int

    def __post_init__(self):
        _check_parameter(self.n)

    @property
    def name(self) -> str:
        return f"(Z/{self.n}Z)*"

    @property
    def identity(self) -> int:
        return 1

    def elements(self) -> list[int]:
        return [i for i in range(1, self.n) if math.gcd(i, self.n) == 1]

    def operation(self, a: int, b: int) -> int:
        return (a * b) % self.n

    def format_element(self, element: int) -> str:
        return str(element)


@dataclass(frozen=True)
class Symmetric:
    n: int

    def __post_init__(self):
        _check_parameter(self.n, maximum=defaults.MAX_SYMMETRIC_DEGREE)

    @property
    def name(self) -> str:
        return f"S_{self.n}"

    @property
    def identity(self) -> tuple[int, ...]:
        return tuple(range(self.n))

    def elements(self) -> list[tuple[int, ...]]:
        return list(itertools.permutations(range(self.n)))

    def operation(self, a: tuple[int, ...], b: tuple[int, ...]) -> tuple[int, ...]:
        # Apply a, then b
        return tuple(b[i] for i in a)

    def format_element(self, element: tuple[int, ...]) -> str:
        """Cycle notation with 1-based points; fixed points omitted, ``e`` for identity."""
        visited = [False] * len(element)
        cycles = []
        for start in range(len(element)):
            if visited[start]:
                continue
            cycle = []
            current = start
            while not visited[current]:
                visited[current] = True
                cycle.append(current + 1)
                current = element[current]
            if len(cycle) > 1:
                cycles.append(cycle)
        if not cycles:
            return "e"
        return "".join("(" + " ".join(str(p) for p in cycle) + ")" for cycle in cycles)


Group = Union[Cyclic, Multiplicative, Symmetric]

GROUP_TYPES: dict[str, type] = {
    'cyclic': Cyclic,
    'multiplicative': Multiplicative,
    'symmetric': Symmetric,
}


def make_group(kind: str, n: int) -> Group:
    """Build a group from its kind name ('cyclic', 'multiplicative', 'symmetric')."""
    try:
        cls = GROUP_TYPES[kind]
    except KeyError:
        raise InputValidationError(f"Unknown group type {kind!r}. Expected one of {sorted(GROUP_TYPES)}") from None
    return cls(n)


def group_order(group: Group) -> int:
    return len(group.elements())


def cayley_table(group: Group) -> list[list[Element]]:
    """Row ``i``, column ``j`` holds ``elements[i] * elements[j]``."""
    elements = group.elements()
    return [[group.operation(a, b) for b in elements] for a in elements]


def cyclic_subgroup(group: Group, generator: Element) -> list[Element]:
    """Powers of ``generator`` starting from the identity, in order of generation."""
    if generator not in group.elements():
        raise InputValidationError(f"{generator!r} is not an element of {group.name}")
    subgroup = [group.identity]
    current = group.operation(group.identity, generator)
    while current != group.identity:
        subgroup.append(current)
        current = group.operation(current, generator)
    return subgroup


def subgroup_index(group: Group, generator: Element) -> int:
    """Index [G:H] of the cyclic subgroup generated by ``generator``."""
    return group_order(group) // len(cyclic_subgroup(group, generator))


def is_abelian(group: Group) -> bool:
    elements = group.elements()
    return all(
        group.operation(a, b) == group.operation(b, a)
        for a, b in itertools.combinations(elements, 2)
    )


def is_cyclic(group: Group) -> bool:
    """True when some element generates the whole group."""
    order = group_order(group)
    return any(len(cyclic_subgroup(group, g)) == order for g in group.elements())
