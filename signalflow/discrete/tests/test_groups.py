"""Tests for the finite group calculators."""

import pytest

from signalflow.discrete import (
    Cyclic,
    Multiplicative,
    Symmetric,
    cayley_table,
    cyclic_subgroup,
    group_order,
    is_abelian,
    is_cyclic,
    make_group,
)
from signalflow.discrete.groups import subgroup_index
from signalflow.errors import InputValidationError

ALL_GROUPS = (
    [Cyclic(n) for n in range(2, 9)]
    + [Multiplicative(n) for n in range(2, 9)]
    + [Symmetric(n) for n in range(2, 5)]
)


class TestElements:

    def test_cyclic(self):
        assert Cyclic(5).elements() == [0, 1, 2, 3, 4]

    def test_multiplicative_units(self):
        assert Multiplicative(8).elements() == [1, 3, 5, 7]
        assert Multiplicative(7).elements() == [1, 2, 3, 4, 5, 6]

    def test_symmetric_order(self):
        assert group_order(Symmetric(3)) == 6
        assert group_order(Symmetric(4)) == 24

    @pytest.mark.parametrize("factory,n", [
        (Cyclic, 1), (Cyclic, 9), (Multiplicative, 0), (Symmetric, 5), (Symmetric, 2.0),
    ])
    def test_parameter_limits(self, factory, n):
        with pytest.raises(InputValidationError):
            factory(n)

    def test_make_group(self):
        assert make_group('symmetric', 3) == Symmetric(3)
        with pytest.raises(InputValidationError):
            make_group('dihedral', 3)


class TestCayleyTable:

    @pytest.mark.parametrize("group", ALL_GROUPS, ids=lambda g: g.name)
    def test_table_is_latin_square(self, group):
        elements = group.elements()
        table = cayley_table(group)
        for row in table:
            assert sorted(row, key=repr) == sorted(elements, key=repr)
        for j in range(len(elements)):
            column = [row[j] for row in table]
            assert sorted(column, key=repr) == sorted(elements, key=repr)

    @pytest.mark.parametrize("group", ALL_GROUPS, ids=lambda g: g.name)
    def test_identity_row(self, group):
        elements = group.elements()
        row = cayley_table(group)[elements.index(group.identity)]
        assert row == elements

    def test_z4(self):
        assert cayley_table(Cyclic(4)) == [
            [0, 1, 2, 3],
            [1, 2, 3, 0],
            [2, 3, 0, 1],
            [3, 0, 1, 2],
        ]


class TestSubgroups:

    def test_cyclic_subgroup_of_z6(self):
        assert cyclic_subgroup(Cyclic(6), 2) == [0, 2, 4]
        assert subgroup_index(Cyclic(6), 2) == 2

    def test_generator_of_whole_group(self):
        assert cyclic_subgroup(Multiplicative(7), 3) == [1, 3, 2, 6, 4, 5]

    def test_transposition_has_order_two(self):
        swap = (1, 0, 2)
        assert cyclic_subgroup(Symmetric(3), swap) == [(0, 1, 2), swap]

    def test_unknown_generator(self):
        with pytest.raises(InputValidationError):
            cyclic_subgroup(Multiplicative(8), 2)

    @pytest.mark.parametrize("group", ALL_GROUPS, ids=lambda g: g.name)
    def test_lagrange(self, group):
        order = group_order(group)
        for g in group.elements():
            assert order % len(cyclic_subgroup(group, g)) == 0


class TestProperties:

    def test_abelian(self):
        assert all(is_abelian(Cyclic(n)) for n in range(2, 9))
        assert all(is_abelian(Multiplicative(n)) for n in range(2, 9))
        assert is_abelian(Symmetric(2))
        assert not is_abelian(Symmetric(3))
        assert not is_abelian(Symmetric(4))

    def test_cyclic(self):
        assert all(is_cyclic(Cyclic(n)) for n in range(2, 9))
        assert [n for n in range(2, 9) if is_cyclic(Multiplicative(n))] == [2, 3, 4, 5, 6, 7]
        assert is_cyclic(Symmetric(2))
        assert not is_cyclic(Symmetric(3))


class TestFormatting:

    def test_identity_prints_e(self):
        assert Symmetric(3).format_element((0, 1, 2)) == "e"

    def test_cycle_notation(self):
        s4 = Symmetric(4)
        assert s4.format_element((1, 0, 2, 3)) == "(1 2)"
        assert s4.format_element((1, 2, 0, 3)) == "(1 2 3)"
        assert s4.format_element((1, 0, 3, 2)) == "(1 2)(3 4)"

    def test_numeric_groups(self):
        assert Cyclic(5).format_element(3) == "3"

    def test_composition_applies_left_first(self):
        s3 = Symmetric(3)
        a = (1, 0, 2)  # (1 2)
        b = (0, 2, 1)  # (2 3)
        # 0 -a-> 1 -b-> 2, 1 -a-> 0 -b-> 0, 2 -a-> 2 -b-> 1
        assert s3.operation(a, b) == (2, 0, 1)
