import pytest

from convexity.errors import MalformedAutomatonError
from convexity.finite_automata import DFA
from convexity.partition import Partition, EquivalenceClass

# a or b followed by any number of a, states 1 and 2 are equivalent
dfa = DFA(4, 2, [[1, 2], [1, 3], [2, 3], [3, 3]], [False, True, True, False])

def test_initial():
    part = Partition.initial(dfa)
    assert len(part) == 2
    assert part[0].states == {0, 3}
    assert part[1].states == {1, 2}
    assert part.index_of(2) == 1
    assert part.class_of(3) is part[0]

def test_initial_without_final_states():
    empty = DFA(2, 1, [[1], [1]], [False, False])
    part = Partition.initial(empty)
    assert len(part[1]) == 0
    refined = part.refine(empty)
    assert len(refined) == 1
    assert not part.same_as(refined)

def test_refine_to_fixed_point():
    prev = Partition.initial(dfa)
    part = prev.refine(dfa)
    while not prev.same_as(part):
        prev, part = part, part.refine(dfa)
    assert len(part) == 3
    assert part.index_of(1) == part.index_of(2)
    assert part.index_of(0) != part.index_of(3)

def test_representative():
    cl = EquivalenceClass(2, True)
    cl.add(5)
    cl.add(3)
    assert cl.representative == 5
    assert 3 in cl
    assert len(cl) == 2

def test_same_as():
    part1 = Partition.initial(dfa)
    part2 = Partition.initial(dfa)
    assert part1.same_as(part2)
    assert not part1.same_as(part1.refine(dfa))

def test_signature_size_mismatch():
    with pytest.raises(MalformedAutomatonError):
        EquivalenceClass(2, False, (0, 1, 2))
