import pytest

from convexity.errors import AutomatonError, MalformedAutomatonError, OutOfRangeError
from convexity.finite_automata import DFA, NFA

# odd number of a's over {a, b}
odd_a = DFA(2, 2, [[1, 0], [0, 1]], [False, True])

def test_apply():
    assert odd_a(0, 0) == 1
    assert odd_a.apply(1, 1) == 1
    with pytest.raises(OutOfRangeError):
        odd_a(2, 0)
    with pytest.raises(OutOfRangeError):
        odd_a(0, 2)
    with pytest.raises(IndexError):
        odd_a(-1, 0)

def test_accepts():
    assert odd_a.accepts("a")
    assert odd_a.accepts("bab")
    assert not odd_a.accepts("")
    assert not odd_a.accepts("aba")
    assert odd_a.accepts([0, 1, 1])

def test_malformed():
    with pytest.raises(MalformedAutomatonError):
        DFA(0, 2, [], [])
    with pytest.raises(MalformedAutomatonError):
        DFA(1, 27, [[0]*27], [True])
    with pytest.raises(MalformedAutomatonError):
        DFA(2, 2, [[1, 0]], [False, True])
    with pytest.raises(MalformedAutomatonError):
        DFA(2, 2, [[1, 0], [0, 2]], [False, True])
    with pytest.raises(ValueError):
        DFA(2, 2, [[1, 0], [0, 1]], [False])
    with pytest.raises(AutomatonError):
        NFA(2, 2, {(0, 0) : {3}})
    with pytest.raises(AutomatonError):
        NFA(2, 2, {(2, 0) : {0}})

def test_immutable_copy():
    trans = [[1, 0], [0, 1]]
    dfa = DFA(2, 2, trans, [False, True])
    trans[0][0] = 0
    assert dfa(0, 0) == 1
    assert dfa == odd_a
    assert dfa.copy() == dfa
    assert hash(dfa.copy()) == hash(dfa)
    assert dfa.final_states() == [1]

def test_nfa():
    nfa = NFA(3, 2, {(0, 0) : {0, 1}, (0, 1) : {0}, (1, 1) : {2}}, [True, False, False], [False, False, True])
    assert not nfa.complete
    assert nfa(1, 0) == frozenset()
    assert nfa(0, 0) == {0, 1}
    assert nfa.initial_states() == [0]
    assert nfa.accepts("bab")
    assert nfa.accepts("aab")
    assert not nfa.accepts("aba")

def test_nfa_from_dfa():
    nfa = odd_a.to_nfa()
    assert nfa.complete
    assert nfa.initial_states() == [0]
    assert nfa.final_states() == [1]
    for word in ["", "a", "ab", "aab", "bbab"]:
        assert nfa.accepts(word) == odd_a.accepts(word)

def test_info_string():
    s = odd_a.info_string("odd", verbose=True)
    assert "DFA odd on 2 symbols with 2 states" in s
    assert "0 : a->1 b->0" in s
