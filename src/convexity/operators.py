"""
Language operations on DFAs and NFAs.

Every operator returns a fresh automaton and leaves its arguments alone.
Results keep the convention that state 0 is initial.
"""

from convexity.errors import IncompatibleOperandsError
from convexity.finite_automata import DFA, NFA
from convexity.general import heap_transpositions
from convexity.partition import Partition

def complement(dfa):
    return DFA(dfa.num_states, dfa.alph_size, dfa.trans, [not flag for flag in dfa.finality])

def reverse(dfa):
    "NFA for the reversed language: all edges flipped, finals become initial, 0 becomes the only final."
    trans = {(st, sym) : set() for st in range(dfa.num_states) for sym in range(dfa.alph_size)}
    for st in range(dfa.num_states):
        for sym in range(dfa.alph_size):
            trans[dfa(st, sym), sym].add(st)
    finals = [st == 0 for st in range(dfa.num_states)]
    return NFA(dfa.num_states, dfa.alph_size, trans, dfa.finality, finals)

def intersection(dfa1, dfa2):
    if dfa1.alph_size != dfa2.alph_size:
        raise IncompatibleOperandsError("Unequal alphabet sizes for intersection: {} and {}".format(dfa1.alph_size, dfa2.alph_size))
    stride = dfa2.num_states
    num_states = dfa1.num_states*dfa2.num_states
    trans = [None]*num_states
    finality = [False]*num_states
    for st1 in range(dfa1.num_states):
        for st2 in range(dfa2.num_states):
            pair = stride*st1 + st2
            trans[pair] = [stride*dfa1(st1, sym) + dfa2(st2, sym) for sym in range(dfa1.alph_size)]
            finality[pair] = dfa1.finality[st1] and dfa2.finality[st2]
    return DFA(num_states, dfa1.alph_size, trans, finality)

def is_empty_language(dfa):
    mini = minimize(dfa)
    if mini.num_states != 1 or mini.finality[0]:
        return False
    return all(mini(0, sym) == 0 for sym in range(mini.alph_size))

def equivalent(dfa1, dfa2):
    "Do the two DFAs accept the same language?"
    return is_empty_language(intersection(dfa1, complement(dfa2))) and \
           is_empty_language(intersection(dfa2, complement(dfa1)))

def make_complete(nfa):
    "Add a dead state as the last state and send every missing transition there."
    dead = nfa.num_states
    trans = {}
    for st in range(nfa.num_states):
        for sym in range(nfa.alph_size):
            trans[st, sym] = nfa(st, sym) or {dead}
    for sym in range(nfa.alph_size):
        trans[dead, sym] = {dead}
    return NFA(nfa.num_states + 1, nfa.alph_size, trans,
               nfa.initiality + (False,), nfa.finality + (False,))

def add_self_loops(nfa):
    "Let every state read every symbol without moving, on top of its own transitions."
    trans = {(st, sym) : sts | {st} for ((st, sym), sts) in nfa.trans.items()}
    return NFA(nfa.num_states, nfa.alph_size, trans, nfa.initiality, nfa.finality)

def determinize(nfa, verbose=False):
    """
    Determinize using the powerset construction.
    The set of initial states becomes state 0, and the other reachable
    sets are numbered in breadth-first order of discovery.
    """
    if verbose: print("Determinizing")
    nfa = make_complete(nfa)

    init_st = frozenset(nfa.initial_states())
    seen = {init_st : 0}
    det_trans = [None]
    finality = [any(nfa.finality[st] for st in init_st)]
    frontier = [(init_st, 0)]

    i = 0
    while frontier:
        i += 1
        newfrontier = []
        for (st_set, st_num) in frontier:
            row = []
            for sym in range(nfa.alph_size):
                new_st_set = frozenset(st2 for st in st_set for st2 in nfa(st, sym))
                if new_st_set in seen:
                    new_num = seen[new_st_set]
                else:
                    new_num = len(seen)
                    seen[new_st_set] = new_num
                    det_trans.append(None)
                    finality.append(any(nfa.finality[st] for st in new_st_set))
                    newfrontier.append((new_st_set, new_num))
                row.append(new_num)
            det_trans[st_num] = row
        frontier = newfrontier
        if verbose:
            print("Round {}: {} states found, {} in frontier".format(i, len(seen), len(frontier)))

    return DFA(len(seen), nfa.alph_size, det_trans, finality)

def remove_unreachable_states(dfa):
    "Drop states not reachable from 0; the survivors keep their relative order."
    reachables = {0}
    frontier = [0]
    while frontier:
        newfrontier = []
        for st in frontier:
            for sym in range(dfa.alph_size):
                st2 = dfa(st, sym)
                if st2 not in reachables:
                    reachables.add(st2)
                    newfrontier.append(st2)
        frontier = newfrontier
    if len(reachables) == dfa.num_states:
        return dfa
    nums = {st : i for (i, st) in enumerate(sorted(reachables))}
    trans = [[nums[st2] for st2 in dfa.trans[st]] for st in sorted(reachables)]
    finality = [dfa.finality[st] for st in sorted(reachables)]
    return DFA(len(nums), dfa.alph_size, trans, finality)

def minimize(dfa, verbose=False):
    """
    Minimize a DFA by refining the partition {non-final, final} until
    a round leaves every class untouched (Moore's algorithm).
    Unreachable states are removed first.
    """
    if verbose: print("Minimizing")
    dfa = remove_unreachable_states(dfa)

    prev = Partition.initial(dfa)
    part = prev.refine(dfa)
    i = 1
    while not prev.same_as(part):
        if verbose: print("Round {}: {} classes".format(i, len(part)))
        prev, part = part, part.refine(dfa)
        i += 1
    if verbose: print("Stable after {} rounds: {} classes".format(i, len(part)))

    # at the fixed point the signatures index the same classes
    trans = [list(cl.signature) for cl in part]
    finality = [cl.finality for cl in part]
    swap_states(trans, finality, 0, part.index_of(0))
    return DFA(len(part), dfa.alph_size, trans, finality)

def swap_states(trans, finality, st1, st2):
    "Exchange the numbers of two states in a mutable table, in place."
    if st1 == st2:
        return
    trans[st1], trans[st2] = trans[st2], trans[st1]
    finality[st1], finality[st2] = finality[st2], finality[st1]
    for row in trans:
        for (sym, st) in enumerate(row):
            if st == st1:
                row[sym] = st2
            elif st == st2:
                row[sym] = st1

def state_permutations(dfa, verbose=False):
    """
    Generate the DFA under every renumbering of the states 1, ..., n-1
    (state 0 stays initial), (n-1)! automata in total.
    Each one differs from the previous by exchanging two state numbers
    in a private working copy.
    """
    trans = [list(row) for row in dfa.trans]
    finality = list(dfa.finality)
    labels = list(range(1, dfa.num_states))
    yield DFA(dfa.num_states, dfa.alph_size, trans, finality)
    for (k, (i, j)) in enumerate(heap_transpositions(len(labels)), start=2):
        swap_states(trans, finality, labels[i], labels[j])
        labels[i], labels[j] = labels[j], labels[i]
        if verbose and k % 1000 == 0:
            print("{} permutations generated".format(k))
        yield DFA(dfa.num_states, dfa.alph_size, trans, finality)

def homomorphic_image(dfa, mapping):
    "Relabel the columns: the new symbol a behaves like the old symbol mapping[a]."
    if len(mapping) != dfa.alph_size:
        raise IncompatibleOperandsError("Symbol mapping {} does not match alphabet size {}".format(list(mapping), dfa.alph_size))
    if any(not 0 <= sym < dfa.alph_size for sym in mapping):
        raise IncompatibleOperandsError("Symbol mapping {} leaves the alphabet".format(list(mapping)))
    trans = [[dfa.trans[st][mapping[sym]] for sym in range(dfa.alph_size)] for st in range(dfa.num_states)]
    return DFA(dfa.num_states, dfa.alph_size, trans, dfa.finality)

def cut(dfa1, dfa2):
    """
    DFA for the cut L1 ! L2: words uv where u is the longest prefix in L1
    and v is in L2. The second component restarts every time the first
    one enters a final state.
    """
    if dfa1.alph_size != dfa2.alph_size:
        raise IncompatibleOperandsError("Unequal alphabet sizes for cut: {} and {}".format(dfa1.alph_size, dfa2.alph_size))
    n1 = dfa1.num_states
    alph = range(dfa1.alph_size)
    # state (b, a) of the running product is offset + b*n1 + a
    if dfa1.finality[0]:
        offset = 0
        trans = []
    else:
        # the first n1 states run dfa1 alone until it first accepts
        offset = n1
        trans = [[dfa1(st, sym) + (n1 if dfa1.finality[dfa1(st, sym)] else 0) for sym in alph]
                 for st in range(n1)]
    for st2 in range(dfa2.num_states):
        for st1 in range(n1):
            row = []
            for sym in alph:
                new1 = dfa1(st1, sym)
                new2 = 0 if dfa1.finality[new1] else dfa2(st2, sym)
                row.append(offset + new2*n1 + new1)
            trans.append(row)
    finality = [False]*offset + [dfa2.finality[st2] for st2 in range(dfa2.num_states) for _ in range(n1)]
    return DFA(len(trans), dfa1.alph_size, trans, finality)
