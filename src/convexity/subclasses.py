"""
Membership tests for the convex subclasses of regular languages:
ideals, free languages and closed languages.

Most tests read the structure of a minimal DFA, so inputs are expected
to be minimal unless the test minimizes on its own (LID, SF, ASID).
"""

import sys

from convexity import operators as ops
from convexity.errors import UnknownSubclassError
from convexity.graphs import StatePairGraph
from convexity.finite_automata import NFA

SUBCLASS_TAGS = ["PF", "SF", "FF", "SwF", "PC", "SC", "FC", "SwC", "RID", "LID", "TSID", "ASID"]

SUBCLASS_NAMES = {
    "PF" : "prefix-free",
    "SF" : "suffix-free",
    "FF" : "factor-free",
    "SwF" : "subword-free",
    "PC" : "prefix-closed",
    "SC" : "suffix-closed",
    "FC" : "factor-closed",
    "SwC" : "subword-closed",
    "RID" : "right ideal",
    "LID" : "left ideal",
    "TSID" : "two-sided ideal",
    "ASID" : "all-sided ideal",
}

def followers(dfa, st):
    "Targets of the transitions of st that are not self-loops."
    return [st2 for st2 in dfa.trans[st] if st2 != st]

def is_non_returning(dfa):
    return all(st2 != 0 for row in dfa.trans for st2 in row)

def non_exiting_final_sink(dfa):
    """
    If the DFA has exactly one final state, and all its transitions lead to
    a single other state that loops on every symbol, return the pair
    (final, sink). Otherwise return None.
    """
    finals = dfa.final_states()
    if len(finals) != 1:
        return None
    final = finals[0]
    targets = followers(dfa, final)
    if len(targets) < dfa.alph_size or len(set(targets)) != 1:
        return None
    sink = targets[0]
    if followers(dfa, sink):
        return None
    return (final, sink)

def is_non_exiting(dfa):
    return non_exiting_final_sink(dfa) is not None

def reversed_minimal(dfa, verbose=False):
    "Minimal DFA of the reversed language."
    return ops.minimize(ops.determinize(ops.reverse(dfa), verbose=verbose), verbose=verbose)


class SubclassTester:

    def __init__(self, verbose=False):
        self.verbose = verbose
        self.predicates = {
            "PF" : self.is_prefix_free,
            "SF" : self.is_suffix_free,
            "FF" : self.is_factor_free,
            "SwF" : self.is_subword_free,
            "PC" : self.is_prefix_closed,
            "SC" : self.is_suffix_closed,
            "FC" : self.is_factor_closed,
            "SwC" : self.is_subword_closed,
            "RID" : self.is_right_ideal,
            "LID" : self.is_left_ideal,
            "TSID" : self.is_two_sided_ideal,
            "ASID" : self.is_all_sided_ideal,
        }

    def predicate(self, tag):
        try:
            return self.predicates[tag]
        except KeyError:
            raise UnknownSubclassError(tag)

    def test_subclass(self, tag, dfa):
        "Does the language of the DFA belong to the subclass with this tag? Unknown tags give False."
        try:
            pred = self.predicate(tag)
        except UnknownSubclassError:
            print("Undefined subclass: {}".format(tag), file=sys.stderr)
            return False
        return pred(dfa)

    def classify(self, dfa):
        return {tag : self.predicates[tag](dfa) for tag in SUBCLASS_TAGS}

    # Free languages

    def is_prefix_free(self, dfa):
        return is_non_exiting(dfa)

    def is_suffix_free(self, dfa):
        if not is_non_returning(dfa):
            return False
        return self.is_prefix_free(reversed_minimal(dfa, self.verbose))

    def is_factor_free(self, dfa):
        """
        Factor-freeness test of Han, Wang and Wood (Infix-free regular
        expressions and languages, 2006). The test depends on the numbering
        of the states, so we look for a numbering that puts the final state
        and the sink last and passes the reachability conditions.
        """
        if not (is_non_returning(dfa) and is_non_exiting(dfa)):
            return False
        n = dfa.num_states
        for perm in ops.state_permutations(dfa, verbose=self.verbose):
            if non_exiting_final_sink(perm) != (n-2, n-1):
                continue
            final = n-2
            graph = StatePairGraph(perm)
            if any(graph.reachable(0, v, final, j)
                   for v in range(1, final+1)
                   for j in range(final+1)):
                continue
            if any(graph.reachable(0, 0, final, j) for j in range(1, final)):
                continue
            return True
        return False

    def is_subword_free(self, dfa):
        """
        Incomplete test: a True answer is always correct, but some
        subword-free languages are not recognized.
        """
        for perm in ops.state_permutations(dfa, verbose=self.verbose):
            if self.ordered_subword_free(perm):
                return True
        return False

    def ordered_subword_free(self, dfa):
        "The structural condition of is_subword_free for one fixed numbering."
        if len(dfa.final_states()) != 1:
            return False
        sink = None
        for st in range(dfa.num_states):
            targets = followers(dfa, st)
            if not targets and not dfa.finality[st]:
                sink = st
            if len(targets) < dfa.alph_size and sink != st:
                return False
        if sink is None:
            return False
        others = [st for st in range(dfa.num_states) if st != sink]
        for i in others:
            for j in others:
                for sym in range(dfa.alph_size):
                    ti, tj = dfa(i, sym), dfa(j, sym)
                    if ti == sink or tj == sink:
                        continue
                    if ti <= i:
                        return False
                    if i < j and ti >= tj:
                        return False
        return True

    # Closed languages are the complements of ideals

    def is_prefix_closed(self, dfa):
        return self.is_right_ideal(ops.complement(dfa))

    def is_suffix_closed(self, dfa):
        return self.is_left_ideal(ops.complement(dfa))

    def is_factor_closed(self, dfa):
        return self.is_two_sided_ideal(ops.complement(dfa))

    def is_subword_closed(self, dfa):
        return self.is_all_sided_ideal(ops.complement(dfa))

    # Ideals

    def is_right_ideal(self, dfa):
        """
        One final state that loops on every symbol; no final state at all means the empty language.
        Only the structure is read, so the DFA must be minimal.
        """
        finals = dfa.final_states()
        if len(finals) > 1:
            return False
        return all(not followers(dfa, st) for st in finals)

    def is_left_ideal(self, dfa):
        return self.is_right_ideal(reversed_minimal(dfa, self.verbose))

    def is_two_sided_ideal(self, dfa):
        return self.is_right_ideal(dfa) and self.is_left_ideal(dfa)

    def is_all_sided_ideal(self, dfa):
        if not self.is_two_sided_ideal(dfa):
            return False
        # inserting letters anywhere = reading them in place at any state
        closure = ops.add_self_loops(NFA.from_dfa(dfa))
        closed = ops.minimize(ops.determinize(closure, verbose=self.verbose), verbose=self.verbose)
        inter1 = ops.minimize(ops.intersection(dfa, ops.complement(closed)))
        inter2 = ops.minimize(ops.intersection(closed, ops.complement(dfa)))
        return ops.is_empty_language(inter1) and ops.is_empty_language(inter2)
