from frozendict import frozendict

from convexity.errors import MalformedAutomatonError, OutOfRangeError
from convexity.general import MAX_ALPH_SIZE, letter, word_symbols

def check_sizes(num_states, alph_size):
    if num_states < 1:
        raise MalformedAutomatonError("Invalid number of states: {} (must be positive)".format(num_states))
    if not 1 <= alph_size <= MAX_ALPH_SIZE:
        raise MalformedAutomatonError("Invalid alphabet size: {} (must be between 1 and {})".format(alph_size, MAX_ALPH_SIZE))

class DFA:
    """
    A complete DFA over the alphabet {0, ..., alph_size-1}.
    States are 0, ..., num_states-1 and state 0 is always the initial one.
    trans is a table of rows, one row of targets per state, and finality
    has one boolean per state. Both are stored as tuples, so a DFA is never
    modified after construction.
    """

    def __init__(self, num_states, alph_size, trans, finality):
        check_sizes(num_states, alph_size)
        trans = tuple(tuple(row) for row in trans)
        finality = tuple(bool(flag) for flag in finality)
        if len(trans) != num_states or any(len(row) != alph_size for row in trans):
            raise MalformedAutomatonError("Transition table is not {}x{}".format(num_states, alph_size))
        if len(finality) != num_states:
            raise MalformedAutomatonError("Finality array has {} entries for {} states".format(len(finality), num_states))
        for (st, row) in enumerate(trans):
            for (sym, st2) in enumerate(row):
                if not 0 <= st2 < num_states:
                    raise MalformedAutomatonError("Transition {} --{}--> {} leaves the state set".format(st, letter(sym), st2))
        self.num_states = num_states
        self.alph_size = alph_size
        self.trans = trans
        self.finality = finality

    def __call__(self, st, sym):
        if not 0 <= sym < self.alph_size:
            raise OutOfRangeError("Invalid symbol {}: alphabet has {} symbols".format(sym, self.alph_size))
        if not 0 <= st < self.num_states:
            raise OutOfRangeError("Invalid state {}: automaton has {} states".format(st, self.num_states))
        return self.trans[st][sym]

    apply = __call__

    def __eq__(self, other):
        return isinstance(other, DFA) and (self.num_states, self.alph_size, self.trans, self.finality) == \
               (other.num_states, other.alph_size, other.trans, other.finality)

    def __hash__(self):
        return hash((self.num_states, self.alph_size, self.trans, self.finality))

    def __repr__(self):
        return "DFA({}, {}, {}, {})".format(self.num_states, self.alph_size, self.trans, self.finality)

    def copy(self):
        return DFA(self.num_states, self.alph_size, self.trans, self.finality)

    def final_states(self):
        return [st for st in range(self.num_states) if self.finality[st]]

    def accepts(self, word):
        st = 0
        for sym in word_symbols(word):
            st = self(st, sym)
        return self.finality[st]

    def to_nfa(self):
        return NFA.from_dfa(self)

    def info_string(self, name, verbose=False):
        s = ["DFA {} on {} symbols with {} states".format(name, self.alph_size, self.num_states)]
        s.append("Final states: {}".format(self.final_states()))
        if verbose:
            s.append("Transitions:")
            for (st, row) in enumerate(self.trans):
                s.append("  {} : {}".format(st, " ".join("{}->{}".format(letter(sym), st2) for (sym, st2) in enumerate(row))))
        return "\n".join(s)


class NFA:
    """
    A nondeterministic automaton with any number of initial states and
    no empty-word moves. trans maps (state, symbol) to a frozenset of
    targets; pairs that are missing have no targets.
    """

    def __init__(self, num_states, alph_size, trans=None, initiality=None, finality=None):
        check_sizes(num_states, alph_size)
        if trans is None:
            trans = {}
        if initiality is None:
            initiality = [False]*num_states
        if finality is None:
            finality = [False]*num_states
        initiality = tuple(bool(flag) for flag in initiality)
        finality = tuple(bool(flag) for flag in finality)
        if len(initiality) != num_states or len(finality) != num_states:
            raise MalformedAutomatonError("Initiality and finality arrays must have {} entries".format(num_states))
        full = {}
        for st in range(num_states):
            for sym in range(alph_size):
                full[st, sym] = frozenset(trans.get((st, sym), ()))
        if any(key not in full for key in trans):
            raise MalformedAutomatonError("Transitions defined outside {} states and {} symbols".format(num_states, alph_size))
        for ((st, sym), sts) in full.items():
            if any(not 0 <= st2 < num_states for st2 in sts):
                raise MalformedAutomatonError("Transition {} --{}--> {} leaves the state set".format(st, letter(sym), sorted(sts)))
        self.num_states = num_states
        self.alph_size = alph_size
        self.trans = frozendict(full)
        self.initiality = initiality
        self.finality = finality
        self.complete = all(self.trans.values())

    @classmethod
    def from_dfa(cls, dfa):
        trans = {(st, sym) : [dfa(st, sym)] for st in range(dfa.num_states) for sym in range(dfa.alph_size)}
        inits = [st == 0 for st in range(dfa.num_states)]
        return cls(dfa.num_states, dfa.alph_size, trans, inits, dfa.finality)

    def __call__(self, st, sym):
        if not 0 <= sym < self.alph_size:
            raise OutOfRangeError("Invalid symbol {}: alphabet has {} symbols".format(sym, self.alph_size))
        if not 0 <= st < self.num_states:
            raise OutOfRangeError("Invalid state {}: automaton has {} states".format(st, self.num_states))
        return self.trans[st, sym]

    apply = __call__

    def __repr__(self):
        return "NFA({}, {}, {}, {}, {})".format(self.num_states, self.alph_size, dict(self.trans), self.initiality, self.finality)

    def initial_states(self):
        return [st for st in range(self.num_states) if self.initiality[st]]

    def final_states(self):
        return [st for st in range(self.num_states) if self.finality[st]]

    def accepts(self, word):
        sts = set(self.initial_states())
        for sym in word_symbols(word):
            sts = {st2 for st in sts for st2 in self(st, sym)}
        return any(self.finality[st] for st in sts)

    def info_string(self, name, verbose=False):
        s = ["NFA {} on {} symbols with {} states".format(name, self.alph_size, self.num_states)]
        s.append("Initial states: {}".format(self.initial_states()))
        s.append("Final states: {}".format(self.final_states()))
        if verbose:
            s.append("Transitions: {}".format({key : sorted(sts) for (key, sts) in self.trans.items() if sts}))
        return "\n".join(s)
