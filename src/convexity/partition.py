"""
Partitions of DFA states into candidate Myhill-Nerode classes.

A Partition is refined one round at a time: every state gets the
signature of target classes it reaches under each symbol, and states
of the same old class with equal signatures stay together.
"""

from convexity.errors import MalformedAutomatonError

class EquivalenceClass:

    def __init__(self, alph_size, finality, signature=None):
        self.alph_size = alph_size
        self.finality = finality
        if signature is None:
            signature = (0,)*alph_size
        elif len(signature) != alph_size:
            raise MalformedAutomatonError("Signature {} does not match alphabet size {}".format(signature, alph_size))
        self.signature = tuple(signature)
        self.states = set()
        # first state placed in the class
        self.representative = None

    def add(self, st):
        if self.representative is None:
            self.representative = st
        self.states.add(st)

    def __contains__(self, st):
        return st in self.states

    def __len__(self):
        return len(self.states)

    def __repr__(self):
        return "EquivalenceClass({}, final={}, signature={})".format(sorted(self.states), self.finality, self.signature)


class Partition:

    def __init__(self):
        self.classes = []
        self.where = {}

    @classmethod
    def initial(cls, dfa):
        "The two classes of non-final and final states, in this order; either may be empty."
        part = cls()
        part.add_class(EquivalenceClass(dfa.alph_size, False))
        part.add_class(EquivalenceClass(dfa.alph_size, True))
        for st in range(dfa.num_states):
            part.add_state(1 if dfa.finality[st] else 0, st)
        return part

    def __len__(self):
        return len(self.classes)

    def __iter__(self):
        return iter(self.classes)

    def __getitem__(self, i):
        return self.classes[i]

    def __repr__(self):
        return "Partition({})".format([sorted(cl.states) for cl in self.classes])

    def add_class(self, cl):
        self.classes.append(cl)
        for st in cl.states:
            self.where[st] = len(self.classes) - 1
        return len(self.classes) - 1

    def add_state(self, i, st):
        self.classes[i].add(st)
        self.where[st] = i

    def index_of(self, st):
        return self.where[st]

    def class_of(self, st):
        return self.classes[self.where[st]]

    def signature(self, dfa, st):
        return tuple(self.where[dfa(st, sym)] for sym in range(dfa.alph_size))

    def find_compatible(self, signature, finality, origin):
        """
        Index of a class with this signature and finality whose representative
        lies in the origin class, or None.
        """
        for (i, cl) in enumerate(self.classes):
            if cl.signature == signature and cl.finality == finality and cl.representative in origin:
                return i
        return None

    def refine(self, dfa):
        "One refinement round; the result indexes its classes in order of discovery."
        new = Partition()
        for cl in self.classes:
            for st in sorted(cl.states):
                sig = self.signature(dfa, st)
                fin = dfa.finality[st]
                i = new.find_compatible(sig, fin, cl)
                if i is None:
                    i = new.add_class(EquivalenceClass(dfa.alph_size, fin, sig))
                new.add_state(i, st)
        return new

    def same_as(self, other):
        "Exact equality: same number of classes, and the same states in each index."
        if len(self) != len(other):
            return False
        for (cl1, cl2) in zip(self.classes, other.classes):
            if len(cl1) != len(cl2):
                return False
            if cl1.states != cl2.states:
                return False
        return True
