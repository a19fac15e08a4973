"""
Exceptions raised by the automaton engine.

Everything is a programmer or input error and is raised immediately;
nothing here is retried or recovered from, except that the subclass
dispatcher turns an unknown tag into a False verdict.
"""

class AutomatonError(Exception):
    pass

class MalformedAutomatonError(AutomatonError, ValueError):
    "Sizes, transition table or flag arrays are inconsistent."
    pass

class OutOfRangeError(AutomatonError, IndexError):
    "A state or symbol index outside the declared bounds."
    pass

class IncompatibleOperandsError(AutomatonError, ValueError):
    "Alphabet size mismatch between operands, or a bad symbol mapping."
    pass

class UnknownSubclassError(AutomatonError, KeyError):
    pass

class InvalidCodeError(AutomatonError, ValueError):
    "A serial DFA code that cannot be decoded."
    pass
