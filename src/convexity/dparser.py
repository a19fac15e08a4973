"""
Parsers for serial DFA codes and for convexity scripts.

A serial code lists the transition targets of a DFA state by state,
one base-36 character per target, followed by one t/f finality
character per state. A script is a sequence of %commands.
"""

import parsy as p
from enum import Flag, auto

from convexity.errors import InvalidCodeError
from convexity.finite_automata import DFA
from convexity.general import MAX_ALPH_SIZE

### Serial DFA codes

code_digit = p.regex(r'[0-9a-zA-Z]').map(lambda c: int(c, 36)).desc("transition digit")
finality_char = p.char_from("tTfF").map(lambda c: c in "tT").desc("finality character t or f")

def dfa_code(num_states, alph_size):
    "Parser for the code of a DFA with the given sizes."
    @p.generate("DFA code")
    def code():
        targets = yield code_digit.times(num_states*alph_size)
        flags = yield finality_char.times(num_states)
        yield p.eof
        return (targets, flags)
    return code

def parse_dfa_code(code, num_states, alph_size):
    "Decode a serial DFA code. Raise InvalidCodeError on any malformed input."
    if alph_size > MAX_ALPH_SIZE:
        raise InvalidCodeError("Alphabet size too large (greater than {}).".format(MAX_ALPH_SIZE))
    if num_states < 1 or alph_size < 1:
        raise InvalidCodeError("Need at least one state and one symbol, got {} and {}.".format(num_states, alph_size))
    code = code.strip()
    length = num_states*alph_size + num_states
    if len(code) != length:
        raise InvalidCodeError("Code {!r} has length {}, expected {} for {} states and {} symbols.".format(
            code, len(code), length, num_states, alph_size))
    try:
        targets, flags = dfa_code(num_states, alph_size).parse(code)
    except p.ParseError as e:
        raise InvalidCodeError("Invalid character {!r} at index {} of code {!r}, expected {}.".format(
            code[e.index], e.index, code, ", ".join(sorted(e.expected))))
    for (i, target) in enumerate(targets):
        if target >= num_states:
            raise InvalidCodeError("Invalid transition target {!r} at index {}.".format(code[i], i))
    trans = [targets[st*alph_size : (st+1)*alph_size] for st in range(num_states)]
    return DFA(num_states, alph_size, trans, flags)

def encode_dfa(dfa):
    "The serial code of a DFA with at most 36 states."
    if dfa.num_states > 36:
        raise InvalidCodeError("Cannot encode a DFA with {} states.".format(dfa.num_states))
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    return "".join(digits[st2] for row in dfa.trans for st2 in row) + \
           "".join("t" if flag else "f" for flag in dfa.finality)

### Common utilities

# Whitespace and comments
whitespace = p.regex(r'(\s|--.*)*')

def lexeme(parser):
    "parser followed by whitespace."
    return parser << whitespace

lbracket = lexeme(p.string('['))
rbracket = lexeme(p.string(']'))

name_regex = p.regex(r'[a-zA-Z_]\w*')

# Unsigned integer
natural = lexeme(p.regex(r'0|[1-9]\d*').map(int)).desc("natural number")
# Automaton names and subclass tags
label = lexeme(name_regex).desc("label")
# Serial code, parsed later when the sizes are known
code_token = lexeme(p.regex(r'[0-9a-zA-Z]+')).desc("DFA code")
# Quoted word over a..z, possibly empty
word = lexeme(p.regex(r'"[a-zA-Z]*"').map(lambda s: s[1:-1])).desc("quoted word")
# List of symbol indices
natural_list = (lbracket >> natural.many() << rbracket).desc("list of numbers")

flag = lexeme(p.string('@') >> name_regex).desc("flag")

def setter_value(s):
    return int(s) if s.isdigit() else s

# Optional argument; value is a number or a label
set_arg_value = p.seq(name_regex << p.string('='),
                      lexeme(p.regex(r'\w+').map(setter_value))).desc("optional argument")

### Command parser

class ArgType(Flag):
    LABEL = auto()
    NUMBER = auto()
    CODE = auto()
    TAG = auto()
    WORD = auto()
    LIST = auto()

arg_parsers = {
    ArgType.LABEL : label,
    ArgType.NUMBER : natural,
    ArgType.CODE : code_token,
    ArgType.TAG : label.desc("subclass tag"),
    ArgType.WORD : word,
    ArgType.LIST : natural_list,
}

class Command:
    "A container for a command definition."

    def __init__(self, name, pos_args, opts=None, flags=None, aliases=None):
        self.name = name
        self.pos_args = pos_args
        if opts is None:
            opts = []
        self.opts = opts
        if flags is None:
            flags = []
        self.flags = flags
        if aliases is None:
            aliases = []
        self.aliases = aliases

# List of commands
# Each entry has the command name, positional argument types, optional arguments and flags
commands = [
    # Defining automata
    Command("dfa",
            [ArgType.LABEL, ArgType.NUMBER, ArgType.NUMBER, ArgType.CODE],
            aliases = ["DFA"]),
    Command("complement",
            [ArgType.LABEL, ArgType.LABEL]),
    Command("reverse",
            [ArgType.LABEL, ArgType.LABEL],
            flags = ["verbose"]),
    Command("minimize",
            [ArgType.LABEL, ArgType.LABEL],
            flags = ["verbose"]),
    Command("intersection",
            [ArgType.LABEL, ArgType.LABEL, ArgType.LABEL]),
    Command("cut",
            [ArgType.LABEL, ArgType.LABEL, ArgType.LABEL]),
    Command("image",
            [ArgType.LABEL, ArgType.LABEL, ArgType.LIST],
            aliases = ["homomorphic_image"]),

    # Testing properties
    Command("subclass",
            [ArgType.LABEL, ArgType.TAG],
            opts = ["expect"],
            flags = ["verbose"],
            aliases = ["test"]),
    Command("classify",
            [ArgType.LABEL],
            flags = ["verbose"]),
    Command("empty",
            [ArgType.LABEL],
            opts = ["expect"]),
    Command("equal",
            [ArgType.LABEL, ArgType.LABEL],
            opts = ["expect"]),
    Command("accepts",
            [ArgType.LABEL, ArgType.WORD],
            opts = ["expect"]),
    Command("permutations",
            [ArgType.LABEL],
            opts = ["expect"]),

    # Printing
    Command("show",
            [ArgType.LABEL],
            flags = ["verbose"],
            aliases = ["print"]),
]

command_dict = {alias : cmd for cmd in commands for alias in [cmd.name] + cmd.aliases}

def command_args(cmd):
    "Parse the arguments of cmd; flags and options may appear anywhere."
    @p.generate
    def parse_args():
        args = []
        opts = dict()
        flags = []
        while True:
            maybe_flag = yield flag.optional()
            if maybe_flag is not None:
                if maybe_flag not in cmd.flags:
                    yield p.fail("flag of {}".format(cmd.name))
                flags.append(maybe_flag)
                continue
            maybe_opt = yield set_arg_value.optional()
            if maybe_opt is not None:
                name, value = maybe_opt
                if name not in cmd.opts:
                    yield p.fail("optional argument of {}".format(cmd.name))
                opts[name] = value
                continue
            if len(args) == len(cmd.pos_args):
                return (cmd.name, args, opts, flags)
            arg = yield arg_parsers[cmd.pos_args[len(args)]]
            args.append(arg)
    return parse_args

@p.generate("command")
def command():
    yield p.string('%')
    name = yield lexeme(name_regex)
    if name not in command_dict:
        yield p.fail("known command")
    parsed = yield command_args(command_dict[name])
    return parsed

script = whitespace >> command.many() << p.eof

def parse_program(code):
    "Parse a convexity script. Return a list of commands or raise a ParseError."
    return script.parse(code)
