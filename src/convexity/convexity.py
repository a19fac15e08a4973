import argparse
import sys
import time

import parsy

from convexity import dparser
from convexity import operators as ops
from convexity.errors import InvalidCodeError
from convexity.general import letter
from convexity.subclasses import SubclassTester, SUBCLASS_TAGS, SUBCLASS_NAMES


class Convexity:
    def __init__(self):
        self.automata = {}

    def get(self, name):
        try:
            return self.automata[name]
        except KeyError:
            raise Exception("{} is not a defined automaton".format(name))

    def run(self, code, mode="report", print_parsed=False):
        try:
            parsed = dparser.parse_program(code)
            if print_parsed:
                print(parsed)
        except parsy.ParseError as e:
            print("Parse error: {}".format(e))
            linenum, lineindex = parsy.line_info_at(e.stream, e.index)
            lines = e.stream.splitlines()
            if linenum < len(lines):
                print(lines[linenum])
                print(" "*lineindex + "^")
            if mode == "assert":
                raise Exception("Parse error")
            return None

        for parsed_line in parsed:
            cmd, args, kwds, flags = parsed_line
            verb = "verbose" in flags
            expect = kwds.get("expect", None)

            if cmd == "dfa":
                name, num_states, alph_size, code = args
                self.automata[name] = dparser.parse_dfa_code(code, num_states, alph_size)

            elif cmd == "complement":
                new, old = args
                self.automata[new] = ops.complement(self.get(old))

            elif cmd == "reverse":
                new, old = args
                self.automata[new] = ops.minimize(ops.determinize(ops.reverse(self.get(old)), verbose=verb), verbose=verb)

            elif cmd == "minimize":
                new, old = args
                self.automata[new] = ops.minimize(self.get(old), verbose=verb)

            elif cmd == "intersection":
                new, name1, name2 = args
                self.automata[new] = ops.minimize(ops.intersection(self.get(name1), self.get(name2)))

            elif cmd == "cut":
                new, name1, name2 = args
                self.automata[new] = ops.minimize(ops.cut(self.get(name1), self.get(name2)))

            elif cmd == "image":
                new, old, mapping = args
                self.automata[new] = ops.homomorphic_image(self.get(old), mapping)

            elif cmd == "subclass":
                name, tag = args
                report_subclass((name, self.get(name)), tag, mode=mode, truth=expect, verbose=verb)

            elif cmd == "classify":
                name = args[0]
                report_classification((name, self.get(name)), verbose=verb)

            elif cmd == "empty":
                name = args[0]
                report_empty((name, self.get(name)), mode=mode, truth=expect)

            elif cmd == "equal":
                name1, name2 = args
                report_equal((name1, self.get(name1)), (name2, self.get(name2)), mode=mode, truth=expect)

            elif cmd == "accepts":
                name, the_word = args
                report_accepts((name, self.get(name)), the_word, mode=mode, truth=expect)

            elif cmd == "permutations":
                name = args[0]
                dfa = self.get(name)
                tim = time.time()
                count = sum(1 for _ in ops.state_permutations(dfa))
                tim = time.time() - tim
                print("{} has {} state numberings (time {:.3f})".format(name, count, tim))
                print()
                if mode == "assert" and expect is not None:
                    print(count, expect)
                    assert count == expect

            elif cmd == "show" and mode == "report":
                name = args[0]
                dfa = self.get(name)
                print(dfa.info_string(name, verbose=verb))
                if dfa.num_states <= 36:
                    print("Code: {}".format(dparser.encode_dfa(dfa)))
                print()

        return self.automata

def report_subclass(a, tag, mode="report", truth=None, verbose=False):
    aname, aDFA = a
    print("Testing whether %s is %s." % (aname, SUBCLASS_NAMES.get(tag, tag)))
    tim = time.time()
    res = SubclassTester(verbose=verbose).test_subclass(tag, aDFA)
    tim = time.time() - tim
    if res:
        print("%s IS %s (time %.3f)" % (aname, tag, tim))
    else:
        print("%s IS NOT %s (time %.3f)" % (aname, tag, tim))
    print()
    if mode == "assert" and truth is not None:
        print(res, truth)
        assert res == (truth == "T")
    return res

def report_classification(a, verbose=False):
    aname, aDFA = a
    print("Classifying %s." % aname)
    tester = SubclassTester(verbose=verbose)
    tim = time.time()
    results = tester.classify(aDFA)
    tim = time.time() - tim
    for tag in SUBCLASS_TAGS:
        print("  %-5s %-16s %s" % (tag, SUBCLASS_NAMES[tag], "yes" if results[tag] else "no"))
    print("(time %.3f)" % tim)
    print()
    return results

def report_empty(a, mode="report", truth=None):
    aname, aDFA = a
    print("Testing whether %s accepts the empty language." % aname)
    res = ops.is_empty_language(aDFA)
    if res:
        print("It is EMPTY.")
    else:
        print("It is NONEMPTY.")
    print()
    if mode == "assert" and truth is not None:
        print(res, truth)
        assert res == (truth == "T")
    return res

def report_equal(a, b, mode="report", truth=None):
    aname, aDFA = a
    bname, bDFA = b
    print("Testing whether %s and %s accept the same language." % (aname, bname))
    tim = time.time()
    res = ops.equivalent(aDFA, bDFA)
    tim = time.time() - tim
    if res:
        print("They are EQUAL (time %.3f)." % tim)
    else:
        print("They are DIFFERENT (time %.3f)." % tim)
    print()
    if mode == "assert" and truth is not None:
        print(res, truth)
        assert res == (truth == "T")
    return res

def report_accepts(a, the_word, mode="report", truth=None):
    aname, aDFA = a
    print("Testing whether %s accepts %r." % (aname, the_word))
    res = aDFA.accepts(the_word)
    if res:
        print("It DOES.")
    else:
        print("It DOES NOT.")
    print()
    if mode == "assert" and truth is not None:
        print(res, truth)
        assert res == (truth == "T")
    return res

def main(argv=None):
    arg_parser = argparse.ArgumentParser(description="Test regular languages for membership in convex subclasses.")
    arg_parser.add_argument("filename", metavar='f', type=str, nargs='?',
                            help="script of %%commands to run")
    arg_parser.add_argument("--code", "-c", type=str,
                            help="serial code of a single DFA to classify")
    arg_parser.add_argument("--states", "-n", type=int)
    arg_parser.add_argument("--alphabet", "-k", type=int)
    arg_parser.add_argument("--subclass", "-s", type=str, choices=SUBCLASS_TAGS,
                            help="test only this subclass")
    arg_parser.add_argument("--verbose", "-v", action="store_true")
    args = arg_parser.parse_args(argv)

    if args.filename is not None:
        with open(args.filename, 'r') as f:
            code = f.read()
        runner = Convexity()
        runner.run(code)
        return 0

    if args.code is None:
        arg_parser.error("give a script file or --code")
    if args.states is None or args.alphabet is None:
        arg_parser.error("--code needs --states and --alphabet")
    try:
        dfa = dparser.parse_dfa_code(args.code, args.states, args.alphabet)
    except InvalidCodeError as e:
        print("Invalid code: {}".format(e), file=sys.stderr)
        return 1
    name = args.code.strip()
    if args.verbose:
        print(dfa.info_string(name, verbose=True))
        print("Alphabet: {}".format(" ".join(letter(sym) for sym in range(dfa.alph_size))))
        print()
    if args.subclass is not None:
        res = report_subclass((name, dfa), args.subclass, verbose=args.verbose)
        return 0 if res else 2
    report_classification((name, dfa), verbose=args.verbose)
    return 0

if __name__ == "__main__":
    sys.exit(main())
