import pytest

from convexity.convexity import Convexity, main

unit_tests = []

# just some basic checks
code_basic = """
%dfa odd 2 2 1001ft
%dfa single_a 3 2 122222ftf
%dfa all 1 2 00t
%empty expect=F odd
%accepts expect=T odd "bab"
%accepts expect=F odd ""
%minimize odd2 odd
%equal expect=T odd odd2
%complement even odd
%equal expect=F odd even
%intersection none odd even
%empty expect=T none
%subclass expect=F odd RID
%subclass expect=F odd LID
%subclass expect=T all RID
%subclass expect=T single_a PF
"""
unit_tests.append(("basic", code_basic))

# sigma star lies in every ideal class and its complement in every closed class
code_sigma_star = """
%dfa all 1 2 00t
%test expect=T all RID
%test expect=T all LID
%test expect=T all TSID
%test expect=T all ASID
%test expect=T all PC
%test expect=T all SC
%test expect=T all FC
%test expect=T all SwC
%test expect=F all PF
%test expect=F all SF
%test expect=F all FF
%test expect=F all SwF
%classify all
"""
unit_tests.append(("sigma star", code_sigma_star))

# free languages
code_free = """
-- the single word a, also with its sink numbered before the final state, then the words ab and b
%dfa single_a 3 2 122222ftf
%dfa ab_or_b 4 2 12323333fftf
%dfa a_renumbered 3 2 211111fft
%subclass expect=T a_renumbered FF
%subclass expect=T a_renumbered SwF
%subclass expect=T single_a SF
%subclass expect=T single_a FF
%subclass expect=T single_a SwF
%subclass expect=T ab_or_b PF
%subclass expect=F ab_or_b SF
%subclass expect=F ab_or_b FF
%subclass expect=F ab_or_b SwF
%permutations expect=6 ab_or_b
%permutations expect=2 single_a
"""
unit_tests.append(("free languages", code_free))

# a followed by anything is a right ideal, reversing gives a left ideal
code_reverse = """
%dfa starts_a 3 2 121122ftf
%subclass expect=T starts_a RID
%subclass expect=F starts_a LID
%reverse ends_a starts_a
%subclass expect=T ends_a LID
%subclass expect=F ends_a RID
%accepts expect=T ends_a "bba"
%accepts expect=F ends_a "ab"
%reverse again ends_a
%equal expect=T again starts_a
"""
unit_tests.append(("reverse", code_reverse))

# factors ab and aa
code_factors = """
%dfa has_ab 3 2 101222fft
%dfa has_aa 3 2 102022fft
%subclass expect=T has_ab TSID
%subclass expect=T has_ab ASID
%subclass expect=T has_aa TSID
%subclass expect=F has_aa ASID
%complement no_aa has_aa
%subclass expect=T no_aa FC
%subclass expect=F no_aa SwC
%image has_ba has_ab [1 0]
%accepts expect=T has_ba "bba"
%accepts expect=F has_ba "aab"
%equal expect=F has_ab has_ba
"""
unit_tests.append(("factors", code_factors))

# the cut of sigma star with anything keeps only the empty word
code_cut = """
%dfa all 1 2 00t
%dfa none 1 2 00f
%dfa odd 2 2 1001ft
%complement even odd
%cut c1 all odd
%cut c2 all even
%equal expect=T c1 none
%equal expect=T c2 all
%cut c3 none all
%empty expect=T c3
"""
unit_tests.append(("cut", code_cut))

@pytest.mark.parametrize("name, code", unit_tests)
def test_program(name, code):
    convexity_inst = Convexity()
    print("Running test", name)
    convexity_inst.run(code, "assert")

def test_failing_expectation():
    with pytest.raises(AssertionError):
        Convexity().run("%dfa all 1 2 00t\n%subclass expect=F all RID", "assert")

def test_parse_error(capsys):
    assert Convexity().run("%dfa all 1 2 00t\n%bogus all") is None
    out = capsys.readouterr().out
    assert "Parse error" in out
    assert "%bogus all" in out
    with pytest.raises(Exception):
        Convexity().run("%bogus all", "assert")

def test_undefined_automaton():
    with pytest.raises(Exception, match="nope is not a defined automaton"):
        Convexity().run("%empty nope")

def test_report_mode(capsys):
    automata = Convexity().run("%dfa odd 2 2 1001ft\n%show odd\n%classify odd")
    assert set(automata) == {"odd"}
    out = capsys.readouterr().out
    assert "Code: 1001ft" in out
    assert "right ideal" in out

def test_main_with_code(capsys):
    assert main(["--code", "122222ftf", "-n", "3", "-k", "2"]) == 0
    out = capsys.readouterr().out
    assert "prefix-free" in out
    assert main(["-c", "122222ftf", "-n", "3", "-k", "2", "-s", "PF"]) == 0
    assert main(["-c", "122222ftf", "-n", "3", "-k", "2", "-s", "RID"]) == 2
    assert main(["-c", "1222ftf", "-n", "3", "-k", "2"]) == 1

def test_main_with_file(tmp_path, capsys):
    script = tmp_path / "odd.cvx"
    script.write_text("%dfa odd 2 2 1001ft\n%subclass odd LID\n")
    assert main([str(script)]) == 0
    assert "odd IS NOT LID" in capsys.readouterr().out

def test_main_without_input():
    with pytest.raises(SystemExit):
        main([])
