from automata.dot import ast_to_dot, nfa_to_dot, dfa_to_dot
from automata.dfa import DFA
from automata.followpos import annotate, compute
from automata.regex_parser import parse
from automata.subset import convert
from automata.thompson import build


def test_nfa_dot():
    source = nfa_to_dot(build(parse('a*')))
    assert source.startswith('// NFA')
    assert 'doublecircle' in source
    assert 'start -> 0' in source


def test_dfa_dot_merges_parallel_edges():
    dfa, _ = compute(parse('a(b|c)*'))
    source = dfa_to_dot(dfa)
    assert 'label="b,c"' in source


def test_subset_dfa_dot_has_no_positions():
    source = dfa_to_dot(convert(build(parse('ab'))))
    assert '{' not in source.split('\n', 2)[2]


def test_empty_dfa_dot():
    source = dfa_to_dot(DFA.empty())
    assert 'start' not in source


def test_ast_dot():
    raw = ast_to_dot(parse('a|b'))
    assert 'nullable' not in raw
    annotated = ast_to_dot(annotate(parse('a|b')).root)
    assert 'nullable=false' in annotated
    assert 'firstpos={1,2}' in annotated
