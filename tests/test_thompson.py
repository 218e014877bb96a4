import pytest

from automata.errors import AutomatonInternalError
from automata.regex_parser import parse
from automata.syntax_tree import Node
from automata.thompson import build, EPSILON, NFABuilder


def edges(nfa):
    return {
        (state.id, symbol, to_id)
        for state in nfa.states
        for symbol, to_ids in state.next_state.items()
        for to_id in to_ids
    }


def test_char():
    nfa = build(parse('a'))
    assert len(nfa.states) == 2
    assert (nfa.start, nfa.end) == (0, 1)
    assert edges(nfa) == {(0, 'a', 1)}
    assert nfa.state(1).isAccepting


def test_concat():
    nfa = build(parse('ab'))
    assert len(nfa.states) == 4
    assert edges(nfa) == {(0, 'a', 1), (1, EPSILON, 2), (2, 'b', 3)}
    assert (nfa.start, nfa.end) == (0, 3)


def test_alternation():
    nfa = build(parse('a|b'))
    # 新的 start/end 先分配：0, 1；左分支 2->3，右分支 4->5
    assert len(nfa.states) == 6
    assert edges(nfa) == {
        (0, EPSILON, 2), (0, EPSILON, 4),
        (2, 'a', 3), (4, 'b', 5),
        (3, EPSILON, 1), (5, EPSILON, 1),
    }
    assert (nfa.start, nfa.end) == (0, 1)


def test_kleene_star():
    nfa = build(parse('a*'))
    assert edges(nfa) == {
        (0, EPSILON, 2), (0, EPSILON, 1),
        (2, 'a', 3),
        (3, EPSILON, 2), (3, EPSILON, 1),
    }


@pytest.mark.parametrize('regex', ['a', 'ab', 'a|b', '(a|b)*abb', 'a**', '((ab)*|c)*d'])
def test_single_accepting_state(regex):
    nfa = build(parse(regex))
    accepting = [state.id for state in nfa.states if state.isAccepting]
    assert accepting == [nfa.end]


def test_state_count_is_linear():
    # 每个字符、| 、* 各增加2个状态，连接不增加状态
    nfa = build(parse('(a|b)*abb'))
    assert len(nfa.states) == 2 * 5 + 2 + 2


def test_builds_are_independent():
    first = build(parse('(a|b)*'))
    second = build(parse('(a|b)*'))
    assert first.to_dict() == second.to_dict()
    assert first.states is not second.states


def test_unknown_node_kind():
    class Bogus(Node):
        kind = 'BOGUS'

    with pytest.raises(AutomatonInternalError):
        NFABuilder().build(Bogus())


def test_to_dict():
    data = build(parse('a')).to_dict()
    assert data == {
        'start': 0,
        'end': 1,
        'states': [
            {'id': 0, 'isAccepting': False, 'transitions': {'a': [1]}},
            {'id': 1, 'isAccepting': True, 'transitions': {}},
        ]
    }
