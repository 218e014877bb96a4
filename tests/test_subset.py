import pytest

from automata.errors import TooManyStatesError
from automata.regex_parser import parse
from automata.subset import convert, conversion_table, epsilon_closure, get_alphabet, move, state_key
from automata.thompson import build


def subset_dfa(regex):
    return convert(build(parse(regex)))


def test_alphabet():
    assert get_alphabet(build(parse('(c|a)*b'))) == ['a', 'b', 'c']


def test_epsilon_closure_and_move():
    nfa = build(parse('(a|b)*abb'))
    start = epsilon_closure(nfa, {nfa.start})
    assert state_key(start) == (0, 1, 2, 4, 6, 8)
    assert move(nfa, start, 'a') == {5, 9}
    assert move(nfa, start, 'b') == {7}
    assert state_key(epsilon_closure(nfa, {7})) == (1, 2, 3, 4, 6, 7, 8)


def test_textbook_example():
    dfa = subset_dfa('(a|b)*abb')
    assert dfa.start_state == 0
    assert dfa.alphabet == ['a', 'b']
    assert [state.nfa_states for state in dfa.states] == [
        (0, 1, 2, 4, 6, 8),
        (1, 2, 3, 4, 5, 6, 8, 9, 10),
        (1, 2, 3, 4, 6, 7, 8),
        (1, 2, 3, 4, 6, 7, 8, 11, 12),
        (1, 2, 3, 4, 6, 7, 8, 13),
    ]
    assert [state.transitions for state in dfa.states] == [
        {'a': 1, 'b': 2},
        {'a': 1, 'b': 3},
        {'a': 1, 'b': 2},
        {'a': 1, 'b': 4},
        {'a': 1, 'b': 2},
    ]
    assert dfa.accepting_states() == [4]


@pytest.mark.parametrize('text', ['a', 'abc', 'abbbcbc'])
def test_accepts(text):
    assert subset_dfa('a(b|c)*').accepts(text)


@pytest.mark.parametrize('text', ['', 'b', 'ab c', 'ba', 'abd'])
def test_rejects(text):
    assert not subset_dfa('a(b|c)*').accepts(text)


def test_missing_transitions_are_omitted():
    dfa = subset_dfa('ab')
    # 没有生成拒绝状态
    assert len(dfa.states) == 3
    assert dfa.states[0].transitions == {'a': 1}
    assert dfa.states[2].transitions == {}


def test_star_start_is_accepting():
    dfa = subset_dfa('a*')
    assert dfa.states[0].isAccepting
    assert dfa.accepts('')
    assert dfa.accepts('aaaa')


def test_conversion_table():
    dfa = subset_dfa('ab')
    table = conversion_table(dfa)
    assert table[0] == {'S': 0, 'I': [0], 'Ia': {'S': 1, 'I': [1, 2]}, 'Ib': None}
    assert table[2]['Ia'] is None and table[2]['Ib'] is None


def test_to_dict():
    data = subset_dfa('a|b').to_dict()
    assert data['startState'] == 0
    assert data['alphabet'] == ['a', 'b']
    assert data['acceptingStates'] == [1, 2]
    assert data['states'][0]['transitions'] == {'a': 1, 'b': 2}
    assert 'positions' not in data['states'][0]


def test_max_states():
    nfa = build(parse('(a|b)*abb'))
    assert len(convert(nfa, max_states=5).states) == 5
    with pytest.raises(TooManyStatesError) as excinfo:
        convert(nfa, max_states=4)
    assert excinfo.value.limit == 4


def test_max_states_stops_exponential_blowup():
    # 倒数第7个字符为 a，最小DFA就有 2^7 个状态
    nfa = build(parse('(a|b)*a' + '(a|b)' * 6))
    with pytest.raises(TooManyStatesError):
        convert(nfa, max_states=64)
