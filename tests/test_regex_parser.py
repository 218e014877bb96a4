import pytest

from automata.errors import RegexSyntaxError
from automata.regex_parser import (
    parse, try_parse, is_valid_regex, alphabet_of,
    tokenize, insert_concatenation, shunt,
)
from automata.syntax_tree import Char, Concat, Alternation, KleeneStar


def postfix(regex):
    return ''.join(t.ch for t in shunt(insert_concatenation(tokenize(regex))))


def test_single_char():
    assert parse('a') == Char('a')


def test_precedence():
    # * > . > |
    assert parse('a|bc*') == Alternation(Char('a'), Concat(Char('b'), KleeneStar(Char('c'))))


def test_left_associative():
    assert parse('abc') == Concat(Concat(Char('a'), Char('b')), Char('c'))
    assert parse('a|b|c') == Alternation(Alternation(Char('a'), Char('b')), Char('c'))


def test_parentheses_override_precedence():
    assert parse('(a|b)c') == Concat(Alternation(Char('a'), Char('b')), Char('c'))
    assert parse('(ab)*') == KleeneStar(Concat(Char('a'), Char('b')))


def test_double_star():
    assert parse('a**') == KleeneStar(KleeneStar(Char('a')))


@pytest.mark.parametrize('implicit, explicit', [
    ('ab', 'a.b'),
    ('(a)(b)', '(a).(b)'),
    ('a*b', 'a*.b'),
    ('a(b|c)*', 'a.(b|c)*'),
])
def test_implicit_concatenation(implicit, explicit):
    assert parse(implicit) == parse(explicit)


def test_insert_concatenation_positions():
    tokens = insert_concatenation(tokenize('a(b)'))
    assert [t.ch for t in tokens] == ['a', '.', '(', 'b', ')']
    assert tokens[1].implicit
    assert tokens[1].pos == 1


def test_postfix():
    assert postfix('(a|b)*abb') == 'ab|*a.b.b.'
    assert postfix('a|bc') == 'abc.|'


def test_parse_is_idempotent():
    assert parse('(a|b)*abb') == parse('(a|b)*abb')
    assert parse('(a|b)*abb') is not parse('(a|b)*abb')


def test_different_trees_are_not_equal():
    assert parse('ab') != parse('ba')
    assert parse('a|b') != parse('ab')


@pytest.mark.parametrize('regex', ['a*', '(a|b)*', 'a', '((a))', 'a1|Z9'])
def test_valid(regex):
    assert is_valid_regex(regex)


@pytest.mark.parametrize('regex, position', [
    ('a|', 1),
    ('(a', 0),
    ('*a', 0),
    ('a)', 1),
    ('|a', 0),
    ('a||b', 1),
    ('', 0),
    ('()', 2),
    ('a b', 1),
    ('a+b', 1),
])
def test_syntax_errors(regex, position):
    with pytest.raises(RegexSyntaxError) as exc_info:
        parse(regex)
    assert exc_info.value.position == position
    assert not is_valid_regex(regex)


def test_try_parse_result():
    ok = try_parse('ab')
    assert ok.ok
    assert ok.ast == parse('ab')
    assert ok.to_dict()['success']

    failed = try_parse('(a')
    assert not failed.ok
    assert failed.ast is None
    assert isinstance(failed.error, RegexSyntaxError)
    assert failed.to_dict() == {'success': False, 'message': failed.error.message, 'position': 0}


def test_alphabet_of():
    assert alphabet_of(parse('(b|a)*ab1')) == ['1', 'a', 'b']


def test_to_dict():
    assert parse('a*').to_dict() == {'type': 'KLEENE_STAR', 'child': {'type': 'CHAR', 'value': 'a'}}
