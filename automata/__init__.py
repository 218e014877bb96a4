"""
正则表达式 -> 有限自动机
    regex_parser: 正则表达式 -> 语法树
    thompson: 语法树 -> NFA（Thompson构造法）
    subset: NFA -> DFA（子集法）
    followpos: 语法树 -> DFA（followpos 直接构造）
"""
from .errors import RegexSyntaxError, AutomatonInternalError, TooManyStatesError
from .regex_parser import parse, try_parse, is_valid_regex
from .thompson import build, EPSILON
from .subset import convert
from .followpos import annotate, build_dfa, compute
from .dfa import DFA, DFAState

__all__ = [
    'RegexSyntaxError', 'AutomatonInternalError', 'TooManyStatesError',
    'parse', 'try_parse', 'is_valid_regex',
    'build', 'EPSILON',
    'convert',
    'annotate', 'build_dfa', 'compute',
    'DFA', 'DFAState',
]
