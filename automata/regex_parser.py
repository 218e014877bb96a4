"""
正则表达式解析：regex 字符串 -> 抽象语法树
    字符：字母和数字
    运算符：| 选择， • 连接（可写成 . ，也可省略）， * 闭包， 括号改变优先级
"""
import logging

from .errors import RegexSyntaxError
from .syntax_tree import Char, Concat, Alternation, KleeneStar

logger = logging.getLogger(__name__)

CONCAT_OP = '.'
OPERATORS = ['|', CONCAT_OP, '*']
PRECEDENCE = {'*': 3, CONCAT_OP: 2, '|': 1}


class Token:
    def __init__(self, ch, pos, implicit=False):
        self.ch = ch
        self.pos = pos  # 在原串中的下标
        self.implicit = implicit  # 是否为自动插入的连接符

    def is_literal(self):
        return is_literal(self.ch)

    def __repr__(self):
        return f"Token({self.ch!r}, {self.pos})"


class ParseResult:
    """解析结果：成功时 ast 不为空，失败时 error 为 RegexSyntaxError"""

    def __init__(self, ast=None, error=None):
        self.ast = ast
        self.error = error

    @property
    def ok(self):
        return self.error is None

    def to_dict(self):
        if self.ok:
            return {'success': True, 'ast': self.ast.to_dict()}
        return {'success': False, **self.error.to_dict()}


def is_literal(ch):
    return len(ch) == 1 and ch.isascii() and ch.isalnum()


def tokenize(regex):
    tokens = []
    for pos, ch in enumerate(regex):
        if not is_literal(ch) and ch not in ('(', ')', '|', '*', CONCAT_OP):
            raise RegexSyntaxError(f"非法字符 {ch!r}", pos)
        tokens.append(Token(ch, pos))
    return tokens


def insert_concatenation(tokens):
    """
        在相邻的两个记号之间补上省略的连接符
        左侧为 字符 / ) / * ，右侧为 字符 / ( 时插入
    :param tokens: tokenize 的结果
    :return: 补全连接符后的记号列表
    """
    result = []
    for i, token in enumerate(tokens):
        result.append(token)
        if i + 1 == len(tokens):
            break
        nxt = tokens[i + 1]
        if (token.is_literal() or token.ch in (')', '*')) and (nxt.is_literal() or nxt.ch == '('):
            result.append(Token(CONCAT_OP, nxt.pos, implicit=True))
    return result


def shunt(tokens):
    """
        调度场算法：中缀转后缀，便于提取运算优先级
        * = Zero or more
        . = Concatenation
        | = Alternation
    :param tokens: 补全连接符后的记号列表
    :return: 后缀形式的记号列表
    """
    postfix = []
    stack = []

    for token in tokens:
        if token.ch == '(':
            stack.append(token)
        elif token.ch == ')':
            while stack and stack[-1].ch != '(':
                postfix.append(stack.pop())
            if not stack:
                raise RegexSyntaxError("右括号没有匹配的左括号", token.pos)
            # 丢弃匹配的 '('
            stack.pop()
        elif token.ch in PRECEDENCE:
            while stack and stack[-1].ch != '(' and PRECEDENCE[stack[-1].ch] >= PRECEDENCE[token.ch]:
                postfix.append(stack.pop())
            stack.append(token)
        else:
            postfix.append(token)

    while stack:
        token = stack.pop()
        if token.ch == '(':
            raise RegexSyntaxError("左括号没有匹配的右括号", token.pos)
        postfix.append(token)

    return postfix


def postfix_to_ast(postfix, end_pos=0):
    stack = []
    for token in postfix:
        if token.ch == '*':
            if not stack:
                raise RegexSyntaxError("'*' 缺少操作数", token.pos)
            stack.append(KleeneStar(stack.pop()))
        elif token.ch in ('|', CONCAT_OP):
            if len(stack) < 2:
                raise RegexSyntaxError(f"'{token.ch}' 缺少操作数", token.pos)
            right = stack.pop()
            left = stack.pop()
            stack.append(Alternation(left, right) if token.ch == '|' else Concat(left, right))
        else:
            stack.append(Char(token.ch))

    if len(stack) != 1:
        if not stack:
            raise RegexSyntaxError("空的正则表达式", end_pos)
        raise RegexSyntaxError("表达式无法归约为一棵语法树", end_pos)
    return stack[0]


def parse(regex):
    """
        将正则表达式解析为语法树
    :param regex: 正则表达式
    :return: 语法树根节点
    :raises RegexSyntaxError: 括号不匹配、运算符缺少操作数、非法字符或空表达式
    """
    tokens = insert_concatenation(tokenize(regex))
    ast = postfix_to_ast(shunt(tokens), end_pos=len(regex))
    logger.debug("parsed %r -> %r", regex, ast)
    return ast


def try_parse(regex):
    try:
        return ParseResult(ast=parse(regex))
    except RegexSyntaxError as e:
        return ParseResult(error=e)


def is_valid_regex(regex):
    return try_parse(regex).ok


def alphabet_of(ast):
    """语法树中出现的所有字符，升序"""
    cins = set()
    stack = [ast]
    while stack:
        node = stack.pop()
        if isinstance(node, Char):
            cins.add(node.value)
        stack.extend(node.children())
    return sorted(cins)
