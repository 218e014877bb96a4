"""
followpos 法：语法树直接构造DFA（不经过NFA）
    1. 增广：root = Concat(ast, Char('#'))
    2. 后序遍历标注 nullable / firstpos / lastpos，同时计算 followpos
    3. 以 firstpos(root) 为初态，按字符合并 followpos 得到新状态
"""
import logging
from collections import deque

from bidict import bidict

from .dfa import DFA, DFAState
from .errors import AutomatonInternalError, TooManyStatesError
from .syntax_tree import (
    CHAR, CONCAT, ALTERNATION, KLEENE_STAR, END_MARKER,
    AnnotatedNode, Char, Concat,
)

logger = logging.getLogger(__name__)

INITIAL = 'initial'
STATE = 'state'
TRANSITION = 'transition'
EMPTY = 'empty'


class Annotation:
    """
        标注结果
    :param root: 增广后的标注语法树
    :param positions: { 位置: 字符 }，包括结束标记 '#'
    :param followpos: { 位置: set(位置) }
    """

    def __init__(self, root, positions, followpos):
        self.root = root
        self.positions = positions
        self.followpos = followpos

    @property
    def end_position(self):
        return len(self.positions)

    def alphabet(self):
        return sorted({ch for pos, ch in self.positions.items() if pos != self.end_position})

    def position_table(self):
        return [
            {
                'position': pos,
                'symbol': self.positions[pos],
                'followpos': sorted(self.followpos[pos])
            }
            for pos in sorted(self.positions)
        ]


class TraceStep:
    def __init__(self, kind, state=None, positions=None, symbol=None,
                 contributing=None, result=None, target=None, is_new=None, message=None):
        self.kind = kind
        self.state = state
        self.positions = positions
        self.symbol = symbol
        self.contributing = contributing
        self.result = result
        self.target = target
        self.is_new = is_new
        self.message = message

    def to_dict(self):
        res = {'kind': self.kind}
        if self.kind == EMPTY:
            res['message'] = self.message
            return res
        res['state'] = self.state
        if self.kind in (INITIAL, STATE):
            res['positions'] = list(self.positions)
        else:
            res['symbol'] = self.symbol
            res['contributing'] = list(self.contributing)
            res['result'] = list(self.result)
            res['target'] = self.target
            res['isNew'] = self.is_new
        return res

    def __repr__(self):
        return f"TraceStep({self.to_dict()!r})"


def annotate(ast):
    """
        计算增广语法树各节点的 nullable / firstpos / lastpos 以及各位置的 followpos
    :param ast: 解析得到的语法树（不会被修改）
    :return: Annotation
    """
    augmented = Concat(ast, Char(END_MARKER))
    positions = {}
    followpos = {}
    counter = 0

    # 先给所有字符编号并初始化 followpos，保证遍历中途不会出现未初始化的位置
    def number(node):
        nonlocal counter
        if node.kind == CHAR:
            counter += 1
            positions[counter] = node.value
            followpos[counter] = set()
            return
        for child in node.children():
            number(child)

    number(augmented)
    counter = 0

    def traverse(node):  # 后序遍历：先子节点再父节点
        nonlocal counter
        if node.kind == CHAR:
            counter += 1
            return AnnotatedNode(CHAR, (), False, {counter}, {counter}, value=node.value, position=counter)

        children = [traverse(child) for child in node.children()]

        if node.kind == CONCAT:
            left, right = children
            nullable = left.nullable and right.nullable
            firstpos = left.firstpos | right.firstpos if left.nullable else left.firstpos
            lastpos = left.lastpos | right.lastpos if right.nullable else right.lastpos
            for pos in left.lastpos:
                followpos[pos].update(right.firstpos)
        elif node.kind == ALTERNATION:
            left, right = children
            nullable = left.nullable or right.nullable
            firstpos = left.firstpos | right.firstpos
            lastpos = left.lastpos | right.lastpos
        elif node.kind == KLEENE_STAR:
            child, = children
            nullable = True
            firstpos = child.firstpos
            lastpos = child.lastpos
            for pos in lastpos:
                followpos[pos].update(firstpos)
        else:
            raise AutomatonInternalError(f"未知的语法树节点类型: {node.kind!r}")

        return AnnotatedNode(node.kind, children, nullable, firstpos, lastpos)

    root = traverse(augmented)
    logger.debug("followpos annotation: %d positions", len(positions))
    return Annotation(root, positions, followpos)


def build_dfa(annotation, max_states=None):
    """
        由 followpos 构造DFA，并记录每一步的计算过程
    :param annotation: annotate 的结果
    :param max_states: DFA状态数上限，None 表示不限制，超过时抛出 TooManyStatesError
    :return: (DFA, trace)，DFA 的每个状态的 positions 记录对应的位置集合
    """
    cins = annotation.alphabet()
    end_position = annotation.end_position
    trace = []

    start_positions = annotation.root.firstpos
    if not start_positions:
        trace.append(TraceStep(EMPTY, message="firstpos(root) 为空，得到空自动机"))
        return DFA.empty(cins), trace

    dfa_state_ids = bidict()  # { (1, 2, 3): 0 }
    states = []

    def add_state(key):
        if max_states is not None and len(states) >= max_states:
            raise TooManyStatesError(max_states)
        dfa_state_ids[key] = len(states)
        states.append(DFAState(len(states), end_position in key, positions=key))
        return dfa_state_ids[key]

    start_key = tuple(sorted(start_positions))
    add_state(start_key)
    trace.append(TraceStep(INITIAL, state=0, positions=start_key))
    queue = deque([0])

    while queue:
        cur = states[queue.popleft()]
        key = dfa_state_ids.inverse[cur.id]
        trace.append(TraceStep(STATE, state=cur.id, positions=key))

        for ch in cins:
            contributing = [pos for pos in key if annotation.positions[pos] == ch]
            if not contributing:
                continue
            union = set()
            for pos in contributing:
                union.update(annotation.followpos[pos])
            next_key = tuple(sorted(union))

            if not next_key:
                trace.append(TraceStep(TRANSITION, state=cur.id, symbol=ch, contributing=contributing,
                                       result=next_key, target=None, is_new=False))
                continue

            is_new = next_key not in dfa_state_ids
            if is_new:
                next_id = add_state(next_key)
                queue.append(next_id)
            else:
                next_id = dfa_state_ids[next_key]
            cur.transitions[ch] = next_id
            trace.append(TraceStep(TRANSITION, state=cur.id, symbol=ch, contributing=contributing,
                                   result=next_key, target=next_id, is_new=is_new))

    logger.debug("followpos construction: %d DFA states", len(states))
    return DFA(states, cins, 0), trace


def compute(ast, max_states=None):
    return build_dfa(annotate(ast), max_states)
