"""
Thompson构造法：语法树 -> NFA
    所有状态保存在 NFA.states 中（下标即状态id），转换只记录目标状态的id
    状态id由每次构造各自的 NFABuilder 分配，每次构造都从0开始
"""
import logging
from collections import defaultdict

from .errors import AutomatonInternalError
from .syntax_tree import CHAR, CONCAT, ALTERNATION, KLEENE_STAR

logger = logging.getLogger(__name__)

EPSILON = 'ε'


class State:
    def __init__(self, id_, isAccepting=False):
        self.id = id_
        self.isAccepting = isAccepting
        self.next_state = defaultdict(set)  # {'a': {1, 2},  'ε': {3}}

    def targets(self, symbol):
        return self.next_state.get(symbol, ())

    def to_dict(self):
        return {
            'id': self.id,
            'isAccepting': self.isAccepting,
            'transitions': {symbol: sorted(ids) for symbol, ids in self.next_state.items()}
        }


class NFAFragment:
    def __init__(self, start, end):
        # start 和 end 都是状态id
        self.start = start
        self.end = end


class NFA(NFAFragment):
    def __init__(self, start, end, states):
        super().__init__(start, end)
        self.states = states

    def state(self, id_):
        return self.states[id_]

    def to_dict(self):
        return {
            'start': self.start,
            'end': self.end,
            'states': [state.to_dict() for state in self.states]
        }


class NFABuilder:
    def __init__(self):
        self.states = []

    def new_state(self):
        state = State(len(self.states))
        self.states.append(state)
        return state.id

    def add_transition(self, come, to, symbol):
        self.states[come].next_state[symbol].add(to)

    def build(self, ast):
        """
            将语法树转换为NFA
        :param ast: 语法树根节点
        :return: NFA，终态只有一个，即最外层片段的 end
        """
        fragment = self.build_node(ast)
        self.states[fragment.end].isAccepting = True
        logger.debug("thompson NFA: %d states", len(self.states))
        return NFA(fragment.start, fragment.end, self.states)

    def build_node(self, node):
        if node.kind == CHAR:
            return self.from_symbol(node.value)
        elif node.kind == CONCAT:
            return self.concat(self.build_node(node.left), self.build_node(node.right))
        elif node.kind == ALTERNATION:
            return self.union(node)
        elif node.kind == KLEENE_STAR:
            return self.closure(node)
        raise AutomatonInternalError(f"未知的语法树节点类型: {node.kind!r}")

    def from_symbol(self, symbol):  # 创建 1 --a--> 2
        start = self.new_state()
        end = self.new_state()
        self.add_transition(start, end, symbol)
        return NFAFragment(start, end)

    def concat(self, first, second):  # ab
        self.add_transition(first.end, second.start, EPSILON)
        return NFAFragment(first.start, second.end)

    def union(self, node):  # a|b
        start = self.new_state()
        end = self.new_state()
        first = self.build_node(node.left)
        second = self.build_node(node.right)

        self.add_transition(start, first.start, EPSILON)
        self.add_transition(start, second.start, EPSILON)
        self.add_transition(first.end, end, EPSILON)
        self.add_transition(second.end, end, EPSILON)
        return NFAFragment(start, end)

    def closure(self, node):  # a*
        start = self.new_state()
        end = self.new_state()
        inner = self.build_node(node.child)

        self.add_transition(start, inner.start, EPSILON)  # 进入
        self.add_transition(start, end, EPSILON)  # 0次
        self.add_transition(inner.end, inner.start, EPSILON)  # 重复
        self.add_transition(inner.end, end, EPSILON)  # 退出
        return NFAFragment(start, end)


def build(ast):
    return NFABuilder().build(ast)
