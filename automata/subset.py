"""
子集法：NFA -> DFA
"""
import logging
from collections import deque

from bidict import bidict

from .dfa import DFA, DFAState
from .errors import TooManyStatesError
from .thompson import EPSILON

logger = logging.getLogger(__name__)


def get_alphabet(nfa):
    """从初态出发遍历NFA，收集所有非ε的转换字符，升序"""
    cins = set()
    visited = {nfa.start}
    stack = [nfa.start]
    while stack:
        state = nfa.state(stack.pop())
        for symbol, to_ids in state.next_state.items():
            if symbol != EPSILON:
                cins.add(symbol)
            for to_id in to_ids:
                if to_id not in visited:
                    visited.add(to_id)
                    stack.append(to_id)
    return sorted(cins)


def epsilon_closure(nfa, nfa_state_ids):
    """
        ε_closure(States)，即 States 经过若干个ε可到达的状态集合
    :param nfa: NFA
    :param nfa_state_ids: 状态id集合
    :return: 状态id集合(set)
    """
    res = set(nfa_state_ids)
    stack = list(res)
    while stack:
        for next_id in nfa.state(stack.pop()).targets(EPSILON):
            if next_id not in res:
                res.add(next_id)
                stack.append(next_id)
    return res


def move(nfa, nfa_state_ids, ch):
    """
        J_a，即 States 仅经过1个 a 可到达的状态集合
    """
    res = set()
    for id_ in nfa_state_ids:
        res.update(nfa.state(id_).targets(ch))
    return res


def state_key(ids):
    return tuple(sorted(ids))


def convert(nfa, max_states=None):
    """
        利用子集法将NFA确定化
        DFA状态按广度优先的发现顺序编号，0 为 ε_closure({start})
        转换结果为空集时不记录转换（隐含的拒绝状态不生成）
    :param nfa: Thompson构造得到的NFA
    :param max_states: DFA状态数上限，None 表示不限制，超过时抛出 TooManyStatesError
    :return: DFA，每个状态的 nfa_states 记录对应的NFA状态集合
    """
    cins = get_alphabet(nfa)
    dfa_state_ids = bidict()  # { (1, 2, 3): 0 }
    states = []

    def add_state(key):
        if max_states is not None and len(states) >= max_states:
            raise TooManyStatesError(max_states)
        dfa_state_ids[key] = len(states)
        isAccepting = any(nfa.state(id_).isAccepting for id_ in key)
        states.append(DFAState(len(states), isAccepting, nfa_states=key))
        return dfa_state_ids[key]

    start_key = state_key(epsilon_closure(nfa, {nfa.start}))
    add_state(start_key)
    queue = deque([0])

    while queue:
        cur = states[queue.popleft()]
        key = dfa_state_ids.inverse[cur.id]
        for ch in cins:
            moved = move(nfa, key, ch)
            if not moved:
                continue
            next_key = state_key(epsilon_closure(nfa, moved))
            if next_key in dfa_state_ids:
                next_id = dfa_state_ids[next_key]
            else:
                next_id = add_state(next_key)
                queue.append(next_id)
            cur.transitions[ch] = next_id

    logger.debug("subset construction: %d NFA states -> %d DFA states", len(nfa.states), len(states))
    return DFA(states, cins, 0)


def conversion_table(dfa):
    """
        子集法转换表：每行为一个 I 及其各个 Ia
    :param dfa: convert 得到的DFA
    :return: [{'S': 0, 'I': [0, 1, 2], 'Ia': {'S': 1, 'I': [3, 4]}, 'Ib': None}, ...]
    """
    table = []
    for state in dfa.states:
        row = {'S': state.id, 'I': list(state.nfa_states)}
        for ch in dfa.alphabet:
            next_id = state.transitions.get(ch)
            if next_id is None:
                row['I' + ch] = None
            else:
                row['I' + ch] = {'S': next_id, 'I': list(dfa.states[next_id].nfa_states)}
        table.append(row)
    return table
