"""
DFA 数据结构：两种构造方法（子集法 / followpos 直接构造）共用
"""
from collections import deque


class DFAState:
    def __init__(self, id_, isAccepting, positions=None, nfa_states=None):
        self.id = id_  # 编号，0 为初态
        self.isAccepting = isAccepting
        self.transitions = {}  # { 'a': 1 }
        self.positions = positions  # followpos 构造：对应的位置集合
        self.nfa_states = nfa_states  # 子集法：对应的 NFA 状态集合

    def to_dict(self):
        res = {
            'id': self.id,
            'isAccepting': self.isAccepting,
            'transitions': dict(self.transitions)
        }
        if self.positions is not None:
            res['positions'] = list(self.positions)
        if self.nfa_states is not None:
            res['nfa_states'] = list(self.nfa_states)
        return res


class DFA:
    def __init__(self, states, alphabet, start_state=0):
        self.states = states
        self.alphabet = alphabet
        self.start_state = start_state if states else None

    @classmethod
    def empty(cls, alphabet=()):
        return cls([], list(alphabet), None)

    def is_empty(self):
        return self.start_state is None

    def accepting_states(self):
        return [state.id for state in self.states if state.isAccepting]

    def next_state(self, state_id, symbol):
        return self.states[state_id].transitions.get(symbol)

    def accepts(self, text):
        if self.is_empty():
            return False
        cur = self.start_state
        for ch in text:
            cur = self.next_state(cur, ch)
            if cur is None:
                return False
        return self.states[cur].isAccepting

    def simulate(self, input_str):
        """
            逐步分析输入串
        :param input_str: 输入串
        :return: info，与语法分析的输入串分析结果格式一致
        """
        info_step, info_state, info_str, info_msg = [], [], [], []
        info_res = ""

        if self.is_empty():
            return {
                "info_step": info_step,
                "info_state": info_state,
                "info_str": info_str,
                "info_msg": info_msg,
                "info_res": "error：自动机为空",
                "accepted": False
            }

        cur = self.start_state
        step = 0
        for sp, ch in enumerate(input_str):
            step += 1
            info_step.append(step)
            info_state.append(cur)
            info_str.append(input_str[sp:])
            nxt = self.next_state(cur, ch)
            if nxt is None:
                info_msg.append("error")
                info_res = f"error：分析失败，状态{cur}没有经过'{ch}'的转换"
                break
            info_msg.append(f"move({cur},{ch})={nxt}")
            cur = nxt
        else:
            step += 1
            info_step.append(step)
            info_state.append(cur)
            info_str.append("")
            if self.states[cur].isAccepting:
                info_msg.append("acc: 分析成功！")
                info_res = "Success!"
            else:
                info_msg.append("error")
                info_res = f"error：分析失败，状态{cur}不是终态"

        return {
            "info_step": info_step,
            "info_state": info_state,
            "info_str": info_str,
            "info_msg": info_msg,
            "info_res": info_res,
            "accepted": info_res == "Success!"
        }

    def is_isomorphic(self, other):
        """从初态同步做广度优先遍历，判断两个DFA的可达部分是否只差状态编号"""
        if self.is_empty() or other.is_empty():
            return self.is_empty() and other.is_empty()

        mapping = {self.start_state: other.start_state}
        reverse = {other.start_state: self.start_state}
        queue = deque([self.start_state])
        while queue:
            mine = queue.popleft()
            theirs = mapping[mine]
            a = self.states[mine]
            b = other.states[theirs]
            if a.isAccepting != b.isAccepting or a.transitions.keys() != b.transitions.keys():
                return False
            for symbol, nxt in a.transitions.items():
                other_nxt = b.transitions[symbol]
                if nxt in mapping or other_nxt in reverse:
                    if mapping.get(nxt) != other_nxt or reverse.get(other_nxt) != nxt:
                        return False
                    continue
                mapping[nxt] = other_nxt
                reverse[other_nxt] = nxt
                queue.append(nxt)
        return True

    def is_equivalent(self, other):
        """
            判断两个DFA识别的语言是否相同
            在两个DFA的乘积上做广度优先遍历，None 表示隐含的拒绝状态
        """
        cins = sorted(set(self.alphabet) | set(other.alphabet))

        def step(dfa, state_id, ch):
            return None if state_id is None else dfa.next_state(state_id, ch)

        def accepting(dfa, state_id):
            return state_id is not None and dfa.states[state_id].isAccepting

        start = (self.start_state, other.start_state)
        seen = {start}
        queue = deque([start])
        while queue:
            mine, theirs = queue.popleft()
            if accepting(self, mine) != accepting(other, theirs):
                return False
            for ch in cins:
                pair = (step(self, mine, ch), step(other, theirs, ch))
                if pair == (None, None) or pair in seen:
                    continue
                seen.add(pair)
                queue.append(pair)
        return True

    def to_dict(self):
        return {
            'states': [state.to_dict() for state in self.states],
            'alphabet': list(self.alphabet),
            'startState': self.start_state,
            'acceptingStates': self.accepting_states()
        }
