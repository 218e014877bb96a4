"""
生成 AST / NFA / DFA 的 dot 源码，交给前端绘制
"""
from collections import defaultdict

from graphviz import Digraph

from .syntax_tree import CHAR, CONCAT, ALTERNATION, KLEENE_STAR

NODE_LABELS = {CONCAT: '•', ALTERNATION: '|', KLEENE_STAR: '*'}


def _fmt(positions):
    return '{' + ','.join(str(p) for p in sorted(positions)) + '}'


def ast_to_dot(root):
    """
    :param root: AnnotatedNode（标注语法树）或原始语法树
    :return: dot 源码
    """
    dot = Digraph(comment='AST', graph_attr={'ordering': 'out'})
    counter = 0

    def draw(node):
        nonlocal counter
        name = str(counter)
        counter += 1
        annotated = hasattr(node, 'nullable')
        if node.kind == CHAR:
            label = node.value
            if annotated:
                label += f"\\n{node.position}"
        else:
            label = NODE_LABELS[node.kind]
        if annotated:
            label += f"\\nnullable={str(node.nullable).lower()}" \
                     f"\\nfirstpos={_fmt(node.firstpos)}\\nlastpos={_fmt(node.lastpos)}"
        shape = 'box' if node.kind == CHAR else 'ellipse'
        dot.node(name=name, label=label, shape=shape)
        children = node.children if annotated else node.children()
        for child in children:
            dot.edge(tail_name=name, head_name=draw(child))
        return name

    draw(root)
    return dot.source


def nfa_to_dot(nfa):
    dot = Digraph(comment='NFA', graph_attr={'rankdir': 'LR'})
    # 画节点
    for state in nfa.states:
        node_color = 'red' if state.isAccepting or state.id == nfa.start else 'black'
        node_shape = 'doublecircle' if state.isAccepting else 'circle'
        dot.node(name=str(state.id), label=str(state.id), color=node_color, shape=node_shape)
    # 画边
    for state in nfa.states:
        for to_symbol, to_ids in state.next_state.items():
            for to_id in sorted(to_ids):
                dot.edge(tail_name=str(state.id), head_name=str(to_id), label=to_symbol)
    # 增加开始标志
    dot.node(name="start", label="", color="white")
    dot.edge(tail_name="start", head_name=str(nfa.start), label="start")
    return dot.source


def dfa_to_dot(dfa, comment='DFA'):
    dot = Digraph(comment=comment, graph_attr={'rankdir': 'LR'})
    if dfa.is_empty():
        return dot.source

    for state in dfa.states:
        state_id = str(state.id)
        node_color = 'red' if state.isAccepting or state.id == dfa.start_state else 'black'
        node_shape = 'doublecircle' if state.isAccepting else 'circle'
        label = state_id if state.positions is None else f"{state_id}\\n{_fmt(state.positions)}"
        dot.node(name=state_id, label=label, color=node_color, shape=node_shape)

    # 同一对状态之间的多条边合并为一条
    edges = defaultdict(list)
    for state in dfa.states:
        for to_symbol, next_id in state.transitions.items():
            edges[(state.id, next_id)].append(to_symbol)
    for (come, to), symbols in edges.items():
        dot.edge(tail_name=str(come), head_name=str(to), label=','.join(sorted(symbols)))

    dot.node(name="start", label="", color='white')
    dot.edge(tail_name="start", head_name=str(dfa.start_state), label="start")
    return dot.source
