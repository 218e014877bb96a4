"""
正则表达式的抽象语法树
    原始语法树：Char / Concat / Alternation / KleeneStar，由解析器自底向上构造，构造后不再修改
    标注语法树：AnnotatedNode，由 followpos 标注过程单独生成，带 position / nullable / firstpos / lastpos
"""

CHAR = 'CHAR'
CONCAT = 'CONCAT'
ALTERNATION = 'ALTERNATION'
KLEENE_STAR = 'KLEENE_STAR'

END_MARKER = '#'  # 增广语法树的结束标记


class Node:
    kind = None

    def children(self):
        return ()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash((self.kind, self._key()))

    def _key(self):
        return tuple(self.children())


class Char(Node):
    kind = CHAR

    def __init__(self, value):
        self.value = value

    def _key(self):
        return (self.value,)

    def to_dict(self):
        return {'type': self.kind, 'value': self.value}

    def __repr__(self):
        return f"Char({self.value!r})"


class Concat(Node):
    kind = CONCAT

    def __init__(self, left, right):
        self.left = left
        self.right = right

    def children(self):
        return self.left, self.right

    def to_dict(self):
        return {'type': self.kind, 'left': self.left.to_dict(), 'right': self.right.to_dict()}

    def __repr__(self):
        return f"Concat({self.left!r}, {self.right!r})"


class Alternation(Node):
    kind = ALTERNATION

    def __init__(self, left, right):
        self.left = left
        self.right = right

    def children(self):
        return self.left, self.right

    def to_dict(self):
        return {'type': self.kind, 'left': self.left.to_dict(), 'right': self.right.to_dict()}

    def __repr__(self):
        return f"Alternation({self.left!r}, {self.right!r})"


class KleeneStar(Node):
    kind = KLEENE_STAR

    def __init__(self, child):
        self.child = child

    def children(self):
        return (self.child,)

    def to_dict(self):
        return {'type': self.kind, 'child': self.child.to_dict()}

    def __repr__(self):
        return f"KleeneStar({self.child!r})"


class AnnotatedNode:
    """
        标注后的语法树节点
    :param kind: 节点类型 CHAR / CONCAT / ALTERNATION / KLEENE_STAR
    :param children: 子节点（AnnotatedNode），CHAR 为空，KLEENE_STAR 为1个，其余为2个
    :param value: CHAR 的字符，其余为 None
    :param position: CHAR 的位置编号（从1开始），其余为 None
    """

    def __init__(self, kind, children, nullable, firstpos, lastpos, value=None, position=None):
        self.kind = kind
        self.children = tuple(children)
        self.value = value
        self.position = position
        self.nullable = nullable
        self.firstpos = frozenset(firstpos)
        self.lastpos = frozenset(lastpos)

    @property
    def left(self):
        return self.children[0] if self.kind in (CONCAT, ALTERNATION) else None

    @property
    def right(self):
        return self.children[1] if self.kind in (CONCAT, ALTERNATION) else None

    @property
    def child(self):
        return self.children[0] if self.kind == KLEENE_STAR else None

    def walk(self):
        """前序遍历"""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self):
        res = {
            'type': self.kind,
            'nullable': self.nullable,
            'firstpos': sorted(self.firstpos),
            'lastpos': sorted(self.lastpos),
        }
        if self.kind == CHAR:
            res['value'] = self.value
            res['position'] = self.position
        elif self.kind == KLEENE_STAR:
            res['child'] = self.child.to_dict()
        else:
            res['left'] = self.left.to_dict()
            res['right'] = self.right.to_dict()
        return res
