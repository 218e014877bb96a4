"""
自动机构造相关异常
"""


class RegexSyntaxError(ValueError):
    """正则表达式语法错误，position 为出错字符在原串中的下标（从0开始）"""

    def __init__(self, message, position=None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self):
        if self.position is None:
            return self.message
        return f"{self.message} (位置 {self.position})"

    def to_dict(self):
        return {
            'message': self.message,
            'position': self.position
        }


class AutomatonInternalError(RuntimeError):
    """语法树不符合约定（如未知的节点类型），属于程序错误而非输入错误"""


class TooManyStatesError(RuntimeError):
    """DFA状态数超过上限，构造被中止"""

    def __init__(self, limit):
        super().__init__(f"DFA状态数超过上限 {limit}")
        self.limit = limit
