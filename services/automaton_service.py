"""
自动机服务层
串联 解析 -> Thompson -> 子集法 与 解析 -> followpos 两条流程，并保存当前结果
"""
import logging
from typing import Dict, Any, Optional

from automata import regex_parser, thompson, subset, followpos
from automata.dot import ast_to_dot, nfa_to_dot, dfa_to_dot
from automata.errors import RegexSyntaxError, TooManyStatesError

logger = logging.getLogger(__name__)


class AutomatonResult:
    """一个正则表达式的全部构造结果"""

    def __init__(self, regex, max_states=None):
        self.regex = regex
        self.ast = regex_parser.parse(regex)
        # 流程一：Thompson构造 + 子集法
        self.nfa = thompson.build(self.ast)
        self.dfa = subset.convert(self.nfa, max_states)
        # 流程二：followpos 直接构造
        self.annotation = followpos.annotate(self.ast)
        self.direct_dfa, self.trace = followpos.build_dfa(self.annotation, max_states)

    @property
    def equivalent(self):
        return self.dfa.is_equivalent(self.direct_dfa)

    def subset_data(self):
        return {
            'nfa': self.nfa.to_dict(),  # Thompson构造得到的NFA
            'dfa': self.dfa.to_dict(),  # 子集法得到的DFA
            'table': subset.conversion_table(self.dfa),  # 子集法转换表
            'NFA_dot_str': nfa_to_dot(self.nfa),
            'DFA_dot_str': dfa_to_dot(self.dfa),
        }

    def direct_data(self):
        return {
            'annotated_ast': self.annotation.root.to_dict(),  # 标注后的增广语法树
            'position_table': self.annotation.position_table(),  # 位置 -> 字符, followpos
            'dfa': self.direct_dfa.to_dict(),
            'trace': [step.to_dict() for step in self.trace],  # 构造过程
            'AST_dot_str': ast_to_dot(self.annotation.root),
            'DFA_dot_str': dfa_to_dot(self.direct_dfa, comment='DirectDFA'),
        }

    def to_dict(self):
        return {
            'regex': self.regex,
            'ast': self.ast.to_dict(),
            'alphabet': regex_parser.alphabet_of(self.ast),
            'subset': self.subset_data(),
            'direct': self.direct_data(),
            'equivalent': self.equivalent,
        }


class AutomatonService:
    """自动机服务类"""

    # 当前结果，提交新的正则表达式后被替换
    _current: Optional[AutomatonResult] = None

    @staticmethod
    def _check_regex(regex, max_length: Optional[int]) -> Optional[Dict[str, Any]]:
        if not isinstance(regex, str):
            return {"success": False, "msg": "正则表达式必须是字符串", "position": None}
        if max_length is not None and len(regex) > max_length:
            return {"success": False, "msg": f"正则表达式长度不能超过{max_length}", "position": max_length}
        return None

    @classmethod
    def analyse(cls, regex: str, max_length: Optional[int] = None,
                max_states: Optional[int] = None) -> Dict[str, Any]:
        """
        构造正则表达式的全部结果，并设为当前结果

        Args:
            regex: 正则表达式
            max_length: 允许的最大长度，None 表示不限制
            max_states: 每个DFA允许的最大状态数，None 表示不限制

        Returns:
            操作结果，成功时 result 为 AutomatonResult
        """
        error = cls._check_regex(regex, max_length)
        if error:
            return error

        current = cls._current
        if current is not None and current.regex == regex:
            return {"success": True, "msg": "ok", "result": current}

        try:
            result = AutomatonResult(regex, max_states)
        except RegexSyntaxError as e:
            logger.info("rejected regex %r: %s", regex, e)
            return {"success": False, "msg": e.message, "position": e.position}
        except TooManyStatesError as e:
            logger.warning("regex %r aborted: %s", regex, e)
            return {"success": False, "msg": str(e), "position": None}

        cls._current = result
        logger.debug("regex %r: %d NFA states, %d DFA states, %d direct DFA states",
                     regex, len(result.nfa.states), len(result.dfa.states), len(result.direct_dfa.states))
        return {"success": True, "msg": "ok", "result": result}

    @staticmethod
    def parse_regex(regex: str, max_length: Optional[int] = None) -> Dict[str, Any]:
        """只做语法分析，不改变当前结果"""
        error = AutomatonService._check_regex(regex, max_length)
        if error:
            return error

        parsed = regex_parser.try_parse(regex)
        if not parsed.ok:
            return {"success": False, "msg": parsed.error.message, "position": parsed.error.position}
        return {
            "success": True,
            "msg": "ok",
            "data": {
                'regex': regex,
                'ast': parsed.ast.to_dict(),
                'alphabet': regex_parser.alphabet_of(parsed.ast),
                'AST_dot_str': ast_to_dot(parsed.ast),
            }
        }

    @classmethod
    def regex_to_dfa(cls, regex: str, max_length: Optional[int] = None,
                     max_states: Optional[int] = None) -> Dict[str, Any]:
        res = cls.analyse(regex, max_length, max_states)
        if not res['success']:
            return res
        return {"success": True, "msg": "ok", "data": res['result'].subset_data()}

    @classmethod
    def regex_to_direct_dfa(cls, regex: str, max_length: Optional[int] = None,
                            max_states: Optional[int] = None) -> Dict[str, Any]:
        res = cls.analyse(regex, max_length, max_states)
        if not res['success']:
            return res
        return {"success": True, "msg": "ok", "data": res['result'].direct_data()}

    @classmethod
    def regex_to_all(cls, regex: str, max_length: Optional[int] = None,
                     max_states: Optional[int] = None) -> Dict[str, Any]:
        res = cls.analyse(regex, max_length, max_states)
        if not res['success']:
            return res
        return {"success": True, "msg": "ok", "data": res['result'].to_dict()}

    @classmethod
    def analyse_input(cls, regex: str, inp_str: str, max_length: Optional[int] = None,
                      max_states: Optional[int] = None) -> Dict[str, Any]:
        """
        用两种方法得到的DFA分别分析输入串

        Args:
            regex: 正则表达式
            inp_str: 输入串
            max_length: 同 analyse
            max_states: 同 analyse

        Returns:
            操作结果，data 中 subset / direct 为逐步分析过程
        """
        if not isinstance(inp_str, str):
            return {"success": False, "msg": "输入串必须是字符串", "position": None}
        res = cls.analyse(regex, max_length, max_states)
        if not res['success']:
            return res
        result = res['result']
        subset_info = result.dfa.simulate(inp_str)
        direct_info = result.direct_dfa.simulate(inp_str)
        return {
            "success": True,
            "msg": "ok",
            "data": {
                'regex': regex,
                'inpStr': inp_str,
                'subset': subset_info,
                'direct': direct_info,
                'accepted': subset_info['accepted'],
                'consistent': subset_info['accepted'] == direct_info['accepted'],
            }
        }

    @classmethod
    def current(cls) -> Optional[AutomatonResult]:
        return cls._current

    @classmethod
    def reset(cls):
        cls._current = None
