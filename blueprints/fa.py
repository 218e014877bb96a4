"""
FA (Finite Automaton) 有限自动机相关接口蓝图
包含正则表达式转 语法树、NFA、DFA（子集法 / followpos 直接构造）以及输入串分析
"""
from flask import Blueprint, request, jsonify, current_app

from extensions import limiter
from services.automaton_service import AutomatonService

fa_bp = Blueprint('fa', __name__, url_prefix='/api')


def _regex_limit():
    return current_app.config['REGEX_RATE_LIMIT']


def _test_limit():
    return current_app.config['TEST_RATE_LIMIT']


def _get_json():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data


def _get_regex():
    return _get_json().get('inpRegex')


def _limits():
    return {
        'max_length': current_app.config['MAX_REGEX_LENGTH'],
        'max_states': current_app.config['MAX_DFA_STATES'],
    }


def _missing(field):
    return jsonify({
        "code": 400,
        "msg": f"缺少必填字段: {field}"
    }), 400


def _respond(result):
    if result['success']:
        return jsonify({
            "code": 0,
            "data": result['data']
        }), 200
    return jsonify({
        "code": 1,
        "message": result['msg'],
        "position": result.get('position')
    }), 200


@fa_bp.route('/test', methods=['GET'])
@limiter.limit(_test_limit)
def test():
    return jsonify({
        "code": 0,
        "msg": "test success!"
    }), 200


@fa_bp.route('/Regex_to_AST', methods=['POST'])
@limiter.limit(_regex_limit)
def Regex_to_AST():
    """正则表达式转语法树"""
    regex = _get_regex()
    if regex is None:
        return _missing('inpRegex')
    return _respond(AutomatonService.parse_regex(regex, current_app.config['MAX_REGEX_LENGTH']))


@fa_bp.route('/Regex_to_DFA', methods=['POST'])
@limiter.limit(_regex_limit)
def Regex_to_DFA():
    """正则表达式转 NFA（Thompson构造法），再用子集法转 DFA"""
    regex = _get_regex()
    if regex is None:
        return _missing('inpRegex')
    return _respond(AutomatonService.regex_to_dfa(regex, **_limits()))


@fa_bp.route('/Regex_to_DirectDFA', methods=['POST'])
@limiter.limit(_regex_limit)
def Regex_to_DirectDFA():
    """正则表达式由 followpos 直接构造 DFA"""
    regex = _get_regex()
    if regex is None:
        return _missing('inpRegex')
    return _respond(AutomatonService.regex_to_direct_dfa(regex, **_limits()))


@fa_bp.route('/Regex_to_DFAM', methods=['POST'])
@limiter.limit(_regex_limit)
def Regex_to_DFAM():
    """两种方法的全部结果，equivalent 表示两个DFA识别的语言是否相同"""
    regex = _get_regex()
    if regex is None:
        return _missing('inpRegex')
    return _respond(AutomatonService.regex_to_all(regex, **_limits()))


@fa_bp.route('/Regex_AnalyseInp', methods=['POST'])
@limiter.limit(_regex_limit)
def Regex_AnalyseInp():
    """输入串分析"""
    regex = _get_regex()
    if regex is None:
        return _missing('inpRegex')
    inp_str = _get_json().get('inpStr')
    if inp_str is None:
        return _missing('inpStr')
    return _respond(AutomatonService.analyse_input(regex, inp_str, **_limits()))


@fa_bp.route('/Regex_current', methods=['GET'])
@limiter.limit(_regex_limit)
def Regex_current():
    """当前结果（最近一次提交的正则表达式）"""
    result = AutomatonService.current()
    if result is None:
        return jsonify({
            "code": 1,
            "message": "还没有提交过正则表达式"
        }), 200
    return jsonify({
        "code": 0,
        "data": result.to_dict()
    }), 200
