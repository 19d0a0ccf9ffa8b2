"""
签名帮助。

对光标所在的调用类表达式（函数 / 事件调用，或 on 触发器）：
1. 解析被调用者的类型，必须是 function 或 event 声明
2. 生成签名标签 "Name(direction type name, ...)"，并记录每个参数在标签中的字符区间
3. 统计结束位置严格早于光标的实参个数，作为当前激活参数的下标
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel

from dzn_assist.service import LanguageService
from dzn_assist.syntax import NodeKind, Point, SyntaxNode, SyntaxTree, name_to_string

from .hover import typed_parameter
from .position import find_leaf_at_position

_CALL_LIKE_KINDS = (NodeKind.CALL_EXPRESSION, NodeKind.ON_TRIGGER)


class SignatureHelp(BaseModel):
    label: str
    parameter_spans: List[Tuple[int, int]]
    active_parameter_index: int


def _callee_and_arguments(node: SyntaxNode) -> Tuple[Optional[SyntaxNode], List[SyntaxNode]]:
    if node.kind == NodeKind.CALL_EXPRESSION:
        return node.child("expression"), node.children_of("arguments")
    return node.child("name"), node.children_of("parameters")


def get_signature_help(
    tree: SyntaxTree, position: Point, service: LanguageService
) -> Optional[SignatureHelp]:
    leaf = find_leaf_at_position(service, tree, position)
    if leaf is None:
        return None

    call = leaf if leaf.kind in _CALL_LIKE_KINDS else \
        SyntaxTree.find_first_parent(leaf, lambda p: p.kind in _CALL_LIKE_KINDS)
    if call is None:
        return None
    return signature_help_for_call(call, position, service)


def signature_help_for_call(
    call: SyntaxNode, position: Point, service: LanguageService
) -> Optional[SignatureHelp]:
    """
    :param call: call_expression 或 on_trigger 节点
    :param position: 光标位置
    :return: 签名帮助；被调用者不是 function / event 时返回 None
    """
    callee, arguments = _callee_and_arguments(call)
    if callee is None:
        return None

    callee_type = service.type_of(callee)
    declaration = callee_type.declaration
    if declaration is None or declaration.kind not in (NodeKind.FUNCTION, NodeKind.EVENT):
        return None

    label = f"{name_to_string(callee)}("
    spans: List[Tuple[int, int]] = []
    for i, parameter in enumerate(declaration.children_of("parameters")):
        if i > 0:
            label += ", "
        text = typed_parameter(parameter)
        spans.append((len(label), len(label) + len(text)))
        label += text
    label += ")"

    active = sum(1 for argument in arguments if argument.range.ends_before(position))
    return SignatureHelp(label=label, parameter_spans=spans, active_parameter_index=active)
