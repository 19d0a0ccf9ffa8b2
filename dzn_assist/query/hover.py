"""
悬停提示：把解析到的声明渲染为简短的签名字符串。

可识别的声明种类：function / event / port / on 参数 / variable / extern / instance，
每种都有与其声明语法一致的固定模板。其它种类不产生提示。
"""

from typing import Optional

from dzn_assist.common.exceptions import StructuralInvariantError
from dzn_assist.service import ERROR_TYPE, LanguageService
from dzn_assist.syntax import NodeKind, Point, SyntaxNode, SyntaxTree, name_to_string

from .position import find_leaf_at_position


def get_hover(tree: SyntaxTree, position: Point, service: LanguageService) -> Optional[str]:
    """
    只对标识符给出提示，且其符号的声明不能是关键字。

    :return: 签名字符串；无法解析时返回 None
    """
    leaf = find_leaf_at_position(service, tree, position)
    if leaf is None or leaf.kind != NodeKind.IDENTIFIER:
        return None

    symbol = service.symbol_of(leaf)
    if symbol is None or symbol.declaration.kind == NodeKind.KEYWORD:
        return None
    return symbol_tooltip(symbol.declaration, service)


def symbol_tooltip(declaration: SyntaxNode, service: LanguageService) -> Optional[str]:
    match declaration.kind:
        case NodeKind.FUNCTION:
            return function_tooltip(declaration)
        case NodeKind.EVENT:
            return event_tooltip(declaration)
        case NodeKind.PORT:
            return port_tooltip(declaration)
        case NodeKind.ON_PARAMETER:
            return on_parameter_tooltip(declaration, service)
        case NodeKind.VARIABLE | NodeKind.INSTANCE:
            return f"{_type_name(declaration)} {_name(declaration)};"
        case NodeKind.EXTERN:
            value = declaration.child("value")
            return f"extern {_name(declaration)} ${value.text if value is not None else ''}$;"
        case _:
            return None


def dzn_highlighted(text: str) -> str:
    # markdown 宿主使用的代码块
    return f"```dzn\n{text}\n```"


def _name(node: SyntaxNode) -> str:
    return name_to_string(node.child("name"))


def _type_name(node: SyntaxNode) -> str:
    return name_to_string(node.child("type"))


def typed_parameter(parameter: SyntaxNode) -> str:
    direction = parameter.child("direction")
    prefix = f"{direction.text} " if direction is not None else ""
    return f"{prefix}{_type_name(parameter)} {_name(parameter)}"


def function_tooltip(declaration: SyntaxNode) -> str:
    params = ", ".join(typed_parameter(p) for p in declaration.children_of("parameters"))
    return f"{name_to_string(declaration.child('return_type'))} {_name(declaration)}({params})"


def event_tooltip(declaration: SyntaxNode) -> str:
    parent = declaration.parent_node
    interface_name = ""
    if parent is not None and parent.kind == NodeKind.INTERFACE:
        interface_name = f"{_name(parent)}."
    params = ", ".join(typed_parameter(p) for p in declaration.children_of("parameters"))
    return f"{_type_name(declaration)} {interface_name}{_name(declaration)}({params});"


def port_tooltip(declaration: SyntaxNode) -> str:
    direction = declaration.child("direction")
    return f"{direction.text if direction is not None else ''} {_type_name(declaration)} {_name(declaration)};"


def on_parameter_tooltip(declaration: SyntaxNode, service: LanguageService) -> str:
    """
    on 参数的提示渲染整个 on 触发器。

    若被触发事件的类型可以解析，则按位置把事件声明的参数（方向 + 类型 + 名字）
    与触发器中写出的 "name <- expr" 绑定合并；否则退化为未带类型的原样渲染。
    """
    trigger = SyntaxTree.find_first_parent(declaration, lambda p: p.kind == NodeKind.ON_TRIGGER)
    if trigger is None:
        raise StructuralInvariantError("Can't find expected on trigger parent for on parameter")

    trigger_name = trigger.child("name")
    written = trigger.children_of("parameters")
    event_type = service.type_of(trigger_name) if trigger_name is not None else ERROR_TYPE

    if event_type is ERROR_TYPE or event_type.declaration is None \
            or event_type.declaration.kind != NodeKind.EVENT:
        params = []
        for p in written:
            assignment = p.child("assignment")
            if assignment is not None:
                params.append(f"{_name(p)} <- {name_to_string(assignment)}")
            else:
                params.append(_name(p))
    else:
        params = []
        for i, p in enumerate(event_type.declaration.children_of("parameters")):
            assignment = written[i].child("assignment") if i < len(written) else None
            if assignment is not None:
                params.append(f"{typed_parameter(p)} <- {name_to_string(assignment)}")
            else:
                params.append(typed_parameter(p))

    return f"on {name_to_string(trigger_name)}({', '.join(params)}):"
