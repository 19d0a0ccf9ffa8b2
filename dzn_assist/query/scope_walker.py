"""
作用域链变量遍历。

从给定作用域块开始，依次访问它以及每一层外层作用域块（由近及远），
向语言服务查询各层直接声明的名字并追加到结果中。

注意：结果不按名字去重。内外层同名时两者都会出现，且内层在前；
需要“内层优先”语义的调用方应只取每个名字的第一次出现。
"""

from typing import List, Tuple

from dzn_assist.service import LanguageService
from dzn_assist.syntax import SyntaxNode

from .position import nearest_scope


def find_all_variables_known_in_scope(
    scope: SyntaxNode, service: LanguageService
) -> List[Tuple[str, SyntaxNode]]:
    variables: List[Tuple[str, SyntaxNode]] = []
    current = scope
    while current is not None:
        variables.extend(service.declared_variables_at(current).items())
        current = nearest_scope(current)
    return variables
