"""
以编程方式构造 SyntaxTree 的辅助工具。

外部解析器（或测试）逐个添加节点，builder 负责：
- 分配节点 ID
- 维护父子链接（parent / children）
- 把子节点登记到父节点的具名槽位中
"""

from typing import Dict, List, Optional, Tuple

from .node_types import LIST_SLOTS, NodeKind
from .tree import SyntaxNode, SyntaxTree
from .utils import TextRange


class TreeBuilder:
    """
    SyntaxTree 构造器。

    用法示例::

        b = TreeBuilder("main.dzn")
        root = b.add(NodeKind.FILE, (0, 0), (3, 0))
        iface = b.add(NodeKind.INTERFACE, (0, 0), (2, 1), parent=root, slot="declarations")
        b.add(NodeKind.IDENTIFIER, (0, 10), (0, 13), parent=iface, slot="name", text="IFoo")
        tree = b.build()
    """

    def __init__(self, file_path: str = "<memory>"):
        self.file_path = file_path
        self._nodes: Dict[int, dict] = {}
        self._node_counter = 0

    def add(
        self,
        kind: NodeKind,
        start: Tuple[int, int],
        end: Tuple[int, int],
        parent: Optional[int] = None,
        slot: Optional[str] = None,
        text: Optional[str] = None,
    ) -> int:
        """
        添加一个节点并返回其 ID。

        :param kind: 节点种类
        :param start: 起始位置 (line, column)
        :param end: 结束位置 (line, column)
        :param parent: 父节点 ID，根节点传 None
        :param slot: 在父节点中的槽位名；列表型槽位（见 LIST_SLOTS）会追加
        :param text: 节点文本（标识符、关键字、错误节点原文等）
        """
        idx = self._node_counter
        self._node_counter += 1
        self._nodes[idx] = {
            "id": idx,
            "kind": kind,
            "range": TextRange(start_point=start, end_point=end),
            "parent": parent,
            "children": [],
            "slots": {},
            "text": text,
        }

        if parent is not None:
            parent_data = self._nodes[parent]
            parent_data["children"].append(idx)
            if slot is not None:
                if slot in LIST_SLOTS:
                    parent_data["slots"].setdefault(slot, []).append(idx)
                else:
                    parent_data["slots"][slot] = idx

        return idx

    def build(self) -> SyntaxTree:
        nodes: List[SyntaxNode] = []
        for data in self._nodes.values():
            # 子节点按源码位置排序，位置解析依赖这一顺序
            data["children"].sort(key=lambda i: self._nodes[i]["range"].start_point)
            nodes.append(SyntaxNode(**data))
        return SyntaxTree(file_path=self.file_path, root_id=0, nodes=nodes)
