"""
本模块定义了语法树的内存表示：以 arena（节点数组）方式存储的 SyntaxTree。

设计要点：
- 所有节点保存在 SyntaxTree.nodes 中，通过整数 ID 互相引用
- parent 只是一个普通的 ID（非拥有关系），children 为有序 ID 列表，
  因此父子双向链接不会在所有权图中形成环
- 具名子节点通过 slots 访问，例如 port 节点的 "type" / "name" 槽位
- 本核心从不修改语法树，语法树由外部解析器产出（或从 JSON 反序列化）
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, PrivateAttr

from .node_types import NodeKind
from .utils import Point, TextRange


class SyntaxNode(BaseModel):
    """
    语法树中的一个节点。

    属性说明：
    - id：节点在 arena 中的唯一标识
    - kind：节点种类（NodeKind）
    - range：节点在源码中的范围
    - parent：父节点 ID（根节点为 None）
    - children：按源码顺序排列的子节点 ID
    - slots：具名槽位 -> 子节点 ID（或 ID 列表）
    - text：标识符、关键字、extern 值、import 文件名以及错误节点的原始文本
    """

    id: int
    kind: NodeKind
    range: TextRange
    parent: Optional[int] = None
    children: List[int] = []
    slots: Dict[str, Union[int, List[int]]] = {}
    text: Optional[str] = None

    # 所属语法树，由 SyntaxTree 在构造完成后回填
    _tree: Any = PrivateAttr(default=None)

    @property
    def tree(self) -> Optional["SyntaxTree"]:
        return self._tree

    @property
    def parent_node(self) -> Optional["SyntaxNode"]:
        if self.parent is None or self._tree is None:
            return None
        return self._tree.get_node(self.parent)

    @property
    def child_nodes(self) -> List["SyntaxNode"]:
        return [self._tree.get_node(i) for i in self.children]

    def child(self, slot: str) -> Optional["SyntaxNode"]:
        """
        获取单值槽位对应的子节点。

        :param slot: 槽位名，如 "name"、"type"、"compound"
        :return: 子节点；槽位缺失（例如正在输入、尚未写出）时返回 None
        """
        value = self.slots.get(slot)
        if value is None or isinstance(value, list):
            return None
        return self._tree.get_node(value)

    def children_of(self, slot: str) -> List["SyntaxNode"]:
        # 列表型槽位，缺失时视为空列表
        value = self.slots.get(slot)
        if value is None:
            return []
        if not isinstance(value, list):
            value = [value]
        return [self._tree.get_node(i) for i in value]

    def in_slot(self, slot: str, node: "SyntaxNode") -> bool:
        value = self.slots.get(slot)
        if isinstance(value, list):
            return node.id in value
        return value == node.id

    def __eq__(self, other):
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return self.id == other.id and self._tree is other._tree

    def __hash__(self):
        return hash((id(self._tree), self.id))


class SyntaxTree(BaseModel):
    """
    单个源文件的语法树快照。

    与 JSON 的对应关系见 SyntaxTree.model_validate / model_validate_json，
    宿主（编辑器插件中的解析器）把解析结果序列化后交给本核心查询。
    """

    file_path: str = "<memory>"
    root_id: int = 0
    nodes: List[SyntaxNode] = []

    _by_id: Dict[int, SyntaxNode] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        # 建立 ID 索引，并把树的引用回填到每个节点
        for node in self.nodes:
            self._by_id[node.id] = node
            node._tree = self

    @property
    def root(self) -> Optional[SyntaxNode]:
        return self._by_id.get(self.root_id)

    def get_node(self, idx: int) -> SyntaxNode:
        return self._by_id[idx]

    def walk(self) -> Iterator[SyntaxNode]:
        """按源码顺序（先序）遍历整棵树"""
        if self.root is None:
            return
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.child_nodes))

    def leaf_at(self, line: int, column: int) -> Optional[SyntaxNode]:
        """
        查找覆盖给定位置的最深节点。

        从根节点开始，每一层取第一个范围包含该位置的子节点继续下探；
        错误节点与普通节点同样处理：若其子节点都不包含该位置，则错误节点本身即为结果。

        :param line: 行号（从 0 开始）
        :param column: 列号（从 0 开始）
        :return: 最深的覆盖节点；位置不在任何节点内时返回 None
        """
        point = Point(line, column)
        node = self.root
        if node is None or not node.range.contains_point(point):
            return None

        while True:
            for child in node.child_nodes:
                if child.range.contains_point(point):
                    node = child
                    break
            else:
                return node

    @staticmethod
    def find_first_parent(
        node: SyntaxNode, predicate: Callable[[SyntaxNode], bool]
    ) -> Optional[SyntaxNode]:
        # 沿 parent 链向上查找第一个满足条件的祖先（不含自身）
        current = node.parent_node
        while current is not None:
            if predicate(current):
                return current
            current = current.parent_node
        return None


def name_to_string(name: Optional[SyntaxNode]) -> str:
    """
    把名字类节点还原为源码文本。

    - identifier / keyword：直接返回文本
    - compound_name：递归拼接为 "a.b.c"；缺少左侧时为 ".c"（全局限定）
    - type_reference：取其 type_name 槽位
    """
    if name is None:
        return ""
    match name.kind:
        case NodeKind.IDENTIFIER | NodeKind.KEYWORD:
            return name.text or ""
        case NodeKind.COMPOUND_NAME | NodeKind.COMPOUND_BINDING_EXPRESSION:
            compound = name.child("compound")
            prefix = name_to_string(compound) if compound is not None else ""
            return f"{prefix}.{name_to_string(name.child('name'))}"
        case NodeKind.TYPE_REFERENCE:
            return name_to_string(name.child("type_name"))
        case _:
            return name.text or ""
