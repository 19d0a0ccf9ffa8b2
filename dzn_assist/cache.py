"""
已解析文件缓存。

以文件路径为键，保存语法树快照以及基于它构建的 ScopeGraph。
缓存是显式传递的服务对象（get / put / invalidate），而不是进程级全局状态；
本核心的查询函数本身不做任何缓存。
"""

import threading
from dataclasses import dataclass
from typing import Dict, Optional

from dzn_assist import logger
from dzn_assist.scope_graph.scope_resolution.graph import ScopeGraph
from dzn_assist.syntax import SyntaxTree


@dataclass
class ParsedFile:
    tree: SyntaxTree
    scope_graph: Optional[ScopeGraph] = None


class ParsedFileCache:
    """
    线程安全的已解析文件缓存。

    写入新快照时会丢弃旧的 ScopeGraph，保证查询所用的语法树与语义快照一致。
    """

    def __init__(self):
        self._files: Dict[str, ParsedFile] = {}
        self._lock = threading.Lock()

    def get(self, file_path: str) -> Optional[ParsedFile]:
        with self._lock:
            return self._files.get(file_path)

    def put(self, tree: SyntaxTree, scope_graph: Optional[ScopeGraph] = None) -> ParsedFile:
        parsed = ParsedFile(tree=tree, scope_graph=scope_graph)
        with self._lock:
            self._files[tree.file_path] = parsed
        logger.debug(f"Cached syntax tree for {tree.file_path}")
        return parsed

    def set_scope_graph(self, tree: SyntaxTree, scope_graph: ScopeGraph) -> Optional[ParsedFile]:
        """
        为已缓存的快照挂上 ScopeGraph。

        :return: 更新后的条目；该文件已关闭或已被更新的快照替换时返回 None
        """
        with self._lock:
            parsed = self._files.get(tree.file_path)
            if parsed is None or parsed.tree is not tree:
                return None
            parsed.scope_graph = scope_graph
            return parsed

    def invalidate(self, file_path: str) -> bool:
        with self._lock:
            return self._files.pop(file_path, None) is not None

    def __contains__(self, file_path: str) -> bool:
        with self._lock:
            return file_path in self._files

    def drop_scope_graphs(self, except_path: Optional[str] = None) -> None:
        # 某个文件更新后，import 了它的文件需要重新链接
        with self._lock:
            for path, parsed in self._files.items():
                if path != except_path:
                    parsed.scope_graph = None
