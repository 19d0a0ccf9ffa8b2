from .utils import Point, TextRange
from .node_types import (
    NodeKind,
    SCOPED_BLOCK_KINDS,
    DECLARATION_KINDS,
    LIST_SLOTS,
    is_scoped_block,
    is_declaration,
)
from .tree import SyntaxNode, SyntaxTree, name_to_string
from .builder import TreeBuilder
