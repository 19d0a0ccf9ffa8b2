from .graph_types import EdgeKind, GraphNodeKind, ScopeID
from .definition import LocalDef
from .imports import LocalImportStmt, parse_file_name, resolve_import_target
from .scope import ScopeStack
