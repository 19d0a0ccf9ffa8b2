"""
Pytest configuration and shared fixtures.

The model fixture is the syntax tree a parser would produce for:

    0  import lib.dzn;
    1  enum Result { Ok, Fail };
    2  interface IApi {
    3    in void start(in Result mode, out bool done);
    4    out void ready();
    5    behavior {
    6
    7    }
    8  }
    9  component Comp {
    10   provides IApi api;
    11   behavior {
    12     Result state = Result.Ok;
    13     void helper(in bool a, in bool b, in bool c) {}
    14     on api.start(m, d): { helper(m, d, state); }
    15     [state] { }
    16     api.
    17     api.reply;
    18   }
    19 }
    20 namespace ns {
    21   extern Data $char*$;
    22 }
    23 .
    24 Result.
"""

import pytest

from dzn_assist.scope_graph.build_scopes import build_scope_graph
from dzn_assist.syntax import NodeKind as K
from dzn_assist.syntax import TreeBuilder


# =============================================================================
# TREE HELPERS
# =============================================================================

def add_type(b, parent, slot, start, end, name):
    """type_reference wrapping a single identifier"""
    ref = b.add(K.TYPE_REFERENCE, start, end, parent=parent, slot=slot)
    b.add(K.IDENTIFIER, start, end, parent=ref, slot="type_name", text=name)
    return ref


def add_parameter(b, kind, parent, line, col, direction, type_name, name):
    """`direction type name` starting at (line, col)"""
    type_col = col + len(direction) + 1
    name_col = type_col + len(type_name) + 1
    end = (line, name_col + len(name))
    param = b.add(kind, (line, col), end, parent=parent, slot="parameters")
    b.add(K.KEYWORD, (line, col), (line, col + len(direction)), parent=param, slot="direction", text=direction)
    add_type(b, param, "type", (line, type_col), (line, type_col + len(type_name)), type_name)
    b.add(K.IDENTIFIER, (line, name_col), end, parent=param, slot="name", text=name)
    return param


def build_model_tree(file_path="main.dzn"):
    b = TreeBuilder(file_path)
    ids = {}
    root = b.add(K.FILE, (0, 0), (25, 0))

    ids["import"] = b.add(K.IMPORT, (0, 0), (0, 15), parent=root, slot="declarations", text="lib.dzn")

    # enum Result { Ok, Fail };
    enum = b.add(K.ENUM, (1, 0), (1, 25), parent=root, slot="declarations")
    ids["enum"] = enum
    b.add(K.IDENTIFIER, (1, 5), (1, 11), parent=enum, slot="name", text="Result")
    ids["Ok"] = b.add(K.IDENTIFIER, (1, 14), (1, 16), parent=enum, slot="fields", text="Ok")
    b.add(K.IDENTIFIER, (1, 18), (1, 22), parent=enum, slot="fields", text="Fail")

    # interface IApi
    iface = b.add(K.INTERFACE, (2, 0), (8, 1), parent=root, slot="declarations")
    ids["interface"] = iface
    b.add(K.IDENTIFIER, (2, 10), (2, 14), parent=iface, slot="name", text="IApi")

    start = b.add(K.EVENT, (3, 2), (3, 47), parent=iface, slot="declarations")
    ids["start"] = start
    b.add(K.KEYWORD, (3, 2), (3, 4), parent=start, slot="direction", text="in")
    add_type(b, start, "type", (3, 5), (3, 9), "void")
    b.add(K.IDENTIFIER, (3, 10), (3, 15), parent=start, slot="name", text="start")
    add_parameter(b, K.EVENT_PARAMETER, start, 3, 16, "in", "Result", "mode")
    add_parameter(b, K.EVENT_PARAMETER, start, 3, 32, "out", "bool", "done")

    ready = b.add(K.EVENT, (4, 2), (4, 19), parent=iface, slot="declarations")
    b.add(K.KEYWORD, (4, 2), (4, 5), parent=ready, slot="direction", text="out")
    add_type(b, ready, "type", (4, 6), (4, 10), "void")
    b.add(K.IDENTIFIER, (4, 11), (4, 16), parent=ready, slot="name", text="ready")

    ids["interface_behavior"] = b.add(K.BEHAVIOR, (5, 2), (7, 3), parent=iface, slot="declarations")

    # component Comp
    comp = b.add(K.COMPONENT, (9, 0), (19, 1), parent=root, slot="declarations")
    ids["component"] = comp
    b.add(K.IDENTIFIER, (9, 10), (9, 14), parent=comp, slot="name", text="Comp")

    port = b.add(K.PORT, (10, 2), (10, 20), parent=comp, slot="declarations")
    ids["port"] = port
    b.add(K.KEYWORD, (10, 2), (10, 10), parent=port, slot="direction", text="provides")
    add_type(b, port, "type", (10, 11), (10, 15), "IApi")
    ids["port_name"] = b.add(K.IDENTIFIER, (10, 16), (10, 19), parent=port, slot="name", text="api")

    behavior = b.add(K.BEHAVIOR, (11, 2), (18, 3), parent=comp, slot="declarations")
    ids["behavior"] = behavior

    # Result state = Result.Ok;
    state = b.add(K.VARIABLE, (12, 4), (12, 29), parent=behavior, slot="declarations")
    ids["state"] = state
    add_type(b, state, "type", (12, 4), (12, 10), "Result")
    b.add(K.IDENTIFIER, (12, 11), (12, 16), parent=state, slot="name", text="state")
    value = b.add(K.COMPOUND_NAME, (12, 19), (12, 28), parent=state, slot="value")
    ids["value_owner"] = b.add(K.IDENTIFIER, (12, 19), (12, 25), parent=value, slot="compound", text="Result")
    ids["value_member"] = b.add(K.IDENTIFIER, (12, 26), (12, 28), parent=value, slot="name", text="Ok")

    # void helper(in bool a, in bool b, in bool c) {}
    helper = b.add(K.FUNCTION, (13, 4), (13, 51), parent=behavior, slot="declarations")
    ids["helper"] = helper
    add_type(b, helper, "return_type", (13, 4), (13, 8), "void")
    b.add(K.IDENTIFIER, (13, 9), (13, 15), parent=helper, slot="name", text="helper")
    add_parameter(b, K.FUNCTION_PARAMETER, helper, 13, 16, "in", "bool", "a")
    add_parameter(b, K.FUNCTION_PARAMETER, helper, 13, 27, "in", "bool", "b")
    add_parameter(b, K.FUNCTION_PARAMETER, helper, 13, 38, "in", "bool", "c")
    ids["helper_body"] = b.add(K.COMPOUND, (13, 49), (13, 51), parent=helper, slot="body")

    # on api.start(m, d): { helper(m, d, state); }
    on = b.add(K.ON_STATEMENT, (14, 4), (14, 48), parent=behavior, slot="statements")
    trigger = b.add(K.ON_TRIGGER, (14, 7), (14, 22), parent=on, slot="triggers")
    ids["trigger"] = trigger
    event_name = b.add(K.COMPOUND_NAME, (14, 7), (14, 16), parent=trigger, slot="name")
    b.add(K.IDENTIFIER, (14, 7), (14, 10), parent=event_name, slot="compound", text="api")
    b.add(K.IDENTIFIER, (14, 11), (14, 16), parent=event_name, slot="name", text="start")
    m = b.add(K.ON_PARAMETER, (14, 17), (14, 18), parent=trigger, slot="parameters")
    ids["m"] = m
    b.add(K.IDENTIFIER, (14, 17), (14, 18), parent=m, slot="name", text="m")
    d = b.add(K.ON_PARAMETER, (14, 20), (14, 21), parent=trigger, slot="parameters")
    b.add(K.IDENTIFIER, (14, 20), (14, 21), parent=d, slot="name", text="d")
    body = b.add(K.COMPOUND, (14, 24), (14, 48), parent=on, slot="body")
    call = b.add(K.CALL_EXPRESSION, (14, 26), (14, 45), parent=body, slot="statements")
    ids["call"] = call
    b.add(K.IDENTIFIER, (14, 26), (14, 32), parent=call, slot="expression", text="helper")
    b.add(K.IDENTIFIER, (14, 33), (14, 34), parent=call, slot="arguments", text="m")
    b.add(K.IDENTIFIER, (14, 36), (14, 37), parent=call, slot="arguments", text="d")
    b.add(K.IDENTIFIER, (14, 39), (14, 44), parent=call, slot="arguments", text="state")

    # [state] { }
    guard = b.add(K.GUARD, (15, 4), (15, 15), parent=behavior, slot="statements")
    ids["guard"] = guard
    b.add(K.IDENTIFIER, (15, 5), (15, 10), parent=guard, slot="condition", text="state")
    b.add(K.COMPOUND, (15, 12), (15, 15), parent=guard, slot="body")

    # api.   (incomplete statement)
    ids["error"] = b.add(K.ERROR, (16, 4), (16, 8), parent=behavior, slot="statements", text="api.")

    # api.reply;
    reply = b.add(K.REPLY, (17, 4), (17, 14), parent=behavior, slot="statements")
    b.add(K.IDENTIFIER, (17, 4), (17, 7), parent=reply, slot="port", text="api")
    b.add(K.KEYWORD, (17, 8), (17, 13), parent=reply, slot="keyword", text="reply")

    # namespace ns { extern Data $char*$; }
    ns = b.add(K.NAMESPACE, (20, 0), (22, 1), parent=root, slot="declarations")
    ids["namespace"] = ns
    b.add(K.IDENTIFIER, (20, 10), (20, 12), parent=ns, slot="name", text="ns")
    extern = b.add(K.EXTERN, (21, 2), (21, 22), parent=ns, slot="declarations")
    ids["extern"] = extern
    b.add(K.IDENTIFIER, (21, 9), (21, 13), parent=extern, slot="name", text="Data")
    b.add(K.EXPRESSION, (21, 14), (21, 21), parent=extern, slot="value", text="char*")

    # .      (global qualifier, nothing typed yet)
    ids["global"] = b.add(K.COMPOUND_NAME, (23, 0), (23, 1), parent=root, slot="declarations")

    # Result.
    result_dot = b.add(K.COMPOUND_NAME, (24, 0), (24, 7), parent=root, slot="declarations")
    b.add(K.IDENTIFIER, (24, 0), (24, 6), parent=result_dot, slot="compound", text="Result")

    return b.build(), ids


# =============================================================================
# MODEL FIXTURES
# =============================================================================

@pytest.fixture
def model():
    """(tree, ids) for the model shown in the module docstring."""
    return build_model_tree()


@pytest.fixture
def tree(model):
    return model[0]


@pytest.fixture
def ids(model):
    return model[1]


@pytest.fixture
def service(tree):
    return build_scope_graph(tree)


def node(tree, ids, key):
    return tree.get_node(ids[key])


def names(items):
    return [item.display_name for item in items]
