"""Turning a concrete syntax tree into the abstract syntax tree."""

from __future__ import annotations

from typing import Callable, Optional

from cminusf.ast_nodes import (
    AssignStmt,
    ASTNode,
    Block,
    Break,
    CompoundAssignStmt,
    ConstDef,
    Continue,
    Decl,
    DeclKind,
    FuncDef,
    InitVal,
    IterationStmt,
    MainDef,
    Param,
    Program,
    ReturnStmt,
    SelectionStmt,
    SysyType,
    VarDef,
)
from cminusf.expressions import (
    TransformError,
    transform_condition,
    transform_expression,
)
from cminusf.syntax_tree import SyntaxTree, SyntaxTreeNode

_EXPRESSION_NAMES = frozenset(
    {
        "Expr",
        "ConstExp",
        "Add_Expr",
        "MDM_Expr",
        "Unary_Expr",
        "Primary_Expr",
        "Number",
        "LVal",
        "Func_Expr",
        "OR_Expr",
        "And_expr",
        "Eq_Expr",
        "Rel_Expr",
    }
)

_COMPOUND_OPS = {"ADASS": "+=", "SUASS": "-=", "MUASS": "*=", "DIASS": "/="}


def _child(tree_node: SyntaxTreeNode, index: int) -> SyntaxTreeNode:
    try:
        return tree_node.children[index]
    except IndexError:
        raise TransformError(
            f"node {tree_node.name!r} has no child at position {index}"
        ) from None


def _flatten(
    list_node: SyntaxTreeNode, width: int, item: int, *, terminal: bool
) -> list[SyntaxTreeNode]:
    """Flatten a left-recursive list node into its items in source order."""
    items = []
    current = list_node
    while current.children_num == width:
        items.append(current.children[item])
        current = current.children[0]
    if terminal:
        items.append(_child(current, 0))
    items.reverse()
    return items


def _btype(btype_node: SyntaxTreeNode) -> SysyType:
    return SysyType.INT if _child(btype_node, 0).name == "int" else SysyType.FLOAT


def _program(tree_node: SyntaxTreeNode) -> Program:
    program = Program()
    for child in tree_node.children:
        if child.name == "CompMod":
            for unit in _flatten(child, 2, 1, terminal=True):
                program.compunits.append(transform_node(unit))
        elif child.name == "MainMod":
            program.compunits.append(transform_node(_child(child, 0)))
    return program


def _decl(tree_node: SyntaxTreeNode) -> Decl:
    decl = Decl()
    child = _child(tree_node, 0)
    if child.name == "ConstDecl":
        decl.type = _btype(_child(child, 1))
        decl.decl_kind = DeclKind.CONST
        for item in _flatten(_child(child, 2), 3, 2, terminal=True):
            const_def = transform_node(item)
            const_def.type = decl.type
            decl.cdef_lists.append(const_def)
    elif child.name == "VarDecl":
        decl.type = _btype(_child(child, 0))
        decl.decl_kind = DeclKind.VAR
        for item in _flatten(_child(child, 1), 3, 2, terminal=True):
            var_def = transform_node(item)
            var_def.type = decl.type
            decl.vdef_lists.append(var_def)
    elif child.name == "FuncDecl":
        decl.decl_kind = DeclKind.FUNC
        ret = _child(child, 0)
        decl.type = SysyType.VOID if ret.name in ("void", "VOID") else _btype(ret)
        decl.func_name = _child(child, 1).name
        if tree_node.children_num == 6:
            params = _flatten(tree_node.children[3], 3, 2, terminal=True)
            decl.params = [transform_node(param) for param in params]
    return decl


def _dimensions(const_list: SyntaxTreeNode) -> list:
    if const_list.children_num == 0:
        return []
    return [
        transform_node(exp) for exp in _flatten(const_list, 4, 2, terminal=False)
    ]


def _const_def(tree_node: SyntaxTreeNode) -> ConstDef:
    return ConstDef(
        id=_child(tree_node, 0).name,
        exp_lists=_dimensions(_child(tree_node, 1)),
        initval_list=transform_node(_child(tree_node, 3)),
    )


def _var_def(tree_node: SyntaxTreeNode) -> VarDef:
    var_def = VarDef(
        id=_child(tree_node, 0).name,
        exp_lists=_dimensions(_child(tree_node, 1)),
    )
    if tree_node.children_num == 4:
        var_def.initval_list = transform_node(tree_node.children[3])
    return var_def


def _init_val(tree_node: SyntaxTreeNode, is_const: bool) -> InitVal:
    init = InitVal(is_const=is_const)
    if tree_node.children_num == 1:
        init.value = transform_node(tree_node.children[0])
        init.is_singlevalue = True
    elif tree_node.children_num == 3:
        items = _flatten(tree_node.children[1], 3, 2, terminal=True)
        init.initval_list = [transform_node(item) for item in items]
    return init


def _func_def(tree_node: SyntaxTreeNode) -> FuncDef:
    func = FuncDef(id=_child(tree_node, 1).name)
    ret = _child(tree_node, 0)
    func.type = SysyType.VOID if ret.name == "void" else _btype(ret)
    if tree_node.children_num == 6:
        params = tree_node.children[3]
        if _child(params, 0).name != "VOID":
            func.params = [
                transform_node(p) for p in _flatten(params, 3, 2, terminal=True)
            ]
        func.block = transform_node(tree_node.children[5])
    else:
        func.block = transform_node(_child(tree_node, 4))
    return func


def _main_def(tree_node: SyntaxTreeNode) -> MainDef:
    body_index = 5 if tree_node.children_num == 6 else 4
    return MainDef(
        id=_child(tree_node, 1).name,
        type=SysyType.INT,
        block=transform_node(_child(tree_node, body_index)),
    )


def _param(tree_node: SyntaxTreeNode) -> Param:
    param = Param(type=_btype(_child(tree_node, 0)), id=_child(tree_node, 1).name)
    if tree_node.children_num != 2:
        param.isarray = True
        dims = _flatten(_child(tree_node, 4), 4, 2, terminal=False)
        param.array_lists = [transform_node(dim) for dim in dims]
    return param


def _body(tree_node: SyntaxTreeNode) -> Block:
    block = Block()
    for item in _flatten(_child(tree_node, 1), 2, 1, terminal=False):
        first = _child(item, 0)
        if first.name == "Decl":
            block.items.append(transform_node(first))
            continue
        stmt = _statement(first)
        if stmt is not None:
            block.items.append(stmt)
    return block


def _assignment(stmt: SyntaxTreeNode) -> ASTNode:
    op_name = _child(stmt, 1).name
    var = transform_node(stmt.children[0])
    expression = transform_node(_child(stmt, 2))
    if op_name == "ASSIGN":
        return AssignStmt(var=var, expression=expression)
    return CompoundAssignStmt(
        var=var, expression=expression, op=_COMPOUND_OPS.get(op_name, op_name)
    )


def _jump(jump: SyntaxTreeNode) -> Optional[ASTNode]:
    kind = _child(jump, 0).name
    if kind == "return":
        if jump.children_num == 3:
            return ReturnStmt(expression=transform_node(jump.children[1]))
        return ReturnStmt()
    if kind == "break":
        return Break()
    if kind == "continue":
        return Continue()
    return None


def _statement(stmt: SyntaxTreeNode) -> Optional[ASTNode]:
    """Build a statement node; empty and unknown statements give ``None``."""
    first = _child(stmt, 0)
    kind = first.name
    if kind == "LVal":
        return _assignment(stmt)
    if kind in ("Expr", "Body"):
        return transform_node(first)
    if kind == "IFItem":
        selection = SelectionStmt(
            cond=transform_condition(_child(first, 2)),
            if_stmt=transform_node(_child(first, 4)),
        )
        if first.children_num == 7:
            selection.else_stmt = transform_node(first.children[6])
        return selection
    if kind == "WhileItem":
        return IterationStmt(
            cond=transform_condition(_child(first, 2)),
            stmt=transform_node(_child(first, 4)),
        )
    if kind == "jump_stmt":
        return _jump(first)
    if kind in ("return", "break", "continue"):
        return _jump(stmt)
    return None


_HANDLERS: dict[str, Callable[[SyntaxTreeNode], Optional[ASTNode]]] = {
    "program": _program,
    "Decl": _decl,
    "ConstDef": _const_def,
    "VarDef": _var_def,
    "ConstInitVal": lambda n: _init_val(n, True),
    "InitVal": lambda n: _init_val(n, False),
    "FuncDef": _func_def,
    "MainDef": _main_def,
    "FuncParam": _param,
    "Body": _body,
    "stmt": _statement,
}


def transform_node(tree_node: SyntaxTreeNode) -> Optional[ASTNode]:
    """Build the abstract node for a syntax tree node, or ``None`` if it has none."""
    handler = _HANDLERS.get(tree_node.name)
    if handler is not None:
        return handler(tree_node)
    if tree_node.name in _EXPRESSION_NAMES:
        return transform_expression(tree_node)
    return None


def build_ast(tree: Optional[SyntaxTree]) -> Program:
    """Build the program's abstract syntax tree from a whole syntax tree."""
    if tree is None or tree.root is None:
        raise TransformError("empty input tree!")
    program = transform_node(tree.root)
    if not isinstance(program, Program):
        raise TransformError(f"root node {tree.root.name!r} is not a program")
    return program