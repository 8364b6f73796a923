"""Building expression nodes of the abstract syntax tree from the syntax tree."""

from __future__ import annotations

import math
import re
import struct
from typing import Callable

from cminusf.ast_nodes import (
    AddExp,
    AddOp,
    AndExp,
    ASTNode,
    EqExp,
    EqOp,
    Exp,
    FuncExp,
    MulExp,
    MulOp,
    Num,
    OrExp,
    RelExp,
    RelOp,
    SysyType,
    UnaryExp,
    UnaryOp,
    Var,
)
from cminusf.syntax_tree import SyntaxTreeNode


class TransformError(ValueError):
    """Raised when a syntax tree cannot be turned into an abstract syntax tree."""


_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_INT_PATTERNS = {
    16: re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)"),
    8: re.compile(r"\s*([+-]?)([0-7]+)"),
    10: re.compile(r"\s*([+-]?)([0-9]+)"),
}
_HEX_FLOAT = re.compile(
    r"\s*[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?"
)
_DEC_FLOAT = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_int_literal(text: str) -> int:
    """Parse a hexadecimal, octal or decimal integer constant into a 32-bit int."""
    if len(text) > 1 and text[1] in "xX":
        base = 16
    elif len(text) > 1 and text[0] == "0":
        base = 8
    else:
        base = 10
    match = _INT_PATTERNS[base].match(text)
    if match is None:
        raise TransformError(f"invalid integer literal {text!r}")
    sign, digits = match.groups()
    value = int(sign + digits, base)
    if not _INT_MIN <= value <= _INT_MAX:
        raise TransformError(f"integer literal {text!r} out of range")
    return value


def _to_single(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def parse_float_literal(text: str) -> float:
    """Parse a decimal or hexadecimal floating constant, rounded to single precision."""
    if len(text) > 1 and text[1] in "xX":
        match = _HEX_FLOAT.match(text)
        if match is None:
            raise TransformError(f"invalid float literal {text!r}")
        value = float.fromhex(match.group().strip())
        try:
            return _to_single(value)
        except OverflowError:
            return math.copysign(math.inf, value)
    match = _DEC_FLOAT.match(text)
    if match is None:
        raise TransformError(f"invalid float literal {text!r}")
    try:
        return _to_single(float(match.group()))
    except OverflowError:
        raise TransformError(f"float literal {text!r} out of range") from None


def _child(tree_node: SyntaxTreeNode, index: int) -> SyntaxTreeNode:
    try:
        return tree_node.children[index]
    except IndexError:
        raise TransformError(
            f"node {tree_node.name!r} has no child at position {index}"
        ) from None


def _left_list(
    list_node: SyntaxTreeNode, width: int, item: int, *, terminal: bool
) -> list[SyntaxTreeNode]:
    """Flatten a left-recursive list into its items in source order."""
    items = []
    current = list_node
    while current.children_num == width:
        items.append(current.children[item])
        current = current.children[0]
    if terminal:
        items.append(_child(current, 0))
    items.reverse()
    return items


def _exp(tree_node: SyntaxTreeNode, is_const: bool) -> Exp:
    return Exp(is_const=is_const, add_exp=transform_expression(_child(tree_node, 0)))


def _add(tree_node: SyntaxTreeNode) -> AddExp:
    outer = current = AddExp()
    n = tree_node
    while n.children_num == 3:
        current.op = AddOp.ADD if n.children[1].name == "+" else AddOp.SUB
        current.mul_exp = transform_expression(n.children[2])
        current.add_exp = AddExp()
        current = current.add_exp
        n = n.children[0]
    current.mul_exp = transform_expression(_child(n, 0))
    return outer


_MUL_OPS = {"*": MulOp.MUL, "/": MulOp.DIV}


def _mul(tree_node: SyntaxTreeNode) -> MulExp:
    outer = current = MulExp()
    n = tree_node
    while n.children_num == 3:
        current.op = _MUL_OPS.get(n.children[1].name, MulOp.MOD)
        current.unary_exp = transform_expression(n.children[2])
        current.mul_exp = MulExp()
        current = current.mul_exp
        n = n.children[0]
    current.unary_exp = transform_expression(_child(n, 0))
    return outer


_UNARY_OPS = {"+": UnaryOp.PLUS, "-": UnaryOp.MINUS}


def _unary(tree_node: SyntaxTreeNode) -> UnaryExp:
    result = UnaryExp()
    first = _child(tree_node, 0)
    if tree_node.children_num == 1 and first.name == "Primary_Expr":
        result.primary_exp = transform_expression(first)
    elif tree_node.children_num == 2:
        result.unary_op = _UNARY_OPS.get(first.name, UnaryOp.NOT)
        result.unary_exp = transform_expression(tree_node.children[1])
    else:
        result.call_exp = transform_call(first)
    return result


def _primary(tree_node: SyntaxTreeNode) -> ASTNode:
    if tree_node.children_num == 1:
        return transform_expression(tree_node.children[0])
    return transform_expression(_child(tree_node, 1))


def _number(tree_node: SyntaxTreeNode) -> Num:
    kind = _child(tree_node, 0)
    if kind.name == "Integer":
        return Num(type=SysyType.INT, value=parse_int_literal(_child(kind, 0).name))
    if kind.name == "Floatnum":
        return Num(type=SysyType.FLOAT, value=parse_float_literal(_child(kind, 0).name))
    raise TransformError(f"wrong number type {kind.name!r}")


def transform_lval(tree_node: SyntaxTreeNode) -> Var:
    """Build a variable reference, with its index expressions, from an LVal node."""
    indices = _left_list(_child(tree_node, 1), 4, 2, terminal=False)
    return Var(
        id=_child(tree_node, 0).name,
        array_lists=[transform_expression(index) for index in indices],
    )


def transform_call(tree_node: SyntaxTreeNode) -> FuncExp:
    """Build a function call, with its arguments, from a Func_Expr node."""
    call = FuncExp(id=_child(tree_node, 0).name)
    if tree_node.children_num == 4:
        args = _left_list(tree_node.children[2], 3, 2, terminal=True)
        call.args = [transform_expression(arg) for arg in args]
    return call


def _or(tree_node: SyntaxTreeNode) -> OrExp:
    if tree_node.children_num == 3:
        return OrExp(
            lor_exp=transform_expression(tree_node.children[0]),
            land_exp=transform_expression(tree_node.children[2]),
        )
    return OrExp(land_exp=transform_expression(_child(tree_node, 0)))


def _and(tree_node: SyntaxTreeNode) -> AndExp:
    if tree_node.children_num == 3:
        return AndExp(
            land_exp=transform_expression(tree_node.children[0]),
            eq_exp=transform_expression(tree_node.children[2]),
        )
    return AndExp(eq_exp=transform_expression(_child(tree_node, 0)))


def _eq(tree_node: SyntaxTreeNode) -> EqExp:
    if tree_node.children_num == 3:
        return EqExp(
            op=EqOp.EQ if tree_node.children[1].name == "==" else EqOp.NEQ,
            eq_exp=transform_expression(tree_node.children[0]),
            rel_exp=transform_expression(tree_node.children[2]),
        )
    return EqExp(rel_exp=transform_expression(_child(tree_node, 0)))


_REL_OPS = {"<": RelOp.LT, "<=": RelOp.LE, ">": RelOp.GT}


def _rel(tree_node: SyntaxTreeNode) -> RelExp:
    if tree_node.children_num == 3:
        return RelExp(
            op=_REL_OPS.get(tree_node.children[1].name, RelOp.GE),
            rel_exp=transform_expression(tree_node.children[0]),
            add_exp=transform_expression(tree_node.children[2]),
        )
    return RelExp(add_exp=transform_expression(_child(tree_node, 0)))


def transform_condition(tree_node: SyntaxTreeNode) -> OrExp:
    """Build a condition from an OR_Expr node or from a node wrapping one."""
    if tree_node.name == "OR_Expr":
        return _or(tree_node)
    if tree_node.children_num == 1 and tree_node.children[0].name == "OR_Expr":
        return _or(tree_node.children[0])
    raise TransformError(f"node {tree_node.name!r} is not a condition")


_HANDLERS: dict[str, Callable[[SyntaxTreeNode], ASTNode]] = {
    "Expr": lambda n: _exp(n, False),
    "ConstExp": lambda n: _exp(n, True),
    "Add_Expr": _add,
    "MDM_Expr": _mul,
    "Unary_Expr": _unary,
    "Primary_Expr": _primary,
    "Number": _number,
    "LVal": transform_lval,
    "Func_Expr": transform_call,
    "OR_Expr": _or,
    "And_expr": _and,
    "Eq_Expr": _eq,
    "Rel_Expr": _rel,
}


def transform_expression(tree_node: SyntaxTreeNode) -> ASTNode:
    """Build the expression node for any expression-level syntax tree node."""
    handler = _HANDLERS.get(tree_node.name)
    if handler is None:
        raise TransformError(f"unexpected node {tree_node.name!r} in an expression")
    return handler(tree_node)