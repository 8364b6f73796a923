"""Abstract syntax tree node types and the visitor protocol."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, ClassVar, Optional, Union


class SysyType(IntEnum):
    INT = 0
    FLOAT = 1
    VOID = 2


class DeclKind(Enum):
    CONST = "const"
    VAR = "var"
    FUNC = "func"


class AddOp(Enum):
    ADD = "+"
    SUB = "-"


class MulOp(Enum):
    MUL = "*"
    DIV = "/"
    MOD = "%"


class RelOp(Enum):
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="


class EqOp(Enum):
    EQ = "=="
    NEQ = "!="


class UnaryOp(Enum):
    PLUS = "+"
    MINUS = "-"
    NOT = "!"


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class ASTVisitor:
    """Dispatches ``visit`` to a ``visit_<node_kind>`` method."""

    def visit(self, node: ASTNode) -> Any:
        method = getattr(self, node.visit_method, None)
        if method is None:
            raise TypeError(
                f"{type(self).__name__} cannot visit {type(node).__name__}"
            )
        return method(node)


class ASTNode:
    """Base of all tree nodes."""

    visit_method: ClassVar[str] = "visit_node"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.visit_method = f"visit_{_snake(cls.__name__)}"

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit(self)


@dataclass(eq=False)
class Num(ASTNode):
    type: SysyType = SysyType.INT
    value: Union[int, float] = 0

    @property
    def i_val(self) -> int:
        return int(self.value)

    @property
    def f_val(self) -> float:
        return float(self.value)


@dataclass(eq=False)
class Exp(ASTNode):
    is_const: bool = False
    add_exp: Optional[AddExp] = None


@dataclass(eq=False)
class Var(ASTNode):
    id: str = ""
    array_lists: list[Exp] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.array_lists)


@dataclass(eq=False)
class FuncExp(ASTNode):
    id: str = ""
    args: list[Exp] = field(default_factory=list)


@dataclass(eq=False)
class UnaryExp(ASTNode):
    unary_op: Optional[UnaryOp] = None
    unary_exp: Optional[UnaryExp] = None
    primary_exp: Optional[ASTNode] = None
    call_exp: Optional[FuncExp] = None


@dataclass(eq=False)
class MulExp(ASTNode):
    op: Optional[MulOp] = None
    mul_exp: Optional[MulExp] = None
    unary_exp: Optional[UnaryExp] = None


@dataclass(eq=False)
class AddExp(ASTNode):
    op: Optional[AddOp] = None
    add_exp: Optional[AddExp] = None
    mul_exp: Optional[MulExp] = None


@dataclass(eq=False)
class RelExp(ASTNode):
    op: Optional[RelOp] = None
    rel_exp: Optional[RelExp] = None
    add_exp: Optional[AddExp] = None


@dataclass(eq=False)
class EqExp(ASTNode):
    op: Optional[EqOp] = None
    eq_exp: Optional[EqExp] = None
    rel_exp: Optional[RelExp] = None


@dataclass(eq=False)
class AndExp(ASTNode):
    land_exp: Optional[AndExp] = None
    eq_exp: Optional[EqExp] = None


@dataclass(eq=False)
class OrExp(ASTNode):
    lor_exp: Optional[OrExp] = None
    land_exp: Optional[AndExp] = None


@dataclass(eq=False)
class InitVal(ASTNode):
    is_const: bool = False
    is_singlevalue: bool = False
    value: Optional[Exp] = None
    initval_list: list[InitVal] = field(default_factory=list)


@dataclass(eq=False)
class ConstDef(ASTNode):
    id: str = ""
    type: SysyType = SysyType.INT
    exp_lists: list[Exp] = field(default_factory=list)
    initval_list: Optional[InitVal] = None
    is_const: ClassVar[bool] = True

    @property
    def is_array(self) -> bool:
        return bool(self.exp_lists)

    @property
    def length(self) -> int:
        return len(self.exp_lists)


@dataclass(eq=False)
class VarDef(ASTNode):
    id: str = ""
    type: SysyType = SysyType.INT
    exp_lists: list[Exp] = field(default_factory=list)
    initval_list: Optional[InitVal] = None
    is_const: ClassVar[bool] = False

    @property
    def is_array(self) -> bool:
        return bool(self.exp_lists)

    @property
    def length(self) -> int:
        return len(self.exp_lists)


@dataclass(eq=False)
class Param(ASTNode):
    type: SysyType = SysyType.INT
    id: str = ""
    isarray: bool = False
    array_lists: list[Exp] = field(default_factory=list)


@dataclass(eq=False)
class Decl(ASTNode):
    decl_kind: DeclKind = DeclKind.VAR
    type: SysyType = SysyType.INT
    cdef_lists: list[ConstDef] = field(default_factory=list)
    vdef_lists: list[VarDef] = field(default_factory=list)
    func_name: str = ""
    params: list[Param] = field(default_factory=list)


@dataclass(eq=False)
class Block(ASTNode):
    """A braced body; ``items`` keeps declarations and statements in order."""

    items: list[ASTNode] = field(default_factory=list)

    @property
    def decl_lists(self) -> list[Decl]:
        return [item for item in self.items if isinstance(item, Decl)]

    @property
    def stmt_lists(self) -> list[ASTNode]:
        return [item for item in self.items if not isinstance(item, Decl)]


@dataclass(eq=False)
class AssignStmt(ASTNode):
    var: Optional[Var] = None
    expression: Optional[Exp] = None


@dataclass(eq=False)
class CompoundAssignStmt(ASTNode):
    var: Optional[Var] = None
    expression: Optional[Exp] = None
    op: str = ""


@dataclass(eq=False)
class SelectionStmt(ASTNode):
    cond: Optional[OrExp] = None
    if_stmt: Optional[ASTNode] = None
    else_stmt: Optional[ASTNode] = None


@dataclass(eq=False)
class IterationStmt(ASTNode):
    cond: Optional[OrExp] = None
    stmt: Optional[ASTNode] = None


@dataclass(eq=False)
class Break(ASTNode):
    pass


@dataclass(eq=False)
class Continue(ASTNode):
    pass


@dataclass(eq=False)
class ReturnStmt(ASTNode):
    expression: Optional[Exp] = None


@dataclass(eq=False)
class FuncDef(ASTNode):
    type: SysyType = SysyType.VOID
    id: str = ""
    params: list[Param] = field(default_factory=list)
    block: Optional[Block] = None


@dataclass(eq=False)
class MainDef(ASTNode):
    type: SysyType = SysyType.INT
    id: str = "main"
    block: Optional[Block] = None


@dataclass(eq=False)
class Program(ASTNode):
    compunits: list[ASTNode] = field(default_factory=list)