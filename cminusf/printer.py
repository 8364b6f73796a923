"""Rendering an abstract syntax tree as an indented text outline."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from cminusf.ast_nodes import (
    AddExp,
    AddOp,
    AndExp,
    ASTNode,
    ASTVisitor,
    AssignStmt,
    Block,
    Break,
    CompoundAssignStmt,
    ConstDef,
    Continue,
    Decl,
    DeclKind,
    EqExp,
    EqOp,
    Exp,
    FuncDef,
    FuncExp,
    InitVal,
    IterationStmt,
    MainDef,
    MulExp,
    MulOp,
    Num,
    OrExp,
    Param,
    Program,
    RelExp,
    RelOp,
    ReturnStmt,
    SelectionStmt,
    SysyType,
    UnaryExp,
    UnaryOp,
    Var,
    VarDef,
)

_NODE_ERROR = "Abort due to node cast error."

_REL_TEXT = {RelOp.LT: "<", RelOp.LE: "<=", RelOp.GT: ">", RelOp.GE: ">="}
_UNARY_TEXT = {UnaryOp.PLUS: "+", UnaryOp.MINUS: "-"}


class ASTPrinter(ASTVisitor):
    """Collects an outline of a tree, one dash per level of depth."""

    def __init__(self, step: int = 2) -> None:
        self.step = step
        self.depth = 0
        self._parts: list[str] = []

    def visit(self, node: ASTNode) -> Any:
        if node is None:
            raise ValueError(_NODE_ERROR)
        return super().visit(node)

    def render(self, node: ASTNode) -> str:
        """Return the outline of ``node`` and everything below it."""
        self.depth = 0
        self._parts = []
        node.accept(self)
        return "".join(self._parts)

    # output helpers

    def _write(self, text: str) -> None:
        self._parts.append(text)

    def _prefix(self) -> None:
        self._write("-" * self.depth)

    def _line(self, text: str) -> None:
        self._prefix()
        self._write(text + "\n")

    @contextmanager
    def _indented(self) -> Iterator[None]:
        self.depth += self.step
        try:
            yield
        finally:
            self.depth -= self.step

    def _dimensions(self, dims: list) -> None:
        for dim in dims:
            with self._indented():
                self._line("[]")
                dim.accept(self)

    # node visitors

    def visit_program(self, node: Program) -> None:
        self._line("program")
        with self._indented():
            for unit in node.compunits:
                unit.accept(self)

    def visit_num(self, node: Num) -> None:
        self._prefix()
        if node.type == SysyType.INT:
            self._write(f"num(int): {node.i_val}\n")
        elif node.type == SysyType.FLOAT:
            self._write(f"num(float): {node.f_val:g}\n")
        else:
            raise ValueError(_NODE_ERROR)

    def visit_decl(self, node: Decl) -> None:
        self._prefix()
        if node.decl_kind == DeclKind.CONST:
            self._write(f"ConstDecl: {int(node.type)}\n")
            with self._indented():
                for definition in node.cdef_lists:
                    definition.accept(self)
        elif node.decl_kind == DeclKind.VAR:
            self._write(f"VarDecl: {int(node.type)}\n")
            with self._indented():
                for definition in node.vdef_lists:
                    definition.accept(self)
        else:
            self._write(f"FuncDecl: {node.func_name}\n")
            if node.params:
                with self._indented():
                    self._write("Params:\n")
                    with self._indented():
                        for param in node.params:
                            param.accept(self)
            for definitions in (node.cdef_lists, node.vdef_lists):
                if definitions:
                    with self._indented():
                        self._write("Function Body:\n")
                        with self._indented():
                            for definition in definitions:
                                definition.accept(self)

    def visit_func_def(self, node: FuncDef) -> None:
        self._line(f"FuncDef: {node.id}")
        with self._indented():
            for param in node.params:
                param.accept(self)
            node.block.accept(self)

    def visit_main_def(self, node: MainDef) -> None:
        self._line(f"MainDef: {node.id}")
        with self._indented():
            node.block.accept(self)

    def _definition(self, node: ConstDef | VarDef) -> None:
        self._line(node.id)
        self._dimensions(node.exp_lists)
        if node.initval_list is not None:
            with self._indented():
                self._line("=")
                node.initval_list.accept(self)

    def visit_const_def(self, node: ConstDef) -> None:
        self._definition(node)

    def visit_var_def(self, node: VarDef) -> None:
        self._definition(node)

    def visit_param(self, node: Param) -> None:
        self._line("param: ")
        kind = "int" if node.type == SysyType.INT else "float"
        self._write(f"{kind} {node.id}")
        self._write("[]\n" if node.isarray else "\n")
        self._dimensions(node.array_lists)

    def visit_block(self, node: Block) -> None:
        self._line("Block")
        with self._indented():
            for decl in node.decl_lists:
                decl.accept(self)
            for stmt in node.stmt_lists:
                stmt.accept(self)

    def visit_assign_stmt(self, node: AssignStmt) -> None:
        self._line("AssignStmt: ")
        with self._indented():
            node.var.accept(self)
            node.expression.accept(self)

    def visit_compound_assign_stmt(self, node: CompoundAssignStmt) -> None:
        self._line(f"CompoundAssignStmt: {node.op}")
        for part in (node.var, node.expression):
            if part is not None:
                with self._indented():
                    part.accept(self)

    def visit_selection_stmt(self, node: SelectionStmt) -> None:
        self._line("SelectionStmt: ")
        with self._indented():
            node.cond.accept(self)
            if node.if_stmt is not None:
                node.if_stmt.accept(self)
            if node.else_stmt is not None:
                node.else_stmt.accept(self)

    def visit_iteration_stmt(self, node: IterationStmt) -> None:
        self._line("IterationStmt: ")
        with self._indented():
            node.cond.accept(self)
            if node.stmt is not None:
                node.stmt.accept(self)

    def visit_return_stmt(self, node: ReturnStmt) -> None:
        self._line("ReturnStmt: ")
        if node.expression is None:
            self._write(": void\n")
        else:
            with self._indented():
                node.expression.accept(self)

    def visit_break(self, node: Break) -> None:
        self._line("Break")

    def visit_continue(self, node: Continue) -> None:
        self._line("Continue")

    def visit_exp(self, node: Exp) -> None:
        self._line("expression")
        with self._indented():
            if node.add_exp is not None:
                node.add_exp.accept(self)

    def visit_var(self, node: Var) -> None:
        self._line(f"var: {node.id}")
        self._dimensions(node.array_lists)

    def visit_unary_exp(self, node: UnaryExp) -> None:
        self._line("UnaryExp: ")
        if node.unary_exp is not None:
            self._prefix()
            self._write(_UNARY_TEXT.get(node.unary_op, "!"))
            with self._indented():
                node.unary_exp.accept(self)
        elif node.primary_exp is not None:
            with self._indented():
                node.primary_exp.accept(self)
        elif node.call_exp is not None:
            with self._indented():
                node.call_exp.accept(self)
        else:
            raise ValueError(_NODE_ERROR)

    def visit_func_exp(self, node: FuncExp) -> None:
        self._line(f"FuncExp :{node.id}()")
        with self._indented():
            for arg in node.args:
                arg.accept(self)

    def _binary(
        self, label: str, left: ASTNode | None, op_text: str | None, right: ASTNode
    ) -> None:
        self._prefix()
        self._write(f"{label}: ")
        if left is None:
            self._write("\n")
        else:
            if op_text is None:
                raise ValueError(_NODE_ERROR)
            self._write(f": {op_text}\n")
        with self._indented():
            if left is not None:
                left.accept(self)
            right.accept(self)

    def visit_add_exp(self, node: AddExp) -> None:
        op_text = node.op.value if node.op in (AddOp.ADD, AddOp.SUB) else None
        self._binary("AddExp", node.add_exp, op_text, node.mul_exp)

    def visit_mul_exp(self, node: MulExp) -> None:
        op_text = node.op.value if isinstance(node.op, MulOp) else None
        self._binary("MulExp", node.mul_exp, op_text, node.unary_exp)

    def visit_rel_exp(self, node: RelExp) -> None:
        self._binary("RelExp", node.rel_exp, _REL_TEXT.get(node.op), node.add_exp)

    def visit_eq_exp(self, node: EqExp) -> None:
        op_text = node.op.value if isinstance(node.op, EqOp) else None
        self._binary("EqExp", node.eq_exp, op_text, node.rel_exp)

    def visit_and_exp(self, node: AndExp) -> None:
        self._binary("LAndExp", node.land_exp, "&&", node.eq_exp)

    def visit_or_exp(self, node: OrExp) -> None:
        self._binary("LOrExp", node.lor_exp, "||", node.land_exp)

    def visit_init_val(self, node: InitVal) -> None:
        self._line("InitVal: ")
        with self._indented():
            if node.initval_list:
                self._line("{")
                for item in node.initval_list:
                    with self._indented():
                        item.accept(self)
                self._line("}")
            elif node.value is not None:
                node.value.accept(self)
            else:
                self._line("{}")


def format_ast(node: ASTNode) -> str:
    """Return the outline of an abstract syntax tree."""
    return ASTPrinter().render(node)