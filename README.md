# cminusf

Front-end pieces for the C-minus-f language, a small C-like teaching
language with `int` and `float` values, arrays, constants, functions,
`if`/`else`, `while`, `break`, `continue` and `return`.

The package works on parse trees that are already built: it turns them
into abstract syntax trees, prints both kinds of tree, and supplies the
language's runtime I/O routines.

## Modules

- `cminusf.syntax_tree`: the concrete parse tree. `SyntaxTreeNode` has a
  `name`, a list of `children`, `add_child(child)` and `format(level)`;
  `SyntaxTree` holds an optional `root` and has `format()` and
  `write(stream)` (standard output by default). The dump shows one node per
  line as `|  ` per level, then `>--+ name` for inner nodes or `>--* name`
  for leaves. `node(name, *children)` builds a node, turning string
  arguments into leaf children.
- `cminusf.transform`: `build_ast(tree)` turns a whole `SyntaxTree` into a
  `Program`; `transform_node(tree_node)` converts a single parse tree node
  (returning `None` for nodes that have no abstract counterpart, such as an
  empty statement).
- `cminusf.expressions`: conversion of expression subtrees
  (`transform_expression`, `transform_lval`, `transform_call`,
  `transform_condition`) and the literal parsers `parse_int_literal`
  (decimal, octal with a leading `0`, hexadecimal with `0x`, limited to the
  32-bit signed range) and `parse_float_literal` (decimal or hexadecimal,
  rounded to single precision). Malformed input raises `TransformError`, a
  `ValueError`.
- `cminusf.ast_nodes`: the node classes (`Program`, `FuncDef`, `MainDef`,
  `Decl`, `ConstDef`, `VarDef`, `InitVal`, `Param`, `Block`, `AssignStmt`,
  `CompoundAssignStmt`, `SelectionStmt`, `IterationStmt`, `Break`,
  `Continue`, `ReturnStmt`, `Exp`, `Var`, `Num`, `UnaryExp`, `FuncExp`,
  `AddExp`, `MulExp`, `RelExp`, `EqExp`, `AndExp`, `OrExp`), the enums
  `SysyType`, `DeclKind`, `AddOp`, `MulOp`, `RelOp`, `EqOp`, `UnaryOp`, and
  the `ASTVisitor` base class. `node.accept(visitor)` calls
  `visitor.visit(node)`, which dispatches to a method named after the node
  class, such as `visit_add_exp` or `visit_main_def`.
- `cminusf.printer`: `ASTPrinter` (an `ASTVisitor` with `render(node)`) and
  `format_ast(node)`, a text outline of an AST indented with dashes, two
  per level.
- `cminusf.logs`: `LogLevel` (`DEBUG`, `INFO`, `WARNING`, `ERROR`),
  `LogWriter` with `format(message)` and `write(message)`, which only emits
  messages whose level reaches its `threshold`; plus `level2string(level)`
  and `get_short_name(file_path)`.
- `cminusf.runtime_io`: `read_int`, `output`, `output_float` and
  `neg_idx_except`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from cminusf.syntax_tree import SyntaxTree, node
from cminusf.transform import build_ast
from cminusf.printer import format_ast

# int main() { return 42; }
number = node("Number", node("Integer", "42"))
expr = node(
    "Expr",
    node("Add_Expr", node("MDM_Expr", node("Unary_Expr", node("Primary_Expr", number)))),
)
ret = node("stmt", node("jump_stmt", "return", expr, ";"))
body = node("Body", "{", node("BodyList", node("BodyList"), node("BodyItem", ret)), "}")
main = node("MainDef", node("BType", "int"), "main", "(", ")", body)
tree = SyntaxTree(node("program", node("MainMod", main)))

print(tree.format())    # the parse tree, one node per line
ast = build_ast(tree)   # a Program whose only unit is a MainDef
print(format_ast(ast))  # dash-indented AST outline
```

`build_ast` raises `TransformError` for an empty tree or a root that is not
a `program` node.

## Runtime I/O

```python
import io
from cminusf.runtime_io import read_int, output, output_float

out = io.StringIO()
output(7, out)               # writes "7\n"
output_float(1.5, out)       # writes "1.500000\n"
read_int(io.StringIO("12"))  # returns 12
```

`read_int` skips leading whitespace, accepts an optional sign, and raises
`EOFError` when there is nothing to read or `ValueError` when no digits
follow. All writers default to standard output. `neg_idx_except` writes
`negative index exception` and raises `NegativeIndexError`, an
`IndexError`.

## What this package does not do

- It has no lexer or parser: it cannot read C-minus-f source text. Parse
  trees must be built by other means, for example with `node(...)`.
- It does not generate intermediate code or machine code, and it has no
  command-line compiler; the AST is the last stage it produces.