import pytest

from cminusf.ast_nodes import (
    AddOp,
    EqOp,
    Exp,
    FuncExp,
    MulOp,
    Num,
    RelOp,
    SysyType,
    UnaryOp,
    Var,
)
from cminusf.expressions import (
    TransformError,
    parse_float_literal,
    parse_int_literal,
    transform_call,
    transform_condition,
    transform_expression,
    transform_lval,
)
from cminusf.syntax_tree import node


def num_tree(text, kind="Integer"):
    return node("Number", node(kind, text))


def unary_num(text, kind="Integer"):
    return node("Unary_Expr", node("Primary_Expr", num_tree(text, kind)))


def add_of(unary):
    return node("Add_Expr", node("MDM_Expr", unary))


def expr_of(text, kind="Integer"):
    return node("Expr", add_of(unary_num(text, kind)))


def leaf_value(exp):
    return exp.add_exp.mul_exp.unary_exp.primary_exp.value


def rel_of(text):
    return node("Rel_Expr", add_of(unary_num(text)))


def and_of(text):
    return node("And_expr", node("Eq_Expr", rel_of(text)))


def test_parse_int_decimal_values():
    assert parse_int_literal("123") == 123
    assert parse_int_literal("0") == 0
    assert parse_int_literal("2147483647") == 2147483647
    assert parse_int_literal("-2147483648") == -2147483648


def test_parse_int_hex_and_octal():
    assert parse_int_literal("0x10") == 16
    assert parse_int_literal("0X10") == parse_int_literal("0x10")
    assert parse_int_literal("010") == 8


def test_parse_int_octal_stops_at_invalid_digit():
    assert parse_int_literal("08") == parse_int_literal("0")


def test_parse_int_out_of_range():
    with pytest.raises(TransformError):
        parse_int_literal("2147483648")


def test_parse_int_invalid():
    with pytest.raises(TransformError):
        parse_int_literal("abc")


def test_parse_float_decimal():
    assert parse_float_literal("1.5") == 1.5
    assert parse_float_literal("0.25") == 0.25


def test_parse_float_rounds_to_single_precision():
    value = parse_float_literal("0.1")
    assert value != 0.1
    assert abs(value - 0.1) < 1e-6


def test_parse_float_hex():
    assert parse_float_literal("0x1p3") == 8.0


def test_parse_float_invalid():
    with pytest.raises(TransformError):
        parse_float_literal("x")


def test_number_int_and_float():
    int_node = transform_expression(num_tree("42"))
    assert isinstance(int_node, Num)
    assert int_node.type == SysyType.INT
    assert int_node.value == 42
    float_node = transform_expression(num_tree("2.5", "Floatnum"))
    assert float_node.type == SysyType.FLOAT
    assert float_node.value == 2.5


def test_number_wrong_type():
    with pytest.raises(TransformError):
        transform_expression(num_tree("1", "Bogus"))


def test_expr_and_const_exp_flags():
    plain = transform_expression(expr_of("7"))
    const = transform_expression(node("ConstExp", add_of(unary_num("7"))))
    assert isinstance(plain, Exp)
    assert plain.is_const is False
    assert const.is_const is True
    assert leaf_value(const) == 7


def test_add_is_left_associative():
    inner = node("Add_Expr", node("MDM_Expr", unary_num("1")))
    middle = node("Add_Expr", inner, "-", node("MDM_Expr", unary_num("2")))
    outer = node("Add_Expr", middle, "+", node("MDM_Expr", unary_num("3")))
    result = transform_expression(outer)
    assert result.op == AddOp.ADD
    assert result.mul_exp.unary_exp.primary_exp.value == 3
    assert result.add_exp.op == AddOp.SUB
    assert result.add_exp.mul_exp.unary_exp.primary_exp.value == 2
    last = result.add_exp.add_exp
    assert last.add_exp is None
    assert last.op is None
    assert last.mul_exp.unary_exp.primary_exp.value == 1


@pytest.mark.parametrize("symbol,op", [("*", MulOp.MUL), ("/", MulOp.DIV), ("%", MulOp.MOD)])
def test_mul_operators(symbol, op):
    tree = node("MDM_Expr", node("MDM_Expr", unary_num("4")), symbol, unary_num("5"))
    result = transform_expression(tree)
    assert result.op == op
    assert result.unary_exp.primary_exp.value == 5
    assert result.mul_exp.mul_exp is None
    assert result.mul_exp.unary_exp.primary_exp.value == 4


@pytest.mark.parametrize("symbol,op", [("-", UnaryOp.MINUS), ("+", UnaryOp.PLUS), ("!", UnaryOp.NOT)])
def test_unary_operators(symbol, op):
    result = transform_expression(node("Unary_Expr", symbol, unary_num("9")))
    assert result.unary_op == op
    assert result.unary_exp.primary_exp.value == 9


def test_parenthesised_primary():
    tree = node("Unary_Expr", node("Primary_Expr", "(", expr_of("6"), ")"))
    result = transform_expression(tree)
    assert isinstance(result.primary_exp, Exp)
    assert leaf_value(result.primary_exp) == 6


def test_lval_indices_in_source_order():
    empty = node("ExpList")
    first = node("ExpList", empty, "[", expr_of("1"), "]")
    second = node("ExpList", first, "[", expr_of("2"), "]")
    result = transform_lval(node("LVal", "arr", second))
    assert isinstance(result, Var)
    assert result.id == "arr"
    assert [leaf_value(e) for e in result.array_lists] == [1, 2]
    assert result.length == 2


def test_lval_without_indices():
    result = transform_expression(node("LVal", "x", node("ExpList")))
    assert result.id == "x"
    assert result.array_lists == []


def test_call_arguments_in_order():
    params = node("FuncRParams", node("FuncRParams", expr_of("1")), ",", expr_of("2"))
    result = transform_call(node("Func_Expr", "f", "(", params, ")"))
    assert isinstance(result, FuncExp)
    assert result.id == "f"
    assert [leaf_value(a) for a in result.args] == [1, 2]


def test_call_without_arguments():
    result = transform_call(node("Func_Expr", "g", "(", ")"))
    assert result.id == "g"
    assert result.args == []


def test_unary_call():
    tree = node("Unary_Expr", node("Func_Expr", "h", "(", node("FuncRParams", expr_of("3")), ")"))
    result = transform_expression(tree)
    assert result.call_exp.id == "h"
    assert [leaf_value(a) for a in result.call_exp.args] == [3]
    assert result.primary_exp is None


@pytest.mark.parametrize(
    "symbol,op", [("<", RelOp.LT), ("<=", RelOp.LE), (">", RelOp.GT), (">=", RelOp.GE)]
)
def test_relational_operators(symbol, op):
    tree = node("Rel_Expr", rel_of("1"), symbol, add_of(unary_num("2")))
    result = transform_expression(tree)
    assert result.op == op
    assert result.rel_exp.rel_exp is None
    assert result.add_exp.mul_exp.unary_exp.primary_exp.value == 2


@pytest.mark.parametrize("symbol,op", [("==", EqOp.EQ), ("!=", EqOp.NEQ)])
def test_equality_operators(symbol, op):
    tree = node("Eq_Expr", node("Eq_Expr", rel_of("1")), symbol, rel_of("2"))
    result = transform_expression(tree)
    assert result.op == op
    assert result.eq_exp.eq_exp is None


def test_condition_or_and_structure():
    left = node("OR_Expr", and_of("1"))
    right = node("And_expr", and_of("2"), "&&", node("Eq_Expr", rel_of("3")))
    tree = node("Cond", node("OR_Expr", left, "||", right))
    result = transform_condition(tree)
    assert result.lor_exp.lor_exp is None
    assert result.lor_exp.land_exp.land_exp is None
    assert result.land_exp.land_exp is not None
    value = result.land_exp.eq_exp.rel_exp.add_exp.mul_exp.unary_exp.primary_exp.value
    assert value == 3


def test_condition_accepts_or_node_directly():
    result = transform_condition(node("OR_Expr", and_of("5")))
    value = result.land_exp.eq_exp.rel_exp.add_exp.mul_exp.unary_exp.primary_exp.value
    assert value == 5


def test_condition_rejects_other_nodes():
    with pytest.raises(TransformError):
        transform_condition(node("Expr", add_of(unary_num("1"))))


def test_unknown_expression_node():
    with pytest.raises(TransformError):
        transform_expression(node("Mystery"))


def test_missing_child_is_an_error():
    with pytest.raises(TransformError):
        transform_expression(node("Expr"))