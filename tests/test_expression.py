import pytest

from zkinfer.expression import (
    Constant,
    Eq,
    Input,
    Product,
    Sum,
    Variable,
    evaluate,
    find_max_input_id,
    find_max_var_id,
    get_variables,
    max_input_id,
    remove_output,
    replace_input,
    replace_input2var,
    replace_input_expr,
    replace_var,
    replace_var_expr,
)


def cons(value):
    return Constant(value)


def var(index):
    return Variable(index)


def inp(index):
    return Input(index)


def eq(a, b):
    return Eq(a, b)


def add(*terms):
    return Sum(terms)


def prod(*factors):
    return Product(factors)


def two_by_two_dense():
    return [
        eq(var(0), add(prod(inp(0), cons(1)), prod(inp(1), cons(2)), cons(5))),
        eq(var(0), inp(2)),
        eq(var(1), add(prod(inp(0), cons(3)), prod(inp(1), cons(4)), cons(6))),
        eq(var(1), inp(3)),
    ]


def test_sum_accepts_list_and_tuple_equally():
    assert Sum([var(1), var(2)]) == Sum((var(1), var(2)))


def test_remove_output():
    assert remove_output(two_by_two_dense()) == [
        eq(var(0), add(prod(inp(0), cons(1)), prod(inp(1), cons(2)), cons(5))),
        eq(var(1), add(prod(inp(0), cons(3)), prod(inp(1), cons(4)), cons(6))),
    ]


@pytest.mark.parametrize(
    "old, expected",
    [
        (0, eq(var(3), add(var(1), var(2)))),
        (1, eq(var(0), add(var(3), var(2)))),
        (2, eq(var(0), add(var(1), var(3)))),
    ],
)
def test_replace_var(old, expected):
    expr = eq(var(0), add(var(1), var(2)))
    assert replace_var([expr], old, 3) == [expected]


def test_replace_var_expr_leaves_inputs_alone():
    expr = eq(var(0), prod(inp(0), var(0)))
    assert replace_var_expr(expr, 0, 7) == eq(var(7), prod(inp(0), var(7)))


def test_replace_input():
    expr = eq(var(0), add(prod(inp(1), cons(2)), inp(0)))
    assert replace_input_expr(expr, 1, 9) == eq(var(0), add(prod(inp(9), cons(2)), inp(0)))
    assert replace_input([expr, eq(var(1), inp(1))], 1, 4) == [
        eq(var(0), add(prod(inp(4), cons(2)), inp(0))),
        eq(var(1), inp(4)),
    ]


def test_replace_input2var():
    expr = eq(var(1), add(prod(inp(0), cons(1)), cons(1)))
    assert replace_input2var(expr, 0, 0) == eq(var(1), add(prod(var(0), cons(1)), cons(1)))


def test_get_variables_concatenated_layers():
    exprs = [
        eq(var(0), add(prod(inp(0), cons(1)), cons(1))),
        eq(var(1), add(prod(var(0), cons(1)), cons(1))),
        eq(var(1), inp(1)),
    ]
    assert get_variables(exprs, [1, 3]) == [2, 3]


def test_get_variables_dense():
    assert get_variables(two_by_two_dense(), [1, 1, 8, 13]) == [8, 13]


def test_evaluate_sum_and_product():
    expr = add(prod(inp(0), var(1)), cons(4))
    assert evaluate(expr, [3], [0, 5]) == 19
    assert evaluate(add(), [], []) == 0
    assert evaluate(prod(), [], []) == 1


def test_evaluate_equation_raises():
    with pytest.raises(ValueError):
        evaluate(eq(var(0), cons(1)), [], [0])


def test_find_max_var_id():
    assert find_max_var_id(two_by_two_dense()) == 1
    assert find_max_var_id([add(var(4), prod(var(9)))]) == 9
    assert find_max_var_id([]) == 0


def test_max_input_id_searches_deeply():
    exprs = [eq(var(0), add(prod(inp(0), cons(1)), prod(inp(7), cons(2))))]
    assert max_input_id(exprs) == 7
    assert find_max_input_id(exprs) == 0


def test_find_max_input_id():
    assert find_max_input_id(two_by_two_dense()) == 3
    assert find_max_input_id([add(inp(5), inp(2))]) == 5
    assert max_input_id([]) == 0