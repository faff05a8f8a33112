import pytest

from zkinfer import circuit
from zkinfer.circuit import AddGate, Constant, EqGate, Input, MultGate, Variable
from zkinfer.compose import flatten
from zkinfer.expression import find_max_var_id
from zkinfer.layers import Dense
from zkinfer.lowering import linear_to_exprs
from zkinfer.r1cs import into_r1cs


def test_eq_r1cs():
    r1cs, _ = into_r1cs([EqGate(0, Constant(1234))], 0, 1)
    assert r1cs.num_consts == 1
    assert r1cs.num_vars == 1
    assert r1cs.num_inputs == 0
    assert r1cs.is_sat([1234], []) is True


def test_eq_r1cs_wrong_value():
    r1cs, _ = into_r1cs([EqGate(0, Constant(1234))], 0, 1)
    assert r1cs.is_sat([1235], []) is False


def test_negative_constant():
    r1cs, _ = into_r1cs([EqGate(0, Constant(-5))], 0, 1)
    assert r1cs.is_sat([-5], []) is True
    assert r1cs.is_sat([5], []) is False


def test_add_r1cs():
    r1cs, _ = into_r1cs([AddGate(0, Constant(30), Input(0))], 1, 1)
    assert r1cs.num_consts == 1
    assert r1cs.is_sat([50], [20]) is True


def test_mult_r1cs():
    r1cs, _ = into_r1cs([MultGate(0, Constant(30), Input(0))], 1, 1)
    assert r1cs.num_consts == 1
    assert r1cs.is_sat([600], [20]) is True
    assert r1cs.is_sat([601], [20]) is False


def test_multi_r1cs():
    circuits = [
        MultGate(0, Constant(30), Input(0)),
        AddGate(1, Variable(0), Input(1)),
    ]
    r1cs, _ = into_r1cs(circuits, 2, 2)
    assert r1cs.num_consts == 2
    assert r1cs.is_sat([150, 156], [5, 6]) is True


def test_r1cs_with_output():
    circuits = [
        AddGate(0, Constant(30), Input(0)),
        EqGate(0, Input(1)),
    ]
    r1cs, _ = into_r1cs(circuits, 2, 1)
    assert r1cs.num_consts == 2
    assert r1cs.is_sat([50], [20, 50]) is True
    assert r1cs.is_sat([50], [20, 51]) is False


def test_multi_r1cs_with_output():
    circuits = [
        MultGate(0, Constant(30), Input(0)),
        AddGate(1, Variable(0), Input(1)),
        EqGate(0, Input(2)),
        EqGate(1, Input(3)),
    ]
    r1cs, _ = into_r1cs(circuits, 4, 2)
    assert r1cs.num_consts == 4
    assert r1cs.is_sat([150, 156], [5, 6, 150, 156]) is True


def test_r1cs():
    circuits = [
        AddGate(0, Input(0), Constant(1)),
        AddGate(1, Input(1), Constant(1)),
        MultGate(2, Variable(0), Variable(1)),
        EqGate(2, Input(2)),
    ]
    r1cs, _ = into_r1cs(circuits, 3, 3)
    assert r1cs.num_consts == 4
    assert r1cs.is_sat([2, 2, 4], [1, 1, 4]) is True


def test_dense_layer_r1cs():
    circuits = [
        MultGate(1, Input(0), Constant(1)),
        MultGate(2, Input(1), Constant(1)),
        AddGate(3, Variable(1), Variable(2)),
        AddGate(4, Variable(3), Constant(1)),
        EqGate(0, Variable(4)),
        EqGate(0, Input(2)),
    ]
    r1cs, non_zero = into_r1cs(circuits, 3, 5)
    assert r1cs.num_consts == 6
    assert non_zero == 8
    assert r1cs.is_sat([3, 1, 1, 2, 3], [1, 1, 3]) is True


def test_dense_layer_from_compiler():
    dense = Dense(weight=[[1, 1], [1, 1]], bias=[1, 1])
    inputs = [1, 1]
    exprs = linear_to_exprs(dense)
    counter = find_max_var_id(exprs) + 1
    circuits = []
    for expr in exprs:
        counter, gates = flatten(expr, counter)
        circuits.extend(gates)

    num_vars = circuit.num_vars(circuits)
    variables = circuit.get_variables(circuits, inputs)
    num_inputs = circuit.num_inputs(circuits)

    r1cs, _ = into_r1cs(circuits, num_inputs, num_vars)
    assert r1cs.is_sat(variables, inputs + [3, 3]) is True
    assert r1cs.is_sat(variables, inputs + [3, 4]) is False


def test_column_out_of_range():
    with pytest.raises(ValueError):
        into_r1cs([EqGate(0, Input(3))], 1, 1)


def test_wrong_assignment_length():
    r1cs, _ = into_r1cs([AddGate(0, Constant(30), Input(0))], 1, 1)
    with pytest.raises(ValueError):
        r1cs.is_sat([50, 1], [20])
    with pytest.raises(ValueError):
        r1cs.is_sat([50], [])