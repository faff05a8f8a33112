"""Combining layer constraints and flattening them into arithmetic circuits."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from zkinfer.circuit import AddGate, CircuitValue, EqGate, Gate, MultGate
from zkinfer.circuit import Constant as CConstant
from zkinfer.circuit import Input as CInput
from zkinfer.circuit import Variable as CVariable
from zkinfer.expression import (
    Constant,
    Eq,
    Expression,
    Input,
    Product,
    Sum,
    Variable,
    find_max_var_id,
    max_input_id,
    remove_output,
    replace_input,
)

_Flattened = tuple[CircuitValue, int, list[Gate]]


def _flatten(expr: Expression, counter: int) -> _Flattened:
    if isinstance(expr, Constant):
        return CConstant(expr.value), counter, []
    if isinstance(expr, Variable):
        return CVariable(expr.index), counter, []
    if isinstance(expr, Input):
        return CInput(expr.index), counter, []
    if isinstance(expr, Eq):
        lhs_val, counter, circuits = _flatten(expr.lhs, counter)
        rhs_val, counter, rhs_circuits = _flatten(expr.rhs, counter)
        circuits.extend(rhs_circuits)
        if isinstance(lhs_val, CVariable):
            lhs_var = lhs_val.index
        else:
            lhs_var = counter
            counter += 1
            circuits.append(EqGate(lhs_var, lhs_val))
        circuits.append(EqGate(lhs_var, rhs_val))
        return lhs_val, counter, circuits
    if isinstance(expr, Sum):
        return _fold(expr.terms, counter, AddGate, "sum")
    if isinstance(expr, Product):
        return _fold(expr.factors, counter, MultGate, "product")
    raise TypeError(f"not an expression: {expr!r}")


def _fold(
    children: Sequence[Expression],
    counter: int,
    gate: Callable[[int, CircuitValue, CircuitValue], Gate],
    kind: str,
) -> _Flattened:
    accumulated: CircuitValue | None = None
    circuits: list[Gate] = []
    for child in children:
        value, counter, new_circuits = _flatten(child, counter)
        circuits.extend(new_circuits)
        if accumulated is None:
            accumulated = value
        else:
            circuits.append(gate(counter, accumulated, value))
            accumulated = CVariable(counter)
            counter += 1
    if accumulated is None:
        raise ValueError(f"cannot flatten an empty {kind}")
    return accumulated, counter, circuits


def flatten(expression: Expression, variable_counter: int) -> tuple[int, list[Gate]]:
    """Lower one expression into gates, allocating temporaries from ``variable_counter``.

    Returns the next free variable id and the gates.
    """
    _, next_counter, circuits = _flatten(expression, variable_counter)
    return next_counter, circuits


def _rewrite(expr: Expression, leaf: Callable[[Expression], Expression]) -> Expression:
    if isinstance(expr, Eq):
        return Eq(_rewrite(expr.lhs, leaf), _rewrite(expr.rhs, leaf))
    if isinstance(expr, Sum):
        return Sum(tuple(_rewrite(term, leaf) for term in expr.terms))
    if isinstance(expr, Product):
        return Product(tuple(_rewrite(factor, leaf) for factor in expr.factors))
    return leaf(expr)


def _shift_variables(exprs: Iterable[Expression], max_id: int) -> list[Expression]:
    """Renumber variables ``0 .. max_id`` to ``max_id + 1 .. 2 * max_id + 1``."""
    offset = max_id + 1

    def leaf(expr: Expression) -> Expression:
        if isinstance(expr, Variable) and expr.index <= max_id:
            return Variable(expr.index + offset)
        return expr

    return [_rewrite(expr, leaf) for expr in exprs]


def _output_inputs(exprs: Iterable[Expression]) -> list[Input]:
    """The inputs bound to outputs by ``Eq(Variable, Input)`` constraints, in order."""
    return [
        expr.rhs
        for expr in exprs
        if isinstance(expr, Eq) and isinstance(expr.lhs, Variable) and isinstance(expr.rhs, Input)
    ]


def concat_exprs(first: Sequence[Expression], second: Sequence[Expression]) -> list[Expression]:
    """Feed the outputs of ``first`` into the inputs of ``second``.

    The outputs of ``first`` stop being bound to inputs; the leading inputs of
    ``second`` become the last output variables of ``first``; the variables of
    ``second`` are renumbered after those of ``first``; the output inputs of
    ``second`` are shifted to follow the inputs of ``first``.
    """
    if not first:
        return list(second)

    first_outputs = _output_inputs(first)
    second_outputs = [inp.index for inp in _output_inputs(second)]

    second_body = remove_output(second)
    max_id = find_max_var_id(first)
    first_body = remove_output(first)

    combined = _shift_variables(second, max_id)

    start = max_id - len(first_outputs) + 1
    if start < 0:
        raise ValueError("first layer has more outputs than variables")
    replacements = {source: Variable(target) for source, target in enumerate(range(start, max_id + 1))}

    def input_to_variable(expr: Expression) -> Expression:
        if isinstance(expr, Input) and expr.index in replacements:
            return replacements[expr.index]
        return expr

    combined = [_rewrite(expr, input_to_variable) for expr in combined]

    diff = max_input_id(first_body) - max_input_id(second_body)
    if diff < 0:
        raise ValueError("second layer uses more inputs than the first")
    for index in second_outputs:
        combined = replace_input(combined, index, index + diff)

    return first_body + combined


def multiple_layer(first: Sequence[Expression], second: Sequence[Expression]) -> list[Expression]:
    """Multiply two layers over the same inputs element-wise.

    The outputs of ``first`` are bound to the element-wise products of both
    layers' outputs.
    """
    outputs = _output_inputs(first)
    max_id = find_max_var_id(first)
    offset = max_id + 1

    exprs = remove_output(first)
    exprs.extend(_shift_variables(remove_output(second), max_id))
    exprs.extend(
        Eq(Variable(i + 2 * offset), Product((Variable(i), Variable(i + offset))))
        for i in range(len(outputs))
    )
    exprs.extend(Eq(Variable(i + 2 * offset), output) for i, output in enumerate(outputs))
    return exprs


def exprs_to_circuits(exprs: Sequence[Expression]) -> list[Gate]:
    """Flatten every expression, allocating temporaries after the largest variable."""
    counter = find_max_var_id(exprs) + 1
    circuits: list[Gate] = []
    for expr in exprs:
        counter, gates = flatten(expr, counter)
        circuits.extend(gates)
    return circuits