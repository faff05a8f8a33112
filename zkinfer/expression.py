"""Symbolic expressions over variables, public inputs and constants."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Variable:
    """Reference to an internal variable."""

    index: int


@dataclass(frozen=True)
class Constant:
    """A literal integer value."""

    value: int


@dataclass(frozen=True)
class Input:
    """Reference to a public input."""

    index: int


@dataclass(frozen=True)
class Eq:
    """Constraint ``lhs = rhs``."""

    lhs: Expression
    rhs: Expression


@dataclass(frozen=True)
class Sum:
    """Sum of the terms; an empty sum is 0."""

    terms: tuple[Expression, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "terms", tuple(self.terms))


@dataclass(frozen=True)
class Product:
    """Product of the factors; an empty product is 1."""

    factors: tuple[Expression, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "factors", tuple(self.factors))


Expression = Union[Variable, Constant, Input, Eq, Sum, Product]


def _children(expr: Sum | Product) -> tuple[Expression, ...]:
    return expr.terms if isinstance(expr, Sum) else expr.factors


def find_max_var_id(exprs: Iterable[Expression]) -> int:
    """Largest variable id at the top level, directly under an ``Eq`` or in sums and products."""

    def ids(expr: Expression) -> list[int]:
        if isinstance(expr, Variable):
            return [expr.index]
        if isinstance(expr, Eq):
            return [side.index for side in (expr.lhs, expr.rhs) if isinstance(side, Variable)]
        if isinstance(expr, (Sum, Product)):
            return [find_max_var_id(_children(expr))]
        return []

    return max((i for expr in exprs for i in ids(expr)), default=0)


def find_max_input_id(exprs: Iterable[Expression]) -> int:
    """Largest input id at the top level, directly under an ``Eq`` or in sums and products."""

    def ids(expr: Expression) -> list[int]:
        if isinstance(expr, Input):
            return [expr.index]
        if isinstance(expr, Eq):
            return [side.index for side in (expr.lhs, expr.rhs) if isinstance(side, Input)]
        if isinstance(expr, (Sum, Product)):
            return [find_max_input_id(_children(expr))]
        return []

    return max((i for expr in exprs for i in ids(expr)), default=0)


def _max_input_id_expr(expr: Expression) -> int:
    if isinstance(expr, Input):
        return expr.index
    if isinstance(expr, Eq):
        return max(_max_input_id_expr(expr.lhs), _max_input_id_expr(expr.rhs))
    if isinstance(expr, (Sum, Product)):
        return max_input_id(_children(expr))
    return 0


def max_input_id(exprs: Iterable[Expression]) -> int:
    """Largest input id anywhere in the expressions, 0 if there is none."""
    return max((_max_input_id_expr(expr) for expr in exprs), default=0)


def evaluate(expr: Expression, inputs: Sequence[int], variables: Sequence[int]) -> int:
    """Evaluate a value expression; an ``Eq`` has no value and raises ``ValueError``."""
    if isinstance(expr, Constant):
        return expr.value
    if isinstance(expr, Variable):
        return variables[expr.index]
    if isinstance(expr, Input):
        return inputs[expr.index]
    if isinstance(expr, Sum):
        return sum(evaluate(term, inputs, variables) for term in expr.terms)
    if isinstance(expr, Product):
        return math.prod(evaluate(factor, inputs, variables) for factor in expr.factors)
    raise ValueError("an equation cannot be evaluated to a value")


def get_variables(exprs: Sequence[Expression], inputs: Sequence[int]) -> list[int]:
    """Assign variables in order from every ``Eq(Variable, rhs)`` in ``exprs``."""
    variables = [0] * (find_max_var_id(exprs) + 1)
    for expr in exprs:
        if isinstance(expr, Eq) and isinstance(expr.lhs, Variable):
            variables[expr.lhs.index] = evaluate(expr.rhs, inputs, variables)
    return variables


def _is_output(expr: Expression) -> bool:
    return isinstance(expr, Eq) and isinstance(expr.lhs, Variable) and isinstance(expr.rhs, Input)


def remove_output(exprs: Iterable[Expression]) -> list[Expression]:
    """Drop the ``Eq(Variable, Input)`` constraints that bind outputs."""
    return [expr for expr in exprs if not _is_output(expr)]


def _map_leaves(expr: Expression, leaf: Callable[[Expression], Expression]) -> Expression:
    if isinstance(expr, Eq):
        return Eq(_map_leaves(expr.lhs, leaf), _map_leaves(expr.rhs, leaf))
    if isinstance(expr, Sum):
        return Sum(tuple(_map_leaves(term, leaf) for term in expr.terms))
    if isinstance(expr, Product):
        return Product(tuple(_map_leaves(factor, leaf) for factor in expr.factors))
    return leaf(expr)


def replace_var_expr(expr: Expression, old: int, new: int) -> Expression:
    """Rename variable ``old`` to ``new`` throughout ``expr``."""
    return _map_leaves(expr, lambda e: Variable(new) if e == Variable(old) else e)


def replace_input_expr(expr: Expression, old: int, new: int) -> Expression:
    """Renumber input ``old`` to ``new`` throughout ``expr``."""
    return _map_leaves(expr, lambda e: Input(new) if e == Input(old) else e)


def replace_input2var(expr: Expression, old: int, new: int) -> Expression:
    """Replace input ``old`` by variable ``new`` throughout ``expr``."""
    return _map_leaves(expr, lambda e: Variable(new) if e == Input(old) else e)


def replace_var(exprs: Iterable[Expression], old: int, new: int) -> list[Expression]:
    """Apply :func:`replace_var_expr` to every expression."""
    return [replace_var_expr(expr, old, new) for expr in exprs]


def replace_input(exprs: Iterable[Expression], old: int, new: int) -> list[Expression]:
    """Apply :func:`replace_input_expr` to every expression."""
    return [replace_input_expr(expr, old, new) for expr in exprs]