"""Arithmetic circuits: gates over variables, public inputs and constants."""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Variable:
    """Reference to an internal (witness) variable."""

    index: int


@dataclass(frozen=True)
class Input:
    """Reference to a public input."""

    index: int


@dataclass(frozen=True)
class Constant:
    """A literal integer value."""

    value: int


CircuitValue = Union[Variable, Input, Constant]


@dataclass(frozen=True)
class EqGate:
    """``target = value``."""

    target: int
    value: CircuitValue

    @property
    def operands(self) -> tuple[CircuitValue, ...]:
        return (self.value,)

    def apply(self, value: int) -> int:
        return value


@dataclass(frozen=True)
class AddGate:
    """``target = left + right``."""

    target: int
    left: CircuitValue
    right: CircuitValue

    @property
    def operands(self) -> tuple[CircuitValue, ...]:
        return (self.left, self.right)

    def apply(self, left: int, right: int) -> int:
        return left + right


@dataclass(frozen=True)
class MultGate:
    """``target = left * right``."""

    target: int
    left: CircuitValue
    right: CircuitValue

    @property
    def operands(self) -> tuple[CircuitValue, ...]:
        return (self.left, self.right)

    def apply(self, left: int, right: int) -> int:
        return left * right


Gate = Union[EqGate, AddGate, MultGate]


class VariableNotFoundError(LookupError):
    """Raised when no gate defines a requested variable."""

    def __init__(self, var_id: int) -> None:
        super().__init__(f"variable {var_id} not found")
        self.var_id = var_id


def _definitions(circuits: Iterable[Gate]) -> dict[int, Gate]:
    """Map each variable to the first gate that assigns it."""
    definitions: dict[int, Gate] = {}
    for gate in circuits:
        definitions.setdefault(gate.target, gate)
    return definitions


def _evaluate(
    definitions: Mapping[int, Gate],
    inputs: Sequence[int],
    var_id: int,
    known: MutableMapping[int, int],
) -> int:
    """Evaluate one variable without recursion, storing results in ``known``."""
    stack = [var_id]
    pending: set[int] = set()
    while stack:
        current = stack[-1]
        if current in known:
            stack.pop()
            continue
        gate = definitions.get(current)
        if gate is None:
            raise VariableNotFoundError(current)
        missing = [
            operand.index
            for operand in gate.operands
            if isinstance(operand, Variable) and operand.index not in known
        ]
        if missing:
            if current in pending:
                raise ValueError(f"circuit has a cycle through variable {current}")
            pending.add(current)
            stack.extend(missing)
            continue

        def resolve(operand: CircuitValue) -> int:
            if isinstance(operand, Variable):
                return known[operand.index]
            if isinstance(operand, Input):
                return inputs[operand.index]
            return operand.value

        known[current] = gate.apply(*(resolve(op) for op in gate.operands))
        pending.discard(current)
        stack.pop()
    return known[var_id]


def get_variable(
    circuits: Sequence[Gate],
    inputs: Sequence[int],
    var_id: int,
    cache: Mapping[int, int],
) -> int:
    """Compute the value of one variable; ``cache`` is consulted but not modified."""
    if var_id in cache:
        return cache[var_id]
    known: ChainMap[int, int] = ChainMap({}, dict(cache) if not isinstance(cache, dict) else cache)
    return _evaluate(_definitions(circuits), inputs, var_id, known)


def get_variables(circuits: Sequence[Gate], inputs: Sequence[int]) -> list[int]:
    """Compute the values of variables ``0 .. num_vars(circuits) - 1``."""
    definitions = _definitions(circuits)
    known: dict[int, int] = {}
    return [_evaluate(definitions, inputs, var_id, known) for var_id in range(num_vars(circuits))]


def _variable_ids(circuits: Iterable[Gate]) -> Iterable[int]:
    for gate in circuits:
        yield gate.target
        for operand in gate.operands:
            if isinstance(operand, Variable):
                yield operand.index


def max_var_id(circuits: Iterable[Gate]) -> int:
    """Largest variable id assigned or referenced, 0 for an empty circuit."""
    return max(_variable_ids(circuits), default=0)


def max_input_id(circuits: Iterable[Gate]) -> int:
    """Largest input id referenced, 0 if there is none."""
    return max(
        (
            operand.index
            for gate in circuits
            for operand in gate.operands
            if isinstance(operand, Input)
        ),
        default=0,
    )


def num_vars(circuits: Iterable[Gate]) -> int:
    """Number of distinct variables assigned or referenced."""
    return len(set(_variable_ids(circuits)))


def num_inputs(circuits: Iterable[Gate]) -> int:
    """One more than the largest input id, taking the first input operand of each gate."""
    first_inputs = (
        next((op.index for op in gate.operands if isinstance(op, Input)), None)
        for gate in circuits
    )
    largest = max((index for index in first_inputs if index is not None), default=None)
    return 0 if largest is None else largest + 1