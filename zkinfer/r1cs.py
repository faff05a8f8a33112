"""Rank-1 constraint systems built from arithmetic circuits."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from zkinfer.circuit import AddGate, CircuitValue, Constant, EqGate, Gate, Input, MultGate, Variable
from zkinfer.scalar import ORDER, from_i64

Entry = tuple[int, int, int]

_ONE = 1


@dataclass(frozen=True)
class R1CS:
    """Constraints ``(A z) * (B z) = (C z)`` with ``z = (variables, 1, inputs)``.

    Matrix entries are ``(row, column, coefficient)`` with coefficients in the
    scalar field; entries sharing a position add up.
    """

    num_consts: int
    num_vars: int
    num_inputs: int
    a: tuple[Entry, ...]
    b: tuple[Entry, ...]
    c: tuple[Entry, ...]

    def _products(self, entries: Iterable[Entry], z: Sequence[int]) -> dict[int, int]:
        rows: defaultdict[int, int] = defaultdict(int)
        for row, col, coeff in entries:
            rows[row] = (rows[row] + coeff * z[col]) % ORDER
        return rows

    def is_sat(self, variables: Sequence[int], inputs: Sequence[int]) -> bool:
        """Whether the assignment satisfies every constraint (values taken mod the field order)."""
        if len(variables) != self.num_vars:
            raise ValueError(
                f"expected {self.num_vars} variables, got {len(variables)}"
            )
        if len(inputs) != self.num_inputs:
            raise ValueError(f"expected {self.num_inputs} inputs, got {len(inputs)}")
        z = [from_i64(v) for v in variables] + [_ONE] + [from_i64(v) for v in inputs]
        az = self._products(self.a, z)
        bz = self._products(self.b, z)
        cz = self._products(self.c, z)
        return all(
            (az.get(row, 0) * bz.get(row, 0) - cz.get(row, 0)) % ORDER == 0
            for row in range(self.num_consts)
        )


def _term(value: CircuitValue, num_vars: int) -> tuple[int, int]:
    """Column and coefficient of one operand."""
    if isinstance(value, Constant):
        return num_vars, from_i64(value.value)
    if isinstance(value, Variable):
        return value.index, _ONE
    if isinstance(value, Input):
        return num_vars + 1 + value.index, _ONE
    raise TypeError(f"not a circuit value: {value!r}")


def into_r1cs(circuits: Sequence[Gate], num_inputs: int, num_vars: int) -> tuple[R1CS, int]:
    """Build the constraint system of ``circuits``.

    Returns the system and the largest number of non-zero entries of its matrices.
    """
    a: list[Entry] = []
    b: list[Entry] = []
    c: list[Entry] = []
    constant_column = num_vars

    for row, gate in enumerate(circuits):
        if isinstance(gate, EqGate):
            a.append((row, *_term(gate.value, num_vars)))
            b.append((row, constant_column, _ONE))
        elif isinstance(gate, MultGate):
            a.append((row, *_term(gate.left, num_vars)))
            b.append((row, *_term(gate.right, num_vars)))
        elif isinstance(gate, AddGate):
            a.append((row, *_term(gate.left, num_vars)))
            a.append((row, *_term(gate.right, num_vars)))
            b.append((row, constant_column, _ONE))
        else:
            raise TypeError(f"not a gate: {gate!r}")
        c.append((row, gate.target, _ONE))

    num_columns = num_vars + 1 + num_inputs
    for _, col, _ in (*a, *b, *c):
        if not 0 <= col < num_columns:
            raise ValueError(f"column {col} is outside the {num_columns} columns of the system")

    r1cs = R1CS(
        num_consts=len(circuits),
        num_vars=num_vars,
        num_inputs=num_inputs,
        a=tuple(a),
        b=tuple(b),
        c=tuple(c),
    )
    return r1cs, max(len(a), len(b), len(c))