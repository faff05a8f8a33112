"""Plain stacks of dense or convolution layers usable as verifiable models."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from zkinfer.circuit import Gate
from zkinfer.compose import concat_exprs, exprs_to_circuits
from zkinfer.expression import Expression
from zkinfer.layers import Conv, Dense, Matrix, Model
from zkinfer.lowering import conv_to_exprs, linear_to_exprs


@dataclass
class DenseModel(Model):
    """Dense layers applied one after another."""

    layers: list[Dense] = field(default_factory=list)

    def compute(self, inputs: Sequence[int]) -> list[int]:
        output = list(inputs)
        for layer in self.layers:
            output = layer.forward(output)
        return output

    def circuits(self) -> list[Gate]:
        exprs: list[Expression] = []
        for layer in self.layers:
            exprs = concat_exprs(exprs, linear_to_exprs(layer))
        return exprs_to_circuits(exprs)


@dataclass
class ConvModel(Model):
    """Convolution layers applied one after another to a single-channel square image."""

    layers: list[Conv]
    input_size: int

    def compute(self, inputs: Sequence[int]) -> list[int]:
        """Run on a flat row-major image; returns the flattened final channels."""
        if self.input_size <= 0:
            raise ValueError("input size must be positive")
        image: Matrix = [
            list(inputs[start : start + self.input_size])
            for start in range(0, len(inputs), self.input_size)
        ]
        output: list[Matrix] = [image]
        for layer in self.layers:
            output = layer.forward(output)
        return [value for channel in output for row in channel for value in row]

    def circuits(self) -> list[Gate]:
        exprs: list[Expression] = []
        for layer in self.layers:
            exprs = concat_exprs(exprs, conv_to_exprs(layer))
        return exprs_to_circuits(exprs)