"""Integer neural-network layers and the model interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from zkinfer.circuit import Gate

Matrix = list[list[int]]


@dataclass
class Dense:
    """Fully connected layer: ``weight[out][in]`` and ``bias[out]``."""

    weight: list[list[int]]
    bias: list[int]

    def forward(self, inputs: Sequence[int]) -> list[int]:
        if len(self.bias) < len(self.weight):
            raise ValueError("bias is shorter than the number of weight rows")
        return [
            sum(w * x for w, x in zip(row, inputs)) + bias
            for row, bias in zip(self.weight, self.bias)
        ]


@dataclass
class Conv:
    """2-D convolution: ``weight[out][in][k][k]``, ``bias[out]``, square images."""

    stride: int
    weight: list[list[list[list[int]]]]
    bias: list[int]
    input_size: int

    def forward(self, inputs: Sequence[Sequence[Sequence[int]]]) -> list[Matrix]:
        """Convolve ``inputs[channel][row][column]``; returns the same layout."""
        input_size = len(inputs[0])
        kernel_size = len(self.weight[0][0])
        if kernel_size > input_size:
            raise ValueError("kernel is larger than the input image")
        if len(self.bias) < len(self.weight):
            raise ValueError("bias is shorter than the number of output channels")
        output_size = (input_size - kernel_size) // self.stride + 1
        starts = [i * self.stride for i in range(output_size)]

        def out_channel(kernels: list[Matrix], bias: int) -> Matrix:
            if len(inputs) > len(kernels):
                raise ValueError("more input channels than kernels")
            return [
                [
                    bias
                    + sum(
                        channel[y + ky][x + kx] * weight
                        for channel, kernel in zip(inputs, kernels)
                        for ky, kernel_row in enumerate(kernel)
                        for kx, weight in enumerate(kernel_row)
                    )
                    for x in starts
                ]
                for y in starts
            ]

        return [out_channel(kernels, bias) for kernels, bias in zip(self.weight, self.bias)]


class Model(ABC):
    """A computation that can be run directly and expressed as a circuit."""

    @abstractmethod
    def compute(self, inputs: Sequence[int]) -> list[int]:
        """Run the model on flat integer inputs."""

    @abstractmethod
    def circuits(self) -> list[Gate]:
        """Return the circuit that checks ``compute``."""