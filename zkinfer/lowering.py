"""Lowering of integer layers into symbolic constraint expressions."""

from __future__ import annotations

from zkinfer.expression import Constant, Eq, Expression, Input, Product, Sum, Variable
from zkinfer.layers import Conv, Dense


def linear_to_exprs(model: Dense) -> list[Expression]:
    """Express a dense layer as constraints.

    Inputs ``0 .. n-1`` are the layer inputs; output ``i`` is variable ``i``,
    which is also bound to input ``n + i``.
    """
    input_len = len(model.weight[0])
    exprs: list[Expression] = []
    for i, (row, bias) in enumerate(zip(model.weight, model.bias)):
        terms = tuple(Product((Input(j), Constant(w))) for j, w in enumerate(row))
        output = Variable(i)
        exprs.append(Eq(output, Sum(terms + (Constant(bias),))))
        exprs.append(Eq(output, Input(input_len + i)))
    return exprs


def gen_conv_input(start: int, kernel_size: int, image_size: int) -> list[list[int]]:
    """Flat input indices covered by a kernel whose top-left corner is ``start``."""
    return [
        [start + row * image_size + col for col in range(kernel_size)]
        for row in range(kernel_size)
    ]


def conv_to_exprs(model: Conv) -> list[Expression]:
    """Express a convolution layer as constraints.

    The input image channels come first as inputs; the outputs are numbered as
    variables channel by channel in row-major order and then bound to the
    inputs that follow the image.
    """
    input_channel_size = len(model.weight[0])
    kernel_size = len(model.weight[0][0])
    input_size = model.input_size
    if kernel_size > input_size:
        raise ValueError("kernel is larger than the input image")
    output_size = (input_size - kernel_size) // model.stride + 1
    starts = [k * model.stride for k in range(output_size)]

    exprs: list[Expression] = []
    var_counter = 0
    for out_channel, bias in zip(model.weight, model.bias):
        for row in starts:
            for col in starts:
                terms: list[Expression] = []
                for channel_idx, kernel in enumerate(out_channel):
                    indices = gen_conv_input(
                        channel_idx * input_size * input_size + row * input_size + col,
                        kernel_size,
                        input_size,
                    )
                    terms.extend(
                        Product((Input(index), Constant(weight)))
                        for kernel_row, index_row in zip(kernel, indices)
                        for weight, index in zip(kernel_row, index_row)
                    )
                terms.append(Constant(bias))
                exprs.append(Eq(Variable(var_counter), Sum(tuple(terms))))
                var_counter += 1

    first_output = input_size**2 * input_channel_size
    exprs.extend(Eq(Variable(j), Input(first_output + j)) for j in range(var_counter))
    return exprs