# zkinfer

zkinfer turns small integer neural networks into arithmetic circuits and
then into rank-1 constraint systems (R1CS). It handles dense and
convolutional layers. The constraint systems work over the Curve25519
scalar field. With them you can check a claimed inference result against
the model's constraints.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Pipeline

1. **Layers** (`zkinfer.layers`)
   - `Dense` and `Conv` hold integer weights and biases, and their `forward`
     method computes plain outputs.
   - `Model` is the abstract interface, with `compute` and `circuits`.
2. **Expressions** (`zkinfer.expression`)
   - `Variable`, `Input`, `Constant`, `Eq`, `Sum` and `Product` describe
     constraints.
   - `get_variables` and `evaluate` compute values.
   - `remove_output`, `replace_var`, `replace_input` and `replace_input2var`
     rewrite expressions.
3. **Lowering** (`zkinfer.lowering`)
   - `linear_to_exprs` and `conv_to_exprs` turn a layer into expressions.
   - A layer's outputs are bound to extra inputs that follow its real
     inputs.
4. **Composition** (`zkinfer.compose`)
   - `concat_exprs` chains two layers, so the outputs of the first feed
     the second.
   - `multiple_layer` multiplies two layers over the same inputs element by
     element.
   - `flatten` lowers one expression to gates. `exprs_to_circuits` lowers a
     whole list.
5. **Circuits** (`zkinfer.circuit`)
   - `EqGate`, `AddGate` and `MultGate` are the gates.
   - `get_variables` computes the witness from the inputs.
   - `num_vars` and `num_inputs` give the size of a circuit.
6. **R1CS** (`zkinfer.r1cs`)
   - `into_r1cs` builds the constraint matrices.
   - `R1CS.is_sat` checks an assignment of variables and inputs.

## Example

```python
from zkinfer.layers import Dense
from zkinfer.lowering import linear_to_exprs
from zkinfer.compose import exprs_to_circuits
from zkinfer.circuit import get_variables, num_inputs, num_vars
from zkinfer.r1cs import into_r1cs

dense = Dense(weight=[[1, 1], [1, 1]], bias=[1, 1])
circuits = exprs_to_circuits(linear_to_exprs(dense))

inputs = [1, 1]
outputs = dense.forward(inputs)          # [3, 3]
witness = get_variables(circuits, inputs)

r1cs, _ = into_r1cs(circuits, num_inputs(circuits), num_vars(circuits))
assert r1cs.is_sat(witness, inputs + outputs)
```

## Models

`zkinfer.networks` provides two models that stack layers of one kind:

- `DenseModel` applies dense layers one after another.
- `ConvModel` applies convolution layers to a single-channel square image.
  It takes the image as a flat, row-major list.

Both implement `Model`. `compute` runs the network. `circuits` returns
the gates that check it.

## Field elements and storage

Weights and intermediate values are plain Python integers. In the
constraint system they are reduced modulo the Curve25519 group order.

- `zkinfer.scalar.from_i64` maps a signed integer to its field element.
- `zkinfer.scalar.to_bytes` gives the canonical 32-byte little-endian
  encoding.

`zkinfer.bin_loader.save_to_file` and `load_from_file` save objects such
as circuits to disk and read them back. They use `pickle`, so only load
files you trust.

## What the package does not do

- It does not read trained weights from files.
- It has no ready-made image-classification network. Models are built in
  code from `Dense` and `Conv` layers.
- It builds and checks constraint systems only. It does not produce or
  verify succinct proofs.
- There is no command-line program.