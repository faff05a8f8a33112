"""Compile integer neural networks into arithmetic circuits and R1CS for verifiable inference."""

__version__ = "0.1.0"

__all__ = [
    "bin_loader",
    "circuit",
    "compose",
    "expression",
    "layers",
    "lowering",
    "networks",
    "r1cs",
    "scalar",
]