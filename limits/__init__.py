"""Tensor contraction on NumPy arrays, co- and contravariant index bookkeeping and small symbolic calculus building blocks."""

__version__ = "0.1.0"

__all__ = [
    "contraction",
    "func",
    "index",
    "sym",
    "tensor_traits",
    "tensorspace",
    "util",
]