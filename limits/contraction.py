"""Contraction of numpy arrays over groups of axes, and arrays with dual shapes."""

from __future__ import annotations

import string
import sys
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np

from limits.tensor_traits import (
    AxisOutOfBoundsError,
    DualShapeMetaInfo,
    DualVariant,
    IrrepresentableError,
    TensorIdx,
    ax_disjunct_sets,
    ax_sets,
)
from limits.util import cycles

_LETTERS = string.ascii_letters


def _check_axis(axis: int, ndim: int) -> None:
    if not 0 <= axis < ndim:
        raise AxisOutOfBoundsError(axis)


def _letters(labels: Sequence[int]) -> str:
    if any(label >= len(_LETTERS) for label in labels):
        raise IrrepresentableError(
            f"more than {len(_LETTERS)} distinct axis labels are needed"
        )
    return "".join(_LETTERS[label] for label in labels)


def _einsum(operands: Sequence[np.ndarray], labels: Sequence[list], out: list) -> np.ndarray:
    spec = ",".join(_letters(ls) for ls in labels) + "->" + _letters(out)
    try:
        return np.asarray(np.einsum(spec, *operands))
    except ValueError as exc:
        raise IrrepresentableError(str(exc)) from exc


def _fill_free(labels_per_operand: Sequence[list], next_label: int) -> list:
    """Give every unlabelled axis a fresh label; those labels form the output."""
    out = []
    for labels in labels_per_operand:
        for pos, label in enumerate(labels):
            if label is None:
                labels[pos] = next_label
                out.append(next_label)
                next_label += 1
    return out


def _contract_groups(arr: Any, groups: Iterable[Iterable[int]]) -> np.ndarray:
    arr = np.asarray(arr)
    labels: list = [None] * arr.ndim
    next_label = 0
    for group in groups:
        for axis in group:
            _check_axis(axis, arr.ndim)
            labels[axis] = next_label
        next_label += 1
    out = _fill_free([labels], next_label)
    return _einsum([arr], [labels], out)


def contract_gen(arr: Any, ax_sets: Iterable[Iterable[int]]) -> np.ndarray:
    """Contract every set of axes of ``arr`` into a single summed index.

    Axes not named in any set are kept, in their original order.
    """
    return _contract_groups(arr, ax_sets)


def contract_gen_with(a: Any, b: Any, ax_pairs: Iterable[Iterable[Any]]) -> np.ndarray:
    """Contract sets of axes drawn from two arrays.

    Each set holds tagged axes whose ``idx`` is 0 for ``a`` and 1 for ``b``
    and whose ``value`` is the axis. Free axes of ``a`` come first, then
    those of ``b``.
    """
    arrays = [np.asarray(a), np.asarray(b)]
    labels: list[list] = [[None] * arr.ndim for arr in arrays]
    next_label = 0
    for group in ax_pairs:
        for elem in group:
            tensor, axis = elem.idx, elem.value
            if tensor not in (0, 1):
                raise ValueError(f"tensor position {tensor} is not 0 or 1")
            _check_axis(axis, arrays[tensor].ndim)
            labels[tensor][axis] = next_label
        next_label += 1
    out = _fill_free(labels, next_label)
    return _einsum(arrays, labels, out)


def contract(arr: Any, axes: Iterable[Sequence[int]]) -> np.ndarray:
    """Contract ``arr`` over pairs of its own axes."""
    return contract_gen(arr, ax_sets(axes))


def contract_axis(arr: Any, i: int, j: int) -> np.ndarray:
    """Contract ``arr`` over axes ``i`` and ``j``."""
    return contract(arr, [[i, j]])


def contract_with(a: Any, b: Any, axes: Iterable[Sequence[int]]) -> np.ndarray:
    """Contract ``a`` with ``b`` over ``[axis of a, axis of b]`` pairs."""
    return contract_gen_with(a, b, ax_disjunct_sets(axes))


def contract_axis_with(a: Any, b: Any, i: int, j: int) -> np.ndarray:
    """Contract axis ``i`` of ``a`` with axis ``j`` of ``b``."""
    return contract_with(a, b, [[i, j]])


def tensor_mul(a: Any, b: Any) -> np.ndarray:
    """The tensor (outer) product of ``a`` and ``b``."""
    return contract_with(a, b, [])


def contractions(t: Any, axes: Iterable[tuple[int, int]]) -> np.ndarray:
    """Contract ``t`` over axis pairs, joining pairs that share an axis."""
    return _contract_groups(t, cycles(axes))


def contractions_with(a: Any, b: Any, axes: Iterable[tuple[int, int]]) -> np.ndarray:
    """Tensor dot of ``a`` and ``b`` over ``(axis of a, axis of b)`` pairs."""
    a = np.asarray(a)
    b = np.asarray(b)
    lhs, rhs = [], []
    for i, j in axes:
        _check_axis(i, a.ndim)
        _check_axis(j, b.ndim)
        lhs.append(i)
        rhs.append(j)
    try:
        return np.asarray(np.tensordot(a, b, axes=(lhs, rhs)))
    except ValueError as exc:
        raise IrrepresentableError(str(exc)) from exc


def get(arr: Any, idxs: Iterable[TensorIdx]) -> np.ndarray:
    """Fix one position on each given axis in turn, dropping that axis.

    Every axis number refers to the array as left by the previous steps.
    """
    res = np.asarray(arr)
    for tidx in idxs:
        _check_axis(tidx.axis, res.ndim)
        size = res.shape[tidx.axis]
        if not 0 <= tidx.idx < size:
            raise IndexError(f"index {tidx.idx} out of range for axis of size {size}")
        res = np.take(res, tidx.idx, axis=tidx.axis)
    return np.asarray(res)


def levi_civita() -> np.ndarray:
    """The three-dimensional Levi-Civita symbol."""
    eps = np.zeros((3, 3, 3))
    for i, j, k in ((0, 1, 2), (1, 2, 0), (2, 0, 1)):
        eps[i, j, k] = 1.0
        eps[k, j, i] = -1.0
    return eps


class DualTensor:
    """An array whose axes are each marked contravariant or covariant."""

    def __init__(self, array: Any, info: DualShapeMetaInfo | Iterable[Any]) -> None:
        self.array = np.asarray(array)
        if not isinstance(info, DualShapeMetaInfo):
            info = DualShapeMetaInfo(list(info))
        if self.array.ndim != info.order():
            raise ValueError(
                f"array has {self.array.ndim} axes but shape info has {info.order()}"
            )
        self.info = info

    @classmethod
    def vector(cls, array: Any) -> DualTensor:
        return cls(array, [DualVariant.CONTRA])

    @classmethod
    def dual_vector(cls, array: Any) -> DualTensor:
        return cls(array, [DualVariant.CO])

    @classmethod
    def map_vecspace(cls, array: Any) -> DualTensor:
        return cls(array, [DualVariant.CONTRA, DualVariant.CO])

    @classmethod
    def map_dualspace(cls, array: Any) -> DualTensor:
        return cls(array, [DualVariant.CO, DualVariant.CONTRA])

    def order(self) -> int:
        return self.info.order()

    def rank(self) -> tuple[int, int]:
        return self.info.rank()

    def variant_at(self, i: int) -> DualVariant | None:
        return self.info.variant_at(i)

    def swap_axes(self, i: int, j: int) -> None:
        """Swap two axes in place."""
        self.info.swap_axes(i, j)
        self.array = np.swapaxes(self.array, i, j)

    def move_axis(self, src: int, dst: int) -> None:
        """Move one axis to a new position in place."""
        self.info.move_axis(src, dst)
        self.array = np.moveaxis(self.array, src, dst)

    def contract(self, axes: Iterable[Sequence[int]]) -> DualTensor:
        """Contract over pairs of axes; the contracted axes leave the shape."""
        axes = [tuple(pair) for pair in axes]
        array = contract(self.array, axes)
        info = self.info.without_axes(axis for pair in axes for axis in pair)
        return DualTensor(array, info)

    def contract_axis(self, i: int, j: int) -> DualTensor:
        return self.contract([[i, j]])

    def __repr__(self) -> str:
        return f"DualTensor({self.array!r}, {self.info.dual_shape!r})"


def main(argv: Sequence[str] | None = None) -> int:
    """Print a dot product and the Levi-Civita symbol."""
    eps = levi_civita()
    a = np.array([1.654, 0.456, -1.5464])
    b = np.array([-0.4564, 0.5464, 1.87978])
    c_0 = a.dot(b)
    c = c_0
    sys.stdout.write(f"{a} * {b} = {c} [{c_0}]\n")
    sys.stdout.write(f"Eps: {eps}\n")
    return 0