"""Tensor algebras over arrays, with metrics that raise and lower indices."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from limits import contraction as _ops
from limits.tensor_traits import (
    AxisOutOfBoundsError,
    DualVariant,
    IncompatibleAxesError,
    TensorIdx,
)
from limits.util import move_vec_elems


class TensorAlgebra(ABC):
    """Operations on the tensors of one tensor algebra."""

    def swap_indices(self, idx: Sequence[Any], i: int, j: int) -> list:
        """A copy of an index list with positions ``i`` and ``j`` swapped."""
        items = list(idx)
        items[i], items[j] = items[j], items[i]
        return items

    def move_index(self, idx: Sequence[Any], src: int, dst: int) -> list:
        """A copy of an index list with the entry at ``src`` moved to ``dst``."""
        items = list(idx)
        move_vec_elems(items, src, dst)
        return items

    def swap_shape_indices(self, shape: Sequence[Any], i: int, j: int) -> list:
        return self.swap_indices(shape, i, j)

    def move_shape_index(self, shape: Sequence[Any], src: int, dst: int) -> list:
        return self.move_index(shape, src, dst)

    @abstractmethod
    def shape_variant(self, shape: Sequence[Any], i: int) -> DualVariant | None:
        """The variant of axis ``i`` of a shape, or None past its end."""

    @abstractmethod
    def mul(self, a: Any, b: Any) -> Any:
        """The tensor product of ``a`` and ``b``."""

    @abstractmethod
    def rank(self, t: Any) -> tuple[int, int]:
        """``(contravariant, covariant)`` axis counts of ``t``."""

    def order(self, t: Any) -> int:
        contra, co = self.rank(t)
        return contra + co

    @abstractmethod
    def swap_tensor_shape(self, t: Any, i: int, j: int) -> Any:
        """``t`` with axes ``i`` and ``j`` swapped."""

    @abstractmethod
    def move_tensor_shape(self, t: Any, src: int, dst: int) -> Any:
        """``t`` with axis ``src`` moved to position ``dst``."""

    @abstractmethod
    def get(self, t: Any, idx: Any) -> Any:
        """The sub-tensor of ``t`` at the given index."""

    @abstractmethod
    def get_shape(self, t: Any) -> Any:
        """The shape of ``t``."""

    @abstractmethod
    def get_index_variant(self, t: Any, i: int) -> DualVariant | None:
        """The variant of axis ``i`` of ``t``, or None if there is no such axis."""

    @abstractmethod
    def contractions(self, t: Any, idxs: Iterable[tuple[int, int]]) -> Any:
        """Contract ``t`` over pairs of its own axes."""

    def contraction(self, t: Any, i: int, j: int) -> Any:
        return self.contractions(t, [(i, j)])

    def contractions_with(self, a: Any, b: Any, idxs: Iterable[tuple[int, int]]) -> Any:
        """Contract ``a`` with ``b`` over ``(axis of a, axis of b)`` pairs."""
        a_len = self.order(a)
        shifted = [(i, a_len + j) for i, j in idxs]
        return self.contractions(self.mul(a, b), shifted)

    def contraction_with(self, a: Any, b: Any, i: int, j: int) -> Any:
        a_len = self.order(a)
        return self.contraction(self.mul(a, b), i, j + a_len)


class NDArrayAlgebra(TensorAlgebra):
    """Plain numpy arrays, every axis taken as contravariant."""

    def shape_variant(self, shape: Sequence[Any], i: int) -> DualVariant | None:
        return DualVariant.CONTRA if 0 <= i < len(shape) else None

    def mul(self, a: Any, b: Any) -> np.ndarray:
        return _ops.contractions_with(a, b, [])

    def rank(self, t: Any) -> tuple[int, int]:
        return self.order(t), 0

    def order(self, t: Any) -> int:
        return np.asarray(t).ndim

    def swap_tensor_shape(self, t: Any, i: int, j: int) -> np.ndarray:
        arr = np.asarray(t)
        for axis in (i, j):
            if not 0 <= axis < arr.ndim:
                raise AxisOutOfBoundsError(axis)
        return np.swapaxes(arr, i, j)

    def move_tensor_shape(self, t: Any, src: int, dst: int) -> np.ndarray:
        arr = np.asarray(t)
        for axis in (src, dst):
            if not 0 <= axis < arr.ndim:
                raise AxisOutOfBoundsError(axis)
        return np.moveaxis(arr, src, dst)

    def get(self, t: Any, idx: Iterable[Any]) -> np.ndarray:
        """Fix positions along axes, given as TensorIdx or ``(axis, position)``."""
        steps = [i if isinstance(i, TensorIdx) else TensorIdx(*i) for i in idx]
        return _ops.get(t, steps)

    def get_shape(self, t: Any) -> tuple[int, ...]:
        return tuple(np.asarray(t).shape)

    def get_index_variant(self, t: Any, i: int) -> DualVariant | None:
        return DualVariant.CONTRA if 0 <= i < self.order(t) else None

    def contractions(self, t: Any, idxs: Iterable[tuple[int, int]]) -> np.ndarray:
        return _ops.contractions(t, idxs)

    def contractions_with(self, a: Any, b: Any, idxs: Iterable[tuple[int, int]]) -> np.ndarray:
        return _ops.contractions_with(a, b, idxs)

    def contraction_with(self, a: Any, b: Any, i: int, j: int) -> np.ndarray:
        return _ops.contractions_with(a, b, [(i, j)])


@dataclass(frozen=True)
class FinTensor:
    """A tensor over finite-dimensional spaces stored as flat row-major elements.

    ``shape`` holds one ``(dimension, variant)`` entry per axis.
    """

    shape: tuple = ()
    elems: tuple = (0.0,)

    def __post_init__(self) -> None:
        shape = tuple((int(size), DualVariant(variant)) for size, variant in self.shape)
        elems = tuple(float(x) for x in self.elems)
        expected = math.prod(size for size, _ in shape)
        if len(elems) != expected:
            raise ValueError(f"shape needs {expected} elements, got {len(elems)}")
        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "elems", elems)

    @property
    def sizes(self) -> tuple[int, ...]:
        return tuple(size for size, _ in self.shape)

    @property
    def variants(self) -> tuple[DualVariant, ...]:
        return tuple(variant for _, variant in self.shape)

    def to_array(self) -> np.ndarray:
        return np.array(self.elems, dtype=float).reshape(self.sizes)

    @classmethod
    def from_array(cls, array: Any, variants: Iterable[Any]) -> FinTensor:
        arr = np.asarray(array, dtype=float)
        variants = list(variants)
        if len(variants) != arr.ndim:
            raise ValueError(f"array has {arr.ndim} axes but {len(variants)} variants given")
        return cls(tuple(zip(arr.shape, variants)), tuple(arr.ravel()))


class FinVSpace(TensorAlgebra):
    """Tensors over finite-dimensional real vector spaces."""

    def shape_variant(self, shape: Sequence[tuple[int, Any]], i: int) -> DualVariant | None:
        if 0 <= i < len(shape):
            return DualVariant(shape[i][1])
        return None

    def _check_axis(self, t: FinTensor, axis: int) -> None:
        if not 0 <= axis < len(t.shape):
            raise AxisOutOfBoundsError(axis)

    def mul(self, a: FinTensor, b: FinTensor) -> FinTensor:
        elems = tuple(x * y for x in a.elems for y in b.elems)
        return FinTensor(a.shape + b.shape, elems)

    def rank(self, t: FinTensor) -> tuple[int, int]:
        contra = sum(1 for v in t.variants if v is DualVariant.CONTRA)
        return contra, len(t.shape) - contra

    def swap_tensor_shape(self, t: FinTensor, i: int, j: int) -> FinTensor:
        self._check_axis(t, i)
        self._check_axis(t, j)
        shape = self.swap_shape_indices(t.shape, i, j)
        arr = np.swapaxes(t.to_array(), i, j)
        return FinTensor(tuple(shape), tuple(arr.ravel()))

    def move_tensor_shape(self, t: FinTensor, src: int, dst: int) -> FinTensor:
        self._check_axis(t, src)
        self._check_axis(t, dst)
        shape = self.move_shape_index(t.shape, src, dst)
        arr = np.moveaxis(t.to_array(), src, dst)
        return FinTensor(tuple(shape), tuple(arr.ravel()))

    def get(self, t: FinTensor, idx: Sequence[int]) -> FinTensor:
        """The sub-tensor with the leading axes fixed at the given positions."""
        idx = list(idx)
        if len(idx) > len(t.shape):
            raise IndexError(f"{len(idx)} positions given for order {len(t.shape)}")
        for pos, (size, _) in zip(idx, t.shape):
            if not 0 <= pos < size:
                raise IndexError(f"position {pos} out of range for dimension {size}")
        sub = np.asarray(t.to_array()[tuple(idx)])
        return FinTensor(t.shape[len(idx):], tuple(sub.ravel()))

    def get_shape(self, t: FinTensor) -> tuple:
        return t.shape

    def get_index_variant(self, t: FinTensor, i: int) -> DualVariant | None:
        return self.shape_variant(t.shape, i)

    def contractions(self, t: FinTensor, idxs: Iterable[tuple[int, int]]) -> FinTensor:
        pairs = [tuple(pair) for pair in idxs]
        contracted = set()
        for i, j in pairs:
            self._check_axis(t, i)
            self._check_axis(t, j)
            if t.shape[i][0] != t.shape[j][0]:
                raise IncompatibleAxesError(i, j)
            contracted.update((i, j))
        arr = _ops.contractions(t.to_array(), pairs)
        shape = tuple(entry for pos, entry in enumerate(t.shape) if pos not in contracted)
        return FinTensor(shape, tuple(np.asarray(arr).ravel()))


class TensorMetric:
    """A metric (a (0, 2) tensor) with its inverse (a (2, 0) tensor)."""

    def __init__(self, space: TensorAlgebra, metric: Any, inverse: Any) -> None:
        self.space = space
        self.metric = metric
        self.inverse = inverse

    def _variant(self, t: Any, i: int) -> DualVariant:
        variant = self.space.get_index_variant(t, i)
        if variant is None:
            raise IndexError(f"tensor has no index {i}")
        return variant

    def _apply(self, g: Any, t: Any, i: int) -> Any:
        g_t = self.space.contraction_with(g, t, 0, i)
        return self.space.move_tensor_shape(g_t, 0, i)

    def raise_(self, t: Any, i: int) -> Any:
        """Make index ``i`` contravariant."""
        if self._variant(t, i) is DualVariant.CONTRA:
            return t
        return self._apply(self.inverse, t, i)

    def lower(self, t: Any, i: int) -> Any:
        """Make index ``i`` covariant."""
        if self._variant(t, i) is DualVariant.CO:
            return t
        return self._apply(self.metric, t, i)

    def flip(self, t: Any, i: int) -> Any:
        """Apply the metric or its inverse to index ``i``, by its variant."""
        if self._variant(t, i) is DualVariant.CONTRA:
            g = self.metric
        else:
            g = self.inverse
        return self._apply(g, t, i)

    def inv_tensor_transf(self, t: Any, i: int, j: int) -> Any:
        t = self.space.swap_tensor_shape(t, i, j)
        return self.flip(self.flip(t, i), j)

    def inv_tensor2(self, t: Any) -> Any:
        return self.inv_tensor_transf(t, 0, 1)