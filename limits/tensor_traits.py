"""Dual shapes of tensors: index variants, shape metadata and contraction errors."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from limits.util import DisjunctSets, move_vec_elems, tuple_elems


class DualVariant(Enum):
    """Whether a tensor axis is contravariant (raised) or covariant (lowered)."""

    CONTRA = "contra"
    CO = "co"

    @property
    def dual(self) -> DualVariant:
        return DualVariant.CO if self is DualVariant.CONTRA else DualVariant.CONTRA


class ContractError(Exception):
    """A contraction could not be carried out."""


class AxisOutOfBoundsError(ContractError, IndexError):
    """An axis named in a contraction does not exist."""

    def __init__(self, axis: int) -> None:
        super().__init__(f"axis {axis} is out of bounds")
        self.axis = axis


class IncompatibleAxesError(ContractError, ValueError):
    """Two axes cannot be contracted with each other."""

    def __init__(self, i: int, j: int) -> None:
        super().__init__(f"axes {i} and {j} cannot be contracted")
        self.i = i
        self.j = j


class IrrepresentableError(ContractError):
    """The contraction cannot be expressed by the backend."""

    def __init__(self, message: str = "contraction cannot be represented") -> None:
        super().__init__(message)


@dataclass(frozen=True, order=True)
class TensorIdx:
    """A position ``idx`` along tensor axis ``axis``."""

    axis: int
    idx: Any = 0


@dataclass
class DualShapeMetaInfo:
    """The variant of every axis of a tensor, in axis order."""

    dual_shape: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.dual_shape = [DualVariant(v) for v in self.dual_shape]

    @property
    def contravariants(self) -> int:
        return sum(1 for v in self.dual_shape if v is DualVariant.CONTRA)

    @property
    def covariants(self) -> int:
        return sum(1 for v in self.dual_shape if v is DualVariant.CO)

    def order(self) -> int:
        return len(self.dual_shape)

    def rank(self) -> tuple[int, int]:
        """``(contravariant, covariant)`` axis counts."""
        return self.contravariants, self.covariants

    def variant_at(self, i: int) -> DualVariant | None:
        if 0 <= i < len(self.dual_shape):
            return self.dual_shape[i]
        return None

    def _check_axis(self, i: int) -> None:
        if not 0 <= i < len(self.dual_shape):
            raise IndexError(f"axis {i} out of range for order {len(self.dual_shape)}")

    def remove_axis(self, index: int) -> None:
        """Drop one axis in place."""
        self._check_axis(index)
        del self.dual_shape[index]

    def without_axes(self, axes: Iterable[int]) -> DualShapeMetaInfo:
        """A copy with the given axes removed; repeated axes count once."""
        skip = set(axes)
        for axis in skip:
            self._check_axis(axis)
        return DualShapeMetaInfo(
            [v for pos, v in enumerate(self.dual_shape) if pos not in skip]
        )

    def swap_axes(self, i: int, j: int) -> None:
        self._check_axis(i)
        self._check_axis(j)
        shape = self.dual_shape
        shape[i], shape[j] = shape[j], shape[i]

    def move_axis(self, src: int, dst: int) -> None:
        move_vec_elems(self.dual_shape, src, dst)


def _pairs(axes: Iterable[Sequence[int]]) -> list[tuple[int, int]]:
    result = []
    for pair in axes:
        pair = tuple(pair)
        if len(pair) != 2:
            raise ValueError(f"expected a pair of axes, got {pair!r}")
        result.append(pair)
    return result


def ax_sets(axes: Iterable[Sequence[int]]) -> DisjunctSets:
    """Group axis pairs of one tensor into sets of axes contracted together."""
    return DisjunctSets(set(pair) for pair in _pairs(axes))


def ax_disjunct_sets(axes: Iterable[Sequence[int]]) -> DisjunctSets:
    """Group ``[axis of first tensor, axis of second tensor]`` pairs into sets.

    Every axis is tagged with the tensor it belongs to (0 or 1).
    """
    return DisjunctSets(set(tuple_elems(pair, 2)) for pair in _pairs(axes))