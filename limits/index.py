"""Tensor index representations with raised and lowered positions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from limits.tensor_traits import DualVariant


class ContractionError(Exception):
    """A contraction of two tensor indices was refused."""

    class Kind(Enum):
        CONTRACTING_TWO_CONTRAVARIANTS = "contracting two contravariant indices"
        CONTRACTING_TWO_COVARIANTS = "contracting two covariant indices"
        INCOMPATIBLE_INDEX_TYPES = "incompatible index types"
        DENIED_CONTRACTION = "contraction denied"
        OUT_OF_BOUNDS = "index out of bounds"

    def __init__(self, kind: ContractionError.Kind) -> None:
        super().__init__(kind.value)
        self.kind = kind


def _to_covariant(value: Any) -> Any:
    hook = getattr(value, "to_covariant_index", None)
    return hook() if callable(hook) else value


def _to_contravariant(value: Any) -> Any:
    hook = getattr(value, "to_contravariant_index", None)
    return hook() if callable(hook) else value


@dataclass(frozen=True)
class ValuedIndex:
    """One index value together with whether it is raised or lowered.

    Values that are not self-dual may define ``to_covariant_index`` and
    ``to_contravariant_index``; otherwise the value is kept as it is.
    """

    value: Any = None
    variant: DualVariant = DualVariant.CONTRA

    def lower(self) -> ValuedIndex:
        if self.variant is DualVariant.CONTRA:
            return ValuedIndex(_to_covariant(self.value), DualVariant.CO)
        return self

    def raise_(self) -> ValuedIndex:
        if self.variant is DualVariant.CO:
            return ValuedIndex(_to_contravariant(self.value), DualVariant.CONTRA)
        return self

    def flip(self) -> ValuedIndex:
        if self.variant is DualVariant.CONTRA:
            return self.lower()
        return self.raise_()

    def rank(self) -> tuple[int, int]:
        return (1, 0) if self.variant is DualVariant.CONTRA else (0, 1)

    def order(self) -> int:
        return 1


@dataclass(frozen=True)
class TensorIndex:
    """The indices of one tensor, in axis order."""

    indices: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "indices", tuple(self.indices))

    def _replace(self, i: int, new: ValuedIndex) -> TensorIndex:
        if not 0 <= i < len(self.indices):
            raise IndexError(f"index {i} out of range for order {len(self.indices)}")
        items = list(self.indices)
        items[i] = new
        return TensorIndex(items)

    def lower(self, i: int) -> TensorIndex:
        if not 0 <= i < len(self.indices):
            raise IndexError(f"index {i} out of range for order {len(self.indices)}")
        return self._replace(i, self.indices[i].lower())

    def raise_(self, i: int) -> TensorIndex:
        if not 0 <= i < len(self.indices):
            raise IndexError(f"index {i} out of range for order {len(self.indices)}")
        return self._replace(i, self.indices[i].raise_())

    def rank(self) -> tuple[int, int]:
        contra = sum(1 for idx in self.indices if idx.variant is DualVariant.CONTRA)
        return contra, len(self.indices) - contra

    def order(self) -> int:
        return len(self.indices)

    def contravariant_rank(self) -> int:
        return self.rank()[0]

    def covariant_rank(self) -> int:
        return self.rank()[1]


IndexPart = Union[ValuedIndex, TensorIndex, "CompositeIndex"]


@dataclass(frozen=True)
class CompositeIndex:
    """Several index representations laid end to end."""

    parts: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple(self.parts))
        if not self.parts:
            raise ValueError("a composite index needs at least one part")

    def _locate(self, i: int) -> tuple[int, int]:
        if i < 0:
            raise IndexError(f"index {i} out of range")
        offset = 0
        for k, part in enumerate(self.parts[:-1]):
            size = part.order()
            if i < offset + size:
                return k, i - offset
            offset += size
        return len(self.parts) - 1, i - offset

    def _apply(self, i: int, lower: bool) -> CompositeIndex:
        k, local = self._locate(i)
        part = self.parts[k]
        if isinstance(part, ValuedIndex):
            if local != 0:
                raise IndexError(f"index {i} out of range for order {self.order()}")
            new = part.lower() if lower else part.raise_()
        else:
            new = part.lower(local) if lower else part.raise_(local)
        parts = list(self.parts)
        parts[k] = new
        return CompositeIndex(parts)

    def lower(self, i: int) -> CompositeIndex:
        return self._apply(i, lower=True)

    def raise_(self, i: int) -> CompositeIndex:
        return self._apply(i, lower=False)

    def rank(self) -> tuple[int, int]:
        ranks = [part.rank() for part in self.parts]
        return sum(r[0] for r in ranks), sum(r[1] for r in ranks)

    def order(self) -> int:
        return sum(part.order() for part in self.parts)

    def contravariant_rank(self) -> int:
        return self.rank()[0]

    def covariant_rank(self) -> int:
        return self.rank()[1]