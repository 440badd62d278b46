"""Index helpers: disjoint sets, bounded tuple elements and list reordering."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, MutableSequence
from dataclasses import dataclass
from typing import Any


class DisjunctSets:
    """A collection of sets in which overlapping input sets are merged.

    A set that shares an element with an existing set is merged into the
    first such set; otherwise it is added as a new set.
    """

    def __init__(self, sets: Iterable[Iterable[Hashable]] = ()) -> None:
        self._sets: list[set] = []
        for new_set in sets:
            self.append(new_set)

    def append(self, new_set: Iterable[Hashable]) -> None:
        """Merge ``new_set`` into the first set it overlaps, or add it."""
        new_set = set(new_set)
        for existing in self._sets:
            if not existing.isdisjoint(new_set):
                existing.update(new_set)
                return
        self._sets.append(new_set)

    def append_one(self, value: Hashable) -> None:
        """Add a single value, as a new singleton set if no set holds it."""
        if any(value in existing for existing in self._sets):
            return
        self._sets.append({value})

    @property
    def sets(self) -> list[set]:
        return list(self._sets)

    def __iter__(self) -> Iterator[set]:
        return iter(self._sets)

    def __len__(self) -> int:
        return len(self._sets)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DisjunctSets):
            return NotImplemented
        return self._sets == other._sets

    def __repr__(self) -> str:
        return f"DisjunctSets({self._sets!r})"


@dataclass(frozen=True, order=True)
class TupleElem:
    """A value tagged with the position of the tuple slot it came from."""

    value: Any
    idx: int


def tuple_elems(values: Iterable[Any], bound: int | None = None) -> list[TupleElem]:
    """Tag each value with its position; positions must stay below ``bound``."""
    result = []
    for idx, value in enumerate(values):
        if bound is not None and idx >= bound:
            raise ValueError(f"tuple position {idx} is not below {bound}")
        result.append(TupleElem(value, idx))
    return result


def cycles(edges: Iterable[tuple[Hashable, Hashable]]) -> list[set]:
    """Group edge endpoints into connected sets, in order of first appearance.

    Each edge joins the first set that holds either endpoint; sets are not
    merged with each other afterwards.
    """
    result: list[set] = []
    for a, b in edges:
        for group in result:
            if a in group:
                group.add(b)
                break
            if b in group:
                group.add(a)
                break
        else:
            result.append({a, b})
    return result


def _check_positions(elems: MutableSequence, src: int, dst: int) -> None:
    size = len(elems)
    for pos in (src, dst):
        if not 0 <= pos < size:
            raise IndexError(f"position {pos} out of range for length {size}")


def move_vec_elems(elems: MutableSequence, src: int, dst: int) -> None:
    """Move the element at ``src`` to ``dst`` in place, shifting those between."""
    _check_positions(elems, src, dst)
    elems.insert(dst, elems.pop(src))


def move_vec_elems_by_swap(elems: MutableSequence, src: int, dst: int) -> None:
    """Move the element at ``src`` to ``dst`` in place by adjacent swaps."""
    _check_positions(elems, src, dst)
    if src < dst:
        for i in range(src, dst):
            elems[i], elems[i + 1] = elems[i + 1], elems[i]
    elif src > dst:
        for i in range(src, dst, -1):
            elems[i], elems[i - 1] = elems[i - 1], elems[i]


def bounded_index(n: int, size: int) -> int:
    """Return ``n`` after checking that it indexes a dimension of ``size``."""
    if not 0 <= n < size:
        raise ValueError(f"index {n} is not below dimension {size}")
    return n