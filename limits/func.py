"""Sums, products and differentiable functions over small multi-variables."""

from __future__ import annotations

import numbers
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import reduce
from operator import add, mul
from typing import Any


def _zero_like(value: Any) -> Any:
    if isinstance(value, numbers.Number):
        return type(value)(0)
    if isinstance(value, (list, tuple)):
        return type(value)(_zero_like(v) for v in value)
    return value * 0


def _one_like(value: Any) -> Any:
    if isinstance(value, numbers.Number):
        return type(value)(1)
    if isinstance(value, (list, tuple)):
        return type(value)(_one_like(v) for v in value)
    return 1


@dataclass(frozen=True, order=True)
class Sum:
    """A formal sum of terms."""

    terms: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "terms", tuple(self.terms))

    def neutral_elem(self) -> Any:
        return _zero_like(self.terms[0]) if self.terms else 0

    def commutative(self) -> bool:
        return True

    def eval(self) -> Any:
        return reduce(add, self.terms, self.neutral_elem())


@dataclass(frozen=True, order=True)
class Prod:
    """A formal product of factors."""

    terms: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "terms", tuple(self.terms))

    def neutral_elem(self) -> Any:
        return _one_like(self.terms[0]) if self.terms else 1

    def commutative(self) -> bool:
        return True

    def eval(self) -> Any:
        return reduce(mul, self.terms, self.neutral_elem())


@dataclass(frozen=True)
class Var:
    """A single variable: a multi-variable with exactly one component."""

    value: Any

    def map(self, fn: Callable[[Any], Any]) -> Var:
        return Var(fn(self.value))

    def square_norm(self) -> Any:
        return self.value * self.value


def new_from_index(n: int, init_fn: Callable[[int], Any]) -> tuple:
    """Build an ``n``-component multi-variable from its index function."""
    return tuple(init_fn(i) for i in range(n))


def trace_idxs(xs: Sequence[Any]) -> Any:
    """Sum the components after the first one."""
    zero = _zero_like(xs[0]) if xs else 0
    return reduce(add, xs[1:], zero)


def dot_idxs(xs: Sequence[Any], ys: Sequence[Any]) -> Any:
    """Pairwise product summed over the components after the first one."""
    if len(xs) != len(ys):
        raise ValueError(f"dimension mismatch: {len(xs)} != {len(ys)}")
    zero = _zero_like(xs[0]) if xs else 0
    return reduce(add, (x * y for x, y in zip(xs[1:], ys[1:])), zero)


def square_norm(xs: Sequence[Any]) -> Any:
    """The square norm of ``xs`` against itself as its own dual."""
    return dot_idxs(xs, xs)


@dataclass(frozen=True)
class CstFct:
    """A constant function."""

    value: Any

    def eval_fct(self, x: Any = None) -> Any:
        return self.value

    def diff_fct(self, var: Any = None) -> CstFct:
        return CstFct(_zero_like(self.value))


@dataclass(frozen=True)
class IdFct:
    """The identity on a single variable."""

    def eval_fct(self, x: Var) -> Any:
        if not isinstance(x, Var):
            raise TypeError(f"expected a Var, got {type(x).__name__}")
        return x.value


@dataclass(frozen=True)
class FctComp:
    """Composition ``outer(inner(x))``."""

    outer: Any
    inner: Any

    def eval_fct(self, x: Any) -> Any:
        return self.outer.eval_fct(self.inner.eval_fct(x))


@dataclass(frozen=True)
class FctSum:
    """A sum of functions, evaluated term by term."""

    fcts: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fcts", tuple(self.fcts))

    def eval_fct(self, x: Any) -> Sum:
        return Sum(f.eval_fct(x) for f in self.fcts)

    def diff_fct(self, var: Any = None) -> Any:
        """Derivative as a sum of the terms' derivatives, component by component."""
        derivs = [f.diff_fct(var) for f in self.fcts]
        if derivs and all(isinstance(d, Var) for d in derivs):
            return Var(FctSum(d.value for d in derivs))
        if derivs and all(isinstance(d, (list, tuple)) for d in derivs):
            size = len(derivs[0])
            if any(len(d) != size for d in derivs):
                raise ValueError("derivatives have different dimensions")
            return new_from_index(size, lambda k: FctSum(d[k] for d in derivs))
        return FctSum(derivs)


@dataclass(frozen=True)
class FctProd:
    """A product of functions, evaluated factor by factor."""

    fcts: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fcts", tuple(self.fcts))

    def eval_fct(self, x: Any) -> Prod:
        return Prod(f.eval_fct(x) for f in self.fcts)


def main(argv: Sequence[str] | None = None) -> int:
    """Check a constant function and its derivative."""
    Sum([1, 2, 3, 4])
    fn_100 = CstFct(100)
    if fn_100.eval_fct() != 100:
        raise RuntimeError("constant function returned the wrong value")
    dfn_100 = fn_100.diff_fct()
    if dfn_100.eval_fct() != 0:
        raise RuntimeError("derivative of a constant is not zero")
    return 0