"""Small symbolic scalar expressions and their derivatives."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol


class SymExpr(Protocol):
    def eval_expr(self, args: Any) -> Any: ...


def eval_each(exprs: Iterable[SymExpr], args: Any) -> list[Any]:
    """Evaluate every expression with the same arguments."""
    return [expr.eval_expr(args) for expr in exprs]


@dataclass(frozen=True, order=True)
class Exp:
    """The exponential of ``x``."""

    x: Any

    def diff(self) -> Exp:
        return self


@dataclass(frozen=True)
class Monom:
    """``coeff * x ** power``, or the zero monomial when ``coeff`` is None."""

    coeff: Any = None
    x: Any = None
    power: int = 0

    @classmethod
    def zero(cls) -> Monom:
        return cls()

    def is_zero(self) -> bool:
        return self.coeff is None

    def diff(self) -> Monom:
        if self.is_zero() or self.power == 0:
            return Monom.zero()
        return Monom(self.coeff * self.power, self.x, self.power - 1)


@dataclass(frozen=True, order=True)
class ZeroExpr:
    """The constant zero."""

    def diff(self) -> ZeroExpr:
        return self


@dataclass(frozen=True, order=True)
class Log:
    """The natural logarithm of ``x``."""

    x: Any

    def diff(self) -> Monom:
        return Monom(1, self.x, -1)