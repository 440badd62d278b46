import pytest

from limits.func import (
    CstFct,
    FctComp,
    FctProd,
    FctSum,
    IdFct,
    Prod,
    Sum,
    Var,
    dot_idxs,
    main,
    new_from_index,
    square_norm,
    trace_idxs,
)


def test_main_runs():
    assert main() == 0


def test_cst_fct_and_derivative():
    fn_100 = CstFct(100)
    assert fn_100.eval_fct() == 100
    assert fn_100.diff_fct().eval_fct() == 0


def test_sum_neutral_and_commutative():
    assert Sum([]).eval() == Sum([]).neutral_elem() == 0
    assert Sum([1, 2, 3, 4]).commutative()
    assert Sum([1, 2, 3, 4]).eval() == Sum([4, 3, 2, 1]).eval()


def test_sum_splits():
    assert Sum([1, 2, 3, 4]).eval() == Sum([1, 2]).eval() + Sum([3, 4]).eval()


def test_prod_neutral_and_splits():
    assert Prod([]).eval() == Prod([]).neutral_elem() == 1
    assert Prod([2, 3, 5]).eval() == Prod([2]).eval() * Prod([3, 5]).eval()
    assert Prod([2, 0, 5]).eval() == 0


def test_var_map_and_norm():
    assert Var(3).map(lambda v: -v) == Var(-3)
    assert Var(-3).square_norm() == Var(3).square_norm()


def test_new_from_index():
    assert new_from_index(3, lambda i: i * i) == (0, 1, 4)
    assert new_from_index(0, lambda i: i) == ()


def test_trace_skips_first_component():
    assert trace_idxs([100, 1, 2]) == trace_idxs([0, 1, 2])
    assert trace_idxs([7]) == 0


def test_dot_and_square_norm():
    xs = [9, 1, 2]
    assert square_norm(xs) == dot_idxs(xs, xs)
    assert dot_idxs([5, 1, 2], [6, 0, 0]) == 0
    with pytest.raises(ValueError):
        dot_idxs([1, 2], [1, 2, 3])


def test_id_and_composition():
    assert IdFct().eval_fct(Var(7)) == 7
    comp = FctComp(IdFct(), CstFct(Var(7)))
    assert comp.eval_fct(None) == 7
    with pytest.raises(TypeError):
        IdFct().eval_fct(7)


def test_fct_sum_eval_and_diff():
    fs = FctSum([CstFct(2), CstFct(3)])
    assert fs.eval_fct(None) == Sum((2, 3))
    d = fs.diff_fct()
    assert d.eval_fct(None).eval() == 0


def test_fct_prod_eval():
    fp = FctProd([CstFct(2), CstFct(3)])
    assert fp.eval_fct(None) == Prod((2, 3))
    assert fp.eval_fct(None).eval() == Prod([3, 2]).eval()