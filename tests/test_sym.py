from limits.sym import Exp, Log, Monom, ZeroExpr, eval_each


class _Scaled:
    def __init__(self, factor):
        self.factor = factor

    def eval_expr(self, args):
        return self.factor * args


def test_exp_diff_is_itself():
    e = Exp("x")
    assert e.diff() == e
    assert e.diff().diff() == Exp("x")


def test_zero_expr_diff():
    assert ZeroExpr().diff() == ZeroExpr()


def test_monom_diff_lowers_power():
    d = Monom(3, "x", 2).diff()
    assert d == Monom(6, "x", 1)
    assert d.power == 1


def test_monom_constant_diff_is_zero():
    assert Monom(5, "x", 0).diff().is_zero()
    assert Monom(5, "x", 0).diff() == Monom.zero()


def test_monom_repeated_diff_reaches_zero():
    m = Monom(2, "y", 3)
    for _ in range(4):
        m = m.diff()
    assert m.is_zero()
    assert not Monom(2, "y", 3).is_zero()


def test_zero_monom_diff_stays_zero():
    assert Monom.zero().diff() == Monom.zero()


def test_log_diff_is_inverse_monom():
    assert Log("x").diff() == Monom(1, "x", -1)


def test_eval_each():
    exprs = [_Scaled(1), _Scaled(0)]
    result = eval_each(exprs, 4)
    assert result[0] == 4
    assert result[1] == 0
    assert len(result) == len(exprs)