import numpy as np
import pytest

from limits.contraction import (
    DualTensor,
    contract,
    contract_axis,
    contract_axis_with,
    contract_gen,
    contract_gen_with,
    contract_with,
    contractions,
    contractions_with,
    get,
    levi_civita,
    main,
    tensor_mul,
)
from limits.tensor_traits import (
    AxisOutOfBoundsError,
    DualShapeMetaInfo,
    DualVariant,
    IrrepresentableError,
    TensorIdx,
)
from limits.util import DisjunctSets, TupleElem


def _diag_sum(arr, axis1=0, axis2=1):
    return np.diagonal(arr, axis1=axis1, axis2=axis2).sum(axis=-1)


@pytest.fixture
def matrix():
    return np.arange(9.0).reshape(3, 3)


def test_contract_axis_is_trace(matrix):
    assert np.allclose(contract_axis(matrix, 0, 1), _diag_sum(matrix))


def test_contract_keeps_free_axes():
    arr = np.arange(24.0).reshape(2, 3, 2, 2)
    res = contract(arr, [[0, 2]])
    assert res.shape == (3, 2)
    assert np.allclose(res, _diag_sum(arr, 0, 2))


def test_contract_gen_with_explicit_sets(matrix):
    res = contract_gen(matrix, DisjunctSets([{0, 1}]))
    assert np.allclose(res, _diag_sum(matrix))


def test_contract_gen_no_sets_is_identity(matrix):
    assert np.array_equal(contract_gen(matrix, []), matrix)


def test_contract_with_vectors_is_dot():
    a = np.array([1.654, 0.456, -1.5464])
    b = np.array([-0.4564, 0.5464, 1.87978])
    assert np.allclose(contract_with(a, b, [[0, 0]]), a.dot(b))
    assert np.allclose(contract_axis_with(a, b, 0, 0), a.dot(b))


def test_contract_with_matrix_product():
    a = np.arange(6.0).reshape(2, 3)
    b = np.arange(12.0).reshape(3, 4)
    assert np.allclose(contract_with(a, b, [[1, 0]]), a @ b)


def test_contract_gen_with_tagged_axes():
    a = np.arange(6.0).reshape(2, 3)
    b = np.arange(12.0).reshape(3, 4)
    sets = DisjunctSets([{TupleElem(1, 0), TupleElem(0, 1)}])
    assert np.allclose(contract_gen_with(a, b, sets), a @ b)


def test_contract_gen_with_bad_tensor_position():
    a = np.ones(3)
    with pytest.raises(ValueError):
        contract_gen_with(a, a, [{TupleElem(0, 2)}])


def test_tensor_mul_is_outer():
    a = np.array([1.0, 2.0])
    b = np.array([3.0, 4.0, 5.0])
    res = tensor_mul(a, b)
    assert res.shape == (2, 3)
    assert np.allclose(res, np.multiply.outer(a, b))


def test_cross_product_through_levi_civita():
    eps = levi_civita()
    a = np.array([1.0, 2.0, 3.0])
    b = np.array([-1.0, 0.5, 2.0])
    res = contract_with(contract_with(eps, a, [[1, 0]]), b, [[1, 0]])
    assert np.allclose(res, np.cross(a, b))


def test_levi_civita_values():
    eps = levi_civita()
    assert eps[0, 1, 2] == 1.0
    assert eps[1, 2, 0] == 1.0
    assert eps[2, 1, 0] == -1.0
    assert eps[0, 2, 1] == -1.0
    assert eps[0, 0, 1] == 0.0
    assert np.allclose(eps, -np.swapaxes(eps, 0, 1))


def test_contract_out_of_bounds(matrix):
    with pytest.raises(AxisOutOfBoundsError):
        contract_axis(matrix, 0, 5)


def test_contract_incompatible_dimensions():
    arr = np.ones((2, 3))
    with pytest.raises(IrrepresentableError):
        contract_axis(arr, 0, 1)


def test_contractions_matches_contract():
    arr = np.arange(16.0).reshape(2, 2, 2, 2)
    assert np.allclose(contractions(arr, [(0, 1)]), contract(arr, [[0, 1]]))


def test_contractions_joins_chained_pairs():
    arr = np.arange(27.0).reshape(3, 3, 3)
    res = contractions(arr, [(0, 1), (1, 2)])
    assert np.allclose(res, sum(arr[i, i, i] for i in range(3)))


def test_contractions_with_is_tensordot_of_matrices():
    a = np.arange(6.0).reshape(2, 3)
    b = np.arange(12.0).reshape(3, 4)
    assert np.allclose(contractions_with(a, b, [(1, 0)]), a @ b)


def test_contractions_with_out_of_bounds():
    with pytest.raises(AxisOutOfBoundsError):
        contractions_with(np.ones(3), np.ones(3), [(0, 1)])


def test_get_single_axis():
    arr = np.arange(24).reshape(2, 3, 4)
    assert np.array_equal(get(arr, [TensorIdx(1, 2)]), arr[:, 2, :])


def test_get_sequential_axes():
    arr = np.arange(24).reshape(2, 3, 4)
    assert np.array_equal(get(arr, [TensorIdx(0, 1), TensorIdx(0, 2)]), arr[1, 2, :])


def test_get_out_of_range():
    arr = np.arange(6).reshape(2, 3)
    with pytest.raises(IndexError):
        get(arr, [TensorIdx(0, 2)])
    with pytest.raises(AxisOutOfBoundsError):
        get(arr, [TensorIdx(4, 0)])


def test_dual_tensor_constructors():
    v = DualTensor.vector(np.ones(3))
    assert v.rank() == (1, 0)
    w = DualTensor.dual_vector(np.ones(3))
    assert w.rank() == (0, 1)
    m = DualTensor.map_vecspace(np.eye(3))
    assert m.variant_at(0) is DualVariant.CONTRA
    assert m.variant_at(1) is DualVariant.CO
    d = DualTensor.map_dualspace(np.eye(3))
    assert d.variant_at(0) is DualVariant.CO
    assert d.variant_at(2) is None


def test_dual_tensor_order_mismatch():
    with pytest.raises(ValueError):
        DualTensor(np.ones((3, 3)), DualShapeMetaInfo([DualVariant.CO]))


def test_dual_tensor_contract_axis(matrix):
    t = DualTensor.map_vecspace(matrix)
    res = t.contract_axis(0, 1)
    assert res.order() == 0
    assert res.rank() == (0, 0)
    assert np.allclose(res.array, _diag_sum(matrix))


def test_dual_tensor_contract_keeps_remaining_variants():
    eps = levi_civita()
    t = DualTensor(eps, [DualVariant.CO, DualVariant.CONTRA, DualVariant.CO])
    res = t.contract([[0, 1]])
    assert res.info.dual_shape == [DualVariant.CO]
    assert res.array.shape == (3,)


def test_dual_tensor_swap_axes():
    arr = np.arange(6.0).reshape(2, 3)
    t = DualTensor.map_vecspace(arr)
    t.swap_axes(0, 1)
    assert t.array.shape == (3, 2)
    assert np.array_equal(t.array, arr.T)
    assert t.info.dual_shape == [DualVariant.CO, DualVariant.CONTRA]


def test_dual_tensor_move_axis():
    arr = np.zeros((2, 3, 4))
    t = DualTensor(arr, [DualVariant.CO, DualVariant.CONTRA, DualVariant.CONTRA])
    t.move_axis(0, 2)
    assert t.array.shape == (3, 4, 2)
    assert t.info.dual_shape == [DualVariant.CONTRA, DualVariant.CONTRA, DualVariant.CO]


def test_main_prints_dot_and_eps(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Eps:" in out
    assert " * " in out