# limits

Building blocks for working with tensors on NumPy arrays, keeping track of
which axes are co- and which are contravariant, and for a few simple
differentiable functions.

## Modules

- `limits.util` – `DisjunctSets`, a list of sets in which an added set is
  merged into the first set it overlaps; `cycles`, which groups contraction
  edges into sets of axes; `TupleElem` and `tuple_elems`, which tag values
  with their tuple position; `move_vec_elems` and `move_vec_elems_by_swap`,
  which move one list element to a new position in place; `bounded_index`.
- `limits.sym` – tiny symbolic scalar expressions that know their own
  derivative: `Exp`, `Monom`, `ZeroExpr`, `Log`, plus `eval_each`.
- `limits.func` – formal reductions `Sum` and `Prod` (with `eval`,
  `neutral_elem`), the single variable `Var`, the constant and identity
  functions `CstFct` and `IdFct`, composition `FctComp`, term-wise sums and
  products of functions `FctSum` and `FctProd`, and the helpers
  `new_from_index`, `trace_idxs`, `dot_idxs`, `square_norm`.
- `limits.tensor_traits` – `DualVariant` (`CONTRA`, `CO`), `TensorIdx`,
  `DualShapeMetaInfo` (order, rank, removing, swapping and moving axes),
  `ax_sets` and `ax_disjunct_sets`, and the errors `ContractError`,
  `AxisOutOfBoundsError`, `IncompatibleAxesError`, `IrrepresentableError`.
- `limits.index` – index values that can be raised, lowered and flipped:
  `ValuedIndex`, `TensorIndex`, `CompositeIndex`, and `ContractionError`.
- `limits.contraction` – contraction of NumPy arrays (`contract`,
  `contract_axis`, `contract_with`, `contract_axis_with`, `tensor_mul`,
  `contract_gen`, `contract_gen_with`, `contractions`, `contractions_with`),
  `get` for fixing positions along axes, `levi_civita`, and `DualTensor`, an
  array that carries the variant of each of its axes.
- `limits.tensorspace` – the `TensorAlgebra` interface with two
  implementations, `NDArrayAlgebra` (plain arrays, every axis contravariant)
  and `FinVSpace` (over `FinTensor`, flat row-major elements with a
  `(dimension, variant)` entry per axis), and `TensorMetric` for raising,
  lowering and flipping indices with a metric and its inverse.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Group contraction edges into connected sets of axes:

```python
from limits.util import cycles

cycles([(1, 2), (3, 2), (4, 5)])
# [{1, 2, 3}, {4, 5}]
```

Contract NumPy arrays:

```python
import numpy as np
from limits.contraction import contract_axis, tensor_mul

contract_axis(np.eye(3), 0, 1)      # the trace, array(3.)
tensor_mul(np.ones(2), np.ones(3))  # outer product, shape (2, 3)
```

Keep track of which axes are co- and which are contravariant:

```python
from limits.tensor_traits import DualShapeMetaInfo, DualVariant

info = DualShapeMetaInfo([DualVariant.CO, DualVariant.CONTRA, DualVariant.CO])
info.rank()   # (1, 2)
info.order()  # 3
```

## Commands

```
limits-func-check
```

checks that a constant function evaluates to its value and that its
derivative evaluates to zero; it raises an error otherwise.

```
limits-tensor-demo
```

prints the dot product of two sample vectors and the three-dimensional
Levi-Civita symbol.

## What it does not do

- Contractions are carried out with `numpy.einsum`, which offers 52 axis
  labels; a contraction needing more raises `IrrepresentableError`.
- Only `CstFct` and `FctSum` have a derivative (`diff_fct`); `IdFct`,
  `FctComp` and `FctProd` can only be evaluated.
- There is no general symbolic algebra: the expressions in `limits.sym`
  only differentiate themselves, they do not simplify or combine.