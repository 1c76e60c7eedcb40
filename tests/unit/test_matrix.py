import numpy as np
import pytest

from matnet.core.errors import DimensionMismatchError, IndexOutOfRangeError, InvalidShapeError
from matnet.core.matrix import Matrix, add, identity, product, subtract, transpose


def _random(rows, cols, seed=0):
    return Matrix(rows, cols).randomize(-5.0, 5.0, rng=np.random.default_rng(seed))


def test_create_is_zero_filled():
    m = Matrix.create(2, 3)
    assert m.shape == (2, 3)
    assert m.to_list() == [0.0] * 6


@pytest.mark.parametrize("rows, cols", [(0, 1), (1, 0), (-2, 3), (2.5, 1)])
def test_create_rejects_bad_dimensions(rows, cols):
    with pytest.raises(InvalidShapeError):
        Matrix(rows, cols)


def test_from_sequence_builds_column():
    m = Matrix.from_sequence([1, 2, 3])
    assert m.shape == (3, 1)
    assert m.to_list() == [1.0, 2.0, 3.0]
    with pytest.raises(InvalidShapeError):
        Matrix.from_sequence([])


def test_from_rows_rejects_ragged_input():
    assert Matrix.from_rows([[1, 2], [3, 4]]).shape == (2, 2)
    with pytest.raises(InvalidShapeError):
        Matrix.from_rows([[1, 2], [3]])
    with pytest.raises(InvalidShapeError):
        Matrix.from_rows([])


def test_get_set_within_bounds():
    m = Matrix(2, 2)
    m.set(1, 0, 4.5)
    assert m.get(1, 0) == 4.5
    assert m.get(0, 1) == 0.0


@pytest.mark.parametrize("i, j", [(2, 0), (0, 2), (-1, 0), (0, -1)])
def test_get_set_out_of_range(i, j):
    m = Matrix(2, 2)
    with pytest.raises(IndexOutOfRangeError):
        m.get(i, j)
    with pytest.raises(IndexError):
        m.set(i, j, 1.0)


def test_map_visits_cells_row_major_in_place():
    m = Matrix(2, 3)
    seen = []

    def record(value, i, j):
        seen.append((i, j))
        return value + i * 10 + j

    assert m.map(record) is m
    assert seen == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]
    assert m.to_rows() == [[0, 1, 2], [10, 11, 12]]


def test_apply_is_unary():
    m = Matrix.from_sequence([1, -2, 3]).apply(abs)
    assert m.to_list() == [1.0, 2.0, 3.0]


def test_static_add_and_subtract_are_elementwise():
    a = _random(3, 4, seed=1)
    b = _random(3, 4, seed=2)
    total = add(a, b)
    diff = subtract(a, b)
    for i in range(3):
        for j in range(4):
            assert total.get(i, j) == pytest.approx(a.get(i, j) + b.get(i, j))
            assert diff.get(i, j) == pytest.approx(a.get(i, j) - b.get(i, j))


def test_static_results_do_not_alias_operands():
    a = Matrix.from_rows([[1, 2]])
    b = Matrix.from_rows([[3, 4]])
    total = add(a, b)
    total.set(0, 0, 100.0)
    assert a.to_rows() == [[1, 2]]
    assert b.to_rows() == [[3, 4]]


def test_static_ops_reject_shape_mismatch():
    with pytest.raises(DimensionMismatchError):
        add(Matrix(2, 2), Matrix(2, 3))
    with pytest.raises(DimensionMismatchError):
        subtract(Matrix(3, 1), Matrix(1, 3))


def test_instance_arithmetic_mutates_and_chains():
    m = Matrix.from_rows([[1, 2], [3, 4]])
    other = Matrix.from_rows([[10, 20], [30, 40]])
    result = m.add(other).subtract(1).multiply(2)
    assert result is m
    assert m.to_rows() == [[20, 42], [64, 86]]
    assert other.to_rows() == [[10, 20], [30, 40]]


def test_instance_multiply_is_hadamard():
    m = Matrix.from_rows([[1, 2], [3, 4]])
    m.multiply(Matrix.from_rows([[2, 0], [1, -1]]))
    assert m.to_rows() == [[2, 0], [3, -4]]


def test_instance_ops_reject_shape_mismatch():
    m = Matrix(2, 2)
    for op in (m.add, m.subtract, m.multiply):
        with pytest.raises(DimensionMismatchError):
            op(Matrix(2, 1))


def test_product_shape_and_values():
    a = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
    b = Matrix.from_rows([[7, 8], [9, 10], [11, 12]])
    c = product(a, b)
    assert c.shape == (2, 2)
    assert c.to_rows() == [[58, 64], [139, 154]]


def test_product_requires_inner_dimensions_to_match():
    with pytest.raises(DimensionMismatchError):
        product(Matrix(2, 3), Matrix(2, 3))


def test_product_with_identity_is_noop():
    a = _random(3, 5, seed=4)
    result = product(a, identity(a.cols))
    assert np.allclose(result.to_numpy(), a.to_numpy())


def test_transpose_swaps_and_round_trips():
    a = _random(2, 3, seed=5)
    t = transpose(a)
    assert t.shape == (3, 2)
    for i in range(2):
        for j in range(3):
            assert t.get(j, i) == a.get(i, j)
    assert transpose(t) == a
    t.set(0, 0, 99.0)
    assert a.get(0, 0) != 99.0


def test_randomize_respects_range_and_int_flag():
    rng = np.random.default_rng(0)
    values = np.array(Matrix(20, 20).randomize(-3.0, 3.0, rng=rng).to_list())
    assert values.min() >= -3.0
    assert values.max() < 3.0

    ints = Matrix(10, 10).randomize(0, 5, as_int=True, rng=rng).to_list()
    assert all(float(v).is_integer() and 0 <= v <= 4 for v in ints)


def test_randomize_is_reproducible_with_seeded_generator():
    a = Matrix(3, 3).randomize(rng=np.random.default_rng(42))
    b = Matrix(3, 3).randomize(rng=np.random.default_rng(42))
    assert a == b


def test_clone_is_equal_but_independent():
    original = _random(2, 2, seed=6)
    copy = original.clone()
    assert copy == original
    copy.add(1.0)
    copy.append_column([0.0, 0.0])
    assert original.shape == (2, 2)
    assert copy != original


def test_append_row_for_bias_augmentation():
    m = Matrix.from_sequence([0.5, -0.5])
    assert m.append_row([1.0]) is m
    assert m.shape == (3, 1)
    assert m.to_list() == [0.5, -0.5, 1.0]


def test_append_column_on_the_right():
    m = Matrix.from_rows([[1, 2], [3, 4]]).append_column([5, 6])
    assert m.to_rows() == [[1, 2, 5], [3, 4, 6]]
    m.append_column(Matrix.from_sequence([7, 8]))
    assert m.cols == 4


def test_append_rejects_wrong_length():
    with pytest.raises(DimensionMismatchError):
        Matrix(2, 2).append_row([1.0])
    with pytest.raises(DimensionMismatchError):
        Matrix(2, 2).append_column([1.0, 2.0, 3.0])


def test_remove_column_shifts_left():
    m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]]).remove_column(1)
    assert m.shape == (2, 2)
    assert m.to_rows() == [[1, 3], [4, 6]]


def test_remove_column_errors():
    m = Matrix(2, 3)
    with pytest.raises(IndexOutOfRangeError):
        m.remove_column(3)
    with pytest.raises(IndexOutOfRangeError):
        m.remove_column(-1)
    with pytest.raises(InvalidShapeError):
        Matrix(2, 1).remove_column(0)


def test_to_list_is_row_major():
    assert Matrix.from_rows([[1, 2], [3, 4]]).to_list() == [1.0, 2.0, 3.0, 4.0]


def test_equality_and_repr():
    a = Matrix.from_rows([[1, 2]])
    assert a == Matrix.from_rows([[1.0, 2.0]])
    assert a != Matrix.from_sequence([1, 2])
    assert a != [[1, 2]]
    assert repr(a) == "Matrix([[1.0, 2.0]])"


@pytest.mark.parametrize("i, j", [(1.0, 0), (0, 0.5), (True, 0), ("1", 0)])
def test_get_set_reject_non_integer_indices(i, j):
    m = Matrix(2, 2)
    with pytest.raises(IndexOutOfRangeError):
        m.get(i, j)
    with pytest.raises(IndexOutOfRangeError):
        m.set(i, j, 1.0)


def test_from_sequence_rejects_nested_input():
    with pytest.raises(InvalidShapeError):
        Matrix.from_sequence([[1, 2], [3, 4]])
    with pytest.raises(InvalidShapeError):
        Matrix(2, 2).append_row([[1.0, 2.0]])
