import numpy as np
import pytest

from complexes import Complex
from display import ComplexFormat
from errors import DomainError
from quaternion import Quaternion
from vec3 import Vec3
from vector import Vector, bin_length, bin_reverse


def as_complex_array(v):
    return np.array([complex(x) for x in v])


# --- Bit helpers ---

@pytest.mark.parametrize("n, h", [(0, 0), (1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4)])
def test_bin_length(n, h):
    assert bin_length(n) == h


def test_bin_reverse():
    assert [bin_reverse(k, 3) for k in range(8)] == [0, 4, 2, 6, 1, 5, 3, 7]
    assert bin_reverse(1, 4) == 8
    assert bin_reverse(0, 0) == 0


# --- Container ---

def test_construction_forms():
    assert Vector(1, 2, 3).items == [1, 2, 3]
    assert Vector([1, 2, 3]).items == [1, 2, 3]
    assert Vector(Vec3(1, 2, 3)).size == 3
    assert Vector(Quaternion(1, 2, 3, 4)).size == 4
    assert Vector(Complex(1, 2)).items == [Complex(1, 2)]
    assert Vector(5).items == [5]
    assert Vector.zero(3) == Vector(0, 0, 0)
    assert Vector.zero(Vector(1, 2)).size == 2


def test_indexing_is_mutable():
    v = Vector(1, 2, 3)
    v[1] = Complex(0, 1)
    assert v[1] == Complex(0, 1)
    assert len(v) == 3 and list(v) == [1, Complex(0, 1), 3]


# --- Algebra ---

def test_arithmetic():
    u, v = Vector(1, 2, 3), Vector(4, 5, 6)
    assert u + v == Vector(5, 7, 9)
    assert v - u == Vector(3, 3, 3)
    assert -u == Vector(-1, -2, -3)
    assert 2 * u == u * 2 == Vector(2, 4, 6)
    assert u / 2 == Vector(0.5, 1, 1.5)
    assert Complex(0, 1) * Vector(1, 2) == Vector(Complex(0, 1), Complex(0, 2))


def test_size_mismatch_raises():
    with pytest.raises(ValueError):
        Vector(1, 2) + Vector(1, 2, 3)
    with pytest.raises(ValueError):
        Vector(1, 2).dot(Vector(1, 2, 3))


def test_equality_promotes_reals():
    assert Vector(1, 0) == Vector(Complex(1, 0), 0)
    assert Vector(1, 2) != Vector(1, 2, 0)
    assert Vector(1, 2) != Vector(2, 1)


def test_norms():
    v = Vector(3, -4)
    assert v.dot(Vector(1, 1)) == -1
    assert v.len() == 5 and v.len_sqr() == 25
    assert v.linfty() == 4 and v.lone() == 7
    assert Vector(Complex(3, 4)).len() == pytest.approx(5)


def test_normalise():
    np.testing.assert_allclose(Vector(3, 4).normalise().items, [0.6, 0.8])
    assert Vector(0, Complex(0, 0)).is_zero()
    with pytest.raises(DomainError):
        Vector(0, 0).normalise()


def test_matrix_application_by_rows():
    m = [[1, 2], [3, 4]]
    v = Vector(1, 1)
    assert v.apply_matrix_left(m) == Vector(3, 7)
    assert v.apply_matrix_right(m) == Vector(4, 6)
    assert m @ v == Vector(3, 7)
    assert v @ np.array(m) == Vector(4, 6)
    assert np.array(m) @ v == Vector(3, 7)
    with pytest.raises(ValueError):
        v.apply_matrix_right([[1, 2]])


def test_to_value():
    assert Vector(1, 2).to_value() == Complex(1, 2)
    assert Vector(1, 2, 3).to_value() == Vec3(1, 2, 3)
    assert Vector(1, 2, 3, 4).to_value() == Quaternion(1, 2, 3, 4)
    with pytest.raises(ValueError):
        Vector(1, 2, 3, 4, 5).to_value()


def test_string_form():
    assert str(Vector(1, 2, 3)) == "(1,2,3)"
    assert str(Vector(0.5, Complex(1, -1))) == "(0.5,1 - i)"
    assert Vector(Complex(0, 2)).format(ComplexFormat(symbol="j")) == "(2j)"


# --- Bit-reversal permutation ---

def test_bitwise_reorder_pads_and_permutes():
    v = Vector(1, 2, 3, 4, 5)
    r = v.bitwise_reorder()
    assert r.size == 8
    assert r.items == [1, 5, 3, 0, 2, 0, 4, 0]
    assert v.items == [1, 2, 3, 4, 5]


def test_bitwise_reorder_in_place_mutates():
    v = Vector(1, 2, 3)
    r = v.bitwise_reorder(in_place=True)
    assert r is v
    assert v.items == [1, 3, 2, 0]


def test_bitwise_reorder_is_an_involution():
    v = Vector(list(range(16)))
    assert v.bitwise_reorder().bitwise_reorder() == v


# --- FFT ---

def test_fft_impulse():
    f = Vector(1, 0, 0, 0).fft()
    assert f.size == 4
    np.testing.assert_allclose(as_complex_array(f), np.ones(4), atol=1e-12)


@pytest.mark.parametrize("n", [1, 2, 4, 8, 16, 64])
def test_fft_matches_numpy(n):
    rng = np.random.default_rng(n)
    values = rng.normal(size=n)
    np.testing.assert_allclose(as_complex_array(Vector(values).fft()), np.fft.fft(values), atol=1e-9)


def test_fft_of_complex_entries_matches_numpy():
    rng = np.random.default_rng(1)
    z = rng.normal(size=8) + 1j * rng.normal(size=8)
    v = Vector([Complex(c) for c in z])
    np.testing.assert_allclose(as_complex_array(v.fft()), np.fft.fft(z), atol=1e-9)


def test_fft_pads_to_power_of_two():
    values = [1.0, 2.0, 3.0, 4.0, 5.0]
    f = Vector(values).fft()
    assert f.size == 8
    np.testing.assert_allclose(as_complex_array(f), np.fft.fft(values, 8), atol=1e-9)


def test_inverse_fft_is_not_normalised():
    values = [1.0, -2.0, 0.5, 4.0]
    back = Vector(values).fft().fft(inverse=True)
    np.testing.assert_allclose(as_complex_array(back), 4 * np.array(values), atol=1e-9)
    np.testing.assert_allclose(as_complex_array(Vector(values).fft(inverse=True)),
                               4 * np.fft.ifft(values), atol=1e-9)


def test_fft_is_linear():
    rng = np.random.default_rng(8)
    a, b = Vector(rng.normal(size=8)), Vector(rng.normal(size=8))
    np.testing.assert_allclose(as_complex_array(a.fft() + b.fft()),
                               as_complex_array((a + b).fft()), atol=1e-9)


def test_fft_in_place():
    v = Vector(1.0, 0.0, 0.0, 0.0)
    f = v.fft(in_place=True)
    assert f is v
    assert v.items == [Complex(1, 0)] * 4
    w = Vector(1.0, 0.0, 0.0, 0.0)
    w.fft()
    assert w.items == [1.0, 0.0, 0.0, 0.0]
