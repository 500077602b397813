import math

import numpy as np
import pytest

from errors import ArgumentCountError, DomainError
from quaternion import IDENTITY, Quaternion
from vec3 import Vec3

S = 1 / math.sqrt(2)
Q1 = Quaternion(1, 2, 3, 4)
Q2 = Quaternion(.5, .5, -.5, -.5)
Q3 = Quaternion(S, 0, 0, S)
I, J, K = Quaternion(0, 1, 0, 0), Quaternion(0, 0, 1, 0), Quaternion(0, 0, 0, 1)


def close(a, b, tol=1e-9):
    return a.dist(b) < tol


# --- Construction ---

def test_constructor_forms():
    assert Quaternion(1, Vec3(2, 3, 4)) == Q1
    assert Quaternion(1, (2, 3, 4)) == Q1
    assert Quaternion([1, 2, 3, 4]) == Q1
    assert Quaternion(Q1) == Q1
    assert Quaternion(np.array([1.0, 2, 3, 4])) == Q1


@pytest.mark.parametrize("args", [(), (1,), (1, 2, 3), (1, 2, 3, 4, 5), ((1, 2, 3),), (Vec3(1, 2, 3), 1)])
def test_bad_construction_raises(args):
    with pytest.raises(ArgumentCountError):
        Quaternion(*args)


# --- Algebra ---

def test_unit_relations():
    assert I * J == K and J * K == I and K * I == J
    assert I * I == J * J == K * K == -IDENTITY
    assert I * J * K == -IDENTITY


def test_fixture_products():
    assert Q1 * Q2 == Quaternion(3, 2, 4, -1)
    assert Q1 + Q2 == Quaternion(1.5, 2.5, 2.5, 3.5)
    assert Q1 - Q2 == Quaternion(.5, 1.5, 3.5, 4.5)
    assert Q1 / Q2 == Quaternion(-2, 0, -1, 5)


def test_power_by_quaternion_is_frame_conjugation():
    assert Q1 ** Q2 == Quaternion(1, -4, -2, 3)
    assert Q1.conjugate_by(Q2) == Q1 ** Q2


def test_conjugates():
    assert Q1.conjugate() == Q1.co() == Quaternion(1, -2, -3, -4)
    assert Q1.conjugate_via("") == Quaternion(1, -2, -3, -4)


def test_pow_with_non_number_is_type_error():
    with pytest.raises(TypeError):
        Q1 ** ""


def test_scalar_promotion():
    assert 2 + Q1 == Q1 + 2 == Quaternion(3, 2, 3, 4)
    assert 1 - Q1 == Quaternion(0, -2, -3, -4)
    assert 2 * Q1 == Q1 * 2 == Quaternion(2, 4, 6, 8)
    assert close(2 / Q2, 2 * Q2.conjugate())


def test_reciprocal():
    assert close(Q1 * Q1.reciprocal(), IDENTITY)
    with pytest.raises(DomainError):
        Quaternion(0, 0, 0, 0).reciprocal()
    with pytest.raises(DomainError):
        Q1 / 0


def test_integer_powers():
    assert Q1 ** 0 == IDENTITY
    assert Q1 ** 1 == Q1
    assert Q1 ** 3 == Q1 * Q1 * Q1
    assert close(Q1 ** -2, (Q1 * Q1).reciprocal())


def test_real_power_follows_the_geodesic():
    # half of a quarter turn about z is an eighth turn
    half = Q3 ** 0.5
    expected = Quaternion(math.cos(math.pi / 8), 0, 0, math.sin(math.pi / 8))
    assert close(half, expected)
    assert close((2 * Q3) ** 0.5, math.sqrt(2) * expected)


def test_real_power_of_zero():
    zero = Quaternion(0, 0, 0, 0)
    assert zero ** 0.5 == zero
    with pytest.raises(DomainError):
        zero ** -0.5


@pytest.mark.parametrize("n", [math.inf, -math.inf, math.nan])
def test_non_finite_power_is_domain_error(n):
    with pytest.raises(DomainError):
        Q1 ** n


# --- Metric ---

def test_norms():
    assert Q1.len_sqr() == 30
    assert Q1.len() == pytest.approx(math.sqrt(30))
    assert Q1.len1() == 10 and Q1.leninf() == 4
    assert Q1.dist1(IDENTITY) == 9 and Q1.distinf(IDENTITY) == 4


def test_normalise_falls_back_to_identity():
    zero = Quaternion(0, 0, 0, 0)
    assert zero.normalise() == IDENTITY
    assert all(math.isnan(c) for c in zero.normalize())
    assert Q1.normalise().len() == pytest.approx(1.0)


def test_spherical_distance():
    assert IDENTITY.sdist(IDENTITY) == 0
    assert I.slen() == pytest.approx(math.pi / 2)
    assert Q3.slen() == pytest.approx(math.pi / 4)
    assert (-IDENTITY).slen() == pytest.approx(math.pi)


# --- Rotation ---

def test_rotation_of_vectors():
    assert Q3.apply(Vec3(1, 0, 0)).dist(Vec3(0, 1, 0)) < 1e-12
    assert Vec3(0, 1, 0).apply_quaternion(Q3).dist(Vec3(-1, 0, 0)) < 1e-12


def test_matrix_left_matches_quaternion_action():
    rng = np.random.default_rng(3)
    for _ in range(5):
        q = Quaternion.random(rng)
        v = Vec3.random(rng)
        m = q.to_matrix_left()
        np.testing.assert_allclose(m[:3, :3] @ np.array(v), np.array(q.apply(v)), atol=1e-12)
        np.testing.assert_allclose(np.array(v) @ q.to_matrix_right()[:3, :3], np.array(q.apply(v)), atol=1e-12)


def test_matrix_right_is_transpose_of_left():
    m_left = Q1.to_matrix_left()
    np.testing.assert_allclose(Q1.to_matrix_right(), m_left.T, atol=1e-12)
    np.testing.assert_allclose(Q1.to_matrix(), Q1.to_matrix_right())
    np.testing.assert_allclose(m_left[3], [0, 0, 0, 1])


def test_fixture_matrix():
    m = Q3.to_matrix_left()
    assert Vec3(1, 0, 0).apply_matrix_left(m).dist(Vec3(0, 1, 0)) < 1e-12


def test_angle_axis():
    angle, axis = Q3.to_angle_axis()
    assert angle == pytest.approx(math.pi / 2)
    assert axis.dist(Vec3(0, 0, 1)) < 1e-12
    assert IDENTITY.to_angle_axis() == (0.0, Vec3(0, 0, 1))


def test_log_is_tangent_vector():
    v = Q3.log()
    assert v.dist(Vec3(0, 0, math.pi / 4)) < 1e-12
    assert IDENTITY.log() == Vec3(0, 0, 0)
    assert close(v.exp(), Q3)


def test_random_is_unit():
    rng = np.random.default_rng(11)
    for _ in range(10):
        assert Quaternion.random(rng).len() == pytest.approx(1.0)


def test_parts():
    assert Q1.real() == 1
    assert Q1.vector() == Q1.to_vector() == Vec3(2, 3, 4)
    assert Q1.is_finite() and not Q1.is_real() and not Q1.is_imaginary()
    assert I.is_imaginary() and IDENTITY.is_real()


def test_string_form():
    assert str(Quaternion(0.3, 0.4, 0.5, 0.6)) == "0.300 + 0.400i + 0.500j + 0.600k"
    assert str(I) == "i"
    assert str(Quaternion(1, -1, 0, 2)) == "1.000 - i + 2.000k"
    assert str(Quaternion(0, 0, 0, 0)) == "0"
