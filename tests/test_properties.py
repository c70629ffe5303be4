# geomalg: Euclidean geometric algebra in two and three dimensions
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Algebraic laws checked on random multivectors of both algebras.

Integer draws keep the ring and involution laws exact; floating draws are
used where division or square roots are involved.
"""

import pytest
import torch

from geomalg.e2ga import EuclideanMultivector2
from geomalg.e3ga import EuclideanMultivector3

ALGEBRAS = [EuclideanMultivector2, EuclideanMultivector3]
N_SAMPLES = 10


def random_int(cls, low=-9, high=10):
    return cls.from_tensor(torch.randint(low, high, (cls.DIM,), dtype=torch.int64))


def random_float(cls):
    return cls.from_tensor(torch.randn(cls.DIM, dtype=torch.float64))


def grade_of(cls, index):
    for k, indices in enumerate(cls.GRADES):
        if index in indices:
            return k
    raise ValueError(index)


def basis_product(cls, i, j):
    """(sign, index) of the geometric product of two basis blades."""
    prod = cls._unit(i, dtype=torch.int64) * cls._unit(j, dtype=torch.int64)
    nonzero = [(v, k) for k, v in enumerate(prod.tolist()) if v != 0]
    assert len(nonzero) == 1
    return nonzero[0]


@pytest.fixture(autouse=True)
def seed():
    torch.manual_seed(42)


@pytest.fixture(params=ALGEBRAS, ids=lambda cls: cls.__name__)
def algebra(request):
    return request.param


class TestRingLaws:
    def test_additive_group(self, algebra):
        for _ in range(N_SAMPLES):
            a, b, c = (random_int(algebra) for _ in range(3))
            zero = algebra.zero(dtype=torch.int64)
            assert a + b == b + a
            assert (a + b) + c == a + (b + c)
            assert a + zero == a
            assert (a + (-a)).is_zero()

    def test_geometric_product_associative(self, algebra):
        for _ in range(N_SAMPLES):
            a, b, c = (random_int(algebra) for _ in range(3))
            assert (a * b) * c == a * (b * c)

    def test_distributive(self, algebra):
        for _ in range(N_SAMPLES):
            a, b, c = (random_int(algebra) for _ in range(3))
            assert a * (b + c) == a * b + a * c
            assert (a + b) * c == a * c + b * c

    def test_identity(self, algebra):
        one = algebra.unit_scalar(dtype=torch.int64)
        for _ in range(N_SAMPLES):
            a = random_int(algebra)
            assert one * a == a
            assert a * one == a
            assert 1 * a == a

    def test_scalar_embedding(self, algebra):
        for _ in range(N_SAMPLES):
            a = random_int(algebra)
            s = algebra.from_scalar(3)
            assert a * 3 == a * s
            assert 3 + a == s + a
            assert 3 - a == s - a


class TestInvolutionLaws:
    def test_involutions_are_involutive(self, algebra):
        for _ in range(N_SAMPLES):
            a = random_int(algebra)
            assert a.reverse().reverse() == a
            assert a.involute().involute() == a
            assert a.conjugate().conjugate() == a
            assert a.conjugate() == a.reverse().involute()

    def test_reverse_is_anti_automorphism(self, algebra):
        for _ in range(N_SAMPLES):
            a, b = random_int(algebra), random_int(algebra)
            assert (a * b).reverse() == b.reverse() * a.reverse()
            assert (a * b).conjugate() == b.conjugate() * a.conjugate()

    def test_involute_is_automorphism(self, algebra):
        for _ in range(N_SAMPLES):
            a, b = random_int(algebra), random_int(algebra)
            assert (a * b).involute() == a.involute() * b.involute()

    def test_double_dual_negates(self, algebra):
        for _ in range(N_SAMPLES):
            a = random_int(algebra)
            assert a.dual().dual() == -a

    def test_dual_is_product_with_inverse_pseudoscalar(self, algebra):
        if algebra is EuclideanMultivector2:
            right = algebra.pseudoscalar(dtype=torch.int64)
        else:
            right = algebra.inv_pseudoscalar(dtype=torch.int64)
        for _ in range(N_SAMPLES):
            a = random_int(algebra)
            assert a.dual() == a * right


class TestGradeLaws:
    def test_grades_sum_to_whole(self, algebra):
        for _ in range(N_SAMPLES):
            a = random_int(algebra)
            total = algebra.zero(dtype=torch.int64)
            for k in range(len(algebra.GRADES)):
                total = total + a.grade(k)
            assert total == a

    def test_projection_idempotent(self, algebra):
        a = random_int(algebra)
        for k in range(len(algebra.GRADES) + 2):
            assert a.grade(k).grade(k) == a.grade(k)
        assert a.grade(len(algebra.GRADES)).is_zero()

    def test_outer_product_grades(self, algebra):
        for i in range(algebra.DIM):
            for j in range(algebra.DIM):
                sign, k = basis_product(algebra, i, j)
                wedge = algebra._unit(i, dtype=torch.int64) ^ algebra._unit(j, dtype=torch.int64)
                if grade_of(algebra, k) == grade_of(algebra, i) + grade_of(algebra, j):
                    assert wedge[k] == sign
                    assert wedge.grade(grade_of(algebra, k)) == wedge
                else:
                    assert wedge.is_zero()

    def test_contraction_grades(self, algebra):
        for i in range(algebra.DIM):
            for j in range(algebra.DIM):
                sign, k = basis_product(algebra, i, j)
                gi, gj, gk = grade_of(algebra, i), grade_of(algebra, j), grade_of(algebra, k)
                ui = algebra._unit(i, dtype=torch.int64)
                uj = algebra._unit(j, dtype=torch.int64)
                left = ui << uj
                right = ui >> uj
                if gk == gj - gi:
                    assert left[k] == sign
                else:
                    assert left.is_zero()
                if gk == gi - gj:
                    assert right[k] == sign
                else:
                    assert right.is_zero()


class TestOuterProductLaws:
    def test_associative(self, algebra):
        for _ in range(N_SAMPLES):
            a, b, c = (random_int(algebra) for _ in range(3))
            assert (a ^ b) ^ c == a ^ (b ^ c)

    def test_vectors_anticommute(self, algebra):
        for _ in range(N_SAMPLES):
            v = random_int(algebra).grade(1)
            w = random_int(algebra).grade(1)
            assert v ^ w == -(w ^ v)
            assert (v ^ v).is_zero()

    def test_vector_product_splits(self, algebra):
        # v w = v . w + v ^ w for vectors.
        for _ in range(N_SAMPLES):
            v = random_int(algebra).grade(1)
            w = random_int(algebra).grade(1)
            assert v * w == (v << w) + (v ^ w)

    def test_scalar_product_symmetric(self, algebra):
        for _ in range(N_SAMPLES):
            a, b = random_int(algebra), random_int(algebra)
            assert a | b == b | a


class TestMetricLaws:
    def test_magnitude_non_negative(self, algebra):
        for _ in range(N_SAMPLES):
            assert random_float(algebra).magnitude() >= 0.0
        assert algebra.zero().magnitude() == 0.0

    def test_magnitude_homogeneous(self, algebra):
        for _ in range(N_SAMPLES):
            a = random_float(algebra)
            assert (a * -2.5).magnitude() == pytest.approx(2.5 * a.magnitude())

    def test_normalize(self, algebra):
        for _ in range(N_SAMPLES):
            a = random_float(algebra)
            assert a.normalize().magnitude() == pytest.approx(1.0)

    def test_reverse_preserves_magnitude(self, algebra):
        for _ in range(N_SAMPLES):
            a = random_float(algebra)
            assert a.reverse().magnitude() == pytest.approx(a.magnitude())


class TestInverseLaws:
    def test_two_sided_inverse(self, algebra):
        one = algebra.unit_scalar(dtype=torch.float64).tensor
        for _ in range(N_SAMPLES):
            a = random_float(algebra)
            if not a.is_invertible():
                continue
            inv = a.inverse()
            assert torch.allclose((a * inv).tensor, one, atol=1e-8)
            assert torch.allclose((inv * a).tensor, one, atol=1e-8)

    def test_division_undoes_product(self, algebra):
        for _ in range(N_SAMPLES):
            a, b = random_float(algebra), random_float(algebra)
            if not b.is_invertible():
                continue
            assert torch.allclose(((a * b) / b).tensor, a.tensor, atol=1e-8)

    @pytest.mark.parametrize("scale", [1e-4, 1e4])
    def test_invertibility_is_scale_free(self, algebra, scale):
        one = algebra.unit_scalar(dtype=torch.float64).tensor
        for _ in range(N_SAMPLES):
            a = random_float(algebra)
            scaled = a * scale
            assert scaled.is_invertible() == a.is_invertible()
            if not a.is_invertible():
                continue
            assert torch.allclose((scaled * scaled.inverse()).tensor, one, atol=1e-8)


class TestCommutatorLaws:
    def test_self_commutator_vanishes(self, algebra):
        for _ in range(N_SAMPLES):
            a = random_float(algebra)
            assert torch.allclose(a.commutator(a).tensor, torch.zeros(algebra.DIM, dtype=torch.float64))

    def test_product_decomposes(self, algebra):
        for _ in range(N_SAMPLES):
            a, b = random_float(algebra), random_float(algebra)
            total = a.commutator(b) + a.anticommutator(b)
            assert torch.allclose(total.tensor, (a * b).tensor, atol=1e-12)

    def test_symmetry(self, algebra):
        a, b = random_float(algebra), random_float(algebra)
        assert torch.allclose(a.commutator(b).tensor, (-b.commutator(a)).tensor)
        assert torch.allclose(a.anticommutator(b).tensor, b.anticommutator(a).tensor)
