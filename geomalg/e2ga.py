# geomalg: Euclidean geometric algebra in two and three dimensions
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Two-dimensional Euclidean geometric algebra Cl(2,0,0).

A multivector is stored as four coefficients in the basis
``{1, e1, e2, e12}``:

    mv = a0 + a1 e1 + a2 e2 + a12 e12

The kernels below are the closed-form product tables of the algebra. They
act on the last axis of ``[..., 4]`` tensors, so they work on single
multivectors and on batches alike. :class:`EuclideanMultivector2` wraps a
single ``[4]`` tensor with operators.

Basis products (rows left, columns right):

    |     | 1   | e1   | e2  | e12 |
    | 1   | 1   | e1   | e2  | e12 |
    | e1  | e1  | 1    | e12 | e2  |
    | e2  | e2  | -e12 | 1   | -e1 |
    | e12 | e12 | -e2  | e1  | -1  |
"""

from enum import IntEnum

import torch

from geomalg.coordinates import impl_coordinates
from geomalg.multivector import Multivector
from geomalg.validation import check_multivector

DIM = 4

GRADES = ((0,), (1, 2), (3,))


class Basis2(IntEnum):
    """Storage positions of the basis blades."""

    C = 0
    E1 = 1
    E2 = 2
    E12 = 3


def _split(a: torch.Tensor, b: torch.Tensor, op: str):
    check_multivector(a, DIM, f"{op}(a)")
    check_multivector(b, DIM, f"{op}(b)")
    return a.unbind(-1), b.unbind(-1)


def geometric_product(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Computes the geometric product ``ab``.

    Args:
        a (torch.Tensor): Left operand [..., 4].
        b (torch.Tensor): Right operand [..., 4].

    Returns:
        torch.Tensor: The product [..., 4].
    """
    (a0, a1, a2, a3), (b0, b1, b2, b3) = _split(a, b, "geometric_product")
    return torch.stack([
        a0 * b0 + a1 * b1 + a2 * b2 - a3 * b3,
        a0 * b1 + a1 * b0 - a2 * b3 + a3 * b2,
        a0 * b2 + a1 * b3 + a2 * b0 - a3 * b1,
        a0 * b3 + a1 * b2 - a2 * b1 + a3 * b0,
    ], dim=-1)


def outer_product(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Computes the outer (wedge) product ``a ^ b``.

    Keeps the grade-raising part of the geometric product: products of
    blades that share a basis vector vanish.
    """
    (a0, a1, a2, a3), (b0, b1, b2, b3) = _split(a, b, "outer_product")
    return torch.stack([
        a0 * b0,
        a0 * b1 + a1 * b0,
        a0 * b2 + a2 * b0,
        a0 * b3 + a1 * b2 - a2 * b1 + a3 * b0,
    ], dim=-1)


def scalar_product(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Computes the scalar product ``a | b``: the componentwise sum in slot 0."""
    (a0, a1, a2, a3), (b0, b1, b2, b3) = _split(a, b, "scalar_product")
    r0 = a0 * b0 + a1 * b1 + a2 * b2 + a3 * b3
    zero = torch.zeros_like(r0)
    return torch.stack([r0, zero, zero, zero], dim=-1)


def left_contraction(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Computes the left contraction ``a << b``.

    For each pair of grades (r, s) keeps the grade ``s - r`` part of the
    geometric product; pairs with ``r > s`` contribute nothing.
    """
    (a0, a1, a2, a3), (b0, b1, b2, b3) = _split(a, b, "left_contraction")
    return torch.stack([
        a0 * b0 + a1 * b1 + a2 * b2 - a3 * b3,
        a0 * b1 - a2 * b3,
        a0 * b2 + a1 * b3,
        a0 * b3,
    ], dim=-1)


def right_contraction(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Computes the right contraction ``a >> b`` (grade ``r - s`` parts)."""
    (a0, a1, a2, a3), (b0, b1, b2, b3) = _split(a, b, "right_contraction")
    return torch.stack([
        a0 * b0 + a1 * b1 + a2 * b2 - a3 * b3,
        a1 * b0 + a3 * b2,
        a2 * b0 - a3 * b1,
        a3 * b0,
    ], dim=-1)


def reverse(mv: torch.Tensor) -> torch.Tensor:
    """Reversion: negates the bivector part."""
    check_multivector(mv, DIM, "reverse")
    a0, a1, a2, a3 = mv.unbind(-1)
    return torch.stack([a0, a1, a2, -a3], dim=-1)


def involute(mv: torch.Tensor) -> torch.Tensor:
    """Grade involution: negates the vector part."""
    check_multivector(mv, DIM, "involute")
    a0, a1, a2, a3 = mv.unbind(-1)
    return torch.stack([a0, -a1, -a2, a3], dim=-1)


def conjugate(mv: torch.Tensor) -> torch.Tensor:
    """Clifford conjugate: negates grades 1 and 2."""
    check_multivector(mv, DIM, "conjugate")
    a0, a1, a2, a3 = mv.unbind(-1)
    return torch.stack([a0, -a1, -a2, -a3], dim=-1)


def dual(mv: torch.Tensor) -> torch.Tensor:
    """Hodge dual ``(a0, a1, a2, a12) -> (-a12, -a2, a1, a0)``.

    Equal to right multiplication by ``e12``. Applying it twice negates.
    """
    check_multivector(mv, DIM, "dual")
    a0, a1, a2, a3 = mv.unbind(-1)
    return torch.stack([-a3, -a2, a1, a0], dim=-1)


def grade_projection(mv: torch.Tensor, grade: int) -> torch.Tensor:
    """Isolates a specific grade. Grades above 2 give zero."""
    check_multivector(mv, DIM, "grade_projection")
    result = torch.zeros_like(mv)
    if grade < len(GRADES):
        idx = list(GRADES[grade])
        result[..., idx] = mv[..., idx]
    return result


@impl_coordinates("scalar", "e1", "e2", "e12")
class EuclideanMultivector2(Multivector):
    """A multivector of the Euclidean plane.

    Components are accessible by position (``mv[3]``), by :class:`Basis2`
    (``mv[Basis2.E12]``) or by name (``mv.e12``); all three address the
    same storage.

    Attributes:
        tensor (torch.Tensor): Coefficients ``[scalar, e1, e2, e12]``.
    """

    DIM = DIM
    GRADES = GRADES

    _geometric_product = staticmethod(geometric_product)
    _outer_product = staticmethod(outer_product)
    _scalar_product = staticmethod(scalar_product)
    _left_contraction = staticmethod(left_contraction)
    _right_contraction = staticmethod(right_contraction)
    _reverse = staticmethod(reverse)
    _involute = staticmethod(involute)
    _conjugate = staticmethod(conjugate)
    _dual = staticmethod(dual)
    _grade_projection = staticmethod(grade_projection)

    @classmethod
    def unit_e1(cls, dtype=None, device=None):
        return cls._unit(Basis2.E1, dtype, device)

    @classmethod
    def unit_e2(cls, dtype=None, device=None):
        return cls._unit(Basis2.E2, dtype, device)

    @classmethod
    def unit_e12(cls, dtype=None, device=None):
        return cls._unit(Basis2.E12, dtype, device)

    def _inverse_numerator(self) -> torch.Tensor:
        # M * conj(M) = a0^2 - a1^2 - a2^2 + a12^2, a pure scalar in Cl(2,0).
        return conjugate(self.tensor)


G2 = EuclideanMultivector2
