# geomalg: Euclidean geometric algebra in two and three dimensions
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Three-dimensional Euclidean geometric algebra Cl(3,0,0).

Storage order is ``{1, e1, e2, e3, e12, e23, e31, e123}``. The bivectors
are ordered cyclically (``e12, e23, e31``), which fixes the signs below.

Basis products (rows left, columns right):

    |      | 1    | e1   | e2   | e3   | e12  | e23  | e31  | e123 |
    | 1    | 1    | e1   | e2   | e3   | e12  | e23  | e31  | e123 |
    | e1   | e1   | 1    | e12  | -e31 | e2   | e123 | -e3  | e23  |
    | e2   | e2   | -e12 | 1    | e23  | -e1  | e3   | e123 | e31  |
    | e3   | e3   | e31  | -e23 | 1    | e123 | -e2  | e1   | e12  |
    | e12  | e12  | -e2  | e1   | e123 | -1   | -e31 | e23  | -e3  |
    | e23  | e23  | e123 | -e3  | e2   | e31  | -1   | -e12 | -e1  |
    | e31  | e31  | e3   | e123 | -e1  | -e23 | e12  | -1   | -e2  |
    | e123 | e123 | e23  | e31  | e12  | -e3  | -e1  | -e2  | -1   |

All kernels act on the last axis of ``[..., 8]`` tensors.
"""

from enum import IntEnum

import torch

from geomalg.coordinates import impl_coordinates
from geomalg.multivector import Multivector
from geomalg.validation import check_multivector

DIM = 8

GRADES = ((0,), (1, 2, 3), (4, 5, 6), (7,))


class Basis3(IntEnum):
    """Storage positions of the basis blades."""

    C = 0
    E1 = 1
    E2 = 2
    E3 = 3
    E12 = 4
    E23 = 5
    E31 = 6
    E123 = 7


def _split(a: torch.Tensor, b: torch.Tensor, op: str):
    check_multivector(a, DIM, f"{op}(a)")
    check_multivector(b, DIM, f"{op}(b)")
    return a.unbind(-1), b.unbind(-1)


def _scalar_part(a, b):
    a0, a1, a2, a3, a4, a5, a6, a7 = a
    b0, b1, b2, b3, b4, b5, b6, b7 = b
    # Vectors square to +1; bivectors and the pseudoscalar to -1.
    return (a0 * b0 + a1 * b1 + a2 * b2 + a3 * b3
            - a4 * b4 - a5 * b5 - a6 * b6 - a7 * b7)


def geometric_product(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Computes the geometric product ``ab``.

    Args:
        a (torch.Tensor): Left operand [..., 8].
        b (torch.Tensor): Right operand [..., 8].

    Returns:
        torch.Tensor: The product [..., 8].
    """
    ca, cb = _split(a, b, "geometric_product")
    a0, a1, a2, a3, a4, a5, a6, a7 = ca
    b0, b1, b2, b3, b4, b5, b6, b7 = cb
    return torch.stack([
        _scalar_part(ca, cb),
        a0 * b1 + a1 * b0 - a2 * b4 + a3 * b6 + a4 * b2 - a5 * b7 - a6 * b3 - a7 * b5,
        a0 * b2 + a1 * b4 + a2 * b0 - a3 * b5 - a4 * b1 + a5 * b3 - a6 * b7 - a7 * b6,
        a0 * b3 - a1 * b6 + a2 * b5 + a3 * b0 - a4 * b7 - a5 * b2 + a6 * b1 - a7 * b4,
        a0 * b4 + a1 * b2 - a2 * b1 + a3 * b7 + a4 * b0 - a5 * b6 + a6 * b5 + a7 * b3,
        a0 * b5 + a1 * b7 + a2 * b3 - a3 * b2 + a4 * b6 + a5 * b0 - a6 * b4 + a7 * b1,
        a0 * b6 - a1 * b3 + a2 * b7 + a3 * b1 - a4 * b5 + a5 * b4 + a6 * b0 + a7 * b2,
        a0 * b7 + a1 * b5 + a2 * b6 + a3 * b4 + a4 * b3 + a5 * b1 + a6 * b2 + a7 * b0,
    ], dim=-1)


def outer_product(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Computes the outer (wedge) product ``a ^ b``.

    Blades sharing a basis vector wedge to zero; everything wedged with
    ``e123`` except a scalar vanishes.
    """
    (a0, a1, a2, a3, a4, a5, a6, a7), (b0, b1, b2, b3, b4, b5, b6, b7) = \
        _split(a, b, "outer_product")
    return torch.stack([
        a0 * b0,
        a0 * b1 + a1 * b0,
        a0 * b2 + a2 * b0,
        a0 * b3 + a3 * b0,
        a0 * b4 + a1 * b2 - a2 * b1 + a4 * b0,
        a0 * b5 + a2 * b3 - a3 * b2 + a5 * b0,
        a0 * b6 - a1 * b3 + a3 * b1 + a6 * b0,
        a0 * b7 + a1 * b5 + a2 * b6 + a3 * b4 + a4 * b3 + a5 * b1 + a6 * b2 + a7 * b0,
    ], dim=-1)


def scalar_product(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Computes the scalar product ``a | b = <ab>_0``."""
    ca, cb = _split(a, b, "scalar_product")
    r0 = _scalar_part(ca, cb)
    zero = torch.zeros_like(r0)
    return torch.stack([r0] + [zero] * (DIM - 1), dim=-1)


def left_contraction(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Computes the left contraction ``a << b``.

    For each pair of grades (r, s) keeps the grade ``s - r`` part of the
    geometric product; pairs with ``r > s`` contribute nothing.
    """
    ca, cb = _split(a, b, "left_contraction")
    a0, a1, a2, a3, a4, a5, a6, a7 = ca
    b0, b1, b2, b3, b4, b5, b6, b7 = cb
    return torch.stack([
        _scalar_part(ca, cb),
        a0 * b1 - a2 * b4 + a3 * b6 - a5 * b7,
        a0 * b2 + a1 * b4 - a3 * b5 - a6 * b7,
        a0 * b3 - a1 * b6 + a2 * b5 - a4 * b7,
        a0 * b4 + a3 * b7,
        a0 * b5 + a1 * b7,
        a0 * b6 + a2 * b7,
        a0 * b7,
    ], dim=-1)


def right_contraction(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Computes the right contraction ``a >> b`` (grade ``r - s`` parts)."""
    ca, cb = _split(a, b, "right_contraction")
    a0, a1, a2, a3, a4, a5, a6, a7 = ca
    b0, b1, b2, b3, b4, b5, b6, b7 = cb
    return torch.stack([
        _scalar_part(ca, cb),
        a1 * b0 + a4 * b2 - a6 * b3 - a7 * b5,
        a2 * b0 - a4 * b1 + a5 * b3 - a7 * b6,
        a3 * b0 - a5 * b2 + a6 * b1 - a7 * b4,
        a4 * b0 + a7 * b3,
        a5 * b0 + a7 * b1,
        a6 * b0 + a7 * b2,
        a7 * b0,
    ], dim=-1)


_REVERSE_SIGNS = (1, 1, 1, 1, -1, -1, -1, -1)
_INVOLUTE_SIGNS = (1, -1, -1, -1, 1, 1, 1, -1)
_CONJUGATE_SIGNS = (1, -1, -1, -1, -1, -1, -1, 1)


def _apply_signs(mv: torch.Tensor, signs, op: str) -> torch.Tensor:
    check_multivector(mv, DIM, op)
    return torch.stack(
        [c if s > 0 else -c for c, s in zip(mv.unbind(-1), signs)], dim=-1
    )


def reverse(mv: torch.Tensor) -> torch.Tensor:
    """Reversion: blade of grade k gets sign (-1)^(k(k-1)/2).

    Grades 2 and 3 flip.
    """
    return _apply_signs(mv, _REVERSE_SIGNS, "reverse")


def involute(mv: torch.Tensor) -> torch.Tensor:
    """Grade involution: odd grades flip."""
    return _apply_signs(mv, _INVOLUTE_SIGNS, "involute")


def conjugate(mv: torch.Tensor) -> torch.Tensor:
    """Clifford conjugate: grades 1 and 2 flip."""
    return _apply_signs(mv, _CONJUGATE_SIGNS, "conjugate")


def dual(mv: torch.Tensor) -> torch.Tensor:
    """Hodge dual, ``mv * e123^-1`` with ``e123^-1 = -e123``.

    1 -> -e123, e1 -> -e23, e2 -> -e31, e3 -> -e12 and
    e12 -> e3, e23 -> e1, e31 -> e2, e123 -> 1. Applying it twice negates.
    """
    check_multivector(mv, DIM, "dual")
    a0, a1, a2, a3, a4, a5, a6, a7 = mv.unbind(-1)
    return torch.stack([a7, a5, a6, a4, -a3, -a1, -a2, -a0], dim=-1)


def grade_projection(mv: torch.Tensor, grade: int) -> torch.Tensor:
    """Isolates a specific grade. Grades above 3 give zero."""
    check_multivector(mv, DIM, "grade_projection")
    result = torch.zeros_like(mv)
    if grade < len(GRADES):
        idx = list(GRADES[grade])
        result[..., idx] = mv[..., idx]
    return result


@impl_coordinates("scalar", "e1", "e2", "e3", "e12", "e23", "e31", "e123")
class EuclideanMultivector3(Multivector):
    """A multivector of Euclidean 3-space.

    Attributes:
        tensor (torch.Tensor): Coefficients
            ``[scalar, e1, e2, e3, e12, e23, e31, e123]``.
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
        return cls._unit(Basis3.E1, dtype, device)

    @classmethod
    def unit_e2(cls, dtype=None, device=None):
        return cls._unit(Basis3.E2, dtype, device)

    @classmethod
    def unit_e3(cls, dtype=None, device=None):
        return cls._unit(Basis3.E3, dtype, device)

    @classmethod
    def unit_e12(cls, dtype=None, device=None):
        return cls._unit(Basis3.E12, dtype, device)

    @classmethod
    def unit_e23(cls, dtype=None, device=None):
        return cls._unit(Basis3.E23, dtype, device)

    @classmethod
    def unit_e31(cls, dtype=None, device=None):
        return cls._unit(Basis3.E31, dtype, device)

    @classmethod
    def unit_e123(cls, dtype=None, device=None):
        return cls._unit(Basis3.E123, dtype, device)

    def _inverse_numerator(self) -> torch.Tensor:
        # M * conj(M) = z is scalar + pseudoscalar and involute(z) = M^ M~,
        # so M * (conj(M) M^ M~) = z * conj_z is a pure scalar.
        t = self.tensor
        return geometric_product(geometric_product(conjugate(t), involute(t)), reverse(t))


G3 = EuclideanMultivector3
