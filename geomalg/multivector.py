# geomalg: Euclidean geometric algebra in two and three dimensions
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Multivector value base class.

Provides a high-level object-oriented wrapper around a flat coefficient
tensor to enable operator overloading (e.g., ``A * B`` for the geometric
product). Concrete algebras subclass :class:`Multivector` and plug in their
closed-form kernels; everything that only depends on those kernels lives
here.

Operator map:

    A + B, A - B    componentwise sum / difference
    A * B           geometric product
    A ^ B           outer (wedge) product
    A | B           scalar product
    A << B          left contraction
    A >> B          right contraction
    A / B           A * inverse(B)
    -A, ~A          negation, reverse

A plain number on either side is embedded as the scalar multivector
``(s, 0, ..., 0)`` before the operator is applied.
"""

import numbers
from typing import Callable, List, Optional, Tuple

import torch

from log import get_logger
from geomalg.config import get_config
from geomalg.coordinates import format_components
from geomalg.scalar import (
    abs_diff_all_eq,
    relative_all_eq,
    require_float,
    require_scalar,
    require_signed,
    ulps_all_eq,
)
from geomalg.validation import NotInvertibleError, check_grade, check_index

logger = get_logger(__name__)

Kernel = Callable[[torch.Tensor, torch.Tensor], torch.Tensor]


def _is_number(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, torch.Tensor):
        return value.ndim == 0
    return isinstance(value, numbers.Real)


def _infer_dtype(values) -> torch.dtype:
    """Integers stay integral; any float selects the configured float dtype."""
    dtypes = [v.dtype for v in values if isinstance(v, torch.Tensor)]
    if dtypes:
        dtype = dtypes[0]
        for d in dtypes[1:]:
            dtype = torch.promote_types(dtype, d)
        if any(isinstance(v, float) for v in values) and not dtype.is_floating_point:
            dtype = get_config().torch_dtype
        return dtype
    if all(isinstance(v, numbers.Integral) for v in values):
        return torch.int64
    return get_config().torch_dtype


class Multivector:
    """Fixed-size multivector backed by a 1-D coefficient tensor.

    Attributes:
        tensor (torch.Tensor): The raw coefficients ``[DIM]``. Named
            components (``mv.e1`` ...) are views onto this storage.
    """

    DIM: int = 0
    BASIS: Tuple[str, ...] = ()
    # grade -> storage indices of that grade
    GRADES: Tuple[Tuple[int, ...], ...] = ()

    _geometric_product: Kernel
    _outer_product: Kernel
    _scalar_product: Kernel
    _left_contraction: Kernel
    _right_contraction: Kernel
    _reverse: Callable[[torch.Tensor], torch.Tensor]
    _involute: Callable[[torch.Tensor], torch.Tensor]
    _conjugate: Callable[[torch.Tensor], torch.Tensor]
    _dual: Callable[[torch.Tensor], torch.Tensor]
    _grade_projection: Callable[[torch.Tensor, int], torch.Tensor]

    def __init__(self, *components, dtype: Optional[torch.dtype] = None, device=None):
        """Initializes a multivector from its components in storage order.

        Args:
            *components: Exactly ``DIM`` numbers.
            dtype (torch.dtype, optional): Scalar dtype. Inferred when omitted.
            device (optional): Storage device. Defaults to the configured one.
        """
        if len(components) != self.DIM:
            raise ValueError(
                f"{type(self).__name__} takes {self.DIM} components, got {len(components)}"
            )
        if dtype is None:
            dtype = _infer_dtype(components)
        require_scalar(dtype, type(self).__name__)
        if device is None:
            device = get_config().device
        values = [c.item() if isinstance(c, torch.Tensor) else c for c in components]
        self.tensor = torch.tensor(values, dtype=dtype, device=device)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def _wrap(cls, tensor: torch.Tensor) -> "Multivector":
        mv = cls.__new__(cls)
        mv.tensor = tensor
        return mv

    @classmethod
    def new(cls, *components, dtype: Optional[torch.dtype] = None, device=None):
        """Alias of the constructor."""
        return cls(*components, dtype=dtype, device=device)

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor) -> "Multivector":
        """Wraps an existing ``[DIM]`` tensor without copying it."""
        if tensor.shape != (cls.DIM,):
            raise ValueError(
                f"{cls.__name__} needs a tensor of shape ({cls.DIM},), got {tuple(tensor.shape)}"
            )
        require_scalar(tensor.dtype, cls.__name__)
        return cls._wrap(tensor)

    @classmethod
    def zero(cls, dtype: Optional[torch.dtype] = None, device=None):
        """The additive identity."""
        cfg = get_config()
        return cls._wrap(torch.zeros(
            cls.DIM,
            dtype=dtype or cfg.torch_dtype,
            device=device or cfg.device,
        ))

    @classmethod
    def _unit(cls, index: int, dtype: Optional[torch.dtype] = None, device=None):
        mv = cls.zero(dtype=dtype, device=device)
        mv.tensor[int(index)] = 1
        return mv

    @classmethod
    def from_scalar(cls, scalar, dtype: Optional[torch.dtype] = None, device=None):
        """Embeds *scalar* as ``(scalar, 0, ..., 0)``."""
        if dtype is None:
            dtype = _infer_dtype([scalar])
        mv = cls.zero(dtype=dtype, device=device)
        mv.tensor[0] = scalar
        return mv

    @classmethod
    def unit_scalar(cls, dtype: Optional[torch.dtype] = None, device=None):
        """The multiplicative identity."""
        return cls._unit(0, dtype, device)

    @classmethod
    def pseudoscalar(cls, dtype: Optional[torch.dtype] = None, device=None):
        """The unit blade of top grade."""
        return cls._unit(cls.DIM - 1, dtype, device)

    @classmethod
    def inv_pseudoscalar(cls, dtype: Optional[torch.dtype] = None, device=None):
        """Inverse of the unit pseudoscalar. Both Euclidean ones square to -1."""
        return -cls.pseudoscalar(dtype, device)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    @property
    def dtype(self) -> torch.dtype:
        return self.tensor.dtype

    @property
    def device(self) -> torch.device:
        return self.tensor.device

    def __len__(self) -> int:
        return self.DIM

    def __getitem__(self, index):
        return self.tensor[check_index(index, self.DIM)].item()

    def __setitem__(self, index, value):
        self.tensor[check_index(index, self.DIM)] = value

    def __iter__(self):
        return iter(self.tensor.tolist())

    def tolist(self) -> List:
        return self.tensor.tolist()

    def as_slice(self) -> List:
        """Components in storage order."""
        return self.tensor.tolist()

    def as_tuple(self) -> Tuple:
        return tuple(self.tensor.tolist())

    def copy(self) -> "Multivector":
        return self._wrap(self.tensor.clone())

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def to(self, dtype: Optional[torch.dtype] = None, device=None) -> "Multivector":
        """Returns a copy converted to *dtype* and/or moved to *device*."""
        if dtype is not None:
            require_scalar(dtype, "to")
        return self._wrap(self.tensor.to(device=device, dtype=dtype, copy=True))

    def is_zero(self) -> bool:
        """True iff every component is zero."""
        return bool(torch.all(self.tensor == 0))

    def grade(self, k: int) -> "Multivector":
        """Projects onto grade *k*. Grades above the dimension give zero."""
        return self._wrap(self._grade_projection(self.tensor, check_grade(k)))

    def __repr__(self):
        comps = ", ".join(str(v) for v in self.tensor.tolist())
        return f"{type(self).__name__}({comps}, dtype={self.dtype})"

    def __str__(self):
        return format_components(self.tensor.tolist(), self.BASIS)

    # ------------------------------------------------------------------
    # Operand coercion
    # ------------------------------------------------------------------

    def _coerce(self, other):
        """Promote *self* and *other* to a common dtype.

        Returns:
            ``(lhs, rhs)`` tensors, or ``None`` if *other* is not an operand
            of this algebra. A scalar *other* is embedded in slot 0.
        """
        if isinstance(other, Multivector):
            if type(other) is not type(self):
                return None
            dtype = torch.promote_types(self.dtype, other.dtype)
            return self.tensor.to(dtype), other.tensor.to(dtype)
        if _is_number(other):
            if not isinstance(other, (torch.Tensor, int, float)):
                other = int(other) if isinstance(other, numbers.Integral) else float(other)
            dtype = torch.result_type(self.tensor, other)
            lhs = self.tensor.to(dtype)
            rhs = torch.zeros_like(lhs)
            rhs[0] = other
            return lhs, rhs
        return None

    def _binary(self, other, kernel: Kernel, reflected: bool = False):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        lhs, rhs = pair
        if reflected:
            lhs, rhs = rhs, lhs
        return self._wrap(kernel(lhs, rhs))

    def _same_algebra(self, other, op: str) -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"{op}: expected {type(self).__name__}, got {type(other).__name__}"
            )

    # ------------------------------------------------------------------
    # Ring operators
    # ------------------------------------------------------------------

    def __add__(self, other):
        """Componentwise addition. A scalar only touches slot 0."""
        return self._binary(other, torch.add)

    def __radd__(self, other):
        return self._binary(other, torch.add, reflected=True)

    def __sub__(self, other):
        return self._binary(other, torch.sub)

    def __rsub__(self, other):
        return self._binary(other, torch.sub, reflected=True)

    def __mul__(self, other):
        """Geometric product (A * B). A scalar scales every component."""
        if _is_number(other) and not isinstance(other, Multivector):
            return self._wrap(self.tensor * other)
        return self._binary(other, type(self)._geometric_product)

    def __rmul__(self, other):
        if _is_number(other):
            return self._wrap(other * self.tensor)
        return self._binary(other, type(self)._geometric_product, reflected=True)

    def __xor__(self, other):
        """Outer product (A ^ B)."""
        return self._binary(other, type(self)._outer_product)

    def __rxor__(self, other):
        return self._binary(other, type(self)._outer_product, reflected=True)

    def __or__(self, other):
        """Scalar product (A | B)."""
        return self._binary(other, type(self)._scalar_product)

    def __ror__(self, other):
        return self._binary(other, type(self)._scalar_product, reflected=True)

    def __lshift__(self, other):
        """Left contraction (A << B)."""
        return self._binary(other, type(self)._left_contraction)

    def __rlshift__(self, other):
        return self._binary(other, type(self)._left_contraction, reflected=True)

    def __rshift__(self, other):
        """Right contraction (A >> B)."""
        return self._binary(other, type(self)._right_contraction)

    def __rrshift__(self, other):
        return self._binary(other, type(self)._right_contraction, reflected=True)

    def __truediv__(self, other):
        """Division by a scalar, or right multiplication by an inverse."""
        if isinstance(other, Multivector):
            if type(other) is not type(self):
                return NotImplemented
            return self * other._checked_inverse("division")
        if _is_number(other):
            require_float(torch.result_type(self.tensor, other), "division")
            return self._wrap(self.tensor / other)
        return NotImplemented

    def __rtruediv__(self, other):
        if not _is_number(other):
            return NotImplemented
        return other * self._checked_inverse("division")

    def __neg__(self):
        require_signed(self.dtype, "negation")
        return self._wrap(-self.tensor)

    def __pos__(self):
        return self.copy()

    def __invert__(self):
        """Reversion (~A)."""
        return self.reverse()

    def __eq__(self, other):
        if not isinstance(other, Multivector):
            return NotImplemented
        if type(other) is not type(self):
            return False
        lhs, rhs = self._coerce(other)
        return bool(torch.all(lhs == rhs))

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    # ------------------------------------------------------------------
    # Named products
    # ------------------------------------------------------------------

    def wedge(self, other):
        return self ^ other

    outer_product = wedge

    def dot(self, other):
        return self | other

    scalar_product = dot

    def left_contract(self, other):
        return self << other

    def right_contract(self, other):
        return self >> other

    # ------------------------------------------------------------------
    # Involutions and dual
    # ------------------------------------------------------------------

    def _unary(self, kernel, op: str):
        require_signed(self.dtype, op)
        return self._wrap(kernel(self.tensor))

    def _unary_(self, kernel, op: str):
        require_signed(self.dtype, op)
        self.tensor.copy_(kernel(self.tensor))
        return self

    def reverse(self):
        """Reverses the order of the vectors in every blade."""
        return self._unary(type(self)._reverse, "reverse")

    def reverse_(self):
        return self._unary_(type(self)._reverse, "reverse")

    def involute(self):
        """Grade involution: negates the odd grades."""
        return self._unary(type(self)._involute, "involute")

    def involute_(self):
        return self._unary_(type(self)._involute, "involute")

    def conjugate(self):
        """Clifford conjugate: reverse composed with grade involution."""
        return self._unary(type(self)._conjugate, "conjugate")

    def conjugate_(self):
        return self._unary_(type(self)._conjugate, "conjugate")

    def dual(self):
        """Hodge dual."""
        return self._unary(type(self)._dual, "dual")

    def dual_(self):
        return self._unary_(type(self)._dual, "dual")

    # ------------------------------------------------------------------
    # Metric (floating point only)
    # ------------------------------------------------------------------

    def _magnitude_squared(self) -> torch.Tensor:
        require_float(self.dtype, "magnitude")
        prod = self._geometric_product(self.tensor, self._reverse(self.tensor))
        return prod[0].abs()

    def magnitude_squared(self) -> float:
        """``|<M ~M>_0|``."""
        return self._magnitude_squared().item()

    def magnitude(self) -> float:
        return self._magnitude_squared().sqrt().item()

    def imagnitude_squared(self) -> float:
        """Squared magnitude of the dual."""
        return self.dual().magnitude_squared()

    def imagnitude(self) -> float:
        return self.dual().magnitude()

    def normalize(self):
        """Rescales to unit magnitude."""
        return self.normalize_to(1.0)

    def normalize_to(self, magnitude):
        mag = self._magnitude_squared().sqrt()
        return self._wrap(self.tensor * (magnitude / mag))

    def distance_squared(self, other) -> float:
        self._same_algebra(other, "distance_squared")
        return (self - other).magnitude_squared()

    def distance(self, other) -> float:
        self._same_algebra(other, "distance")
        return (self - other).magnitude()

    # ------------------------------------------------------------------
    # Inverse
    # ------------------------------------------------------------------

    def _inverse_numerator(self) -> torch.Tensor:
        """``N`` such that ``M N`` is a pure scalar, so ``M^-1 = N / <M N>_0``."""
        raise NotImplementedError

    def _inverse_denominator(self, numerator: torch.Tensor) -> torch.Tensor:
        return self._geometric_product(self.tensor, numerator)[0]

    def is_invertible(self) -> bool:
        """True when the squared magnitude is nonzero and ``M`` is not null.

        The squared magnitude is compared against zero in units in the last
        place, with the configured absolute tolerance as a fallback. Null
        multivectors (``1 + e1``) have a nonzero magnitude but a vanishing
        inverse denominator; that denominator scales like ``|M|^4``, so it
        is divided by ``|M|^4`` before the comparison.
        """
        mag_sq = self._magnitude_squared()
        if ulps_all_eq(mag_sq, 0.0):
            return False
        denominator = self._inverse_denominator(self._inverse_numerator())
        return not ulps_all_eq(denominator / mag_sq / mag_sq, 0.0)

    def _inverse_unchecked(self):
        numerator = self._inverse_numerator()
        return self._wrap(numerator / self._inverse_denominator(numerator))

    def _checked_inverse(self, op: str):
        require_float(self.dtype, op)
        if not self.is_invertible():
            raise NotInvertibleError(f"{op}: {self!r} is not invertible")
        return self._inverse_unchecked()

    def inverse(self):
        """Two-sided inverse, or ``None`` if the multivector has none.

        Only an exactly zero magnitude or inverse denominator gives ``None``;
        tiny but nonzero values are inverted.
        """
        require_float(self.dtype, "inverse")
        numerator = self._inverse_numerator()
        denominator = self._inverse_denominator(numerator)
        if self._magnitude_squared() == 0 or denominator == 0:
            logger.debug("inverse() of non-invertible %r", self)
            return None
        return self._wrap(numerator / denominator)

    # ------------------------------------------------------------------
    # Commutators
    # ------------------------------------------------------------------

    def commutator(self, other):
        """``(A B - B A) / 2``."""
        self._same_algebra(other, "commutator")
        require_float(torch.promote_types(self.dtype, other.dtype), "commutator")
        return (self * other - other * self) * 0.5

    x = commutator

    def anticommutator(self, other):
        """``(A B + B A) / 2``."""
        self._same_algebra(other, "anticommutator")
        require_float(torch.promote_types(self.dtype, other.dtype), "anticommutator")
        return (self * other + other * self) * 0.5

    # ------------------------------------------------------------------
    # Approximate comparison
    # ------------------------------------------------------------------

    def abs_diff_eq(self, other, epsilon: Optional[float] = None) -> bool:
        self._same_algebra(other, "abs_diff_eq")
        return abs_diff_all_eq(self.tensor, other.tensor, epsilon)

    def relative_eq(
        self,
        other,
        epsilon: Optional[float] = None,
        max_relative: Optional[float] = None,
    ) -> bool:
        self._same_algebra(other, "relative_eq")
        return relative_all_eq(self.tensor, other.tensor, epsilon, max_relative)

    def ulps_eq(
        self,
        other,
        epsilon: Optional[float] = None,
        max_ulps: Optional[int] = None,
    ) -> bool:
        self._same_algebra(other, "ulps_eq")
        return ulps_all_eq(self.tensor, other.tensor, epsilon, max_ulps)
