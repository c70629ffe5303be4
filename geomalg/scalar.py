# geomalg: Euclidean geometric algebra in two and three dimensions
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Scalar capability tiers and approximate comparison.

A multivector stores its components in a torch tensor, so the scalar type
of the algebra is the tensor dtype. Dtypes are sorted into three tiers:

- Scalar: integer or floating dtypes. Ring operations only.
- SignedScalar: Scalar with negation (every dtype except ``uint8``).
- FloatScalar: floating dtypes. Adds sqrt, abs, reciprocal and the three
  approximate equalities below.

Approximate equality comes in three flavours, matching the usual float
comparison toolkit:

- absolute difference: ``|a - b| <= epsilon``
- relative difference: ``|a - b| <= max(|a|, |b|) * max_relative``, with an
  absolute ``epsilon`` fallback near zero
- units in last place: compare the integer bit patterns of same-signed
  floats, again with an ``epsilon`` fallback near zero
"""

from typing import Optional, Union

import torch

from geomalg.config import get_config
from geomalg.validation import ScalarTypeError

Number = Union[int, float, torch.Tensor]

SCALAR_DTYPES = frozenset({
    torch.uint8,
    torch.int8,
    torch.int16,
    torch.int32,
    torch.int64,
    torch.float16,
    torch.bfloat16,
    torch.float32,
    torch.float64,
})

# Same-width integer companion used to reinterpret float bit patterns.
_INTEGER_REPR = {
    torch.float16: torch.int16,
    torch.bfloat16: torch.int16,
    torch.float32: torch.int32,
    torch.float64: torch.int64,
}

DEFAULT_MAX_ULPS = 4


def is_scalar(dtype: torch.dtype) -> bool:
    """True if *dtype* can back a multivector at all."""
    return dtype in SCALAR_DTYPES


def is_signed(dtype: torch.dtype) -> bool:
    """True if *dtype* supports negation."""
    return is_scalar(dtype) and dtype.is_signed


def is_float(dtype: torch.dtype) -> bool:
    """True if *dtype* supports division, sqrt and approximate equality."""
    return is_scalar(dtype) and dtype.is_floating_point


def require_scalar(dtype: torch.dtype, op: str = "operation") -> None:
    if not is_scalar(dtype):
        raise ScalarTypeError(f"{op}: {dtype} is not a supported scalar dtype")


def require_signed(dtype: torch.dtype, op: str = "operation") -> None:
    if not is_signed(dtype):
        raise ScalarTypeError(f"{op} requires a signed scalar dtype, got {dtype}")


def require_float(dtype: torch.dtype, op: str = "operation") -> None:
    if not is_float(dtype):
        raise ScalarTypeError(f"{op} requires a floating scalar dtype, got {dtype}")


def integer_repr(dtype: torch.dtype) -> torch.dtype:
    """Integer dtype of the same width as the float *dtype*."""
    require_float(dtype, "integer_repr")
    return _INTEGER_REPR[dtype]


def default_epsilon(dtype: torch.dtype) -> float:
    """Configured absolute tolerance, or machine epsilon of *dtype*."""
    require_float(dtype, "default_epsilon")
    eps = get_config().epsilon
    return torch.finfo(dtype).eps if eps is None else eps


def default_max_relative(dtype: torch.dtype) -> float:
    """Configured relative tolerance, or machine epsilon of *dtype*."""
    require_float(dtype, "default_max_relative")
    rel = get_config().max_relative
    return torch.finfo(dtype).eps if rel is None else rel


def default_max_ulps(dtype: torch.dtype) -> int:
    require_float(dtype, "default_max_ulps")
    return get_config().max_ulps


def _promote(a: Number, b: Number, op: str):
    """Bring *a* and *b* to one floating dtype and device."""
    dtype = torch.result_type(a, b)
    require_float(dtype, op)
    device = None
    for x in (a, b):
        if isinstance(x, torch.Tensor):
            device = x.device
            break
    a = torch.as_tensor(a, dtype=dtype, device=device).contiguous()
    b = torch.as_tensor(b, dtype=dtype, device=device).contiguous()
    return a, b, dtype


def abs_diff_eq(a: Number, b: Number, epsilon: Optional[float] = None) -> torch.Tensor:
    """Elementwise ``|a - b| <= epsilon``."""
    a, b, dtype = _promote(a, b, "abs_diff_eq")
    if epsilon is None:
        epsilon = default_epsilon(dtype)
    return (a - b).abs() <= epsilon


def relative_eq(
    a: Number,
    b: Number,
    epsilon: Optional[float] = None,
    max_relative: Optional[float] = None,
) -> torch.Tensor:
    """Elementwise relative comparison.

    Exactly equal values (including equal infinities) compare equal.
    Otherwise both values must be finite and either within ``epsilon`` of
    each other or within ``max_relative`` of the larger magnitude.
    """
    a, b, dtype = _promote(a, b, "relative_eq")
    if epsilon is None:
        epsilon = default_epsilon(dtype)
    if max_relative is None:
        max_relative = default_max_relative(dtype)

    diff = (a - b).abs()
    largest = torch.maximum(a.abs(), b.abs())
    finite = torch.isfinite(a) & torch.isfinite(b)
    close = (diff <= epsilon) | (diff <= largest * max_relative)
    return (a == b) | (finite & close)


def ulps_eq(
    a: Number,
    b: Number,
    epsilon: Optional[float] = None,
    max_ulps: Optional[int] = None,
) -> torch.Tensor:
    """Elementwise units-in-last-place comparison.

    Values within ``epsilon`` compare equal (this covers ``+0`` vs ``-0`` and
    tiny values of opposite sign). Otherwise values of different sign are
    unequal, and same-signed values are equal when their bit patterns are at
    most ``max_ulps`` apart. NaN never compares equal.
    """
    a, b, dtype = _promote(a, b, "ulps_eq")
    if epsilon is None:
        epsilon = default_epsilon(dtype)
    if max_ulps is None:
        max_ulps = default_max_ulps(dtype)

    near = (a - b).abs() <= epsilon
    rep = integer_repr(dtype)
    bits_a = a.view(rep).to(torch.int64)
    bits_b = b.view(rep).to(torch.int64)
    same_sign = torch.signbit(a) == torch.signbit(b)
    within = same_sign & ((bits_a - bits_b).abs() <= max_ulps)
    not_nan = ~(torch.isnan(a) | torch.isnan(b))
    return not_nan & (near | within)


def abs_diff_all_eq(a: Number, b: Number, epsilon: Optional[float] = None) -> bool:
    return bool(abs_diff_eq(a, b, epsilon).all())


def relative_all_eq(
    a: Number,
    b: Number,
    epsilon: Optional[float] = None,
    max_relative: Optional[float] = None,
) -> bool:
    return bool(relative_eq(a, b, epsilon, max_relative).all())


def ulps_all_eq(
    a: Number,
    b: Number,
    epsilon: Optional[float] = None,
    max_ulps: Optional[int] = None,
) -> bool:
    return bool(ulps_eq(a, b, epsilon, max_ulps).all())
