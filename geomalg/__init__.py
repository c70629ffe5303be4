# geomalg: Euclidean geometric algebra in two and three dimensions
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Low-dimensional Euclidean geometric algebra on torch tensors.

Provides the multivector value types of Cl(2,0,0) and Cl(3,0,0), their
closed-form product kernels, the scalar capability tiers, and the numeric
configuration they share.
"""

__version__ = "0.4.0"

from .config import ScalarConfig, get_config, set_config, load_config, resolve_device
from .validation import ScalarTypeError, NotInvertibleError, check_multivector
from .multivector import Multivector
from .e2ga import EuclideanMultivector2, G2, Basis2
from .e3ga import EuclideanMultivector3, G3, Basis3

from .scalar import (
    is_scalar,
    is_signed,
    is_float,
    integer_repr,
    default_epsilon,
    default_max_relative,
    default_max_ulps,
    abs_diff_eq,
    relative_eq,
    ulps_eq,
    abs_diff_all_eq,
    relative_all_eq,
    ulps_all_eq,
)

__all__ = [
    "__version__",
    # multivectors
    "Multivector",
    "EuclideanMultivector2",
    "EuclideanMultivector3",
    "G2",
    "G3",
    "Basis2",
    "Basis3",
    # config / validation
    "ScalarConfig",
    "get_config",
    "set_config",
    "load_config",
    "resolve_device",
    "ScalarTypeError",
    "NotInvertibleError",
    "check_multivector",
    # scalar tiers
    "is_scalar",
    "is_signed",
    "is_float",
    "integer_repr",
    "default_epsilon",
    "default_max_relative",
    "default_max_ulps",
    "abs_diff_eq",
    "relative_eq",
    "ulps_eq",
    "abs_diff_all_eq",
    "relative_all_eq",
    "ulps_all_eq",
]
