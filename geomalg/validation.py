# geomalg: Euclidean geometric algebra in two and three dimensions
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Lightweight input validation for geomalg tensors.

Shape checks use ``assert`` so they are free under ``python -O``.
Set ``VALIDATE = False`` (or ``ScalarConfig(validate=False)``) to disable
them even without the -O flag. Index checks always run.
"""

import torch

VALIDATE = True


class ScalarTypeError(TypeError):
    """The storage dtype lacks a capability the operation needs."""


class NotInvertibleError(ZeroDivisionError):
    """Division by a multivector with no inverse."""


def check_multivector(x: torch.Tensor, dim: int, name: str = "x") -> None:
    """Assert *x* looks like a batch of multivectors with *dim* components.

    Checks ``x.ndim >= 1`` and ``x.shape[-1] == dim``.
    """
    if not VALIDATE:
        return
    assert x.ndim >= 1, (
        f"{name}: expected ndim >= 1, got shape {tuple(x.shape)}"
    )
    assert x.shape[-1] == dim, (
        f"{name}: last dim should be {dim} (algebra dim), "
        f"got {x.shape[-1]} (shape {tuple(x.shape)})"
    )


def check_index(index, dim: int) -> int:
    """Return *index* as a plain int, raising if it names no component."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(
            f"multivector indices must be integers, not {type(index).__name__}"
        )
    if not 0 <= index < dim:
        raise IndexError(f"index {index} out of range for {dim} components")
    return int(index)


def check_grade(grade) -> int:
    """Grades are non-negative integers; anything above the dimension is legal."""
    if isinstance(grade, bool) or not isinstance(grade, int):
        raise TypeError(f"grade must be an integer, not {type(grade).__name__}")
    if grade < 0:
        raise ValueError(f"grade must be non-negative, got {grade}")
    return int(grade)
