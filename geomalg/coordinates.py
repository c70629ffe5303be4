# geomalg: Euclidean geometric algebra in two and three dimensions
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Named access to multivector components.

A multivector keeps its components in one flat tensor. The names of the
basis blades (``scalar``, ``e1``, ``e2``, ``e12`` ...) are a second view of
the same storage: each name is a :class:`Coordinate` descriptor bound to a
fixed position, so

    mv.e12        <--> mv[3]
    mv.e12 = 5.0  <--> mv[3] = 5.0

for the two-dimensional algebra. Nothing is copied.
"""

from typing import Sequence


class Coordinate:
    """Data descriptor aliasing one slot of ``instance.tensor``."""

    __slots__ = ("index", "name")

    def __init__(self, index: int, name: str = ""):
        self.index = index
        self.name = name

    def __set_name__(self, owner, name):
        if not self.name:
            self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.tensor[self.index].item()

    def __set__(self, instance, value):
        instance.tensor[self.index] = value

    def __repr__(self):
        return f"Coordinate({self.index}, {self.name!r})"


def impl_coordinates(*names: str):
    """Class decorator installing one :class:`Coordinate` per basis name.

    The position of each name in *names* is its storage index. The tuple is
    also recorded on the class as ``BASIS``.
    """
    def decorate(cls):
        for index, name in enumerate(names):
            setattr(cls, name, Coordinate(index, name))
        cls.BASIS = tuple(names)
        return cls
    return decorate


def format_components(values: Sequence, names: Sequence[str]) -> str:
    """Render ``a0 + a1^e1 + ...`` with the scalar part unlabelled."""
    parts = [str(values[0])]
    parts.extend(f"{v}^{n}" for v, n in zip(values[1:], names[1:]))
    return " + ".join(parts)
