# geomalg: Euclidean geometric algebra in two and three dimensions
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Numeric configuration for geomalg.

Centralises device resolution, the default floating dtype, approximate
comparison tolerances and validation into a single :class:`ScalarConfig`
dataclass. A process-wide instance is held by :func:`get_config`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional

import torch
from omegaconf import DictConfig, OmegaConf

from log import get_logger, parse_level, set_level

logger = get_logger(__name__)

_DTYPES = {
    "float16": torch.float16,
    "half": torch.float16,
    "bfloat16": torch.bfloat16,
    "float32": torch.float32,
    "float": torch.float32,
    "float64": torch.float64,
    "double": torch.float64,
}


def resolve_device(device: str = "auto") -> str:
    """Resolve ``'auto'`` to the best available accelerator.

    Priority: cuda > mps > cpu.
    """
    if device != "auto":
        return device
    if torch.cuda.is_available():
        return "cuda"
    if hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
        return "mps"
    return "cpu"


def resolve_dtype(name: Optional[str]) -> torch.dtype:
    """Map a dtype name (``'float64'``, ``'double'`` ...) to a torch dtype.

    ``None`` resolves to :func:`torch.get_default_dtype`.
    """
    if name is None:
        return torch.get_default_dtype()
    key = name.replace("torch.", "").lower()
    if key not in _DTYPES:
        raise ValueError(
            f"Unknown floating dtype '{name}'. Available: {sorted(_DTYPES)}"
        )
    return _DTYPES[key]


@dataclass
class ScalarConfig:
    """Bag of numeric settings shared by every multivector operation.

    Attributes:
        device: Device new multivectors are allocated on. ``'auto'`` is
            resolved on construction.
        dtype: Name of the floating dtype used when a constructor gets
            neither component values nor an explicit dtype. ``None`` ->
            ``torch.get_default_dtype()``.
        epsilon: Absolute tolerance for approximate comparisons. ``None``
            -> machine epsilon of the operand dtype.
        max_relative: Relative tolerance. ``None`` -> machine epsilon.
        max_ulps: Units-in-last-place tolerance.
        validate: Enable shape assertions on raw tensors.
        log_level: Level for the ``geomalg`` loggers. ``None`` leaves the
            level from ``GEOMALG_LOG_LEVEL`` untouched.
    """

    device: str = "cpu"
    dtype: Optional[str] = None
    epsilon: Optional[float] = None
    max_relative: Optional[float] = None
    max_ulps: int = 4
    validate: bool = True
    log_level: Optional[str] = None

    def __post_init__(self) -> None:
        self.device = resolve_device(self.device)
        # Fail early on a bad name.
        resolve_dtype(self.dtype)
        if self.epsilon is not None and self.epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon}")
        if self.max_relative is not None and self.max_relative < 0:
            raise ValueError(
                f"max_relative must be non-negative, got {self.max_relative}"
            )
        if self.max_ulps < 0:
            raise ValueError(f"max_ulps must be non-negative, got {self.max_ulps}")
        if self.log_level is not None:
            parse_level(self.log_level)

    @property
    def torch_dtype(self) -> torch.dtype:
        """The default floating dtype as a :class:`torch.dtype`."""
        return resolve_dtype(self.dtype)

    @classmethod
    def from_cfg(cls, cfg: DictConfig) -> "ScalarConfig":
        """Build a config from an OmegaConf node, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {k: cfg.get(k) for k in known if cfg.get(k) is not None}
        return cls(**values)

    def apply(self) -> None:
        """Push the ``validate`` switch and the log level to their modules."""
        from geomalg import validation
        validation.VALIDATE = self.validate
        if self.log_level is not None:
            set_level(self.log_level)


_ACTIVE = ScalarConfig()


def get_config() -> ScalarConfig:
    """Return the process-wide :class:`ScalarConfig`."""
    return _ACTIVE


def set_config(cfg) -> ScalarConfig:
    """Install *cfg* (a :class:`ScalarConfig` or ``DictConfig``) globally.

    Returns:
        The previously active config, so callers can restore it.
    """
    global _ACTIVE
    if isinstance(cfg, DictConfig):
        cfg = ScalarConfig.from_cfg(cfg)
    if not isinstance(cfg, ScalarConfig):
        raise TypeError(f"Expected ScalarConfig or DictConfig, got {type(cfg).__name__}")
    previous = _ACTIVE
    _ACTIVE = cfg
    cfg.apply()
    logger.debug("Active scalar config: %s", cfg)
    return previous


def load_config(path: str) -> ScalarConfig:
    """Read a YAML file and merge it over the structured defaults."""
    base = OmegaConf.structured(ScalarConfig)
    merged = OmegaConf.merge(base, OmegaConf.load(path))
    logger.debug("Loaded scalar config from %s", path)
    return ScalarConfig.from_cfg(merged)
