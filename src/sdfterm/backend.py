"""Array module used for whole-frame marching: NumPy, or CuPy on request."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import numpy as np

try:
    import cupy as cp  # type: ignore
except ImportError:  # pragma: no cover
    cp = None

ArrayModule = Any

CUDA_ENV = "SDFTERM_CUDA"

logger = logging.getLogger(__name__)


def get_array_module(use_cuda: Optional[bool] = None) -> ArrayModule:
    """Pick the array module for the frame marcher.

    With ``use_cuda`` left as None the choice comes from ``SDFTERM_CUDA``.
    CuPy is used only when it was requested and imports; otherwise NumPy.
    """
    if use_cuda is None:
        use_cuda = os.environ.get(CUDA_ENV, "").strip().lower() in ("1", "true", "yes")
    if use_cuda and cp is None:
        logger.info("%s requested but cupy is not installed, marching with numpy", CUDA_ENV)
    if use_cuda and cp is not None:
        return cp
    return np


def to_numpy(xp: ArrayModule, a: Any) -> np.ndarray:
    """Host copy of a frame buffer; the curses writer and matplotlib need NumPy."""
    if cp is not None and xp is cp:
        return cp.asnumpy(a)  # type: ignore[union-attr]
    return np.asarray(a)
