# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: subtractive.py — Naive subtractive CMY / CMYK.

Device-independent complements of encoded sRGB values, without ink
limits or profiles. CMYK extracts black as K = 1 - max(R', G', B');
pure black has undefined chroma and is returned as (0, 0, 0, 1).
"""

import numpy as np
from numpy.typing import NDArray

__all__ = [
    "rgb_to_cmy",
    "cmy_to_rgb",
    "rgb_to_cmyk",
    "cmyk_to_rgb",
]

ArrayFloat = NDArray[np.float64]


def rgb_to_cmy(rgb: ArrayFloat) -> ArrayFloat:
    return 1.0 - rgb


def cmy_to_rgb(cmy: ArrayFloat) -> ArrayFloat:
    return 1.0 - cmy


def rgb_to_cmyk(rgb: ArrayFloat) -> ArrayFloat:
    """R'G'B' (N, 3) -> CMYK (N, 4)."""
    k = 1.0 - np.max(rgb, axis=-1)
    out = np.zeros((rgb.shape[0], 4), dtype=np.float64)
    out[:, 3] = k
    white_ink = 1.0 - k
    mask = white_ink > 1e-12
    if np.any(mask):
        out[mask, :3] = (1.0 - rgb[mask] - k[mask, None]) / white_ink[mask, None]
    return out


def cmyk_to_rgb(cmyk: ArrayFloat) -> ArrayFloat:
    """CMYK (N, 4) -> R'G'B' (N, 3)."""
    return (1.0 - cmyk[:, :3]) * (1.0 - cmyk[:, 3:4])
