# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: oklab.py — Oklab and its cylindrical form Oklch.

Ottosson's perceptual space, defined directly on D65 XYZ:

    lms   = M1 · xyz
    lms'  = cbrt(lms)            (sign preserving)
    Lab   = M2 · lms'

White (D65, Y = 1) maps to L = 1, a = b = 0.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Final

from .cielab import lab_to_lch, lch_to_lab

__all__ = [
    "M1_XYZ_TO_LMS_T",
    "M1_LMS_TO_XYZ_T",
    "M2_LMS_TO_LAB_T",
    "M2_LAB_TO_LMS_T",
    "xyz_to_oklab",
    "oklab_to_xyz",
    "xyz_to_oklch",
    "oklch_to_xyz",
]

ArrayFloat = NDArray[np.float64]

# M1: XYZ to cone response (LMS)
_M1_XYZ_TO_LMS = np.array([
    [0.8189330101, 0.3618667424, -0.1288597137],
    [0.0329845436, 0.9293118715,  0.0361456387],
    [0.0482003018, 0.2643662691,  0.6338517070]
], dtype=np.float64)

# M2: non-linear LMS to Oklab
_M2_LMS_TO_LAB = np.array([
    [0.2104542553,  0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050,  0.4505937099],
    [0.0259040371,  0.7827717662, -0.8086757660]
], dtype=np.float64)

# Transposed for row-vector buffers: out = samples @ M_T
M1_XYZ_TO_LMS_T: Final[ArrayFloat] = _M1_XYZ_TO_LMS.T.copy()
M1_LMS_TO_XYZ_T: Final[ArrayFloat] = np.linalg.inv(_M1_XYZ_TO_LMS).T.copy()
M2_LMS_TO_LAB_T: Final[ArrayFloat] = _M2_LMS_TO_LAB.T.copy()
M2_LAB_TO_LMS_T: Final[ArrayFloat] = np.linalg.inv(_M2_LMS_TO_LAB).T.copy()


def xyz_to_oklab(xyz: ArrayFloat) -> ArrayFloat:
    """XYZ (D65) -> Oklab."""
    lms = np.dot(xyz, M1_XYZ_TO_LMS_T)
    return np.dot(np.cbrt(lms), M2_LMS_TO_LAB_T)


def oklab_to_xyz(oklab: ArrayFloat) -> ArrayFloat:
    """Oklab -> XYZ (D65)."""
    lms_prime = np.dot(oklab, M2_LAB_TO_LMS_T)
    return np.dot(lms_prime * lms_prime * lms_prime, M1_LMS_TO_XYZ_T)


def xyz_to_oklch(xyz: ArrayFloat) -> ArrayFloat:
    """XYZ (D65) -> Oklch, hue in degrees [0, 360)."""
    return lab_to_lch(xyz_to_oklab(xyz))


def oklch_to_xyz(oklch: ArrayFloat) -> ArrayFloat:
    return oklab_to_xyz(lch_to_lab(oklch))
