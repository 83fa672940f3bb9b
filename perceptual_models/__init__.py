# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Fixed (non-matrix) transforms between the canonical XYZ pivot, or encoded
sRGB, and the derived color models.
"""

from .cielab import (
    lab_to_lch, lab_to_xyz, lch_to_lab, luv_to_xyz, uvw_to_xyz,
    xyy_to_xyz, xyz_to_lab, xyz_to_luv, xyz_to_uvw, xyz_to_xyy,
)
from .cylindrical import (
    hsl_to_rgb, hsluv_to_xyz, hsv_to_rgb, rgb_to_hsl, rgb_to_hsv, xyz_to_hsluv,
)
from .oklab import oklab_to_xyz, oklch_to_xyz, xyz_to_oklab, xyz_to_oklch
from .srlab2 import srlab2_to_xyz, xyz_to_srlab2
from .subtractive import cmy_to_rgb, cmyk_to_rgb, rgb_to_cmy, rgb_to_cmyk

__all__ = [
    "xyz_to_lab", "lab_to_xyz", "lab_to_lch", "lch_to_lab",
    "xyz_to_luv", "luv_to_xyz", "xyz_to_uvw", "uvw_to_xyz",
    "xyz_to_xyy", "xyy_to_xyz",
    "xyz_to_oklab", "oklab_to_xyz", "xyz_to_oklch", "oklch_to_xyz",
    "xyz_to_srlab2", "srlab2_to_xyz",
    "rgb_to_hsl", "hsl_to_rgb", "rgb_to_hsv", "hsv_to_rgb",
    "xyz_to_hsluv", "hsluv_to_xyz",
    "rgb_to_cmy", "cmy_to_rgb", "rgb_to_cmyk", "cmyk_to_rgb",
]
