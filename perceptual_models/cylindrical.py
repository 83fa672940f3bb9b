# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: cylindrical.py — Hue based cylindrical models.

HSL and HSV are the CSS Color 4 reparametrizations of *encoded* sRGB
values; the caller provides (and receives) R'G'B' in [0, 1]. Hue is in
degrees [0, 360), the remaining channels in [0, 1].

HSLuv (Boronine) is the CIELUV LCh cylinder with chroma rescaled to the
largest in-gamut chroma of sRGB at the given lightness and hue. It is
defined on XYZ directly; H in degrees, S and L in [0, 100].
"""

import numpy as np
from numba import njit
from numpy.typing import NDArray
from typing import Final

from prism_matrix import CANONICAL_WHITEPOINT, xyz_to_rgb_matrix
from prism_parameters import Primaries

from .cielab import LAB_EPSILON, LAB_KAPPA, lab_to_lch, lch_to_lab, luv_to_xyz, xyz_to_luv

__all__ = [
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_hsv",
    "hsv_to_rgb",
    "xyz_to_hsluv",
    "hsluv_to_xyz",
]

ArrayFloat = NDArray[np.float64]

# Lightness limits where HSLuv saturation is pinned to zero
_L_MAX: Final[float] = 99.9999999
_L_MIN: Final[float] = 1e-8

# XYZ -> linear sRGB, rows are the gamut boundary planes of HSLuv
_M_SRGB: Final[ArrayFloat] = np.ascontiguousarray(
    xyz_to_rgb_matrix(Primaries.Bt709, CANONICAL_WHITEPOINT)
)


# =============================================================================
# 1. HSL / HSV
# =============================================================================

@njit(cache=True, fastmath=True)
def _hue_extrema(rgb: ArrayFloat, out: ArrayFloat, lightness: bool) -> None:
    for i in range(rgb.shape[0]):
        r, g, b = rgb[i, 0], rgb[i, 1], rgb[i, 2]
        mx = max(r, g, b)
        mn = min(r, g, b)
        d = mx - mn
        h = 0.0
        if d > 0.0:
            if mx == r:
                h = 60.0 * (((g - b) / d) % 6.0)
            elif mx == g:
                h = 60.0 * ((b - r) / d + 2.0)
            else:
                h = 60.0 * ((r - g) / d + 4.0)
        out[i, 0] = h % 360.0

        if lightness:
            L = 0.5 * (mx + mn)
            denom = 1.0 - abs(2.0 * L - 1.0)
            out[i, 1] = d / denom if (d > 0.0 and denom > 0.0) else 0.0
            out[i, 2] = L
        else:
            out[i, 1] = d / mx if mx > 0.0 else 0.0
            out[i, 2] = mx


def rgb_to_hsl(rgb: ArrayFloat) -> ArrayFloat:
    """R'G'B' -> HSL."""
    out = np.empty_like(rgb)
    _hue_extrema(np.ascontiguousarray(rgb), out, True)
    return out


def rgb_to_hsv(rgb: ArrayFloat) -> ArrayFloat:
    """R'G'B' -> HSV."""
    out = np.empty_like(rgb)
    _hue_extrema(np.ascontiguousarray(rgb), out, False)
    return out


def hsl_to_rgb(hsl: ArrayFloat) -> ArrayFloat:
    """
    HSL -> R'G'B' via the CSS channel function

        f(n) = L - S min(L, 1 - L) max(-1, min(k - 3, 9 - k, 1)),
        k = (n + H / 30) mod 12,  n = 0, 8, 4
    """
    H = hsl[:, 0:1] % 360.0
    S = hsl[:, 1:2]
    L = hsl[:, 2:3]
    k = (np.array([0.0, 8.0, 4.0]) + H / 30.0) % 12.0
    a = S * np.minimum(L, 1.0 - L)
    return L - a * np.clip(np.minimum(k - 3.0, 9.0 - k), -1.0, 1.0)


def hsv_to_rgb(hsv: ArrayFloat) -> ArrayFloat:
    """HSV -> R'G'B' with k = (n + H / 60) mod 6, n = 5, 3, 1."""
    H = hsv[:, 0:1] % 360.0
    S = hsv[:, 1:2]
    V = hsv[:, 2:3]
    k = (np.array([5.0, 3.0, 1.0]) + H / 60.0) % 6.0
    return V - V * S * np.clip(np.minimum(k, 4.0 - k), 0.0, 1.0)


# =============================================================================
# 2. HSLUV
# =============================================================================

@njit(cache=True, fastmath=True)
def _max_chroma(L: float, H: float, m: ArrayFloat) -> float:
    """
    Largest CIELUV chroma inside the sRGB cube at lightness L and hue H.

    Each of the six cube faces (channel c at t = 0 or 1) is a line in the
    (u, v) plane of the slice; the ray at angle H hits the nearest one.
    """
    sub1 = (L + 16.0) ** 3 / 1560896.0
    sub2 = sub1 if sub1 > LAB_EPSILON else L / LAB_KAPPA
    h_rad = H * np.pi / 180.0
    sin_h = np.sin(h_rad)
    cos_h = np.cos(h_rad)
    best = np.inf
    for c in range(3):
        m1, m2, m3 = m[c, 0], m[c, 1], m[c, 2]
        for t in range(2):
            top1 = (284517.0 * m1 - 94839.0 * m3) * sub2
            top2 = ((838422.0 * m3 + 769860.0 * m2 + 731718.0 * m1) * L * sub2
                    - 769860.0 * t * L)
            bottom = (632260.0 * m3 - 126452.0 * m2) * sub2 + 126452.0 * t
            slope = top1 / bottom
            intercept = top2 / bottom
            length = intercept / (sin_h - slope * cos_h)
            if 0.0 <= length < best:
                best = length
    return best


@njit(cache=True, fastmath=True)
def _lch_to_hsluv_kernel(lch: ArrayFloat, m: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(lch)
    for i in range(lch.shape[0]):
        L, C, H = lch[i, 0], lch[i, 1], lch[i, 2]
        out[i, 0] = H
        if L > _L_MAX:
            out[i, 1] = 0.0
            out[i, 2] = 100.0
        elif L < _L_MIN:
            out[i, 1] = 0.0
            out[i, 2] = 0.0
        else:
            out[i, 1] = C / _max_chroma(L, H, m) * 100.0
            out[i, 2] = L
    return out


@njit(cache=True, fastmath=True)
def _hsluv_to_lch_kernel(hsl: ArrayFloat, m: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(hsl)
    for i in range(hsl.shape[0]):
        H, S, L = hsl[i, 0], hsl[i, 1], hsl[i, 2]
        out[i, 2] = H
        if L > _L_MAX:
            out[i, 0] = 100.0
            out[i, 1] = 0.0
        elif L < _L_MIN:
            out[i, 0] = 0.0
            out[i, 1] = 0.0
        else:
            out[i, 0] = L
            out[i, 1] = _max_chroma(L, H, m) / 100.0 * S
    return out


def xyz_to_hsluv(xyz: ArrayFloat) -> ArrayFloat:
    """XYZ (D65) -> HSLuv."""
    lch = lab_to_lch(xyz_to_luv(xyz))
    return _lch_to_hsluv_kernel(lch, _M_SRGB)


def hsluv_to_xyz(hsluv: ArrayFloat) -> ArrayFloat:
    """HSLuv -> XYZ (D65)."""
    lch = _hsluv_to_lch_kernel(np.ascontiguousarray(hsluv), _M_SRGB)
    return luv_to_xyz(lch_to_lab(lch))
