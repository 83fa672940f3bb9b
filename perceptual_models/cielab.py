# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: cielab.py — CIE derived spaces over the canonical XYZ pivot.

Implements CIE 1976 L*a*b* and its cylindrical LCh form, CIE 1976 L*u*v*,
CIE 1964 U*V*W* and xyY chromaticity. All transforms take and return
(N, 3) float64 arrays and use the D65 reference white of the pivot, so the
whitepoint maps to L = 100, a = b = 0.

Rational constants:
    delta = 6/29 is the threshold where the Lab function switches from cubic
    to linear; epsilon = delta**3 and kappa = (29/3)**3 are derived from it
    exactly instead of the rounded 0.008856 / 903.3.
"""

import numpy as np
from numba import njit
from numpy.typing import NDArray
from typing import Final, Tuple

from prism_matrix import CANONICAL_WHITEPOINT
from prism_parameters import WHITEPOINT_XYZ

__all__ = [
    "LAB_EPSILON",
    "LAB_KAPPA",
    "REFERENCE_WHITE",
    "xyz_to_lab",
    "lab_to_xyz",
    "lab_to_lch",
    "lch_to_lab",
    "xyz_to_luv",
    "luv_to_xyz",
    "xyz_to_uvw",
    "uvw_to_xyz",
    "xyz_to_xyy",
    "xyy_to_xyz",
]

ArrayFloat = NDArray[np.float64]

_LAB_DELTA: Final[float] = 6.0 / 29.0
LAB_EPSILON: Final[float] = _LAB_DELTA * _LAB_DELTA * _LAB_DELTA  # ~0.008856
LAB_KAPPA: Final[float] = (116.0 * 29.0 * 29.0) / (3.0 * 6.0 * 6.0)  # ~903.296

RAD2DEG: Final[float] = 180.0 / np.pi
DEG2RAD: Final[float] = np.pi / 180.0

REFERENCE_WHITE: Final[ArrayFloat] = np.array(WHITEPOINT_XYZ[CANONICAL_WHITEPOINT], dtype=np.float64)
REFERENCE_WHITE.setflags(write=False)


# =============================================================================
# 1. KERNELS
# =============================================================================

@njit(cache=True, fastmath=True)
def _lab_f(t: ArrayFloat) -> ArrayFloat:
    """
    Non-linear transfer f(t) of CIELAB: cube root with a linear toe near
    zero (which also covers negative inputs).
    """
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()
    for i in range(t.size):
        v = t_flat[i]
        if v > LAB_EPSILON:
            out_flat[i] = v ** (1.0 / 3.0)
        else:
            out_flat[i] = (LAB_KAPPA * v + 16.0) / 116.0
    return out


@njit(cache=True, fastmath=True)
def _lab_f_inv(t: ArrayFloat) -> ArrayFloat:
    """
    Inverse of ``_lab_f``. Uses the multiplication form (116*t - 16)/kappa
    to minimize division error near the delta threshold.
    """
    out = np.empty_like(t)
    t_flat = t.ravel()
    out_flat = out.ravel()
    for i in range(t.size):
        v = t_flat[i]
        if v > _LAB_DELTA:
            out_flat[i] = v * v * v
        else:
            out_flat[i] = (116.0 * v - 16.0) / LAB_KAPPA
    return out


@njit(cache=True, fastmath=True)
def _to_polar(lab: ArrayFloat) -> ArrayFloat:
    """(L, a, b) -> (L, C, h) with h in degrees [0, 360)."""
    n = lab.shape[0]
    lch = np.empty_like(lab)
    for i in range(n):
        L, a, b = lab[i, 0], lab[i, 1], lab[i, 2]
        h = np.arctan2(b, a) * RAD2DEG
        if h < 0.0:
            h += 360.0
        lch[i, 0] = L
        lch[i, 1] = np.hypot(a, b)
        lch[i, 2] = h
    return lch


@njit(cache=True, fastmath=True)
def _to_cartesian(lch: ArrayFloat) -> ArrayFloat:
    """(L, C, h) -> (L, a, b)."""
    n = lch.shape[0]
    lab = np.empty_like(lch)
    for i in range(n):
        h_rad = lch[i, 2] * DEG2RAD
        lab[i, 0] = lch[i, 0]
        lab[i, 1] = lch[i, 1] * np.cos(h_rad)
        lab[i, 2] = lch[i, 1] * np.sin(h_rad)
    return lab


@njit(cache=True, fastmath=True)
def _uv_prime(xyz: ArrayFloat) -> ArrayFloat:
    """
    CIE 1976 u', v' chromaticity:
        u' = 4X / (X + 15Y + 3Z),  v' = 9Y / (X + 15Y + 3Z)
    Black (zero denominator) returns (0, 0).
    """
    out = np.zeros((xyz.shape[0], 2), dtype=np.float64)
    for i in range(xyz.shape[0]):
        d = xyz[i, 0] + 15.0 * xyz[i, 1] + 3.0 * xyz[i, 2]
        if abs(d) > 1e-12:
            inv_d = 1.0 / d
            out[i, 0] = 4.0 * xyz[i, 0] * inv_d
            out[i, 1] = 9.0 * xyz[i, 1] * inv_d
    return out


def _white_uv_prime() -> Tuple[float, float]:
    uv = _uv_prime(np.ascontiguousarray(np.atleast_2d(REFERENCE_WHITE)))
    return float(uv[0, 0]), float(uv[0, 1])


_UN_PRIME, _VN_PRIME = _white_uv_prime()


# =============================================================================
# 2. LAB / LCH
# =============================================================================

def xyz_to_lab(xyz: ArrayFloat) -> ArrayFloat:
    """XYZ -> CIELAB (L in [0, 100] for in-range input)."""
    f_xyz = _lab_f(np.ascontiguousarray(xyz / REFERENCE_WHITE))
    out = np.empty_like(xyz)
    out[:, 0] = 116.0 * f_xyz[:, 1] - 16.0
    out[:, 1] = 500.0 * (f_xyz[:, 0] - f_xyz[:, 1])
    out[:, 2] = 200.0 * (f_xyz[:, 1] - f_xyz[:, 2])
    return out


def lab_to_xyz(lab: ArrayFloat) -> ArrayFloat:
    """CIELAB -> XYZ."""
    fy = (lab[:, 0] + 16.0) / 116.0
    f = np.empty_like(lab)
    f[:, 0] = lab[:, 1] / 500.0 + fy
    f[:, 1] = fy
    f[:, 2] = fy - lab[:, 2] / 200.0
    return _lab_f_inv(f) * REFERENCE_WHITE


def lab_to_lch(lab: ArrayFloat) -> ArrayFloat:
    """Any (L, a, b) opponent space -> (L, C, h), hue in degrees."""
    return _to_polar(np.ascontiguousarray(lab))


def lch_to_lab(lch: ArrayFloat) -> ArrayFloat:
    """(L, C, h) -> (L, a, b)."""
    return _to_cartesian(np.ascontiguousarray(lch))


# =============================================================================
# 3. LUV / UVW / XYY
# =============================================================================

def xyz_to_luv(xyz: ArrayFloat) -> ArrayFloat:
    """XYZ -> CIELUV."""
    uv_prime = _uv_prime(np.ascontiguousarray(xyz))
    L = 116.0 * _lab_f(np.ascontiguousarray(xyz[:, 1] / REFERENCE_WHITE[1])) - 16.0
    out = np.empty_like(xyz)
    out[:, 0] = L
    out[:, 1] = 13.0 * L * (uv_prime[:, 0] - _UN_PRIME)
    out[:, 2] = 13.0 * L * (uv_prime[:, 1] - _VN_PRIME)
    # Black has no chromaticity; Luv defines u = v = 0 there.
    black = np.abs(xyz[:, 0] + 15.0 * xyz[:, 1] + 3.0 * xyz[:, 2]) <= 1e-12
    out[black, 1:] = 0.0
    return out


def luv_to_xyz(luv: ArrayFloat) -> ArrayFloat:
    """CIELUV -> XYZ."""
    L, u, v = luv[:, 0], luv[:, 1], luv[:, 2]

    mask = np.abs(L) > 1e-12
    u_prime = np.full_like(L, _UN_PRIME)
    v_prime = np.full_like(L, _VN_PRIME)
    if np.any(mask):
        inv_13L = 1.0 / (13.0 * L[mask])
        u_prime[mask] = u[mask] * inv_13L + _UN_PRIME
        v_prime[mask] = v[mask] * inv_13L + _VN_PRIME

    Y = _lab_f_inv(np.ascontiguousarray((L + 16.0) / 116.0)) * REFERENCE_WHITE[1]

    X = np.zeros_like(Y)
    Z = np.zeros_like(Y)
    mask_v = np.abs(v_prime) > 1e-12
    if np.any(mask_v):
        up, vp = u_prime[mask_v], v_prime[mask_v]
        inv_4vp = 1.0 / (4.0 * vp)
        X[mask_v] = Y[mask_v] * 9.0 * up * inv_4vp
        Z[mask_v] = Y[mask_v] * (12.0 - 3.0 * up - 20.0 * vp) * inv_4vp

    return np.stack([X, Y, Z], axis=-1)


# CIE 1960 UCS of the reference white: u = u', v = 2/3 v'
_U0: Final[float] = _UN_PRIME
_V0: Final[float] = (2.0 / 3.0) * _VN_PRIME


def xyz_to_uvw(xyz: ArrayFloat) -> ArrayFloat:
    """
    XYZ -> CIE 1964 U*V*W*, with Y in percent for W*:

        W* = 25 Y^(1/3) - 17,  U* = 13 W* (u - u0),  V* = 13 W* (v - v0)

    Black takes the white chromaticity so that U* = V* = 0.
    """
    uv = _uv_prime(np.ascontiguousarray(xyz))
    u = uv[:, 0]
    v = uv[:, 1] * (2.0 / 3.0)
    black = np.abs(xyz[:, 0] + 15.0 * xyz[:, 1] + 3.0 * xyz[:, 2]) <= 1e-12
    u[black] = _U0
    v[black] = _V0

    w = 25.0 * np.cbrt(100.0 * xyz[:, 1]) - 17.0
    return np.stack([13.0 * w * (u - _U0), 13.0 * w * (v - _V0), w], axis=-1)


def uvw_to_xyz(uvw: ArrayFloat) -> ArrayFloat:
    """CIE 1964 U*V*W* -> XYZ."""
    U, V, W = uvw[:, 0], uvw[:, 1], uvw[:, 2]
    Y = ((W + 17.0) / 25.0) ** 3 / 100.0

    u = np.full_like(W, _U0)
    v = np.full_like(W, _V0)
    lit = np.abs(W) > 1e-12
    u[lit] += U[lit] / (13.0 * W[lit])
    v[lit] += V[lit] / (13.0 * W[lit])

    # From u = 4X / D and v = 6Y / D with D = 6Y / v
    out = np.zeros_like(uvw)
    out[:, 1] = Y
    ok = np.abs(v) > 1e-12
    out[ok, 0] = 1.5 * u[ok] * Y[ok] / v[ok]
    out[ok, 2] = (4.0 - u[ok] - 10.0 * v[ok]) * Y[ok] / (2.0 * v[ok])
    return out


def xyz_to_xyy(xyz: ArrayFloat) -> ArrayFloat:
    """
    XYZ -> xyY.

    Black (X + Y + Z = 0) is given the chromaticity of the reference white
    with Y = 0, following Lindbloom, so the output never holds NaN.
    """
    total = np.sum(xyz, axis=-1)
    mask = np.abs(total) > 1e-12
    out = np.empty_like(xyz)
    out[:, 2] = xyz[:, 1]
    if np.any(mask):
        inv_sum = 1.0 / total[mask]
        out[mask, 0] = xyz[mask, 0] * inv_sum
        out[mask, 1] = xyz[mask, 1] * inv_sum
    white_sum = float(np.sum(REFERENCE_WHITE))
    out[~mask, 0] = REFERENCE_WHITE[0] / white_sum
    out[~mask, 1] = REFERENCE_WHITE[1] / white_sum
    return out


def xyy_to_xyz(xyy: ArrayFloat) -> ArrayFloat:
    """xyY -> XYZ. Zero y maps to black."""
    x, y, Y = xyy[:, 0], xyy[:, 1], xyy[:, 2]
    out = np.zeros_like(xyy)
    mask = np.abs(y) > 1e-12
    if np.any(mask):
        factor = Y[mask] / y[mask]
        out[mask, 0] = x[mask] * factor
        out[mask, 1] = Y[mask]
        out[mask, 2] = (1.0 - x[mask] - y[mask]) * factor
    return out
