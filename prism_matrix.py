# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: Matrix & Adaptation Resolver

Resolves the linear 3x3 transforms of the engine:

    xyz_canonical = A(wp -> D65) · M(primaries, wp) · rgb_linear
    yuv           = D(differencing) · rgb_encoded

Conventions:
─────────────
  Matrices are stored in the textbook column-vector orientation
  (``out = M @ v``). Sample buffers are row vectors of shape (N, 3), so the
  engine multiplies ``samples @ M.T`` (see ``apply_matrix``).

  M(primaries, wp) maps RGB (1, 1, 1) onto the whitepoint's XYZ (Y = 1).
  A(src -> dst) is the Bradford chromatic adaptation; A(w -> w) is exactly
  ``numpy.eye(3)``, not a numerically-close product.

  Every table is built eagerly at import and never mutated afterwards, so
  concurrent readers need no synchronisation.

References:
    [1] Lindbloom, B., "RGB/XYZ Matrices" and "Chromatic Adaptation"
    [2] ITU-R BT.601-7, BT.709-6, BT.2020-2, BT.470-6; ITU-T H.273
"""

from __future__ import annotations

import itertools
from typing import Dict, Final, Tuple

import numpy as np
from numpy.typing import NDArray

from prism_errors import ParameterKind, UnsupportedError
from prism_parameters import (
    Chromaticities,
    Differencing,
    FULL_SWING_DIFFERENCING,
    LUMA_WEIGHTS,
    PRIMARY_CHROMATICITIES,
    Primaries,
    QUANTIZED_DIFFERENCING,
    WHITEPOINT_XYZ,
    Whitepoint,
)

__all__ = [
    "CANONICAL_WHITEPOINT",
    "M_BRADFORD",
    "M_BRADFORD_INV",
    "xy_to_xyz",
    "primaries_matrix",
    "bradford_matrix",
    "rgb_to_xyz_matrix",
    "xyz_to_rgb_matrix",
    "adaptation_matrix",
    "rgb_to_canonical_matrix",
    "canonical_to_rgb_matrix",
    "differencing_matrix",
    "inverse_differencing_matrix",
    "LUMA_LEGAL",
    "CHROMA_LEGAL",
    "quantize",
    "dequantize",
    "clamp_full_swing",
    "apply_matrix",
]

Matrix3 = NDArray[np.float64]

# The reference whitepoint of the canonical XYZ pivot.
CANONICAL_WHITEPOINT: Final[Whitepoint] = Whitepoint.D65


# =============================================================================
# 1. PRIMARIES  (linear RGB <-> XYZ)
# =============================================================================

def xy_to_xyz(x: float, y: float) -> Tuple[float, float, float]:
    """CIE xy chromaticity -> XYZ with unit luminance."""
    return (x / y, 1.0, (1.0 - x - y) / y)


def primaries_matrix(chroma: Chromaticities, white_xyz: Tuple[float, float, float]) -> Matrix3:
    """
    Builds the linear RGB -> XYZ matrix of a chromaticity triangle.

    The columns are the XYZ of each primary at unit luminance, each scaled
    by the luminance ``Y_c`` that makes RGB (1, 1, 1) sum to *white_xyz*:

        [Y_r, Y_g, Y_b]^T = relative^-1 · white_xyz
    """
    relative = np.array(
        [xy_to_xyz(*chroma.red), xy_to_xyz(*chroma.green), xy_to_xyz(*chroma.blue)],
        dtype=np.float64,
    ).T
    scale = np.linalg.solve(relative, np.asarray(white_xyz, dtype=np.float64))
    return relative @ np.diag(scale)


def _build_primaries_tables() -> Tuple[Dict, Dict]:
    forward: Dict[Tuple[Primaries, Whitepoint], Matrix3] = {}
    inverse: Dict[Tuple[Primaries, Whitepoint], Matrix3] = {}
    for primaries, whitepoint in itertools.product(Primaries, Whitepoint):
        if primaries is Primaries.Xyz:
            white = np.asarray(WHITEPOINT_XYZ[whitepoint], dtype=np.float64)
            m = np.diag(white)
            m_inv = np.diag(1.0 / white)
        else:
            m = primaries_matrix(PRIMARY_CHROMATICITIES[primaries], WHITEPOINT_XYZ[whitepoint])
            m_inv = np.linalg.inv(m)
        m.setflags(write=False)
        m_inv.setflags(write=False)
        forward[(primaries, whitepoint)] = m
        inverse[(primaries, whitepoint)] = m_inv
    return forward, inverse


_RGB_TO_XYZ, _XYZ_TO_RGB = _build_primaries_tables()


# =============================================================================
# 2. CHROMATIC ADAPTATION  (Bradford)
# =============================================================================
# Transforms XYZ to "sharpened" cone responses for von Kries gain application.
M_BRADFORD: Final[Matrix3] = np.array([
    [ 0.8951000,  0.2664000, -0.1614000],
    [-0.7502000,  1.7135000,  0.0367000],
    [ 0.0389000, -0.0685000,  1.0296000]
], dtype=np.float64)
M_BRADFORD_INV: Final[Matrix3] = np.linalg.inv(M_BRADFORD)


def bradford_matrix(src_white: Tuple[float, float, float],
                    dst_white: Tuple[float, float, float]) -> Matrix3:
    """
    Computes the Bradford adaptation matrix between two XYZ white points.

    Derivation:
        M_composite = M_inv · diag(lms_dst / lms_src) · M

    Args:
        src_white: Source white point (XYZ).
        dst_white: Destination white point (XYZ).

    Returns:
        3x3 adaptation matrix (column-vector orientation).
    """
    src_lms = M_BRADFORD @ np.asarray(src_white, dtype=np.float64)
    dst_lms = M_BRADFORD @ np.asarray(dst_white, dtype=np.float64)
    # Prevent divide-by-zero for extremely dark white points
    src_lms = np.where(np.abs(src_lms) < 1e-12, 1e-12, src_lms)
    return M_BRADFORD_INV @ np.diag(dst_lms / src_lms) @ M_BRADFORD


def _build_adaptation_table() -> Dict[Tuple[Whitepoint, Whitepoint], Matrix3]:
    table: Dict[Tuple[Whitepoint, Whitepoint], Matrix3] = {}
    for src, dst in itertools.product(Whitepoint, Whitepoint):
        if src is dst:
            m = np.eye(3)
        else:
            m = bradford_matrix(WHITEPOINT_XYZ[src], WHITEPOINT_XYZ[dst])
        m.setflags(write=False)
        table[(src, dst)] = m
    return table


_ADAPTATION = _build_adaptation_table()


def _build_canonical_tables() -> Tuple[Dict, Dict]:
    forward: Dict[Tuple[Primaries, Whitepoint], Matrix3] = {}
    inverse: Dict[Tuple[Primaries, Whitepoint], Matrix3] = {}
    for key, m in _RGB_TO_XYZ.items():
        whitepoint = key[1]
        if whitepoint is CANONICAL_WHITEPOINT:
            fwd = m.copy()
            inv = _XYZ_TO_RGB[key].copy()
        else:
            fwd = _ADAPTATION[(whitepoint, CANONICAL_WHITEPOINT)] @ m
            inv = np.linalg.inv(fwd)
        fwd.setflags(write=False)
        inv.setflags(write=False)
        forward[key] = fwd
        inverse[key] = inv
    return forward, inverse


_RGB_TO_CANONICAL, _CANONICAL_TO_RGB = _build_canonical_tables()


def rgb_to_xyz_matrix(primaries: Primaries, whitepoint: Whitepoint) -> Matrix3:
    """Linear RGB -> XYZ relative to *whitepoint* (read-only array)."""
    return _RGB_TO_XYZ[(primaries, whitepoint)]


def xyz_to_rgb_matrix(primaries: Primaries, whitepoint: Whitepoint) -> Matrix3:
    """XYZ relative to *whitepoint* -> linear RGB (read-only array)."""
    return _XYZ_TO_RGB[(primaries, whitepoint)]


def adaptation_matrix(src: Whitepoint, dst: Whitepoint) -> Matrix3:
    """Bradford adaptation between two standard illuminants (read-only array)."""
    return _ADAPTATION[(src, dst)]


def rgb_to_canonical_matrix(primaries: Primaries, whitepoint: Whitepoint) -> Matrix3:
    """Linear RGB -> canonical (D65-adapted) XYZ."""
    return _RGB_TO_CANONICAL[(primaries, whitepoint)]


def canonical_to_rgb_matrix(primaries: Primaries, whitepoint: Whitepoint) -> Matrix3:
    """Canonical (D65-adapted) XYZ -> linear RGB."""
    return _CANONICAL_TO_RGB[(primaries, whitepoint)]


# =============================================================================
# 3. DIFFERENCING  (R'G'B' <-> YUV)
# =============================================================================

def _difference_matrix(kr: float, kb: float, u_scale: float, v_scale: float) -> Matrix3:
    """
    Luma row from (Kr, Kb) and two scaled colour differences:

        Y = Kr R' + Kg G' + Kb B'
        U = u_scale (B' - Y)
        V = v_scale (R' - Y)
    """
    luma = np.array([kr, 1.0 - kr - kb, kb], dtype=np.float64)
    return np.array([
        luma,
        u_scale * (np.array([0.0, 0.0, 1.0]) - luma),
        v_scale * (np.array([1.0, 0.0, 0.0]) - luma),
    ], dtype=np.float64)


def _unity_gain(kr: float, kb: float) -> Matrix3:
    # Chroma spans [-0.5, 0.5]
    return _difference_matrix(kr, kb, 0.5 / (1.0 - kb), 0.5 / (1.0 - kr))


# BT.470 M/PAL: Umax = 0.436, Vmax = 0.615 give the precise factors; the
# recommendation publishes them rounded to 0.493 and 0.877.
_PAL_U_MAX: Final[float] = 0.436
_PAL_V_MAX: Final[float] = 0.615


def _build_differencing_table() -> Dict[Differencing, Matrix3]:
    table: Dict[Differencing, Matrix3] = {}
    for diff in Differencing:
        if diff is Differencing.YCoCg:
            m = np.array([
                [ 0.25, 0.50,  0.25],
                [ 0.50, 0.00, -0.50],
                [-0.25, 0.50, -0.25],
            ], dtype=np.float64)
        elif diff is Differencing.Yiq:
            m = np.array([
                [0.299,   0.587,   0.114],
                [0.5959, -0.2746, -0.3213],
                [0.2115, -0.5227,  0.3112],
            ], dtype=np.float64)
        elif diff is Differencing.Bt407MPal:
            kr, kb = LUMA_WEIGHTS[diff]
            m = _difference_matrix(kr, kb, 0.493, 0.877)
        elif diff is Differencing.Bt407MPalPrecise:
            kr, kb = LUMA_WEIGHTS[diff]
            m = _difference_matrix(kr, kb, _PAL_U_MAX / (1.0 - kb), _PAL_V_MAX / (1.0 - kr))
        elif diff is Differencing.YDbDr:
            kr, kb = LUMA_WEIGHTS[diff]
            m = _difference_matrix(kr, kb, 1.505, -1.902)
        else:
            m = _unity_gain(*LUMA_WEIGHTS[diff])
        m.setflags(write=False)
        table[diff] = m
    return table


_DIFFERENCING = _build_differencing_table()


def _invert_all(table: Dict[Differencing, Matrix3]) -> Dict[Differencing, Matrix3]:
    out: Dict[Differencing, Matrix3] = {}
    for key, m in table.items():
        inv = np.linalg.inv(m)
        inv.setflags(write=False)
        out[key] = inv
    return out


_INVERSE_DIFFERENCING = _invert_all(_DIFFERENCING)


def differencing_matrix(differencing: Differencing) -> Matrix3:
    """R'G'B' -> YUV matrix of a differencing scheme (read-only array)."""
    try:
        return _DIFFERENCING[differencing]
    except KeyError:
        raise UnsupportedError(ParameterKind.DIFFERENCING, differencing) from None


def inverse_differencing_matrix(differencing: Differencing) -> Matrix3:
    """YUV -> R'G'B' matrix of a differencing scheme (read-only array)."""
    try:
        return _INVERSE_DIFFERENCING[differencing]
    except KeyError:
        raise UnsupportedError(ParameterKind.DIFFERENCING, differencing) from None


# --- Quantization (8-bit normalized head/footroom) ---
_LUMA_FOOT: Final[float] = 16.0 / 255.0
_LUMA_SPAN: Final[float] = 219.0 / 255.0
_CHROMA_MID: Final[float] = 128.0 / 255.0
_CHROMA_SPAN: Final[float] = 224.0 / 255.0
LUMA_LEGAL: Final[Tuple[float, float]] = (16.0 / 255.0, 235.0 / 255.0)
CHROMA_LEGAL: Final[Tuple[float, float]] = (16.0 / 255.0, 240.0 / 255.0)


def quantize(yuv: NDArray[np.float64], differencing: Differencing) -> NDArray[np.float64]:
    """
    Rescales full-range YUV (Y in [0, 1], chroma in [-0.5, 0.5]) into the
    legal code range of a quantized scheme and clamps to it. Schemes without
    quantization are returned unchanged.
    """
    if differencing not in QUANTIZED_DIFFERENCING:
        return yuv
    out = np.empty_like(yuv)
    out[..., 0] = np.clip(_LUMA_FOOT + _LUMA_SPAN * yuv[..., 0], *LUMA_LEGAL)
    out[..., 1:] = np.clip(_CHROMA_MID + _CHROMA_SPAN * yuv[..., 1:], *CHROMA_LEGAL)
    return out


def dequantize(yuv: NDArray[np.float64], differencing: Differencing) -> NDArray[np.float64]:
    """Inverse of ``quantize`` (without clamping)."""
    if differencing not in QUANTIZED_DIFFERENCING:
        return yuv
    out = np.empty_like(yuv)
    out[..., 0] = (yuv[..., 0] - _LUMA_FOOT) / _LUMA_SPAN
    out[..., 1:] = (yuv[..., 1:] - _CHROMA_MID) / _CHROMA_SPAN
    return out


def clamp_full_swing(yuv: NDArray[np.float64], differencing: Differencing) -> NDArray[np.float64]:
    """Clamps full-swing YUV to Y in [0, 1] and chroma in [-0.5, 0.5]."""
    if differencing not in FULL_SWING_DIFFERENCING:
        return yuv
    out = np.empty_like(yuv)
    out[..., 0] = np.clip(yuv[..., 0], 0.0, 1.0)
    out[..., 1:] = np.clip(yuv[..., 1:], -0.5, 0.5)
    return out


def apply_matrix(samples: NDArray[np.float64], matrix: Matrix3) -> NDArray[np.float64]:
    """Applies a column-vector matrix to row-vector samples of shape (..., 3)."""
    return np.dot(samples, matrix.T)
