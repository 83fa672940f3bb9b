# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: srlab2.py — SRLAB2 (Lissner & Urban, after magnetkern.de).

SRLAB2 keeps the structure of CIELAB but replaces its von Kries scaling in
XYZ with a CIECAM02 chromatic adaptation and uses a cone-space matrix fitted
to hue linearity. The model is parametrized by the whitepoint the colour is
viewed under:

    canonical XYZ (D65)
      -> Bradford (D65 -> wp)          colour as seen under wp
      -> CAT02 von Kries (wp -> D65)   complete adaptation to the model white
      -> linear sRGB
      -> cone matrix -> piecewise cube root -> Lab matrix

For ``Whitepoint.D65`` both adaptations are exactly the identity and the
transform reduces to plain SRLAB2 over linear sRGB.
"""

import numpy as np
from numba import njit
from numpy.typing import NDArray
from typing import Dict, Final, Tuple

from prism_matrix import (
    CANONICAL_WHITEPOINT,
    adaptation_matrix,
    apply_matrix,
    xyz_to_rgb_matrix,
)
from prism_parameters import Primaries, WHITEPOINT_XYZ, Whitepoint

__all__ = [
    "M_CAT02",
    "cat02_matrix",
    "xyz_to_srlab2",
    "srlab2_to_xyz",
]

ArrayFloat = NDArray[np.float64]

# CIECAM02 chromatic adaptation transform
M_CAT02: Final[ArrayFloat] = np.array([
    [ 0.7328, 0.4296, -0.1624],
    [-0.7036, 1.6975,  0.0061],
    [ 0.0030, 0.0136,  0.9834]
], dtype=np.float64)
_M_CAT02_INV: Final[ArrayFloat] = np.linalg.inv(M_CAT02)

_CONE: Final[ArrayFloat] = np.array([
    [0.320530, 0.636920, 0.042560],
    [0.161987, 0.756636, 0.081376],
    [0.017228, 0.108660, 0.874112]
], dtype=np.float64)

_LAB: Final[ArrayFloat] = np.array([
    [ 37.0950,   62.9054,   -0.0008],
    [663.4684, -750.5078,   87.0328],
    [ 63.9569,  108.4576, -172.4152]
], dtype=np.float64)

_LAB_INV: Final[ArrayFloat] = np.linalg.inv(_LAB)

_EPSILON: Final[float] = 216.0 / 24389.0
_KAPPA: Final[float] = 24389.0 / 2700.0
# f(_EPSILON), the breakpoint on the compressed side
_F_BREAK: Final[float] = 0.08


@njit(cache=True, fastmath=True)
def _compress(values: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(values)
    v_flat = values.ravel()
    out_flat = out.ravel()
    for i in range(values.size):
        v = v_flat[i]
        if v <= _EPSILON:
            out_flat[i] = v * _KAPPA
        else:
            out_flat[i] = 1.16 * v ** (1.0 / 3.0) - 0.16
    return out


@njit(cache=True, fastmath=True)
def _expand(values: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(values)
    v_flat = values.ravel()
    out_flat = out.ravel()
    for i in range(values.size):
        v = v_flat[i]
        if v <= _F_BREAK:
            out_flat[i] = v / _KAPPA
        else:
            t = (v + 0.16) / 1.16
            out_flat[i] = t * t * t
    return out


def cat02_matrix(src: Whitepoint, dst: Whitepoint) -> ArrayFloat:
    """Complete (D = 1) CAT02 von Kries adaptation between two illuminants."""
    if src is dst:
        return np.eye(3)
    src_lms = M_CAT02 @ np.asarray(WHITEPOINT_XYZ[src], dtype=np.float64)
    dst_lms = M_CAT02 @ np.asarray(WHITEPOINT_XYZ[dst], dtype=np.float64)
    return _M_CAT02_INV @ np.diag(dst_lms / src_lms) @ M_CAT02


def _build_tables() -> Tuple[Dict[Whitepoint, ArrayFloat], Dict[Whitepoint, ArrayFloat]]:
    to_srgb = xyz_to_rgb_matrix(Primaries.Bt709, CANONICAL_WHITEPOINT)
    forward: Dict[Whitepoint, ArrayFloat] = {}
    inverse: Dict[Whitepoint, ArrayFloat] = {}
    for wp in Whitepoint:
        m = (
            _CONE
            @ to_srgb
            @ cat02_matrix(wp, CANONICAL_WHITEPOINT)
            @ adaptation_matrix(CANONICAL_WHITEPOINT, wp)
        )
        m_inv = np.linalg.inv(m)
        m.setflags(write=False)
        m_inv.setflags(write=False)
        forward[wp] = m
        inverse[wp] = m_inv
    return forward, inverse


# canonical XYZ -> SRLAB2 cone response, per viewing whitepoint
_TO_CONE, _FROM_CONE = _build_tables()


def xyz_to_srlab2(xyz: ArrayFloat, whitepoint: Whitepoint) -> ArrayFloat:
    """Canonical XYZ -> SRLAB2 (L in [0, 100] for the viewing white)."""
    cone = apply_matrix(xyz, _TO_CONE[whitepoint])
    return apply_matrix(_compress(np.ascontiguousarray(cone)), _LAB)


def srlab2_to_xyz(lab: ArrayFloat, whitepoint: Whitepoint) -> ArrayFloat:
    """SRLAB2 -> canonical XYZ."""
    compressed = apply_matrix(lab, _LAB_INV)
    return apply_matrix(_expand(np.ascontiguousarray(compressed)), _FROM_CONE[whitepoint])
