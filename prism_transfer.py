# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Transfer Function Engine
========================
Per-channel OETF (``encode``) and EOTF (``decode``) for every supported
``Transfer``. Both directions accept Python scalars or NumPy arrays of any
shape and are each other's inverse to well below 1e-6 over [0, 1].

Curve families:
    - sRGB (IEC 61966-2-1): linear toe below 0.0031308, power 1/2.4 above.
      Negative values are mirrored through the origin (scRGB).
    - ITU piecewise power (BT.601 / BT.709 / BT.2020 10-bit, SMPTE 240M):
      ``V = slope * L`` below the breakpoint ``beta``, ``alpha * L**0.45 -
      (alpha - 1)`` above it. The linear toe also covers negative values.
    - BT.470 System M: pure power law, gamma 2.2, mirrored for negatives.
    - Linear: identity.

Exact Continuity:
    The published ITU constants (1.099 / 0.018, 1.1115 / 0.0228) leave a
    small jump at the breakpoint, so the encoded range has a gap that no
    decode can reach back into. ``alpha`` and ``beta`` are therefore solved
    once at import so that value *and* slope meet at the breakpoint
    (``scipy.optimize.brentq``). For the 4.5-slope family this reproduces the
    BT.2020 precise constants alpha = 1.09929682680944, beta = 0.018053968510807.

Unsupported:
    ``Bt2020_12bit``, ``Smpte2084``, ``Bt2100Pq``, ``Bt2100Hlg`` and
    ``Bt2100Scene`` raise ``UnsupportedError`` on every call.
"""

import numpy as np
from numba import njit
from numpy.typing import NDArray
from scipy.optimize import brentq
from typing import Callable, Dict, Final, Tuple, TypeAlias, Union

from prism_errors import ParameterKind, UnsupportedError
from prism_parameters import Transfer, UNSUPPORTED_TRANSFERS

__all__ = [
    "ArrayFloat",
    "SRGB_LINEAR_BREAK",
    "SRGB_ENCODED_BREAK",
    "ITU_CURVE",
    "SMPTE240_CURVE",
    "BT470M_GAMMA",
    "set_strict_ieee",
    "is_supported_transfer",
    "require_supported_transfer",
    "encode",
    "decode",
    "breakpoints",
]

ArrayFloat: TypeAlias = NDArray[np.floating]
ScalarOrArray = Union[float, ArrayFloat]

# --- sRGB constants (IEC 61966-2-1) ---
SRGB_LINEAR_BREAK: Final[float] = 0.0031308
SRGB_ENCODED_BREAK: Final[float] = 0.04045
_SRGB_SLOPE: Final[float] = 12.92
_SRGB_ALPHA: Final[float] = 1.055
_SRGB_GAMMA: Final[float] = 2.4

# --- Pure power law ---
BT470M_GAMMA: Final[float] = 2.2

# ITU curves share the 0.45 exponent.
_ITU_EXPONENT: Final[float] = 0.45


def _solve_continuous_curve(exponent: float, slope: float) -> Tuple[float, float]:
    """
    Solves (alpha, beta) of ``alpha * L**exponent - (alpha - 1)`` so that it
    joins ``slope * L`` at ``L = beta`` with matching value and derivative.

    Derivative continuity gives ``alpha = slope * beta**(1 - exponent) / exponent``;
    substituting into the value condition leaves a residual that is strictly
    decreasing on (0, 1), hence a single bracketed root.
    """
    def alpha_of(beta: float) -> float:
        return slope * beta ** (1.0 - exponent) / exponent

    def residual(beta: float) -> float:
        alpha = alpha_of(beta)
        return alpha * beta ** exponent - (alpha - 1.0) - slope * beta

    beta = brentq(residual, 1e-4, 0.1, xtol=1e-16, rtol=1e-15, maxiter=200)
    return alpha_of(beta), beta


# (alpha, beta, exponent, slope)
ITU_CURVE: Final[Tuple[float, float, float, float]] = (
    *_solve_continuous_curve(_ITU_EXPONENT, 4.5), _ITU_EXPONENT, 4.5
)
SMPTE240_CURVE: Final[Tuple[float, float, float, float]] = (
    *_solve_continuous_curve(_ITU_EXPONENT, 4.0), _ITU_EXPONENT, 4.0
)


# =============================================================================
# 1. KERNELS
# =============================================================================
# Loop form instead of np.where: no boolean mask allocation, and the power
# is never evaluated on the branch that does not need it.

def _srgb_encode_py(linear: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(linear)
    linear_flat = linear.ravel()
    out_flat = out.ravel()
    for i in range(linear.size):
        v = linear_flat[i]
        a = abs(v)
        if a <= SRGB_LINEAR_BREAK:
            e = _SRGB_SLOPE * a
        else:
            e = _SRGB_ALPHA * (a ** (1.0 / _SRGB_GAMMA)) - (_SRGB_ALPHA - 1.0)
        out_flat[i] = e if v >= 0.0 else -e
    return out


def _srgb_decode_py(encoded: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(encoded)
    enc_flat = encoded.ravel()
    out_flat = out.ravel()
    for i in range(encoded.size):
        v = enc_flat[i]
        a = abs(v)
        if a <= SRGB_ENCODED_BREAK:
            l = a / _SRGB_SLOPE
        else:
            l = ((a + (_SRGB_ALPHA - 1.0)) / _SRGB_ALPHA) ** _SRGB_GAMMA
        out_flat[i] = l if v >= 0.0 else -l
    return out


def _itu_encode_py(linear: ArrayFloat, alpha: float, beta: float,
                   exponent: float, slope: float) -> ArrayFloat:
    out = np.empty_like(linear)
    linear_flat = linear.ravel()
    out_flat = out.ravel()
    for i in range(linear.size):
        v = linear_flat[i]
        if v < beta:
            out_flat[i] = slope * v
        else:
            out_flat[i] = alpha * (v ** exponent) - (alpha - 1.0)
    return out


def _itu_decode_py(encoded: ArrayFloat, alpha: float, beta: float,
                   exponent: float, slope: float) -> ArrayFloat:
    out = np.empty_like(encoded)
    enc_flat = encoded.ravel()
    out_flat = out.ravel()
    knee = slope * beta
    for i in range(encoded.size):
        v = enc_flat[i]
        if v < knee:
            out_flat[i] = v / slope
        else:
            out_flat[i] = ((v + (alpha - 1.0)) / alpha) ** (1.0 / exponent)
    return out


def _power_py(values: ArrayFloat, exponent: float) -> ArrayFloat:
    """Sign-mirrored power law."""
    out = np.empty_like(values)
    val_flat = values.ravel()
    out_flat = out.ravel()
    for i in range(values.size):
        v = val_flat[i]
        p = abs(v) ** exponent
        out_flat[i] = p if v >= 0.0 else -p
    return out


def _compile(func: Callable) -> Tuple[Callable, Callable]:
    """Builds the (fastmath, strict IEEE 754) kernel pair for *func*."""
    return (
        njit(cache=True, fastmath=True)(func),
        njit(fastmath=False)(func),
    )


_SRGB_ENCODE = _compile(_srgb_encode_py)
_SRGB_DECODE = _compile(_srgb_decode_py)
_ITU_ENCODE = _compile(_itu_encode_py)
_ITU_DECODE = _compile(_itu_decode_py)
_POWER = _compile(_power_py)


# --- Runtime Configuration ---
# When True, every kernel call dispatches to the fastmath=False variant,
# preserving strict IEEE 754 semantics (no FP reassociation, inf / NaN
# propagation). Toggle via set_strict_ieee().
_STRICT_IEEE: bool = False


def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between fast (default) and strict IEEE 754 transfer kernels.

    Args:
        enabled: If True, use strict IEEE mode.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)


def _pick(pair: Tuple[Callable, Callable]) -> Callable:
    return pair[1] if _STRICT_IEEE else pair[0]


# =============================================================================
# 2. DISPATCH
# =============================================================================

def _identity(values: ArrayFloat) -> ArrayFloat:
    return values.copy()


def _encoder(transfer: Transfer) -> Callable[[ArrayFloat], ArrayFloat]:
    if transfer is Transfer.Linear:
        return _identity
    if transfer is Transfer.Srgb:
        return lambda x: _pick(_SRGB_ENCODE)(x)
    if transfer in (Transfer.Bt709, Transfer.Bt601, Transfer.Bt2020_10bit):
        return lambda x: _pick(_ITU_ENCODE)(x, *ITU_CURVE)
    if transfer is Transfer.Smpte240:
        return lambda x: _pick(_ITU_ENCODE)(x, *SMPTE240_CURVE)
    if transfer is Transfer.Bt470M:
        return lambda x: _pick(_POWER)(x, 1.0 / BT470M_GAMMA)
    raise UnsupportedError(ParameterKind.TRANSFER, transfer)


def _decoder(transfer: Transfer) -> Callable[[ArrayFloat], ArrayFloat]:
    if transfer is Transfer.Linear:
        return _identity
    if transfer is Transfer.Srgb:
        return lambda x: _pick(_SRGB_DECODE)(x)
    if transfer in (Transfer.Bt709, Transfer.Bt601, Transfer.Bt2020_10bit):
        return lambda x: _pick(_ITU_DECODE)(x, *ITU_CURVE)
    if transfer is Transfer.Smpte240:
        return lambda x: _pick(_ITU_DECODE)(x, *SMPTE240_CURVE)
    if transfer is Transfer.Bt470M:
        return lambda x: _pick(_POWER)(x, BT470M_GAMMA)
    raise UnsupportedError(ParameterKind.TRANSFER, transfer)


def is_supported_transfer(transfer: Transfer) -> bool:
    """True if *transfer* can be encoded and decoded."""
    return transfer not in UNSUPPORTED_TRANSFERS


def require_supported_transfer(transfer: Transfer) -> None:
    """Raises ``UnsupportedError`` unless *transfer* is implemented."""
    if transfer in UNSUPPORTED_TRANSFERS:
        raise UnsupportedError(ParameterKind.TRANSFER, transfer)


def _apply(kernel: Callable[[ArrayFloat], ArrayFloat], values: ScalarOrArray) -> ScalarOrArray:
    arr = np.asarray(values, dtype=np.float64)
    res = kernel(np.ascontiguousarray(np.atleast_1d(arr)))
    if arr.ndim == 0:
        return float(res[0])
    return res.reshape(arr.shape)


def encode(transfer: Transfer, linear: ScalarOrArray) -> ScalarOrArray:
    """
    Applies the OETF of *transfer*: linear light -> encoded signal.

    Args:
        transfer: The transfer characteristic.
        linear: Linear value(s), scalar or array of any shape.

    Returns:
        Encoded value(s) with the same shape; a float for scalar input.

    Raises:
        UnsupportedError: If *transfer* is declared but not implemented.
    """
    return _apply(_encoder(transfer), linear)


def decode(transfer: Transfer, encoded: ScalarOrArray) -> ScalarOrArray:
    """
    Applies the EOTF of *transfer*: encoded signal -> linear light.

    Raises:
        UnsupportedError: If *transfer* is declared but not implemented.
    """
    return _apply(_decoder(transfer), encoded)


_BREAKPOINTS: Dict[Transfer, Tuple[float, ...]] = {
    Transfer.Linear: (),
    Transfer.Srgb: (SRGB_LINEAR_BREAK,),
    Transfer.Bt709: (ITU_CURVE[1],),
    Transfer.Bt601: (ITU_CURVE[1],),
    Transfer.Bt2020_10bit: (ITU_CURVE[1],),
    Transfer.Smpte240: (SMPTE240_CURVE[1],),
    Transfer.Bt470M: (),
}


def breakpoints(transfer: Transfer) -> Tuple[float, ...]:
    """Linear-domain breakpoints where a piecewise curve switches segment."""
    require_supported_transfer(transfer)
    return _BREAKPOINTS[transfer]
