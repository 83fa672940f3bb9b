# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_engine.py — Conversion pipeline.

Every conversion goes through one pivot, canonical CIE XYZ (D65-adapted,
Y = 1 at 100 cd/m²):

    src sample -> [to_canonical(src)] -> XYZ -> [from_canonical(dst)] -> dst sample

Device spaces (RGB, YUV)
────────────────────────
  to:    dequantize -> inverse differencing -> decode -> × L/100 -> A·M
  from:  (A·M)^-1 -> × 100/L -> encode -> [clamp] -> differencing -> quantize

  RGB output is clamped to [0, 1] only for quantized transfers; quantized and
  full-swing differencing clamp YUV to their legal ranges. Linear and sRGB
  output is never clamped, so out-of-gamut colours survive a round trip.

Derived spaces
──────────────
  Fixed transforms in ``perceptual_models``. HSL, HSV, CMY(K) are defined
  over encoded sRGB and go through the ``SRGB`` preset.

Validation
──────────
  Pairing rules are checked first, then the identity shortcut, then parameter
  support, so that no numeric work happens for a request that will fail and
  ``convert(S, S, x)`` returns ``x`` for every constructible ``S``.
"""

import functools
import logging
import warnings
from typing import Any, Callable, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from perceptual_models import (
    cmy_to_rgb, cmyk_to_rgb, hsl_to_rgb, hsluv_to_xyz, hsv_to_rgb,
    lab_to_lch, lab_to_xyz, lch_to_lab, luv_to_xyz, oklab_to_xyz,
    oklch_to_xyz, rgb_to_cmy, rgb_to_cmyk, rgb_to_hsl, rgb_to_hsv,
    srlab2_to_xyz, uvw_to_xyz, xyy_to_xyz, xyz_to_hsluv, xyz_to_lab,
    xyz_to_luv, xyz_to_oklab, xyz_to_oklch, xyz_to_srlab2, xyz_to_uvw,
    xyz_to_xyy,
)
from prism_errors import InvalidPairingError, NumericDomainError, ParameterKind, UnsupportedError
from prism_matrix import (
    apply_matrix,
    canonical_to_rgb_matrix,
    clamp_full_swing,
    dequantize,
    differencing_matrix,
    inverse_differencing_matrix,
    quantize,
    rgb_to_canonical_matrix,
)
from prism_parameters import (
    LUMINANCE_NITS,
    PRIMARY_CHROMATICITIES,
    Primaries,
    QUANTIZED_TRANSFERS,
    WHITEPOINT_XYZ,
    luminance_scale,
)
from prism_presets import SRGB
from prism_spaces import (
    Cmy, Cmyk, ColorSpace, Hsl, Hsluv, Hsv, Lab, Lch, Luv, Oklab, Oklch,
    Rgb, Scalars, SrLab2, Uvw, Xyy, Xyz, Yuv, is_color_space,
)
from prism_transfer import decode, encode, require_supported_transfer

__all__ = [
    "convert",
    "convert_buffer",
    "to_canonical",
    "from_canonical",
    "check_supported",
    "is_supported",
    "check_pairing",
    "can_convert",
]

log = logging.getLogger(__name__)

ArrayFloat = NDArray[np.float64]


# =============================================================================
# 1. VALIDATION
# =============================================================================

def _require_space(space: Any) -> None:
    if not is_color_space(space):
        raise TypeError(f"Expected a ColorSpace descriptor, got {type(space).__name__}")


def check_pairing(src: ColorSpace, dst: ColorSpace) -> None:
    """
    Rejects structurally meaningless conversions.

    ``Scalars`` carry no colorimetry of their own: they pair with ``Xyz``
    (and with themselves, as identity) and nothing else.

    Raises:
        InvalidPairingError: For any other pairing involving ``Scalars``.
    """
    _require_space(src)
    _require_space(dst)
    if src == dst:
        return
    for this, other in ((src, dst), (dst, src)):
        if isinstance(this, Scalars) and not isinstance(other, Xyz):
            log.debug("Rejected pairing %r -> %r", src, dst)
            raise InvalidPairingError(src, dst, "Scalars convert only to or from Xyz")


def check_supported(space: ColorSpace) -> None:
    """
    Verifies that every parameter of *space* resolves to an implemented
    transform.

    Raises:
        UnsupportedError: Naming the first unresolvable parameter.
    """
    _require_space(space)
    try:
        match space:
            case Rgb(primaries=p, transfer=t, whitepoint=w, luminance=l):
                _check_device(p, t, w, l)
            case Yuv(primaries=p, whitepoint=w, transfer=t, luminance=l, differencing=d):
                _check_device(p, t, w, l)
                differencing_matrix(d)
            case Scalars(transfer=t):
                require_supported_transfer(t)
            case SrLab2(whitepoint=w):
                if w not in WHITEPOINT_XYZ:
                    raise UnsupportedError(ParameterKind.WHITEPOINT, w)
            case _:
                pass
    except UnsupportedError as exc:
        log.debug("Rejected %r: %s", space, exc)
        raise


def _check_device(primaries, transfer, whitepoint, luminance) -> None:
    if primaries is not Primaries.Xyz and primaries not in PRIMARY_CHROMATICITIES:
        raise UnsupportedError(ParameterKind.PRIMARIES, primaries)
    if whitepoint not in WHITEPOINT_XYZ:
        raise UnsupportedError(ParameterKind.WHITEPOINT, whitepoint)
    if luminance not in LUMINANCE_NITS:
        raise UnsupportedError(ParameterKind.LUMINANCE, luminance)
    require_supported_transfer(transfer)


def is_supported(space: ColorSpace) -> bool:
    """Non-raising form of ``check_supported``."""
    try:
        check_supported(space)
    except UnsupportedError:
        return False
    return True


def can_convert(src: ColorSpace, dst: ColorSpace) -> bool:
    """True if ``convert(src, dst, ...)`` would not raise for valid samples."""
    try:
        check_pairing(src, dst)
    except InvalidPairingError:
        return False
    return src == dst or (is_supported(src) and is_supported(dst))


# =============================================================================
# 2. PIVOT TRANSFORMS  (samples are (N, channels) float64)
# =============================================================================

def _rgb_to_canonical(space: Rgb, rgb: ArrayFloat) -> ArrayFloat:
    linear = decode(space.transfer, rgb) * luminance_scale(space.luminance)
    return apply_matrix(linear, rgb_to_canonical_matrix(space.primaries, space.whitepoint))


def _canonical_to_rgb(space: Rgb, xyz: ArrayFloat) -> ArrayFloat:
    linear = apply_matrix(xyz, canonical_to_rgb_matrix(space.primaries, space.whitepoint))
    encoded = encode(space.transfer, linear / luminance_scale(space.luminance))
    if space.transfer in QUANTIZED_TRANSFERS:
        np.clip(encoded, 0.0, 1.0, out=encoded)
    return encoded


def to_canonical(space: ColorSpace, samples: ArrayFloat) -> ArrayFloat:
    """(N, channels) samples of *space* -> (N, 3) canonical XYZ."""
    match space:
        case Rgb():
            return _rgb_to_canonical(space, samples)
        case Yuv(differencing=d):
            rgb = apply_matrix(dequantize(samples, d), inverse_differencing_matrix(d))
            return _rgb_to_canonical(space.rgb(), rgb)
        case Scalars(transfer=t):
            return decode(t, samples)
        case Xyz():
            return samples
        case Xyy():
            return xyy_to_xyz(samples)
        case Lab():
            return lab_to_xyz(samples)
        case Lch():
            return lab_to_xyz(lch_to_lab(samples))
        case Luv():
            return luv_to_xyz(samples)
        case Uvw():
            return uvw_to_xyz(samples)
        case Oklab():
            return oklab_to_xyz(samples)
        case Oklch():
            return oklch_to_xyz(samples)
        case SrLab2(whitepoint=w):
            return srlab2_to_xyz(samples, w)
        case Hsluv():
            return hsluv_to_xyz(samples)
        case Hsl():
            return _rgb_to_canonical(SRGB, hsl_to_rgb(samples))
        case Hsv():
            return _rgb_to_canonical(SRGB, hsv_to_rgb(samples))
        case Cmy():
            return _rgb_to_canonical(SRGB, cmy_to_rgb(samples))
        case Cmyk():
            return _rgb_to_canonical(SRGB, cmyk_to_rgb(samples))
    raise TypeError(f"Unknown color space: {space!r}")


def from_canonical(space: ColorSpace, xyz: ArrayFloat) -> ArrayFloat:
    """(N, 3) canonical XYZ -> (N, channels) samples of *space*."""
    match space:
        case Rgb():
            return _canonical_to_rgb(space, xyz)
        case Yuv(differencing=d):
            yuv = apply_matrix(_canonical_to_rgb(space.rgb(), xyz), differencing_matrix(d))
            return clamp_full_swing(quantize(yuv, d), d)
        case Scalars(transfer=t):
            return encode(t, xyz)
        case Xyz():
            return xyz
        case Xyy():
            return xyz_to_xyy(xyz)
        case Lab():
            return xyz_to_lab(xyz)
        case Lch():
            return lab_to_lch(xyz_to_lab(xyz))
        case Luv():
            return xyz_to_luv(xyz)
        case Uvw():
            return xyz_to_uvw(xyz)
        case Oklab():
            return xyz_to_oklab(xyz)
        case Oklch():
            return xyz_to_oklch(xyz)
        case SrLab2(whitepoint=w):
            return xyz_to_srlab2(xyz, w)
        case Hsluv():
            return xyz_to_hsluv(xyz)
        case Hsl():
            return rgb_to_hsl(_canonical_to_rgb(SRGB, xyz))
        case Hsv():
            return rgb_to_hsv(_canonical_to_rgb(SRGB, xyz))
        case Cmy():
            return rgb_to_cmy(_canonical_to_rgb(SRGB, xyz))
        case Cmyk():
            return rgb_to_cmyk(_canonical_to_rgb(SRGB, xyz))
    raise TypeError(f"Unknown color space: {space!r}")


# =============================================================================
# 3. PUBLIC API
# =============================================================================

def handle_channels(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator normalizing a sample buffer to (N, channels of src).

    Accepts one sample of shape (C,) or any buffer (..., C); the result
    keeps the leading shape with the destination's channel count last.

    Raises:
        ValueError: If the last dimension does not match ``src``.
    """
    @functools.wraps(func)
    def wrapper(src: ColorSpace, dst: ColorSpace, samples: Any, *args: Any, **kwargs: Any) -> ArrayFloat:
        _require_space(src)
        _require_space(dst)
        arr = np.asarray(samples, dtype=np.float64)
        if arr.ndim == 0 or arr.shape[-1] != src.channel_count:
            got = arr.shape[-1] if arr.ndim else 0
            raise ValueError(
                f"Expected last dimension size {src.channel_count} for {type(src).__name__}, got {got}"
            )
        lead = arr.shape[:-1]
        flat = np.ascontiguousarray(arr.reshape(-1, src.channel_count))

        res = func(src, dst, flat, *args, **kwargs)

        return res.reshape(lead + (res.shape[-1],))
    return wrapper


@handle_channels
def convert_buffer(src: ColorSpace, dst: ColorSpace, samples: ArrayFloat,
                   allow_nonfinite: bool = False) -> ArrayFloat:
    """
    Converts a buffer of samples from *src* to *dst*.

    Args:
        src: Color space of the input samples.
        dst: Color space of the output.
        samples: Array of shape (..., channels of src).
        allow_nonfinite: Convert NaN / inf samples (with a warning) instead
            of rejecting the buffer.

    Returns:
        float64 array of shape (..., channels of dst).

    Raises:
        InvalidPairingError: Structurally meaningless pairing.
        UnsupportedError: A parameter of either space is not implemented.
        NumericDomainError: Non-finite input with ``allow_nonfinite=False``.
        ValueError: Wrong channel count.
    """
    check_pairing(src, dst)
    if src == dst:
        return samples.copy()
    check_supported(src)
    check_supported(dst)

    if not np.all(np.isfinite(samples)):
        bad = int(np.count_nonzero(~np.isfinite(samples)))
        if not allow_nonfinite:
            log.debug("Rejected %d non-finite value(s): %r -> %r", bad, src, dst)
            raise NumericDomainError(f"{bad} non-finite value(s) in input samples")
        warnings.warn(
            f"convert_buffer: {bad} non-finite value(s) in input samples; "
            "the affected outputs are undefined.",
            stacklevel=3,
        )

    log.debug("Converting %d sample(s): %r -> %r", samples.shape[0], src, dst)
    return from_canonical(dst, to_canonical(src, samples))


def convert(src: ColorSpace, dst: ColorSpace,
            sample: Union[Sequence[float], ArrayFloat]) -> ArrayFloat:
    """
    Converts a single sample (sequence of ``src`` channel values).

    Returns:
        float64 array with one value per ``dst`` channel.
    """
    arr = np.asarray(sample, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"Expected a single sample (1-D), got shape {arr.shape}")
    return convert_buffer(src, dst, arr)
