# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_presets.py — Named color space descriptors.

Commonly used spaces spelled out from the parameter enumerations. Every
preset is an ordinary immutable descriptor, equal to the same space built
by hand.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping, Tuple

from prism_parameters import Differencing, Luminance, Primaries, Transfer, Whitepoint
from prism_spaces import ColorSpace, Lab, Oklab, Rgb, SrLab2, Xyz, Yuv

__all__ = [
    "SRGB",
    "LINEAR_SRGB",
    "BT709",
    "BT601_525",
    "BT601_625",
    "SMPTE240",
    "BT2020",
    "SYCC",
    "BT601_YCBCR",
    "BT709_YCBCR",
    "BT709_YCBCR_FULL",
    "BT2020_YCBCR",
    "YCOCG",
    "CIE_XYZ",
    "CIE_LAB",
    "OKLAB",
    "SRLAB2",
    "by_name",
    "names",
]

_D65 = Whitepoint.D65
_SDR = Luminance.Sdr

# --- RGB ---
SRGB: Final[Rgb] = Rgb(Primaries.Bt709, Transfer.Srgb, _D65, _SDR)
LINEAR_SRGB: Final[Rgb] = Rgb(Primaries.Bt709, Transfer.Linear, _D65, _SDR)
BT709: Final[Rgb] = Rgb(Primaries.Bt709, Transfer.Bt709, _D65, _SDR)
BT601_525: Final[Rgb] = Rgb(Primaries.Bt601_525, Transfer.Bt601, _D65, _SDR)
BT601_625: Final[Rgb] = Rgb(Primaries.Bt601_625, Transfer.Bt601, _D65, _SDR)
SMPTE240: Final[Rgb] = Rgb(Primaries.Smpte240, Transfer.Smpte240, _D65, _SDR)
BT2020: Final[Rgb] = Rgb(Primaries.Bt2020, Transfer.Bt2020_10bit, _D65, _SDR)

# --- YUV ---
# sYCC: BT.601 full-range luma/chroma over sRGB (IEC 61966-2-1 Amd. 1)
SYCC: Final[Yuv] = Yuv(Primaries.Bt709, _D65, Transfer.Srgb, _SDR, Differencing.Bt601FullSwing)
BT601_YCBCR: Final[Yuv] = Yuv(Primaries.Bt601_625, _D65, Transfer.Bt601, _SDR, Differencing.Bt601Quantized)
BT709_YCBCR: Final[Yuv] = Yuv(Primaries.Bt709, _D65, Transfer.Bt709, _SDR, Differencing.Bt709Quantized)
BT709_YCBCR_FULL: Final[Yuv] = Yuv(Primaries.Bt709, _D65, Transfer.Bt709, _SDR, Differencing.Bt709FullSwing)
BT2020_YCBCR: Final[Yuv] = Yuv(Primaries.Bt2020, _D65, Transfer.Bt2020_10bit, _SDR, Differencing.Bt2020)
YCOCG: Final[Yuv] = Yuv(Primaries.Bt709, _D65, Transfer.Srgb, _SDR, Differencing.YCoCg)

# --- CIE / perceptual ---
CIE_XYZ: Final[Xyz] = Xyz()
CIE_LAB: Final[Lab] = Lab()
OKLAB: Final[Oklab] = Oklab()
SRLAB2: Final[SrLab2] = SrLab2(_D65)


_PRESETS: Final[Mapping[str, ColorSpace]] = MappingProxyType({
    name: globals()[name] for name in __all__ if name.isupper()
})


def names() -> Tuple[str, ...]:
    """Names of all presets, in definition order."""
    return tuple(_PRESETS)


def by_name(name: str) -> ColorSpace:
    """
    Looks up a preset by name (case-insensitive, ``-`` and ``_`` equal).

    Raises:
        KeyError: If no preset has that name.
    """
    key = name.strip().upper().replace("-", "_")
    try:
        return _PRESETS[key]
    except KeyError:
        raise KeyError(f"Unknown color space preset: {name!r}") from None
