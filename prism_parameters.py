# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_parameters.py — Primitive color parameters and constant tables.

The five parameter families below are closed enumerations of standardized
physical or encoding constants. Each member resolves to plain numbers through
the read-only tables at the bottom of this module; matrices derived from them
live in ``prism_matrix``.

Every member is constructible, hashable and serializable by value, including
members the engine does not implement yet (see ``Transfer``). Those fail only
when numeric work is requested.

References:
    - CIE 15:2004 "Colorimetry" (standard illuminants)
    - ITU-R BT.470-6, BT.601-7, BT.709-6, BT.2020-2, BT.2100-2
    - SMPTE ST 240M, ITU-T H.273 (YCgCo)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping, Tuple

__all__ = [
    "Whitepoint",
    "Primaries",
    "Luminance",
    "Transfer",
    "Differencing",
    "Chromaticities",
    "WHITEPOINT_XYZ",
    "PRIMARY_CHROMATICITIES",
    "LUMINANCE_NITS",
    "REFERENCE_NITS",
    "UNSUPPORTED_TRANSFERS",
    "QUANTIZED_TRANSFERS",
    "LUMA_WEIGHTS",
    "QUANTIZED_DIFFERENCING",
    "FULL_SWING_DIFFERENCING",
    "whitepoint_xyz",
    "luminance_scale",
]

Triple = Tuple[float, float, float]


# =============================================================================
# 1. ENUMERATIONS
# =============================================================================

class Whitepoint(Enum):
    """The whitepoint / standard illuminant."""
    A = "A"
    B = "B"
    C = "C"
    D50 = "D50"
    D55 = "D55"
    D65 = "D65"
    D75 = "D75"
    E = "E"
    F2 = "F2"
    F7 = "F7"
    F11 = "F11"


class Primaries(Enum):
    """The relative stimuli of the three corners of a triangular RGB gamut."""
    # The CIE XYZ axes as 'primaries'; resolves to the identity matrix.
    Xyz = "xyz"
    # First set of BT.601 primaries (same as SMPTE 240M).
    Bt601_525 = "bt601_525"
    # Second set of BT.601 primaries (EBU).
    Bt601_625 = "bt601_625"
    Bt709 = "bt709"
    Smpte240 = "smpte240"
    # Wide color gamut.
    Bt2020 = "bt2020"
    # Same triangle as BT.2020.
    Bt2100 = "bt2100"


class Luminance(Enum):
    """The reference brightness of the color specification."""
    Sdr = "sdr"
    Hdr = "hdr"
    AdobeRgb = "adobe_rgb"
    DciP3 = "dci_p3"


class Transfer(Enum):
    """
    Transfer functions from encoded samples to physical quantity.

    Ignoring viewing environment effects each member names a pair of mutually
    inverse functions: the opto-electronic transfer (OETF, ``encode``) and the
    electro-optical transfer (EOTF, ``decode``), applied per channel.

    ``Bt2020_12bit``, ``Smpte2084``, ``Bt2100Pq``, ``Bt2100Hlg`` and
    ``Bt2100Scene`` are declared so that descriptors carrying them can be
    built and stored, but any numeric use raises ``UnsupportedError``.
    """
    Bt709 = "bt709"
    Bt470M = "bt470m"
    Bt601 = "bt601"
    Smpte240 = "smpte240"
    # Linear color in display luminance.
    Linear = "linear"
    # scRGB: negative values are mirrored through the origin.
    Srgb = "srgb"
    Bt2020_10bit = "bt2020_10bit"
    Bt2020_12bit = "bt2020_12bit"
    Smpte2084 = "smpte2084"
    # Another name for Smpte2084.
    Bt2100Pq = "bt2100_pq"
    Bt2100Hlg = "bt2100_hlg"
    # Linear color in scene luminance of BT.2100.
    Bt2100Scene = "bt2100_scene"


class Differencing(Enum):
    """The luma/chroma differencing scheme of a YUV construction."""
    # BT.470 M/PAL, the naming origin of 'YUV', with the published factors.
    Bt407MPal = "bt407_m_pal"
    # BT.470 M/PAL with factors re-derived from its Umax/Vmax parameters.
    Bt407MPalPrecise = "bt407_m_pal_precise"
    Bt601 = "bt601"
    # Quantized with head- and footroom.
    Bt601Quantized = "bt601_quantized"
    # Quantized without headroom.
    Bt601FullSwing = "bt601_full_swing"
    Bt709 = "bt709"
    Bt709Quantized = "bt709_quantized"
    # Not an ITU recommendation, introduced with H.264.
    Bt709FullSwing = "bt709_full_swing"
    # Analog SECAM factors.
    YDbDr = "ydbdr"
    Bt2020 = "bt2020"
    # Same coefficients as BT.2020.
    Bt2100 = "bt2100"
    # ITU-T H.273, channel order (Y, Co, Cg).
    YCoCg = "ycocg"
    # NTSC YIQ, channel order (Y, I, Q).
    Yiq = "yiq"


# =============================================================================
# 2. CONSTANT TABLES
# =============================================================================

# Standard illuminants, XYZ normalized to Y = 1.
WHITEPOINT_XYZ: Final[Mapping[Whitepoint, Triple]] = MappingProxyType({
    Whitepoint.A:   (1.09850, 1.00000, 0.35585),
    Whitepoint.B:   (0.99072, 1.00000, 0.85223),
    Whitepoint.C:   (0.98074, 1.00000, 1.18232),
    Whitepoint.D50: (0.96422, 1.00000, 0.82521),
    Whitepoint.D55: (0.95682, 1.00000, 0.92149),
    Whitepoint.D65: (0.95047, 1.00000, 1.08883),
    Whitepoint.D75: (0.94972, 1.00000, 1.22638),
    Whitepoint.E:   (1.00000, 1.00000, 1.00000),
    Whitepoint.F2:  (0.99186, 1.00000, 0.67393),
    Whitepoint.F7:  (0.95041, 1.00000, 1.08747),
    Whitepoint.F11: (1.00962, 1.00000, 0.64350),
})


@dataclass(slots=True, frozen=True)
class Chromaticities:
    """CIE 1931 xy chromaticities of the red, green and blue primaries."""
    red:   Tuple[float, float]
    green: Tuple[float, float]
    blue:  Tuple[float, float]


_SMPTE_C = Chromaticities((0.630, 0.340), (0.310, 0.595), (0.155, 0.070))
_EBU = Chromaticities((0.640, 0.330), (0.290, 0.600), (0.150, 0.060))
_REC709 = Chromaticities((0.640, 0.330), (0.300, 0.600), (0.150, 0.060))
_REC2020 = Chromaticities((0.708, 0.292), (0.170, 0.797), (0.131, 0.046))

# Primaries.Xyz has no chromaticity triangle and is absent on purpose.
PRIMARY_CHROMATICITIES: Final[Mapping[Primaries, Chromaticities]] = MappingProxyType({
    Primaries.Bt601_525: _SMPTE_C,
    Primaries.Bt601_625: _EBU,
    Primaries.Bt709:     _REC709,
    Primaries.Smpte240:  _SMPTE_C,
    Primaries.Bt2020:    _REC2020,
    Primaries.Bt2100:    _REC2020,
})

# Peak reference brightness in cd/m².
LUMINANCE_NITS: Final[Mapping[Luminance, float]] = MappingProxyType({
    Luminance.Sdr:      100.0,
    Luminance.Hdr:      10000.0,
    Luminance.AdobeRgb: 160.0,
    Luminance.DciP3:    1000.0,
})

# The canonical XYZ pivot has Y = 1 at this brightness.
REFERENCE_NITS: Final[float] = 100.0

UNSUPPORTED_TRANSFERS: Final[frozenset] = frozenset({
    Transfer.Bt2020_12bit,
    Transfer.Smpte2084,
    Transfer.Bt2100Pq,
    Transfer.Bt2100Hlg,
    Transfer.Bt2100Scene,
})

# Transfers whose encoded signal is a quantized code range, clamped to [0, 1].
QUANTIZED_TRANSFERS: Final[frozenset] = frozenset({
    Transfer.Bt2020_10bit,
})

# (Kr, Kb) luma weights of the Kr/Kb-derived differencing schemes.
LUMA_WEIGHTS: Final[Mapping[Differencing, Tuple[float, float]]] = MappingProxyType({
    Differencing.Bt407MPal:        (0.299, 0.114),
    Differencing.Bt407MPalPrecise: (0.299, 0.114),
    Differencing.Bt601:            (0.299, 0.114),
    Differencing.Bt601Quantized:   (0.299, 0.114),
    Differencing.Bt601FullSwing:   (0.299, 0.114),
    Differencing.Bt709:            (0.2126, 0.0722),
    Differencing.Bt709Quantized:   (0.2126, 0.0722),
    Differencing.Bt709FullSwing:   (0.2126, 0.0722),
    Differencing.YDbDr:            (0.299, 0.114),
    Differencing.Bt2020:           (0.2627, 0.0593),
    Differencing.Bt2100:           (0.2627, 0.0593),
    Differencing.Yiq:              (0.299, 0.114),
})

QUANTIZED_DIFFERENCING: Final[frozenset] = frozenset({
    Differencing.Bt601Quantized,
    Differencing.Bt709Quantized,
})

FULL_SWING_DIFFERENCING: Final[frozenset] = frozenset({
    Differencing.Bt601FullSwing,
    Differencing.Bt709FullSwing,
})


# =============================================================================
# 3. RESOLVERS
# =============================================================================

def whitepoint_xyz(whitepoint: Whitepoint) -> Triple:
    """Returns the fixed XYZ tristimulus triple (Y = 1) of an illuminant."""
    return WHITEPOINT_XYZ[whitepoint]


def luminance_scale(luminance: Luminance) -> float:
    """Factor taking linear values of *luminance* onto the canonical pivot."""
    return LUMINANCE_NITS[luminance] / REFERENCE_NITS
