# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_spaces.py — Color space descriptors.

A ``ColorSpace`` is one of the frozen value types below: a closed tagged
union where the variant fixes the channel semantics and the fields carry
exactly the primitive parameters that variant needs. Descriptors compare and
hash structurally and never hold numeric state, so they are safe to share
between threads and to use as dictionary keys.

Descriptors may carry parameters the engine does not implement (e.g. a PQ
transfer); construction always succeeds and conversion reports the gap.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Tuple, Type, Union

from prism_parameters import Differencing, Luminance, Primaries, Transfer, Whitepoint

__all__ = [
    "Rgb",
    "Yuv",
    "Xyz",
    "Xyy",
    "Lab",
    "Lch",
    "Luv",
    "Uvw",
    "Oklab",
    "Oklch",
    "SrLab2",
    "Hsl",
    "Hsv",
    "Hsluv",
    "Cmy",
    "Cmyk",
    "Scalars",
    "ColorSpace",
    "COLOR_SPACE_TYPES",
    "is_color_space",
    "channel_count",
    "parameters",
    "from_state",
]


class _Descriptor:
    """Shared behaviour of all color space variants."""
    __slots__ = ()

    channels: ClassVar[Tuple[str, ...]] = ()

    @property
    def channel_count(self) -> int:
        return len(self.channels)

    def get_state(self) -> Dict[str, Any]:
        """Serialisable snapshot: the variant name plus enum values."""
        state: Dict[str, Any] = {"model": type(self).__name__}
        for f in fields(self):
            state[f.name] = getattr(self, f.name).value
        return state


# =============================================================================
# 1. DEVICE SPACES
# =============================================================================

@dataclass(slots=True, frozen=True)
class Rgb(_Descriptor):
    """
    A tristimulus RGB space.

    Linear light is recovered by decoding ``transfer``; the primaries and
    whitepoint then fix the mapping to XYZ and ``luminance`` its scale.
    """
    primaries: Primaries
    transfer: Transfer
    whitepoint: Whitepoint
    luminance: Luminance

    channels: ClassVar[Tuple[str, ...]] = ("R", "G", "B")


@dataclass(slots=True, frozen=True)
class Yuv(_Descriptor):
    """
    A luma/chroma space: ``differencing`` applied to the encoded RGB space
    described by the remaining parameters.
    """
    primaries: Primaries
    whitepoint: Whitepoint
    transfer: Transfer
    luminance: Luminance
    differencing: Differencing

    channels: ClassVar[Tuple[str, ...]] = ("Y", "U", "V")

    def rgb(self) -> Rgb:
        """The underlying R'G'B' space."""
        return Rgb(self.primaries, self.transfer, self.whitepoint, self.luminance)


@dataclass(slots=True, frozen=True)
class Scalars(_Descriptor):
    """
    Three opaque channels with a transfer function and nothing else; the
    decoded values are read as CIE XYZ.
    """
    transfer: Transfer

    channels: ClassVar[Tuple[str, ...]] = ("s0", "s1", "s2")


# =============================================================================
# 2. CIE AND PERCEPTUAL SPACES  (D65 reference white)
# =============================================================================

@dataclass(slots=True, frozen=True)
class Xyz(_Descriptor):
    """CIE 1931 XYZ, D65-adapted, Y = 1 at 100 cd/m². The conversion pivot."""
    channels: ClassVar[Tuple[str, ...]] = ("X", "Y", "Z")


@dataclass(slots=True, frozen=True)
class Xyy(_Descriptor):
    channels: ClassVar[Tuple[str, ...]] = ("x", "y", "Y")


@dataclass(slots=True, frozen=True)
class Lab(_Descriptor):
    """CIE 1976 L*a*b*."""
    channels: ClassVar[Tuple[str, ...]] = ("L", "a", "b")


@dataclass(slots=True, frozen=True)
class Lch(_Descriptor):
    channels: ClassVar[Tuple[str, ...]] = ("L", "C", "h")


@dataclass(slots=True, frozen=True)
class Luv(_Descriptor):
    """CIE 1976 L*u*v*."""
    channels: ClassVar[Tuple[str, ...]] = ("L", "u", "v")


@dataclass(slots=True, frozen=True)
class Uvw(_Descriptor):
    """CIE 1964 U*V*W*."""
    channels: ClassVar[Tuple[str, ...]] = ("U", "V", "W")


@dataclass(slots=True, frozen=True)
class Oklab(_Descriptor):
    channels: ClassVar[Tuple[str, ...]] = ("L", "a", "b")


@dataclass(slots=True, frozen=True)
class Oklch(_Descriptor):
    channels: ClassVar[Tuple[str, ...]] = ("L", "C", "h")


@dataclass(slots=True, frozen=True)
class SrLab2(_Descriptor):
    """SRLAB2 of a color viewed under ``whitepoint``."""
    whitepoint: Whitepoint

    channels: ClassVar[Tuple[str, ...]] = ("L", "a", "b")


# =============================================================================
# 3. sRGB DERIVED MODELS
# =============================================================================

@dataclass(slots=True, frozen=True)
class Hsl(_Descriptor):
    channels: ClassVar[Tuple[str, ...]] = ("H", "S", "L")


@dataclass(slots=True, frozen=True)
class Hsv(_Descriptor):
    channels: ClassVar[Tuple[str, ...]] = ("H", "S", "V")


@dataclass(slots=True, frozen=True)
class Hsluv(_Descriptor):
    channels: ClassVar[Tuple[str, ...]] = ("H", "S", "L")


@dataclass(slots=True, frozen=True)
class Cmy(_Descriptor):
    channels: ClassVar[Tuple[str, ...]] = ("C", "M", "Y")


@dataclass(slots=True, frozen=True)
class Cmyk(_Descriptor):
    channels: ClassVar[Tuple[str, ...]] = ("C", "M", "Y", "K")


ColorSpace = Union[
    Rgb, Yuv, Scalars, Xyz, Xyy, Lab, Lch, Luv, Uvw, Oklab, Oklch, SrLab2,
    Hsl, Hsv, Hsluv, Cmy, Cmyk,
]

COLOR_SPACE_TYPES: Tuple[Type[_Descriptor], ...] = (
    Rgb, Yuv, Scalars, Xyz, Xyy, Lab, Lch, Luv, Uvw, Oklab, Oklch, SrLab2,
    Hsl, Hsv, Hsluv, Cmy, Cmyk,
)

_BY_MODEL: Mapping[str, Type[_Descriptor]] = {cls.__name__: cls for cls in COLOR_SPACE_TYPES}

_FIELD_ENUMS: Mapping[str, Type[Enum]] = {
    "primaries": Primaries,
    "transfer": Transfer,
    "whitepoint": Whitepoint,
    "luminance": Luminance,
    "differencing": Differencing,
}


# =============================================================================
# 4. HELPERS
# =============================================================================

def is_color_space(obj: Any) -> bool:
    return isinstance(obj, COLOR_SPACE_TYPES)


def channel_count(space: ColorSpace) -> int:
    """Number of channels of a sample in *space*."""
    return len(space.channels)


def parameters(space: ColorSpace) -> Dict[str, Enum]:
    """The primitive parameters a descriptor carries, by field name."""
    return {f.name: getattr(space, f.name) for f in fields(space)}


def from_state(state: Mapping[str, Any]) -> ColorSpace:
    """
    Reconstructs a descriptor from ``get_state()`` output.

    Raises:
        ValueError: Unknown model, unknown enum value or missing field.
    """
    model = state.get("model")
    try:
        cls = _BY_MODEL[model]
    except KeyError:
        raise ValueError(f"Unknown color model: {model!r}") from None

    kwargs = {}
    for f in fields(cls):
        if f.name not in state:
            raise ValueError(f"{model} state is missing '{f.name}'")
        kwargs[f.name] = _FIELD_ENUMS[f.name](state[f.name])
    return cls(**kwargs)
