"""Tests for color space descriptors and presets."""

import dataclasses

import pytest

import prism_presets
from prism_parameters import Differencing, Luminance, Primaries, Transfer, Whitepoint
from prism_presets import SRGB, SYCC, by_name, names
from prism_spaces import (
    COLOR_SPACE_TYPES,
    Cmyk,
    Hsl,
    Lab,
    Oklab,
    Rgb,
    Scalars,
    SrLab2,
    Xyz,
    Yuv,
    channel_count,
    from_state,
    is_color_space,
    parameters,
)


def _pq_rgb():
    return Rgb(Primaries.Bt2020, Transfer.Smpte2084, Whitepoint.D65, Luminance.Hdr)


class TestDescriptors:

    def test_structural_equality(self):
        a = Rgb(Primaries.Bt709, Transfer.Srgb, Whitepoint.D65, Luminance.Sdr)
        b = Rgb(Primaries.Bt709, Transfer.Srgb, Whitepoint.D65, Luminance.Sdr)
        assert a == b
        assert hash(a) == hash(b)
        assert a != Rgb(Primaries.Bt709, Transfer.Linear, Whitepoint.D65, Luminance.Sdr)

    def test_variants_differ_even_without_parameters(self):
        assert Lab() == Lab()
        assert Lab() != Oklab()
        assert len({Lab(), Oklab(), Xyz(), Lab()}) == 3

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            SRGB.transfer = Transfer.Linear

    def test_unsupported_parameters_are_constructible(self):
        space = _pq_rgb()
        assert space.transfer is Transfer.Smpte2084
        assert space == _pq_rgb()

    def test_parameter_sets(self):
        assert set(parameters(SRGB)) == {"primaries", "transfer", "whitepoint", "luminance"}
        assert set(parameters(SYCC)) == {"primaries", "whitepoint", "transfer", "luminance", "differencing"}
        assert parameters(SrLab2(Whitepoint.D50)) == {"whitepoint": Whitepoint.D50}
        assert parameters(Scalars(Transfer.Linear)) == {"transfer": Transfer.Linear}
        assert parameters(Hsl()) == {}

    def test_channels(self):
        assert SRGB.channels == ("R", "G", "B")
        assert channel_count(Cmyk()) == 4
        assert Cmyk().channel_count == 4
        for cls in COLOR_SPACE_TYPES:
            if cls is not Cmyk:
                assert len(cls.channels) == 3

    def test_yuv_underlying_rgb(self):
        assert SYCC.rgb() == SRGB
        assert SYCC.differencing is Differencing.Bt601FullSwing

    def test_is_color_space(self):
        assert is_color_space(Xyz())
        assert not is_color_space("srgb")
        assert not is_color_space(Transfer.Srgb)


class TestState:

    @pytest.mark.parametrize("space", [SRGB, SYCC, Xyz(), SrLab2(Whitepoint.A), Scalars(Transfer.Bt2100Pq), _pq_rgb()])
    def test_round_trip(self, space):
        assert from_state(space.get_state()) == space

    def test_state_is_plain_values(self):
        assert SRGB.get_state() == {
            "model": "Rgb",
            "primaries": "bt709",
            "transfer": "srgb",
            "whitepoint": "D65",
            "luminance": "sdr",
        }

    def test_unknown_model(self):
        with pytest.raises(ValueError, match="Unknown color model"):
            from_state({"model": "Cmyka"})

    def test_missing_field(self):
        with pytest.raises(ValueError, match="missing 'whitepoint'"):
            from_state({"model": "SrLab2"})

    def test_bad_enum_value(self):
        with pytest.raises(ValueError):
            from_state({"model": "Scalars", "transfer": "gamma9"})


class TestPresets:

    def test_names(self):
        listed = names()
        assert "SRGB" in listed
        assert "OKLAB" in listed
        assert len(listed) == len(set(listed))
        for name in listed:
            assert is_color_space(getattr(prism_presets, name))

    def test_by_name_normalizes(self):
        assert by_name("srgb") is SRGB
        assert by_name("linear-srgb") == Rgb(Primaries.Bt709, Transfer.Linear, Whitepoint.D65, Luminance.Sdr)
        assert by_name(" Bt709_YCbCr ") == Yuv(
            Primaries.Bt709, Whitepoint.D65, Transfer.Bt709, Luminance.Sdr, Differencing.Bt709Quantized
        )

    def test_by_name_unknown(self):
        with pytest.raises(KeyError):
            by_name("display-p3")

    def test_presets_equal_hand_built(self):
        assert prism_presets.SRLAB2 == SrLab2(Whitepoint.D65)
        assert prism_presets.CIE_XYZ == Xyz()
