"""Tests for the derived (non-matrix) color models."""

import numpy as np
import pytest

from perceptual_models import (
    cmy_to_rgb,
    cmyk_to_rgb,
    hsl_to_rgb,
    hsluv_to_xyz,
    hsv_to_rgb,
    lab_to_lch,
    lab_to_xyz,
    lch_to_lab,
    luv_to_xyz,
    oklab_to_xyz,
    oklch_to_xyz,
    rgb_to_cmy,
    rgb_to_cmyk,
    rgb_to_hsl,
    rgb_to_hsv,
    srlab2_to_xyz,
    uvw_to_xyz,
    xyy_to_xyz,
    xyz_to_hsluv,
    xyz_to_lab,
    xyz_to_luv,
    xyz_to_oklab,
    xyz_to_oklch,
    xyz_to_srlab2,
    xyz_to_uvw,
    xyz_to_xyy,
)
from perceptual_models.cielab import REFERENCE_WHITE
from prism_matrix import rgb_to_xyz_matrix
from prism_parameters import Primaries, Whitepoint

WHITE = np.atleast_2d(np.asarray(REFERENCE_WHITE, dtype=np.float64))
BLACK = np.zeros((1, 3))
# linear sRGB red, green, blue in canonical XYZ
PRIMARIES_XYZ = np.ascontiguousarray(rgb_to_xyz_matrix(Primaries.Bt709, Whitepoint.D65).T)


@pytest.fixture
def xyz_samples():
    rng = np.random.default_rng(7)
    rgb = rng.uniform(0.02, 0.98, size=(200, 3))
    return rgb @ PRIMARIES_XYZ


class TestCielab:

    def test_white_and_black(self):
        np.testing.assert_allclose(xyz_to_lab(WHITE), [[100.0, 0.0, 0.0]], atol=1e-10)
        np.testing.assert_allclose(xyz_to_lab(BLACK), [[0.0, 0.0, 0.0]], atol=1e-10)

    def test_srgb_red(self):
        np.testing.assert_allclose(xyz_to_lab(PRIMARIES_XYZ[:1]), [[53.24, 80.09, 67.20]], atol=0.02)

    def test_round_trip(self, xyz_samples):
        np.testing.assert_allclose(lab_to_xyz(xyz_to_lab(xyz_samples)), xyz_samples, atol=1e-10)

    def test_dark_linear_segment_round_trip(self):
        dark = WHITE * np.array([[1e-4], [5e-3], [8e-3]])
        np.testing.assert_allclose(lab_to_xyz(xyz_to_lab(dark)), dark, atol=1e-12)

    def test_lch_hue_range(self, xyz_samples):
        lch = lab_to_lch(xyz_to_lab(xyz_samples))
        assert np.all(lch[:, 2] >= 0.0)
        assert np.all(lch[:, 2] < 360.0)
        assert np.all(lch[:, 1] >= 0.0)

    def test_lch_round_trip(self):
        lab = np.array([[50.0, 20.0, -30.0], [70.0, -5.0, -0.1], [30.0, 0.0, 0.0]])
        np.testing.assert_allclose(lch_to_lab(lab_to_lch(lab)), lab, atol=1e-10)


class TestLuvUvwXyy:

    def test_luv_white_and_black(self):
        np.testing.assert_allclose(xyz_to_luv(WHITE), [[100.0, 0.0, 0.0]], atol=1e-9)
        np.testing.assert_allclose(xyz_to_luv(BLACK), [[0.0, 0.0, 0.0]], atol=1e-12)
        np.testing.assert_allclose(luv_to_xyz(np.zeros((1, 3))), BLACK, atol=1e-12)

    def test_luv_round_trip(self, xyz_samples):
        np.testing.assert_allclose(luv_to_xyz(xyz_to_luv(xyz_samples)), xyz_samples, atol=1e-10)

    def test_uvw_white_is_achromatic(self):
        uvw = xyz_to_uvw(WHITE)
        np.testing.assert_allclose(uvw[0, :2], [0.0, 0.0], atol=1e-9)
        assert uvw[0, 2] == pytest.approx(25.0 * 100.0 ** (1.0 / 3.0) - 17.0)

    def test_uvw_round_trip(self, xyz_samples):
        np.testing.assert_allclose(uvw_to_xyz(xyz_to_uvw(xyz_samples)), xyz_samples, atol=1e-10)

    def test_xyy_black_takes_white_chromaticity(self):
        np.testing.assert_allclose(xyz_to_xyy(BLACK), [[0.3127, 0.3290, 0.0]], atol=1e-4)

    def test_xyy_round_trip(self, xyz_samples):
        np.testing.assert_allclose(xyy_to_xyz(xyz_to_xyy(xyz_samples)), xyz_samples, atol=1e-12)


class TestOklab:

    def test_white(self):
        np.testing.assert_allclose(xyz_to_oklab(WHITE), [[1.0, 0.0, 0.0]], atol=1e-3)

    def test_srgb_red(self):
        np.testing.assert_allclose(xyz_to_oklab(PRIMARIES_XYZ[:1]), [[0.6280, 0.2249, 0.1258]], atol=2e-3)

    def test_negative_lms_preserved(self):
        xyz = np.array([[-0.05, 0.01, 0.02]])
        np.testing.assert_allclose(oklab_to_xyz(xyz_to_oklab(xyz)), xyz, atol=1e-12)

    def test_round_trips(self, xyz_samples):
        np.testing.assert_allclose(oklab_to_xyz(xyz_to_oklab(xyz_samples)), xyz_samples, atol=1e-10)
        np.testing.assert_allclose(oklch_to_xyz(xyz_to_oklch(xyz_samples)), xyz_samples, atol=1e-10)


class TestSrLab2:

    def test_white_d65(self):
        np.testing.assert_allclose(xyz_to_srlab2(WHITE, Whitepoint.D65), [[100.0, 0.0, 0.0]], atol=0.05)

    def test_srgb_red_d65(self):
        # linear sRGB red through the published magnetkern.de SRLAB2 matrices
        lab = xyz_to_srlab2(PRIMARIES_XYZ[:1], Whitepoint.D65)
        np.testing.assert_allclose(lab, [[53.23, 78.20, 67.70]], atol=0.05)

    @pytest.mark.parametrize("whitepoint", [Whitepoint.D65, Whitepoint.A, Whitepoint.D50, Whitepoint.F2])
    def test_round_trip(self, xyz_samples, whitepoint):
        lab = xyz_to_srlab2(xyz_samples, whitepoint)
        np.testing.assert_allclose(srlab2_to_xyz(lab, whitepoint), xyz_samples, atol=1e-10)

    def test_whitepoint_changes_result(self, xyz_samples):
        d65 = xyz_to_srlab2(xyz_samples, Whitepoint.D65)
        a = xyz_to_srlab2(xyz_samples, Whitepoint.A)
        assert not np.allclose(d65, a)


class TestHslHsv:

    def test_primaries(self):
        rgb = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
        np.testing.assert_allclose(rgb_to_hsl(rgb), [[0, 1, 0.5], [120, 1, 0.5], [240, 1, 0.5]], atol=1e-12)
        np.testing.assert_allclose(rgb_to_hsv(rgb), [[0, 1, 1], [120, 1, 1], [240, 1, 1]], atol=1e-12)

    def test_grays_have_no_saturation(self):
        rgb = np.array([[0.0, 0.0, 0.0], [0.5, 0.5, 0.5], [1.0, 1.0, 1.0]])
        hsl = rgb_to_hsl(rgb)
        np.testing.assert_allclose(hsl[:, :2], 0.0)
        np.testing.assert_allclose(hsl[:, 2], [0.0, 0.5, 1.0])
        np.testing.assert_allclose(rgb_to_hsv(rgb)[:, 1], 0.0)

    def test_magenta_hue_wraps(self):
        assert rgb_to_hsv(np.array([[1.0, 0.0, 0.5]]))[0, 0] == pytest.approx(330.0)

    def test_round_trips(self):
        rgb = np.random.default_rng(3).uniform(0.0, 1.0, size=(300, 3))
        np.testing.assert_allclose(hsl_to_rgb(rgb_to_hsl(rgb)), rgb, atol=1e-12)
        np.testing.assert_allclose(hsv_to_rgb(rgb_to_hsv(rgb)), rgb, atol=1e-12)


class TestHsluv:

    def test_white_and_black(self):
        np.testing.assert_allclose(xyz_to_hsluv(WHITE)[0, 1:], [0.0, 100.0], atol=1e-6)
        np.testing.assert_allclose(xyz_to_hsluv(BLACK)[0, 1:], [0.0, 0.0], atol=1e-12)

    def test_srgb_primaries_are_fully_saturated(self):
        hsluv = xyz_to_hsluv(PRIMARIES_XYZ)
        np.testing.assert_allclose(hsluv[:, 1], 100.0, atol=0.1)
        assert hsluv[0, 0] == pytest.approx(12.18, abs=0.05)
        assert hsluv[0, 2] == pytest.approx(53.24, abs=0.02)

    def test_in_gamut_saturation_bounded(self, xyz_samples):
        s = xyz_to_hsluv(xyz_samples)[:, 1]
        assert np.all(s >= 0.0)
        assert np.all(s <= 100.0 + 1e-6)

    def test_round_trip(self, xyz_samples):
        np.testing.assert_allclose(hsluv_to_xyz(xyz_to_hsluv(xyz_samples)), xyz_samples, atol=1e-9)


class TestSubtractive:

    def test_cmy_complement(self):
        rgb = np.array([[0.2, 0.5, 1.0]])
        np.testing.assert_allclose(rgb_to_cmy(rgb), [[0.8, 0.5, 0.0]])
        np.testing.assert_allclose(cmy_to_rgb(rgb_to_cmy(rgb)), rgb)

    def test_cmyk_key_cases(self):
        rgb = np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [1.0, 0.0, 0.0], [0.5, 0.25, 0.0]])
        np.testing.assert_allclose(rgb_to_cmyk(rgb), [
            [0.0, 0.0, 0.0, 1.0],
            [0.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 1.0, 0.0],
            [0.0, 0.5, 1.0, 0.5],
        ], atol=1e-12)

    def test_cmyk_round_trip(self):
        rgb = np.random.default_rng(5).uniform(0.0, 1.0, size=(100, 3))
        cmyk = rgb_to_cmyk(rgb)
        assert cmyk.shape == (100, 4)
        np.testing.assert_allclose(cmyk_to_rgb(cmyk), rgb, atol=1e-12)
