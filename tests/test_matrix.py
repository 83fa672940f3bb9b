"""Tests for the primaries, adaptation and differencing matrices."""

import itertools

import numpy as np
import pytest

from prism_matrix import (
    CHROMA_LEGAL,
    LUMA_LEGAL,
    adaptation_matrix,
    apply_matrix,
    bradford_matrix,
    canonical_to_rgb_matrix,
    clamp_full_swing,
    dequantize,
    differencing_matrix,
    inverse_differencing_matrix,
    quantize,
    rgb_to_canonical_matrix,
    rgb_to_xyz_matrix,
    xyz_to_rgb_matrix,
)
from prism_parameters import Differencing, Primaries, WHITEPOINT_XYZ, Whitepoint


class TestPrimaries:

    @pytest.mark.parametrize("primaries,whitepoint", list(itertools.product(Primaries, Whitepoint)))
    def test_invertible(self, primaries, whitepoint):
        m = rgb_to_xyz_matrix(primaries, whitepoint)
        m_inv = xyz_to_rgb_matrix(primaries, whitepoint)
        np.testing.assert_allclose(m @ m_inv, np.eye(3), atol=1e-10)

    @pytest.mark.parametrize("primaries", list(Primaries))
    def test_rgb_white_maps_to_whitepoint(self, primaries):
        for whitepoint in Whitepoint:
            xyz = rgb_to_xyz_matrix(primaries, whitepoint) @ np.ones(3)
            np.testing.assert_allclose(xyz, WHITEPOINT_XYZ[whitepoint], atol=1e-12)

    def test_bt709_d65_matches_published(self):
        m = rgb_to_xyz_matrix(Primaries.Bt709, Whitepoint.D65)
        expected = np.array([
            [0.4124564, 0.3575761, 0.1804375],
            [0.2126729, 0.7151522, 0.0721750],
            [0.0193339, 0.1191920, 0.9503041],
        ])
        np.testing.assert_allclose(m, expected, atol=1e-6)

    def test_xyz_primaries_scale_axes_to_whitepoint(self):
        np.testing.assert_array_equal(rgb_to_xyz_matrix(Primaries.Xyz, Whitepoint.E), np.eye(3))
        m = rgb_to_xyz_matrix(Primaries.Xyz, Whitepoint.D65)
        np.testing.assert_allclose(m, np.diag([0.95047, 1.0, 1.08883]), atol=1e-12)

    def test_tables_are_read_only(self):
        m = rgb_to_xyz_matrix(Primaries.Bt709, Whitepoint.D65)
        with pytest.raises(ValueError):
            m[0, 0] = 1.0


class TestAdaptation:

    @pytest.mark.parametrize("whitepoint", list(Whitepoint))
    def test_self_adaptation_is_exact_identity(self, whitepoint):
        assert np.array_equal(adaptation_matrix(whitepoint, whitepoint), np.eye(3))

    def test_bradford_d50_to_d65(self):
        """Lindbloom's published Bradford D50 -> D65 matrix."""
        expected = np.array([
            [ 0.9555766, -0.0230393, 0.0631636],
            [-0.0282895,  1.0099416, 0.0210077],
            [ 0.0122982, -0.0204830, 1.3299098],
        ])
        np.testing.assert_allclose(adaptation_matrix(Whitepoint.D50, Whitepoint.D65), expected, atol=1e-6)

    @pytest.mark.parametrize("src,dst", [(Whitepoint.A, Whitepoint.D65), (Whitepoint.F11, Whitepoint.E)])
    def test_maps_white_onto_white(self, src, dst):
        xyz = adaptation_matrix(src, dst) @ np.asarray(WHITEPOINT_XYZ[src])
        np.testing.assert_allclose(xyz, WHITEPOINT_XYZ[dst], atol=1e-12)

    def test_arbitrary_whites(self):
        src = (0.9, 1.0, 0.9)
        dst = (1.0, 1.0, 1.1)
        np.testing.assert_allclose(bradford_matrix(src, dst) @ np.array(src), dst, atol=1e-12)

    def test_canonical_chain(self):
        m = rgb_to_canonical_matrix(Primaries.Bt709, Whitepoint.D50)
        expected = adaptation_matrix(Whitepoint.D50, Whitepoint.D65) @ rgb_to_xyz_matrix(Primaries.Bt709, Whitepoint.D50)
        np.testing.assert_allclose(m, expected, atol=1e-15)
        np.testing.assert_allclose(m @ canonical_to_rgb_matrix(Primaries.Bt709, Whitepoint.D50), np.eye(3), atol=1e-12)


class TestDifferencing:

    @pytest.mark.parametrize("diff", list(Differencing), ids=lambda d: d.name)
    def test_white_has_no_chroma(self, diff):
        yuv = differencing_matrix(diff) @ np.ones(3)
        np.testing.assert_allclose(yuv, [1.0, 0.0, 0.0], atol=1e-4)

    @pytest.mark.parametrize("diff", list(Differencing), ids=lambda d: d.name)
    def test_inverse(self, diff):
        np.testing.assert_allclose(
            inverse_differencing_matrix(diff) @ differencing_matrix(diff), np.eye(3), atol=1e-12
        )

    def test_bt709_unity_gain(self):
        m = differencing_matrix(Differencing.Bt709)
        np.testing.assert_allclose(m[0], [0.2126, 0.7152, 0.0722], atol=1e-12)
        assert (m @ [0.0, 0.0, 1.0])[1] == pytest.approx(0.5)
        assert (m @ [1.0, 0.0, 0.0])[2] == pytest.approx(0.5)

    def test_pal_published_and_precise(self):
        published = differencing_matrix(Differencing.Bt407MPal)
        precise = differencing_matrix(Differencing.Bt407MPalPrecise)
        assert published[1, 2] == pytest.approx(0.493 * (1 - 0.114))
        assert precise[1, 2] == pytest.approx(0.436)
        assert precise[2, 0] == pytest.approx(0.615)
        assert not np.allclose(published, precise)

    def test_ydbdr_signs(self):
        m = differencing_matrix(Differencing.YDbDr)
        assert (m @ [0.0, 0.0, 1.0])[1] > 0.0
        assert (m @ [1.0, 0.0, 0.0])[2] < 0.0

    def test_ycocg_order(self):
        m = differencing_matrix(Differencing.YCoCg)
        np.testing.assert_allclose(m @ [0.0, 1.0, 0.0], [0.5, 0.0, 0.5])
        np.testing.assert_allclose(m @ [1.0, 0.0, 0.0], [0.25, 0.5, -0.25])


class TestQuantization:

    def test_quantize_ranges(self):
        yuv = np.array([[0.0, 0.0, 0.0], [1.0, -0.5, 0.5]])
        q = quantize(yuv, Differencing.Bt709Quantized)
        np.testing.assert_allclose(q[0], [16 / 255, 128 / 255, 128 / 255])
        np.testing.assert_allclose(q[1], [235 / 255, 16 / 255, 240 / 255])

    def test_quantize_clamps_to_legal(self):
        q = quantize(np.array([[2.0, -3.0, 3.0]]), Differencing.Bt601Quantized)
        np.testing.assert_allclose(q[0], [LUMA_LEGAL[1], CHROMA_LEGAL[0], CHROMA_LEGAL[1]])

    def test_dequantize_inverts(self):
        yuv = np.array([[0.3, -0.2, 0.4], [0.9, 0.1, -0.45]])
        q = quantize(yuv, Differencing.Bt601Quantized)
        np.testing.assert_allclose(dequantize(q, Differencing.Bt601Quantized), yuv, atol=1e-12)

    def test_plain_schemes_pass_through(self):
        yuv = np.array([[2.0, -3.0, 3.0]])
        assert quantize(yuv, Differencing.Bt709) is yuv
        assert dequantize(yuv, Differencing.Bt709FullSwing) is yuv
        assert clamp_full_swing(yuv, Differencing.Bt709Quantized) is yuv

    def test_full_swing_clamp(self):
        out = clamp_full_swing(np.array([[1.2, -0.7, 0.6]]), Differencing.Bt709FullSwing)
        np.testing.assert_allclose(out[0], [1.0, -0.5, 0.5])


def test_apply_matrix_row_vectors():
    m = np.arange(9.0).reshape(3, 3)
    samples = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 2.0]])
    np.testing.assert_allclose(apply_matrix(samples, m), (m @ samples.T).T)
