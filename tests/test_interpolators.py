"""
Tests for the trilinear field interpolator.
"""

import numpy as np
import pytest
from scipy.interpolate import RegularGridInterpolator

from dynamicstoolset.analysis.interpolators import TrilinearInterpolator
from dynamicstoolset.model.dynamical_model import DynamicalModel
from dynamicstoolset.model.plugins import Rossler


class TestExplicitSamples:

    def test_exact_at_lattice_points(self, linear_field, lattice_samples):
        interp = TrilinearInterpolator(linear_field, samples=lattice_samples)
        for i, j, k in [(0, 0, 0), (3, 4, 5), (15, 15, 15), (15, 0, 7), (14, 15, 1)]:
            value = interp.interpolate([float(i), float(j), float(k)])
            np.testing.assert_array_equal(value, lattice_samples[i, j, k])

    def test_reduces_to_linear_along_single_axis(self, linear_field, lattice_samples):
        interp = TrilinearInterpolator(linear_field, samples=lattice_samples)
        for t in (0.1, 0.25, 0.5, 0.9):
            value = interp.interpolate([3.0 + t, 4.0, 5.0])
            expected = (1 - t) * lattice_samples[3, 4, 5] + t * lattice_samples[4, 4, 5]
            np.testing.assert_allclose(value, expected, rtol=1e-12, atol=1e-12)

            value = interp.interpolate([3.0, 4.0, 5.0 + t])
            expected = (1 - t) * lattice_samples[3, 4, 5] + t * lattice_samples[3, 4, 6]
            np.testing.assert_allclose(value, expected, rtol=1e-12, atol=1e-12)

    def test_matches_reference_interpolator(self, linear_field, lattice_samples):
        interp = TrilinearInterpolator(linear_field, samples=lattice_samples)
        axis = np.arange(16, dtype=np.float64)
        reference = RegularGridInterpolator((axis, axis, axis), lattice_samples, method="linear")

        rng = np.random.default_rng(7)
        for p in rng.uniform(0.0, 15.0, size=(100, 3)):
            np.testing.assert_allclose(interp.interpolate(p), reference(p)[0], rtol=1e-10, atol=1e-12)

    def test_outside_points_clamp_to_edge(self, linear_field, lattice_samples):
        interp = TrilinearInterpolator(linear_field, samples=lattice_samples)
        np.testing.assert_array_equal(interp.interpolate([-5.0, 4.0, 5.0]), lattice_samples[0, 4, 5])
        np.testing.assert_array_equal(interp.interpolate([20.0, 30.0, 99.0]), lattice_samples[15, 15, 15])

    def test_deterministic(self, linear_field, lattice_samples):
        interp = TrilinearInterpolator(linear_field, samples=lattice_samples)
        p = [2.3, 7.9, 11.1]
        assert interp.interpolate(p).tobytes() == interp.interpolate(p).tobytes()

    def test_scalar_samples_are_promoted(self, linear_field):
        scalars = np.arange(16 ** 3, dtype=np.float64).reshape(16, 16, 16)
        interp = TrilinearInterpolator(linear_field, samples=scalars)
        assert interp.interpolate([1.0, 2.0, 3.0]).shape == (1,)

    def test_sample_shape_mismatch(self, linear_field):
        with pytest.raises(ValueError):
            TrilinearInterpolator(linear_field, samples=np.zeros((4, 4, 4, 3)))


class TestSampledFromModel:

    def test_caches_lattice_geometry(self, linear_field):
        interp = TrilinearInterpolator(linear_field)
        np.testing.assert_array_equal(interp.grid_spacing, [1.0, 1.0, 1.0])
        np.testing.assert_array_equal(interp.grid_offset, [0.0, 0.0, 0.0])
        assert interp.samples.shape == (16, 16, 16, 3)

    def test_reproduces_affine_field(self, linear_field):
        interp = TrilinearInterpolator(linear_field)
        rng = np.random.default_rng(3)
        for p in rng.uniform(0.0, 15.0, size=(30, 3)):
            np.testing.assert_allclose(interp.interpolate(p), linear_field.evaluate(p), rtol=1e-10, atol=1e-10)

    def test_staleness_follows_model_version(self, linear_field):
        interp = TrilinearInterpolator(linear_field)
        p = [2.5, 3.5, 4.5]
        before = interp.interpolate(p)
        assert not interp.is_stale()

        linear_field.set_parameter_value("gain", 2.0)
        assert interp.is_stale()
        np.testing.assert_array_equal(interp.interpolate(p), before)

        interp.resample()
        assert not interp.is_stale()
        np.testing.assert_allclose(interp.interpolate(p), 2.0 * before)

    def test_resample_keeps_cached_lattice(self, linear_field):
        interp = TrilinearInterpolator(linear_field)
        linear_field.grid_resolution = 31
        interp.resample()

        assert interp.samples.shape == (16, 16, 16, 3)
        p = [3.0, 4.0, 5.0]
        np.testing.assert_allclose(interp.interpolate(p), [5.5, 3.0, -5.0])
        np.testing.assert_allclose(interp.interpolate(p), linear_field.evaluate(p))

    def test_extended_model_samples_full_dimension(self):
        model = Rossler()
        model.grid_resolution = 4
        interp = TrilinearInterpolator(model)
        assert interp.samples.shape == (4, 4, 4, 4)
        np.testing.assert_allclose(interp.interpolate(model.lattice_point(1, 2, 3)),
                                   model.evaluate(model.lattice_point(1, 2, 3)))

    def test_unbounded_display_axis(self):
        class Unbounded(DynamicalModel):
            NAME = "Unbounded"

            def __init__(self):
                super().__init__()
                self.add_coordinate("x", 0.0, -1.0, 1.0)
                self.add_coordinate("y", 0.0, -1.0, 1.0)
                self.add_coordinate("z", 0.0, 0.0, np.inf)

            def evaluate_into(self, x, out):
                out[:] = 0.0

        with pytest.raises(ValueError):
            TrilinearInterpolator(Unbounded())
