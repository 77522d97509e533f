"""
Tests for experiments and trajectory caching.
"""

import numpy as np
import pytest

from dynamicstoolset.analysis import experiment as experiment_module
from dynamicstoolset.analysis.experiment import Experiment, TrajectoryCache
from dynamicstoolset.analysis.integrators import RungeKutta4
from dynamicstoolset.analysis.transformers import CylindricalTransformer, Transformer
from dynamicstoolset.errors import ModelNotFoundError, NumericalDivergence
from dynamicstoolset.model.plugins import Lorenz


@pytest.fixture
def lorenz_experiment(registry):
    return Experiment.from_registry(registry, "Lorenz", step_size=0.01)


class TestExperiment:

    def test_from_registry_wires_by_reference(self, lorenz_experiment):
        exp = lorenz_experiment
        assert exp.name == "Lorenz"
        assert exp.integrator.model is exp.model
        assert exp.transformer.model is exp.model
        assert isinstance(exp.integrator, RungeKutta4)
        assert exp.integrator.step_size == 0.01

    def test_unknown_model(self, registry):
        with pytest.raises(ModelNotFoundError):
            Experiment.from_registry(registry, "Missing")

    def test_version_signature(self):
        model = Lorenz()
        exp = Experiment(model, RungeKutta4(model, 0.01), CylindricalTransformer(model))
        assert exp.version == (0, 0)
        model.set_parameter_value("rho", 20.0)
        exp.transformer.set_parameter_value("scale", 2.0)
        assert exp.version == (1, 1)

    def test_navigation_frame(self, lorenz_experiment):
        center, radius = lorenz_experiment.navigation_frame()
        np.testing.assert_array_equal(center, [0.0, 0.0, 25.0])
        assert radius == 40.0


class TestTrajectoryCache:

    def test_first_update_computes(self, lorenz_experiment):
        cache = TrajectoryCache(lorenz_experiment)
        assert cache.is_stale(100)
        assert cache.update(100) is True
        assert cache.states.shape == (101, 3)
        assert cache.points.shape == (101, 3)
        np.testing.assert_array_equal(cache.states[0], lorenz_experiment.model.get_default_point())

    def test_repeated_update_is_cached(self, lorenz_experiment):
        cache = TrajectoryCache(lorenz_experiment)
        cache.update(100)
        states = cache.states
        assert cache.update(100) is False
        assert cache.states is states

    def test_parameter_change_invalidates(self, lorenz_experiment):
        cache = TrajectoryCache(lorenz_experiment)
        cache.update(100)
        last = cache.states[-1].copy()

        lorenz_experiment.model.set_parameter_value("rho", 10.0)
        assert cache.is_stale(100)
        assert cache.update(100) is True
        assert not np.array_equal(cache.states[-1], last)

    def test_parameters_only_change_through_model(self, lorenz_experiment):
        model = lorenz_experiment.model
        version = model.version
        with pytest.raises(AttributeError):
            model.parameters["rho"].value = 5.0
        assert model.get_parameter_value("rho") == 28.0
        assert model.version == version

    def test_unknown_parameter_keeps_cache(self, lorenz_experiment):
        cache = TrajectoryCache(lorenz_experiment)
        cache.update(50)
        lorenz_experiment.model.set_parameter_value("unknown", 1.0)
        assert cache.update(50) is False

    def test_length_and_seed_changes_invalidate(self, lorenz_experiment):
        cache = TrajectoryCache(lorenz_experiment)
        cache.update(50)
        assert cache.update(60) is True
        cache.set_seed([2.0, 2.0, 2.0])
        assert cache.update(60) is True
        np.testing.assert_array_equal(cache.states[0], [2.0, 2.0, 2.0])

    def test_seed_from_display_point(self, registry):
        exp = Experiment.from_registry(registry, "Rossler")
        cache = TrajectoryCache(exp)
        cache.set_seed_from_display([1.0, 2.0, 3.0])
        np.testing.assert_array_equal(cache.seed, [1.0, 2.0, 3.0, 0.0])
        cache.update(10)
        assert cache.points.shape == (11, 3)
        assert cache.states[-1][3] == pytest.approx(0.1)

    def test_points_use_transformer(self):
        model = Lorenz()
        exp = Experiment(model, RungeKutta4(model, 0.01), CylindricalTransformer(model, scale=2.0))
        cache = TrajectoryCache(exp)
        cache.update(5)
        expected = exp.transformer.transform(cache.states[3])
        np.testing.assert_allclose(cache.points[3], expected)

        exp.transformer.set_parameter_value("scale", 1.0)
        assert cache.update(5) is True

    def test_invalidate(self, lorenz_experiment):
        cache = TrajectoryCache(lorenz_experiment)
        cache.update(10)
        cache.invalidate()
        assert cache.update(10) is True

    def test_seed_dimension_checked(self, lorenz_experiment):
        with pytest.raises(ValueError):
            TrajectoryCache(lorenz_experiment, seed=np.zeros(4))

    def test_set_seed_checks_dimension(self, lorenz_experiment):
        cache = TrajectoryCache(lorenz_experiment)
        seed = cache.seed.copy()
        with pytest.raises(ValueError):
            cache.set_seed([1.0, 2.0, 3.0, 4.0])
        np.testing.assert_array_equal(cache.seed, seed)
        assert cache.update(5) is True

    def test_divergence_surfaces_when_checked(self):
        model = Lorenz()
        exp = Experiment(model, RungeKutta4(model, 10.0), Transformer(model))
        cache = TrajectoryCache(exp, check_finite=True)
        with np.errstate(over="ignore", invalid="ignore"):
            with pytest.raises(NumericalDivergence):
                cache.update(50)

    def test_plot(self, lorenz_experiment, monkeypatch):
        shown = []
        monkeypatch.setattr(experiment_module.plt, "show", lambda: shown.append(True))
        cache = TrajectoryCache(lorenz_experiment)
        cache.plot()
        assert shown == [True]
        assert cache.points.shape[0] > 0
        experiment_module.plt.close("all")
