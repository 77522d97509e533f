"""
Shared fixtures: small analytic models with known solutions.
"""
import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from dynamicstoolset.model.dynamical_model import DynamicalModel
from dynamicstoolset.model.registry import create_default_registry


class Decay(DynamicalModel):
    """dx/dt = -x on every axis; exact solution x0 * exp(-t)."""
    NAME = "Decay"

    def __init__(self):
        super().__init__()
        for name in ("x", "y", "z"):
            self.add_coordinate(name, 1.0, -1.0, 1.0)
        self.add_parameter("k", 1.0, 0.0, 10.0, 1.0)

    def evaluate_into(self, x, out):
        k = self.parameters["k"].value
        out[:] = -k * x


class LinearField(DynamicalModel):
    """Affine field on a [0, 15]^3 lattice with unit spacing."""
    NAME = "Linear Field"

    def __init__(self):
        super().__init__()
        for name in ("x", "y", "z"):
            self.add_coordinate(name, 1.0, 0.0, 15.0)
        self.add_parameter("gain", 1.0, 0.0, 5.0, 1.0)

    def evaluate_into(self, x, out):
        g = self.parameters["gain"].value
        out[0] = g * (2.0 * x[0] - x[1] + 0.5 * x[2] + 1.0)
        out[1] = g * x[0]
        out[2] = -g * x[2]


class FiveD(DynamicalModel):
    """Five coordinates, two of them extended, all with finite ranges."""
    NAME = "Five D"

    def __init__(self):
        super().__init__()
        self.add_coordinate("a", 0.0, -1.0, 1.0)
        self.add_coordinate("b", 0.0, -1.0, 1.0)
        self.add_coordinate("c", 0.0, -1.0, 1.0)
        self.add_coordinate("d", 0.5, 2.0, 6.0)
        self.add_coordinate("e", 0.0, -10.0, 0.0)

    def evaluate_into(self, x, out):
        out[:] = 0.0


class Flat(DynamicalModel):
    """Only two coordinates; not displayable."""
    NAME = "Flat"

    def __init__(self):
        super().__init__()
        self.add_coordinate("x", 0.0, -1.0, 1.0)
        self.add_coordinate("y", 0.0, -1.0, 1.0)

    def evaluate_into(self, x, out):
        out[:] = 0.0


@pytest.fixture
def registry():
    return create_default_registry()


@pytest.fixture
def decay():
    return Decay()


@pytest.fixture
def linear_field():
    return LinearField()


@pytest.fixture
def five_d():
    return FiveD()


@pytest.fixture
def flat_model_cls():
    return Flat


@pytest.fixture
def decay_cls():
    return Decay


@pytest.fixture
def lattice_samples():
    """Random vector samples on a 16^3 lattice."""
    rng = np.random.default_rng(42)
    return rng.normal(size=(16, 16, 16, 3))
