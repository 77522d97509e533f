"""
Dynamics Toolset
================
Numerical core of the interactive dynamical-systems viewer: parameterized
vector fields, a fixed-step integrator, display transformers and a field
interpolator.
"""
from dynamicstoolset.errors import DynamicsError, ModelNotFoundError, NumericalDivergence
from dynamicstoolset.model.coordinates import Coordinate, Parameter
from dynamicstoolset.model.dynamical_model import DynamicalModel
from dynamicstoolset.model.registry import ModelRegistry, create_default_registry
from dynamicstoolset.analysis.integrators import Integrator, RungeKutta4, Euler
from dynamicstoolset.analysis.transformers import Transformer, CylindricalTransformer
from dynamicstoolset.analysis.interpolators import Interpolator, TrilinearInterpolator
from dynamicstoolset.analysis.experiment import Experiment, TrajectoryCache

__all__ = [
    "DynamicsError",
    "ModelNotFoundError",
    "NumericalDivergence",
    "Coordinate",
    "Parameter",
    "DynamicalModel",
    "ModelRegistry",
    "create_default_registry",
    "Integrator",
    "RungeKutta4",
    "Euler",
    "Transformer",
    "CylindricalTransformer",
    "Interpolator",
    "TrilinearInterpolator",
    "Experiment",
    "TrajectoryCache",
]
