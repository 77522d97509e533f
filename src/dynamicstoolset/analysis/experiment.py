"""
Experiments & Trajectory Caching
================================
Bundles a model with an integrator and a transformer, and keeps the
per-frame trajectory in sync with their version counters.

Why is this file needed?
------------------------
1. Composition: the shell asks for "the Lorenz experiment" and gets the
   three collaborators wired together by reference.
2. Cache invalidation: recomputing thousands of RK4 steps every frame is
   wasteful. The cache compares version signatures and only recomputes after
   a parameter (model or transformer) actually changed.

Classes:
    Experiment: Model + Integrator + Transformer.
    TrajectoryCache: Lazily recomputed display-space trajectory.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional, Tuple, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from dynamicstoolset.analysis.integrators import Integrator, RungeKutta4
from dynamicstoolset.analysis.transformers import Transformer
from dynamicstoolset.config import DEFAULT_STEP_SIZE, DEFAULT_TRAJECTORY_STEPS

if TYPE_CHECKING:
    import numpy.typing as npt

    from dynamicstoolset.model.dynamical_model import DynamicalModel
    from dynamicstoolset.model.registry import ModelRegistry

logger = logging.getLogger(__name__)


@dataclass
class Experiment:
    """A model with the integrator and transformer built against it."""
    model: DynamicalModel
    integrator: Integrator
    transformer: Transformer

    @staticmethod
    def from_registry(
        registry: ModelRegistry,
        name: str,
        step_size: float = DEFAULT_STEP_SIZE,
    ) -> Experiment:
        """Create the named model and wire an RK4 integrator and identity transformer to it."""
        model = registry.create(name)
        return Experiment(
            model=model,
            integrator=RungeKutta4(model, step_size),
            transformer=Transformer(model),
        )

    @property
    def name(self) -> str:
        return self.model.name

    @property
    def version(self) -> Tuple[int, int]:
        """Signature that changes whenever anything affecting the display changes."""
        return self.model.version, self.transformer.version

    def navigation_frame(self) -> Tuple[npt.NDArray[np.float64], float]:
        """Centre and radius the shell should use when resetting navigation."""
        return np.array(self.model.view_center, dtype=np.float64), float(self.model.view_radius)


@dataclass(eq=False)
class TrajectoryCache:
    """
    Trajectory of an experiment from a seed point, recomputed on demand.

    Attributes:
        experiment: The experiment to integrate.
        seed: Starting state; defaults to the model's default point.
        states: Full phase-space states of the last computation.
        points: The same states in display coordinates, shape (n, 3).
    """
    experiment: Experiment
    seed: Optional[npt.NDArray[np.float64]] = None
    check_finite: bool = False

    states: npt.NDArray[np.float64] = field(init=False, repr=False)
    points: npt.NDArray[np.float64] = field(init=False, repr=False)
    _signature: Optional[Tuple[int, int, int, bytes]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.seed is None:
            self.seed = self.experiment.model.get_default_point()
        self.set_seed(self.seed)
        dim = self.experiment.model.dimension
        self.states = np.empty((0, dim), dtype=np.float64)
        self.points = np.empty((0, 3), dtype=np.float64)

    def set_seed(self, seed: npt.ArrayLike) -> None:
        """
        Set the starting state.

        Raises:
            ValueError: If the seed does not have one component per coordinate.
        """
        seed = np.array(seed, dtype=np.float64)
        dim = self.experiment.model.dimension
        if seed.shape != (dim,):
            raise ValueError(f"Seed must have {dim} components, got shape {seed.shape}.")
        self.seed = seed

    def set_seed_from_display(self, point: npt.ArrayLike) -> None:
        """Seed from a 3D display position (e.g. where the user clicked)."""
        self.seed = self.experiment.transformer.inv_transform(point)

    def is_stale(self, n_steps: int) -> bool:
        return self._signature != self._make_signature(n_steps)

    def _make_signature(self, n_steps: int) -> Tuple[int, int, int, bytes]:
        model_version, transformer_version = self.experiment.version
        return model_version, transformer_version, n_steps, self.seed.tobytes()

    def update(self, n_steps: int = DEFAULT_TRAJECTORY_STEPS) -> bool:
        """
        Recompute the trajectory if anything it depends on changed.

        Args:
            n_steps: Number of integrator steps from the seed.

        Returns:
            True if the trajectory was recomputed.

        Raises:
            NumericalDivergence: If `check_finite` is set and the run blows up.
        """
        signature = self._make_signature(n_steps)
        if signature == self._signature:
            return False

        logger.debug(f"Recomputing {n_steps} steps of '{self.experiment.name}' (versions {signature[:2]}).")
        self.states = self.experiment.integrator.integrate(
            self.seed, n_steps, check_finite=self.check_finite
        )
        transformer = self.experiment.transformer
        points = np.empty((self.states.shape[0], 3), dtype=np.float64)
        for i, state in enumerate(self.states):
            transformer.transform_into(state, points[i])
        self.points = points
        self._signature = signature
        return True

    def invalidate(self) -> None:
        self._signature = None

    def plot(self) -> None:
        """
        Plot the cached trajectory in 3D.
        """
        if self.points.shape[0] == 0:
            self.update()

        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure(figsize=(7, 6))
        ax = fig.add_subplot(projection="3d")

        ax.plot(self.points[:, 0], self.points[:, 1], self.points[:, 2], 'b', lw=0.5)
        ax.scatter(*self.points[0], color='r', s=15)

        names = self.experiment.model.coordinates.names
        ax.set_title(f"{self.experiment.name} ({self.experiment.integrator.NAME}, h={self.experiment.integrator.step_size})")
        ax.set_xlabel(names[0])
        ax.set_ylabel(names[1])
        ax.set_zlabel(names[2])
        plt.show()
