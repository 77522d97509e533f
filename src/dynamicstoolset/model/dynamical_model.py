"""
Dynamical Model
===============
Abstract base class for parameterized vector fields dx/dt = f(x).

A variant declares its coordinates and parameters in `__init__` and
implements `evaluate_into`. Everything else (allocation, default point,
versioning, lattice definition) is provided here.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Tuple, TYPE_CHECKING

import numpy as np

from dynamicstoolset.config import DEFAULT_GRID_RESOLUTION, DEFAULT_VIEW_RADIUS
from dynamicstoolset.model.coordinates import Coordinate, CoordinateSet, Parameter, ParameterSet

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class DynamicalModel(ABC):
    """
    Abstract base class for dynamical models.

    After the constructor the model is fixed in its number of coordinates and
    parameters. Parameter values may change at any time; each accepted change
    increments `version` by one. Changes to names, defaults or ranges are not
    tracked.

    Mutation is not safe concurrently with evaluation: callers must
    serialise `set_parameter_value` against every read.
    """
    NAME: str = "Dynamical Model"

    # Points per axis of the lattice used when the field is sampled
    grid_resolution: int = DEFAULT_GRID_RESOLUTION

    view_center: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    view_radius: float = DEFAULT_VIEW_RADIUS

    def __init__(self) -> None:
        self._version: int = 0
        self.coordinates = CoordinateSet()
        self.parameters = ParameterSet(on_change=self._update_version)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', parameters={self.parameters.values()})"

    # ------------------------------------------------------------------------------
    # Construction helpers for subclasses
    # ------------------------------------------------------------------------------

    def add_coordinate(self, name: str, default: float, min_value: float, max_value: float) -> Coordinate:
        return self.coordinates.add(Coordinate(name, default, min_value, max_value))

    def add_parameter(
        self,
        name: str,
        value: float,
        min_value: float,
        max_value: float,
        default: float,
        step: float = 0.01,
    ) -> Parameter:
        return self.parameters.add(Parameter(name, value, min_value, max_value, default, step))

    # ------------------------------------------------------------------------------
    # Vector field
    # ------------------------------------------------------------------------------

    @abstractmethod
    def evaluate_into(self, x: npt.NDArray[np.float64], out: npt.NDArray[np.float64]) -> None:
        """
        Write the derivative at `x` into `out`.

        `out` must be distinct storage from `x`; passing the same array for
        both gives undefined results.

        Args:
            x: Point in phase space, length `dimension`.
            out: Preallocated output, length `dimension`.
        """
        pass

    def evaluate(self, x: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Return the derivative at `x` in a newly allocated vector.

        Args:
            x: Point in phase space. Not modified.

        Returns:
            Derivative vector of length `dimension`.
        """
        x = np.asarray(x, dtype=np.float64)
        out = np.empty(self.dimension, dtype=np.float64)
        self.evaluate_into(x, out)
        return out

    def __call__(self, x: npt.ArrayLike) -> npt.NDArray[np.float64]:
        return self.evaluate(x)

    # ------------------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def dimension(self) -> int:
        """Number of coordinates."""
        return len(self.coordinates)

    def get_dimension(self) -> int:
        return self.dimension

    def validate(self) -> None:
        """
        Check the structural invariants of a freshly built model.

        Raises:
            ValueError: If the model has fewer than three coordinates or its
                sampling lattice has fewer than two points per axis.
        """
        if self.dimension < 3:
            raise ValueError(
                f"Model '{self.name}' has {self.dimension} coordinates; at least 3 are required for display."
            )
        if self.grid_resolution < 2:
            raise ValueError(f"Model '{self.name}' needs at least 2 lattice points per axis.")

    @property
    def default_point(self) -> npt.NDArray[np.float64]:
        """Point assembled from each coordinate's default value."""
        return self.coordinates.default_values()

    def get_default_point(self) -> npt.NDArray[np.float64]:
        return self.default_point

    @property
    def version(self) -> int:
        """Monotonic counter, bumped once per accepted parameter change."""
        return self._version

    def get_version(self) -> int:
        return self._version

    def _update_version(self) -> int:
        self._version += 1
        logger.debug(f"{self.name}: version {self._version}")
        return self._version

    # ------------------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------------------

    def set_parameter_value(self, name: str, value: float) -> bool:
        """
        Set a parameter by name.

        Unknown names are ignored (no exception, no version change) so that a
        control bound to a parameter missing from this model is harmless.
        Known names are clamped into range and bump the version by one.

        Returns:
            True if the parameter exists on this model.
        """
        return self.parameters.set_value(name, value)

    def get_parameter_value(self, name: str) -> float:
        return self.parameters[name].value

    def reset_parameters(self) -> None:
        self.parameters.reset()

    # ------------------------------------------------------------------------------
    # Sampling lattice
    # ------------------------------------------------------------------------------

    def _display_ranges(self) -> npt.NDArray[np.float64]:
        ranges = np.array(
            [[c.min_value, c.max_value] for c in list(self.coordinates)[:3]],
            dtype=np.float64,
        )
        if not np.all(np.isfinite(ranges)):
            raise ValueError(f"Model '{self.name}' has an unbounded display axis; no sampling lattice exists.")
        return ranges

    @property
    def grid_offset(self) -> npt.NDArray[np.float64]:
        """Lower corner of the sampling lattice (min of the first three coordinates)."""
        return self._display_ranges()[:, 0].copy()

    @property
    def grid_spacing(self) -> npt.NDArray[np.float64]:
        """Distance between neighbouring lattice points along each display axis."""
        ranges = self._display_ranges()
        return (ranges[:, 1] - ranges[:, 0]) / (self.grid_resolution - 1)

    @property
    def grid_shape(self) -> Tuple[int, int, int]:
        return (self.grid_resolution,) * 3

    def lattice_point(self, i: int, j: int, k: int) -> npt.NDArray[np.float64]:
        """
        Full phase-space point at lattice index (i, j, k).

        Extended components take their coordinate's fill value, the same
        rule the default inverse transform uses.
        """
        point = np.empty(self.dimension, dtype=np.float64)
        point[:3] = self.grid_offset + np.array([i, j, k], dtype=np.float64) * self.grid_spacing
        for n in range(3, self.dimension):
            point[n] = self.coordinates[n].fill_value
        return point
