from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

    from dynamicstoolset.model.dynamical_model import DynamicalModel

logger = logging.getLogger(__name__)


class Interpolator(ABC):
    """
    Abstract base class for interpolators over a sampled vector field.

    The lattice geometry (spacing, offset, shape) is copied from the model at
    construction. Samples are taken from the model's field unless explicit
    samples are supplied.
    """

    def __init__(
        self,
        model: DynamicalModel,
        samples: Optional[npt.ArrayLike] = None,
    ) -> None:
        """
        Initialize the interpolator.

        Args:
            model: Model defining the lattice (and, by default, the samples).
            samples: Optional array of shape (nx, ny, nz, k) holding one value
                vector per lattice point. Sampled from the model if omitted.

        Raises:
            ValueError: If the model has an unbounded display axis or the
                samples do not match the lattice shape.
        """
        model.validate()
        self.model = model
        self.grid_spacing: npt.NDArray[np.float64] = model.grid_spacing
        self.grid_offset: npt.NDArray[np.float64] = model.grid_offset
        self.shape: tuple[int, int, int] = model.grid_shape

        if samples is None:
            self.resample()
        else:
            samples = np.asarray(samples, dtype=np.float64)
            if samples.ndim == 3:
                samples = samples[..., np.newaxis]
            if samples.shape[:3] != self.shape:
                raise ValueError(f"Expected samples on a {self.shape} lattice, got {samples.shape[:3]}.")
            self.samples: npt.NDArray[np.float64] = samples
            self.model_version: int = model.version

    def lattice_point(self, i: int, j: int, k: int) -> npt.NDArray[np.float64]:
        """
        Full phase-space point at lattice index (i, j, k) of this interpolator.

        Uses the geometry cached at construction, so later changes to the
        model's `grid_resolution` do not shift the samples off the lattice.
        Extended components take their coordinate's fill value.
        """
        point = np.empty(self.model.dimension, dtype=np.float64)
        point[:3] = self.grid_offset + np.array([i, j, k], dtype=np.float64) * self.grid_spacing
        for n in range(3, self.model.dimension):
            point[n] = self.model.coordinates[n].fill_value
        return point

    def resample(self) -> None:
        """Evaluate the model's field at every point of the cached lattice."""
        nx, ny, nz = self.shape
        samples = np.empty((nx, ny, nz, self.model.dimension), dtype=np.float64)
        out = np.empty(self.model.dimension, dtype=np.float64)
        for i in range(nx):
            for j in range(ny):
                for k in range(nz):
                    self.model.evaluate_into(self.lattice_point(i, j, k), out)
                    samples[i, j, k] = out

        self.samples = samples
        self.model_version = self.model.version
        logger.debug(f"Sampled '{self.model.name}' field on a {nx}x{ny}x{nz} lattice.")

    def is_stale(self) -> bool:
        """True when the model's parameters changed since the field was sampled."""
        return self.model_version != self.model.version

    def lattice_coordinates(self, p: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Position of `p` in lattice units, (p - offset) / spacing per axis."""
        p = np.asarray(p, dtype=np.float64)[:3]
        return (p - self.grid_offset) / self.grid_spacing

    def interpolate(self, p: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Estimate the sampled field at an arbitrary point.

        Args:
            p: Point; only the first three components are used.

        Returns:
            Interpolated value vector (length k of the samples).
        """
        return self._interpolate(self.lattice_coordinates(p))

    @abstractmethod
    def _interpolate(self, u: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """Interpolate at lattice coordinates `u`."""
        pass


class TrilinearInterpolator(Interpolator):
    """
    Trilinear interpolation over the 8 corners of the enclosing lattice cell.

    Points outside the sampled extent are clamped to the nearest edge of the
    lattice: the cell index is limited to [0, n-2] and the fractional offset
    to [0, 1], so the result is the value on the lattice boundary closest to
    the query rather than an extrapolation.
    """

    def _interpolate(self, u: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        upper = np.array(self.shape, dtype=np.int64) - 2
        idx = np.clip(np.floor(u).astype(np.int64), 0, upper)
        t = np.clip(u - idx, 0.0, 1.0)
        i, j, k = idx
        tx, ty, tz = t

        c = self.samples[i:i + 2, j:j + 2, k:k + 2]

        # axis 0: 4 edges
        c00 = (1 - tx) * c[0, 0, 0] + tx * c[1, 0, 0]
        c01 = (1 - tx) * c[0, 0, 1] + tx * c[1, 0, 1]
        c10 = (1 - tx) * c[0, 1, 0] + tx * c[1, 1, 0]
        c11 = (1 - tx) * c[0, 1, 1] + tx * c[1, 1, 1]

        # axis 1: 2 faces
        c0 = (1 - ty) * c00 + ty * c10
        c1 = (1 - ty) * c01 + ty * c11

        # axis 2
        return (1 - tz) * c0 + tz * c1
