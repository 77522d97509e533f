"""
Display Transformers
====================
Map full phase-space vectors to 3-component display vectors and back.

Classes:
    Transformer: Identity projection onto the first three coordinates.
    CylindricalTransformer: Treats (r, theta, z) as cylindrical coordinates.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from dynamicstoolset.model.coordinates import Parameter, ParameterSet

if TYPE_CHECKING:
    import numpy.typing as npt

    from dynamicstoolset.model.dynamical_model import DynamicalModel

logger = logging.getLogger(__name__)


class Transformer:
    """
    Projects model states into 3D view coordinates.

    Holds a reference to the model without owning it and must not outlive
    it. The transformer keeps its own version counter, independent of the
    model's: it is bumped when a transformer parameter changes, so display
    caches can be invalidated when only the projection changed.
    """

    def __init__(self, model: DynamicalModel) -> None:
        model.validate()
        self.model = model
        self.name: str = "transformer"
        self._version: int = 0
        self.parameters = ParameterSet(on_change=self._update_version)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', model='{self.model.name}')"

    @property
    def version(self) -> int:
        return self._version

    def get_version(self) -> int:
        return self._version

    def _update_version(self) -> int:
        self._version += 1
        return self._version

    def set_parameter_value(self, name: str, value: float) -> bool:
        return self.parameters.set_value(name, value)

    # ------------------------------------------------------------------------------
    # Forward
    # ------------------------------------------------------------------------------

    def transform(self, v: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Display vector (length 3) for the state `v`."""
        out = np.empty(3, dtype=np.float64)
        self.transform_into(np.asarray(v, dtype=np.float64), out)
        return out

    def transform_into(self, v: npt.NDArray[np.float64], out: npt.NDArray[np.float64]) -> None:
        """
        Write the display vector for `v` into `out`.

        The default takes the first three components unchanged. `out` must not
        share storage with `v`.
        """
        out[0] = v[0]
        out[1] = v[1]
        out[2] = v[2]

    # ------------------------------------------------------------------------------
    # Inverse
    # ------------------------------------------------------------------------------

    def inv_transform(self, v: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Full-dimensional state for the display vector `v`."""
        out = np.empty(self.model.dimension, dtype=np.float64)
        self.inv_transform_into(np.asarray(v, dtype=np.float64), out)
        return out

    def inv_transform_into(self, v: npt.NDArray[np.float64], out: npt.NDArray[np.float64]) -> None:
        """
        Write the state for display vector `v` into `out`.

        Extended components cannot be observed in a 3D display vector, so each
        is set to the midpoint of its coordinate range (the default value when
        the range is unbounded). The result is an exact inverse only for
        three-dimensional models.
        """
        out[0] = v[0]
        out[1] = v[1]
        out[2] = v[2]
        self._fill_extended(out)

    def _fill_extended(self, out: npt.NDArray[np.float64]) -> None:
        for i in range(3, self.model.dimension):
            out[i] = self.model.coordinates[i].fill_value


class CylindricalTransformer(Transformer):
    """
    Interprets the first three coordinates as cylindrical (r, theta, z).

        X = scale * r * cos(theta)
        Y = scale * r * sin(theta)
        Z = z

    The inverse returns theta in (-pi, pi].
    """

    def __init__(self, model: DynamicalModel, scale: float = 1.0) -> None:
        super().__init__(model)
        self.name = "cylindrical"
        self.parameters.add(Parameter("scale", scale, 0.01, 100.0, 1.0, 0.01))

    @property
    def scale(self) -> float:
        return self.parameters["scale"].value

    def transform_into(self, v: npt.NDArray[np.float64], out: npt.NDArray[np.float64]) -> None:
        r = self.scale * v[0]
        out[0] = r * np.cos(v[1])
        out[1] = r * np.sin(v[1])
        out[2] = v[2]

    def inv_transform_into(self, v: npt.NDArray[np.float64], out: npt.NDArray[np.float64]) -> None:
        out[0] = np.hypot(v[0], v[1]) / self.scale
        out[1] = np.arctan2(v[1], v[0])
        out[2] = v[2]
        self._fill_extended(out)
