from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from dynamicstoolset.model.dynamical_model import DynamicalModel

if TYPE_CHECKING:
    import numpy.typing as npt


class Vallis(DynamicalModel):
    """Vallis model of the El Niño oscillation."""
    NAME = "Vallis"

    def __init__(self, u: float = 12.0, a: float = 0.3) -> None:
        super().__init__()
        self.add_coordinate("x", 1.0, -20.0, 20.0)
        self.add_coordinate("y", 1.0, -20.0, 20.0)
        self.add_coordinate("z", 1.0, -20.0, 20.0)

        self.add_parameter("u", u, 0.0, 50.0, 12.0, 0.1)
        self.add_parameter("a", a, 0.0, 5.0, 0.3)

    def evaluate_into(self, x: npt.NDArray[np.float64], out: npt.NDArray[np.float64]) -> None:
        u = self.parameters["u"].value
        a = self.parameters["a"].value

        out[0] = u * x[1] - a * x[0]
        out[1] = x[0] * x[2] - x[1]
        out[2] = 1.0 - x[0] * x[1] - x[2]
