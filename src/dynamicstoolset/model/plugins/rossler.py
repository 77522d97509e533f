from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from dynamicstoolset.model.dynamical_model import DynamicalModel

if TYPE_CHECKING:
    import numpy.typing as npt


class Rossler(DynamicalModel):
    """
    Rössler attractor, augmented with time as a fourth coordinate.

        dx/dt = -y - z
        dy/dt = x + a * y
        dz/dt = b + z * (x - c)
        dt/dt = 1
    """
    NAME = "Rossler"

    view_center = (0.0, 0.0, 5.0)

    def __init__(self, a: float = 0.2, b: float = 0.2, c: float = 5.7) -> None:
        super().__init__()
        self.add_coordinate("x", 5.0, -15.0, 15.0)
        self.add_coordinate("y", 5.0, -15.0, 15.0)
        self.add_coordinate("z", 5.0, -1.0, 30.0)
        self.add_coordinate("t", 0.0, 0.0, np.inf)

        self.add_parameter("a", a, -0.5, 0.5, 0.2)
        self.add_parameter("b", b, -0.5, 0.5, 0.2)
        self.add_parameter("c", c, 0.0, 10.0, 5.7)

    def evaluate_into(self, x: npt.NDArray[np.float64], out: npt.NDArray[np.float64]) -> None:
        a = self.parameters["a"].value
        b = self.parameters["b"].value
        c = self.parameters["c"].value

        out[0] = -x[1] - x[2]
        out[1] = x[0] + a * x[1]
        out[2] = b + x[2] * (x[0] - c)
        out[3] = 1.0
