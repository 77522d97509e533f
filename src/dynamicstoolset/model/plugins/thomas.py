from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from dynamicstoolset.model.dynamical_model import DynamicalModel

if TYPE_CHECKING:
    import numpy.typing as npt


class Thomas(DynamicalModel):
    """
    Thomas' cyclically symmetric attractor.

        dx/dt = sin(y) - b * x   (and cyclic permutations)
    """
    NAME = "Thomas"

    view_radius = 10.0

    def __init__(self, b: float = 0.208186) -> None:
        super().__init__()
        self.add_coordinate("x", 0.1, -5.0, 5.0)
        self.add_coordinate("y", 0.0, -5.0, 5.0)
        self.add_coordinate("z", 0.0, -5.0, 5.0)

        self.add_parameter("b", b, 0.0, 1.0, 0.208186, 0.001)

    def evaluate_into(self, x: npt.NDArray[np.float64], out: npt.NDArray[np.float64]) -> None:
        b = self.parameters["b"].value

        out[0] = np.sin(x[1]) - b * x[0]
        out[1] = np.sin(x[2]) - b * x[1]
        out[2] = np.sin(x[0]) - b * x[2]
