from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from dynamicstoolset.model.dynamical_model import DynamicalModel

if TYPE_CHECKING:
    import numpy.typing as npt


class Lorenz(DynamicalModel):
    """
    Lorenz (1963) convection model.

        dx/dt = sigma * (y - x)
        dy/dt = x * (rho - z) - y
        dz/dt = x * y - beta * z
    """
    NAME = "Lorenz"

    view_center = (0.0, 0.0, 25.0)

    def __init__(self, sigma: float = 10.0, rho: float = 28.0, beta: float = 8.0 / 3.0) -> None:
        super().__init__()
        self.add_coordinate("x", 0.0, -30.0, 30.0)
        self.add_coordinate("y", 1.0, -30.0, 30.0)
        self.add_coordinate("z", 1.05, 0.0, 60.0)

        self.add_parameter("sigma", sigma, 0.0, 50.0, 10.0, 0.1)
        self.add_parameter("rho", rho, 0.0, 100.0, 28.0, 0.1)
        self.add_parameter("beta", beta, 0.0, 10.0, 8.0 / 3.0, 0.01)

    def evaluate_into(self, x: npt.NDArray[np.float64], out: npt.NDArray[np.float64]) -> None:
        sigma = self.parameters["sigma"].value
        rho = self.parameters["rho"].value
        beta = self.parameters["beta"].value

        out[0] = sigma * (x[1] - x[0])
        out[1] = x[0] * (rho - x[2]) - x[1]
        out[2] = x[0] * x[1] - beta * x[2]
