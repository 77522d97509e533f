from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from dynamicstoolset.model.dynamical_model import DynamicalModel

if TYPE_CHECKING:
    import numpy.typing as npt


class Chen(DynamicalModel):
    NAME = "Chen"

    view_center = (0.0, 0.0, 20.0)

    def __init__(self, a: float = 35.0, b: float = 3.0, c: float = 28.0) -> None:
        super().__init__()
        self.add_coordinate("x", -10.0, -30.0, 30.0)
        self.add_coordinate("y", 0.0, -30.0, 30.0)
        self.add_coordinate("z", 37.0, 0.0, 60.0)

        self.add_parameter("a", a, 0.0, 60.0, 35.0, 0.1)
        self.add_parameter("b", b, 0.0, 10.0, 3.0)
        self.add_parameter("c", c, 0.0, 60.0, 28.0, 0.1)

    def evaluate_into(self, x: npt.NDArray[np.float64], out: npt.NDArray[np.float64]) -> None:
        a = self.parameters["a"].value
        b = self.parameters["b"].value
        c = self.parameters["c"].value

        out[0] = a * (x[1] - x[0])
        out[1] = (c - a) * x[0] - x[0] * x[2] + c * x[1]
        out[2] = x[0] * x[1] - b * x[2]
