from __future__ import annotations

from abc import ABC, abstractmethod
import logging
import math
from typing import Callable, Optional, TYPE_CHECKING

import numpy as np

from dynamicstoolset.errors import NumericalDivergence

if TYPE_CHECKING:
    import numpy.typing as npt

    from dynamicstoolset.model.dynamical_model import DynamicalModel

logger = logging.getLogger(__name__)


class Integrator(ABC):
    """
    Abstract base class for fixed-step explicit integrators.

    The integrator holds a reference to the model but does not own it; it
    must not outlive the model it was built for. Apart from that reference
    and the step size it is stateless, so `step` is a pure function of the
    point and the model's current parameter values.
    """
    NAME: str = "Integrator"

    def __init__(self, model: DynamicalModel, step_size: float) -> None:
        """
        Initialize the integrator.

        Args:
            model: The model whose vector field is integrated.
            step_size: Fixed time step, finite and positive.

        Raises:
            ValueError: If `step_size` is not a finite positive number.
        """
        if not (math.isfinite(step_size) and step_size > 0.0):
            raise ValueError(f"Step size must be a finite positive number, got {step_size}.")
        self.model = model
        self.step_size = float(step_size)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model='{self.model.name}', step_size={self.step_size})"

    @abstractmethod
    def step(self, p: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Advance a point by one step.

        Args:
            p: Current point. Not modified.

        Returns:
            The next point, newly allocated.
        """
        pass

    def get_model_version(self) -> int:
        """Version of the bound model; lets callers invalidate cached trajectories."""
        return self.model.version

    def integrate(
        self,
        p: npt.ArrayLike,
        n_steps: int,
        check_finite: bool = False,
        callback: Optional[Callable[[int], None]] = None,
    ) -> npt.NDArray[np.float64]:
        """
        Step repeatedly from `p`.

        Args:
            p: Starting point.
            n_steps: Number of steps to take.
            check_finite: Raise as soon as a state stops being finite instead
                of letting NaN/Inf propagate through the rest of the run.
            callback: Called with the completed percentage (0-100) whenever it
                changes.

        Returns:
            Array of shape (n_steps + 1, dimension); row 0 is `p`.

        Raises:
            ValueError: If `n_steps` is negative.
            NumericalDivergence: If `check_finite` is set and the state blows up.
        """
        if n_steps < 0:
            raise ValueError(f"Number of steps must be non-negative, got {n_steps}.")

        current = np.array(p, dtype=np.float64)
        states = np.empty((n_steps + 1, current.size), dtype=np.float64)
        states[0] = current

        last_progress = -1
        for i in range(1, n_steps + 1):
            nxt = self.step(current)
            if check_finite and not np.all(np.isfinite(nxt)):
                logger.warning(f"{self.model.name}: trajectory diverged at step {i} (h={self.step_size}).")
                raise NumericalDivergence(step=i, last_point=current)
            states[i] = nxt
            current = nxt

            if callback is not None:
                progress = int(i * 100 / n_steps)
                if progress != last_progress:
                    callback(progress)
                    last_progress = progress

        return states


class RungeKutta4(Integrator):
    """
    Classical 4-stage explicit Runge-Kutta scheme.

        k1 = f(p)
        k2 = f(p + h/2 * k1)
        k3 = f(p + h/2 * k2)
        k4 = f(p + h * k3)
        p' = p + h/6 * (k1 + 2*k2 + 2*k3 + k4)

    Every intermediate vector is freshly allocated, so the model never sees
    aliased input and output storage.
    """
    NAME = "Runge-Kutta 4"

    def step(self, p: npt.ArrayLike) -> npt.NDArray[np.float64]:
        p = np.asarray(p, dtype=np.float64)
        f = self.model.evaluate
        h = self.step_size

        k1 = f(p)
        k2 = f(p + (h / 2) * k1)
        k3 = f(p + (h / 2) * k2)
        k4 = f(p + h * k3)

        return p + (h / 6) * (k1 + 2 * k2 + 2 * k3 + k4)


class Euler(Integrator):
    """Explicit Euler; first order, used for cheap previews."""
    NAME = "Euler"

    def step(self, p: npt.ArrayLike) -> npt.NDArray[np.float64]:
        p = np.asarray(p, dtype=np.float64)
        return p + self.step_size * self.model.evaluate(p)
