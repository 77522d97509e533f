"""
Error Types
===========
Exceptions raised by the numerical core.

Unknown parameter names are deliberately NOT an error: setters return False
so that a slider bound to a parameter missing from the current model is a
no-op.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


class DynamicsError(Exception):
    """Base class for all errors raised by dynamicstoolset."""


class ModelNotFoundError(DynamicsError, KeyError):
    """Raised when a registry is asked for a model name it does not know."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"No model registered under '{name}'. Available: {', '.join(available) or 'none'}")

    def __str__(self) -> str:
        # KeyError.__str__ would wrap the message in quotes
        return self.args[0]


class NumericalDivergence(DynamicsError):
    """
    Raised when a trajectory leaves the finite numbers.

    Attributes:
        step: Index of the first step that produced a non-finite state.
        last_point: Last finite state before the blow-up.
    """

    def __init__(self, step: int, last_point: Optional[npt.NDArray[np.float64]] = None) -> None:
        self.step = step
        self.last_point = None if last_point is None else np.array(last_point, dtype=np.float64)
        super().__init__(f"Integration diverged at step {step}: state is no longer finite.")
