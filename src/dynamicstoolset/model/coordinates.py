"""
Coordinates & Parameters
========================
Named, bounded scalars owned by a dynamical model.

Classes:
    Coordinate: One phase-space axis (default value and display range).
    Parameter: One tunable constant of the model equations.
    CoordinateSet: Ordered collection of coordinates; defines the dimension.
    ParameterSet: Ordered collection of parameters with change notification.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import math
from typing import Callable, Dict, Iterator, List, Optional, Union, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinate:
    """
    Describes one axis of the phase space.

    The min/max values are the suggested display range and are used for
    sliders, so they should be finite for every axis that is ever shown.
    """
    name: str
    default_value: float
    min_value: float
    max_value: float

    @property
    def midpoint(self) -> float:
        """Centre of the display range."""
        return self.min_value + (self.max_value - self.min_value) / 2

    @property
    def fill_value(self) -> float:
        """
        Value used for this axis when it cannot be observed (e.g. inverting a 3D
        display point). The range midpoint, or the default for unbounded axes.
        """
        if math.isfinite(self.min_value) and math.isfinite(self.max_value):
            return self.midpoint
        return self.default_value


@dataclass(frozen=True)
class Parameter:
    """
    A tunable scalar constant of the model equations.

    Immutable: the owning `ParameterSet` swaps in a new instance on every
    change, so values can only move through `set_value` and `reset`.
    """
    name: str
    value: float
    min_value: float
    max_value: float
    default_value: float
    step_size: float = 0.01

    def clamp(self, value: float) -> float:
        """Limit a candidate value to [min_value, max_value]."""
        return min(max(float(value), self.min_value), self.max_value)

    def with_value(self, value: float) -> Parameter:
        return replace(self, value=value)


class CoordinateSet:
    """
    Ordered coordinates of a model.

    Append-only; by convention nothing is added after the model constructor
    has finished.
    """

    def __init__(self) -> None:
        self._coords: List[Coordinate] = []

    def add(self, coordinate: Coordinate) -> Coordinate:
        if coordinate.name in self.names:
            raise ValueError(f"Coordinate '{coordinate.name}' is already defined.")
        self._coords.append(coordinate)
        return coordinate

    @property
    def names(self) -> List[str]:
        return [c.name for c in self._coords]

    def default_values(self) -> npt.NDArray[np.float64]:
        """Default point assembled in coordinate order."""
        return np.array([c.default_value for c in self._coords], dtype=np.float64)

    def __len__(self) -> int:
        return len(self._coords)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._coords)

    def __getitem__(self, key: Union[int, str]) -> Coordinate:
        if isinstance(key, str):
            for coord in self._coords:
                if coord.name == key:
                    return coord
            raise KeyError(f"Unknown coordinate '{key}'")
        return self._coords[key]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.names})"


class ParameterSet:
    """
    Ordered parameters with a change callback.

    Every accepted call to `set_value` invokes `on_change` exactly once, which
    is how the owning model keeps its version counter in sync.
    """

    def __init__(self, on_change: Optional[Callable[[], object]] = None) -> None:
        self._params: Dict[str, Parameter] = {}
        self._on_change = on_change

    def add(self, parameter: Parameter) -> Parameter:
        if parameter.name in self._params:
            raise ValueError(f"Parameter '{parameter.name}' is already defined.")
        if not parameter.min_value <= parameter.default_value <= parameter.max_value:
            raise ValueError(
                f"Default value {parameter.default_value} of '{parameter.name}' lies outside "
                f"[{parameter.min_value}, {parameter.max_value}]."
            )
        self._params[parameter.name] = parameter
        return parameter

    @property
    def names(self) -> List[str]:
        return list(self._params.keys())

    def values(self) -> Dict[str, float]:
        """Snapshot of the current values, keyed by name."""
        return {name: p.value for name, p in self._params.items()}

    def set_value(self, name: str, value: float) -> bool:
        """
        Set a parameter value.

        Args:
            name: Parameter name.
            value: Requested value; clamped into the parameter's range.

        Returns:
            True if the name was recognised and the value stored, False
            otherwise (nothing changes and no notification is sent).

        Raises:
            ValueError: If `value` is NaN.
        """
        param = self._params.get(name)
        if param is None:
            logger.debug(f"Ignoring unknown parameter '{name}'.")
            return False

        if math.isnan(value):
            raise ValueError(f"Parameter '{name}' cannot be set to NaN.")

        clamped = param.clamp(value)
        if clamped != value:
            logger.warning(
                f"Value {value} for '{name}' outside [{param.min_value}, {param.max_value}], using {clamped}."
            )
        self._params[name] = param.with_value(clamped)

        if self._on_change is not None:
            self._on_change()
        return True

    def reset(self) -> None:
        """Restore every parameter to its default, with a single notification."""
        for name, param in self._params.items():
            self._params[name] = param.with_value(param.default_value)
        if self._params and self._on_change is not None:
            self._on_change()

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._params.values())

    def __getitem__(self, name: str) -> Parameter:
        return self._params[name]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.values()})"
