"""
VTK Dataset Conversion
Builds PyVista datasets from trajectories and sampled fields.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import pyvista as pv

if TYPE_CHECKING:
    import numpy.typing as npt

    from dynamicstoolset.analysis.interpolators import Interpolator

logger = logging.getLogger(__name__)


def trajectory_to_polydata(points: npt.ArrayLike) -> pv.PolyData:
    """
    Convert a display-space trajectory into a single polyline.

    Args:
        points: (N, 3) array of display coordinates.

    Returns:
        PolyData with one line cell connecting the points in order.

    Raises:
        ValueError: If the input is not of shape (N, 3).
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected shape (N, 3), got {arr.shape}.")

    poly = pv.PolyData(arr)
    if len(arr) >= 2:
        poly.lines = np.hstack([[len(arr)], np.arange(len(arr))]).astype(np.int64)
    return poly


def field_to_image_data(interpolator: Interpolator) -> pv.ImageData:
    """
    Wrap an interpolator's lattice samples as a uniform grid.

    The first three components of each sample are stored as the "field"
    vectors, their Euclidean norm as "magnitude".
    """
    samples = interpolator.samples
    nx, ny, nz = interpolator.shape

    grid = pv.ImageData(
        dimensions=(nx, ny, nz),
        spacing=tuple(float(s) for s in interpolator.grid_spacing),
        origin=tuple(float(o) for o in interpolator.grid_offset),
    )

    # VTK point order is x fastest, i.e. Fortran order over (i, j, k)
    k = samples.shape[-1]
    vectors = np.zeros((nx * ny * nz, 3), dtype=np.float64)
    flat = np.stack([samples[..., c].ravel(order="F") for c in range(k)], axis=1)
    n = min(k, 3)
    vectors[:, :n] = flat[:, :n]

    grid.point_data["field"] = vectors
    grid.point_data["magnitude"] = np.linalg.norm(vectors, axis=1)
    grid.set_active_vectors("field")
    logger.debug(f"Built {nx}x{ny}x{nz} field dataset for '{interpolator.model.name}'.")
    return grid
