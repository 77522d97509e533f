"""
Configuration & Global Constants
================================
Central place for the defaults shared by the models, the integrators and the
command-line runner.

Why is this file needed?
------------------------
It prevents magic numbers (step sizes, lattice resolutions, view radii)
scattered throughout the code. The shell layer reads the same values to
initialise its sliders and camera.

Exports:
    DEFAULT_MODEL (str): Model selected when the viewer starts.
    DEFAULT_STEP_SIZE (float): Fixed integrator step.
    DEFAULT_GRID_RESOLUTION (int): Lattice points per axis for field sampling.
    DEFAULT_VIEW_RADIUS (float): Navigation radius around the view centre.
    DEFAULT_TRAJECTORY_STEPS (int): Trajectory length computed per update.
    ENTRY_POINT_GROUP (str): Entry point group scanned for third-party models.
    get_resource_path(relative_path): Absolute path of a bundled resource, in
        development and in a PyInstaller build.
"""
import os
import sys
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller unpack folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: config.py lives in src/dynamicstoolset/
    project_root: Path = Path(__file__).resolve().parent.parent.parent
    return os.path.join(str(project_root), relative_path)


DEFAULT_MODEL: str = "Lorenz"
DEFAULT_STEP_SIZE: float = 0.01
DEFAULT_GRID_RESOLUTION: int = 16
DEFAULT_VIEW_RADIUS: float = 40.0
DEFAULT_TRAJECTORY_STEPS: int = 5000

ENTRY_POINT_GROUP: str = "dynamicstoolset.models"
