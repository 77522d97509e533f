"""
Hand-off of computed trajectories and fields to the 3D renderer.
Only data conversion lives here; drawing belongs to the shell.
"""
