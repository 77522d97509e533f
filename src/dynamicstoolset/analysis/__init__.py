"""
The ANALYSIS layer consumes models: integrators produce trajectories,
transformers project them for display and interpolators resample the field.
"""
