"""
The MODEL layer contains the dynamical systems themselves: coordinates,
parameters and vector fields, plus the registry that creates them by name.
It has NO knowledge of rendering or of the GUI.
"""
