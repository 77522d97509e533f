"""
Built-in model variants.

Each module defines one independent DynamicalModel subclass. Third-party
models are added through the registry, never by editing these modules.
"""
from dynamicstoolset.model.plugins.chen import Chen
from dynamicstoolset.model.plugins.lorenz import Lorenz
from dynamicstoolset.model.plugins.rossler import Rossler
from dynamicstoolset.model.plugins.thomas import Thomas
from dynamicstoolset.model.plugins.vallis import Vallis

BUILTIN_MODELS = [Chen, Lorenz, Rossler, Thomas, Vallis]

__all__ = ["Chen", "Lorenz", "Rossler", "Thomas", "Vallis", "BUILTIN_MODELS"]
