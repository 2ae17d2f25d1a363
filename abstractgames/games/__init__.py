"""Bundled games.

Importing a game module registers it via side effects.
"""

from . import breakthrough  # noqa: F401
from . import frames  # noqa: F401
from . import hex  # noqa: F401
from . import loop  # noqa: F401
