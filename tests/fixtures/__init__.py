"""Shared pytest fixtures and helpers.

Fixture names must not collide with the submodule names below: importing a
submodule binds its name on this package.
"""

from .api import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .spa_client import *  # noqa: F401,F403
