"""Shared pytest fixtures."""

from .auth import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .covers import *  # noqa: F401,F403
from .http import *  # noqa: F401,F403
