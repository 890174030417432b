"""Pydantic schemas for request/response validation."""

from .common import *  # noqa: F403
from .destination import *  # noqa: F403
from .fixed_departure import *  # noqa: F403
from .health import *  # noqa: F403
from .holiday_type import *  # noqa: F403
from .package import *  # noqa: F403
from .suggestion import *  # noqa: F403
