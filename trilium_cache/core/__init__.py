"""
This module implements the client-side tree cache and note attribute
resolution.
"""

from . import attribute, branch, cache, exceptions, note, server, utils
from .attribute import *  # noqa
from .branch import *  # noqa
from .cache import *  # noqa
from .exceptions import *  # noqa
from .note import *  # noqa
from .server import *  # noqa
from .utils import *  # noqa

__all__ = (
    server.__all__
    + cache.__all__
    + note.__all__
    + attribute.__all__
    + branch.__all__
    + exceptions.__all__
    + utils.__all__
)
