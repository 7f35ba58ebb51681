from . import branch
from .branch import *  # noqa

__all__ = branch.__all__
