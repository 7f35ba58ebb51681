from . import attribute
from .attribute import *  # noqa

__all__ = attribute.__all__
