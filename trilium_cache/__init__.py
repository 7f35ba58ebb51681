"""
trilium-cache: client-side tree cache and attribute inheritance for Trilium
Notes.
"""

from . import core
from .core import *  # noqa

__all__ = core.__all__
