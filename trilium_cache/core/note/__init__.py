from . import attributes, model, note
from .attributes import *  # noqa
from .model import *  # noqa
from .note import *  # noqa

__all__ = note.__all__ + model.__all__ + attributes.__all__
