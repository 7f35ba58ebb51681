from . import _filters, attributes, labels, relations
from ._filters import *  # noqa
from .attributes import *  # noqa
from .labels import *  # noqa
from .relations import *  # noqa

__all__ = _filters.__all__ + attributes.__all__ + labels.__all__ + relations.__all__
