"""Central module containing types, enums and errors for the biarc approximation."""

from __future__ import annotations

from enum import Enum, auto
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

###############################################################################
# Types
###############################################################################


# A 2D point given by the caller: a (x, y) tuple/list or an array of shape (2,)
PointLike = Union[Tuple[float, float], Sequence[float], NDArray[np.float64]]


###############################################################################
# Enums
###############################################################################


class RootKind(Enum):
    """Kind of a root of the inflexion quadratic."""

    REAL = auto()  # root is a real parameter value
    COMPLEX = auto()  # conjugate pair, no real solution
    NONE = auto()  # quadratic degenerated, root does not exist


###############################################################################
# Errors
###############################################################################


class BiArcError(ValueError):
    """Base class of all errors raised by the biarc package."""


class DegenerateGeometryError(BiArcError):
    """Raised when a geometric construction is ill-defined.

    Examples are parallel lines that have no unique intersection or a line
    defined by a zero-length direction.
    """


class InvalidParameterError(BiArcError):
    """Raised when a caller-supplied parameter is out of its valid range."""
