"""Three-point (PERT) project estimation with cost projections."""

from guesstimate.version import __version__

__all__ = ["__version__"]
